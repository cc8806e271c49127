"""Social feed."""
