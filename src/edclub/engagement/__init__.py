"""Weekly progress and ranking."""
