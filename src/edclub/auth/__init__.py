"""Auth gate, password provider and /api/auth routes."""
