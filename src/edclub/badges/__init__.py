"""Badge catalog and grants."""
