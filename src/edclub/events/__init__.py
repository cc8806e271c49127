"""Events (agenda) resource."""
