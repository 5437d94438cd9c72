"""Stats workflows."""
