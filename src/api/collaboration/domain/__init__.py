"""Domain layer for the collaboration context."""
