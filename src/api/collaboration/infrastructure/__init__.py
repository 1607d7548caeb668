"""Infrastructure layer for the collaboration context."""
