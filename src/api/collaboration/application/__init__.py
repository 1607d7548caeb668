"""Application layer for the collaboration context."""
