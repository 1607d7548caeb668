"""FastAPI dependencies for the collaboration bounded context."""
