"""Service layer - business rules kept apart from the HTTP routes."""
