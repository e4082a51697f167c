"""
Error taxonomy for Content Planner.

Services raise these; the API layer maps them onto HTTP status codes.
"""

from typing import Any, Optional


class ContentPlannerError(Exception):
    """Base class for all Content Planner errors."""


class ValidationError(ContentPlannerError):
    """Malformed or out-of-range input."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class NotFoundError(ContentPlannerError):
    """A referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: Any, message: Optional[str] = None):
        super().__init__(message or f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class PersistenceError(ContentPlannerError):
    """An underlying storage operation failed."""


class ConflictError(PersistenceError):
    """A unique or foreign-key constraint rejected the write."""
