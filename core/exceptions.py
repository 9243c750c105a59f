# core/exceptions.py
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from core.models.integrity import InvariantViolation


class LibraryError(Exception):
    """Base class for errors raised by the library engine"""


class NotFoundError(LibraryError):
    """A referenced record does not exist"""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} with id {entity_id} not found")


class BlockedByInvariant(LibraryError):
    """The operation would leave the library in a state that breaks a cardinality rule.

    Carries one violation record per entity at risk so callers can explain
    exactly what has to be resolved first.
    """

    def __init__(
        self,
        message: str,
        violations: List["InvariantViolation"],
        linked_count: Optional[int] = None
    ):
        self.message = message
        self.violations = violations
        self.linked_count = linked_count
        super().__init__(message)


class ValidationError(LibraryError):
    """Malformed input to a mutation"""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class StorageError(LibraryError):
    """The underlying store failed; the surrounding transaction was rolled back"""
