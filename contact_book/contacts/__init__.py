"""Contact records, storage and substring search."""
from .models import (
    Contact,
    ContactBookError,
    ContactResult,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .search import SubstringIndex
from .storage import ContactRepository, JsonFileRepository
from .store import ContactStore, generate_contact_id
from .validation import is_valid_email, is_valid_phone, validate_contact_fields

__all__ = [
    # Records
    "Contact",
    "ContactResult",
    # Errors
    "ContactBookError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    # Search
    "SubstringIndex",
    # Storage
    "ContactRepository",
    "JsonFileRepository",
    "ContactStore",
    "generate_contact_id",
    # Validation
    "is_valid_email",
    "is_valid_phone",
    "validate_contact_fields",
]
