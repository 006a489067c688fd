"""Contact records, operation results and the contact book error types."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


class ContactBookError(Exception):
    """Base class for contact book failures."""


class ValidationError(ContactBookError):
    """Raised when contact fields fail validation."""


class NotFoundError(ContactBookError):
    """Raised when no contact has the requested ID."""


class PersistenceError(ContactBookError):
    """Raised when the contacts file cannot be read, parsed or written."""


_REQUIRED_FIELDS = ("id", "name", "phone", "email", "created_at")


@dataclass(frozen=True, slots=True)
class Contact:
    """A stored person record."""

    id: str
    name: str
    phone: str
    email: str
    created_at: str
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted form. ``updated_at`` is omitted until set."""
        data = {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "created_at": self.created_at,
        }
        if self.updated_at is not None:
            data["updated_at"] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contact":
        """Create from the persisted form.

        Raises:
            PersistenceError: if ``data`` is not an object or a required
                field is missing or not a string.
        """
        if not isinstance(data, dict):
            raise PersistenceError(f"Expected a contact object, got {type(data).__name__}")

        for key in _REQUIRED_FIELDS:
            if not isinstance(data.get(key), str):
                raise PersistenceError(f"Contact record is missing string field '{key}'")

        updated_at = data.get("updated_at")
        if updated_at is not None and not isinstance(updated_at, str):
            raise PersistenceError("Contact field 'updated_at' must be a string")

        return cls(
            id=data["id"],
            name=data["name"],
            phone=data["phone"],
            email=data["email"],
            created_at=data["created_at"],
            updated_at=updated_at,
        )


@dataclass(slots=True)
class ContactResult:
    """Outcome of a create, update or delete operation."""

    success: bool
    message: str
    contact: Optional[Contact] = None
    error: Optional[ContactBookError] = None

    @classmethod
    def ok(cls, message: str, contact: Contact) -> "ContactResult":
        return cls(success=True, message=message, contact=contact)

    @classmethod
    def failed(cls, error: ContactBookError) -> "ContactResult":
        return cls(success=False, message=str(error), error=error)
