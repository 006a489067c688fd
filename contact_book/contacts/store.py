"""The contact store: ordered contacts, their substring index and persistence."""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

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
from .validation import validate_contact_fields


logger = logging.getLogger(__name__)

_ID_ATTEMPTS = 5


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def generate_contact_id() -> str:
    return f"cnt_{uuid.uuid4().hex}"


class ContactStore:
    """Authoritative ordered collection of contacts.

    Contacts are held by ID with a separate list of IDs giving display
    order, so deleting one contact never changes how the others are
    referenced. The substring index is kept in step with every mutation
    and every mutation is persisted through the repository before it is
    reported as a success.
    """

    def __init__(
        self,
        repository: ContactRepository,
        *,
        id_factory: Callable[[], str] = generate_contact_id,
    ) -> None:
        self._repository = repository
        self._id_factory = id_factory
        self._contacts: Dict[str, Contact] = {}
        self._order: List[str] = []
        self._index = SubstringIndex()
        self._load()

    @classmethod
    def from_path(cls, path: Union[str, Path], **kwargs) -> "ContactStore":
        return cls(JsonFileRepository(path), **kwargs)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, contact_id: object) -> bool:
        return contact_id in self._contacts

    @property
    def index(self) -> SubstringIndex:
        return self._index

    # --- Queries ---

    def list_contacts(self) -> List[Contact]:
        """Return all contacts in display order."""
        return [self._contacts[contact_id] for contact_id in self._order]

    def get(self, contact_id: str) -> Optional[Contact]:
        return self._contacts.get(contact_id)

    def search(self, query: Optional[str]) -> List[Contact]:
        """Return contacts whose name contains ``query``, case-insensitively.

        A blank query returns every contact. Results follow display order.
        """
        if query is None or not query.strip():
            return self.list_contacts()

        matches = self._index.search(query)
        return [self._contacts[contact_id] for contact_id in self._order if contact_id in matches]

    # --- Mutations ---

    def create(self, name: str, phone: str, email: str) -> ContactResult:
        """Validate and append a new contact."""
        try:
            validate_contact_fields(name, phone, email)
        except ValidationError as exc:
            logger.debug("Rejected new contact: %s", exc)
            return ContactResult.failed(exc)

        contact_id = self._next_id()
        if contact_id is None:
            return ContactResult.failed(
                ContactBookError("Could not generate a unique contact ID")
            )

        contact = Contact(
            id=contact_id,
            name=name.strip(),
            phone=phone.strip(),
            email=email.strip(),
            created_at=_now(),
        )

        self._contacts[contact.id] = contact
        self._order.append(contact.id)
        self._index.extend(contact.id, contact.name)

        try:
            self._persist()
        except PersistenceError as exc:
            self._index.discard(contact.id, contact.name)
            self._order.pop()
            del self._contacts[contact.id]
            return ContactResult.failed(exc)

        logger.info("Created contact %s", contact.id)
        return ContactResult.ok("Contact created successfully", contact)

    def update(
        self,
        contact_id: str,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
    ) -> ContactResult:
        """Replace the non-blank fields given and restamp ``updated_at``."""
        existing = self._contacts.get(contact_id)
        if existing is None:
            return ContactResult.failed(NotFoundError("Contact not found"))

        changes = {
            key: value.strip()
            for key, value in (("name", name), ("phone", phone), ("email", email))
            if value is not None and value.strip()
        }
        updated = replace(existing, updated_at=_now(), **changes)

        self._swap(existing, updated)
        try:
            self._persist()
        except PersistenceError as exc:
            self._swap(updated, existing)
            return ContactResult.failed(exc)

        logger.info("Updated contact %s (%s)", contact_id, ", ".join(sorted(changes)) or "no field changes")
        return ContactResult.ok("Contact updated successfully", updated)

    def delete(self, contact_id: str) -> ContactResult:
        """Remove a contact and return it."""
        removed = self._contacts.get(contact_id)
        if removed is None:
            return ContactResult.failed(NotFoundError("Contact not found"))

        position = self._order.index(contact_id)
        del self._order[position]
        del self._contacts[contact_id]
        self._index.discard(contact_id, removed.name)

        try:
            self._persist()
        except PersistenceError as exc:
            self._order.insert(position, contact_id)
            self._contacts[contact_id] = removed
            self._index.extend(contact_id, removed.name)
            return ContactResult.failed(exc)

        logger.info("Deleted contact %s", contact_id)
        return ContactResult.ok("Contact deleted successfully", removed)

    def reindex(self) -> None:
        """Rebuild the substring index from scratch."""
        self._index.rebuild(self.list_contacts())

    # --- Internals ---

    def _next_id(self) -> Optional[str]:
        for _ in range(_ID_ATTEMPTS):
            contact_id = self._id_factory()
            if contact_id not in self._contacts:
                return contact_id
            logger.warning("ID factory returned existing ID %s", contact_id)
        return None

    def _swap(self, old: Contact, new: Contact) -> None:
        self._contacts[new.id] = new
        if old.name != new.name:
            self._index.discard(old.id, old.name)
            self._index.extend(new.id, new.name)

    def _persist(self) -> None:
        try:
            self._repository.save(self.list_contacts())
        except PersistenceError:
            logger.exception("Failed to save contacts")
            raise

    def _load(self) -> None:
        try:
            contacts = self._repository.load()
        except PersistenceError as exc:
            logger.warning("Discarding unreadable contacts file: %s", exc)
            contacts = []
            self._repository.save(contacts)

        self._replace_all(contacts)
        self.reindex()
        logger.debug("Loaded %d contacts", len(self))

    def _replace_all(self, contacts: Iterable[Contact]) -> None:
        self._contacts.clear()
        self._order.clear()
        for contact in contacts:
            if contact.id in self._contacts:
                logger.warning("Skipping duplicate contact ID %s", contact.id)
                continue
            self._contacts[contact.id] = contact
            self._order.append(contact.id)
