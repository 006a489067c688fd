"""Persistent storage for the contact list."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Protocol, Union

from .models import Contact, PersistenceError


logger = logging.getLogger(__name__)


class ContactRepository(Protocol):
    """Load/save port used by the contact store."""

    def load(self) -> List[Contact]:
        ...

    def save(self, contacts: Iterable[Contact]) -> None:
        ...


class JsonFileRepository:
    """Stores the whole contact list as a JSON array in a single file.

    Every save rewrites the file through a temporary sibling that is
    renamed over the target, so readers never see a half-written file.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> List[Contact]:
        """Read all contacts from the file.

        A missing file is created holding an empty array.

        Raises:
            PersistenceError: if the file cannot be read or does not hold an
                array of contact objects.
        """
        if not self.path.exists():
            logger.info("Contacts file %s not found, creating it", self.path)
            self.save([])
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (ValueError, RecursionError) as exc:
            raise PersistenceError(f"Contacts file {self.path} is not valid JSON: {exc}") from exc
        except OSError as exc:
            raise PersistenceError(f"Unable to read contacts file {self.path}: {exc}") from exc

        if not isinstance(data, list):
            raise PersistenceError(f"Contacts file {self.path} does not hold a JSON array")

        return [Contact.from_dict(item) for item in data]

    def save(self, contacts: Iterable[Contact]) -> None:
        """Replace the file contents with ``contacts``.

        Raises:
            PersistenceError: if the file cannot be written.
        """
        payload = [contact.to_dict() for contact in contacts]
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                dir=self.path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise PersistenceError(f"Unable to write contacts file {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass
