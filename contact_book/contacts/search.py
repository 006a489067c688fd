"""Substring index over contact names for "contains" search.

Every contiguous substring of every lower-cased name is stored as a key
pointing at the IDs of the contacts whose name contains it. A name of
length L contributes O(L^2) keys, which is fine for a personal contact
book with short names.
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, Set

from .models import Contact


def normalize(text: str) -> str:
    return text.lower()


def iter_substrings(text: str) -> Iterator[str]:
    """Yield every slice text[i:j + 1] with 0 <= i <= j < len(text)."""
    length = len(text)
    for i in range(length):
        for j in range(i, length):
            yield text[i:j + 1]


class SubstringIndex:
    """Maps name substrings to the set of contact IDs containing them."""

    def __init__(self) -> None:
        self._entries: Dict[str, Set[str]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, substring: object) -> bool:
        return substring in self._entries

    def rebuild(self, contacts: Iterable[Contact]) -> None:
        """Clear the index and re-add every contact."""
        self._entries.clear()
        for contact in contacts:
            self.extend(contact.id, contact.name)

    def extend(self, contact_id: str, name: str) -> None:
        """Add one contact's name substrings to the index."""
        for substring in iter_substrings(normalize(name)):
            self._entries.setdefault(substring, set()).add(contact_id)

    def discard(self, contact_id: str, name: str) -> None:
        """Remove one contact's name substrings, dropping emptied keys."""
        for substring in set(iter_substrings(normalize(name))):
            ids = self._entries.get(substring)
            if ids is None:
                continue
            ids.discard(contact_id)
            if not ids:
                del self._entries[substring]

    def search(self, query: str) -> Set[str]:
        """Return the IDs of contacts whose name contains ``query``.

        The query is lower-cased and trimmed. A blank query matches nothing
        here; callers decide what an empty search means.
        """
        needle = normalize(query).strip()
        if not needle:
            return set()

        matches: Set[str] = set()
        for key, ids in self._entries.items():
            if needle in key:
                matches.update(ids)
        return matches

    def ids(self) -> Set[str]:
        """All contact IDs referenced by the index."""
        referenced: Set[str] = set()
        for ids in self._entries.values():
            referenced.update(ids)
        return referenced
