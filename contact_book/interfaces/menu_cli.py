"""Interactive numbered-menu loop for managing contacts."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from ..contacts import Contact, ContactBookError, ContactResult, ContactStore


logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[..., None]

MENU_OPTIONS = (
    "Create New Contact",
    "Search Contacts",
    "Display All Contacts",
    "Update Contact",
    "Delete Contact",
    "Exit",
)


def run_menu(
    store: ContactStore,
    *,
    input_fn: Optional[InputFn] = None,
    output: OutputFn = print,
) -> None:
    """Show the menu and dispatch choices until the user exits."""
    if input_fn is None:
        input_fn = input

    handlers = {
        "1": _handle_create,
        "2": _handle_search,
        "3": _handle_display_all,
        "4": _handle_update,
        "5": _handle_delete,
    }

    while True:
        _render_menu(output)
        try:
            choice = input_fn(f"\nEnter your choice (1-{len(MENU_OPTIONS)}): ").strip()
        except EOFError:
            output("\nGoodbye!")
            return

        if choice == "6":
            output("\nGoodbye!")
            return

        handler = handlers.get(choice)
        if handler is None:
            output("\nInvalid choice. Please try again.")
            continue

        try:
            handler(store, input_fn, output)
        except EOFError:
            output("\nGoodbye!")
            return
        except ContactBookError as exc:
            logger.error("Menu action %s failed: %s", choice, exc)
            output(f"\nError: {exc}")


def format_contact(contact: Contact) -> str:
    """Render a contact as a bordered text card."""
    rule = "-" * 40
    lines = [
        "",
        rule,
        f"ID:      {contact.id}",
        f"Name:    {contact.name}",
        f"Phone:   {contact.phone}",
        f"Email:   {contact.email}",
        f"Created: {contact.created_at}",
    ]
    if contact.updated_at:
        lines.append(f"Updated: {contact.updated_at}")
    lines.append(rule)
    return "\n".join(lines)


def _render_menu(output: OutputFn) -> None:
    output("\nContact Manager")
    for number, label in enumerate(MENU_OPTIONS, 1):
        output(f"{number}. {label}")


def _render_contacts(contacts: Iterable[Contact], output: OutputFn) -> None:
    for contact in contacts:
        output(format_contact(contact))


def _render_result(result: ContactResult, output: OutputFn, *, show_contact: bool = True) -> None:
    if not result.success:
        output(f"\nError: {result.message}")
        return
    output(f"\nSuccess: {result.message}")
    if show_contact and result.contact is not None:
        output(format_contact(result.contact))


def _handle_create(store: ContactStore, input_fn: InputFn, output: OutputFn) -> None:
    name = input_fn("\nEnter name: ")
    phone = input_fn("Enter phone number: ")
    email = input_fn("Enter email: ")
    _render_result(store.create(name, phone, email), output)


def _handle_search(store: ContactStore, input_fn: InputFn, output: OutputFn) -> None:
    query = input_fn("\nEnter search term: ")
    results = store.search(query)
    if not results:
        output("\nNo matching contacts found.")
        return
    output(f"\nFound {len(results)} matching contacts:")
    _render_contacts(results, output)


def _handle_display_all(store: ContactStore, input_fn: InputFn, output: OutputFn) -> None:
    contacts = store.list_contacts()
    if not contacts:
        output("\nNo contacts found.")
        return
    _render_contacts(contacts, output)


def _handle_update(store: ContactStore, input_fn: InputFn, output: OutputFn) -> None:
    contact_id = input_fn("\nEnter contact ID to update: ").strip()
    if contact_id not in store:
        output("\nError: Contact not found")
        return

    name = input_fn("Enter new name (press Enter to keep existing): ")
    phone = input_fn("Enter new phone (press Enter to keep existing): ")
    email = input_fn("Enter new email (press Enter to keep existing): ")
    _render_result(store.update(contact_id, name=name, phone=phone, email=email), output)


def _handle_delete(store: ContactStore, input_fn: InputFn, output: OutputFn) -> None:
    contact_id = input_fn("\nEnter contact ID to delete: ").strip()
    _render_result(store.delete(contact_id), output, show_contact=False)
