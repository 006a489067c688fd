#!/usr/bin/env python3
"""Contact Book CLI."""
from __future__ import annotations

import argparse
import logging
import sys

from contact_book.config import ConfigError, load_settings
from contact_book.contacts import ContactBookError, ContactStore
from contact_book.interfaces import run_menu


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contact-book",
        description="Interactive contact book with name search.",
    )
    parser.add_argument(
        "--file",
        help="Path of the contacts JSON file (default: CONTACT_BOOK_FILE or contacts.json).",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level for diagnostics on stderr (default: CONTACT_BOOK_LOG_LEVEL or WARNING).",
    )
    return parser


def _log_format(environment: str) -> str:
    return f"%(asctime)s %(levelname)s [{environment}] %(name)s: %(message)s"


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(contacts_file=args.file, log_level=args.log_level)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=settings.log_level_value,
        format=_log_format(settings.environment),
    )

    try:
        store = ContactStore.from_path(settings.contacts_file)
    except ContactBookError as exc:
        print(f"Unable to open contacts: {exc}", file=sys.stderr)
        return 1

    try:
        run_menu(store)
    except KeyboardInterrupt:
        print("\nGoodbye!")
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
