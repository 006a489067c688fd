"""User-facing interfaces for the contact book."""
from .menu_cli import run_menu

__all__ = ["run_menu"]
