"""Contact Book package."""
