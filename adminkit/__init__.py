"""Errors, settings, schemas, JWT auth, role storage and caching for an admin API."""

__version__ = "1.0.0"