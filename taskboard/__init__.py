"""Accounts, cookie sessions and per-user task boards behind a small JSON API."""

__version__ = "0.1.0"
