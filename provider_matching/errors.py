"""Shared error types for the matching engine."""

from __future__ import annotations


class SynonymConfigError(Exception):
    """Raised when the synonym table file is missing or malformed."""


class ProviderRecordError(Exception):
    """Raised when a raw provider record cannot be turned into a Provider."""
