"""Exception hierarchy for the contacts service."""

from __future__ import annotations


class ContactsError(Exception):
    """Base exception for all contacts service errors."""


class ConfigurationError(ContactsError):
    """Raised when configuration is invalid or missing."""


class StorageNotConfiguredError(ContactsError):
    """Raised when a storage gateway is requested before the registry is populated."""


class RegistryFrozenError(ContactsError):
    """Raised when a gateway is registered after the registry was frozen."""


class PartsConflict(ContactsError):
    """Raised when a write is rejected by validation or duplicate checks.

    Carries the human-readable messages; the API reports them as a 409 body.
    """

    def __init__(self, messages: list[str]):
        super().__init__("; ".join(messages))
        self.messages = list(messages)
