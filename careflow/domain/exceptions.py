from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class AuthProviderError(DomainError):
    """Identity provider denied, failed or was unreachable during login."""

    def __init__(self, message: str, *, stage: str, provider: str | None = None):
        super().__init__(message)
        self.stage = stage
        self.provider = provider


class ConflictError(DomainError):
    """An account for the same external identity was created concurrently."""


class SessionResolutionError(DomainError):
    """Session points at an account that no longer exists."""


class PersistenceError(DomainError):
    """Account store could not be reached or failed."""


class ChatMessageInputError(DomainError):
    """Invalid chat message."""


class ChatBackendError(DomainError):
    """Chat reply backend failed."""
