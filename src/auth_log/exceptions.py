"""Exceptions raised by the authentication log pipeline."""

from typing import Any


class AuthLogError(Exception):
    """Base class for every error raised by auth_log."""


class ConfigurationError(AuthLogError, ValueError):
    """Invalid configuration, detected while loading settings."""


class FactoryNotFound(AuthLogError, LookupError):
    """No authentication log factory is registered for a kind."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"There is no authentication log factory available named {kind}")


class UnhandledEvent(AuthLogError, RuntimeError):
    """A new-device event was neither persisted nor marked as handled."""

    def __init__(self, event: Any):
        self.event = event
        reference = event.user_reference
        super().__init__(
            f"The event must be marked as handled by a listener "
            f"(user {reference.type}:{reference.id}). Register a listener that "
            f"calls mark_handled() or use a persistable factory."
        )
