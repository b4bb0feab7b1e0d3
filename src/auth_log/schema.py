"""Data models for the authentication log pipeline.

Every value that crosses a component boundary lives here: the principal
reference, the resolved location, the per-login snapshot, the log entry
produced by factories and the serializable login parameters used for
asynchronous dispatch.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class UserReference(BaseModel):
    """Identifies the authenticated principal.

    ``type`` selects the authentication log factory, ``id`` is the stable
    identifier of the principal. Notification fields are filled in once,
    after construction.
    """

    type: str = Field(frozen=True)
    id: str = Field(frozen=True)
    email: str | None = None
    display_name: str | None = None

    _notification_set: bool = PrivateAttr(default=False)

    def set_notification_parameters(
        self,
        email: str | None,
        display_name: str | None = None,
    ) -> None:
        """Attach the notification target.

        Args:
            email: Address the new-device notification is sent to.
            display_name: Name shown next to the address.

        Raises:
            ValueError: If the notification target was already set.
        """
        if self._notification_set:
            raise ValueError(
                f"Notification parameters already set for {self.type}:{self.id}"
            )
        self.email = email
        self.display_name = display_name
        self._notification_set = True


class LocateValues(BaseModel):
    """Approximate geographic location of an IP address."""

    model_config = ConfigDict(frozen=True)

    country: str | None = None
    country_code: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a plain mapping (one key per field)."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LocateValues":
        """Rebuild from a mapping produced by :meth:`to_dict`.

        Missing keys become ``None``; unknown keys are ignored.
        """
        return cls(**{name: data.get(name) for name in cls.model_fields})

    def label(self) -> str | None:
        """Human readable form, e.g. ``"Paris, France"``."""
        parts = [part for part in (self.city, self.country) if part]
        if parts:
            return ", ".join(parts)
        if self.latitude is not None and self.longitude is not None:
            return f"({self.latitude}, {self.longitude})"
        return None


class UserInformation(BaseModel):
    """Request-derived facts captured once per login."""

    model_config = ConfigDict(frozen=True)

    ip_address: str | None = None
    user_agent: str | None = None
    login_at: datetime
    location: LocateValues | None = None


class AuthenticationLog(BaseModel):
    """A log entry describing one successful login."""

    user_type: str
    user_id: str
    ip_address: str | None = None
    user_agent: str | None = None
    login_at: datetime | None = None
    location: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_user_information(
        cls,
        user_reference: UserReference,
        user_information: UserInformation,
    ) -> "AuthenticationLog":
        """Build a log entry from a principal and its login snapshot.

        Args:
            user_reference: The authenticated principal.
            user_information: Snapshot collected for this login.

        Returns:
            AuthenticationLog with the location flattened to a dict.
        """
        location = user_information.location
        return cls(
            user_type=user_reference.type,
            user_id=user_reference.id,
            ip_address=user_information.ip_address,
            user_agent=user_information.user_agent,
            login_at=user_information.login_at,
            location=location.to_dict() if location is not None else {},
        )

    def get_location(self) -> LocateValues | None:
        if not self.location:
            return None
        return LocateValues.from_dict(self.location)


class LoginParameters(BaseModel):
    """Plain-string description of a login, safe to put on a queue.

    Carries everything :class:`auth_log.service.LoginService` needs, so a
    worker replaying it produces the same effects as an inline call.
    """

    model_config = ConfigDict(frozen=True)

    factory_name: str
    user_identifier: str
    to_email: str | None = None
    to_email_name: str | None = None
    client_ip: str | None = None
    user_agent: str | None = None

    def user_reference(self) -> UserReference:
        """Build a fresh UserReference carrying the notification target."""
        reference = UserReference(type=self.factory_name, id=self.user_identifier)
        reference.set_notification_parameters(self.to_email, self.to_email_name)
        return reference
