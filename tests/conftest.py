"""Pytest fixtures for auth-log tests."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from auth_log.schema import AuthenticationLog, LocateValues, UserInformation, UserReference


class PlainFactory:
    """Factory without the persist capability."""

    def __init__(self, kind: str):
        self.kind = kind
        self.supports_calls = 0

    def supports(self) -> str:
        self.supports_calls += 1
        return self.kind

    def create(self, user_reference, user_information):
        return AuthenticationLog.from_user_information(user_reference, user_information)


class PersistableFactory(PlainFactory):
    """Factory that records every persist() call."""

    def __init__(self, kind: str, calls: list | None = None):
        super().__init__(kind)
        self.persisted: list[tuple[UserReference, UserInformation]] = []
        self.calls = calls

    def persist(self, user_reference, user_information):
        self.persisted.append((user_reference, user_information))
        if self.calls is not None:
            self.calls.append("persist")


class RecordingNotifier:
    """Notifier that remembers what it was asked to send."""

    def __init__(self, calls: list | None = None):
        self.sent: list[tuple[UserInformation, UserReference]] = []
        self.calls = calls

    def send(self, user_information, user_reference):
        self.sent.append((user_information, user_reference))
        if self.calls is not None:
            self.calls.append("notify")


class StaticResolver:
    """Resolver returning a fixed location and recording lookups."""

    def __init__(self, location: LocateValues | None):
        self.location = location
        self.lookups: list[str] = []

    def resolve(self, ip_address):
        self.lookups.append(ip_address)
        return self.location


@pytest.fixture
def login_time():
    return datetime(2026, 1, 15, 8, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def paris():
    return LocateValues(
        country="France",
        country_code="FR",
        city="Paris",
        latitude=48.8566,
        longitude=2.3522,
    )


@pytest.fixture
def user_reference():
    reference = UserReference(type="account", id="42")
    reference.set_notification_parameters("alice@acme.dev", "Alice")
    return reference


@pytest.fixture
def user_information(login_time):
    return UserInformation(
        ip_address="10.0.0.1",
        user_agent="TestAgent/1.0",
        login_at=login_time,
        location=None,
    )


@pytest.fixture
def notifier():
    return RecordingNotifier()


class FakeGeoip2Reader:
    """Stands in for geoip2.database.Reader, counting opens and lookups."""

    instances: list["FakeGeoip2Reader"] = []

    def __init__(self, path):
        self.path = path
        self.lookups: list[str] = []
        self.closed = False
        self.error: Exception | None = None
        FakeGeoip2Reader.instances.append(self)

    def city(self, ip_address):
        self.lookups.append(ip_address)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            country=SimpleNamespace(name="France", iso_code="FR"),
            city=SimpleNamespace(name="Paris"),
            location=SimpleNamespace(latitude=48.8566, longitude=2.3522),
        )

    def close(self):
        self.closed = True


@pytest.fixture
def fake_geoip2_reader(monkeypatch):
    """Patch the GeoIP2 reader class and return the fake class."""
    FakeGeoip2Reader.instances = []
    monkeypatch.setattr("geoip2.database.Reader", FakeGeoip2Reader)
    return FakeGeoip2Reader
