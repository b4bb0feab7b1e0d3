"""Location resolver interface."""

from typing import Protocol, runtime_checkable

from auth_log.schema import LocateValues


@runtime_checkable
class LocationResolver(Protocol):
    """Maps an IP address to an approximate location.

    Implementations never raise: any failure (invalid address, network
    error, missing database, rate limiting) is reported as ``None``.
    """

    def resolve(self, ip_address: str) -> LocateValues | None:
        ...
