"""Collection of request-derived facts for a login."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from auth_log.locate import LocationResolver
from auth_log.schema import UserInformation

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserInformationCollector:
    """Builds the UserInformation snapshot for one login.
    
    Args:
        resolver: Location resolver, or None when location is disabled.
        clock: Returns the current time; defaults to UTC now.
    """

    def __init__(
        self,
        resolver: LocationResolver | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.resolver = resolver
        self._clock = clock

    def collect(self, ip_address: str | None, user_agent: str | None) -> UserInformation:
        """Capture IP, user agent, login time and location.
        
        Args:
            ip_address: Client IP address, if known.
            user_agent: User-Agent header, if sent.
            
        Returns:
            Immutable UserInformation snapshot.
        """
        login_at = self._clock()
        
        location = None
        if self.resolver is not None and ip_address:
            location = self.resolver.resolve(ip_address)
            if location is None:
                logger.debug(f"No location resolved for {ip_address}")
        
        return UserInformation(
            ip_address=ip_address,
            user_agent=user_agent,
            login_at=login_at,
            location=location,
        )
