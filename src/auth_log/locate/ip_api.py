"""Remote lookup against the ip-api.com JSON endpoint.

The free tier is limited to 45 requests per minute per client address,
so lookups are expected to fail now and then; such failures degrade to
"no location".
"""

import logging

import httpx
from pydantic import ValidationError

from auth_log.schema import LocateValues

logger = logging.getLogger(__name__)

SUCCESS = "success"

DEFAULT_BASE_URL = "http://ip-api.com/json/"

# 5s to connect, 10s overall
DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0)


class IpApiResolver:
    """Resolve locations through the ip-api.com HTTP API."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        base_url: str = DEFAULT_BASE_URL,
    ):
        self._client = client or httpx.Client(timeout=DEFAULT_TIMEOUT)
        self._base_url = base_url

    def resolve(self, ip_address: str) -> LocateValues | None:
        """Look up an IP address.
        
        Args:
            ip_address: IPv4 or IPv6 address.
            
        Returns:
            LocateValues, or None on any HTTP, transport or payload error.
        """
        url = f"{self._base_url}{ip_address}"
        
        try:
            response = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Location lookup for {ip_address} failed: {e}")
            return None
        
        if response.status_code != 200:
            logger.warning(
                f"Location lookup for {ip_address} returned HTTP {response.status_code}"
            )
            return None
        
        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Malformed location response for {ip_address}: {e}")
            return None
        
        if not isinstance(data, dict) or data.get("status") != SUCCESS:
            logger.debug(f"No location available for {ip_address}")
            return None
        
        try:
            return LocateValues(
                country=data.get("country"),
                country_code=data.get("countryCode"),
                city=data.get("city"),
                latitude=data.get("lat"),
                longitude=data.get("lon"),
            )
        except ValidationError as e:
            logger.warning(f"Unexpected location payload for {ip_address}: {e}")
            return None

    def close(self) -> None:
        self._client.close()
