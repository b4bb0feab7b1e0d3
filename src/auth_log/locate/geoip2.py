"""Offline lookup in a MaxMind GeoIP2/GeoLite2 City database.

The database is opened on first use and kept open for the lifetime of
the process. Readers are safe to share between threads once opened.
"""

import atexit
import logging
import threading

import geoip2.database
from geoip2.errors import AddressNotFoundError, GeoIP2Error
from maxminddb.errors import InvalidDatabaseError
from pydantic import ValidationError

from auth_log.schema import LocateValues

logger = logging.getLogger(__name__)


class Geoip2Resolver:
    """Resolve locations from a local ``.mmdb`` city database."""

    def __init__(self, database_path: str):
        self.database_path = database_path
        self._reader: geoip2.database.Reader | None = None
        self._lock = threading.Lock()

    def resolve(self, ip_address: str) -> LocateValues | None:
        """Look up an IP address.
        
        Args:
            ip_address: IPv4 or IPv6 address.
            
        Returns:
            LocateValues, or None if the database is unavailable or the
            address is invalid or unknown.
        """
        reader = self._open()
        if reader is None:
            return None
        
        try:
            record = reader.city(ip_address)
        except AddressNotFoundError:
            logger.debug(f"Address {ip_address} not found in {self.database_path}")
            return None
        except (GeoIP2Error, InvalidDatabaseError, TypeError, ValueError) as e:
            logger.warning(f"Location lookup for {ip_address} failed: {e}")
            return None
        
        try:
            return LocateValues(
                country=record.country.name,
                country_code=record.country.iso_code,
                city=record.city.name,
                latitude=record.location.latitude,
                longitude=record.location.longitude,
            )
        except ValidationError as e:
            logger.warning(f"Unexpected record for {ip_address} in {self.database_path}: {e}")
            return None

    def close(self) -> None:
        """Release the database handle, if open."""
        with self._lock:
            if self._reader is not None:
                self._reader.close()
                self._reader = None

    def _open(self) -> geoip2.database.Reader | None:
        if self._reader is not None:
            return self._reader
        
        with self._lock:
            if self._reader is None:
                try:
                    self._reader = geoip2.database.Reader(self.database_path)
                except (OSError, InvalidDatabaseError, ValueError) as e:
                    logger.warning(
                        f"Cannot open GeoIP2 database {self.database_path}: {e}"
                    )
                    return None
                atexit.register(self.close)
                logger.info(f"Opened GeoIP2 database {self.database_path}")
        
        return self._reader
