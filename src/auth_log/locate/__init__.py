"""Location resolvers and provider selection.

This module exposes the resolver interface, both resolver
implementations and the factory that picks one from configuration.
"""

from auth_log.config import GEOIP2, IP_API, LocationConfig
from auth_log.locate.base import LocationResolver
from auth_log.locate.geoip2 import Geoip2Resolver
from auth_log.locate.ip_api import IpApiResolver

__all__ = [
    "LocationResolver",
    "Geoip2Resolver",
    "IpApiResolver",
    "build_resolver",
]


def build_resolver(location: LocationConfig | None) -> LocationResolver | None:
    """Create the resolver selected by configuration.
    
    Args:
        location: Location settings, or None when location is disabled.
        
    Returns:
        The configured resolver, or None if no provider is selected.
    """
    if location is None or location.provider is None:
        return None
    
    if location.provider == GEOIP2:
        return Geoip2Resolver(location.geoip2_database_path)
    
    if location.provider == IP_API:
        return IpApiResolver()
    
    raise ValueError(f"Unknown location provider: {location.provider}")
