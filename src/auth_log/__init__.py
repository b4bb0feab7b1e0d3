"""auth-log: login auditing and new-device notifications.

Enriches successful logins with IP, user agent and approximate location,
records them through pluggable factories or event listeners, and notifies
the user about the sign-in.
"""

__version__ = "0.1.0"

from auth_log.exceptions import AuthLogError, ConfigurationError, FactoryNotFound, UnhandledEvent
from auth_log.schema import LocateValues, LoginParameters, UserInformation, UserReference

__all__ = [
    "AuthLogError",
    "ConfigurationError",
    "FactoryNotFound",
    "UnhandledEvent",
    "LocateValues",
    "LoginParameters",
    "UserInformation",
    "UserReference",
    "__version__",
]
