"""Authentication context assembly."""

import logging
from dataclasses import dataclass

from auth_log.collector import UserInformationCollector
from auth_log.factories import AuthenticationLogFactory, AuthenticationLogFactoryRegistry
from auth_log.schema import UserInformation, UserReference

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticationContext:
    """Everything the publisher needs to handle one login."""

    authentication_log_factory: AuthenticationLogFactory
    user_reference: UserReference
    user_information: UserInformation

    def __post_init__(self) -> None:
        if self.authentication_log_factory is None:
            raise ValueError("AuthenticationContext requires an authentication log factory")


class AuthenticationContextBuilder:
    """Combines the kind's factory, the principal and a fresh snapshot."""

    def __init__(
        self,
        registry: AuthenticationLogFactoryRegistry,
        collector: UserInformationCollector,
    ):
        self.registry = registry
        self.collector = collector

    def build(
        self,
        kind: str,
        user_reference: UserReference,
        ip_address: str | None,
        user_agent: str | None,
    ) -> AuthenticationContext:
        """Resolve the factory and collect user information.
        
        Args:
            kind: Kind string selecting the factory.
            user_reference: The authenticated principal.
            ip_address: Client IP address.
            user_agent: User-Agent header.
            
        Returns:
            AuthenticationContext for this login.
            
        Raises:
            FactoryNotFound: If no factory supports the kind.
        """
        factory = self.registry.create_from(kind)
        logger.debug(f"Resolved {type(factory).__name__} for kind '{kind}'")
        user_information = self.collector.collect(ip_address, user_agent)
        
        return AuthenticationContext(
            authentication_log_factory=factory,
            user_reference=user_reference,
            user_information=user_information,
        )
