"""Per-login orchestration.

LoginService runs the whole pipeline synchronously. LoginListener is the
entry point for login signals: it either runs the service inline or hands
the serializable LoginParameters to an asynchronous dispatcher, whose
worker later calls LoginService.handle with the same parameters.
"""

import logging
from collections.abc import Callable

from auth_log.context import AuthenticationContextBuilder
from auth_log.publisher import AuthenticationEventPublisher
from auth_log.schema import LoginParameters, UserReference

logger = logging.getLogger(__name__)

Dispatcher = Callable[[LoginParameters], None]


class LoginService:
    """Builds the authentication context and publishes it."""

    def __init__(
        self,
        builder: AuthenticationContextBuilder,
        publisher: AuthenticationEventPublisher,
    ):
        self.builder = builder
        self.publisher = publisher

    def execute(
        self,
        kind: str,
        user_reference: UserReference,
        ip_address: str | None,
        user_agent: str | None,
    ) -> None:
        """Handle one successful login.
        
        Args:
            kind: Kind string selecting the authentication log factory.
            user_reference: The authenticated principal.
            ip_address: Client IP address.
            user_agent: User-Agent header.
            
        Raises:
            FactoryNotFound: If no factory supports the kind.
            UnhandledEvent: If the login was neither persisted nor handled.
        """
        context = self.builder.build(kind, user_reference, ip_address, user_agent)
        self.publisher.publish(context)
        logger.info(f"Recorded login for {user_reference.type}:{user_reference.id}")

    def handle(self, parameters: LoginParameters) -> None:
        """Run :meth:`execute` from plain login parameters."""
        self.execute(
            parameters.factory_name,
            parameters.user_reference(),
            parameters.client_ip,
            parameters.user_agent,
        )


class LoginListener:
    """Reacts to successful logins."""

    def __init__(self, login_service: LoginService, dispatcher: Dispatcher | None = None):
        self.login_service = login_service
        self.dispatcher = dispatcher

    def set_dispatcher(self, dispatcher: Dispatcher | None) -> None:
        self.dispatcher = dispatcher

    def on_login(self, parameters: LoginParameters) -> None:
        if self.dispatcher is None:
            self.login_service.handle(parameters)
            return
        
        logger.debug(f"Deferring login of {parameters.user_identifier} to the dispatcher")
        self.dispatcher(parameters)
