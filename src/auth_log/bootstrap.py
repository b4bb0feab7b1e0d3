"""Wiring of the login pipeline from configuration."""

import logging
from collections.abc import Iterable

from celery import Celery

from auth_log.collector import UserInformationCollector
from auth_log.config import AuthLogConfig
from auth_log.context import AuthenticationContextBuilder
from auth_log.events import NEW_DEVICE, EventDispatcher, Listener
from auth_log.exceptions import ConfigurationError
from auth_log.factories import AuthenticationLogFactory, AuthenticationLogFactoryRegistry
from auth_log.locate import build_resolver
from auth_log.messaging import CeleryDispatcher, register_login_task
from auth_log.notification import MailNotifier, MailTransport, Notifier, SmtpTransport
from auth_log.publisher import AuthenticationEventPublisher
from auth_log.service import LoginListener, LoginService

logger = logging.getLogger(__name__)


def create_login_service(
    config: AuthLogConfig,
    factories: Iterable[AuthenticationLogFactory],
    listeners: Iterable[Listener] = (),
    transport: MailTransport | None = None,
    notifier: Notifier | None = None,
) -> LoginService:
    """Assemble a LoginService.
    
    Args:
        config: Validated settings.
        factories: Authentication log factories, one per kind.
        listeners: Listeners for the new-device event.
        transport: Mail transport; defaults to SMTP from the settings.
        notifier: Replaces the mail notifier entirely when given.
        
    Returns:
        Ready-to-use LoginService.
    """
    resolver = build_resolver(config.location)
    collector = UserInformationCollector(resolver)
    registry = AuthenticationLogFactoryRegistry(list(factories))
    
    dispatcher = EventDispatcher()
    for listener in listeners:
        dispatcher.add_listener(NEW_DEVICE, listener)
    
    if notifier is None:
        transports = config.transports
        notifier = MailNotifier(
            transport or SmtpTransport(transports.smtp_host, transports.smtp_port),
            sender_email=transports.sender_email,
            sender_name=transports.sender_name,
        )
    
    builder = AuthenticationContextBuilder(registry, collector)
    publisher = AuthenticationEventPublisher(dispatcher, notifier)
    return LoginService(builder, publisher)


def create_login_listener(
    config: AuthLogConfig,
    factories: Iterable[AuthenticationLogFactory],
    listeners: Iterable[Listener] = (),
    transport: MailTransport | None = None,
    notifier: Notifier | None = None,
    celery_app: Celery | None = None,
) -> LoginListener:
    """Assemble the LoginListener, with async dispatch when enabled.
    
    Raises:
        ConfigurationError: If async dispatch is enabled without a Celery app.
    """
    service = create_login_service(config, factories, listeners, transport, notifier)
    
    if not config.messenger:
        return LoginListener(service)
    
    if celery_app is None:
        raise ConfigurationError("Async dispatch is enabled but no Celery app was provided")
    
    task = register_login_task(celery_app, service)
    logger.info(f"Logins will be dispatched through Celery task {task.name}")
    return LoginListener(service, CeleryDispatcher(task))
