"""Publication of authentication events.

For each login the publisher, in this order:

1. persists the log entry if the factory is persistable,
2. dispatches the new-device event to listeners,
3. fails with UnhandledEvent if nothing took responsibility for the entry,
4. sends the notification.
"""

import logging

from auth_log.context import AuthenticationContext
from auth_log.events import NEW_DEVICE, AuthenticationLogEvent, EventDispatcher
from auth_log.exceptions import UnhandledEvent
from auth_log.factories import is_persistable
from auth_log.notification import Notifier

logger = logging.getLogger(__name__)


class AuthenticationEventPublisher:
    """Persists, dispatches and notifies for one authentication context."""

    def __init__(self, dispatcher: EventDispatcher, notifier: Notifier):
        self.dispatcher = dispatcher
        self.notifier = notifier

    def publish(self, context: AuthenticationContext) -> None:
        """Publish a login.
        
        Args:
            context: The assembled authentication context.
            
        Raises:
            UnhandledEvent: If the factory is not persistable and no listener
                marked the event as handled. No notification is sent.
        """
        factory = context.authentication_log_factory
        persistable = is_persistable(factory)
        
        if persistable:
            factory.persist(context.user_reference, context.user_information)
            logger.debug(f"Persisted authentication log through {type(factory).__name__}")
        
        event = AuthenticationLogEvent(context.user_reference, context.user_information)
        handled = self.dispatcher.dispatch(NEW_DEVICE, event)
        
        if not handled and not persistable:
            raise UnhandledEvent(event)
        
        self.notifier.send(context.user_information, context.user_reference)
