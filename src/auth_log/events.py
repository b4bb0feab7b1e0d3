"""New-device event and a synchronous event dispatcher."""

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from auth_log.schema import UserInformation, UserReference

logger = logging.getLogger(__name__)

NEW_DEVICE = "auth_log.new_device"


class AuthenticationLogEvent:
    """Dispatched once per login so listeners can record it.
    
    A listener that takes responsibility for recording the login marks the
    event as handled. Once handled, the event stays handled.
    """

    def __init__(self, user_reference: UserReference, user_information: UserInformation):
        self.user_reference = user_reference
        self.user_information = user_information
        self._handled = False

    @property
    def handled(self) -> bool:
        return self._handled

    def mark_handled(self) -> None:
        self._handled = True

    def __repr__(self) -> str:
        return (
            f"AuthenticationLogEvent(user={self.user_reference.type}:"
            f"{self.user_reference.id}, handled={self._handled})"
        )


Listener = Callable[[AuthenticationLogEvent], Any]


class EventDispatcher:
    """Runs listeners synchronously, in registration order."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def add_listener(self, event_name: str, listener: Listener) -> None:
        self._listeners[event_name].append(listener)

    def listeners(self, event_name: str) -> list[Listener]:
        return list(self._listeners.get(event_name, []))

    def dispatch(self, event_name: str, event: AuthenticationLogEvent) -> bool:
        """Deliver an event to every listener registered for its name.
        
        A listener acknowledges the event either by calling
        ``event.mark_handled()`` or by returning a truthy value.
        
        Args:
            event_name: Name the listeners were registered under.
            event: The event to deliver.
            
        Returns:
            True if at least one listener acknowledged the event.
        """
        for listener in self.listeners(event_name):
            if listener(event):
                event.mark_handled()
        
        logger.debug(f"Dispatched {event_name}: {event!r}")
        return event.handled
