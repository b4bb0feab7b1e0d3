"""Authentication log factories and the kind -> factory registry.

Applications provide one factory per principal kind. A factory may also
be persistable, in which case the publisher saves the log entry through
it and no listener has to acknowledge the event.
"""

import logging
import threading
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from auth_log.exceptions import FactoryNotFound
from auth_log.schema import AuthenticationLog, UserInformation, UserReference

logger = logging.getLogger(__name__)


@runtime_checkable
class AuthenticationLogFactory(Protocol):
    """Builds log entries for one kind of principal."""

    def supports(self) -> str:
        ...

    def create(
        self,
        user_reference: UserReference,
        user_information: UserInformation,
    ) -> AuthenticationLog:
        ...


@runtime_checkable
class Persistable(Protocol):
    """Capability of a factory that saves its own log entries."""

    def persist(
        self,
        user_reference: UserReference,
        user_information: UserInformation,
    ) -> None:
        ...


def is_persistable(factory: object) -> bool:
    """Return True if the factory can persist log entries itself."""
    return isinstance(factory, Persistable)


class InMemoryAuthenticationLogFactory:
    """Persistable factory keeping its log entries in a list."""

    def __init__(self, kind: str):
        self.kind = kind
        self.logs: list[AuthenticationLog] = []

    def supports(self) -> str:
        return self.kind

    def create(
        self,
        user_reference: UserReference,
        user_information: UserInformation,
    ) -> AuthenticationLog:
        return AuthenticationLog.from_user_information(user_reference, user_information)

    def persist(
        self,
        user_reference: UserReference,
        user_information: UserInformation,
    ) -> None:
        self.logs.append(self.create(user_reference, user_information))


class AuthenticationLogFactoryRegistry:
    """Looks up the factory responsible for a kind.
    
    The index is built on the first lookup and reused afterwards, so each
    factory's ``supports()`` is called exactly once. When two factories
    declare the same kind, the last one registered wins.
    
    Args:
        factories: All available factories.
    """

    def __init__(self, factories: Iterable[AuthenticationLogFactory]):
        self._factories = factories
        self._factory_map: dict[str, AuthenticationLogFactory] | None = None
        self._lock = threading.Lock()

    def create_from(self, kind: str) -> AuthenticationLogFactory:
        """Return the factory declaring ``kind``.
        
        Args:
            kind: Kind string, usually the principal's type.
            
        Returns:
            The matching factory.
            
        Raises:
            FactoryNotFound: If no factory supports the kind.
        """
        factory_map = self._get_factory_map()
        
        try:
            return factory_map[kind]
        except KeyError:
            raise FactoryNotFound(kind) from None

    def kinds(self) -> list[str]:
        return list(self._get_factory_map())

    def _get_factory_map(self) -> dict[str, AuthenticationLogFactory]:
        if self._factory_map is not None:
            return self._factory_map
        
        with self._lock:
            if self._factory_map is None:
                self._factory_map = self._build_factory_map()
        
        return self._factory_map

    def _build_factory_map(self) -> dict[str, AuthenticationLogFactory]:
        factory_map: dict[str, AuthenticationLogFactory] = {}
        
        for factory in self._factories:
            kind = factory.supports()
            if kind in factory_map:
                logger.warning(
                    f"Factory {type(factory).__name__} replaces "
                    f"{type(factory_map[kind]).__name__} for kind '{kind}'"
                )
            factory_map[kind] = factory
        
        logger.debug(f"Indexed {len(factory_map)} authentication log factories")
        return factory_map
