"""Dependency injection container for managing service dependencies"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from ..config.settings import settings
from .interfaces import (
    CardRepositoryInterface,
    ClockInterface,
    DeckRepositoryInterface,
    LexicalLookupInterface,
    TranslatorInterface,
)


class DIContainer:
    """Simple dependency injection container"""

    def __init__(self) -> None:
        self._services: dict[type, Any] = {}
        self._factories: dict[type, Callable[[], Any]] = {}
        self._singletons: dict[type, Any] = {}

    def register_instance(self, interface: type[Any], instance: Any) -> None:
        """Register a specific instance for an interface"""
        self._services[interface] = instance

    def register_singleton(
        self, interface: type[Any], factory: Callable[[], Any]
    ) -> None:
        """Register a factory whose first result is reused"""
        self._factories[interface] = factory
        self._singletons.setdefault(interface, None)

    def get(self, interface: type[Any]) -> Any | None:
        """Get an instance of the requested interface"""
        if interface in self._services:
            return self._services[interface]

        if self._singletons.get(interface) is not None:
            return self._singletons[interface]

        if interface in self._factories:
            instance = self._factories[interface]()
            if interface in self._singletons:
                self._singletons[interface] = instance
            return instance

        return None


def setup_default_container(data_dir: Path | None = None) -> DIContainer:
    """Container with HTTP clients, JSON storage and the system clock"""
    from ..storage.json_store import JsonCardRepository, JsonDeckRepository
    from .clock import SystemClock
    from .dictionary_client import FreeDictionaryClient
    from .translator_client import LibreTranslateClient

    directory = Path(data_dir or settings.storage.data_dir)
    container = DIContainer()

    container.register_singleton(
        ClockInterface, lambda: SystemClock(settings.scheduler.timezone)
    )
    container.register_singleton(TranslatorInterface, lambda: LibreTranslateClient())
    container.register_singleton(
        LexicalLookupInterface, lambda: FreeDictionaryClient()
    )
    container.register_singleton(
        CardRepositoryInterface, lambda: JsonCardRepository(directory)
    )
    container.register_singleton(
        DeckRepositoryInterface, lambda: JsonDeckRepository(directory)
    )

    return container


def setup_memory_container(
    translator: TranslatorInterface,
    lexical_lookup: LexicalLookupInterface,
    clock: ClockInterface,
) -> DIContainer:
    """Container backed by in-memory repositories with the given capabilities"""
    from ..storage.memory import InMemoryCardRepository, InMemoryDeckRepository

    container = DIContainer()
    container.register_instance(ClockInterface, clock)
    container.register_instance(TranslatorInterface, translator)
    container.register_instance(LexicalLookupInterface, lexical_lookup)
    container.register_singleton(CardRepositoryInterface, InMemoryCardRepository)
    container.register_singleton(DeckRepositoryInterface, InMemoryDeckRepository)
    return container
