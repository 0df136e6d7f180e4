"""Factory functions wiring the services from a container"""

from dataclasses import dataclass
from pathlib import Path
from typing import cast

from ..config.settings import settings
from ..enrichment.lexical_aggregator import LexicalInfoAggregator
from .admission import AdmissionController
from .card_service import CardService
from .container import DIContainer, setup_default_container
from .deck_service import DeckService
from .interfaces import (
    CardRepositoryInterface,
    ClockInterface,
    DeckRepositoryInterface,
    LexicalLookupInterface,
    TranslatorInterface,
)
from .scheduler import CardScheduler
from .translation_orchestrator import TranslationOrchestrator


@dataclass
class Services:
    """Fully wired application services"""

    cards: CardService
    decks: DeckService
    scheduler: CardScheduler
    admission: AdmissionController
    clock: ClockInterface


def create_services_from_container(container: DIContainer) -> Services:
    """Resolve dependencies and pass them to the service constructors"""
    clock = cast(ClockInterface, container.get(ClockInterface))
    translator = cast(TranslatorInterface, container.get(TranslatorInterface))
    lexical_lookup = cast(LexicalLookupInterface, container.get(LexicalLookupInterface))
    card_repository = cast(
        CardRepositoryInterface, container.get(CardRepositoryInterface)
    )
    deck_repository = cast(
        DeckRepositoryInterface, container.get(DeckRepositoryInterface)
    )

    if not all([clock, translator, lexical_lookup, card_repository, deck_repository]):
        raise RuntimeError(
            "Some required dependencies are not registered in the container"
        )

    scheduler = CardScheduler(card_repository, clock)
    admission = AdmissionController(
        card_repository,
        deck_repository,
        clock,
        max_attempts=settings.scheduler.progress_update_attempts,
    )
    orchestrator = TranslationOrchestrator(
        translator, lexical_lookup, LexicalInfoAggregator()
    )
    cards = CardService(
        card_repository,
        orchestrator,
        scheduler,
        admission,
        clock,
        max_workers=settings.max_workers,
    )
    decks = DeckService(deck_repository, cards, admission)
    return Services(
        cards=cards, decks=decks, scheduler=scheduler, admission=admission, clock=clock
    )


def create_services(
    data_dir: Path | None = None, container: DIContainer | None = None
) -> Services:
    """Convenience function to create the default services"""
    return create_services_from_container(
        container or setup_default_container(data_dir)
    )
