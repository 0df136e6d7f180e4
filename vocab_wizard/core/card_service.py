"""Card lifecycle: creation, copying, review and removal"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime

from ..config.settings import settings
from ..exceptions import (
    DuplicateResourceError,
    InvalidReferenceError,
    NotFoundError,
    VocabWizardError,
)
from ..logging_config import get_logger
from ..models.card import Card, CardCreate
from ..models.deck import Confidence, Deck
from ..models.validation import validate_payload
from ..utils.error_handler import ErrorCollector
from .admission import AdmissionController
from .interfaces import CardRepositoryInterface, ClockInterface
from .scheduler import CardScheduler
from .translation_orchestrator import TranslationOrchestrator

logger = get_logger(__name__)


@dataclass
class AddResult:
    """Outcome of adding one word to a deck"""

    word: str
    success: bool
    card: Card | None = None
    error: str | None = None


@dataclass
class BatchAddResult:
    """Outcome of adding several words to a deck"""

    total_processed: int
    successful: int
    failed: int
    results: list[AddResult]
    errors: list[str]


class CardService:
    """Wires enrichment, scheduling and admission control to card storage"""

    def __init__(
        self,
        card_repository: CardRepositoryInterface,
        orchestrator: TranslationOrchestrator,
        scheduler: CardScheduler,
        admission: AdmissionController,
        clock: ClockInterface,
        max_workers: int | None = None,
    ):
        self.card_repository = card_repository
        self.orchestrator = orchestrator
        self.scheduler = scheduler
        self.admission = admission
        self.clock = clock
        self.max_workers = max_workers or settings.max_workers

    def create_card(self, deck: Deck, word: str) -> Card:
        """Translate and enrich `word`, then store it as a new card.

        Raises:
            DeckValidationError: the word is blank
            DuplicateResourceError: the deck already holds the word
            TranslationUnavailableError: no translation could be fetched
        """
        payload = validate_payload(CardCreate, {"word": word})
        if self.card_repository.find_by_word(deck.id, payload.word):
            raise DuplicateResourceError(
                "card",
                payload.word,
                f"The word {payload.word} already exists in this deck",
            )

        external = self.orchestrator.fetch_external_data(
            payload.word, deck.from_lang, deck.to_lang
        )
        fields = external.lexical_info.model_dump() if external.lexical_info else {}
        card = Card(
            deck_id=deck.id,
            word=payload.word,
            translation=external.translation,
            created_at=self.clock.now(),
            **fields,
        )
        created = self.card_repository.create(card)
        logger.info(f"Added card '{created.word}' -> '{created.translation}'")
        return created

    def add_words(self, deck: Deck, words: list[str]) -> BatchAddResult:
        """Create a card per word, collecting failures instead of stopping"""
        results: list[AddResult] = []
        error_collector = ErrorCollector()

        for i, word in enumerate(words, 1):
            logger.debug(f"({i}/{len(words)}) Adding: {word}")
            try:
                card = self.create_card(deck, word)
                results.append(AddResult(word=word, success=True, card=card))
            except VocabWizardError as e:
                error_collector.add_error(e)
                results.append(AddResult(word=word, success=False, error=e.message))

        successful = sum(1 for r in results if r.success)
        if error_collector.has_errors():
            error_collector.log_all(logger)

        return BatchAddResult(
            total_processed=len(words),
            successful=successful,
            failed=len(results) - successful,
            results=results,
            errors=[str(e) for e in error_collector.errors],
        )

    def copy_cards(self, cards: list[Card], deck: Deck, swap: bool = False) -> None:
        """Duplicate cards into `deck` with their schedule reset"""
        created_at = self.clock.now()

        def copy_one(card: Card) -> Card:
            return self.card_repository.create(
                Card(
                    deck_id=deck.id,
                    word=card.translation if swap else card.word,
                    translation=card.word if swap else card.translation,
                    phonetic=card.phonetic,
                    audio_link=card.audio_link,
                    definitions=list(card.definitions),
                    examples=list(card.examples),
                    synonyms=list(card.synonyms),
                    antonyms=list(card.antonyms),
                    created_at=created_at,
                )
            )

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            # list() re-raises the first failed write
            list(pool.map(copy_one, cards))
        logger.info(f"Copied {len(cards)} card(s) into deck '{deck.name}'")

    def find_all(self, deck_id: str) -> list[Card]:
        return self.card_repository.find_by_deck(deck_id)

    def find_one(self, card_id: str) -> Card:
        card = self.card_repository.find_by_id(card_id)
        if card is None:
            raise NotFoundError("card", card_id)
        return card

    def find_in_deck(self, deck: Deck, card_id: str) -> Card:
        """Load a card and make sure it belongs to `deck`"""
        card = self.find_one(card_id)
        if card.deck_id != deck.id:
            raise InvalidReferenceError(card_id, deck.id)
        return card

    def count_due(self, deck_id: str, now: datetime | None = None) -> int:
        return len(self.card_repository.find_due(deck_id, now or self.clock.now()))

    def cards_due_today(
        self, deck: Deck, now: datetime | None = None
    ) -> tuple[list[Card], list[Card]]:
        return self.admission.select_cards_to_review(deck, now)

    def review_card(
        self,
        deck: Deck,
        card: Card,
        confidence: Confidence,
        now: datetime | None = None,
    ) -> Card:
        """Move a reviewed card to its next stage and count the review"""
        if card.deck_id != deck.id:
            raise InvalidReferenceError(card.id, deck.id)

        now = now or self.clock.now()
        new_stage = self.scheduler.next_stage(card, confidence)
        expires = self.scheduler.apply_review(card.id, new_stage, now)
        self.admission.record_review_completed(deck, now)
        logger.info(
            f"Reviewed '{card.word}' as {Confidence(confidence).value}: "
            f"stage {card.stage} -> {new_stage}, due {expires}"
        )
        return card.model_copy(update={"stage": new_stage, "expires": expires})

    def remove(self, deck: Deck, card_id: str) -> None:
        card = self.find_in_deck(deck, card_id)
        self.card_repository.delete(card.id)
        logger.info(f"Removed card '{card.word}'")

    def remove_cards_from_decks(self, deck_ids: list[str]) -> int:
        removed = self.card_repository.delete_by_decks(deck_ids)
        logger.debug(f"Removed {removed} card(s) from {len(deck_ids)} deck(s)")
        return removed
