"""Deck lifecycle: creation, listing, import, reversal, statistics, removal"""

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any

from ..exceptions import DuplicateResourceError, NotFoundError
from ..logging_config import get_logger
from ..models.deck import Deck, DeckCreate, DeckSummary, DeckUpdate, StageCount
from ..models.validation import validate_payload
from .admission import AdmissionController
from .card_service import CardService
from .constants import DeckConstants
from .interfaces import DeckRepositoryInterface

logger = get_logger(__name__)


class DeckService:
    """Deck CRUD plus the deck-level operations that copy cards"""

    def __init__(
        self,
        deck_repository: DeckRepositoryInterface,
        card_service: CardService,
        admission: AdmissionController,
    ):
        self.deck_repository = deck_repository
        self.card_service = card_service
        self.admission = admission

    def create(self, payload: DeckCreate | dict[str, Any], creator_id: str) -> Deck:
        """Validate and store a new deck.

        Raises:
            DeckValidationError: the payload is invalid
            DuplicateResourceError: the creator already has a deck of that name
        """
        data = validate_payload(DeckCreate, payload)
        if self.deck_repository.find_by_name(creator_id, data.name):
            raise DuplicateResourceError(
                "deck", data.name, f"Deck already exists: {data.name}"
            )

        deck = self.deck_repository.create(
            Deck(
                name=data.name,
                creator_id=creator_id,
                learning_rate=data.learning_rate,
                from_lang=data.from_lang,
                to_lang=data.to_lang,
                created_at=self.admission.clock.now(),
            )
        )
        logger.info(
            f"Created deck '{deck.name}' ({deck.from_lang.value} -> {deck.to_lang.value})"
        )
        return deck

    def find_all(
        self, creator_id: str, now: datetime | None = None
    ) -> list[DeckSummary]:
        """The creator's decks, oldest first, with today's card counts"""
        now = now or self.admission.clock.now()
        summaries = []
        for deck in self.deck_repository.find_by_creator(creator_id):
            cards = self.card_service.find_all(deck.id)
            new_total = sum(1 for card in cards if card.is_new)
            due_total = self.card_service.count_due(deck.id, now)
            summaries.append(
                DeckSummary(
                    deck=deck,
                    new_card_count=self.admission.new_cards_available(
                        deck, new_total, now
                    ),
                    old_card_count=due_total,
                )
            )
        return summaries

    def find_one(self, deck_id: str) -> Deck:
        deck = self.deck_repository.find_by_id(deck_id)
        if deck is None:
            raise NotFoundError("deck", deck_id)
        return deck

    def find_by_reference(self, creator_id: str, reference: str) -> Deck:
        """Look a deck up by id, then by the creator's deck name"""
        deck = self.deck_repository.find_by_id(reference)
        if deck is None:
            deck = self.deck_repository.find_by_name(creator_id, reference)
        if deck is None:
            raise NotFoundError("deck", reference)
        return deck

    def update(
        self, deck_id: str, payload: DeckUpdate | dict[str, Any], creator_id: str
    ) -> Deck:
        """Rename a deck or change its learning rate"""
        data = validate_payload(DeckUpdate, payload)
        duplicate = self.deck_repository.find_by_name(creator_id, data.name)
        if duplicate and duplicate.id != deck_id:
            raise DuplicateResourceError(
                "deck", data.name, f"Deck already exists: {data.name}"
            )

        deck = self.deck_repository.update(deck_id, data.name, data.learning_rate)
        if deck is None:
            raise NotFoundError("deck", deck_id)
        return deck

    def import_deck(self, user_id: str, deck_id: str) -> Deck:
        """Copy another user's deck and its cards, schedules reset"""
        source = self.find_one(deck_id)
        if source.creator_id == user_id:
            raise DuplicateResourceError(
                "deck", source.name, "You already own this deck"
            )

        new_deck = self.create(self._payload_from(source), user_id)
        self.card_service.copy_cards(self.card_service.find_all(source.id), new_deck)
        return new_deck

    def swap(self, deck: Deck, user_id: str) -> Deck:
        """Create the reversed deck: languages and card sides exchanged"""
        new_deck = self.create(
            self._payload_from(
                deck,
                name=f"{deck.name}{DeckConstants.REVERSED_SUFFIX}",
                reverse=True,
            ),
            user_id,
        )
        self.card_service.copy_cards(
            self.card_service.find_all(deck.id), new_deck, swap=True
        )
        return new_deck

    def stats(self, deck_id: str) -> list[StageCount]:
        """Number of cards per stage, lowest stage first"""
        deck = self.find_one(deck_id)
        counts = Counter(card.stage for card in self.card_service.find_all(deck.id))
        return [StageCount(stage=stage, count=counts[stage]) for stage in sorted(counts)]

    def remove(self, deck_id: str) -> None:
        """Delete a deck together with its cards"""
        deck = self.find_one(deck_id)
        with ThreadPoolExecutor(max_workers=2) as pool:
            cards = pool.submit(self.card_service.remove_cards_from_decks, [deck.id])
            removed = pool.submit(self.deck_repository.delete, deck.id)
            cards.result()
            removed.result()
        logger.info(f"Removed deck '{deck.name}'")

    def remove_decks_from_user(self, creator_id: str) -> int:
        """Cascade removal of every deck a user created"""
        deck_ids = [d.id for d in self.deck_repository.find_by_creator(creator_id)]
        with ThreadPoolExecutor(max_workers=2) as pool:
            removed = pool.submit(self.deck_repository.delete_by_creator, creator_id)
            cards = pool.submit(self.card_service.remove_cards_from_decks, deck_ids)
            cards.result()
            count = len(removed.result())
        logger.info(f"Removed {count} deck(s) of user {creator_id}")
        return count

    @staticmethod
    def _payload_from(
        deck: Deck, name: str | None = None, reverse: bool = False
    ) -> DeckCreate:
        return DeckCreate(
            name=name or deck.name,
            learning_rate=deck.learning_rate,
            from_lang=deck.to_lang if reverse else deck.from_lang,
            to_lang=deck.from_lang if reverse else deck.to_lang,
        )
