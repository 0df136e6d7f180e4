"""Daily admission of new and due cards.

Every deck may introduce `learning_rate` new cards per calendar day. The
deck remembers the day of its last review and how many reviews happened on
that day; a review on a later day starts the count again at one.
"""

from datetime import date, datetime
from enum import Enum

from ..exceptions import ConcurrentUpdateError, NotFoundError
from ..logging_config import get_logger
from ..models.card import Card
from ..models.deck import Deck
from .interfaces import CardRepositoryInterface, ClockInterface, DeckRepositoryInterface

logger = get_logger(__name__)


class DayState(str, Enum):
    """Whether a deck's learned-today counter belongs to today"""

    FRESH_TODAY = "fresh_today"
    STALE = "stale"


def day_state(deck: Deck, today: date) -> DayState:
    if deck.last_time_learned is not None and deck.last_time_learned == today:
        return DayState.FRESH_TODAY
    return DayState.STALE


def next_progress(deck: Deck, today: date) -> tuple[date, int]:
    """Progress pair after one more completed review"""
    if day_state(deck, today) is DayState.FRESH_TODAY:
        return today, deck.num_cards_learned + 1
    return today, 1


class AdmissionController:
    """Decides which cards a deck surfaces today and records completed reviews"""

    def __init__(
        self,
        card_repository: CardRepositoryInterface,
        deck_repository: DeckRepositoryInterface,
        clock: ClockInterface,
        max_attempts: int = 5,
    ):
        self.card_repository = card_repository
        self.deck_repository = deck_repository
        self.clock = clock
        self.max_attempts = max_attempts

    def remaining_new_card_budget(self, deck: Deck, now: datetime | None = None) -> int:
        """How many new cards the deck may still introduce today"""
        if deck.last_time_learned is None:
            return deck.learning_rate

        today = (now or self.clock.now()).date()
        if day_state(deck, today) is DayState.FRESH_TODAY:
            return max(deck.learning_rate - deck.num_cards_learned, 0)
        # Counter is stale; it is reset by the next recorded review
        return deck.learning_rate

    def new_cards_available(
        self, deck: Deck, new_card_count: int, now: datetime | None = None
    ) -> int:
        """New cards a deck listing should announce for today"""
        return min(self.remaining_new_card_budget(deck, now), new_card_count)

    def select_cards_to_review(
        self, deck: Deck, now: datetime | None = None
    ) -> tuple[list[Card], list[Card]]:
        """New cards (oldest first, within budget) and due cards (most overdue first)"""
        now = now or self.clock.now()
        limit = self.remaining_new_card_budget(deck, now)
        new_cards = self.card_repository.find_new(deck.id, limit) if limit > 0 else []
        old_cards = self.card_repository.find_due(deck.id, now)
        return new_cards, old_cards

    def record_review_completed(self, deck: Deck, now: datetime | None = None) -> Deck:
        """Count one completed review against the deck's daily progress.

        The update is a compare-and-set on (last_time_learned,
        num_cards_learned); when another review got there first the deck is
        reloaded and the transition recomputed.
        """
        today = (now or self.clock.now()).date()
        current = deck
        for attempt in range(1, self.max_attempts + 1):
            expected = (current.last_time_learned, current.num_cards_learned)
            new = next_progress(current, today)
            if self.deck_repository.compare_and_set_progress(current.id, expected, new):
                logger.debug(
                    f"Deck {current.id}: {day_state(current, today).value} -> "
                    f"{new[1]} card(s) learned on {new[0]}"
                )
                return current.model_copy(
                    update={"last_time_learned": new[0], "num_cards_learned": new[1]}
                )

            logger.warning(
                f"Progress of deck {current.id} changed concurrently "
                f"(attempt {attempt}/{self.max_attempts})"
            )
            reloaded = self.deck_repository.find_by_id(current.id)
            if reloaded is None:
                raise NotFoundError("deck", current.id)
            current = reloaded

        raise ConcurrentUpdateError(deck.id, self.max_attempts)
