"""Spaced repetition scheduling of cards.

Cards live in stages 0-8. A review moves a card to a new stage and the
stage decides the due date: 2**stage days after the review, at the start
of that day. The three review rules are pure; apply_review() is the only
place where a card's stage and due date are written.
"""

from datetime import date, datetime, time, timedelta

from ..exceptions import InvalidStageError
from ..logging_config import get_logger
from ..models.card import Card
from ..models.deck import Confidence
from .constants import SchedulerConstants
from .interfaces import CardRepositoryInterface, ClockInterface

logger = get_logger(__name__)


class CardScheduler:
    """Computes stage transitions and due dates for reviewed cards"""

    def __init__(self, card_repository: CardRepositoryInterface, clock: ClockInterface):
        self.card_repository = card_repository
        self.clock = clock

    @staticmethod
    def on_hard_review(card: Card) -> int:
        """Drop the card to the floor of its bucket"""
        for highest, floor in SchedulerConstants.HARD_REVIEW_FLOORS:
            if card.stage <= highest:
                return floor
        return SchedulerConstants.HARD_REVIEW_TOP_FLOOR

    @staticmethod
    def on_good_review(card: Card) -> int:
        """Move the card up by one stage"""
        return min(
            card.stage + SchedulerConstants.GOOD_REVIEW_STEP,
            SchedulerConstants.MAX_STAGE,
        )

    @staticmethod
    def on_easy_review(card: Card) -> int:
        """Move the card up by two stages, snapping to the top near the end"""
        step = SchedulerConstants.EASY_REVIEW_STEP
        if card.stage <= SchedulerConstants.MAX_STAGE - step:
            return card.stage + step
        return SchedulerConstants.MAX_STAGE

    def next_stage(self, card: Card, confidence: Confidence) -> int:
        """Dispatch a review outcome to its rule"""
        rules = {
            Confidence.HARD: self.on_hard_review,
            Confidence.GOOD: self.on_good_review,
            Confidence.EASY: self.on_easy_review,
        }
        return rules[Confidence(confidence)](card)

    @staticmethod
    def stage_to_expiry(stage: int, now: datetime) -> date:
        """Due day for a card reviewed at `now` that lands in `stage`"""
        if not SchedulerConstants.MIN_STAGE <= stage <= SchedulerConstants.MAX_STAGE:
            raise InvalidStageError(
                stage, SchedulerConstants.MIN_STAGE, SchedulerConstants.MAX_STAGE
            )
        interval = timedelta(days=SchedulerConstants.INTERVAL_BASE**stage)
        return (now + interval).date()

    @staticmethod
    def is_due(card: Card, now: datetime) -> bool:
        """True once the start of the card's due day lies in the past"""
        if card.expires is None:
            return False
        return datetime.combine(card.expires, time.min, tzinfo=now.tzinfo) < now

    def apply_review(
        self, card_id: str, new_stage: int, now: datetime | None = None
    ) -> date:
        """Persist the new stage together with its due date"""
        expires = self.stage_to_expiry(new_stage, now or self.clock.now())
        self.card_repository.update_schedule(card_id, new_stage, expires)
        logger.debug(f"Card {card_id} moved to stage {new_stage}, due {expires}")
        return expires
