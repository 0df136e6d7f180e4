"""Lock-guarded in-memory repositories

Mutations build the next state as a new dict and hand it to ``_commit``;
subclasses persist it there before it replaces the current state.
"""

import threading
from datetime import date, datetime

from ..core.interfaces import CardRepositoryInterface, DeckRepositoryInterface
from ..core.scheduler import CardScheduler
from ..exceptions import NotFoundError
from ..models.card import Card
from ..models.deck import Deck


class InMemoryCardRepository(CardRepositoryInterface):
    """Cards kept in a dict; callers only ever see copies"""

    def __init__(self) -> None:
        self._cards: dict[str, Card] = {}
        self._lock = threading.RLock()

    def _commit(self, cards: dict[str, Card]) -> None:
        self._cards = cards

    def create(self, card: Card) -> Card:
        with self._lock:
            if card.id in self._cards:
                raise ValueError(f"Card id {card.id} already stored")
            self._commit({**self._cards, card.id: card.model_copy(deep=True)})
            return card.model_copy(deep=True)

    def find_by_id(self, card_id: str) -> Card | None:
        with self._lock:
            card = self._cards.get(card_id)
            return card.model_copy(deep=True) if card else None

    def find_by_deck(self, deck_id: str) -> list[Card]:
        with self._lock:
            cards = [c for c in self._cards.values() if c.deck_id == deck_id]
            return [c.model_copy(deep=True) for c in sorted(cards, key=_created)]

    def find_by_word(self, deck_id: str, word: str) -> Card | None:
        with self._lock:
            for card in self._cards.values():
                if card.deck_id == deck_id and card.word == word:
                    return card.model_copy(deep=True)
            return None

    def find_new(self, deck_id: str, limit: int) -> list[Card]:
        with self._lock:
            cards = [
                c for c in self._cards.values() if c.deck_id == deck_id and c.is_new
            ]
            cards.sort(key=_created)
            return [c.model_copy(deep=True) for c in cards[: max(limit, 0)]]

    def find_due(self, deck_id: str, now: datetime) -> list[Card]:
        with self._lock:
            cards = [
                c
                for c in self._cards.values()
                if c.deck_id == deck_id and CardScheduler.is_due(c, now)
            ]
            cards.sort(key=lambda c: (c.expires, _created(c)))
            return [c.model_copy(deep=True) for c in cards]

    def update_schedule(self, card_id: str, stage: int, expires: date) -> None:
        with self._lock:
            card = self._cards.get(card_id)
            if card is None:
                raise NotFoundError("card", card_id)
            updated = card.model_copy(update={"stage": stage, "expires": expires})
            self._commit({**self._cards, card_id: updated})

    def delete(self, card_id: str) -> bool:
        with self._lock:
            if card_id not in self._cards:
                return False
            self._commit({k: c for k, c in self._cards.items() if k != card_id})
            return True

    def delete_by_decks(self, deck_ids: list[str]) -> int:
        with self._lock:
            kept = {k: c for k, c in self._cards.items() if c.deck_id not in deck_ids}
            removed = len(self._cards) - len(kept)
            if removed:
                self._commit(kept)
            return removed


class InMemoryDeckRepository(DeckRepositoryInterface):
    """Decks kept in a dict; progress updates are compare-and-set"""

    def __init__(self) -> None:
        self._decks: dict[str, Deck] = {}
        self._lock = threading.RLock()

    def _commit(self, decks: dict[str, Deck]) -> None:
        self._decks = decks

    def create(self, deck: Deck) -> Deck:
        with self._lock:
            if deck.id in self._decks:
                raise ValueError(f"Deck id {deck.id} already stored")
            self._commit({**self._decks, deck.id: deck.model_copy(deep=True)})
            return deck.model_copy(deep=True)

    def find_by_id(self, deck_id: str) -> Deck | None:
        with self._lock:
            deck = self._decks.get(deck_id)
            return deck.model_copy(deep=True) if deck else None

    def find_by_name(self, creator_id: str, name: str) -> Deck | None:
        with self._lock:
            for deck in self._decks.values():
                if deck.creator_id == creator_id and deck.name == name:
                    return deck.model_copy(deep=True)
            return None

    def find_by_creator(self, creator_id: str) -> list[Deck]:
        with self._lock:
            decks = [d for d in self._decks.values() if d.creator_id == creator_id]
            return [d.model_copy(deep=True) for d in sorted(decks, key=_created)]

    def update(self, deck_id: str, name: str, learning_rate: int) -> Deck | None:
        with self._lock:
            deck = self._decks.get(deck_id)
            if deck is None:
                return None
            updated = deck.model_copy(
                update={"name": name, "learning_rate": learning_rate}
            )
            self._commit({**self._decks, deck_id: updated})
            return updated.model_copy(deep=True)

    def compare_and_set_progress(
        self,
        deck_id: str,
        expected: tuple[date | None, int],
        new: tuple[date, int],
    ) -> bool:
        with self._lock:
            deck = self._decks.get(deck_id)
            if deck is None:
                raise NotFoundError("deck", deck_id)
            if (deck.last_time_learned, deck.num_cards_learned) != expected:
                return False
            updated = deck.model_copy(
                update={"last_time_learned": new[0], "num_cards_learned": new[1]}
            )
            self._commit({**self._decks, deck_id: updated})
            return True

    def delete(self, deck_id: str) -> bool:
        with self._lock:
            if deck_id not in self._decks:
                return False
            self._commit({k: d for k, d in self._decks.items() if k != deck_id})
            return True

    def delete_by_creator(self, creator_id: str) -> list[str]:
        with self._lock:
            doomed = [d.id for d in self._decks.values() if d.creator_id == creator_id]
            if doomed:
                self._commit(
                    {k: d for k, d in self._decks.items() if d.creator_id != creator_id}
                )
            return doomed


def _created(record: Card | Deck) -> datetime:
    # Naive timestamps are local time; make them comparable with aware ones
    created = record.created_at
    return created if created.tzinfo is not None else created.astimezone()
