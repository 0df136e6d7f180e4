"""Interface definitions for core components"""

from abc import ABC, abstractmethod
from datetime import date, datetime

from ..models.api_result import ApiResult
from ..models.card import Card
from ..models.deck import Deck, Language
from ..models.dictionary import DictionaryEntry


class ClockInterface(ABC):
    """Interface for the source of the current time"""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current moment"""
        pass


class TranslatorInterface(ABC):
    """Interface for translation services"""

    @abstractmethod
    def translate(
        self, word: str, from_lang: Language, to_lang: Language
    ) -> ApiResult[str]:
        """Translate a word, returning the translated text"""
        pass


class LexicalLookupInterface(ABC):
    """Interface for English dictionary lookups"""

    @abstractmethod
    def lookup(self, word: str) -> ApiResult[list[DictionaryEntry]]:
        """Look up an English word"""
        pass


class CardRepositoryInterface(ABC):
    """Interface for card persistence"""

    @abstractmethod
    def create(self, card: Card) -> Card:
        """Store a new card"""
        pass

    @abstractmethod
    def find_by_id(self, card_id: str) -> Card | None:
        """Find a card by id"""
        pass

    @abstractmethod
    def find_by_deck(self, deck_id: str) -> list[Card]:
        """Find all cards of a deck"""
        pass

    @abstractmethod
    def find_by_word(self, deck_id: str, word: str) -> Card | None:
        """Find the card holding a word within a deck"""
        pass

    @abstractmethod
    def find_new(self, deck_id: str, limit: int) -> list[Card]:
        """Cards without due date, oldest first, at most `limit`"""
        pass

    @abstractmethod
    def find_due(self, deck_id: str, now: datetime) -> list[Card]:
        """Cards whose due day started before `now`, most overdue first"""
        pass

    @abstractmethod
    def update_schedule(self, card_id: str, stage: int, expires: date) -> None:
        """Persist a new stage and due date"""
        pass

    @abstractmethod
    def delete(self, card_id: str) -> bool:
        """Delete a card"""
        pass

    @abstractmethod
    def delete_by_decks(self, deck_ids: list[str]) -> int:
        """Delete every card of the given decks"""
        pass


class DeckRepositoryInterface(ABC):
    """Interface for deck persistence"""

    @abstractmethod
    def create(self, deck: Deck) -> Deck:
        """Store a new deck"""
        pass

    @abstractmethod
    def find_by_id(self, deck_id: str) -> Deck | None:
        """Find a deck by id"""
        pass

    @abstractmethod
    def find_by_name(self, creator_id: str, name: str) -> Deck | None:
        """Find a deck of a user by its name"""
        pass

    @abstractmethod
    def find_by_creator(self, creator_id: str) -> list[Deck]:
        """Find all decks of a user, oldest first"""
        pass

    @abstractmethod
    def update(self, deck_id: str, name: str, learning_rate: int) -> Deck | None:
        """Update user-editable fields"""
        pass

    @abstractmethod
    def compare_and_set_progress(
        self,
        deck_id: str,
        expected: tuple[date | None, int],
        new: tuple[date, int],
    ) -> bool:
        """Atomically replace (last_time_learned, num_cards_learned).

        The write only happens when the stored pair still equals `expected`.
        """
        pass

    @abstractmethod
    def delete(self, deck_id: str) -> bool:
        """Delete a deck"""
        pass

    @abstractmethod
    def delete_by_creator(self, creator_id: str) -> list[str]:
        """Delete all decks of a user, returning their ids"""
        pass
