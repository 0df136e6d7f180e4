"""Tests for deck management"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from vocab_wizard.core.clock import FixedClock
from vocab_wizard.core.container import setup_memory_container
from vocab_wizard.core.factory import create_services_from_container
from vocab_wizard.exceptions import (
    DeckValidationError,
    DuplicateResourceError,
    NotFoundError,
)
from vocab_wizard.models.card import Card
from vocab_wizard.models.deck import Language

NOW = datetime(2024, 3, 10, 9, 0)
TODAY = NOW.date()


def deck_payload(name: str = "Animals", **overrides) -> dict:
    payload = {"name": name, "learning_rate": 10, "from_lang": "en", "to_lang": "de"}
    payload.update(overrides)
    return payload


class TestDeckService:
    """DeckService against in-memory storage"""

    def setup_method(self):
        self.clock = FixedClock(NOW)
        container = setup_memory_container(MagicMock(), MagicMock(), self.clock)
        self.services = create_services_from_container(container)
        self.decks = self.services.decks

    def add_card(self, deck_id: str, word: str, **fields) -> Card:
        return self.services.cards.card_repository.create(
            Card(deck_id=deck_id, word=word, translation=f"{word}-t", **fields)
        )

    def test_create(self):
        deck = self.decks.create(deck_payload("  Animals  "), "user-1")

        assert deck.name == "Animals"
        assert deck.creator_id == "user-1"
        assert (deck.from_lang, deck.to_lang) == (Language.EN, Language.DE)
        assert deck.num_cards_learned == 0
        assert deck.last_time_learned is None

    def test_duplicate_name_per_creator(self):
        self.decks.create(deck_payload(), "user-1")

        with pytest.raises(DuplicateResourceError):
            self.decks.create(deck_payload(), "user-1")
        # Another user may reuse the name
        assert self.decks.create(deck_payload(), "user-2").name == "Animals"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": "Abc"},
            {"learning_rate": 0},
            {"from_lang": "de", "to_lang": "de"},
            {"from_lang": "de", "to_lang": "fr"},
            {"to_lang": "pt"},
        ],
    )
    def test_invalid_payload(self, overrides):
        with pytest.raises(DeckValidationError):
            self.decks.create(deck_payload(**overrides), "user-1")

    def test_find_all_counts_todays_cards(self):
        first = self.decks.create(deck_payload("Animals", learning_rate=2), "user-1")
        self.clock.advance(minutes=1)
        second = self.decks.create(deck_payload("Colors"), "user-1")
        self.decks.create(deck_payload("Foreign"), "user-2")
        for i in range(5):
            self.add_card(first.id, f"word{i}")
        self.add_card(first.id, "due", stage=1, expires=TODAY - timedelta(days=1))
        self.add_card(first.id, "later", stage=1, expires=TODAY + timedelta(days=1))

        summaries = self.decks.find_all("user-1")

        assert [s.deck.id for s in summaries] == [first.id, second.id]
        assert (summaries[0].new_card_count, summaries[0].old_card_count) == (2, 1)
        assert (summaries[1].new_card_count, summaries[1].old_card_count) == (0, 0)

    def test_find_all_subtracts_todays_reviews(self):
        deck = self.decks.create(deck_payload(learning_rate=3), "user-1")
        for i in range(5):
            self.add_card(deck.id, f"word{i}")
        self.services.admission.record_review_completed(deck)

        (summary,) = self.decks.find_all("user-1")

        assert summary.new_card_count == 2

    def test_find_one_missing(self):
        with pytest.raises(NotFoundError):
            self.decks.find_one("missing")

    def test_find_by_reference(self):
        deck = self.decks.create(deck_payload(), "user-1")

        assert self.decks.find_by_reference("user-1", deck.id).id == deck.id
        assert self.decks.find_by_reference("user-1", "Animals").id == deck.id
        with pytest.raises(NotFoundError):
            self.decks.find_by_reference("user-2", "Animals")

    def test_update(self):
        deck = self.decks.create(deck_payload(), "user-1")

        updated = self.decks.update(
            deck.id, {"name": "Wild Animals", "learning_rate": 4}, "user-1"
        )

        assert (updated.name, updated.learning_rate) == ("Wild Animals", 4)
        assert self.decks.find_one(deck.id).name == "Wild Animals"

    def test_update_keeps_own_name(self):
        deck = self.decks.create(deck_payload(), "user-1")

        updated = self.decks.update(
            deck.id, {"name": "Animals", "learning_rate": 20}, "user-1"
        )

        assert updated.learning_rate == 20

    def test_update_to_taken_name(self):
        self.decks.create(deck_payload("Colors"), "user-1")
        deck = self.decks.create(deck_payload(), "user-1")

        with pytest.raises(DuplicateResourceError):
            self.decks.update(deck.id, {"name": "Colors", "learning_rate": 1}, "user-1")

    def test_update_missing_deck(self):
        with pytest.raises(NotFoundError):
            self.decks.update("missing", {"name": "Colors", "learning_rate": 1}, "u")

    def test_import_copies_cards_with_reset_schedule(self):
        source = self.decks.create(deck_payload(), "user-1")
        self.add_card(source.id, "dog", stage=6, expires=TODAY + timedelta(days=9))
        self.add_card(source.id, "cat")

        imported = self.decks.import_deck("user-2", source.id)

        assert imported.creator_id == "user-2"
        assert imported.name == source.name
        copies = self.services.cards.find_all(imported.id)
        assert sorted(c.word for c in copies) == ["cat", "dog"]
        assert all(c.stage == 0 and c.expires is None for c in copies)

    def test_import_own_deck(self):
        source = self.decks.create(deck_payload(), "user-1")

        with pytest.raises(DuplicateResourceError) as exc_info:
            self.decks.import_deck("user-1", source.id)
        assert exc_info.value.message == "You already own this deck"

    def test_import_missing_deck(self):
        with pytest.raises(NotFoundError):
            self.decks.import_deck("user-1", "missing")

    def test_swap(self):
        deck = self.decks.create(deck_payload(learning_rate=7), "user-1")
        self.add_card(deck.id, "dog", stage=4, expires=TODAY)

        reversed_deck = self.decks.swap(deck, "user-1")

        assert reversed_deck.name == "Animals-Reversed"
        assert (reversed_deck.from_lang, reversed_deck.to_lang) == (
            Language.DE,
            Language.EN,
        )
        assert reversed_deck.learning_rate == 7
        (card,) = self.services.cards.find_all(reversed_deck.id)
        assert (card.word, card.translation) == ("dog-t", "dog")
        assert (card.stage, card.expires) == (0, None)

    def test_swap_twice_conflicts(self):
        deck = self.decks.create(deck_payload(), "user-1")
        self.decks.swap(deck, "user-1")

        with pytest.raises(DuplicateResourceError):
            self.decks.swap(deck, "user-1")

    def test_stats(self):
        deck = self.decks.create(deck_payload(), "user-1")
        self.add_card(deck.id, "a", stage=3, expires=TODAY)
        self.add_card(deck.id, "b")
        self.add_card(deck.id, "c", stage=3, expires=TODAY)
        self.add_card(deck.id, "d", stage=1, expires=TODAY)

        stats = self.decks.stats(deck.id)

        assert [(s.stage, s.count) for s in stats] == [(0, 1), (1, 1), (3, 2)]

    def test_remove(self):
        deck = self.decks.create(deck_payload(), "user-1")
        other = self.decks.create(deck_payload("Colors"), "user-1")
        self.add_card(deck.id, "dog")
        self.add_card(other.id, "red")

        self.decks.remove(deck.id)

        with pytest.raises(NotFoundError):
            self.decks.find_one(deck.id)
        assert self.services.cards.find_all(deck.id) == []
        assert len(self.services.cards.find_all(other.id)) == 1

    def test_remove_decks_from_user(self):
        first = self.decks.create(deck_payload(), "user-1")
        second = self.decks.create(deck_payload("Colors"), "user-1")
        kept = self.decks.create(deck_payload(), "user-2")
        for deck in (first, second, kept):
            self.add_card(deck.id, "word")

        assert self.decks.remove_decks_from_user("user-1") == 2

        assert self.decks.find_all("user-1") == []
        assert self.services.cards.find_all(first.id) == []
        assert self.services.cards.find_all(second.id) == []
        assert len(self.services.cards.find_all(kept.id)) == 1
