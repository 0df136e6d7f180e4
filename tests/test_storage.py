"""Tests for in-memory and JSON-file repositories"""

import json
from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from vocab_wizard.exceptions import NotFoundError, StorageError
from vocab_wizard.models.card import Card
from vocab_wizard.models.deck import Deck, Language
from vocab_wizard.storage.json_store import JsonCardRepository, JsonDeckRepository
from vocab_wizard.storage.memory import InMemoryCardRepository, InMemoryDeckRepository

NOW = datetime(2024, 3, 10, 9, 0)
TODAY = NOW.date()


def make_card(word: str, deck_id: str = "deck-1", **fields) -> Card:
    fields.setdefault("created_at", NOW)
    return Card(deck_id=deck_id, word=word, translation=f"{word}-t", **fields)


def make_deck(name: str = "Animals", creator_id: str = "user-1", **fields) -> Deck:
    return Deck(
        name=name,
        creator_id=creator_id,
        learning_rate=5,
        from_lang=Language.EN,
        to_lang=Language.ES,
        **fields,
    )


class TestInMemoryCardRepository:
    """Card queries"""

    def setup_method(self):
        self.repo = InMemoryCardRepository()

    def test_returns_copies(self):
        card = self.repo.create(make_card("dog"))

        card.definitions.append("changed outside")

        assert self.repo.find_by_id(card.id).definitions == []

    def test_duplicate_id(self):
        card = self.repo.create(make_card("dog"))

        with pytest.raises(ValueError):
            self.repo.create(card)

    def test_find_by_word_is_scoped_to_deck(self):
        self.repo.create(make_card("dog", deck_id="deck-1"))

        assert self.repo.find_by_word("deck-1", "dog") is not None
        assert self.repo.find_by_word("deck-2", "dog") is None

    def test_find_new_oldest_first_with_limit(self):
        for i in (2, 0, 1):
            self.repo.create(make_card(f"w{i}", created_at=NOW + timedelta(minutes=i)))
        self.repo.create(make_card("seen", stage=1, expires=TODAY))

        assert [c.word for c in self.repo.find_new("deck-1", 2)] == ["w0", "w1"]
        assert self.repo.find_new("deck-1", 0) == []

    def test_find_due_most_overdue_first(self):
        self.repo.create(make_card("a", stage=1, expires=TODAY - timedelta(days=1)))
        self.repo.create(make_card("b", stage=1, expires=TODAY - timedelta(days=5)))
        self.repo.create(make_card("c", stage=1, expires=TODAY + timedelta(days=1)))
        self.repo.create(make_card("d"))

        assert [c.word for c in self.repo.find_due("deck-1", NOW)] == ["b", "a"]

    def test_naive_and_aware_timestamps_sort_together(self):
        self.repo.create(make_card("aware", created_at=datetime(2024, 1, 2, tzinfo=timezone.utc)))
        self.repo.create(make_card("naive", created_at=datetime(2000, 1, 1)))

        assert [c.word for c in self.repo.find_new("deck-1", 10)] == ["naive", "aware"]
        assert [c.word for c in self.repo.find_by_deck("deck-1")] == ["naive", "aware"]

    def test_update_schedule(self):
        card = self.repo.create(make_card("dog"))

        self.repo.update_schedule(card.id, 2, date(2024, 3, 14))

        stored = self.repo.find_by_id(card.id)
        assert (stored.stage, stored.expires) == (2, date(2024, 3, 14))

    def test_update_schedule_missing(self):
        with pytest.raises(NotFoundError):
            self.repo.update_schedule("missing", 1, TODAY)

    def test_delete(self):
        card = self.repo.create(make_card("dog"))

        assert self.repo.delete(card.id) is True
        assert self.repo.delete(card.id) is False

    def test_delete_by_decks(self):
        self.repo.create(make_card("a", deck_id="d1"))
        self.repo.create(make_card("b", deck_id="d2"))
        self.repo.create(make_card("c", deck_id="d3"))

        assert self.repo.delete_by_decks(["d1", "d2"]) == 2
        assert [c.word for c in self.repo.find_by_deck("d3")] == ["c"]


class TestInMemoryDeckRepository:
    """Deck queries and compare-and-set"""

    def setup_method(self):
        self.repo = InMemoryDeckRepository()

    def test_find_by_name_and_creator(self):
        deck = self.repo.create(make_deck())

        assert self.repo.find_by_name("user-1", "Animals").id == deck.id
        assert self.repo.find_by_name("user-2", "Animals") is None

    def test_update(self):
        deck = self.repo.create(make_deck())

        updated = self.repo.update(deck.id, "Beasts", 9)

        assert (updated.name, updated.learning_rate) == ("Beasts", 9)
        assert self.repo.update("missing", "Beasts", 9) is None

    def test_compare_and_set(self):
        deck = self.repo.create(make_deck())

        assert self.repo.compare_and_set_progress(deck.id, (None, 0), (TODAY, 1))
        assert not self.repo.compare_and_set_progress(deck.id, (None, 0), (TODAY, 1))
        stored = self.repo.find_by_id(deck.id)
        assert (stored.last_time_learned, stored.num_cards_learned) == (TODAY, 1)

    def test_compare_and_set_missing(self):
        with pytest.raises(NotFoundError):
            self.repo.compare_and_set_progress("missing", (None, 0), (TODAY, 1))

    def test_naive_and_aware_decks_sort_together(self):
        self.repo.create(make_deck("Colors", created_at=datetime(2024, 1, 2, tzinfo=timezone.utc)))
        self.repo.create(make_deck("Animals", created_at=datetime(2000, 1, 1)))

        assert [d.name for d in self.repo.find_by_creator("user-1")] == ["Animals", "Colors"]

    def test_delete_by_creator(self):
        first = self.repo.create(make_deck("Animals"))
        self.repo.create(make_deck("Colors", creator_id="user-2"))

        assert self.repo.delete_by_creator("user-1") == [first.id]
        assert self.repo.find_by_creator("user-1") == []
        assert len(self.repo.find_by_creator("user-2")) == 1


class TestJsonStore:
    """State survives a reload from disk"""

    def test_cards_roundtrip(self, tmp_path):
        repo = JsonCardRepository(tmp_path)
        card = repo.create(make_card("dog", synonyms=["hound"]))
        repo.update_schedule(card.id, 3, date(2024, 3, 18))

        reloaded = JsonCardRepository(tmp_path).find_by_id(card.id)

        assert reloaded.synonyms == ["hound"]
        assert (reloaded.stage, reloaded.expires) == (3, date(2024, 3, 18))
        assert reloaded.created_at == NOW

    def test_decks_roundtrip(self, tmp_path):
        repo = JsonDeckRepository(tmp_path)
        deck = repo.create(make_deck())
        repo.compare_and_set_progress(deck.id, (None, 0), (TODAY, 1))

        reloaded = JsonDeckRepository(tmp_path).find_by_id(deck.id)

        assert reloaded.to_lang is Language.ES
        assert (reloaded.last_time_learned, reloaded.num_cards_learned) == (TODAY, 1)

    def test_one_file_per_collection(self, tmp_path):
        JsonDeckRepository(tmp_path).create(make_deck())
        JsonCardRepository(tmp_path).create(make_card("dog"))

        decks = json.loads((tmp_path / "decks.json").read_text(encoding="utf-8"))
        cards = json.loads((tmp_path / "cards.json").read_text(encoding="utf-8"))

        assert decks[0]["name"] == "Animals"
        assert cards[0]["word"] == "dog"
        assert cards[0]["expires"] is None
        assert sorted(p.name for p in tmp_path.iterdir()) == ["cards.json", "decks.json"]

    def test_missing_directory_is_created(self, tmp_path):
        data_dir = tmp_path / "nested" / "data"
        repo = JsonCardRepository(data_dir)

        repo.create(make_card("dog"))

        assert (data_dir / "cards.json").exists()

    def test_corrupt_file(self, tmp_path):
        (tmp_path / "cards.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError):
            JsonCardRepository(tmp_path)

    def test_invalid_records(self, tmp_path):
        (tmp_path / "decks.json").write_text('[{"name": "x"}]', encoding="utf-8")

        with pytest.raises(StorageError):
            JsonDeckRepository(tmp_path)

    def test_failed_save_keeps_previous_state(self, tmp_path):
        repo = JsonCardRepository(tmp_path)
        card = repo.create(make_card("dog"))

        with patch("vocab_wizard.storage.json_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageError):
                repo.update_schedule(card.id, 3, date(2024, 3, 18))
            with pytest.raises(StorageError):
                repo.create(make_card("cat"))

        assert repo.find_by_id(card.id).stage == 0
        assert repo.find_by_word("deck-1", "cat") is None
        # A later successful write must not carry the failed changes to disk
        repo.create(make_card("bird"))
        reloaded = JsonCardRepository(tmp_path)
        assert reloaded.find_by_id(card.id).stage == 0
        assert sorted(c.word for c in reloaded.find_by_deck("deck-1")) == ["bird", "dog"]
        assert sorted(p.name for p in tmp_path.iterdir()) == ["cards.json"]

    def test_failed_progress_update_is_not_applied(self, tmp_path):
        repo = JsonDeckRepository(tmp_path)
        deck = repo.create(make_deck())

        with patch("vocab_wizard.storage.json_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageError):
                repo.compare_and_set_progress(deck.id, (None, 0), (TODAY, 1))

        stored = repo.find_by_id(deck.id)
        assert (stored.last_time_learned, stored.num_cards_learned) == (None, 0)
        assert repo.compare_and_set_progress(deck.id, (None, 0), (TODAY, 1))

    def test_mixed_timestamps_survive_reload(self, tmp_path):
        repo = JsonCardRepository(tmp_path)
        repo.create(make_card("naive", created_at=datetime(2024, 1, 1)))
        repo.create(make_card("aware", created_at=datetime(2024, 1, 2, tzinfo=timezone.utc)))

        new_cards = JsonCardRepository(tmp_path).find_new("deck-1", 10)

        assert sorted(c.word for c in new_cards) == ["aware", "naive"]
