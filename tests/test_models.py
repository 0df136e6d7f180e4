"""Tests for validation models and settings"""

import pytest
from pydantic import ValidationError

from vocab_wizard.config.settings import AppSettings, StorageSettings, TranslatorSettings
from vocab_wizard.core.clock import SystemClock
from vocab_wizard.exceptions import ConfigurationError, DeckValidationError
from vocab_wizard.models.card import Card, CardCreate
from vocab_wizard.models.deck import DeckCreate, DeckUpdate, Language
from vocab_wizard.models.dictionary import TranslationResponse
from vocab_wizard.models.validation import validate_payload


class TestDeckCreate:
    """Language pair and name rules"""

    def test_valid(self):
        deck = DeckCreate(name=" Verbs ", learning_rate=5, from_lang="fr", to_lang="en")

        assert deck.name == "Verbs"
        assert deck.from_lang is Language.FR

    def test_same_languages(self):
        with pytest.raises(ValidationError, match="must not match"):
            DeckCreate(name="Verbs", learning_rate=5, from_lang="en", to_lang="en")

    def test_english_required(self):
        with pytest.raises(ValidationError, match="must be en"):
            DeckCreate(name="Verbs", learning_rate=5, from_lang="de", to_lang="it")

    def test_validate_payload_names_field(self):
        with pytest.raises(DeckValidationError) as exc_info:
            validate_payload(DeckUpdate, {"name": "Verbs", "learning_rate": 0})

        assert exc_info.value.details["field"] == "learning_rate"

    def test_validate_payload_accepts_model(self):
        payload = DeckUpdate(name="Verbs", learning_rate=3)

        assert validate_payload(DeckUpdate, payload) == payload


class TestCardModels:
    """Card invariants"""

    def test_word_whitespace_is_normalized(self):
        assert CardCreate(word="  ice \t cream ").word == "ice cream"

    def test_stage_range(self):
        with pytest.raises(ValidationError):
            Card(deck_id="d", word="w", translation="t", stage=9)

    def test_new_card(self):
        card = Card(deck_id="d", word="w", translation="t")

        assert card.is_new
        assert card.stage == 0


class TestTranslationResponse:
    def test_alias(self):
        body = TranslationResponse.model_validate({"translatedText": " Hund "})
        assert body.translated_text == "Hund"


class TestSettings:
    """Environment driven configuration"""

    def test_translator_url_from_env(self, monkeypatch):
        monkeypatch.setenv("LIBRE_TRANSLATE_URL", "https://lt.example.com/")

        assert TranslatorSettings().url == "https://lt.example.com"

    def test_invalid_url(self, monkeypatch):
        monkeypatch.setenv("LIBRE_TRANSLATE_URL", "ftp://lt.example.com")

        with pytest.raises(ValidationError):
            TranslatorSettings()

    def test_data_dir_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("VOCAB_DATA_DIR", str(tmp_path))

        assert StorageSettings().data_dir == tmp_path

    def test_max_workers_bounds(self, monkeypatch):
        monkeypatch.setenv("MAX_WORKERS", "0")

        with pytest.raises(ValidationError):
            AppSettings()

    def test_unknown_timezone(self):
        with pytest.raises(ConfigurationError):
            SystemClock("Mars/Olympus_Mons")
