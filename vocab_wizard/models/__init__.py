"""Data models for the Vocab Wizard application"""

from .api_result import ApiResult
from .card import Card, CardCreate
from .deck import (
    Confidence,
    Deck,
    DeckCreate,
    DeckSummary,
    DeckUpdate,
    Language,
    StageCount,
)
from .dictionary import (
    Definition,
    DictionaryEntry,
    ExternalData,
    LexicalInfo,
    Meaning,
    PhoneticVariant,
    TranslationResponse,
)
from .validation import validate_payload

__all__ = [
    "ApiResult",
    "Card",
    "CardCreate",
    "Confidence",
    "Deck",
    "DeckCreate",
    "DeckSummary",
    "DeckUpdate",
    "Language",
    "StageCount",
    "Definition",
    "DictionaryEntry",
    "ExternalData",
    "LexicalInfo",
    "Meaning",
    "PhoneticVariant",
    "TranslationResponse",
    "validate_payload",
]
