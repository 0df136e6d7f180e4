"""Pydantic models for cards"""

import re
from datetime import date, datetime
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from ..core.constants import SchedulerConstants


class Card(BaseModel):
    """Model for a single vocabulary card"""

    id: str = Field(default_factory=lambda: uuid4().hex)
    deck_id: str = Field(description="Owning deck")
    word: str = Field(description="Term in the deck's source language")
    translation: str = Field(description="Term in the deck's target language")
    phonetic: str | None = Field(default=None, description="Phonetic transcription")
    audio_link: str | None = Field(default=None, description="Pronunciation URL")
    definitions: list[str] = Field(default=[])
    examples: list[str] = Field(default=[])
    synonyms: list[str] = Field(default=[])
    antonyms: list[str] = Field(default=[])
    stage: int = Field(
        default=SchedulerConstants.MIN_STAGE,
        ge=SchedulerConstants.MIN_STAGE,
        le=SchedulerConstants.MAX_STAGE,
    )
    expires: date | None = Field(
        default=None, description="Due on or after this day; None for new cards"
    )
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("word", "translation")
    @classmethod
    def validate_terms(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Term cannot be empty")
        return v.strip()

    @property
    def is_new(self) -> bool:
        """A card without due date has never completed a review"""
        return self.expires is None


class CardCreate(BaseModel):
    """Payload for adding a word to a deck"""

    word: str = Field(min_length=1)

    @field_validator("word", mode="before")
    @classmethod
    def normalize_word(cls, v: str) -> str:
        if not isinstance(v, str):
            return v
        return re.sub(r"\s+", " ", v.strip())
