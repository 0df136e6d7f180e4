"""Pydantic models for decks and deck payloads"""

from datetime import date, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from ..core.constants import DeckConstants


class Language(str, Enum):
    """Supported deck languages"""

    EN = "en"
    DE = "de"
    ES = "es"
    FR = "fr"
    IT = "it"


class Confidence(str, Enum):
    """Outcome of a single card review"""

    HARD = "hard"
    GOOD = "good"
    EASY = "easy"


def _new_id() -> str:
    return uuid4().hex


class Deck(BaseModel):
    """Model for a deck of cards owned by one user"""

    id: str = Field(default_factory=_new_id, description="Deck identifier")
    name: str = Field(description="Deck name, unique per creator")
    creator_id: str = Field(description="Owning user")
    learning_rate: int = Field(ge=1, description="Max new cards per day")
    from_lang: Language = Field(description="Source language")
    to_lang: Language = Field(description="Target language")
    num_cards_learned: int = Field(
        default=0, ge=0, description="Cards learned on last_time_learned"
    )
    last_time_learned: date | None = Field(
        default=None, description="Calendar day of the last review"
    )
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("name", "creator_id")
    @classmethod
    def validate_names(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class DeckCreate(BaseModel):
    """Payload for creating a deck"""

    name: str = Field(min_length=DeckConstants.MIN_NAME_LENGTH)
    learning_rate: int = Field(ge=1)
    from_lang: Language
    to_lang: Language

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def validate_language_pair(self) -> "DeckCreate":
        """Languages must differ and exactly one of them must be English"""
        if self.from_lang == self.to_lang:
            raise ValueError("to_lang and from_lang must not match")
        if Language.EN not in (self.from_lang, self.to_lang):
            raise ValueError(
                f"Either to_lang or from_lang must be {Language.EN.value}"
            )
        return self


class DeckUpdate(BaseModel):
    """Payload for renaming a deck or changing its learning rate"""

    name: str = Field(min_length=DeckConstants.MIN_NAME_LENGTH)
    learning_rate: int = Field(ge=1)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v


class DeckSummary(BaseModel):
    """Deck listing entry with the cards available for today"""

    deck: Deck
    new_card_count: int = Field(ge=0)
    old_card_count: int = Field(ge=0)


class StageCount(BaseModel):
    """Number of cards of a deck sitting in one stage"""

    stage: int
    count: int
