"""Pydantic models for external lexical and translation data"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PhoneticVariant(BaseModel):
    """One pronunciation variant of a dictionary entry"""

    text: str | None = None
    audio: str | None = None


class Definition(BaseModel):
    """A single sense within a meaning group"""

    definition: str
    example: str | None = None
    synonyms: list[str] = Field(default=[])
    antonyms: list[str] = Field(default=[])


class Meaning(BaseModel):
    """Part-of-speech meaning group"""

    model_config = ConfigDict(populate_by_name=True)

    part_of_speech: str = Field(default="", alias="partOfSpeech")
    definitions: list[Definition] = Field(default=[])
    synonyms: list[str] = Field(default=[])
    antonyms: list[str] = Field(default=[])


class DictionaryEntry(BaseModel):
    """One entry returned by the dictionary lookup"""

    word: str = ""
    phonetic: str | None = None
    phonetics: list[PhoneticVariant] = Field(default=[])
    meanings: list[Meaning] = Field(default=[])


class TranslationResponse(BaseModel):
    """Body returned by the translation capability"""

    model_config = ConfigDict(populate_by_name=True)

    translated_text: str = Field(alias="translatedText")

    @field_validator("translated_text")
    @classmethod
    def validate_translated_text(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Translation cannot be empty")
        return v.strip()


class LexicalInfo(BaseModel):
    """Normalized enrichment record merged into a card"""

    phonetic: str | None = None
    audio_link: str | None = None
    definitions: list[str] = Field(default=[])
    examples: list[str] = Field(default=[])
    synonyms: list[str] = Field(default=[])
    antonyms: list[str] = Field(default=[])


class ExternalData(BaseModel):
    """Translation plus optional enrichment for a new card"""

    translation: str
    lexical_info: LexicalInfo | None = None
