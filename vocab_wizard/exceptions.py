"""Custom exceptions for the Vocab Wizard application"""

from typing import Any


class VocabWizardError(Exception):
    """Base exception class for all application errors"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class DuplicateResourceError(VocabWizardError):
    """Raised when a card word or deck name is already taken"""

    def __init__(self, resource: str, name: str, reason: str | None = None):
        super().__init__(
            reason or f"The {resource} '{name}' already exists",
            {"resource": resource, "name": name},
        )
        self.resource = resource
        self.name = name


class TranslationUnavailableError(VocabWizardError):
    """Raised when no translation could be obtained for a word"""

    def __init__(self, word: str, from_lang: str, to_lang: str):
        super().__init__(
            f"No translation found for '{word}'",
            {"word": word, "from_lang": from_lang, "to_lang": to_lang},
        )
        self.word = word
        self.from_lang = from_lang
        self.to_lang = to_lang


class LexicalLookupUnavailableError(VocabWizardError):
    """Raised when the dictionary lookup fails; callers tolerate it"""

    def __init__(self, word: str, reason: str):
        super().__init__(
            f"No lexical information available for '{word}': {reason}",
            {"word": word, "reason": reason},
        )
        self.word = word
        self.reason = reason


class NotFoundError(VocabWizardError):
    """Raised when a referenced card or deck does not exist"""

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource.capitalize()} not found",
            {"resource": resource, "id": identifier},
        )
        self.resource = resource
        self.identifier = identifier


class InvalidReferenceError(VocabWizardError):
    """Raised when a card is addressed through a deck it does not belong to"""

    def __init__(self, card_id: str, deck_id: str):
        super().__init__(
            "Card does not belong to Deck", {"card_id": card_id, "deck_id": deck_id}
        )
        self.card_id = card_id
        self.deck_id = deck_id


class InvalidStageError(VocabWizardError):
    """Raised when a stage outside the scheduling range is applied"""

    def __init__(self, stage: int, min_stage: int, max_stage: int):
        super().__init__(
            f"Stage {stage} is outside [{min_stage}, {max_stage}]",
            {"stage": stage},
        )
        self.stage = stage


class ConcurrentUpdateError(VocabWizardError):
    """Raised when the daily progress of a deck keeps changing underneath us"""

    def __init__(self, deck_id: str, attempts: int):
        super().__init__(
            f"Could not record review for deck {deck_id} after {attempts} attempts",
            {"deck_id": deck_id, "attempts": attempts},
        )
        self.deck_id = deck_id
        self.attempts = attempts


class DeckValidationError(VocabWizardError):
    """Raised when a deck or card payload fails validation"""

    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Invalid value for '{field}': {reason}", {"field": field, "reason": reason}
        )
        self.field = field
        self.reason = reason


class ConfigurationError(VocabWizardError):
    """Raised when configuration is invalid or missing"""

    def __init__(self, setting: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for '{setting}': {reason}",
            {"setting": setting, "value": value, "reason": reason},
        )
        self.setting = setting
        self.value = value
        self.reason = reason


class StorageError(VocabWizardError):
    """Raised when the data files cannot be read or written"""

    def __init__(
        self, operation: str, path: str, original_error: Exception | None = None
    ):
        super().__init__(
            f"Storage operation '{operation}' failed for {path}",
            {
                "operation": operation,
                "path": path,
                "original_error": str(original_error) if original_error else None,
            },
        )
        self.operation = operation
        self.path = path
        self.original_error = original_error
