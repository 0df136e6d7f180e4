"""
Vocab Wizard - vocabulary flashcards with spaced repetition
"""

__version__ = "1.0.0"
__description__ = "Vocabulary decks with translation, enrichment and spaced repetition"

from .core.factory import create_services

__all__ = ["create_services"]
