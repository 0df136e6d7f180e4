"""Orchestrates translation and dictionary lookups for a new card.

The dictionary only understands English. When the deck's source language
is English both calls run side by side; otherwise the word is translated
first and the English translation is looked up.
"""

from concurrent.futures import ThreadPoolExecutor

from ..enrichment.lexical_aggregator import LexicalInfoAggregator
from ..exceptions import LexicalLookupUnavailableError, TranslationUnavailableError
from ..logging_config import get_logger
from ..models.api_result import ApiResult
from ..models.deck import Language
from ..models.dictionary import DictionaryEntry, ExternalData, LexicalInfo
from .interfaces import LexicalLookupInterface, TranslatorInterface

logger = get_logger(__name__)


class TranslationOrchestrator:
    """Fetches translation and enrichment data for a word"""

    def __init__(
        self,
        translator: TranslatorInterface,
        lexical_lookup: LexicalLookupInterface,
        aggregator: LexicalInfoAggregator | None = None,
    ):
        self.translator = translator
        self.lexical_lookup = lexical_lookup
        self.aggregator = aggregator or LexicalInfoAggregator()

    def fetch_external_data(
        self, word: str, from_lang: Language, to_lang: Language
    ) -> ExternalData:
        """Translate `word` and enrich it.

        Raises:
            TranslationUnavailableError: the translation call failed
        """
        from_lang, to_lang = Language(from_lang), Language(to_lang)

        if from_lang is Language.EN:
            with ThreadPoolExecutor(max_workers=2) as pool:
                translation_future = pool.submit(
                    self.translator.translate, word, from_lang, to_lang
                )
                lookup_future = pool.submit(self.lexical_lookup.lookup, word)
                translation = self._require_translation(
                    translation_future.result(), word, from_lang, to_lang
                )
                lookup = lookup_future.result()
            english_word = word
        else:
            translation = self._require_translation(
                self.translator.translate(word, from_lang, to_lang),
                word,
                from_lang,
                to_lang,
            )
            english_word = translation
            lookup = self.lexical_lookup.lookup(english_word)

        return ExternalData(
            translation=translation,
            lexical_info=self._enrichment_or_none(lookup, english_word),
        )

    @staticmethod
    def _require_translation(
        result: ApiResult[str], word: str, from_lang: Language, to_lang: Language
    ) -> str:
        if not result.success or not result.data:
            raise TranslationUnavailableError(word, from_lang.value, to_lang.value)
        return result.data

    def _enrichment_or_none(
        self, result: ApiResult[list[DictionaryEntry]], english_word: str
    ) -> LexicalInfo | None:
        if result.success and result.data is not None:
            return self.aggregator.aggregate(result.data)

        error = LexicalLookupUnavailableError(
            english_word, result.error or "lookup failed"
        )
        logger.warning(f"{error}; creating card without enrichment")
        return None
