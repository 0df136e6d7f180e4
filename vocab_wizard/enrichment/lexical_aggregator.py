"""Merge dictionary lookups into a single card enrichment record.

Design:
- Phonetic text and audio link always come from the same variant
- Definitions and examples keep the order of the response
- Synonyms/antonyms are deduplicated across every meaning of every entry
  and kept only on the first meaning, in first-seen order
"""

from __future__ import annotations

from ..logging_config import get_logger
from ..models.dictionary import DictionaryEntry, LexicalInfo, Meaning

logger = get_logger(__name__)


class LexicalInfoAggregator:
    """Extracts phonetics, definitions, examples and word relations"""

    @staticmethod
    def extract_phonetic(entry: DictionaryEntry) -> tuple[str | None, str | None]:
        """Return (phonetic, audio_link) for one entry.

        The first variant carrying audio wins; without one the entry's
        top-level transcription is used and there is no audio.
        """
        audio_variant = next((p for p in entry.phonetics if p.audio), None)
        if audio_variant:
            return audio_variant.text, audio_variant.audio
        return entry.phonetic, None

    @staticmethod
    def remove_duplicates(meanings: list[Meaning]) -> None:
        """Collect unique synonyms/antonyms onto the first meaning, clear the rest"""
        all_synonyms: list[str] = []
        all_antonyms: list[str] = []
        for meaning in meanings:
            all_synonyms.extend(meaning.synonyms)
            all_antonyms.extend(meaning.antonyms)

        unique_synonyms = list(dict.fromkeys(all_synonyms))
        unique_antonyms = list(dict.fromkeys(all_antonyms))

        for i, meaning in enumerate(meanings):
            if i == 0:
                meaning.synonyms = unique_synonyms
                meaning.antonyms = unique_antonyms
            else:
                meaning.synonyms = []
                meaning.antonyms = []

    def extract_information(self, entry: DictionaryEntry) -> LexicalInfo:
        """Build the enrichment record for a single dictionary entry"""
        phonetic, audio_link = self.extract_phonetic(entry)
        info = LexicalInfo(phonetic=phonetic, audio_link=audio_link)
        self._collect_meanings(entry.meanings, info)
        return info

    def aggregate(self, entries: list[DictionaryEntry]) -> LexicalInfo | None:
        """Merge every entry of one lookup into a single record"""
        if not entries:
            return None

        # Work on copies; deduplication rewrites the meaning lists
        entries = [entry.model_copy(deep=True) for entry in entries]
        self.remove_duplicates([m for entry in entries for m in entry.meanings])

        phonetic, audio_link = None, None
        for entry in entries:
            variant = next((p for p in entry.phonetics if p.audio), None)
            if variant:
                phonetic, audio_link = variant.text, variant.audio
                break
        else:
            phonetic = next((e.phonetic for e in entries if e.phonetic), None)

        info = LexicalInfo(phonetic=phonetic, audio_link=audio_link)
        for entry in entries:
            self._collect_meanings(entry.meanings, info)

        logger.debug(
            f"Aggregated {len(entries)} entries: {len(info.definitions)} definitions, "
            f"{len(info.examples)} examples"
        )
        return info

    @staticmethod
    def _collect_meanings(meanings: list[Meaning], info: LexicalInfo) -> None:
        for meaning in meanings:
            info.synonyms.extend(meaning.synonyms)
            info.antonyms.extend(meaning.antonyms)
            for sense in meaning.definitions:
                info.definitions.append(sense.definition)
                if sense.example:
                    info.examples.append(sense.example)
