"""Shared constants across the application"""


class SchedulerConstants:
    """Constants for the spaced repetition schedule"""

    MIN_STAGE = 0
    MAX_STAGE = 8

    # Hard reviews drop a card into one of these floors: (highest stage, new stage)
    HARD_REVIEW_FLOORS: tuple[tuple[int, int], ...] = ((2, 0), (4, 1), (6, 2))
    HARD_REVIEW_TOP_FLOOR = 3

    GOOD_REVIEW_STEP = 1
    EASY_REVIEW_STEP = 2

    # Due date is BASE ** stage days after today
    INTERVAL_BASE = 2


class DeckConstants:
    """Constants for deck handling"""

    REVERSED_SUFFIX = "-Reversed"
    MIN_NAME_LENGTH = 4


class HttpConstants:
    """Constants for outbound HTTP calls"""

    TRANSLATE_PATH = "/translate"
    DICTIONARY_ENTRIES_PATH = "/api/v2/entries/en/{word}"

    DEFAULT_HEADERS = {
        "Accept": "application/json",
        "User-Agent": "vocab-wizard/1.0",
    }
