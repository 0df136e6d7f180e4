"""JSON file persistence for cards and decks

Each collection lives in its own file under the data directory and is
rewritten in full before a mutation takes effect; a failed
write leaves the repository unchanged.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..exceptions import StorageError
from ..logging_config import get_logger
from ..models.card import Card
from ..models.deck import Deck
from .memory import InMemoryCardRepository, InMemoryDeckRepository

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

CARDS_FILE = "cards.json"
DECKS_FILE = "decks.json"


def _load_records(path: Path, model: type[M]) -> dict[str, M]:
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data: Any = json.load(f)
        records = TypeAdapter(list[model]).validate_python(data)  # type: ignore[valid-type]
    except (OSError, ValueError, ValidationError) as e:
        raise StorageError("load", str(path), e) from e
    logger.debug(f"Loaded {len(records)} records from {path}")
    return {record.id: record for record in records}  # type: ignore[attr-defined]


def _save_records(path: Path, records: list[BaseModel]) -> None:
    payload = [record.model_dump(mode="json") for record in records]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error(f"Failed to save {path}: {e}")
        raise StorageError("save", str(path), e) from e


class JsonCardRepository(InMemoryCardRepository):
    """Card repository persisted to ``<data_dir>/cards.json``"""

    def __init__(self, data_dir: Path):
        super().__init__()
        self.path = Path(data_dir) / CARDS_FILE
        self._cards = _load_records(self.path, Card)

    def _commit(self, cards: dict[str, Card]) -> None:
        _save_records(self.path, list(cards.values()))
        self._cards = cards


class JsonDeckRepository(InMemoryDeckRepository):
    """Deck repository persisted to ``<data_dir>/decks.json``"""

    def __init__(self, data_dir: Path):
        super().__init__()
        self.path = Path(data_dir) / DECKS_FILE
        self._decks = _load_records(self.path, Deck)

    def _commit(self, decks: dict[str, Deck]) -> None:
        _save_records(self.path, list(decks.values()))
        self._decks = decks
