"""Explicit validation pass for incoming payloads"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import DeckValidationError

M = TypeVar("M", bound=BaseModel)


def validate_payload(model: type[M], data: M | dict[str, Any]) -> M:
    """Validate raw data against a payload model.

    Pydantic errors are reported as DeckValidationError naming the first
    offending field, so callers deal with a single exception family.
    """
    if isinstance(data, model):
        data = data.model_dump()
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or model.__name__
        raise DeckValidationError(field, first.get("msg", "invalid value")) from e
