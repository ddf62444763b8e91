"""
JSON codec for persisted collections.

Records are stored as a JSON array of objects keyed by the models' aliases,
so a model configured with ``STORED_RECORD_CONFIG`` writes ``correct_count``
as ``correctCount``. Timestamps are ISO-8601 strings and optional fields
that are unset are left out of the record.
"""
import json
from typing import Iterable, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from studycards.utils.exceptions import DeserializationError

M = TypeVar("M", bound=BaseModel)


def dump_records(items: Iterable[BaseModel]) -> str:
    """Serialize models to a JSON array string"""
    records = [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in items]
    return json.dumps(records, ensure_ascii=False, indent=2)


def load_records(raw: str, model: Type[M]) -> List[M]:
    """Parse a JSON array string back into models.

    Raises:
        DeserializationError: if the text is not a JSON array of valid records
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise DeserializationError(f"Stored data is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise DeserializationError(f"Expected a JSON array, got {type(data).__name__}")

    try:
        return [model.model_validate(record) for record in data]
    except ValidationError as e:
        raise DeserializationError(f"Invalid {model.__name__} record: {e}") from e
