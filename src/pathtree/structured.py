from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from .errors import SchemaMismatch

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Parsed(Generic[T]):
    value: T

    @property
    def used_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class Fallback(Generic[T]):
    value: T
    reason: str

    @property
    def used_fallback(self) -> bool:
        return True


ParseOutcome = Union[Parsed[T], Fallback[T]]


def _decode(raw_text: str, adapter: TypeAdapter[Any]) -> Any:
    try:
        return adapter.validate_json(raw_text)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise SchemaMismatch(
            f"{exc.error_count()} validation error(s), first at {location}: {first['msg']}"
        ) from exc


def parse_structured(raw_text: str, schema: Any, fallback: Callable[[], T]) -> ParseOutcome[T]:
    """Decode generated text into ``schema`` or build a replacement.

    The raw text must be a complete JSON document of the expected shape;
    nothing is stripped or repaired. Any mismatch discards the text and
    returns ``fallback()``, which must only depend on the request inputs.
    """
    adapter = schema if isinstance(schema, TypeAdapter) else TypeAdapter(schema)
    try:
        value = _decode(raw_text, adapter)
    except SchemaMismatch as exc:
        logger.warning("Generated output rejected (%s); using fallback", exc)
        return Fallback(fallback(), reason=str(exc))
    return Parsed(value)
