"""JSON encoding and decoding for request and response bodies."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_json

from ..errors import DecodingFailedError, EncodingFailedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@lru_cache(maxsize=256)
def _type_adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def _preview(data: bytes, limit: int = 512) -> str:
    text = data.decode("utf-8", errors="replace")
    return text if len(text) <= limit else f"{text[:limit]}..."


class JsonCodec:
    """
    Encoder/decoder pair used by APIService.

    Encoding goes through pydantic-core, so pydantic models, dataclasses,
    datetimes (ISO-8601) and plain containers all serialize without extra
    hooks. Typed decoding validates in strict mode against any type pydantic
    understands: keys are matched as-is, values are never coerced across
    JSON types, and datetimes accept only ISO-8601 strings (fractional
    seconds allowed).

    Example:
        codec = JsonCodec()
        user = codec.decode(b'{"id": 1, "name": "Ann"}', User)
    """

    def encode(self, value: Any) -> bytes:
        """
        Serialize a request body to JSON bytes.

        Raises:
            EncodingFailedError: If the value is not serializable or contains
                a reference cycle
        """
        try:
            return to_json(value)
        except (ValueError, TypeError) as e:
            logger.error(f"Encoding error: {e}")
            raise EncodingFailedError(e) from e

    def decode(self, data: bytes, response_type: type[T]) -> T:
        """
        Decode JSON bytes into ``response_type``.

        Raises:
            DecodingFailedError: On malformed JSON or schema mismatch
        """
        try:
            adapter = _type_adapter(response_type)
        except TypeError:
            # Unhashable type expressions skip the cache
            adapter = TypeAdapter(response_type)
        try:
            return adapter.validate_json(data, strict=True)  # type: ignore[no-any-return]
        except ValidationError as e:
            logger.error(f"Decoding error: {e} | Data: {_preview(data)}")
            raise DecodingFailedError(e) from e

    def parse(self, data: bytes) -> Any:
        """
        Parse JSON bytes into plain Python values with no schema.

        Raises:
            DecodingFailedError: If the body is not valid JSON
        """
        try:
            return json.loads(data)
        except (ValueError, UnicodeDecodeError) as e:
            logger.error(f"Decoding error: {e} | Data: {_preview(data)}")
            raise DecodingFailedError(e) from e
