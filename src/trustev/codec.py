"""JSON encoding and decoding at the wire boundary.

:func:`encode` turns request bodies into JSON text using each entity's
wire aliases, including server-assigned (frozen) fields. :func:`decode`
validates a response body against the expected shape -- an entity, a
``list`` of entities, or any other type pydantic can validate -- and
populates every declared field, frozen or not.

Decoding errors are not wrapped: malformed JSON or a body that does not
match the shape raises :class:`pydantic.ValidationError`.
"""

from __future__ import annotations

import functools
import json
from typing import Any

from pydantic import BaseModel, TypeAdapter


def _jsonable(body: Any) -> Any:  # noqa: ANN401
    """Convert models (recursively through lists and dicts) to JSON-ready data."""
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True)
    if isinstance(body, (list, tuple)):
        return [_jsonable(item) for item in body]
    if isinstance(body, dict):
        return {key: _jsonable(value) for key, value in body.items()}
    return body


def encode(body: Any) -> str:  # noqa: ANN401
    """Serialise a request body to JSON text.

    Strings are assumed to be JSON already and are returned unchanged.
    ``None`` encodes to an empty string.
    """
    if body is None:
        return ""
    if isinstance(body, str):
        return body
    return json.dumps(_jsonable(body), ensure_ascii=False, default=str)


@functools.lru_cache(maxsize=None)
def _adapter(shape: Any) -> TypeAdapter:  # noqa: ANN401
    return TypeAdapter(shape)


def decode(text: str, shape: Any = None) -> Any:  # noqa: ANN401
    """Decode a response body into *shape*.

    Args:
        text: The raw response body.
        shape: Target type, e.g. ``Case`` or ``list[CaseStatus]``. ``None``
            returns the plain decoded JSON.

    Returns:
        The validated value, or ``None`` for an empty body.

    Raises:
        pydantic.ValidationError: If the body is not valid JSON for *shape*.
    """
    if not text or not text.strip():
        return None
    if shape is None:
        return _adapter(Any).validate_json(text)
    return _adapter(shape).validate_json(text)
