"""base64url and JSON codec for compact token segments."""

import base64
import re
from functools import lru_cache
from typing import Any

import pydantic_core
from pydantic import BaseModel, TypeAdapter, ValidationError

from jwskit.core.errors import MalformedTokenError, PayloadSerializationError

_B64URL_SEGMENT = re.compile(r"[A-Za-z0-9_-]*")


def b64url_encode(data: bytes) -> str:
    """Base64url encode without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(segment: str) -> bytes:
    """Strictly decode unpadded base64url; anything else is malformed."""
    if not _B64URL_SEGMENT.fullmatch(segment) or len(segment) % 4 == 1:
        raise MalformedTokenError("Segment is not valid base64url")
    padded = segment + "=" * (-len(segment) % 4)
    data = base64.urlsafe_b64decode(padded)
    if b64url_encode(data) != segment:
        raise MalformedTokenError("Segment has non-canonical trailing bits")
    return data


def encode_json_segment(value: Any) -> str:
    """Compact-JSON serialize a value, omitting None fields, then base64url it."""
    try:
        if isinstance(value, BaseModel):
            raw = value.model_dump_json(exclude_none=True).encode("utf-8")
        else:
            raw = pydantic_core.to_json(value, exclude_none=True)
    except pydantic_core.PydanticSerializationError as exc:
        raise PayloadSerializationError(str(exc)) from exc
    return b64url_encode(raw)


@lru_cache(maxsize=128)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def decode_json_segment(segment: str, target: Any) -> Any:
    """Decode a base64url JSON segment into ``target`` (a type pydantic can validate)."""
    raw = b64url_decode(segment)
    try:
        return _adapter(target).validate_json(raw)
    except ValidationError as exc:
        raise MalformedTokenError(
            f"Segment is not valid JSON for {getattr(target, '__name__', target)}"
        ) from exc
