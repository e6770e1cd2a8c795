"""Token triple of header, payload, and signature."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from jwskit.crypto.types import Key
from jwskit.jws.encode import encode
from jwskit.jws.header import Header

P = TypeVar("P")


class Token(BaseModel, Generic[P]):
    """A JWS token; ``signature`` is empty until decoded from a signed string."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    header: Header
    payload: P
    signature: bytes = b""

    @classmethod
    def with_payload(cls, payload: Any) -> "Token[Any]":
        """Create an unsigned token with a JWT-typed header."""
        return cls(header=Header.new(), payload=payload)

    @classmethod
    def with_header_and_payload(cls, header: Header, payload: Any) -> "Token[Any]":
        return cls(header=header, payload=payload)

    def sign(self, key: Key) -> str:
        """Sign the header and payload with ``key``; return the compact token."""
        return encode(self.payload, key, self.header)
