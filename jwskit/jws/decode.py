"""Split, decode, and verify compact tokens."""

from collections.abc import Iterable
from typing import Any

from jwskit.claims.clock import Clock
from jwskit.claims.validate import ClaimsValidator
from jwskit.core.errors import MalformedTokenError
from jwskit.crypto.types import Key
from jwskit.jws.codec import b64url_decode, decode_json_segment
from jwskit.jws.header import Header
from jwskit.jws.token import Token
from jwskit.jws.verify import (
    NO_VERIFY,
    KeyResolver,
    Verifier,
    VerifyWithKey,
    VerifyWithKeys,
    VerifyWithResolver,
)


def _rsplit_dot(value: str) -> tuple[str, str]:
    """Split once on the last dot."""
    head, sep, tail = value.rpartition(".")
    if not sep:
        raise MalformedTokenError("Token must have three dot-separated segments")
    return head, tail


def _as_text(token: str | bytes) -> str:
    if isinstance(token, bytes):
        try:
            return token.decode("ascii")
        except UnicodeDecodeError as exc:
            raise MalformedTokenError("Token is not ASCII") from exc
    return token


def split_token(token: str | bytes) -> tuple[str, str, str]:
    """Return (header, payload, signature) segments, splitting from the right."""
    signing_input, signature = _rsplit_dot(_as_text(token))
    header, payload = _rsplit_dot(signing_input)
    return header, payload, signature


def get_unverified_header(token: str | bytes) -> Header:
    header_segment, _, _ = split_token(token)
    return decode_json_segment(header_segment, Header)


def decode(
    token: str | bytes,
    verifier: Verifier = NO_VERIFY,
    *,
    payload_type: Any = dict,
    claims: ClaimsValidator | None = None,
    clock: Clock | None = None,
) -> Token[Any]:
    """Decode ``token`` and run ``verifier``, then ``claims`` if given.

    Segments are decoded strictly in order (signature, header, payload)
    and the first failure is raised. The payload is validated into
    ``payload_type`` before the verifier sees it.
    """
    header_segment, payload_segment, signature_segment = split_token(token)
    signature = b64url_decode(signature_segment)
    header: Header = decode_json_segment(header_segment, Header)
    payload = decode_json_segment(payload_segment, payload_type)

    signing_input = f"{header_segment}.{payload_segment}".encode("ascii")
    verifier(signing_input, signature, header, payload)

    if claims is not None:
        claims.validate(payload, clock)
    return Token(header=header, payload=payload, signature=signature)


def decode_unverified(token: str | bytes, *, payload_type: Any = dict) -> Token[Any]:
    """Decode without checking the signature or claims."""
    return decode(token, NO_VERIFY, payload_type=payload_type)


def verify_with_key(
    token: str | bytes,
    key: Key,
    *,
    payload_type: Any = dict,
    claims: ClaimsValidator | None = None,
    clock: Clock | None = None,
) -> Token[Any]:
    return decode(
        token, VerifyWithKey(key), payload_type=payload_type, claims=claims, clock=clock
    )


def verify_with_keys(
    token: str | bytes,
    keys: Iterable[Key],
    *,
    payload_type: Any = dict,
    claims: ClaimsValidator | None = None,
    clock: Clock | None = None,
) -> Token[Any]:
    return decode(
        token, VerifyWithKeys(keys), payload_type=payload_type, claims=claims, clock=clock
    )


def verify_with_resolver(
    token: str | bytes,
    resolver: KeyResolver,
    *,
    payload_type: Any = dict,
    claims: ClaimsValidator | None = None,
    clock: Clock | None = None,
) -> Token[Any]:
    return decode(
        token,
        VerifyWithResolver(resolver),
        payload_type=payload_type,
        claims=claims,
        clock=clock,
    )
