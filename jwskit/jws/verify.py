"""Verification strategies plugged into ``decode``.

A strategy is any callable taking the signed bytes, the raw signature,
the parsed header, and the parsed payload; it returns None to accept and
raises to reject. Every key-based strategy checks the header's ``alg``
against the key's tag before touching the signature, and a header with
no ``alg`` never matches.
"""

from collections.abc import Callable, Iterable
from typing import Any, Protocol

import structlog

from jwskit.core.errors import AlgorithmMismatchError, InvalidSignatureError
from jwskit.crypto import algorithms
from jwskit.crypto.types import Key
from jwskit.jws.header import Header

logger = structlog.get_logger(__name__)

KeyResolver = Callable[[Header, Any], Key]


class Verifier(Protocol):
    def __call__(
        self, signing_input: bytes, signature: bytes, header: Header, payload: Any
    ) -> None: ...


def check_algorithm(header: Header, key: Key) -> None:
    """Reject unless the header declares exactly the key's algorithm."""
    if header.alg != key.alg.value:
        logger.debug("jws_algorithm_mismatch", expected=key.alg.value, actual=header.alg)
        raise AlgorithmMismatchError(key.alg.value, header.alg)


def verify_signature(
    signing_input: bytes, signature: bytes, header: Header, key: Key
) -> None:
    check_algorithm(header, key)
    try:
        algorithms.verify(signing_input, signature, key)
    except InvalidSignatureError:
        logger.debug("jws_signature_rejected", alg=key.alg.value, kid=header.kid)
        raise


class NoVerify:
    """Accept every token; for inspection only."""

    def __call__(
        self, signing_input: bytes, signature: bytes, header: Header, payload: Any
    ) -> None:
        return None


NO_VERIFY = NoVerify()


class VerifyWithKey:
    """Verify with one fixed key and its algorithm."""

    def __init__(self, key: Key) -> None:
        self._key = key

    def __call__(
        self, signing_input: bytes, signature: bytes, header: Header, payload: Any
    ) -> None:
        verify_signature(signing_input, signature, header, self._key)


class VerifyWithKeys:
    """Accept if any key whose algorithm matches the header verifies."""

    def __init__(self, keys: Iterable[Key]) -> None:
        self._keys = tuple(keys)

    def __call__(
        self, signing_input: bytes, signature: bytes, header: Header, payload: Any
    ) -> None:
        candidates = [key for key in self._keys if key.alg.value == header.alg]
        if not candidates:
            expected = ",".join(sorted({key.alg.value for key in self._keys}))
            logger.debug("jws_algorithm_mismatch", expected=expected, actual=header.alg)
            raise AlgorithmMismatchError(expected, header.alg)
        for key in candidates:
            try:
                algorithms.verify(signing_input, signature, key)
            except InvalidSignatureError:
                continue
            return
        logger.debug("jws_signature_rejected", alg=header.alg, kid=header.kid)
        raise InvalidSignatureError()


class VerifyWithResolver:
    """Resolve the key from the header and payload, e.g. by ``kid``.

    The resolver is called on every decode. A ``LookupError`` from it
    means no trusted key exists and is reported as an invalid signature.
    """

    def __init__(self, resolver: KeyResolver) -> None:
        self._resolver = resolver

    def __call__(
        self, signing_input: bytes, signature: bytes, header: Header, payload: Any
    ) -> None:
        try:
            key = self._resolver(header, payload)
        except LookupError as exc:
            logger.debug("jws_key_unresolved", kid=header.kid)
            raise InvalidSignatureError("No verification key for token") from exc
        verify_signature(signing_input, signature, header, key)
