"""Encode and sign compact tokens."""

from typing import Any

import structlog

from jwskit.crypto import algorithms
from jwskit.crypto.types import Key
from jwskit.jws.codec import b64url_encode, encode_json_segment
from jwskit.jws.header import Header

logger = structlog.get_logger(__name__)


def signing_input(header: Header, payload: Any) -> str:
    """Return ``base64url(header) + "." + base64url(payload)``, the signed bytes."""
    return f"{encode_json_segment(header)}.{encode_json_segment(payload)}"


def encode(payload: Any, key: Key, header: Header | None = None) -> str:
    """Sign ``payload`` with ``key`` and return the compact token.

    The header's ``alg`` is always overwritten with the key's algorithm.
    When no header is given a JWT-typed one is used.
    """
    stamped = (header if header is not None else Header.new()).with_algorithm(key.alg)
    message = signing_input(stamped, payload)
    signature = algorithms.sign(message.encode("ascii"), key)
    logger.debug("jws_encoded", alg=stamped.alg, kid=stamped.kid)
    return f"{message}.{b64url_encode(signature)}"
