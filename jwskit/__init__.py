"""Signed compact tokens (JWS / JWT) with pluggable verification."""

from jwskit.claims.clock import Clock, now_secs
from jwskit.claims.types import Claims
from jwskit.claims.validate import ClaimsValidator, validate_claims
from jwskit.core.errors import (
    AlgorithmMismatchError,
    ClaimsError,
    ErrorKind,
    ExpiredTokenError,
    ImmatureTokenError,
    InvalidAudienceError,
    InvalidIssuedAtError,
    InvalidIssuerError,
    InvalidJWTIDError,
    InvalidSignatureError,
    InvalidSubjectError,
    JWSError,
    KeyInvalidError,
    MalformedTokenError,
    PayloadSerializationError,
    SigningError,
)
from jwskit.core.logging import configure_logging
from jwskit.core.settings import JWSSettings
from jwskit.crypto.jwt_manager import JWTManager
from jwskit.crypto.keys import (
    generate_keypair,
    load_signing_key,
    load_verifying_key,
)
from jwskit.crypto.types import Algorithm, Key, KeyPair
from jwskit.jws.decode import (
    decode,
    decode_unverified,
    get_unverified_header,
    verify_with_key,
    verify_with_keys,
    verify_with_resolver,
)
from jwskit.jws.encode import encode
from jwskit.jws.header import Header
from jwskit.jws.token import Token
from jwskit.jws.verify import (
    NO_VERIFY,
    KeyResolver,
    NoVerify,
    Verifier,
    VerifyWithKey,
    VerifyWithKeys,
    VerifyWithResolver,
)

__all__ = [
    "NO_VERIFY",
    "Algorithm",
    "AlgorithmMismatchError",
    "Claims",
    "ClaimsError",
    "ClaimsValidator",
    "Clock",
    "ErrorKind",
    "ExpiredTokenError",
    "Header",
    "ImmatureTokenError",
    "InvalidAudienceError",
    "InvalidIssuedAtError",
    "InvalidIssuerError",
    "InvalidJWTIDError",
    "InvalidSignatureError",
    "InvalidSubjectError",
    "JWSError",
    "JWSSettings",
    "JWTManager",
    "Key",
    "KeyInvalidError",
    "KeyPair",
    "KeyResolver",
    "MalformedTokenError",
    "NoVerify",
    "PayloadSerializationError",
    "SigningError",
    "Token",
    "Verifier",
    "VerifyWithKey",
    "VerifyWithKeys",
    "VerifyWithResolver",
    "configure_logging",
    "decode",
    "decode_unverified",
    "encode",
    "generate_keypair",
    "get_unverified_header",
    "load_signing_key",
    "load_verifying_key",
    "now_secs",
    "validate_claims",
    "verify_with_key",
    "verify_with_keys",
    "verify_with_resolver",
]
