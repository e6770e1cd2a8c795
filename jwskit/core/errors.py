"""Error taxonomy for token encoding, decoding, and claim validation."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Machine-readable failure kinds."""

    MALFORMED = "malformed"
    ALGORITHM_MISMATCH = "algorithm_mismatch"
    SIGNATURE_INVALID = "signature_invalid"
    INVALID_ISS = "invalid_iss"
    INVALID_SUB = "invalid_sub"
    INVALID_AUD = "invalid_aud"
    INVALID_JTI = "invalid_jti"
    INVALID_IAT = "invalid_iat"
    BEFORE_NBF = "before_nbf"
    EXPIRED = "expired"
    KEY_INVALID = "key_invalid"
    SIGNING = "signing"
    SERIALIZATION = "serialization"


class JWSError(Exception):
    """Base exception for every jwskit failure."""

    kind: ErrorKind
    default_message = "Token error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MalformedTokenError(JWSError):
    """Token framing, base64url, or JSON structure is invalid."""

    kind = ErrorKind.MALFORMED
    default_message = "Malformed token"


class AlgorithmMismatchError(JWSError):
    """Header alg does not match the algorithm of the verification key."""

    kind = ErrorKind.ALGORITHM_MISMATCH

    def __init__(self, expected: str, actual: str | None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Algorithm mismatch: expected {expected}, header declares {actual or 'none'}"
        )


class InvalidSignatureError(JWSError):
    kind = ErrorKind.SIGNATURE_INVALID
    default_message = "Invalid signature"


class KeyInvalidError(JWSError):
    kind = ErrorKind.KEY_INVALID
    default_message = "Invalid key"


class SigningError(JWSError):
    kind = ErrorKind.SIGNING
    default_message = "Signing failed"


class PayloadSerializationError(JWSError):
    kind = ErrorKind.SERIALIZATION
    default_message = "Cannot serialize token segment"


class ClaimsError(JWSError):
    """Base for claim validation failures."""


class InvalidIssuerError(ClaimsError):
    kind = ErrorKind.INVALID_ISS
    default_message = "Invalid iss"


class InvalidSubjectError(ClaimsError):
    kind = ErrorKind.INVALID_SUB
    default_message = "Invalid sub"


class InvalidAudienceError(ClaimsError):
    kind = ErrorKind.INVALID_AUD
    default_message = "Invalid aud"


class InvalidJWTIDError(ClaimsError):
    kind = ErrorKind.INVALID_JTI
    default_message = "Invalid jti"


class InvalidIssuedAtError(ClaimsError):
    kind = ErrorKind.INVALID_IAT
    default_message = "Token issued in the future"


class ImmatureTokenError(ClaimsError):
    kind = ErrorKind.BEFORE_NBF
    default_message = "Token used before nbf"


class ExpiredTokenError(ClaimsError):
    """Token expired; carries how far past expiry the check ran."""

    kind = ErrorKind.EXPIRED

    def __init__(self, seconds_past_expiry: int) -> None:
        self.seconds_past_expiry = seconds_past_expiry
        super().__init__(f"Token expired {seconds_past_expiry}s ago")
