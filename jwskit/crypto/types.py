"""Type definitions for algorithms, signing keys, and key pairs."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from jwskit.core.errors import KeyInvalidError

_ASYMMETRIC_KEY_MARKERS = (
    b"-----BEGIN ",
    b"ssh-rsa ",
    b"ssh-ed25519 ",
    b"ecdsa-sha2-",
)


class Algorithm(StrEnum):
    """Closed set of JWS algorithms; values are the header `alg` names."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ED25519 = "Ed25519"

    @property
    def is_symmetric(self) -> bool:
        return self.value.startswith("HS")


class Key(BaseModel):
    """Key bytes tagged with the only algorithm they may be used with.

    The encoding of ``value`` is fixed by ``alg``: raw secret for HS*,
    PKCS8 DER private keys for signing, and DER / SEC1 point / raw bytes
    public keys for RSA / ECDSA / Ed25519 verification.
    """

    model_config = ConfigDict(frozen=True)

    alg: Algorithm
    value: bytes = Field(repr=False)

    @field_validator("value", mode="before")
    @classmethod
    def _encode_text(cls, value: object) -> object:
        if isinstance(value, str):
            return value.encode("utf-8")
        return value

    @model_validator(mode="after")
    def _reject_asymmetric_secret(self) -> "Key":
        if self.alg.is_symmetric and self.value.lstrip().startswith(
            _ASYMMETRIC_KEY_MARKERS
        ):
            raise KeyInvalidError(
                f"{self.alg} secret looks like an asymmetric key; refusing to use it"
            )
        return self

    @classmethod
    def hmac(cls, secret: str | bytes, alg: Algorithm = Algorithm.HS256) -> "Key":
        """Build an HMAC key from a shared secret."""
        if not alg.is_symmetric:
            raise KeyInvalidError(f"{alg} is not an HMAC algorithm")
        return cls(alg=alg, value=secret)


class KeyPair(BaseModel):
    """A signing / verifying key pair for one algorithm."""

    model_config = ConfigDict(frozen=True)

    kid: str
    signing_key: Key
    verifying_key: Key

    @property
    def alg(self) -> Algorithm:
        return self.signing_key.alg
