"""JOSE header with the registered parameter names (RFC 7515 section 4.1)."""

from pydantic import BaseModel, ConfigDict

from jwskit.crypto.types import Algorithm

JWT_TYP = "JWT"


class Header(BaseModel):
    """Token header; ``alg`` is stamped by the encoder, never by the caller."""

    model_config = ConfigDict(frozen=True, extra="allow")

    typ: str | None = None
    alg: str | None = None
    cty: str | None = None
    jku: str | None = None
    kid: str | None = None
    x5u: str | None = None
    x5t: str | None = None

    @classmethod
    def new(cls, **params: str) -> "Header":
        """Create a header typed as a JWT."""
        return cls(typ=JWT_TYP, **params)

    def with_algorithm(self, alg: Algorithm) -> "Header":
        return self.model_copy(update={"alg": Algorithm(alg).value})
