"""Validation of time-based and identity claims.

Claims are read by name from the JSON form of any payload, so the same
policy applies to ``Claims``, plain dicts, and caller-defined models.

Checks run in a fixed order and the first failure is raised:
iss, aud, sub, jti, then nbf, iat, exp. A claim that is absent (or null)
is only an error when the caller expects a value for it.
"""

from typing import Any

import pydantic_core
import structlog
from pydantic import BaseModel, ConfigDict

from jwskit.claims.clock import Clock, now_secs
from jwskit.core.errors import (
    ClaimsError,
    ExpiredTokenError,
    ImmatureTokenError,
    InvalidAudienceError,
    InvalidIssuedAtError,
    InvalidIssuerError,
    InvalidJWTIDError,
    InvalidSubjectError,
    MalformedTokenError,
)
from jwskit.core.settings import JWSSettings

logger = structlog.get_logger(__name__)

_IDENTITY_CHECKS: tuple[tuple[str, str, type[ClaimsError]], ...] = (
    ("iss", "issuer", InvalidIssuerError),
    ("aud", "audience", InvalidAudienceError),
    ("sub", "subject", InvalidSubjectError),
    ("jti", "jwt_id", InvalidJWTIDError),
)


def claims_view(payload: Any) -> dict[str, Any]:
    """Project any serializable payload onto a JSON object."""
    try:
        view = pydantic_core.to_jsonable_python(payload)
    except pydantic_core.PydanticSerializationError as exc:
        raise MalformedTokenError("Payload cannot be read as claims") from exc
    if not isinstance(view, dict):
        raise MalformedTokenError("Payload is not a JSON object")
    return view


def _numeric_date(view: dict[str, Any], name: str) -> int | None:
    value = view.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MalformedTokenError(f"Claim '{name}' must be a non-negative integer")
    return value


class ClaimsValidator(BaseModel):
    """Caller expectations plus which time checks to run."""

    model_config = ConfigDict(frozen=True)

    issuer: str | None = None
    subject: str | None = None
    audience: str | None = None
    jwt_id: str | None = None
    verify_iat: bool = True
    verify_nbf: bool = True
    verify_exp: bool = True

    @classmethod
    def from_settings(
        cls, settings: JWSSettings | None = None, **expected: str | None
    ) -> "ClaimsValidator":
        """Build a validator whose time checks follow ``JWSSettings``."""
        settings = settings or JWSSettings()
        return cls(
            verify_iat=settings.verify_iat,
            verify_nbf=settings.verify_nbf,
            verify_exp=settings.verify_exp,
            **expected,
        )

    def validate(self, payload: Any, clock: Clock | None = None) -> None:
        """Raise the first failing claim's error; return None when all pass."""
        view = claims_view(payload)
        try:
            self._check(view, (clock or now_secs)())
        except ClaimsError as exc:
            logger.debug("claims_rejected", kind=exc.kind.value)
            raise

    def _check(self, view: dict[str, Any], now: int) -> None:
        for claim, field, error in _IDENTITY_CHECKS:
            expected = getattr(self, field)
            if expected is not None and view.get(claim) != expected:
                raise error()

        if self.verify_nbf:
            nbf = _numeric_date(view, "nbf")
            if nbf is not None and now < nbf:
                raise ImmatureTokenError()

        if self.verify_iat:
            iat = _numeric_date(view, "iat")
            if iat is not None and now < iat:
                raise InvalidIssuedAtError()

        if self.verify_exp:
            exp = _numeric_date(view, "exp")
            if exp is not None and now >= exp:
                raise ExpiredTokenError(now - exp)


def validate_claims(
    payload: Any,
    validator: ClaimsValidator | None = None,
    clock: Clock | None = None,
) -> None:
    """Validate ``payload`` with ``validator`` (time checks only by default)."""
    (validator or ClaimsValidator()).validate(payload, clock)
