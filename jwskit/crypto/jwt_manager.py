"""Issuer-bound token creation and verification for one key pair."""

from jwskit.claims.clock import Clock, now_secs
from jwskit.claims.types import Claims
from jwskit.claims.validate import ClaimsValidator
from jwskit.core.settings import JWSSettings
from jwskit.crypto.types import KeyPair
from jwskit.jws.decode import decode
from jwskit.jws.encode import encode
from jwskit.jws.header import Header
from jwskit.jws.verify import VerifyWithKey


class JWTManager:
    """Creates and verifies signed JWTs for a single issuer and key pair."""

    def __init__(
        self,
        key_pair: KeyPair,
        issuer: str,
        settings: JWSSettings | None = None,
        clock: Clock = now_secs,
    ) -> None:
        self._key_pair = key_pair
        self._issuer = issuer
        self._settings = settings or JWSSettings()
        self._clock = clock

    @property
    def kid(self) -> str:
        return self._key_pair.kid

    def create_token(
        self, claims: Claims | None = None, ttl_seconds: int | None = None
    ) -> str:
        """Stamp iss/iat/exp (and a jti if missing) and sign with the key pair."""
        now = self._clock()
        ttl = self._settings.token_ttl if ttl_seconds is None else ttl_seconds
        stamped = (claims or Claims()).model_copy(
            update={"iss": self._issuer, "iat": now, "exp": max(0, now + ttl)}
        )
        if stamped.jti is None:
            stamped = stamped.with_random_jti()
        return encode(
            stamped,
            self._key_pair.signing_key,
            Header.new(kid=self._key_pair.kid),
        )

    def verify_token(
        self,
        token: str,
        audience: str | None = None,
        subject: str | None = None,
    ) -> Claims:
        """Verify signature, issuer, optional audience/subject, and time claims."""
        validator = ClaimsValidator.from_settings(
            self._settings,
            issuer=self._issuer,
            audience=audience,
            subject=subject,
        )
        decoded = decode(
            token,
            VerifyWithKey(self._key_pair.verifying_key),
            payload_type=Claims,
            claims=validator,
            clock=self._clock,
        )
        return decoded.payload
