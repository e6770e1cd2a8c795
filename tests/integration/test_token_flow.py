"""Integration test: issue and verify tokens across rotating keys."""

from collections.abc import Callable

import pytest

from jwskit import (
    Algorithm,
    AlgorithmMismatchError,
    Claims,
    ClaimsValidator,
    ExpiredTokenError,
    Header,
    InvalidAudienceError,
    InvalidSignatureError,
    JWTManager,
    Key,
    KeyPair,
    decode_unverified,
    encode,
    verify_with_resolver,
)

ISSUER = "https://issuer.example"
FIXED_NOW = 1_700_000_000


class _Clock:
    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock() -> _Clock:
    return _Clock(FIXED_NOW)


@pytest.fixture
def key_ring(keypair_for: Callable[[Algorithm], KeyPair]) -> dict[str, KeyPair]:
    """Three active keys of different families, looked up by kid."""
    pairs = [
        keypair_for(Algorithm.RS256),
        keypair_for(Algorithm.ES256),
        keypair_for(Algorithm.ED25519),
    ]
    return {kp.kid: kp for kp in pairs}


def _resolver(ring: dict[str, KeyPair]) -> Callable[[Header, object], Key]:
    def resolve(header: Header, payload: object) -> Key:
        return ring[header.kid or ""].verifying_key

    return resolve


class TestRotatingKeys:
    """Every active key verifies its own tokens through one resolver."""

    def test_each_key_verifies(self, key_ring: dict[str, KeyPair], clock: _Clock) -> None:
        validator = ClaimsValidator(issuer=ISSUER, audience="api")
        for kp in key_ring.values():
            mgr = JWTManager(kp, ISSUER, clock=clock)
            token = mgr.create_token(Claims(sub="user-1", aud="api"), ttl_seconds=300)
            decoded = verify_with_resolver(
                token, _resolver(key_ring), payload_type=Claims, claims=validator, clock=clock
            )
            assert decoded.header.kid == kp.kid
            assert decoded.header.alg == kp.alg.value
            assert decoded.payload.sub == "user-1"

    def test_retired_key_rejected(self, key_ring: dict[str, KeyPair], clock: _Clock) -> None:
        kid, kp = next(iter(key_ring.items()))
        token = JWTManager(kp, ISSUER, clock=clock).create_token()
        remaining = {k: v for k, v in key_ring.items() if k != kid}
        with pytest.raises(InvalidSignatureError):
            verify_with_resolver(token, _resolver(remaining))

    def test_kid_swap_is_algorithm_mismatch(
        self, key_ring: dict[str, KeyPair], clock: _Clock
    ) -> None:
        rsa_pair, ec_pair, _ = key_ring.values()
        forged_header = Header.new(kid=ec_pair.kid)
        token = JWTManager(rsa_pair, ISSUER, clock=clock).create_token()
        forged = encode(decode_unverified(token).payload, rsa_pair.signing_key, forged_header)
        with pytest.raises(AlgorithmMismatchError):
            verify_with_resolver(forged, _resolver(key_ring))


class TestLifetime:
    """Token lifetime as the clock advances."""

    def test_expires(self, keypair_for: Callable[[Algorithm], KeyPair], clock: _Clock) -> None:
        mgr = JWTManager(keypair_for(Algorithm.ES256), ISSUER, clock=clock)
        token = mgr.create_token(Claims(sub="user-1"), ttl_seconds=60)
        assert mgr.verify_token(token).sub == "user-1"

        clock.now = FIXED_NOW + 75
        with pytest.raises(ExpiredTokenError) as exc_info:
            mgr.verify_token(token)
        assert exc_info.value.seconds_past_expiry == 15

    def test_audience_required_when_expected(
        self, keypair_for: Callable[[Algorithm], KeyPair], clock: _Clock
    ) -> None:
        mgr = JWTManager(keypair_for(Algorithm.HS256), ISSUER, clock=clock)
        token = mgr.create_token(Claims(sub="user-1"))
        with pytest.raises(InvalidAudienceError):
            mgr.verify_token(token, audience="api")
