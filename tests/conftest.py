"""Shared test fixtures for jwskit."""

from collections.abc import Callable, Iterator

import pytest
import structlog

from jwskit.crypto.keys import generate_keypair
from jwskit.crypto.types import Algorithm, KeyPair

FIXED_NOW = 1_700_000_000

_KEYPAIR_CACHE: dict[Algorithm, KeyPair] = {}


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep JWS_* settings from the host out of tests."""
    for name in (
        "JWS_TOKEN_TTL",
        "JWS_VERIFY_IAT",
        "JWS_VERIFY_NBF",
        "JWS_VERIFY_EXP",
        "JWS_LOG_LEVEL",
        "JWS_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    structlog.reset_defaults()


@pytest.fixture
def fixed_clock() -> Callable[[], int]:
    """A clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def keypair_for() -> Callable[[Algorithm], KeyPair]:
    """Return a cached keypair per algorithm; RSA generation is slow."""

    def _get(alg: Algorithm) -> KeyPair:
        if alg not in _KEYPAIR_CACHE:
            _KEYPAIR_CACHE[alg] = generate_keypair(alg)
        return _KEYPAIR_CACHE[alg]

    return _get
