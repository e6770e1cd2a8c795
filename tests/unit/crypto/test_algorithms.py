"""Tests for the algorithm registry."""

from collections.abc import Callable

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from jwskit.core.errors import InvalidSignatureError, KeyInvalidError
from jwskit.crypto.algorithms import REGISTRY, sign, verify
from jwskit.crypto.types import Algorithm, Key, KeyPair

MESSAGE = b"eyJ0eXAiOiJKV1QifQ.eyJpc3MiOiJzZWEifQ"

KeyPairFactory = Callable[[Algorithm], KeyPair]


def _pkcs8(private_key: rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey) -> bytes:
    return private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


class TestRegistry:
    """Tests for the closed algorithm set."""

    def test_every_algorithm_registered(self) -> None:
        assert set(REGISTRY) == set(Algorithm)

    def test_header_names(self) -> None:
        assert Algorithm.HS256.value == "HS256"
        assert Algorithm.ED25519.value == "Ed25519"
        assert Algorithm("PS384") is Algorithm.PS384


class TestSignVerify:
    """Round trips for each algorithm."""

    @pytest.mark.parametrize("alg", list(Algorithm))
    def test_roundtrip(self, alg: Algorithm, keypair_for: KeyPairFactory) -> None:
        kp = keypair_for(alg)
        signature = sign(MESSAGE, kp.signing_key)
        verify(MESSAGE, signature, kp.verifying_key)

    @pytest.mark.parametrize("alg", list(Algorithm))
    def test_altered_message_rejected(
        self, alg: Algorithm, keypair_for: KeyPairFactory
    ) -> None:
        kp = keypair_for(alg)
        signature = sign(MESSAGE, kp.signing_key)
        with pytest.raises(InvalidSignatureError):
            verify(MESSAGE + b"x", signature, kp.verifying_key)

    @pytest.mark.parametrize("alg", list(Algorithm))
    def test_truncated_signature_rejected(
        self, alg: Algorithm, keypair_for: KeyPairFactory
    ) -> None:
        kp = keypair_for(alg)
        signature = sign(MESSAGE, kp.signing_key)
        with pytest.raises(InvalidSignatureError):
            verify(MESSAGE, signature[:-1], kp.verifying_key)


class TestHMAC:
    """Tests for the symmetric family."""

    def test_deterministic(self) -> None:
        key = Key.hmac("secret")
        assert sign(MESSAGE, key) == sign(MESSAGE, key)

    def test_digest_sizes(self) -> None:
        assert len(sign(MESSAGE, Key.hmac("s", Algorithm.HS256))) == 32
        assert len(sign(MESSAGE, Key.hmac("s", Algorithm.HS384))) == 48
        assert len(sign(MESSAGE, Key.hmac("s", Algorithm.HS512))) == 64

    def test_wrong_secret_rejected(self) -> None:
        signature = sign(MESSAGE, Key.hmac("secret"))
        with pytest.raises(InvalidSignatureError):
            verify(MESSAGE, signature, Key.hmac("other"))


class TestRSA:
    """Tests for RS* and PS*."""

    def test_pss_is_randomized(self, keypair_for: KeyPairFactory) -> None:
        kp = keypair_for(Algorithm.PS256)
        first = sign(MESSAGE, kp.signing_key)
        second = sign(MESSAGE, kp.signing_key)
        assert first != second
        verify(MESSAGE, first, kp.verifying_key)
        verify(MESSAGE, second, kp.verifying_key)

    def test_pkcs1_is_deterministic(self, keypair_for: KeyPairFactory) -> None:
        kp = keypair_for(Algorithm.RS256)
        assert sign(MESSAGE, kp.signing_key) == sign(MESSAGE, kp.signing_key)

    def test_small_modulus_signing_key_rejected(self) -> None:
        private_key = rsa.generate_private_key(public_exponent=65537, key_size=1024)
        key = Key(alg=Algorithm.RS256, value=_pkcs8(private_key))
        with pytest.raises(KeyInvalidError):
            sign(MESSAGE, key)

    def test_small_modulus_verifying_key_rejected(self) -> None:
        private_key = rsa.generate_private_key(public_exponent=65537, key_size=1024)
        public_der = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        signature = private_key.sign(MESSAGE, padding.PKCS1v15(), hashes.SHA256())
        with pytest.raises(InvalidSignatureError):
            verify(MESSAGE, signature, Key(alg=Algorithm.RS256, value=public_der))

    def test_pkcs1_signature_does_not_verify_as_pss(
        self, keypair_for: KeyPairFactory
    ) -> None:
        kp = keypair_for(Algorithm.RS256)
        signature = sign(MESSAGE, kp.signing_key)
        pss_key = Key(alg=Algorithm.PS256, value=kp.verifying_key.value)
        with pytest.raises(InvalidSignatureError):
            verify(MESSAGE, signature, pss_key)

    def test_ec_key_rejected_for_rsa(self) -> None:
        key = Key(alg=Algorithm.RS256, value=_pkcs8(ec.generate_private_key(ec.SECP256R1())))
        with pytest.raises(KeyInvalidError):
            sign(MESSAGE, key)


class TestECDSA:
    """Tests for ES256 / ES384."""

    def test_fixed_size_signatures(self, keypair_for: KeyPairFactory) -> None:
        assert len(sign(MESSAGE, keypair_for(Algorithm.ES256).signing_key)) == 64
        assert len(sign(MESSAGE, keypair_for(Algorithm.ES384).signing_key)) == 96

    def test_wrong_curve_signing_key_rejected(self) -> None:
        key = Key(alg=Algorithm.ES256, value=_pkcs8(ec.generate_private_key(ec.SECP384R1())))
        with pytest.raises(KeyInvalidError):
            sign(MESSAGE, key)

    def test_wrong_curve_verifying_key_rejected(
        self, keypair_for: KeyPairFactory
    ) -> None:
        signature = sign(MESSAGE, keypair_for(Algorithm.ES256).signing_key)
        p384_point = keypair_for(Algorithm.ES384).verifying_key.value
        with pytest.raises(InvalidSignatureError):
            verify(MESSAGE, signature, Key(alg=Algorithm.ES256, value=p384_point))


class TestEd25519:
    """Tests for EdDSA."""

    def test_public_key_is_32_bytes(self, keypair_for: KeyPairFactory) -> None:
        assert len(keypair_for(Algorithm.ED25519).verifying_key.value) == 32

    def test_signature_is_64_bytes(self, keypair_for: KeyPairFactory) -> None:
        assert len(sign(MESSAGE, keypair_for(Algorithm.ED25519).signing_key)) == 64


class TestMalformedKeys:
    """Garbage key bytes for each family."""

    @pytest.mark.parametrize(
        "alg", [a for a in Algorithm if not a.is_symmetric]
    )
    def test_garbage_signing_key(self, alg: Algorithm) -> None:
        with pytest.raises(KeyInvalidError):
            sign(MESSAGE, Key(alg=alg, value=b"not a key"))

    @pytest.mark.parametrize(
        "alg", [a for a in Algorithm if not a.is_symmetric]
    )
    def test_garbage_verifying_key(
        self, alg: Algorithm, keypair_for: KeyPairFactory
    ) -> None:
        signature = sign(MESSAGE, keypair_for(alg).signing_key)
        with pytest.raises(InvalidSignatureError):
            verify(MESSAGE, signature, Key(alg=alg, value=b"not a key"))
