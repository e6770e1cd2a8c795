"""Algorithm registry: sign and verify dispatched on a key's algorithm tag.

Every algorithm pins one primitive, one hash, and one key shape. A key is
parsed strictly against the shape its tag requires before any
cryptographic call; there is no coercion between families.

Verification collapses every rejection (bad signature, unparseable key,
wrong curve, out-of-range modulus) into ``InvalidSignatureError`` so that
callers cannot tell a malformed signature from a wrong key.
"""

from collections.abc import Callable
from enum import StrEnum
from typing import NamedTuple

from cryptography.exceptions import InternalError, InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from jwskit.core.errors import InvalidSignatureError, KeyInvalidError, SigningError
from jwskit.crypto.types import Algorithm, Key

RSA_MIN_MODULUS_BITS = 2048
RSA_MAX_MODULUS_BITS = 8192


class Family(StrEnum):
    """Signature primitive family shared by several algorithms."""

    HMAC = "hmac"
    RSA_PKCS1 = "rsa-pkcs1"
    RSA_PSS = "rsa-pss"
    ECDSA = "ecdsa"
    EDDSA = "eddsa"


class AlgorithmSpec(NamedTuple):
    """Primitive parameters for one algorithm."""

    family: Family
    hash_type: type[hashes.HashAlgorithm] | None
    curve: type[ec.EllipticCurve] | None = None


REGISTRY: dict[Algorithm, AlgorithmSpec] = {
    Algorithm.HS256: AlgorithmSpec(Family.HMAC, hashes.SHA256),
    Algorithm.HS384: AlgorithmSpec(Family.HMAC, hashes.SHA384),
    Algorithm.HS512: AlgorithmSpec(Family.HMAC, hashes.SHA512),
    Algorithm.RS256: AlgorithmSpec(Family.RSA_PKCS1, hashes.SHA256),
    Algorithm.RS384: AlgorithmSpec(Family.RSA_PKCS1, hashes.SHA384),
    Algorithm.RS512: AlgorithmSpec(Family.RSA_PKCS1, hashes.SHA512),
    Algorithm.PS256: AlgorithmSpec(Family.RSA_PSS, hashes.SHA256),
    Algorithm.PS384: AlgorithmSpec(Family.RSA_PSS, hashes.SHA384),
    Algorithm.PS512: AlgorithmSpec(Family.RSA_PSS, hashes.SHA512),
    Algorithm.ES256: AlgorithmSpec(Family.ECDSA, hashes.SHA256, ec.SECP256R1),
    Algorithm.ES384: AlgorithmSpec(Family.ECDSA, hashes.SHA384, ec.SECP384R1),
    Algorithm.ED25519: AlgorithmSpec(Family.EDDSA, None),
}


def get_spec(alg: Algorithm) -> AlgorithmSpec:
    """Look up the primitive parameters for an algorithm."""
    return REGISTRY[Algorithm(alg)]


def _hash(spec: AlgorithmSpec) -> hashes.HashAlgorithm:
    assert spec.hash_type is not None
    return spec.hash_type()


def _rsa_padding(spec: AlgorithmSpec) -> padding.AsymmetricPadding:
    if spec.family is Family.RSA_PSS:
        return padding.PSS(
            mgf=padding.MGF1(_hash(spec)),
            salt_length=padding.PSS.DIGEST_LENGTH,
        )
    return padding.PKCS1v15()


def _rsa_modulus_in_range(key_size: int) -> bool:
    return RSA_MIN_MODULUS_BITS <= key_size <= RSA_MAX_MODULUS_BITS


def _signature_size(curve: ec.EllipticCurve) -> int:
    return (curve.key_size + 7) // 8


def _load_private_key(alg: Algorithm, der: bytes) -> object:
    try:
        return serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyInvalidError(f"{alg} signing key is not a DER private key") from exc


# -- signing


def _sign_hmac(spec: AlgorithmSpec, alg: Algorithm, message: bytes, key: bytes) -> bytes:
    mac = hmac.HMAC(key, _hash(spec))
    mac.update(message)
    return mac.finalize()


def _sign_rsa(spec: AlgorithmSpec, alg: Algorithm, message: bytes, key: bytes) -> bytes:
    private_key = _load_private_key(alg, key)
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise KeyInvalidError(f"{alg} requires an RSA private key")
    if not _rsa_modulus_in_range(private_key.key_size):
        raise KeyInvalidError(
            f"RSA modulus of {private_key.key_size} bits is outside "
            f"{RSA_MIN_MODULUS_BITS}-{RSA_MAX_MODULUS_BITS}"
        )
    return private_key.sign(message, _rsa_padding(spec), _hash(spec))


def _sign_ecdsa(spec: AlgorithmSpec, alg: Algorithm, message: bytes, key: bytes) -> bytes:
    private_key = _load_private_key(alg, key)
    if not isinstance(private_key, ec.EllipticCurvePrivateKey):
        raise KeyInvalidError(f"{alg} requires an EC private key")
    assert spec.curve is not None
    if not isinstance(private_key.curve, spec.curve):
        raise KeyInvalidError(f"{alg} requires curve {spec.curve.name}")
    der_signature = private_key.sign(message, ec.ECDSA(_hash(spec)))
    r, s = decode_dss_signature(der_signature)
    size = _signature_size(private_key.curve)
    return r.to_bytes(size, "big") + s.to_bytes(size, "big")


def _sign_eddsa(spec: AlgorithmSpec, alg: Algorithm, message: bytes, key: bytes) -> bytes:
    private_key = _load_private_key(alg, key)
    if not isinstance(private_key, ed25519.Ed25519PrivateKey):
        raise KeyInvalidError(f"{alg} requires an Ed25519 private key")
    return private_key.sign(message)


# -- verification; every helper raises InvalidSignature on any rejection


def _verify_hmac(
    spec: AlgorithmSpec, message: bytes, signature: bytes, key: bytes
) -> None:
    mac = hmac.HMAC(key, _hash(spec))
    mac.update(message)
    mac.verify(signature)


def _verify_rsa(
    spec: AlgorithmSpec, message: bytes, signature: bytes, key: bytes
) -> None:
    try:
        public_key = serialization.load_der_public_key(key)
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise InvalidSignature from exc
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise InvalidSignature
    if not _rsa_modulus_in_range(public_key.key_size):
        raise InvalidSignature
    public_key.verify(signature, message, _rsa_padding(spec), _hash(spec))


def _verify_ecdsa(
    spec: AlgorithmSpec, message: bytes, signature: bytes, key: bytes
) -> None:
    assert spec.curve is not None
    curve = spec.curve()
    size = _signature_size(curve)
    if len(signature) != 2 * size:
        raise InvalidSignature
    try:
        public_key = ec.EllipticCurvePublicKey.from_encoded_point(curve, key)
    except ValueError as exc:
        raise InvalidSignature from exc
    r = int.from_bytes(signature[:size], "big")
    s = int.from_bytes(signature[size:], "big")
    public_key.verify(encode_dss_signature(r, s), message, ec.ECDSA(_hash(spec)))


def _verify_eddsa(
    spec: AlgorithmSpec, message: bytes, signature: bytes, key: bytes
) -> None:
    try:
        public_key = ed25519.Ed25519PublicKey.from_public_bytes(key)
    except ValueError as exc:
        raise InvalidSignature from exc
    public_key.verify(signature, message)


_SIGNERS: dict[Family, Callable[[AlgorithmSpec, Algorithm, bytes, bytes], bytes]] = {
    Family.HMAC: _sign_hmac,
    Family.RSA_PKCS1: _sign_rsa,
    Family.RSA_PSS: _sign_rsa,
    Family.ECDSA: _sign_ecdsa,
    Family.EDDSA: _sign_eddsa,
}

_VERIFIERS: dict[Family, Callable[[AlgorithmSpec, bytes, bytes, bytes], None]] = {
    Family.HMAC: _verify_hmac,
    Family.RSA_PKCS1: _verify_rsa,
    Family.RSA_PSS: _verify_rsa,
    Family.ECDSA: _verify_ecdsa,
    Family.EDDSA: _verify_eddsa,
}


def sign(message: bytes, key: Key) -> bytes:
    """Sign ``message`` with the algorithm the key is tagged with."""
    spec = get_spec(key.alg)
    try:
        return _SIGNERS[spec.family](spec, key.alg, message, key.value)
    except (ValueError, TypeError, InternalError) as exc:
        raise SigningError(f"{key.alg} signing failed") from exc


def verify(message: bytes, signature: bytes, key: Key) -> None:
    """Verify ``signature`` over ``message``; raise InvalidSignatureError on rejection."""
    spec = get_spec(key.alg)
    try:
        _VERIFIERS[spec.family](spec, message, signature, key.value)
    except (InvalidSignature, ValueError, TypeError) as exc:
        raise InvalidSignatureError from exc
