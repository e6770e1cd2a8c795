"""Key pair generation and PEM loading for every algorithm family."""

import secrets

import uuid_utils
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.hazmat.primitives.asymmetric.types import (
    PrivateKeyTypes,
    PublicKeyTypes,
)

from jwskit.core.errors import KeyInvalidError
from jwskit.crypto.algorithms import Family, get_spec
from jwskit.crypto.types import Algorithm, Key, KeyPair

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537


def _new_kid() -> str:
    return str(uuid_utils.uuid7())


def _private_der(private_key: PrivateKeyTypes) -> bytes:
    return private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def _public_bytes(alg: Algorithm, public_key: PublicKeyTypes) -> bytes:
    """Encode a public key the way ``alg`` expects it for verification."""
    family = get_spec(alg).family
    if family in (Family.RSA_PKCS1, Family.RSA_PSS):
        if not isinstance(public_key, rsa.RSAPublicKey):
            raise KeyInvalidError(f"{alg} requires an RSA public key")
        return public_key.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    if family is Family.ECDSA:
        curve = get_spec(alg).curve
        assert curve is not None
        if not isinstance(public_key, ec.EllipticCurvePublicKey) or not isinstance(
            public_key.curve, curve
        ):
            raise KeyInvalidError(f"{alg} requires an EC public key on its curve")
        return public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint,
        )
    if family is Family.EDDSA:
        if not isinstance(public_key, ed25519.Ed25519PublicKey):
            raise KeyInvalidError(f"{alg} requires an Ed25519 public key")
        return public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
    raise KeyInvalidError(f"{alg} has no public key")


def _keypair(alg: Algorithm, private_key: PrivateKeyTypes) -> KeyPair:
    return KeyPair(
        kid=_new_kid(),
        signing_key=Key(alg=alg, value=_private_der(private_key)),
        verifying_key=Key(alg=alg, value=_public_bytes(alg, private_key.public_key())),
    )


def generate_hmac_key(alg: Algorithm = Algorithm.HS256) -> KeyPair:
    """Generate a random shared secret as long as the algorithm's digest."""
    spec = get_spec(alg)
    if spec.family is not Family.HMAC:
        raise KeyInvalidError(f"{alg} is not an HMAC algorithm")
    assert spec.hash_type is not None
    key = Key(alg=alg, value=secrets.token_bytes(spec.hash_type.digest_size))
    return KeyPair(kid=_new_kid(), signing_key=key, verifying_key=key)


def generate_rsa_keypair(
    alg: Algorithm = Algorithm.RS256, key_size: int = RSA_KEY_SIZE
) -> KeyPair:
    """Generate an RSA keypair for an RS* or PS* algorithm."""
    if get_spec(alg).family not in (Family.RSA_PKCS1, Family.RSA_PSS):
        raise KeyInvalidError(f"{alg} is not an RSA algorithm")
    private_key = rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=key_size,
    )
    return _keypair(alg, private_key)


def generate_ec_keypair(alg: Algorithm = Algorithm.ES256) -> KeyPair:
    """Generate an EC keypair on the curve ``alg`` is bound to."""
    spec = get_spec(alg)
    if spec.family is not Family.ECDSA:
        raise KeyInvalidError(f"{alg} is not an ECDSA algorithm")
    assert spec.curve is not None
    return _keypair(alg, ec.generate_private_key(spec.curve()))


def generate_ed25519_keypair() -> KeyPair:
    return _keypair(Algorithm.ED25519, ed25519.Ed25519PrivateKey.generate())


def generate_keypair(alg: Algorithm) -> KeyPair:
    """Generate a fresh keypair (or shared secret) for any algorithm."""
    family = get_spec(alg).family
    if family is Family.HMAC:
        return generate_hmac_key(alg)
    if family is Family.ECDSA:
        return generate_ec_keypair(alg)
    if family is Family.EDDSA:
        return generate_ed25519_keypair()
    return generate_rsa_keypair(alg)


def _as_bytes(pem: str | bytes) -> bytes:
    return pem.encode() if isinstance(pem, str) else pem


def load_signing_key(alg: Algorithm, private_key_pem: str | bytes) -> Key:
    """Convert a PEM private key into the PKCS8 DER signing key for ``alg``."""
    if get_spec(alg).family is Family.HMAC:
        raise KeyInvalidError("HMAC secrets are raw bytes, not PEM; use Key.hmac")
    try:
        private_key = serialization.load_pem_private_key(
            _as_bytes(private_key_pem), password=None
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyInvalidError("Cannot parse PEM private key") from exc
    # Fails if the key's type or curve does not belong to alg.
    _public_bytes(alg, private_key.public_key())
    return Key(alg=alg, value=_private_der(private_key))


def load_verifying_key(alg: Algorithm, pem: str | bytes) -> Key:
    """Convert a PEM public (or private) key into the verifying key for ``alg``."""
    if get_spec(alg).family is Family.HMAC:
        raise KeyInvalidError("HMAC secrets are raw bytes, not PEM; use Key.hmac")
    data = _as_bytes(pem)
    public_key: PublicKeyTypes
    try:
        public_key = serialization.load_pem_public_key(data)
    except (ValueError, UnsupportedAlgorithm):
        try:
            public_key = serialization.load_pem_private_key(
                data, password=None
            ).public_key()
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise KeyInvalidError("Cannot parse PEM key") from exc
    return Key(alg=alg, value=_public_bytes(alg, public_key))
