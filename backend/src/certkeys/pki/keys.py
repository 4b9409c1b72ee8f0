"""Supported key variants and helpers to inspect them.

The package works with exactly three key algorithms. ``PrivateKey`` and
``PublicKey`` are closed unions over the corresponding ``cryptography``
key classes; every dispatch in the package branches over these three
variants and rejects anything else explicitly.
"""

import logging

from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from certkeys.domain.states import PrivateKeyAlgorithm
from certkeys.pki.errors import UnknownKeyTypeError

logger = logging.getLogger(__name__)

PrivateKey = rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey | ed25519.Ed25519PrivateKey
PublicKey = rsa.RSAPublicKey | ec.EllipticCurvePublicKey | ed25519.Ed25519PublicKey

# Sizes used when a spec leaves the size unset
DEFAULT_RSA_KEY_SIZE = 2048
DEFAULT_EC_KEY_SIZE = 256

# Ed25519 keys have a fixed 256-bit size
ED25519_KEY_SIZE = 256


def key_algorithm(key: object) -> PrivateKeyAlgorithm:
    """Get the algorithm of a supported private or public key.

    Raises:
        UnknownKeyTypeError: If the key is not RSA, ECDSA or Ed25519.
    """
    if isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        return PrivateKeyAlgorithm.RSA
    if isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        return PrivateKeyAlgorithm.ECDSA
    if isinstance(key, (ed25519.Ed25519PrivateKey, ed25519.Ed25519PublicKey)):
        return PrivateKeyAlgorithm.ED25519
    logger.error("private_key_type_rejected", extra={"key_type": type(key).__name__})
    raise UnknownKeyTypeError(key)


def key_size(key: object) -> int:
    """Get the size of a supported key: modulus bits, curve bits, or 256 for Ed25519."""
    if isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        return key.key_size
    if isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        return key.curve.key_size
    if isinstance(key, (ed25519.Ed25519PrivateKey, ed25519.Ed25519PublicKey)):
        return ED25519_KEY_SIZE
    logger.error("private_key_type_rejected", extra={"key_type": type(key).__name__})
    raise UnknownKeyTypeError(key)


def algorithm_name(key: object) -> str:
    """Get a short algorithm label for logs and metrics."""
    if isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        return f"RSA-{key.key_size}"
    elif isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        return f"ECDSA-{key.curve.name}"
    elif isinstance(key, (ed25519.Ed25519PrivateKey, ed25519.Ed25519PublicKey)):
        return "Ed25519"
    return "UNKNOWN"
