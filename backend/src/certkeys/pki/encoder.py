"""PEM encoding of private keys and public key derivation.

Two container formats are supported:
- PKCS1, the legacy algorithm-specific containers: PKCS#1 for RSA
  ("RSA PRIVATE KEY") and SEC1 for ECDSA ("EC PRIVATE KEY").
- PKCS8, the generic container ("PRIVATE KEY") for every key type.

Ed25519 has no legacy container. Requesting PKCS1 for an Ed25519 key
produces PKCS8 output instead of failing.

Output is unencrypted PEM and is byte-identical for repeated calls with the
same key and encoding.
"""

import logging

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from certkeys.domain.states import PEMBlockType, PrivateKeyEncoding
from certkeys.metrics import key_metrics
from certkeys.pki.errors import UnknownEncodingError, UnknownKeyTypeError
from certkeys.pki.keys import PrivateKey, PublicKey

logger = logging.getLogger(__name__)

_SUPPORTED_PRIVATE_KEYS = (
    rsa.RSAPrivateKey,
    ec.EllipticCurvePrivateKey,
    ed25519.Ed25519PrivateKey,
)


def encode_private_key(key: object, encoding: str | None = None) -> bytes:
    """Encode a private key as PEM in the requested container format.

    Args:
        key: An RSA, ECDSA or Ed25519 private key.
        encoding: "PKCS1", "PKCS8", or empty/None for PKCS1.

    Returns:
        The PEM encoded key.

    Raises:
        UnknownEncodingError: If the encoding is not recognised.
        UnknownKeyTypeError: If the key type is not supported.
    """
    encoding = encoding or ""

    if encoding in ("", PrivateKeyEncoding.PKCS1):
        if isinstance(key, rsa.RSAPrivateKey):
            return encode_pkcs1_private_key(key)
        elif isinstance(key, ec.EllipticCurvePrivateKey):
            return encode_ec_private_key(key)
        elif isinstance(key, ed25519.Ed25519PrivateKey):
            # No legacy container exists for Ed25519
            logger.debug("ed25519_legacy_encoding_uses_pkcs8")
            return encode_pkcs8_private_key(key)
        raise _unknown_key_type(key, "error encoding private key: unknown key type")
    elif encoding == PrivateKeyEncoding.PKCS8:
        return encode_pkcs8_private_key(key)

    logger.error("private_key_encoding_rejected", extra={"encoding": encoding})
    raise UnknownEncodingError(encoding)


def encode_pkcs1_private_key(key: rsa.RSAPrivateKey) -> bytes:
    """Encode an RSA private key as a PKCS#1 "RSA PRIVATE KEY" PEM block."""
    pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    key_metrics.record_key_encoded(PEMBlockType.RSA_PRIVATE_KEY.value)
    return pem


def encode_ec_private_key(key: ec.EllipticCurvePrivateKey) -> bytes:
    """Encode an ECDSA private key as a SEC1 "EC PRIVATE KEY" PEM block.

    The structure carries the named curve and the public point.
    """
    pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    key_metrics.record_key_encoded(PEMBlockType.EC_PRIVATE_KEY.value)
    return pem


def encode_pkcs8_private_key(key: object) -> bytes:
    """Encode any supported private key as a PKCS#8 "PRIVATE KEY" PEM block.

    Raises:
        UnknownKeyTypeError: If the key type is not supported.
    """
    if not isinstance(key, _SUPPORTED_PRIVATE_KEYS):
        raise _unknown_key_type(key, "error encoding private key: unknown key type")

    pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    key_metrics.record_key_encoded(PEMBlockType.PRIVATE_KEY.value)
    return pem


def derive_public_key(key: object) -> PublicKey:
    """Get the public key for a supported private key.

    Raises:
        UnknownKeyTypeError: If the key type is not supported.
    """
    if isinstance(key, rsa.RSAPrivateKey):
        return key.public_key()
    elif isinstance(key, ec.EllipticCurvePrivateKey):
        return key.public_key()
    elif isinstance(key, ed25519.Ed25519PrivateKey):
        return key.public_key()
    raise _unknown_key_type(key, "unknown private key type")


def encode_public_key(key: PrivateKey | PublicKey) -> bytes:
    """Encode the public half of a key as a SubjectPublicKeyInfo "PUBLIC KEY" PEM block."""
    if isinstance(key, _SUPPORTED_PRIVATE_KEYS):
        key = derive_public_key(key)
    if not isinstance(key, (rsa.RSAPublicKey, ec.EllipticCurvePublicKey, ed25519.Ed25519PublicKey)):
        raise _unknown_key_type(key, "unknown public key type")

    return key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def _unknown_key_type(key: object, action: str) -> UnknownKeyTypeError:
    logger.error(
        "private_key_type_rejected",
        extra={"key_type": type(key).__name__, "action": action},
    )
    return UnknownKeyTypeError(key, action)
