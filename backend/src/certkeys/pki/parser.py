"""Decoding of PEM encoded private keys."""

import logging
import re

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from certkeys.domain.states import PEMBlockType
from certkeys.pki.errors import KeyDecodeError, UnknownKeyTypeError
from certkeys.pki.keys import PrivateKey

logger = logging.getLogger(__name__)

_SUPPORTED_PRIVATE_KEYS = (
    rsa.RSAPrivateKey,
    ec.EllipticCurvePrivateKey,
    ed25519.Ed25519PrivateKey,
)

_PEM_BEGIN = re.compile(rb"-----BEGIN ([A-Z0-9 ]+)-----")


def pem_block_type(data: bytes) -> PEMBlockType:
    """Get the label of the first PEM block in ``data``.

    Raises:
        KeyDecodeError: If there is no PEM block or its label is not a private key label.
    """
    match = _PEM_BEGIN.search(data)
    if match is None:
        logger.error("private_key_decode_failed", extra={"error": "no PEM data found"})
        raise KeyDecodeError("error decoding private key PEM block: no PEM data found")

    label = match.group(1).decode("ascii")
    try:
        return PEMBlockType(label)
    except ValueError as e:
        logger.error("private_key_decode_failed", extra={"block_type": label})
        raise KeyDecodeError(f"unknown private key PEM block type: {label}") from e


def decode_private_key(data: bytes) -> PrivateKey:
    """Decode an unencrypted PEM private key in PKCS#1, SEC1 or PKCS#8 format.

    Args:
        data: PEM encoded private key.

    Returns:
        The decoded RSA, ECDSA or Ed25519 private key.

    Raises:
        KeyDecodeError: If the data is not a valid private key PEM block.
        UnknownKeyTypeError: If the key decodes to an unsupported type.
    """
    block_type = pem_block_type(data)

    try:
        key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.error(
            "private_key_decode_failed",
            extra={"block_type": block_type.value, "error": str(e)},
        )
        raise KeyDecodeError(f"error decoding {block_type.value} PEM block: {e}") from e

    if not isinstance(key, _SUPPORTED_PRIVATE_KEYS):
        logger.error("private_key_type_rejected", extra={"key_type": type(key).__name__})
        raise UnknownKeyTypeError(key)

    return key
