from enum import StrEnum


class PrivateKeyAlgorithm(StrEnum):
    """Key algorithms a certificate can request. Empty selector means RSA."""

    RSA = "RSA"
    ECDSA = "ECDSA"
    ED25519 = "Ed25519"


class PrivateKeyEncoding(StrEnum):
    """Container formats for an encoded private key. Empty selector means PKCS1."""

    PKCS1 = "PKCS1"  # Legacy, algorithm specific
    PKCS8 = "PKCS8"  # Generic


class PEMBlockType(StrEnum):
    """PEM envelope labels produced by the encoder."""

    RSA_PRIVATE_KEY = "RSA PRIVATE KEY"
    EC_PRIVATE_KEY = "EC PRIVATE KEY"
    PRIVATE_KEY = "PRIVATE KEY"
