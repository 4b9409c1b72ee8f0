"""Private key generation, encoding and matching for certificates.

This module provides:
- Key generation for RSA, ECDSA and Ed25519 from a certificate spec
- PEM encoding in PKCS#1/SEC1 or PKCS#8 containers, and decoding
- Public key comparison against keys, certificates and CSRs
"""

from certkeys.pki.encoder import derive_public_key, encode_private_key
from certkeys.pki.generator import (
    KeyGenerator,
    generate_ecdsa,
    generate_ed25519,
    generate_for_certificate,
    generate_rsa,
)
from certkeys.pki.matcher import (
    matches_certificate,
    matches_request,
    private_key_matches_spec,
    public_keys_equal,
)
from certkeys.pki.parser import decode_private_key

__all__ = [
    "KeyGenerator",
    "decode_private_key",
    "derive_public_key",
    "encode_private_key",
    "generate_ecdsa",
    "generate_ed25519",
    "generate_for_certificate",
    "generate_rsa",
    "matches_certificate",
    "matches_request",
    "private_key_matches_spec",
    "public_keys_equal",
]
