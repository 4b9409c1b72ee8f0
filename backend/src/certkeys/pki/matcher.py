"""Public key comparison against other keys, certificates and CSRs.

``public_keys_equal`` dispatches on the type of its first argument only. An
unsupported first key is an error; a second key of another or unsupported
type simply does not match. Certificate and CSR checks pass the embedded
key as the first argument, so an unsupported embedded key is reported as
an error while a mismatching caller key returns False. Callers rely on
this asymmetry.
"""

import logging

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from opentelemetry import trace

from certkeys.domain.models import CertificatePrivateKey, CertificateSpec
from certkeys.domain.states import PrivateKeyAlgorithm
from certkeys.metrics import key_metrics
from certkeys.pki.errors import UnrecognisedKeyTypeError, UnsupportedAlgorithmError
from certkeys.pki.keys import (
    DEFAULT_EC_KEY_SIZE,
    DEFAULT_RSA_KEY_SIZE,
    PrivateKey,
    key_algorithm,
    key_size,
)

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


def public_keys_equal(a: object, b: object) -> bool:
    """Compare two public keys for equality.

    RSA keys are equal when modulus and public exponent match, ECDSA keys
    when curve and point match, and Ed25519 keys when their raw encodings
    match.

    Returns:
        True if ``b`` is the same key as ``a``, False otherwise.

    Raises:
        UnrecognisedKeyTypeError: If ``a`` is not an RSA, ECDSA or Ed25519 public key.
    """
    if isinstance(a, rsa.RSAPublicKey):
        equal = isinstance(b, rsa.RSAPublicKey) and _rsa_numbers(a) == _rsa_numbers(b)
    elif isinstance(a, ec.EllipticCurvePublicKey):
        equal = (
            isinstance(b, ec.EllipticCurvePublicKey)
            and a.curve.name == b.curve.name
            and _ec_point(a) == _ec_point(b)
        )
    elif isinstance(a, ed25519.Ed25519PublicKey):
        equal = isinstance(b, ed25519.Ed25519PublicKey) and _raw_bytes(a) == _raw_bytes(b)
    else:
        logger.error("public_key_type_rejected", extra={"key_type": type(a).__name__})
        raise UnrecognisedKeyTypeError(type(a).__name__)

    key_metrics.record_public_key_comparison("match" if equal else "mismatch")
    return equal


def matches_certificate(public_key: object, certificate: x509.Certificate) -> bool:
    """Check whether ``public_key`` is the key embedded in ``certificate``.

    Returns:
        True if the keys match, False if they differ.

    Raises:
        UnrecognisedKeyTypeError: If the certificate key type is not supported.
    """
    with tracer.start_as_current_span("matches_certificate") as span:
        span.set_attribute("serial", format(certificate.serial_number, "x"))
        embedded = _embedded_public_key(certificate, "certificate")
        return public_keys_equal(embedded, public_key)


def matches_request(public_key: object, csr: x509.CertificateSigningRequest) -> bool:
    """Check whether ``public_key`` is the key embedded in the signing request.

    Returns:
        True if the keys match, False if they differ.

    Raises:
        UnrecognisedKeyTypeError: If the request key type is not supported.
    """
    with tracer.start_as_current_span("matches_request"):
        embedded = _embedded_public_key(csr, "certificate signing request")
        return public_keys_equal(embedded, public_key)


def private_key_matches_spec(
    private_key: PrivateKey, spec: CertificateSpec | CertificatePrivateKey
) -> list[str]:
    """List the ways an existing private key fails to satisfy a certificate spec.

    The same defaults as key generation apply: an empty algorithm means RSA
    and a size of zero means 2048 for RSA and 256 for ECDSA. Size is not
    checked for Ed25519.

    Returns:
        Human readable violations. An empty list means the key still fits.

    Raises:
        UnsupportedAlgorithmError: If the spec algorithm is not recognised.
        UnknownKeyTypeError: If the private key type is not supported.
    """
    if isinstance(spec, CertificateSpec):
        private_key_spec = spec.effective_private_key()
    else:
        private_key_spec = spec

    requested = private_key_spec.algorithm or PrivateKeyAlgorithm.RSA.value
    try:
        requested_algorithm = PrivateKeyAlgorithm(requested)
    except ValueError as e:
        logger.error("private_key_spec_rejected", extra={"algorithm": requested})
        raise UnsupportedAlgorithmError(requested) from e

    actual_algorithm = key_algorithm(private_key)
    if actual_algorithm != requested_algorithm:
        return [
            f"spec.privateKey.algorithm: {requested_algorithm.value} does not match "
            f"existing key algorithm {actual_algorithm.value}"
        ]

    violations: list[str] = []
    if requested_algorithm == PrivateKeyAlgorithm.RSA:
        expected_size = private_key_spec.size if private_key_spec.size > 0 else DEFAULT_RSA_KEY_SIZE
    elif requested_algorithm == PrivateKeyAlgorithm.ECDSA:
        expected_size = private_key_spec.size if private_key_spec.size > 0 else DEFAULT_EC_KEY_SIZE
    else:
        return violations

    actual_size = key_size(private_key)
    if actual_size != expected_size:
        violations.append(
            f"spec.privateKey.size: {expected_size} does not match existing key size {actual_size}"
        )
    return violations


def _embedded_public_key(
    obj: x509.Certificate | x509.CertificateSigningRequest, kind: str
) -> object:
    try:
        return obj.public_key()
    except (UnsupportedAlgorithm, ValueError) as e:
        logger.error(
            "embedded_public_key_unreadable",
            extra={"kind": kind, "error": str(e)},
        )
        raise UnrecognisedKeyTypeError(f"{kind} key ({e})") from e


def _rsa_numbers(key: rsa.RSAPublicKey) -> tuple[int, int]:
    numbers = key.public_numbers()
    return numbers.n, numbers.e


def _ec_point(key: ec.EllipticCurvePublicKey) -> tuple[int, int]:
    numbers = key.public_numbers()
    return numbers.x, numbers.y


def _raw_bytes(key: ed25519.Ed25519PublicKey) -> bytes:
    return key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
