"""Private key generation for certificates.

Generates RSA, ECDSA and Ed25519 private keys, enforcing size bounds for
RSA and a fixed set of curves for ECDSA.
"""

import logging
import math
import time

from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from opentelemetry import trace

from certkeys.domain.models import CertificatePrivateKey, CertificateSpec
from certkeys.domain.states import PrivateKeyAlgorithm
from certkeys.metrics import key_metrics
from certkeys.pki.errors import (
    ExcessiveKeySizeError,
    KeyGenerationError,
    RandomSourceError,
    UnsupportedAlgorithmError,
    UnsupportedCurveSizeError,
    WeakKeyError,
)
from certkeys.pki.keys import (
    DEFAULT_EC_KEY_SIZE,
    DEFAULT_RSA_KEY_SIZE,
    PrivateKey,
    algorithm_name,
)
from certkeys.pki.primes import generate_prime_pair
from certkeys.pki.random_source import RandomSource, SystemRandomSource, read_exact

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

# RSA bounds. Below 2048 bits is weak; above 8192 costs too much CPU for no real gain.
MIN_RSA_KEY_SIZE = 2048
MAX_RSA_KEY_SIZE = 8192
RSA_PUBLIC_EXPONENT = 65537

# ECDSA key sizes, each naming one NIST curve
EC_CURVE_256 = 256  # secp256r1 / prime256v1 / P-256
EC_CURVE_384 = 384  # secp384r1 / P-384
EC_CURVE_521 = 521  # secp521r1 / P-521

ED25519_SEED_SIZE = 32

# Curve and group order n for each approved size
_EC_CURVES: dict[int, tuple[type[ec.EllipticCurve], int]] = {
    EC_CURVE_256: (
        ec.SECP256R1,
        0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
    ),
    EC_CURVE_384: (
        ec.SECP384R1,
        int(
            "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF"
            "C7634D81F4372DDF581A0DB248B0A77AECEC196ACCC52973",
            16,
        ),
    ),
    EC_CURVE_521: (
        ec.SECP521R1,
        int(
            "01FF"
            "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFA"
            "51868783BF2F966B7FCC0148F709A5D03BB5C9B8899C47AEBB6FB71E91386409",
            16,
        ),
    ),
}

# A healthy source is rejected with probability < 1/2 per draw
_MAX_SCALAR_ATTEMPTS = 64


def _rsa_private_key(p: int, q: int) -> rsa.RSAPrivateKey:
    """Build an RSA key from its primes with d = e^-1 mod lcm(p - 1, q - 1)."""
    d = pow(RSA_PUBLIC_EXPONENT, -1, math.lcm(p - 1, q - 1))
    public_numbers = rsa.RSAPublicNumbers(RSA_PUBLIC_EXPONENT, p * q)
    return rsa.RSAPrivateNumbers(
        p=p,
        q=q,
        d=d,
        dmp1=rsa.rsa_crt_dmp1(d, p),
        dmq1=rsa.rsa_crt_dmq1(d, q),
        iqmp=rsa.rsa_crt_iqmp(p, q),
        public_numbers=public_numbers,
    ).private_key()


class KeyGenerator:
    """Generates private keys from a secure random source.

    RSA primes, ECDSA scalars and Ed25519 seeds are all drawn from the
    injected ``random_source``.
    """

    def __init__(self, random_source: RandomSource | None = None) -> None:
        self._random = random_source if random_source is not None else SystemRandomSource()

    def generate_for_certificate(
        self, spec: CertificateSpec | CertificatePrivateKey
    ) -> PrivateKey:
        """Generate a private key suitable for the given certificate spec.

        An empty algorithm selects RSA. A size of zero or less selects the
        algorithm default (2048 for RSA, 256 for ECDSA). Size is ignored
        for Ed25519.

        Args:
            spec: A certificate spec, or its private key block directly.

        Returns:
            A new RSA, ECDSA or Ed25519 private key.

        Raises:
            UnsupportedAlgorithmError: If the algorithm is not recognised.
            KeySizeError: If the RSA size is out of bounds.
            UnsupportedCurveSizeError: If the ECDSA size has no curve.
            RandomSourceError: If the random source fails.
        """
        if isinstance(spec, CertificateSpec):
            private_key_spec = spec.effective_private_key()
        else:
            private_key_spec = spec

        algorithm = private_key_spec.algorithm or ""
        size = private_key_spec.size or 0

        with tracer.start_as_current_span("KeyGenerator.generate_for_certificate") as span:
            span.set_attribute("algorithm", algorithm or PrivateKeyAlgorithm.RSA.value)
            span.set_attribute("key_size", size)

            if algorithm in ("", PrivateKeyAlgorithm.RSA):
                return self.generate_rsa(size if size > 0 else DEFAULT_RSA_KEY_SIZE)
            elif algorithm == PrivateKeyAlgorithm.ECDSA:
                return self.generate_ecdsa(size if size > 0 else DEFAULT_EC_KEY_SIZE)
            elif algorithm == PrivateKeyAlgorithm.ED25519:
                return self.generate_ed25519()

            logger.error(
                "private_key_generation_rejected",
                extra={"algorithm": algorithm, "reason": "unsupported_algorithm"},
            )
            key_metrics.record_key_generation_failed("unsupported", "unsupported_algorithm")
            raise UnsupportedAlgorithmError(algorithm)

    def generate_rsa(self, key_size: int) -> rsa.RSAPrivateKey:
        """Generate an RSA private key with a modulus of exactly ``key_size`` bits.

        Both primes are drawn from the injected random source, so odd sizes
        are generated exactly as well.

        Raises:
            WeakKeyError: If key_size < 2048.
            ExcessiveKeySizeError: If key_size > 8192.
            RandomSourceError: If the random source fails.
            KeyGenerationError: If the modulus does not have key_size bits.
        """
        with tracer.start_as_current_span("KeyGenerator.generate_rsa") as span:
            span.set_attribute("key_size", key_size)

            if key_size < MIN_RSA_KEY_SIZE:
                self._reject(PrivateKeyAlgorithm.RSA, "weak_key", key_size)
                raise WeakKeyError(key_size, MIN_RSA_KEY_SIZE)
            if key_size > MAX_RSA_KEY_SIZE:
                self._reject(PrivateKeyAlgorithm.RSA, "excessive_key_size", key_size)
                raise ExcessiveKeySizeError(key_size, MAX_RSA_KEY_SIZE)

            start_time = time.time()
            try:
                p, q = generate_prime_pair(self._random, key_size, RSA_PUBLIC_EXPONENT)
            except RandomSourceError:
                self._reject(PrivateKeyAlgorithm.RSA, "random_source_failure", key_size)
                raise

            private_key = _rsa_private_key(p, q)
            if private_key.key_size != key_size:
                self._reject(PrivateKeyAlgorithm.RSA, "key_size_mismatch", key_size)
                raise KeyGenerationError(key_size, private_key.key_size)

            self._record_generated(PrivateKeyAlgorithm.RSA, private_key, start_time)
            return private_key

    def generate_ecdsa(self, key_size: int) -> ec.EllipticCurvePrivateKey:
        """Generate an ECDSA private key on the curve named by ``key_size``.

        256 maps to P-256, 384 to P-384 and 521 to P-521.

        Raises:
            UnsupportedCurveSizeError: For any other size.
            RandomSourceError: If the random source fails.
        """
        with tracer.start_as_current_span("KeyGenerator.generate_ecdsa") as span:
            span.set_attribute("key_size", key_size)

            if key_size not in _EC_CURVES:
                self._reject(PrivateKeyAlgorithm.ECDSA, "unsupported_curve_size", key_size)
                raise UnsupportedCurveSizeError(key_size)

            curve_cls, order = _EC_CURVES[key_size]
            span.set_attribute("curve", curve_cls.name)

            start_time = time.time()
            private_value = self._random_scalar(order)
            private_key = ec.derive_private_key(private_value, curve_cls())

            self._record_generated(PrivateKeyAlgorithm.ECDSA, private_key, start_time)
            return private_key

    def generate_ed25519(self) -> ed25519.Ed25519PrivateKey:
        """Generate an Ed25519 private key from a fresh 32-byte seed.

        Raises:
            RandomSourceError: If the random source fails.
        """
        with tracer.start_as_current_span("KeyGenerator.generate_ed25519"):
            start_time = time.time()
            seed = read_exact(self._random, ED25519_SEED_SIZE)
            private_key = ed25519.Ed25519PrivateKey.from_private_bytes(seed)

            self._record_generated(PrivateKeyAlgorithm.ED25519, private_key, start_time)
            return private_key

    def _random_scalar(self, order: int) -> int:
        """Draw a uniform scalar in [1, order - 1] by rejection sampling."""
        bits = order.bit_length()
        size = (bits + 7) // 8
        mask = (1 << bits) - 1

        for _ in range(_MAX_SCALAR_ATTEMPTS):
            candidate = int.from_bytes(read_exact(self._random, size), "big") & mask
            if 0 < candidate < order:
                return candidate

        logger.error(
            "random_source_exhausted",
            extra={"attempts": _MAX_SCALAR_ATTEMPTS, "order_bits": bits},
        )
        raise RandomSourceError(
            "secure random source produced no valid ecdsa scalar "
            f"in {_MAX_SCALAR_ATTEMPTS} attempts"
        )

    def _record_generated(
        self, algorithm: PrivateKeyAlgorithm, private_key: PrivateKey, start_time: float
    ) -> None:
        generation_time = time.time() - start_time
        key_metrics.record_key_generated(algorithm.value, generation_time)

        logger.info(
            "private_key_generated",
            extra={
                "algorithm": algorithm_name(private_key),
                "duration_seconds": generation_time,
            },
        )

    def _reject(self, algorithm: PrivateKeyAlgorithm, reason: str, key_size: int) -> None:
        logger.error(
            "private_key_generation_rejected",
            extra={"algorithm": algorithm.value, "reason": reason, "key_size": key_size},
        )
        key_metrics.record_key_generation_failed(algorithm.value, reason)


# Default generator backed by the system random source
_default_generator = KeyGenerator()


def generate_for_certificate(spec: CertificateSpec | CertificatePrivateKey) -> PrivateKey:
    """Generate a private key for a certificate spec using the system random source."""
    return _default_generator.generate_for_certificate(spec)


def generate_rsa(key_size: int) -> rsa.RSAPrivateKey:
    """Generate an RSA private key using the system random source."""
    return _default_generator.generate_rsa(key_size)


def generate_ecdsa(key_size: int) -> ec.EllipticCurvePrivateKey:
    """Generate an ECDSA private key using the system random source."""
    return _default_generator.generate_ecdsa(key_size)


def generate_ed25519() -> ed25519.Ed25519PrivateKey:
    """Generate an Ed25519 private key using the system random source."""
    return _default_generator.generate_ed25519()
