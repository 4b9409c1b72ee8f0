"""Shared fixtures for certkeys tests and pytest configuration."""

import hashlib
from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ed448, ed25519
from cryptography.x509.oid import NameOID

from certkeys.pki.errors import RandomSourceError
from certkeys.pki.generator import KeyGenerator


class DeterministicRandomSource:
    """Expands a seed with SHAKE-256 so tests get reproducible keys."""

    def __init__(self, seed: bytes) -> None:
        self._seed = seed
        self._counter = 0

    def read(self, size: int) -> bytes:
        block = hashlib.shake_256(self._seed + self._counter.to_bytes(8, "big")).digest(size)
        self._counter += 1
        return block


class FailingRandomSource:
    """Simulates an unavailable entropy source."""

    def __init__(self) -> None:
        self.calls = 0

    def read(self, size: int) -> bytes:
        self.calls += 1
        raise RandomSourceError("entropy source exhausted")


class ConstantRandomSource:
    """Returns the same byte over and over."""

    def __init__(self, value: int, short_by: int = 0) -> None:
        self._value = value
        self._short_by = short_by

    def read(self, size: int) -> bytes:
        return bytes([self._value]) * (size - self._short_by)


def _signing_hash(private_key):
    if isinstance(private_key, (ed25519.Ed25519PrivateKey, ed448.Ed448PrivateKey)):
        return None
    return hashes.SHA256()


def build_certificate(private_key, common_name: str = "test") -> x509.Certificate:
    """Build a self-signed certificate carrying the public key of ``private_key``."""
    now = datetime.now(timezone.utc)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=30))
        .sign(private_key, _signing_hash(private_key))  # type: ignore[arg-type]
    )


def build_csr(private_key, common_name: str = "test") -> x509.CertificateSigningRequest:
    """Build a CSR signed by ``private_key``."""
    return (
        x509.CertificateSigningRequestBuilder()
        .subject_name(x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)]))
        .sign(private_key, _signing_hash(private_key))  # type: ignore[arg-type]
    )


def pytest_addoption(parser):
    parser.addoption(
        "--skip-slow", action="store_true", default=False, help="skip large RSA key tests"
    )


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--skip-slow"):
        return
    skip_slow = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def certificate_factory():
    return build_certificate


@pytest.fixture
def csr_factory():
    return build_csr


@pytest.fixture
def deterministic_generator() -> KeyGenerator:
    return KeyGenerator(DeterministicRandomSource(b"certkeys-tests"))


@pytest.fixture
def deterministic_source_factory():
    return DeterministicRandomSource


@pytest.fixture
def constant_source_factory():
    return ConstantRandomSource


@pytest.fixture
def failing_source() -> FailingRandomSource:
    return FailingRandomSource()


@pytest.fixture(scope="session")
def generator() -> KeyGenerator:
    return KeyGenerator()


@pytest.fixture(scope="session")
def rsa_key(generator):
    return generator.generate_rsa(2048)


@pytest.fixture(scope="session")
def other_rsa_key(generator):
    return generator.generate_rsa(2048)


@pytest.fixture(scope="session")
def ecdsa_key(generator):
    return generator.generate_ecdsa(256)


@pytest.fixture(scope="session")
def ed25519_key(generator):
    return generator.generate_ed25519()


@pytest.fixture(scope="session")
def ed448_key():
    return ed448.Ed448PrivateKey.generate()
