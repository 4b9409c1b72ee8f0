"""Tests for key introspection helpers."""

import pytest

from certkeys.domain.states import PrivateKeyAlgorithm
from certkeys.pki.errors import UnknownKeyTypeError
from certkeys.pki.keys import algorithm_name, key_algorithm, key_size


class TestKeyIntrospection:
    """Tests for key_algorithm, key_size and algorithm_name."""

    @pytest.mark.parametrize(
        ("key_fixture", "algorithm", "size", "label"),
        [
            ("rsa_key", PrivateKeyAlgorithm.RSA, 2048, "RSA-2048"),
            ("ecdsa_key", PrivateKeyAlgorithm.ECDSA, 256, "ECDSA-secp256r1"),
            ("ed25519_key", PrivateKeyAlgorithm.ED25519, 256, "Ed25519"),
        ],
    )
    def test_private_and_public_keys(self, key_fixture, algorithm, size, label, request):
        key = request.getfixturevalue(key_fixture)

        for candidate in (key, key.public_key()):
            assert key_algorithm(candidate) == algorithm
            assert key_size(candidate) == size
            assert algorithm_name(candidate) == label

    def test_unsupported_key(self, ed448_key):
        with pytest.raises(UnknownKeyTypeError):
            key_algorithm(ed448_key)
        with pytest.raises(UnknownKeyTypeError):
            key_size(ed448_key)
        assert algorithm_name(ed448_key) == "UNKNOWN"

