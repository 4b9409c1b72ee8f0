"""Probable prime search for RSA key generation.

Candidates are drawn from an injected ``RandomSource``. Each candidate has
its top two bits set, so the product of a ``ceil(s/2)``-bit prime and a
``floor(s/2)``-bit prime always has exactly ``s`` bits, for odd ``s`` too.
Primality is a trial division pre-check followed by Miller-Rabin with the
FIPS 186-5 round counts.
"""

import logging
import math
import secrets
from functools import cache

from certkeys.pki.errors import RandomSourceError
from certkeys.pki.random_source import RandomSource, read_exact

logger = logging.getLogger(__name__)

_SMALL_PRIME_LIMIT = 10000
# Same-length primes closer than 2**(bits - 100) are rejected
_MINIMUM_PRIME_SEPARATION = 100


@cache
def _small_primes() -> tuple[int, ...]:
    """Odd primes below ``_SMALL_PRIME_LIMIT`` (Sieve of Eratosthenes)."""
    candidate = [True] * _SMALL_PRIME_LIMIT
    primes: list[int] = []
    for i in range(3, _SMALL_PRIME_LIMIT, 2):
        if candidate[i]:
            primes.append(i)
            for j in range(i * i, _SMALL_PRIME_LIMIT, 2 * i):
                candidate[j] = False
    return tuple(primes)


@cache
def _small_primes_product() -> int:
    return math.prod(_small_primes())


def _miller_rabin_rounds(bits: int) -> int:
    if bits <= 512:
        return 40
    elif bits <= 1024:
        return 56
    elif bits <= 1536:
        return 64
    elif bits <= 2048:
        return 70
    return 74


def _miller_rabin(w: int, rounds: int) -> bool:
    tw = w - 1
    a = (tw & -tw).bit_length() - 1
    m = tw >> a
    for _ in range(rounds):
        b = secrets.randbelow(w - 3) + 2
        z = pow(b, m, w)
        if z == 1 or z == tw:
            continue
        for _ in range(1, a):
            z = pow(z, 2, w)
            if z == tw:
                break
            if z == 1:
                return False
        else:
            return False
    return True


def is_probable_prime(candidate: int) -> bool:
    """Check ``candidate`` for primality.

    Small factors are ruled out with a single gcd against the product of the
    odd primes below 10000 before any Miller-Rabin round runs.
    """
    if candidate < 2:
        return False
    if candidate < _SMALL_PRIME_LIMIT:
        return candidate == 2 or candidate in _small_primes()
    if candidate % 2 == 0 or math.gcd(candidate, _small_primes_product()) != 1:
        return False
    return _miller_rabin(candidate, _miller_rabin_rounds(candidate.bit_length()))


def generate_prime(
    source: RandomSource, bits: int, public_exponent: int, other: int | None = None
) -> int:
    """Draw a probable prime of exactly ``bits`` bits from ``source``.

    The prime ``p`` satisfies ``gcd(p - 1, public_exponent) == 1``. When
    ``other`` is given, a same-length prime too close to it is skipped.

    Raises:
        RandomSourceError: If the source fails, or yields no prime within
            ``5 * bits`` draws.
    """
    size = (bits + 7) // 8
    mask = (1 << bits) - 1
    # Top two bits and the low bit
    forced = (1 << (bits - 1)) | (1 << (bits - 2)) | 1
    separation = 1 << (bits - _MINIMUM_PRIME_SEPARATION)

    attempts = bits * 5
    for _ in range(attempts):
        candidate = (int.from_bytes(read_exact(source, size), "big") & mask) | forced
        if other is not None and abs(other - candidate) <= separation:
            continue
        if math.gcd(candidate - 1, public_exponent) == 1 and is_probable_prime(candidate):
            return candidate

    logger.error("random_source_exhausted", extra={"attempts": attempts, "prime_bits": bits})
    raise RandomSourceError(
        f"secure random source produced no {bits}-bit rsa prime in {attempts} attempts"
    )


def generate_prime_pair(
    source: RandomSource, key_size: int, public_exponent: int
) -> tuple[int, int]:
    """Generate distinct primes ``p`` and ``q`` with ``(p * q).bit_length() == key_size``.

    ``p`` has ``ceil(key_size / 2)`` bits and ``q`` has ``floor(key_size / 2)`` bits.
    """
    p = generate_prime(source, key_size - key_size // 2, public_exponent)
    q = generate_prime(source, key_size // 2, public_exponent, other=p)
    return p, q
