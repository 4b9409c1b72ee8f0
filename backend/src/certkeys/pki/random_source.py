"""Secure random source used for key generation.

The source is injectable so tests can substitute a deterministic or failing
implementation. Production code uses ``SystemRandomSource``.
"""

import logging
import secrets
from typing import Protocol

from certkeys.pki.errors import RandomSourceError

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """A source of cryptographically secure random bytes."""

    def read(self, size: int) -> bytes:
        """Return exactly ``size`` random bytes or raise RandomSourceError."""
        ...


class SystemRandomSource:
    """Random source backed by the operating system CSPRNG."""

    def read(self, size: int) -> bytes:
        try:
            return secrets.token_bytes(size)
        except OSError as e:
            raise RandomSourceError(f"secure random source unavailable: {e}") from e


def read_exact(source: RandomSource, size: int) -> bytes:
    """Read ``size`` bytes from ``source``, rejecting short or long reads.

    Raises:
        RandomSourceError: If the source fails or returns the wrong length.
    """
    data = source.read(size)
    if len(data) != size:
        logger.error(
            "random_source_short_read",
            extra={"requested": size, "received": len(data)},
        )
        raise RandomSourceError(
            f"secure random source returned {len(data)} bytes, expected {size}"
        )
    return data
