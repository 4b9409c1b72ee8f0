"""Errors raised by private key generation, encoding and matching.

Every error carries the offending value (algorithm, size, key type or
encoding) as an attribute so callers can report it without parsing the
message.
"""


class PrivateKeyError(Exception):
    """Base class for all private key lifecycle errors."""

    pass


class UnsupportedAlgorithmError(PrivateKeyError):
    """Raised when a spec requests a key algorithm this package cannot generate."""

    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"unsupported private key algorithm specified: {algorithm}")


class KeySizeError(PrivateKeyError):
    """Raised when an RSA key size is outside the allowed bounds."""

    def __init__(self, message: str, key_size: int) -> None:
        self.key_size = key_size
        super().__init__(message)


class WeakKeyError(KeySizeError):
    """Raised when an RSA key size is below the minimum."""

    def __init__(self, key_size: int, minimum: int) -> None:
        self.minimum = minimum
        super().__init__(
            f"weak rsa key size specified: {key_size}. minimum key size: {minimum}",
            key_size,
        )


class ExcessiveKeySizeError(KeySizeError):
    """Raised when an RSA key size is above the maximum."""

    def __init__(self, key_size: int, maximum: int) -> None:
        self.maximum = maximum
        super().__init__(
            f"rsa key size specified too big: {key_size}. maximum key size: {maximum}",
            key_size,
        )


class UnsupportedCurveSizeError(PrivateKeyError):
    """Raised when an ECDSA key size does not map to an approved curve."""

    def __init__(self, key_size: int) -> None:
        self.key_size = key_size
        super().__init__(f"unsupported ecdsa key size specified: {key_size}")


class RandomSourceError(PrivateKeyError):
    """Raised when the secure random source cannot supply entropy."""

    pass


class UnknownKeyTypeError(PrivateKeyError):
    """Raised when a private key of an unsupported type is encoded or inspected."""

    def __init__(self, key: object, action: str = "unknown private key type") -> None:
        self.key_type = type(key).__name__
        super().__init__(f"{action}: {self.key_type}")


class UnrecognisedKeyTypeError(PrivateKeyError):
    """Raised when a public key of an unsupported type is compared."""

    def __init__(self, key_type: str) -> None:
        self.key_type = key_type
        super().__init__(f"unrecognised public key type: {key_type}")


class UnknownEncodingError(PrivateKeyError):
    """Raised when a private key encoding selector is not recognised."""

    def __init__(self, encoding: str) -> None:
        self.encoding = encoding
        super().__init__(f"error encoding private key: unknown key encoding: {encoding}")


class KeyDecodeError(PrivateKeyError):
    """Raised when PEM data cannot be decoded into a private key."""

    pass


class KeyGenerationError(PrivateKeyError):
    """Raised when a generated key does not have the requested size."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"generated rsa key has {actual} bits, expected {expected}")
