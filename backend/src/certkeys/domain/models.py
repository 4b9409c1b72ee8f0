"""Certificate private-key specification.

Only the parts of a certificate resource that drive key generation and
encoding are modelled here. Selector fields hold the raw strings supplied
by the caller so that unsupported values reach the generator and encoder,
which reject them with a descriptive error.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CertificatePrivateKey:
    """Private key parameters of a certificate.

    Attributes:
        algorithm: "RSA", "ECDSA", "Ed25519", or "" (RSA).
        size: RSA modulus bits or ECDSA curve size. 0 selects the default.
        encoding: "PKCS1", "PKCS8", or "" (PKCS1).
    """

    algorithm: str = ""
    size: int = 0
    encoding: str = ""


@dataclass(frozen=True)
class CertificateSpec:
    """The subset of a certificate specification consumed by this package."""

    common_name: str = ""
    private_key: CertificatePrivateKey | None = None

    def effective_private_key(self) -> CertificatePrivateKey:
        """Get the private key block, falling back to all defaults when absent."""
        if self.private_key is None:
            return CertificatePrivateKey()
        return self.private_key
