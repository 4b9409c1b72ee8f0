from certkeys.domain.models import CertificatePrivateKey, CertificateSpec
from certkeys.domain.states import PEMBlockType, PrivateKeyAlgorithm, PrivateKeyEncoding
from certkeys.pki.encoder import encode_public_key
from certkeys.pki.errors import ExcessiveKeySizeError, KeySizeError, WeakKeyError
from certkeys.pki.generator import EC_CURVE_384, EC_CURVE_521
from certkeys.pki.keys import PublicKey
from shared.config import Settings
from shared.telemetry import configure_telemetry

# Pydantic Settings
Settings.model_config
Settings.APP_ENV

# Public spec model consumed by embedding controllers
CertificateSpec.common_name
CertificatePrivateKey.encoding

# Enums
PrivateKeyAlgorithm.ED25519
PrivateKeyEncoding.PKCS8
PEMBlockType.EC_PRIVATE_KEY

# Error context attributes read by callers
WeakKeyError.minimum
ExcessiveKeySizeError.maximum
KeySizeError.key_size

# Library surface
EC_CURVE_384
EC_CURVE_521
PublicKey
encode_public_key
configure_telemetry
