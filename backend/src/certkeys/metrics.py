"""OpenTelemetry metrics for the certkeys module."""

from opentelemetry import metrics

# Get meter for certkeys module
meter = metrics.get_meter("certkeys")

# Key generation
private_keys_generated_total = meter.create_counter(
    name="certkeys_private_keys_generated_total",
    description="Total private keys generated",
    unit="1",
)

private_key_generation_duration = meter.create_histogram(
    name="certkeys_private_key_generation_duration_seconds",
    description="Private key generation duration in seconds",
    unit="s",
)

private_key_generation_failures_total = meter.create_counter(
    name="certkeys_private_key_generation_failures_total",
    description="Total private key generation failures",
    unit="1",
)

# Encoding
private_keys_encoded_total = meter.create_counter(
    name="certkeys_private_keys_encoded_total",
    description="Total private keys encoded",
    unit="1",
)

# Matching
public_key_comparisons_total = meter.create_counter(
    name="certkeys_public_key_comparisons_total",
    description="Total public key comparisons",
    unit="1",
)


class KeyMetrics:
    """Facade for certkeys metrics with proper labels."""

    def record_key_generated(self, algorithm: str, duration_seconds: float) -> None:
        """Record key generation with duration. Labels: algorithm=RSA|ECDSA|Ed25519"""
        private_keys_generated_total.add(1, {"algorithm": algorithm})
        private_key_generation_duration.record(duration_seconds, {"algorithm": algorithm})

    def record_key_generation_failed(self, algorithm: str, reason: str) -> None:
        """Record a rejected or failed generation. Labels: algorithm, reason=<error class>"""
        private_key_generation_failures_total.add(1, {"algorithm": algorithm, "reason": reason})

    def record_key_encoded(self, block_type: str) -> None:
        """Record key encoding. Labels: block_type=<PEM label>"""
        private_keys_encoded_total.add(1, {"block_type": block_type})

    def record_public_key_comparison(self, result: str) -> None:
        """Record public key comparison. Labels: result=match|mismatch"""
        public_key_comparisons_total.add(1, {"result": result})


# Singleton instance
key_metrics = KeyMetrics()
