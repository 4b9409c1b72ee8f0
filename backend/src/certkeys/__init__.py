"""Private key lifecycle helpers for certificate management."""
