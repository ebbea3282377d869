from __future__ import annotations


class HostError(Exception):
    """Base exception for the host module."""


class ConfigurationError(HostError):
    """Raised when the host reports an attempt identifier that is not a positive integer."""


class HostProtocolAnomaly(HostError):
    """Raised when records loaded from the host cannot be decoded into runner state."""
