"""
Custom Exception Classes for DNS-UPDATE.

Exception Hierarchy:
    DNSUpdateError (Base)
    ├─ ConfigError              - Configuration issues (missing file, JSON parsing, bad shape)
    │  └─ ValidationError       - Invalid record declaration
    ├─ NetworkError             - Public IP detection
    ├─ MissingCredentialsError  - Domain configured without apiKey
    └─ APIError                 - Provider API communication
"""

from typing import Optional


class DNSUpdateError(Exception):
    """Base exception for all DNS-UPDATE errors."""
    pass


class ConfigError(DNSUpdateError):
    """Configuration error (file missing, invalid JSON, unexpected structure)."""
    pass


class ValidationError(ConfigError):
    """Record declaration failed validation (conflicting flags, missing fields)."""
    pass


class NetworkError(DNSUpdateError):
    """Public IP detection failed."""
    pass


class MissingCredentialsError(DNSUpdateError):
    """Domain has no API key; it is skipped and reported as failed."""
    pass


class APIError(DNSUpdateError):
    """Provider API call failed (transport error or non-success status)."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_text: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
