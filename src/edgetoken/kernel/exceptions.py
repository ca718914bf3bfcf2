"""Unified exception hierarchy for EdgeToken.

All library exceptions inherit from EdgeTokenException, so callers can catch
one type for every setup or generation failure.

Categories:
- ConfigurationError: Invalid options detected while building a configuration
- EncodingError: Byte codec failures (malformed base64 text)
- DataSerializationError: Token data the default serializer cannot represent
- SecurityException: Key derivation and signing failures

Verification never raises any of these: every rejection collapses to ``False``.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class EdgeTokenException(Exception):
    """Base exception for all EdgeToken errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "INVALID_ENCODING").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(EdgeTokenException):
    """Token options are invalid and cannot be used to build a facade."""


# =============================================================================
# Encoding Exceptions
# =============================================================================


class EncodingError(EdgeTokenException):
    """Binary-to-text encoding or decoding failed."""


class InvalidEncoding(EncodingError):
    """Text is not a canonical base64 encoding."""


# =============================================================================
# Data Exceptions
# =============================================================================


class DataSerializationError(EdgeTokenException):
    """Token data cannot be serialized without losing information."""


# =============================================================================
# Security Exceptions
# =============================================================================


class SecurityException(EdgeTokenException):
    """Key material and MAC engine errors."""


class KeyDerivationError(SecurityException):
    """The secret or hash algorithm cannot be turned into an HMAC key."""


class SigningError(SecurityException):
    """The MAC engine failed while signing a token."""
