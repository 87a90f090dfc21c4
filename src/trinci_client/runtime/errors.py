"""
TRINCI Client Error Model

This module provides the error handling framework for the transaction
encoding and signing layer. Every failure raised by the package derives
from TrinciError and carries a stable ErrorCode.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes for the transaction layer."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    MARSHAL_ERROR = 103
    UNMARSHAL_ERROR = 104

    # Validation errors (500-599)
    INVALID_FIELD = 500
    FIXED_LENGTH_VIOLATION = 501
    IMPORT_TYPE_ERROR = 502
    MISSING_SIGNATURE = 503

    # Key errors (700-799)
    KEY_PRIMITIVE_ERROR = 700
    SIGNING_ERROR = 701
    UNSUPPORTED_KEY_PARAMS = 702


class TrinciError(Exception):
    """
    Base class for all transaction layer errors.

    Provides structured error information: a message, an ErrorCode, optional
    details and the underlying exception, if any.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ValidationError(TrinciError):
    """Field and structure validation errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_FIELD,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class FixedLengthError(ValidationError):
    """A fixed-size field received a value of the wrong length."""

    def __init__(self, message: str = "Wrong value length",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.FIXED_LENGTH_VIOLATION, details, cause)


class ImportTypeError(ValidationError):
    """Imported tuple, object or key identifier has an unexpected shape."""

    def __init__(self, message: str = "Import type error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.IMPORT_TYPE_ERROR, details, cause)


class MissingSignatureError(ValidationError):
    """Verification requested on a transaction that carries no signature."""

    def __init__(self, message: str = "Missing signature",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MISSING_SIGNATURE, details, cause)


class KeyPrimitiveError(TrinciError):
    """Failure inside a KeyProvider primitive (malformed key, unsupported curve)."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.KEY_PRIMITIVE_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class SigningError(KeyPrimitiveError):
    """Key derivation or the signing primitive failed."""

    def __init__(self, message: str = "Signing failed",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.SIGNING_ERROR, details, cause)


class EncodingError(TrinciError):
    """Data encoding/decoding errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class MarshalError(EncodingError):
    """Data marshaling error."""

    def __init__(self, message: str = "Marshal error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MARSHAL_ERROR, details, cause)


class UnmarshalError(EncodingError):
    """Data unmarshaling error."""

    def __init__(self, message: str = "Unmarshal error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNMARSHAL_ERROR, details, cause)


__all__ = [
    "ErrorCode",
    "TrinciError",
    "ValidationError",
    "FixedLengthError",
    "ImportTypeError",
    "MissingSignatureError",
    "KeyPrimitiveError",
    "SigningError",
    "EncodingError",
    "MarshalError",
    "UnmarshalError",
]
