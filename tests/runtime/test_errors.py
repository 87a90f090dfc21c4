"""
Tests for the error taxonomy.
"""

import pytest

from trinci_client.runtime.errors import (
    EncodingError,
    ErrorCode,
    FixedLengthError,
    ImportTypeError,
    KeyPrimitiveError,
    MarshalError,
    MissingSignatureError,
    SigningError,
    TrinciError,
    UnmarshalError,
    ValidationError,
)


class TestErrorHierarchy:
    """Every error derives from TrinciError with a stable code."""

    @pytest.mark.parametrize("exc_type,code,parent", [
        (FixedLengthError, ErrorCode.FIXED_LENGTH_VIOLATION, ValidationError),
        (ImportTypeError, ErrorCode.IMPORT_TYPE_ERROR, ValidationError),
        (MissingSignatureError, ErrorCode.MISSING_SIGNATURE, ValidationError),
        (SigningError, ErrorCode.SIGNING_ERROR, KeyPrimitiveError),
        (MarshalError, ErrorCode.MARSHAL_ERROR, EncodingError),
        (UnmarshalError, ErrorCode.UNMARSHAL_ERROR, EncodingError),
    ])
    def test_codes_and_parents(self, exc_type, code, parent):
        """Test subclass codes and inheritance."""
        err = exc_type()
        assert err.code == code
        assert isinstance(err, parent)
        assert isinstance(err, TrinciError)

    def test_base_defaults(self):
        """Test the base error defaults to UNKNOWN."""
        err = TrinciError("boom")
        assert err.code == ErrorCode.UNKNOWN
        assert err.details == {}
        assert err.cause is None

    def test_key_primitive_code_override(self):
        """Test KeyPrimitiveError accepts a narrower code."""
        err = KeyPrimitiveError("no key", code=ErrorCode.UNSUPPORTED_KEY_PARAMS)
        assert err.code == ErrorCode.UNSUPPORTED_KEY_PARAMS


class TestErrorFormatting:
    """String and dict forms."""

    def test_str_includes_code_details_and_cause(self):
        cause = ValueError("bad length")
        err = FixedLengthError("Nonce too short", details={"expected": 8}, cause=cause)
        text = str(err)
        assert text.startswith("[FIXED_LENGTH_VIOLATION] Nonce too short")
        assert "Details: {'expected': 8}" in text
        assert "Caused by: bad length" in text

    def test_to_dict(self):
        err = ImportTypeError("Unknown key parameters", details={"paramsId": "rsa"})
        assert err.to_dict() == {
            "code": ErrorCode.IMPORT_TYPE_ERROR.value,
            "message": "Unknown key parameters",
            "details": {"paramsId": "rsa"},
        }

    def test_to_dict_with_cause(self):
        err = UnmarshalError("Cannot decode", cause=ValueError("truncated"))
        assert err.to_dict()["cause"] == "truncated"

    def test_raise_and_catch_as_base(self):
        """Test that specific errors can be handled through the base class."""
        with pytest.raises(TrinciError, match="no signature"):
            raise MissingSignatureError("no signature")
