"""
Key providers.

KeyProvider is the capability every transaction uses for key derivation,
signing, verification, raw key import/export and random bytes.
CryptographyKeyProvider implements it on top of the ``cryptography`` package.

Signature formats:
- ECDSA: IEEE P1363, r || s, each key_size bytes, over SHA-256 (P-256) or SHA-384 (P-384)
- Ed25519: 64-byte RFC 8032 signature over the message
"""

from __future__ import annotations
import logging
import os
from abc import ABC, abstractmethod
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from ..runtime.encoding import BytesLike, to_bytes
from ..runtime.errors import (
    ErrorCode,
    ImportTypeError,
    KeyPrimitiveError,
    SigningError,
)
from .keys import KeyHandle, KeyType
from .params import KeyParams, KeyParamsId, get_params

logger = logging.getLogger(__name__)


class KeyProvider(ABC):
    """
    Asymmetric key capability consumed by transactions.

    Implementations raise KeyPrimitiveError (or SigningError for private-key
    operations) on malformed material; verify() returns False rather than
    raising for a well-formed signature that does not validate.
    """

    @abstractmethod
    def generate(self, params_id: Union[KeyParamsId, str]) -> KeyHandle:
        """Generate a new private key for the given parameters."""
        pass

    @abstractmethod
    def derive_public(self, private_key: KeyHandle) -> KeyHandle:
        """Derive the public key matching a private key."""
        pass

    @abstractmethod
    def export_raw(self, key: KeyHandle) -> bytes:
        """Raw bytes of a key."""
        pass

    @abstractmethod
    def import_raw(self, params_id: Union[KeyParamsId, str], raw: BytesLike,
                   key_type: KeyType = KeyType.PUBLIC) -> KeyHandle:
        """Build a validated handle from raw key bytes."""
        pass

    @abstractmethod
    def sign(self, private_key: KeyHandle, data: bytes) -> bytes:
        """Sign data with a private key."""
        pass

    @abstractmethod
    def verify(self, public_key: KeyHandle, data: bytes, signature: bytes) -> bool:
        """Check a signature over data."""
        pass

    @abstractmethod
    def random_bytes(self, n: int) -> bytes:
        """n cryptographically secure random bytes."""
        pass


_CURVES = {
    "secp256r1": ec.SECP256R1,
    "secp384r1": ec.SECP384R1,
}

_HASHES = {
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
}


class CryptographyKeyProvider(KeyProvider):
    """KeyProvider backed by the ``cryptography`` package."""

    def generate(self, params_id: Union[KeyParamsId, str]) -> KeyHandle:
        params = self._usable_params(params_id)
        if params.algorithm == "ecdsa":
            private_key = ec.generate_private_key(_CURVES[params.curve]())
            raw = private_key.private_numbers().private_value.to_bytes(params.key_size, "big")
        else:
            raw = ed25519.Ed25519PrivateKey.generate().private_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PrivateFormat.Raw,
                encryption_algorithm=serialization.NoEncryption(),
            )
        logger.debug(f"Generated {params.params_id.value} private key")
        return KeyHandle(params.params_id, raw, KeyType.PRIVATE)

    def import_pem(self, pem: bytes, password: Optional[bytes] = None) -> KeyHandle:
        """
        Import a PEM-encoded PKCS#8 private key.

        Args:
            pem: PEM data
            password: Password for encrypted keys

        Returns:
            Private KeyHandle

        Raises:
            SigningError: If the PEM cannot be loaded
            ImportTypeError: If the key type or curve is not registered
        """
        try:
            private_key = serialization.load_pem_private_key(pem, password=password)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise SigningError(f"Cannot load PEM private key: {e}", cause=e)

        if isinstance(private_key, ed25519.Ed25519PrivateKey):
            raw = private_key.private_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PrivateFormat.Raw,
                encryption_algorithm=serialization.NoEncryption(),
            )
            return KeyHandle(KeyParamsId.ED25519, raw, KeyType.PRIVATE)
        if isinstance(private_key, ec.EllipticCurvePrivateKey):
            params = get_params(f"ecdsa_{private_key.curve.name}")
            raw = private_key.private_numbers().private_value.to_bytes(params.key_size, "big")
            return KeyHandle(params.params_id, raw, KeyType.PRIVATE)
        raise ImportTypeError(f"Unsupported private key type: {type(private_key).__name__}")

    def derive_public(self, private_key: KeyHandle) -> KeyHandle:
        self._require_private(private_key, "A private key is required to derive a public key")
        loaded = self._load_private(private_key)
        public_key = loaded.public_key()
        if private_key.params.algorithm == "ecdsa":
            raw = public_key.public_bytes(
                encoding=serialization.Encoding.X962,
                format=serialization.PublicFormat.UncompressedPoint,
            )
        else:
            raw = public_key.public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        return KeyHandle(private_key.params_id, raw, KeyType.PUBLIC)

    def export_raw(self, key: KeyHandle) -> bytes:
        return key.raw

    def import_raw(self, params_id: Union[KeyParamsId, str], raw: BytesLike,
                   key_type: KeyType = KeyType.PUBLIC) -> KeyHandle:
        params = get_params(params_id)
        if params.is_empty:
            return KeyHandle.empty()
        handle = KeyHandle(params.params_id, to_bytes(raw), key_type)
        if handle.is_private:
            self._load_private(handle)
        else:
            self._load_public(handle)
        return handle

    def sign(self, private_key: KeyHandle, data: bytes) -> bytes:
        self._require_private(private_key, "Signing requires a private key")
        loaded = self._load_private(private_key)
        params = private_key.params
        if params.algorithm == "ecdsa":
            der = loaded.sign(data, ec.ECDSA(_HASHES[params.hash_name]()))
            r, s = decode_dss_signature(der)
            return r.to_bytes(params.key_size, "big") + s.to_bytes(params.key_size, "big")
        return loaded.sign(data)

    def verify(self, public_key: KeyHandle, data: bytes, signature: bytes) -> bool:
        if public_key.is_private:
            raise KeyPrimitiveError("Verification requires a public key")
        loaded = self._load_public(public_key)
        params = public_key.params
        signature = to_bytes(signature)
        if len(signature) != params.signature_size:
            return False
        try:
            if params.algorithm == "ecdsa":
                r = int.from_bytes(signature[:params.key_size], "big")
                s = int.from_bytes(signature[params.key_size:], "big")
                loaded.verify(encode_dss_signature(r, s), data, ec.ECDSA(_HASHES[params.hash_name]()))
            else:
                loaded.verify(signature, data)
        except InvalidSignature:
            return False
        return True

    def random_bytes(self, n: int) -> bytes:
        return os.urandom(n)

    def _usable_params(self, params_id) -> KeyParams:
        params = get_params(params_id)
        if params.is_empty:
            raise KeyPrimitiveError("The empty key parameters cannot hold a key",
                                    code=ErrorCode.UNSUPPORTED_KEY_PARAMS)
        return params

    @staticmethod
    def _require_private(key: KeyHandle, message: str) -> None:
        if not isinstance(key, KeyHandle):
            raise SigningError(f"Expected a private KeyHandle, got {type(key).__name__}")
        if not key.is_private:
            raise SigningError(message)

    def _load_private(self, handle: KeyHandle):
        params = handle.params
        if params.is_empty:
            raise SigningError("The empty key parameters cannot hold a private key")
        raw = handle.raw
        if len(raw) != params.key_size:
            raise SigningError(
                f"{params.params_id.value} private key must be {params.key_size} bytes, got {len(raw)}"
            )
        try:
            if params.algorithm == "ecdsa":
                return ec.derive_private_key(int.from_bytes(raw, "big"), _CURVES[params.curve]())
            return ed25519.Ed25519PrivateKey.from_private_bytes(raw)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise SigningError(f"Invalid {params.params_id.value} private key: {e}", cause=e)

    def _load_public(self, handle: KeyHandle):
        params = self._usable_params(handle.params_id)
        try:
            if params.algorithm == "ecdsa":
                return ec.EllipticCurvePublicKey.from_encoded_point(_CURVES[params.curve](), handle.raw)
            return ed25519.Ed25519PublicKey.from_public_bytes(handle.raw)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise KeyPrimitiveError(f"Invalid {params.params_id.value} public key: {e}", cause=e)


_default_provider: KeyProvider = CryptographyKeyProvider()


def get_default_provider() -> KeyProvider:
    """Get the process-wide default key provider."""
    return _default_provider


def set_default_provider(provider: KeyProvider) -> None:
    """Replace the process-wide default key provider."""
    global _default_provider
    if not isinstance(provider, KeyProvider):
        raise TypeError(f"Expected a KeyProvider, got {type(provider).__name__}")
    _default_provider = provider


__all__ = [
    "KeyProvider",
    "CryptographyKeyProvider",
    "get_default_provider",
    "set_default_provider",
]
