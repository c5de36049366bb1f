"""
Local in-memory secp256k1 signer.
"""
import logging
from typing import Optional, Union

from cosmpy.crypto.address import Address
from cosmpy.crypto.keypairs import PrivateKey, PublicKey

from ..exceptions import SigningFailedError

logger = logging.getLogger(__name__)


class LocalSigner:
    """
    Signer backed by a private key held in process memory.

    Args:
        private_key: 32-byte key as raw bytes or hex string (with or without 0x prefix)
    """

    def __init__(self, private_key: Union[bytes, str]):
        if isinstance(private_key, str):
            hex_key = private_key[2:] if private_key.startswith("0x") else private_key
            try:
                private_key = bytes.fromhex(hex_key)
            except ValueError as e:
                raise SigningFailedError(f"Invalid private key hex: {e}") from e

        if len(private_key) != 32:
            raise SigningFailedError(f"Private key must be 32 bytes, got {len(private_key)}")

        try:
            self._key = PrivateKey(private_key)
            self._public_key = self._key.public_key
        except Exception as e:
            raise SigningFailedError(f"Invalid secp256k1 private key: {e}") from e

    @classmethod
    def generate(cls) -> "LocalSigner":
        """Create a signer with a fresh random key."""
        return cls(PrivateKey().private_key_bytes)

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    def address(self, prefix: str) -> str:
        return str(Address(self._public_key, prefix=prefix))

    def sign(self, message: bytes, deterministic: bool = False, canonicalise: bool = True) -> bytes:
        return self._key.sign(message, deterministic=deterministic, canonicalise=canonicalise)

    def __repr__(self) -> str:
        # Never expose key material
        return f"LocalSigner(public_key={self._public_key.public_key_hex[:12]}...)"
