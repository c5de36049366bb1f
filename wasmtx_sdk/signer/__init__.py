"""
Signer implementations for the wasmtx SDK.

A signer is the caller-owned signing identity passed into every
state-changing operation; the client never stores it.
"""
from typing import Protocol, runtime_checkable

from cosmpy.crypto.keypairs import PublicKey

from .local import LocalSigner

__all__ = ["Signer", "LocalSigner"]


@runtime_checkable
class Signer(Protocol):
    """Protocol for custom signers (hardware wallets, remote signers, ...)"""

    @property
    def public_key(self) -> PublicKey:
        """secp256k1 public key placed in the transaction's signer info"""
        ...

    def address(self, prefix: str) -> str:
        """bech32 account address for the given prefix"""
        ...

    def sign(self, message: bytes, deterministic: bool = False, canonicalise: bool = True) -> bytes:
        """Sign the serialized SignDoc and return the raw 64-byte signature"""
        ...
