"""Cryptographic primitives used for program address derivation.

The derivation engine only needs two operations: a 32-byte hash and a
check whether 32 bytes decompress to a point on the ed25519 curve. They are
grouped behind ``CryptoBackend`` so the engine can be driven by any
implementation that matches the runtime's semantics.
"""

from typing import Protocol

from solders.pubkey import Pubkey

from .utils import sha256


class CryptoBackend(Protocol):
    """Hash and curve-membership primitives for PDA derivation."""

    def hash(self, data: bytes) -> bytes:
        """Return the 32-byte digest of data."""
        ...

    def is_on_curve(self, point: bytes) -> bool:
        """Return True if the 32 bytes are a valid compressed ed25519 point."""
        ...


def is_on_ed25519_curve(point: bytes) -> bool:
    """Check whether 32 bytes decompress to an ed25519 point.

    Uses the same curve25519-dalek check as the Solana runtime.
    """
    if len(point) != 32:
        raise ValueError(f"Curve point must be 32 bytes, got {len(point)}")
    return Pubkey.from_bytes(bytes(point)).is_on_curve()


class Ed25519Sha256Backend:
    """SHA-256 and ed25519, the primitives used by the Solana runtime."""

    def hash(self, data: bytes) -> bytes:
        return sha256(data)

    def is_on_curve(self, point: bytes) -> bool:
        return is_on_ed25519_curve(point)
