"""Byte-level helpers shared across the Poseidon transaction toolkit.

The fixed-width integer encoders are the shared encoders every wire format in
the package goes through (message header and indices, Ed25519 offsets, system
instruction data). Each one range-checks before packing.
"""

import struct
from typing import Union

import base58
from Crypto.Hash import SHA256
from solders.hash import Hash
from solders.pubkey import Pubkey

from ..errors import (
    InvalidBase58ForPublicKeyError,
    InvalidPublicKeyLengthError,
)
from .constants import BLOCKHASH_SIZE, PUBKEY_SIZE


def sha256(*chunks: bytes) -> bytes:
    """Compute the SHA-256 digest of the concatenated chunks, in order."""
    h = SHA256.new()
    for chunk in chunks:
        h.update(chunk)
    return h.digest()


def encode_u8(value: int) -> bytes:
    """Encode an unsigned 8-bit integer.

    Raises:
        ValueError: If value is out of range [0, 255]
    """
    if not 0 <= value <= 255:
        raise ValueError(f"u8 value out of range: {value} (must be 0-255)")
    return struct.pack("<B", value)


def encode_u16(value: int) -> bytes:
    """Encode an unsigned 16-bit integer (little-endian).

    Raises:
        ValueError: If value is out of range [0, 65535]
    """
    if not 0 <= value <= 65535:
        raise ValueError(f"u16 value out of range: {value} (must be 0-65535)")
    return struct.pack("<H", value)


def encode_u32(value: int) -> bytes:
    """Encode an unsigned 32-bit integer (little-endian).

    Raises:
        ValueError: If value is out of range [0, 4294967295]
    """
    if not 0 <= value <= 4294967295:
        raise ValueError(f"u32 value out of range: {value} (must be 0-4294967295)")
    return struct.pack("<I", value)


def encode_u64(value: int) -> bytes:
    """Encode an unsigned 64-bit integer (little-endian).

    Raises:
        ValueError: If value is out of range [0, 2^64-1]
    """
    if not 0 <= value <= 18446744073709551615:
        raise ValueError(f"u64 value out of range: {value} (must be 0-18446744073709551615)")
    return struct.pack("<Q", value)


def base58_to_bytes(value: str) -> bytes:
    """Decode a base58 string.

    Raises:
        InvalidBase58ForPublicKeyError: If the string is not valid base58
    """
    try:
        return base58.b58decode(value)
    except ValueError as e:
        raise InvalidBase58ForPublicKeyError(value) from e


def base58_to_pubkey(value: str) -> Pubkey:
    """Decode a base58 string into a Pubkey.

    Raises:
        InvalidBase58ForPublicKeyError: If the string is not valid base58
        InvalidPublicKeyLengthError: If it does not decode to exactly 32 bytes
    """
    decoded = base58_to_bytes(value)
    if len(decoded) != PUBKEY_SIZE:
        raise InvalidPublicKeyLengthError(len(decoded))
    return Pubkey.from_bytes(decoded)


def base58_to_blockhash(value: str) -> Hash:
    """Decode a base58 string into a blockhash."""
    decoded = base58_to_bytes(value)
    if len(decoded) != BLOCKHASH_SIZE:
        raise InvalidPublicKeyLengthError(len(decoded))
    return Hash.from_bytes(decoded)


def to_base58(data: Union[bytes, Pubkey, Hash]) -> str:
    """Encode raw bytes (or anything convertible to bytes) as base58."""
    return base58.b58encode(bytes(data)).decode("ascii")
