"""Constants, byte helpers and codecs shared across the toolkit."""

from .clusters import Cluster, Commitment
from .constants import (
    BLOCKHASH_SIZE,
    ED25519_PROGRAM_ID,
    MAX_MESSAGE_ACCOUNTS,
    MAX_SEED_LEN,
    PDA_MARKER,
    PUBKEY_SIZE,
    SIGNATURE_SIZE,
    SYSTEM_PROGRAM_ID,
    SYSVAR_INSTRUCTIONS_ID,
)
from .shortvec import decode_length, encode_length
from .utils import (
    base58_to_blockhash,
    base58_to_bytes,
    base58_to_pubkey,
    sha256,
    to_base58,
)

__all__ = [
    # Config
    "Cluster",
    "Commitment",
    # Constants
    "BLOCKHASH_SIZE",
    "ED25519_PROGRAM_ID",
    "MAX_MESSAGE_ACCOUNTS",
    "MAX_SEED_LEN",
    "PDA_MARKER",
    "PUBKEY_SIZE",
    "SIGNATURE_SIZE",
    "SYSTEM_PROGRAM_ID",
    "SYSVAR_INSTRUCTIONS_ID",
    # Short-vec
    "encode_length",
    "decode_length",
    # Utils
    "base58_to_blockhash",
    "base58_to_bytes",
    "base58_to_pubkey",
    "sha256",
    "to_base58",
]
