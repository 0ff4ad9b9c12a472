"""Ed25519 verification instruction helpers for the Poseidon transaction toolkit.

The Ed25519 program verifies signatures embedded in its own instruction data.
The data starts with an offsets record telling the program where the public
key, signature and message live, so it can read them without deserializing.
"""

import struct
from dataclasses import dataclass

from ..shared.constants import (
    CURRENT_INSTRUCTION_INDEX,
    DATA_START,
    ED25519_PROGRAM_ID,
    PUBKEY_SIZE,
    SIGNATURE_SIZE,
)
from ..shared.utils import encode_u16, encode_u8
from .instruction import Instruction

_OFFSETS_FORMAT = "<7H"


@dataclass(frozen=True)
class Ed25519SignatureOffsets:
    """Offsets for Ed25519 signature verification data."""

    signature_offset: int  # u16
    signature_instruction_index: int  # u16
    public_key_offset: int  # u16
    public_key_instruction_index: int  # u16
    message_data_offset: int  # u16
    message_data_size: int  # u16
    message_instruction_index: int  # u16

    def pack(self) -> bytes:
        """Serialize to the 14-byte little-endian record.

        Raises:
            ValueError: If any field is out of u16 range
        """
        return b"".join(
            encode_u16(value)
            for value in (
                self.signature_offset,
                self.signature_instruction_index,
                self.public_key_offset,
                self.public_key_instruction_index,
                self.message_data_offset,
                self.message_data_size,
                self.message_instruction_index,
            )
        )

    @classmethod
    def unpack(cls, data: bytes, offset: int = 0) -> "Ed25519SignatureOffsets":
        return cls(*struct.unpack_from(_OFFSETS_FORMAT, data, offset))


def encode_ed25519_instruction_data(
    public_key: bytes,
    signature: bytes,
    message: bytes,
) -> bytes:
    """Encode Ed25519 program instruction data for a single signature.

    The instruction data layout:
    - num_signatures (1 byte): Always 1
    - padding (1 byte): Zero, keeps the offsets record aligned
    - signature_offset (u16 LE): 48
    - signature_instruction_index (u16 LE): 0xFFFF for current instruction
    - public_key_offset (u16 LE): 16
    - public_key_instruction_index (u16 LE): 0xFFFF for current instruction
    - message_data_offset (u16 LE): 112
    - message_data_size (u16 LE): Length of message
    - message_instruction_index (u16 LE): 0xFFFF for current instruction
    - Followed by: pubkey (32), signature (64), message (variable)

    Raises:
        ValueError: If the key or signature has the wrong size, or the message
            is too long for a u16 size
    """
    public_key = bytes(public_key)
    signature = bytes(signature)
    message = bytes(message)

    if len(public_key) != PUBKEY_SIZE:
        raise ValueError(f"Public key must be {PUBKEY_SIZE} bytes")
    if len(signature) != SIGNATURE_SIZE:
        raise ValueError(f"Signature must be {SIGNATURE_SIZE} bytes")

    public_key_offset = DATA_START
    signature_offset = public_key_offset + PUBKEY_SIZE
    message_data_offset = signature_offset + SIGNATURE_SIZE

    offsets = Ed25519SignatureOffsets(
        signature_offset=signature_offset,
        signature_instruction_index=CURRENT_INSTRUCTION_INDEX,
        public_key_offset=public_key_offset,
        public_key_instruction_index=CURRENT_INSTRUCTION_INDEX,
        message_data_offset=message_data_offset,
        message_data_size=len(message),
        message_instruction_index=CURRENT_INSTRUCTION_INDEX,
    )

    data = bytearray()
    data.extend(encode_u8(1))  # num_signatures
    data.append(0)  # padding
    data.extend(offsets.pack())
    data.extend(public_key)
    data.extend(signature)
    data.extend(message)

    return bytes(data)


def build_ed25519_verify_instruction(
    public_key: bytes,
    signature: bytes,
    message: bytes,
) -> Instruction:
    """Build an Ed25519 verify instruction for a single signature."""
    return Instruction(
        program_id=ED25519_PROGRAM_ID,
        accounts=(),  # Ed25519 program takes no accounts
        data=encode_ed25519_instruction_data(public_key, signature, message),
    )


class Ed25519InstructionBuilder:
    """Fluent builder for an Ed25519 verify instruction.

    The signature defaults to 64 zero bytes until one is added.
    """

    def __init__(self, public_key: bytes):
        self.public_key = bytes(public_key)
        self.signature = bytes(SIGNATURE_SIZE)

    def add_signature(self, signature: bytes) -> "Ed25519InstructionBuilder":
        self.signature = bytes(signature)
        return self

    def build(self, message: bytes) -> Instruction:
        return build_ed25519_verify_instruction(self.public_key, self.signature, message)
