"""Tests for Ed25519 verify instruction encoding."""

import struct

import pytest
from nacl.signing import SigningKey, VerifyKey

from poseidon_tx import (
    ED25519_PROGRAM_ID,
    Ed25519InstructionBuilder,
    Ed25519SignatureOffsets,
    build_ed25519_verify_instruction,
    encode_ed25519_instruction_data,
)
from poseidon_tx.shared.constants import DATA_START

PUBKEY = bytes(range(32))
SIGNATURE = bytes(range(100, 164))
MESSAGE = b"hello ledger"


class TestEncodeEd25519InstructionData:
    def test_layout(self):
        data = encode_ed25519_instruction_data(PUBKEY, SIGNATURE, MESSAGE)

        expected = (
            bytes([1, 0])
            + struct.pack("<7H", 48, 0xFFFF, 16, 0xFFFF, 112, len(MESSAGE), 0xFFFF)
            + PUBKEY
            + SIGNATURE
            + MESSAGE
        )
        assert data == expected
        assert len(data) == 112 + len(MESSAGE)

    def test_offsets_point_at_payload(self):
        data = encode_ed25519_instruction_data(PUBKEY, SIGNATURE, MESSAGE)
        offsets = Ed25519SignatureOffsets.unpack(data, 2)

        assert data[offsets.public_key_offset : offsets.public_key_offset + 32] == PUBKEY
        assert data[offsets.signature_offset : offsets.signature_offset + 64] == SIGNATURE
        start = offsets.message_data_offset
        assert data[start : start + offsets.message_data_size] == MESSAGE

    def test_offsets_follow_data_start(self):
        data = encode_ed25519_instruction_data(PUBKEY, SIGNATURE, MESSAGE)
        offsets = Ed25519SignatureOffsets.unpack(data, 2)

        assert offsets.public_key_offset == DATA_START
        assert offsets.signature_offset == DATA_START + 32
        assert offsets.message_data_offset == DATA_START + 32 + 64

    def test_deterministic(self):
        assert encode_ed25519_instruction_data(
            PUBKEY, SIGNATURE, MESSAGE
        ) == encode_ed25519_instruction_data(PUBKEY, SIGNATURE, MESSAGE)

    def test_empty_message(self):
        data = encode_ed25519_instruction_data(PUBKEY, SIGNATURE, b"")

        assert len(data) == 112
        assert Ed25519SignatureOffsets.unpack(data, 2).message_data_size == 0

    def test_wrong_pubkey_size(self):
        with pytest.raises(ValueError, match="Public key"):
            encode_ed25519_instruction_data(PUBKEY[:31], SIGNATURE, MESSAGE)

    def test_wrong_signature_size(self):
        with pytest.raises(ValueError, match="Signature"):
            encode_ed25519_instruction_data(PUBKEY, SIGNATURE + b"\x00", MESSAGE)

    def test_message_too_long(self):
        with pytest.raises(ValueError, match="u16"):
            encode_ed25519_instruction_data(PUBKEY, SIGNATURE, bytes(0x10000))

    def test_real_signature_verifies_from_embedded_data(self):
        signing_key = SigningKey(bytes([7] * 32))
        public_key = bytes(signing_key.verify_key)
        signature = signing_key.sign(MESSAGE).signature

        data = encode_ed25519_instruction_data(public_key, signature, MESSAGE)
        offsets = Ed25519SignatureOffsets.unpack(data, 2)

        embedded_key = data[offsets.public_key_offset : offsets.public_key_offset + 32]
        embedded_sig = data[offsets.signature_offset : offsets.signature_offset + 64]
        embedded_msg = data[offsets.message_data_offset :]
        VerifyKey(embedded_key).verify(embedded_msg, embedded_sig)


class TestEd25519SignatureOffsets:
    def test_pack_size(self):
        offsets = Ed25519SignatureOffsets(1, 2, 3, 4, 5, 6, 7)

        assert len(offsets.pack()) == 14
        assert Ed25519SignatureOffsets.unpack(offsets.pack()) == offsets

    def test_pack_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            Ed25519SignatureOffsets(0x10000, 0, 0, 0, 0, 0, 0).pack()


class TestBuildEd25519VerifyInstruction:
    def test_instruction(self):
        ix = build_ed25519_verify_instruction(PUBKEY, SIGNATURE, MESSAGE)

        assert ix.program_id == ED25519_PROGRAM_ID
        assert ix.accounts == ()
        assert ix.data == encode_ed25519_instruction_data(PUBKEY, SIGNATURE, MESSAGE)

    def test_builder(self):
        ix = Ed25519InstructionBuilder(PUBKEY).add_signature(SIGNATURE).build(MESSAGE)

        assert ix == build_ed25519_verify_instruction(PUBKEY, SIGNATURE, MESSAGE)

    def test_builder_defaults_to_zero_signature(self):
        ix = Ed25519InstructionBuilder(PUBKEY).build(MESSAGE)

        assert ix.data[48:112] == bytes(64)
