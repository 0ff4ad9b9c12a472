"""Tests for message compilation and serialization."""

import pytest
from solders.hash import Hash
from solders.instruction import CompiledInstruction as SoldersCompiledInstruction
from solders.message import Message as SoldersMessage
from solders.pubkey import Pubkey

from poseidon_tx import (
    AccountIndexNotFoundInMessageAccountsError,
    AccountMeta,
    AccountTable,
    CompiledInstruction,
    Instruction,
    Message,
    MessageBuilder,
    MessageHeader,
    ProgramIdNotFoundError,
    PublicKeyNotFoundInMessageAccountsError,
    TooManyAccountsError,
    compile_message,
    resolve_accounts,
)


@pytest.fixture
def scenario():
    a, b, p1, p2 = (Pubkey.new_unique() for _ in range(4))
    ix1 = Instruction(
        program_id=p1,
        accounts=[AccountMeta.new(a, True), AccountMeta.new_readonly(b, False)],
        data=b"\x01\x02",
    )
    ix2 = Instruction(
        program_id=p2,
        accounts=[AccountMeta.new_readonly(b, True)],
        data=b"\x03",
    )
    return {"keys": (a, b, p1, p2), "instructions": [ix1, ix2]}


class TestCompileMessage:
    def test_header_and_keys(self, scenario, blockhash):
        a, b, p1, p2 = scenario["keys"]
        ixs = scenario["instructions"]

        message = compile_message(resolve_accounts(ixs), blockhash, ixs)

        assert message.header == MessageHeader(
            num_required_signatures=2,
            num_readonly_signed_accounts=1,
            num_readonly_unsigned_accounts=2,
        )
        assert message.account_keys == (a, b, p1, p2)
        assert message.recent_blockhash == blockhash
        assert message.signer_keys == (a, b)

    def test_compiled_instructions(self, scenario, blockhash):
        ixs = scenario["instructions"]

        message = compile_message(resolve_accounts(ixs), blockhash, ixs)

        assert message.instructions == (
            CompiledInstruction(program_id_index=2, accounts=(0, 1), data=b"\x01\x02"),
            CompiledInstruction(program_id_index=3, accounts=(1,), data=b"\x03"),
        )

    def test_indices_map_back_to_instruction_keys(self, scenario, blockhash):
        ixs = scenario["instructions"]

        message = compile_message(resolve_accounts(ixs), blockhash, ixs)

        for ix, compiled in zip(ixs, message.instructions):
            assert message.account_keys[compiled.program_id_index] == ix.program_id
            assert [message.account_keys[i] for i in compiled.accounts] == [
                meta.pubkey for meta in ix.accounts
            ]

    def test_readonly_account_is_indexed_before_program_id(self, blockhash):
        program = Pubkey.new_unique()
        r = Pubkey.new_unique()
        ix = Instruction(program_id=program, accounts=[AccountMeta.new_readonly(r, False)])

        message = compile_message(resolve_accounts([ix]), blockhash, [ix])

        assert message.account_keys == (r, program)
        assert message.instructions == (
            CompiledInstruction(program_id_index=1, accounts=(0,), data=b""),
        )

    def test_repeated_account_is_not_deduplicated_in_instruction(self, blockhash):
        a = Pubkey.new_unique()
        program = Pubkey.new_unique()
        ix = Instruction(
            program_id=program,
            accounts=[AccountMeta.new(a, False), AccountMeta.new_readonly(a, False)],
        )

        message = compile_message(resolve_accounts([ix]), blockhash, [ix])

        assert message.instructions[0].accounts == (0, 0)

    def test_missing_program_id(self, blockhash):
        a = Pubkey.new_unique()
        table = AccountTable([AccountMeta.new(a, True)])
        ix = Instruction(program_id=Pubkey.new_unique(), accounts=[AccountMeta.new(a, True)])

        with pytest.raises(ProgramIdNotFoundError) as exc_info:
            compile_message(table, blockhash, [ix])

        assert exc_info.value.program_id == str(ix.program_id)

    def test_missing_account(self, blockhash):
        program = Pubkey.new_unique()
        missing = Pubkey.new_unique()
        table = AccountTable([AccountMeta.new_readonly(program, False)])
        ok = Instruction(program_id=program)
        bad = Instruction(program_id=program, accounts=[AccountMeta.new(missing, False)])

        with pytest.raises(AccountIndexNotFoundInMessageAccountsError) as exc_info:
            compile_message(table, blockhash, [ok, bad])

        assert exc_info.value.instruction_index == 1
        assert isinstance(exc_info.value.__cause__, PublicKeyNotFoundInMessageAccountsError)
        assert exc_info.value.__cause__.pubkey == str(missing)

    def test_table_is_not_mutated(self, scenario, blockhash):
        ixs = scenario["instructions"]
        table = resolve_accounts(ixs)
        before = list(table)

        compile_message(table, blockhash, ixs)

        assert list(table) == before

    def test_builder_matches_resolve_and_compile(self, scenario, blockhash):
        payer = Pubkey.new_unique()
        ixs = scenario["instructions"]

        built = (
            MessageBuilder()
            .add_payer(payer)
            .add_instructions(ixs)
            .add_recent_blockhash(blockhash)
            .build()
        )

        assert built == compile_message(resolve_accounts(ixs, payer), blockhash, ixs)
        assert built.account_keys[0] == payer


class TestAccountLimits:
    def test_rejects_more_accounts_than_u8_indices(self, blockhash):
        program = Pubkey.new_unique()
        accounts = [AccountMeta.new(Pubkey.new_unique(), False) for _ in range(300)]
        ix = Instruction(program_id=program, accounts=accounts)

        with pytest.raises(TooManyAccountsError) as exc_info:
            compile_message(resolve_accounts([ix]), blockhash, [ix])

        assert exc_info.value.count == 301
        assert exc_info.value.max_count == 256

    def test_accepts_exactly_256_accounts(self, blockhash):
        payer = Pubkey.new_unique()
        program = Pubkey.new_unique()
        accounts = [AccountMeta.new(Pubkey.new_unique(), False) for _ in range(254)]
        ix = Instruction(program_id=program, accounts=accounts)

        message = compile_message(resolve_accounts([ix], payer), blockhash, [ix])

        assert len(message.account_keys) == 256
        assert message.instructions[0].program_id_index == 255
        assert Message.deserialize(message.serialize()) == message

    def test_header_count_must_fit_in_u8(self):
        table = AccountTable(
            [AccountMeta.new_readonly(Pubkey.new_unique(), False) for _ in range(256)]
        )

        with pytest.raises(TooManyAccountsError) as exc_info:
            MessageHeader.from_table(table)

        assert exc_info.value.count == 256
        assert exc_info.value.max_count == 255


class TestMessageSerialization:
    def test_wire_layout(self):
        payer = Pubkey.from_bytes(bytes([1] * 32))
        program = Pubkey.from_bytes(bytes([2] * 32))
        blockhash = Hash.from_bytes(bytes([3] * 32))
        message = Message(
            header=MessageHeader(1, 0, 1),
            account_keys=(payer, program),
            recent_blockhash=blockhash,
            instructions=(CompiledInstruction(program_id_index=1, accounts=(0,), data=b"\xaa\xbb"),),
        )

        expected = (
            bytes([1, 0, 1])
            + bytes([2])
            + bytes([1] * 32)
            + bytes([2] * 32)
            + bytes([3] * 32)
            + bytes([1])
            + bytes([1, 1, 0, 2, 0xAA, 0xBB])
        )
        assert message.serialize() == expected
        assert bytes(message) == expected

    def test_deserialize_round_trip(self, scenario, blockhash):
        ixs = scenario["instructions"]
        message = compile_message(resolve_accounts(ixs), blockhash, ixs)

        assert Message.deserialize(message.serialize()) == message

    def test_deserialize_rejects_trailing_bytes(self, scenario, blockhash):
        ixs = scenario["instructions"]
        message = compile_message(resolve_accounts(ixs), blockhash, ixs)

        with pytest.raises(ValueError, match="Trailing"):
            Message.deserialize(message.serialize() + b"\x00")

    def test_deserialize_rejects_truncated_data(self, scenario, blockhash):
        ixs = scenario["instructions"]
        data = compile_message(resolve_accounts(ixs), blockhash, ixs).serialize()

        with pytest.raises(ValueError):
            Message.deserialize(data[:-1])

    def test_long_data_uses_multi_byte_length(self):
        compiled = CompiledInstruction(program_id_index=0, accounts=(), data=bytes(200))

        assert compiled.serialize()[:4] == bytes([0, 0, 0xC8, 0x01])

    @pytest.mark.interop
    def test_matches_solders_encoding(self, scenario, blockhash):
        ixs = scenario["instructions"]
        message = compile_message(resolve_accounts(ixs), blockhash, ixs)

        solders_message = SoldersMessage.new_with_compiled_instructions(
            message.header.num_required_signatures,
            message.header.num_readonly_signed_accounts,
            message.header.num_readonly_unsigned_accounts,
            list(message.account_keys),
            message.recent_blockhash,
            [
                SoldersCompiledInstruction(ix.program_id_index, ix.data, bytes(ix.accounts))
                for ix in message.instructions
            ],
        )

        assert message.serialize() == bytes(solders_message)
