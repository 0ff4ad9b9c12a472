"""Message compilation and wire serialization.

A message is the signable body of a transaction: a header, the ordered account
keys, a recent blockhash and instructions whose program and accounts are given
as indices into the account keys.

Wire layout:
- header: num_required_signatures (u8), num_readonly_signed_accounts (u8),
  num_readonly_unsigned_accounts (u8)
- account_keys: short-vec count + 32 bytes each
- recent_blockhash (32)
- instructions: short-vec count, then per instruction:
  program_id_index (u8), short-vec account index list, short-vec data
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from solders.hash import Hash
from solders.pubkey import Pubkey

from ..errors import (
    AccountIndexNotFoundInMessageAccountsError,
    ProgramIdNotFoundError,
    PublicKeyNotFoundInMessageAccountsError,
    TooManyAccountsError,
)
from ..shared.constants import (
    BLOCKHASH_SIZE,
    MAX_HEADER_COUNT,
    MAX_MESSAGE_ACCOUNTS,
    PUBKEY_SIZE,
)
from ..shared.shortvec import decode_length, encode_length
from ..shared.utils import encode_u8
from .instruction import Instruction
from .resolver import AccountTable, resolve_accounts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageHeader:
    """Signer and read-only counts for a message's account keys.

    The first ``num_required_signatures`` keys must sign. Of those, the last
    ``num_readonly_signed_accounts`` are read-only; of the remaining keys, the
    last ``num_readonly_unsigned_accounts`` are read-only.
    """

    num_required_signatures: int = 0
    num_readonly_signed_accounts: int = 0
    num_readonly_unsigned_accounts: int = 0

    @classmethod
    def from_table(cls, table: AccountTable) -> "MessageHeader":
        """Take the header counts from the table entries.

        Raises:
            TooManyAccountsError: If a count does not fit in a u8
        """
        header = cls(
            num_required_signatures=table.num_signers,
            num_readonly_signed_accounts=table.num_readonly_signed,
            num_readonly_unsigned_accounts=table.num_readonly_unsigned,
        )
        for count in (
            header.num_required_signatures,
            header.num_readonly_signed_accounts,
            header.num_readonly_unsigned_accounts,
        ):
            if count > MAX_HEADER_COUNT:
                raise TooManyAccountsError(count, MAX_HEADER_COUNT)
        return header

    def serialize(self) -> bytes:
        return (
            encode_u8(self.num_required_signatures)
            + encode_u8(self.num_readonly_signed_accounts)
            + encode_u8(self.num_readonly_unsigned_accounts)
        )


@dataclass(frozen=True)
class CompiledInstruction:
    """An instruction whose program and accounts are account-key indices."""

    program_id_index: int
    accounts: Tuple[int, ...] = ()
    data: bytes = b""

    def __post_init__(self):
        object.__setattr__(self, "accounts", tuple(self.accounts))
        object.__setattr__(self, "data", bytes(self.data))

    def serialize(self) -> bytes:
        out = bytearray()
        out.extend(encode_u8(self.program_id_index))
        out.extend(encode_length(len(self.accounts)))
        for index in self.accounts:
            out.extend(encode_u8(index))
        out.extend(encode_length(len(self.data)))
        out.extend(self.data)
        return bytes(out)


@dataclass(frozen=True)
class Message:
    """A compiled, immutable transaction message."""

    header: MessageHeader
    account_keys: Tuple[Pubkey, ...]
    recent_blockhash: Hash
    instructions: Tuple[CompiledInstruction, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "account_keys", tuple(self.account_keys))
        object.__setattr__(self, "instructions", tuple(self.instructions))

    @property
    def signer_keys(self) -> Tuple[Pubkey, ...]:
        """Keys whose signatures the message requires, in signature order."""
        return self.account_keys[: self.header.num_required_signatures]

    def serialize(self) -> bytes:
        """Serialize the message into its wire format (the bytes that get signed)."""
        out = bytearray()
        out.extend(self.header.serialize())
        out.extend(encode_length(len(self.account_keys)))
        for key in self.account_keys:
            out.extend(bytes(key))
        out.extend(bytes(self.recent_blockhash))
        out.extend(encode_length(len(self.instructions)))
        for ix in self.instructions:
            out.extend(ix.serialize())
        return bytes(out)

    def __bytes__(self) -> bytes:
        return self.serialize()

    @classmethod
    def deserialize(cls, data: bytes, offset: int = 0) -> "Message":
        """Deserialize a message. Trailing bytes are rejected."""
        message, end = cls.deserialize_from(data, offset)
        if end != len(data):
            raise ValueError(f"Trailing bytes after message: {len(data) - end}")
        return message

    @classmethod
    def deserialize_from(cls, data: bytes, offset: int = 0) -> Tuple["Message", int]:
        """Deserialize a message starting at ``offset``.

        Returns:
            (message, offset just past the message)

        Raises:
            ValueError: If the data is truncated or malformed
        """
        reader = _Reader(data, offset)

        header = MessageHeader(
            num_required_signatures=reader.u8(),
            num_readonly_signed_accounts=reader.u8(),
            num_readonly_unsigned_accounts=reader.u8(),
        )

        num_keys = reader.length()
        account_keys = [Pubkey.from_bytes(reader.take(PUBKEY_SIZE)) for _ in range(num_keys)]

        recent_blockhash = Hash.from_bytes(reader.take(BLOCKHASH_SIZE))

        instructions = []
        for _ in range(reader.length()):
            program_id_index = reader.u8()
            accounts = tuple(reader.take(reader.length()))
            ix_data = reader.take(reader.length())
            instructions.append(
                CompiledInstruction(program_id_index=program_id_index, accounts=accounts, data=ix_data)
            )

        message = cls(
            header=header,
            account_keys=tuple(account_keys),
            recent_blockhash=recent_blockhash,
            instructions=tuple(instructions),
        )
        return message, reader.offset


class _Reader:
    """Cursor over a byte buffer that raises ValueError on truncation."""

    def __init__(self, data: bytes, offset: int = 0):
        self.data = data
        self.offset = offset

    def take(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise ValueError(
                f"Not enough bytes at offset {self.offset}: "
                f"need {size} bytes, have {len(self.data) - self.offset}"
            )
        chunk = bytes(self.data[self.offset : end])
        self.offset = end
        return chunk

    def u8(self) -> int:
        return self.take(1)[0]

    def length(self) -> int:
        value, consumed = decode_length(self.data, self.offset)
        self.offset += consumed
        return value


def compile_instruction(
    table: AccountTable,
    instruction: Instruction,
    instruction_index: int = 0,
) -> CompiledInstruction:
    """Rewrite one instruction's keys as table positions.

    Raises:
        ProgramIdNotFoundError: If the program id is not in the table
        AccountIndexNotFoundInMessageAccountsError: If any account is not in
            the table (the missing key is chained as the cause)
    """
    program_id_index = table.position(instruction.program_id)
    if program_id_index is None:
        raise ProgramIdNotFoundError(str(instruction.program_id))

    try:
        accounts = tuple(_account_position(table, meta.pubkey) for meta in instruction.accounts)
    except PublicKeyNotFoundInMessageAccountsError as e:
        raise AccountIndexNotFoundInMessageAccountsError(instruction_index) from e

    return CompiledInstruction(
        program_id_index=program_id_index,
        accounts=accounts,
        data=instruction.data,
    )


def _account_position(table: AccountTable, pubkey: Pubkey) -> int:
    pos = table.position(pubkey)
    if pos is None:
        raise PublicKeyNotFoundInMessageAccountsError(str(pubkey))
    return pos


def compile_message(
    table: AccountTable,
    recent_blockhash: Hash,
    instructions: Sequence[Instruction],
) -> Message:
    """Compile instructions against a resolved account table.

    The table is not modified. Compilation stops at the first instruction that
    cannot be compiled.

    Raises:
        TooManyAccountsError: If the table has more entries than a u8 index
            can address, or a header count does not fit in a u8
    """
    if len(table) > MAX_MESSAGE_ACCOUNTS:
        raise TooManyAccountsError(len(table), MAX_MESSAGE_ACCOUNTS)

    compiled = tuple(
        compile_instruction(table, ix, i) for i, ix in enumerate(instructions)
    )
    header = MessageHeader.from_table(table)

    logger.debug(
        f"Compiled {len(compiled)} instructions over {len(table)} accounts "
        f"({header.num_required_signatures} signers)"
    )
    return Message(
        header=header,
        account_keys=tuple(table.keys),
        recent_blockhash=recent_blockhash,
        instructions=compiled,
    )


@dataclass
class MessageBuilder:
    """Fluent builder that resolves and compiles a message in one step.

    Example:
        message = (
            MessageBuilder()
            .add_payer(payer)
            .add_instruction(ix)
            .add_recent_blockhash(blockhash)
            .build()
        )
    """

    instructions: List[Instruction] = field(default_factory=list)
    payer: Optional[Pubkey] = None
    recent_blockhash: Hash = field(default_factory=Hash.default)

    def add_instruction(self, instruction: Instruction) -> "MessageBuilder":
        self.instructions.append(instruction)
        return self

    def add_instructions(self, instructions: Sequence[Instruction]) -> "MessageBuilder":
        self.instructions.extend(instructions)
        return self

    def add_payer(self, payer: Pubkey) -> "MessageBuilder":
        self.payer = payer
        return self

    def add_recent_blockhash(self, blockhash: Hash) -> "MessageBuilder":
        self.recent_blockhash = blockhash
        return self

    def account_table(self) -> AccountTable:
        return resolve_accounts(self.instructions, self.payer)

    def build(self) -> Message:
        return compile_message(self.account_table(), self.recent_blockhash, self.instructions)
