"""Instructions and the fluent instruction builder."""

from dataclasses import dataclass, field
from typing import List, Tuple

from solders.instruction import Instruction as SoldersInstruction
from solders.pubkey import Pubkey

from ..shared.constants import SYSTEM_PROGRAM_ID
from ..shared.utils import base58_to_pubkey
from .accounts import AccountMeta


@dataclass(frozen=True)
class Instruction:
    """A request to run ``program_id`` against ``accounts`` with opaque ``data``."""

    program_id: Pubkey
    accounts: Tuple[AccountMeta, ...] = ()
    data: bytes = b""

    def __post_init__(self):
        # Accept any sequence from callers but store an immutable copy
        object.__setattr__(self, "accounts", tuple(self.accounts))
        object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def from_solders(cls, ix: SoldersInstruction) -> "Instruction":
        """Convert a solders instruction."""
        return cls(
            program_id=ix.program_id,
            accounts=tuple(AccountMeta.from_solders(meta) for meta in ix.accounts),
            data=bytes(ix.data),
        )

    def to_solders(self) -> SoldersInstruction:
        return SoldersInstruction(
            program_id=self.program_id,
            data=self.data,
            accounts=[meta.to_solders() for meta in self.accounts],
        )


@dataclass
class InstructionBuilder:
    """Fluent builder for :class:`Instruction`.

    Example:
        ix = (
            InstructionBuilder()
            .add_program_id(program_id)
            .add_account(AccountMeta.new(payer, True))
            .add_data(b"\\x01")
            .build()
        )
    """

    program_id: Pubkey = SYSTEM_PROGRAM_ID
    accounts: List[AccountMeta] = field(default_factory=list)
    data: bytes = b""

    def add_program_id(self, program_id: Pubkey) -> "InstructionBuilder":
        self.program_id = program_id
        return self

    def add_base58_program_id(self, program_id: str) -> "InstructionBuilder":
        """Set the program id from a base58 string.

        Raises:
            InvalidBase58ForPublicKeyError: If the string is not valid base58
            InvalidPublicKeyLengthError: If it does not decode to 32 bytes
        """
        self.program_id = base58_to_pubkey(program_id)
        return self

    def add_account(self, account_meta: AccountMeta) -> "InstructionBuilder":
        self.accounts.append(account_meta)
        return self

    def add_data(self, data: bytes) -> "InstructionBuilder":
        self.data = bytes(data)
        return self

    def build(self) -> Instruction:
        """Build the instruction, dropping exact duplicate account metas.

        Only metas identical in key and both flags are dropped; the same key
        with different flags is kept and merged later by the resolver.
        """
        unique: List[AccountMeta] = []
        seen = set()
        for meta in self.accounts:
            if meta in seen:
                continue
            seen.add(meta)
            unique.append(meta)

        return Instruction(program_id=self.program_id, accounts=tuple(unique), data=self.data)
