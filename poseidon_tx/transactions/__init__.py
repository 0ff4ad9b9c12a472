"""Transaction assembly: account resolution, message compilation and signing.

Typical flow:
    table = resolve_accounts(instructions, payer)
    message = compile_message(table, recent_blockhash, instructions)
    tx = Transaction(message).sign([payer_keypair])
"""

from .accounts import AccountMeta
from .ed25519 import (
    Ed25519InstructionBuilder,
    Ed25519SignatureOffsets,
    build_ed25519_verify_instruction,
    encode_ed25519_instruction_data,
)
from .instruction import Instruction, InstructionBuilder
from .message import (
    CompiledInstruction,
    Message,
    MessageBuilder,
    MessageHeader,
    compile_instruction,
    compile_message,
)
from .pda import (
    PdaBuilder,
    build_create_account_with_seed_instruction,
    derive_address_with_seed,
)
from .resolver import AccountTable, collect_account_metas, resolve_accounts
from .transaction import Signer, Transaction, new_signed_transaction

__all__ = [
    # Accounts
    "AccountMeta",
    "AccountTable",
    "collect_account_metas",
    "resolve_accounts",
    # Instructions
    "Instruction",
    "InstructionBuilder",
    # Messages
    "CompiledInstruction",
    "Message",
    "MessageBuilder",
    "MessageHeader",
    "compile_instruction",
    "compile_message",
    # Address derivation
    "PdaBuilder",
    "build_create_account_with_seed_instruction",
    "derive_address_with_seed",
    # Ed25519
    "Ed25519InstructionBuilder",
    "Ed25519SignatureOffsets",
    "build_ed25519_verify_instruction",
    "encode_ed25519_instruction_data",
    # Transactions
    "Signer",
    "Transaction",
    "new_signed_transaction",
]
