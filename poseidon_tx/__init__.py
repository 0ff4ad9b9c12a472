"""Poseidon - transaction assembly for Solana-style ledgers.

This package provides three modules:
- `transactions`: Account resolution, message compilation, address derivation,
  Ed25519 instruction encoding and transaction signing
- `shared`: Constants, short-vec codec, base58 helpers and cluster selection
- `formatting`: Base58 debug renderings of transaction types

Example:
    from poseidon_tx import MessageBuilder, Transaction

    message = (
        MessageBuilder()
        .add_payer(payer.pubkey())
        .add_instruction(ix)
        .add_recent_blockhash(blockhash)
        .build()
    )
    tx = Transaction(message).sign([payer])
    wire = tx.to_bytes()
"""

__version__ = "0.1.0"

# ============================================================================
# MODULE IMPORTS
# ============================================================================

from . import errors
from . import shared
from . import transactions
from . import formatting

# ============================================================================
# CONVENIENCE RE-EXPORTS FROM TRANSACTIONS MODULE
# ============================================================================

from .transactions import (
    # Accounts
    AccountMeta,
    AccountTable,
    collect_account_metas,
    resolve_accounts,
    # Instructions
    Instruction,
    InstructionBuilder,
    # Messages
    CompiledInstruction,
    Message,
    MessageBuilder,
    MessageHeader,
    compile_instruction,
    compile_message,
    # Address derivation
    PdaBuilder,
    build_create_account_with_seed_instruction,
    derive_address_with_seed,
    # Ed25519
    Ed25519InstructionBuilder,
    Ed25519SignatureOffsets,
    build_ed25519_verify_instruction,
    encode_ed25519_instruction_data,
    # Transactions
    Signer,
    Transaction,
    new_signed_transaction,
)

# ============================================================================
# CONVENIENCE RE-EXPORTS FROM SHARED MODULE
# ============================================================================

from .shared import (
    # Config
    Cluster,
    Commitment,
    # Constants
    ED25519_PROGRAM_ID,
    MAX_MESSAGE_ACCOUNTS,
    MAX_SEED_LEN,
    PDA_MARKER,
    SYSTEM_PROGRAM_ID,
    SYSVAR_INSTRUCTIONS_ID,
    # Short-vec
    decode_length,
    encode_length,
    # Utils
    base58_to_blockhash,
    base58_to_pubkey,
    to_base58,
)

# ============================================================================
# ERRORS
# ============================================================================

from .errors import (
    PoseidonError,
    MaxSeedLengthExceededError,
    IllegalOwnerError,
    ProgramIdNotFoundError,
    PublicKeyNotFoundInMessageAccountsError,
    AccountIndexNotFoundInMessageAccountsError,
    InvalidBase58ForPublicKeyError,
    InvalidPublicKeyLengthError,
    MissingSignerError,
    SignatureCountMismatchError,
    TooManyAccountsError,
)

__all__ = [
    # Version
    "__version__",
    # Modules
    "errors",
    "shared",
    "transactions",
    "formatting",
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
    # Config
    "Cluster",
    "Commitment",
    # Constants
    "ED25519_PROGRAM_ID",
    "MAX_MESSAGE_ACCOUNTS",
    "MAX_SEED_LEN",
    "PDA_MARKER",
    "SYSTEM_PROGRAM_ID",
    "SYSVAR_INSTRUCTIONS_ID",
    # Short-vec
    "encode_length",
    "decode_length",
    # Utils
    "base58_to_blockhash",
    "base58_to_pubkey",
    "to_base58",
    # Errors
    "PoseidonError",
    "MaxSeedLengthExceededError",
    "IllegalOwnerError",
    "ProgramIdNotFoundError",
    "PublicKeyNotFoundInMessageAccountsError",
    "AccountIndexNotFoundInMessageAccountsError",
    "InvalidBase58ForPublicKeyError",
    "InvalidPublicKeyLengthError",
    "MissingSignerError",
    "SignatureCountMismatchError",
    "TooManyAccountsError",
]
