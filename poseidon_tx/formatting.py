"""Human-readable renderings of transaction types.

Keys, blockhashes and signatures are shown as base58; instruction data as hex.
These helpers are for logs and debugging only.
"""

from typing import Any, Dict

from .shared.utils import to_base58
from .transactions.accounts import AccountMeta
from .transactions.instruction import Instruction
from .transactions.message import CompiledInstruction, Message
from .transactions.resolver import AccountTable
from .transactions.transaction import Transaction


def describe_account_meta(meta: AccountMeta) -> Dict[str, Any]:
    return {
        "pubkey": to_base58(meta.pubkey),
        "is_signer": meta.is_signer,
        "is_writable": meta.is_writable,
    }


def describe_instruction(ix: Instruction) -> Dict[str, Any]:
    return {
        "program_id": to_base58(ix.program_id),
        "accounts": [describe_account_meta(meta) for meta in ix.accounts],
        "data": ix.data.hex(),
    }


def describe_account_table(table: AccountTable) -> Dict[str, Any]:
    """Split a table into signed and unsigned keys, like a node would read it."""
    return {
        "signed_keys": [to_base58(meta.pubkey) for meta in table if meta.is_signer],
        "unsigned_keys": [to_base58(meta.pubkey) for meta in table if not meta.is_signer],
        "num_readonly_signed_accounts": table.num_readonly_signed,
        "num_readonly_unsigned_accounts": table.num_readonly_unsigned,
    }


def describe_compiled_instruction(ix: CompiledInstruction) -> Dict[str, Any]:
    return {
        "program_id_index": ix.program_id_index,
        "accounts": list(ix.accounts),
        "data": ix.data.hex(),
    }


def describe_message(message: Message) -> Dict[str, Any]:
    return {
        "header": {
            "num_required_signatures": message.header.num_required_signatures,
            "num_readonly_signed_accounts": message.header.num_readonly_signed_accounts,
            "num_readonly_unsigned_accounts": message.header.num_readonly_unsigned_accounts,
        },
        "account_keys": [to_base58(key) for key in message.account_keys],
        "recent_blockhash": to_base58(message.recent_blockhash),
        "instructions": [describe_compiled_instruction(ix) for ix in message.instructions],
    }


def describe_transaction(tx: Transaction) -> Dict[str, Any]:
    return {
        "signatures": [to_base58(sig) for sig in tx.signatures],
        "message": describe_message(tx.message),
    }
