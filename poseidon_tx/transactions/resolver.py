"""Account resolution: merge every account referenced by a batch of
instructions into the single ordered table a message carries.

The table is ordered in four segments:
- signer, writable
- signer, read-only
- non-signer, writable
- non-signer, read-only

Resolution sorts first and merges second. A later writable reference to a key
already placed in a read-only segment marks that entry writable in place; the
entry is never moved.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from solders.pubkey import Pubkey

from .accounts import AccountMeta
from .instruction import Instruction

logger = logging.getLogger(__name__)


class AccountTable:
    """Ordered, deduplicated account list with an O(1) key -> position index."""

    def __init__(self, entries: Sequence[AccountMeta]):
        self._entries: Tuple[AccountMeta, ...] = tuple(entries)
        self._positions: Dict[Pubkey, int] = {}
        for i, meta in enumerate(self._entries):
            if meta.pubkey in self._positions:
                raise ValueError(f"Duplicate account in table: {meta.pubkey}")
            self._positions[meta.pubkey] = i

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AccountMeta]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> AccountMeta:
        return self._entries[index]

    def __contains__(self, pubkey: object) -> bool:
        return pubkey in self._positions

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccountTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"AccountTable({list(self._entries)!r})"

    @property
    def entries(self) -> Tuple[AccountMeta, ...]:
        return self._entries

    @property
    def keys(self) -> List[Pubkey]:
        return [meta.pubkey for meta in self._entries]

    def position(self, pubkey: Pubkey) -> Optional[int]:
        """Return the table position of ``pubkey``, or None if absent."""
        return self._positions.get(pubkey)

    @property
    def num_signers(self) -> int:
        return sum(1 for meta in self._entries if meta.is_signer)

    @property
    def num_readonly_signed(self) -> int:
        return sum(1 for meta in self._entries if meta.is_signer and not meta.is_writable)

    @property
    def num_readonly_unsigned(self) -> int:
        return sum(1 for meta in self._entries if not meta.is_signer and not meta.is_writable)

    @property
    def signer_keys(self) -> List[Pubkey]:
        return [meta.pubkey for meta in self._entries if meta.is_signer]


def collect_account_metas(
    instructions: Sequence[Instruction],
    payer: Optional[Pubkey] = None,
) -> List[AccountMeta]:
    """Flatten instructions into the unsorted reference list.

    The payer, if any, goes first. Every instruction's accounts follow in
    instruction order, then one read-only, non-signer entry per program id,
    also in instruction order.
    """
    metas: List[AccountMeta] = []
    if payer is not None:
        metas.append(AccountMeta(pubkey=payer, is_signer=True, is_writable=True))

    for ix in instructions:
        metas.extend(ix.accounts)
    for ix in instructions:
        metas.append(AccountMeta(pubkey=ix.program_id, is_signer=False, is_writable=False))

    return metas


def resolve_accounts(
    instructions: Sequence[Instruction],
    payer: Optional[Pubkey] = None,
) -> AccountTable:
    """Resolve the ordered account table for ``instructions``.

    Args:
        instructions: Instructions in execution order
        payer: Optional fee payer, placed first as a writable signer

    Returns:
        The deduplicated, ordered AccountTable
    """
    metas = collect_account_metas(instructions, payer)

    # list.sort is stable: equal ranks keep first-seen order
    metas.sort(key=lambda meta: meta.rank)

    unique: List[AccountMeta] = []
    positions: Dict[Pubkey, int] = {}
    for meta in metas:
        pos = positions.get(meta.pubkey)
        if pos is not None:
            unique[pos] = unique[pos].merge(meta)
            continue
        positions[meta.pubkey] = len(unique)
        unique.append(meta)

    logger.debug(
        f"Resolved {len(metas)} account references from {len(instructions)} "
        f"instructions into {len(unique)} accounts"
    )
    return AccountTable(unique)
