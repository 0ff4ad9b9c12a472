"""Account metadata referenced by instructions."""

from dataclasses import dataclass, replace

from solders.instruction import AccountMeta as SoldersAccountMeta
from solders.pubkey import Pubkey


@dataclass(frozen=True)
class AccountMeta:
    """An account referenced by an instruction.

    Identity is ``pubkey``: two metas with the same key describe the same
    logical account and are merged by :meth:`merge`.
    """

    pubkey: Pubkey
    is_signer: bool
    is_writable: bool

    @classmethod
    def new(cls, pubkey: Pubkey, is_signer: bool) -> "AccountMeta":
        """Create a writable account meta."""
        return cls(pubkey=pubkey, is_signer=is_signer, is_writable=True)

    @classmethod
    def new_readonly(cls, pubkey: Pubkey, is_signer: bool) -> "AccountMeta":
        """Create a read-only account meta."""
        return cls(pubkey=pubkey, is_signer=is_signer, is_writable=False)

    @property
    def rank(self) -> tuple[bool, bool]:
        """Sort key: signers first, then writable before read-only."""
        return (not self.is_signer, not self.is_writable)

    def merge(self, other: "AccountMeta") -> "AccountMeta":
        """Fold a later reference to the same key into this one.

        Only ``is_writable`` is OR-ed in; the signer flag of the first
        occurrence is kept.
        """
        if other.pubkey != self.pubkey:
            raise ValueError(f"Cannot merge {other.pubkey} into {self.pubkey}")
        if other.is_writable and not self.is_writable:
            return replace(self, is_writable=True)
        return self

    @classmethod
    def from_solders(cls, meta: SoldersAccountMeta) -> "AccountMeta":
        return cls(pubkey=meta.pubkey, is_signer=meta.is_signer, is_writable=meta.is_writable)

    def to_solders(self) -> SoldersAccountMeta:
        return SoldersAccountMeta(
            pubkey=self.pubkey,
            is_signer=self.is_signer,
            is_writable=self.is_writable,
        )
