"""Seed-derived address functions for the Poseidon transaction toolkit.

An address derived with a seed is ``sha256(base || seed || owner)``. Only the
owner marker suffix is checked; whether the result lies off the ed25519 curve
is not verified.
"""

from typing import Optional, Union

from solders.pubkey import Pubkey

from ..errors import IllegalOwnerError, MaxSeedLengthExceededError
from ..shared.constants import (
    MAX_SEED_LEN,
    PDA_MARKER,
    SYSTEM_IX_CREATE_ACCOUNT_WITH_SEED,
    SYSTEM_PROGRAM_ID,
)
from ..shared.utils import encode_u32, encode_u64, sha256
from .accounts import AccountMeta
from .instruction import Instruction

Seed = Union[str, bytes]


def _seed_bytes(seed: Seed) -> bytes:
    if isinstance(seed, str):
        return seed.encode("utf-8")
    return bytes(seed)


def derive_address_with_seed(base: Pubkey, seed: Seed, owner: Pubkey) -> Pubkey:
    """Derive the address owned by ``owner`` for ``base`` and ``seed``.

    Hash order is fixed: base, then seed, then owner.

    Raises:
        MaxSeedLengthExceededError: If the seed is longer than 32 bytes
        IllegalOwnerError: If the owner ends with the derived-address marker
    """
    seed_bytes = _seed_bytes(seed)
    if len(seed_bytes) > MAX_SEED_LEN:
        raise MaxSeedLengthExceededError(len(seed_bytes), MAX_SEED_LEN)

    owner_bytes = bytes(owner)
    if owner_bytes[-len(PDA_MARKER):] == PDA_MARKER:
        raise IllegalOwnerError(str(owner))

    return Pubkey.from_bytes(sha256(bytes(base), seed_bytes, owner_bytes))


def build_create_account_with_seed_instruction(
    from_pubkey: Pubkey,
    to_pubkey: Pubkey,
    base: Pubkey,
    seed: Seed,
    lamports: int,
    space: int,
    owner: Pubkey,
) -> Instruction:
    """Build a system program CreateAccountWithSeed instruction.

    Data layout (bincode):
    - variant (u32 LE): 3
    - base (32)
    - seed: length (u64 LE) + utf-8 bytes
    - lamports (u64 LE)
    - space (u64 LE)
    - owner (32)

    Accounts:
    0. [signer, writable] Funding account
    1. [writable] Derived account
    2. [signer] Base account
    """
    seed_bytes = _seed_bytes(seed)

    data = bytearray()
    data.extend(encode_u32(SYSTEM_IX_CREATE_ACCOUNT_WITH_SEED))
    data.extend(bytes(base))
    data.extend(encode_u64(len(seed_bytes)))
    data.extend(seed_bytes)
    data.extend(encode_u64(lamports))
    data.extend(encode_u64(space))
    data.extend(bytes(owner))

    return Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(
            AccountMeta.new(from_pubkey, True),
            AccountMeta.new(to_pubkey, False),
            AccountMeta.new_readonly(base, True),
        ),
        data=bytes(data),
    )


class PdaBuilder:
    """Fluent builder for a seed-derived account.

    The derived address is computed lazily and cached; every setter clears the
    cache.

    Example:
        builder = PdaBuilder().base(payer).owner(program_id).seed("vault")
        address = builder.derive()
        ix = builder.from_pubkey(payer).lamports(1_000_000).space(64).build_instruction()
    """

    def __init__(self):
        self._base = Pubkey.default()
        self._owner = Pubkey.default()
        self._seed: bytes = b""
        self._from_pubkey = Pubkey.default()
        self._lamports = 0
        self._space = 0
        self._derived: Optional[Pubkey] = None

    def base(self, pubkey: Pubkey) -> "PdaBuilder":
        self._base = pubkey
        self._derived = None
        return self

    def owner(self, pubkey: Pubkey) -> "PdaBuilder":
        self._owner = pubkey
        self._derived = None
        return self

    def seed(self, seed: Seed) -> "PdaBuilder":
        self._seed = _seed_bytes(seed)
        self._derived = None
        return self

    def from_pubkey(self, pubkey: Pubkey) -> "PdaBuilder":
        self._from_pubkey = pubkey
        return self

    def lamports(self, lamports: int) -> "PdaBuilder":
        self._lamports = lamports
        return self

    def space(self, space: int) -> "PdaBuilder":
        self._space = space
        return self

    def derive(self) -> Pubkey:
        """Return the derived address, computing it on first use."""
        if self._derived is None:
            self._derived = derive_address_with_seed(self._base, self._seed, self._owner)
        return self._derived

    @property
    def derived(self) -> Optional[Pubkey]:
        """The cached derived address, or None if not yet derived."""
        return self._derived

    def build_instruction(self) -> Instruction:
        """Build the CreateAccountWithSeed instruction for the derived address."""
        return build_create_account_with_seed_instruction(
            from_pubkey=self._from_pubkey,
            to_pubkey=self.derive(),
            base=self._base,
            seed=self._seed,
            lamports=self._lamports,
            space=self._space,
            owner=self._owner,
        )
