"""Protocol constants for the Poseidon transaction toolkit."""

from solders.pubkey import Pubkey

# ============================================================================
# PROGRAM IDS
# ============================================================================

SYSTEM_PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")
ED25519_PROGRAM_ID = Pubkey.from_string("Ed25519SigVerify111111111111111111111111111")
SYSVAR_INSTRUCTIONS_ID = Pubkey.from_string("Sysvar1nstructions1111111111111111111111111")

# ============================================================================
# SIZES
# ============================================================================

PUBKEY_SIZE = 32
SIGNATURE_SIZE = 64
BLOCKHASH_SIZE = 32

# ============================================================================
# MESSAGE LIMITS
# ============================================================================

# Account references and header counts are u8
MAX_MESSAGE_ACCOUNTS = 256
MAX_HEADER_COUNT = 255

# ============================================================================
# ADDRESS DERIVATION
# ============================================================================

MAX_SEED_LEN = 32
PDA_MARKER = b"ProgramDerivedAddress"

# ============================================================================
# ED25519 PROGRAM LAYOUT
# ============================================================================

SIGNATURE_OFFSETS_SERIALIZED_SIZE = 14
# Two leading bytes (count + padding) keep the offsets record aligned
SIGNATURE_OFFSETS_START = 2
DATA_START = SIGNATURE_OFFSETS_START + SIGNATURE_OFFSETS_SERIALIZED_SIZE
CURRENT_INSTRUCTION_INDEX = 0xFFFF

# ============================================================================
# SYSTEM PROGRAM
# ============================================================================

SYSTEM_IX_CREATE_ACCOUNT_WITH_SEED = 3
