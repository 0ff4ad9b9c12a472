"""Custom exceptions for the Poseidon transaction toolkit."""


class PoseidonError(Exception):
    """Base exception for all Poseidon errors."""

    pass


class MaxSeedLengthExceededError(PoseidonError):
    """Raised when a derivation seed is longer than the maximum seed length."""

    def __init__(self, length: int, max_length: int):
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Max seed length exceeded: {length} bytes (maximum: {max_length})"
        )


class IllegalOwnerError(PoseidonError):
    """Raised when the owner key ends with the program-derived address marker."""

    def __init__(self, owner: str):
        self.owner = owner
        super().__init__(f"Illegal owner for derived address: {owner}")


class ProgramIdNotFoundError(PoseidonError):
    """Raised when an instruction's program id is missing from the account table."""

    def __init__(self, program_id: str):
        self.program_id = program_id
        super().__init__(f"Program id not found in message accounts: {program_id}")


class PublicKeyNotFoundInMessageAccountsError(PoseidonError):
    """Raised when an instruction account is missing from the account table."""

    def __init__(self, pubkey: str):
        self.pubkey = pubkey
        super().__init__(f"Public key not found in message accounts: {pubkey}")


class AccountIndexNotFoundInMessageAccountsError(PoseidonError):
    """Raised when an instruction's account indices cannot be resolved."""

    def __init__(self, instruction_index: int):
        self.instruction_index = instruction_index
        super().__init__(
            f"Account index not found in message accounts for instruction {instruction_index}"
        )


class InvalidBase58ForPublicKeyError(PoseidonError):
    """Raised when a string is not valid base58."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid base58 for public key: {value!r}")


class InvalidPublicKeyLengthError(PoseidonError):
    """Raised when decoded bytes cannot be converted to a 32-byte key."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Cannot convert {length} bytes to a 32-byte key")


class MissingSignerError(PoseidonError):
    """Raised when no signer was supplied for a required signature."""

    def __init__(self, pubkey: str):
        self.pubkey = pubkey
        super().__init__(f"Missing signer for required key: {pubkey}")


class SignatureCountMismatchError(PoseidonError):
    """Raised when a transaction's signatures do not match the message header."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Signature count mismatch: expected={expected}, actual={actual}"
        )


class TooManyAccountsError(PoseidonError):
    """Raised when a message would need more accounts than a u8 can address."""

    def __init__(self, count: int, max_count: int):
        self.count = count
        self.max_count = max_count
        super().__init__(f"Too many accounts: {count} (maximum: {max_count})")
