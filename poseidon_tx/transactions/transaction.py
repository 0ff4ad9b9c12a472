"""Signed transactions and their byte and text encodings.

Wire layout: short-vec signature count, 64 bytes per signature, then the
serialized message.
"""

import base64
import logging
from typing import List, Protocol, Sequence, Tuple, Union

import nacl.exceptions
from nacl.signing import VerifyKey
from solders.pubkey import Pubkey
from solders.signature import Signature

from ..errors import MissingSignerError, SignatureCountMismatchError
from ..shared.constants import SIGNATURE_SIZE
from ..shared.shortvec import decode_length, encode_length
from ..shared.utils import base58_to_bytes, to_base58
from .message import Message

logger = logging.getLogger(__name__)


class Signer(Protocol):
    """Signing capability. ``solders.keypair.Keypair`` satisfies it."""

    def pubkey(self) -> Pubkey: ...

    def sign_message(self, message: bytes) -> Signature: ...


def _to_signature(signature: Union[Signature, bytes]) -> Signature:
    if isinstance(signature, Signature):
        return signature
    signature = bytes(signature)
    if len(signature) != SIGNATURE_SIZE:
        raise ValueError(f"Signature must be {SIGNATURE_SIZE} bytes")
    return Signature.from_bytes(signature)


class Transaction:
    """A message paired with its signatures.

    Signatures are ordered like the message's signer keys.
    """

    def __init__(
        self,
        message: Message,
        signatures: Sequence[Union[Signature, bytes]] = (),
    ):
        self.message = message
        self.signatures: List[Signature] = [_to_signature(sig) for sig in signatures]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.message == other.message and self.signatures == other.signatures

    def __repr__(self) -> str:
        return f"Transaction(signatures={self.signatures!r}, message={self.message!r})"

    def add_signature(self, signature: Union[Signature, bytes]) -> "Transaction":
        self.signatures.append(_to_signature(signature))
        return self

    def sign(self, signers: Sequence[Signer]) -> "Transaction":
        """Sign the message with every required signer.

        The message is serialized once. Each required key is matched to the
        signer with the same pubkey; extra signers are ignored.

        Raises:
            MissingSignerError: If a required key has no matching signer
        """
        by_key = {signer.pubkey(): signer for signer in signers}
        required = self.message.signer_keys

        missing = [key for key in required if key not in by_key]
        if missing:
            raise MissingSignerError(str(missing[0]))

        message_bytes = self.message.serialize()
        self.signatures = [by_key[key].sign_message(message_bytes) for key in required]

        logger.debug(f"Signed message with {len(self.signatures)} signatures")
        return self

    def verify(self) -> bool:
        """Check every signature against its signer key.

        Returns True only if the signature count matches the header and each
        signature is valid for the serialized message.
        """
        required = self.message.signer_keys
        if len(self.signatures) != len(required):
            return False

        message_bytes = self.message.serialize()
        for key, signature in zip(required, self.signatures):
            try:
                VerifyKey(bytes(key)).verify(message_bytes, bytes(signature))
            except nacl.exceptions.BadSignatureError:
                return False
        return True

    def _check_signature_count(self) -> None:
        expected = self.message.header.num_required_signatures
        if len(self.signatures) != expected:
            raise SignatureCountMismatchError(expected, len(self.signatures))

    def to_bytes(self) -> bytes:
        """Serialize to the wire format.

        Raises:
            SignatureCountMismatchError: If the transaction is not fully signed
        """
        self._check_signature_count()

        out = bytearray()
        out.extend(encode_length(len(self.signatures)))
        for signature in self.signatures:
            out.extend(bytes(signature))
        out.extend(self.message.serialize())
        return bytes(out)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def to_base58(self) -> str:
        return to_base58(self.to_bytes())

    def to_base64(self) -> str:
        return base64.b64encode(self.to_bytes()).decode("ascii")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Transaction":
        """Deserialize a transaction from its wire format.

        Raises:
            ValueError: If the data is truncated or malformed
        """
        signatures, offset = _read_signatures(data)
        message = Message.deserialize(data, offset)
        return cls(message=message, signatures=signatures)

    @classmethod
    def from_base58(cls, value: str) -> "Transaction":
        return cls.from_bytes(base58_to_bytes(value))

    @classmethod
    def from_base64(cls, value: str) -> "Transaction":
        return cls.from_bytes(base64.b64decode(value))


def _read_signatures(data: bytes) -> Tuple[List[Signature], int]:
    count, offset = decode_length(data, 0)
    signatures = []
    for _ in range(count):
        end = offset + SIGNATURE_SIZE
        if end > len(data):
            raise ValueError(f"Not enough bytes for signature at offset {offset}")
        signatures.append(Signature.from_bytes(bytes(data[offset:end])))
        offset = end
    return signatures, offset


def new_signed_transaction(message: Message, signers: Sequence[Signer]) -> Transaction:
    """Create and sign a transaction in one call."""
    return Transaction(message).sign(signers)
