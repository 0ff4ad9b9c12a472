"""Compact-u16 ("short-vec") length prefix used by the transaction wire format.

Each byte carries 7 bits of the value, least significant group first. The high
bit marks that another byte follows. Values up to 0xFFFF fit in 3 bytes.
"""

from typing import Tuple

MAX_ENCODING_LENGTH = 3
MAX_VALUE = 0xFFFF


def encode_length(value: int) -> bytes:
    """Encode a length as compact-u16.

    Raises:
        ValueError: If value is out of range [0, 65535]
    """
    if not 0 <= value <= MAX_VALUE:
        raise ValueError(f"short-vec length out of range: {value} (must be 0-{MAX_VALUE})")

    out = bytearray()
    while True:
        elem = value & 0x7F
        value >>= 7
        if value == 0:
            out.append(elem)
            return bytes(out)
        out.append(elem | 0x80)


def decode_length(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """Decode a compact-u16 length starting at ``offset``.

    Returns:
        (value, number of bytes consumed)

    Raises:
        ValueError: If the input is truncated, overflows u16 or is not the
            shortest encoding of its value.
    """
    value = 0
    for i in range(MAX_ENCODING_LENGTH):
        pos = offset + i
        if pos >= len(data):
            raise ValueError(f"Truncated short-vec length at offset {offset}")
        elem = data[pos]
        value |= (elem & 0x7F) << (7 * i)

        if elem & 0x80 == 0:
            if elem == 0 and i > 0:
                raise ValueError(f"Non-canonical short-vec length at offset {offset}")
            if value > MAX_VALUE:
                raise ValueError(f"short-vec length overflows u16 at offset {offset}")
            return value, i + 1

    raise ValueError(f"short-vec length longer than {MAX_ENCODING_LENGTH} bytes at offset {offset}")
