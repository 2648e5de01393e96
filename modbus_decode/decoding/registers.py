"""Decode register data as 32-bit floats.

A float spans two consecutive 16-bit registers. Devices disagree on which
register carries the high word:

- swapped word order (Modicon float): the low word is sent first,
  bytes ``b0 b1 b2 b3`` decode as ``b2 b3 b0 b1``
- natural order: bytes decode as sent
"""

import logging
import struct
from dataclasses import dataclass
from typing import List, Tuple

from modbus_decode.decoding.tokenizer import parse_byte, parse_hex

_LOGGER = logging.getLogger(__name__)

TOKENS_PER_VALUE = 4
CHECKSUM_TOKENS = 2


def hex_to_float32(hex_string: str) -> float:
    """
    Reinterpret 8 hex digits as an IEEE-754 single-precision float.

    The bit pattern is kept as-is, so NaN and infinity patterns are valid.

    Args:
        hex_string: Big-endian hex of the 32-bit word, e.g. "3F800000".

    Returns:
        The float (exactly representable as binary32).

    Raises:
        NumericConversionError: If the text is not hex or exceeds 32 bits.
    """
    bits = parse_hex(hex_string, "float value", bits=32)
    return struct.unpack(">f", struct.pack(">I", bits))[0]


def reorder_tokens(group: List[str], swapped_word_order: bool = True) -> str:
    """Concatenate four byte tokens in decode order."""
    b0, b1, b2, b3 = group
    if swapped_word_order:
        return b2 + b3 + b0 + b1
    return b0 + b1 + b2 + b3


@dataclass(frozen=True)
class DecodedValue:
    """One float decoded from four captured bytes."""

    raw_tokens: str
    reordered_hex: str
    value: float

    def as_float(self) -> float:
        return self.value

    @classmethod
    def from_group(cls, group: List[str], swapped_word_order: bool = True) -> "DecodedValue":
        for token in group:
            parse_byte(token, "float value")
        reordered = reorder_tokens(group, swapped_word_order)
        return cls(
            raw_tokens=" ".join(group),
            reordered_hex=reordered,
            value=hex_to_float32(reordered),
        )


def decode_values(
    tokens: List[str],
    data_start: int,
    byte_count: int,
    swapped_word_order: bool = True,
) -> Tuple[DecodedValue, ...]:
    """
    Decode the data region of a frame as a run of floats.

    Groups of four tokens are taken from `data_start` while fewer than
    `byte_count` tokens have been consumed and the whole group lies before
    the two checksum tokens. A byte count larger than the captured data
    just yields fewer values.

    Args:
        tokens: All byte tokens of the frame.
        data_start: Index of the first data token.
        byte_count: Declared number of data bytes.
        swapped_word_order: True for low-word-first (Modicon) floats.

    Returns:
        Decoded values in capture order.
    """
    values = []
    data_end = len(tokens) - CHECKSUM_TOKENS
    index = data_start
    while index - data_start < byte_count and index + TOKENS_PER_VALUE <= data_end:
        group = tokens[index:index + TOKENS_PER_VALUE]
        values.append(DecodedValue.from_group(group, swapped_word_order))
        index += TOKENS_PER_VALUE

    _LOGGER.debug(
        "Decoded %d value(s) from %d data byte(s) (swapped=%s)",
        len(values),
        byte_count,
        swapped_word_order,
    )
    return tuple(values)
