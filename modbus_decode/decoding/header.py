"""Modbus frame header decoding.

The header shape depends on the function code. Each supported shape is a
`HeaderLayout` entry in `HEADER_LAYOUTS`; function codes without an entry use
`DEFAULT_LAYOUT`.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from modbus_decode.decoding.tokenizer import MessageDirection, parse_byte

_LOGGER = logging.getLogger(__name__)

# Function codes (Modbus Application Protocol V1.1b3, section 6)
FC_READ_COILS = 0x01
FC_READ_HOLDING_REGISTERS = 0x03
FC_READ_INPUT_REGISTERS = 0x04
FC_DIAGNOSTIC = 0x08
FC_WRITE_MULTIPLE_COILS = 0x0F
FC_WRITE_MULTIPLE_REGISTERS = 0x10

SLAVE_ID_INDEX = 0
FUNCTION_CODE_INDEX = 1


@dataclass(frozen=True)
class HeaderLayout:
    """Token positions of the header fields for one family of function codes."""

    data_start: int
    byte_count_index: Optional[int] = None
    start_address_indices: Optional[Tuple[int, int]] = None
    register_count_indices: Optional[Tuple[int, int]] = None


# Read responses: [slave][fc][byte count][data...][crc lo][crc hi]
READ_RESPONSE_LAYOUT = HeaderLayout(data_start=3, byte_count_index=2)

# Write multiple request:
# [slave][fc][addr hi][addr lo][count hi][count lo][byte count][data...][crc lo][crc hi]
WRITE_MULTIPLE_LAYOUT = HeaderLayout(
    data_start=7,
    byte_count_index=6,
    start_address_indices=(2, 3),
    register_count_indices=(4, 5),
)

DEFAULT_LAYOUT = HeaderLayout(data_start=3)

HEADER_LAYOUTS: Dict[int, HeaderLayout] = {
    FC_READ_HOLDING_REGISTERS: READ_RESPONSE_LAYOUT,
    FC_READ_INPUT_REGISTERS: READ_RESPONSE_LAYOUT,
    FC_WRITE_MULTIPLE_REGISTERS: WRITE_MULTIPLE_LAYOUT,
}


@dataclass(frozen=True)
class DecodedHeader:
    """Header fields of a captured frame.

    `start_address` and `register_count` are None when the layout does not
    carry them (or they were not captured); None is not the same as 0.
    """

    direction: MessageDirection
    slave_id: int
    function_code: int
    start_address: Optional[int]
    register_count: Optional[int]
    byte_count: int
    checksum: Optional[str]
    data_start: int

    @classmethod
    def from_tokens(
        cls,
        tokens: List[str],
        direction: MessageDirection = MessageDirection.UNKNOWN,
        layouts: Optional[Mapping[int, HeaderLayout]] = None,
    ) -> "DecodedHeader":
        """
        Decode the header of a tokenized frame.

        Args:
            tokens: Byte tokens from the tokenizer.
            direction: Direction detected by the tokenizer.
            layouts: Function code to layout table (default: HEADER_LAYOUTS).

        Returns:
            Decoded header.

        Raises:
            NumericConversionError: If a header token is not hexadecimal.
        """
        if layouts is None:
            layouts = HEADER_LAYOUTS

        slave_id = _read_byte(tokens, SLAVE_ID_INDEX, "slave id")
        function_code = _read_byte(tokens, FUNCTION_CODE_INDEX, "function code")
        layout = layouts.get(function_code, DEFAULT_LAYOUT)

        byte_count = 0
        if layout.byte_count_index is not None:
            byte_count = _read_byte(tokens, layout.byte_count_index, "byte count")

        start_address = _read_word(tokens, layout.start_address_indices, "start address")
        register_count = _read_word(tokens, layout.register_count_indices, "register count")

        checksum = None
        if len(tokens) >= 2:
            checksum = tokens[-2] + tokens[-1]

        _LOGGER.debug(
            "Header: slave=%d fc=%d layout=%s byte_count=%d",
            slave_id,
            function_code,
            layout,
            byte_count,
        )

        return cls(
            direction=direction,
            slave_id=slave_id,
            function_code=function_code,
            start_address=start_address,
            register_count=register_count,
            byte_count=byte_count,
            checksum=checksum,
            data_start=layout.data_start,
        )


def decode_header(
    tokens: List[str],
    direction: MessageDirection = MessageDirection.UNKNOWN,
    layouts: Optional[Mapping[int, HeaderLayout]] = None,
) -> DecodedHeader:
    """Decode a header; see `DecodedHeader.from_tokens`."""
    return DecodedHeader.from_tokens(tokens, direction, layouts)


def _is_captured(tokens: List[str], last_index: int) -> bool:
    # A field counts only when at least one more token follows it.
    return len(tokens) >= last_index + 2


def _read_byte(tokens: List[str], index: int, field: str) -> int:
    if not _is_captured(tokens, index):
        return 0
    return parse_byte(tokens[index], field)


def _read_word(
    tokens: List[str], indices: Optional[Tuple[int, int]], field: str
) -> Optional[int]:
    if indices is None:
        return None
    high, low = indices
    if not _is_captured(tokens, max(high, low)):
        return None
    return (parse_byte(tokens[high], field) << 8) | parse_byte(tokens[low], field)
