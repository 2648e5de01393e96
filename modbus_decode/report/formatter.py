"""Plain-text reports for decoded Modbus messages."""

from typing import Dict, List, Optional, Tuple

from modbus_decode.decoding import DecodedMessage, MessageDirection

# Modbus register base addresses. They are off by one, so reading input
# register 100 shows as address 30101.
COIL_BASE_ADDRESS = 1
# Discrete inputs (contacts), not read by any code in FUNCTION_CODES
CONTACT_BASE_ADDRESS = 10001
INPUT_REGISTER_BASE_ADDRESS = 30001
HOLDING_REGISTER_BASE_ADDRESS = 40001

# Function code -> (label, base address)
FUNCTION_CODES: Dict[int, Tuple[str, Optional[int]]] = {
    0x01: ("Read Coils", COIL_BASE_ADDRESS),
    0x03: ("Read Holding Registers", HOLDING_REGISTER_BASE_ADDRESS),
    0x04: ("Read Input Registers", INPUT_REGISTER_BASE_ADDRESS),
    0x08: ("Diagnostic", None),
    0x0F: ("Write Multiple Coils", COIL_BASE_ADDRESS),
    0x10: ("Write Multiple Holding Registers", HOLDING_REGISTER_BASE_ADDRESS),
}

UNKNOWN_FUNCTION_LABEL = "Unknown Function Code"

# Each float occupies two 16-bit registers
REGISTERS_PER_VALUE = 2

RULE_WIDTH = 40
LABEL_WIDTH = 20


def function_label(function_code: int) -> str:
    """Human-readable name of a function code."""
    return FUNCTION_CODES.get(function_code, (UNKNOWN_FUNCTION_LABEL, None))[0]


def base_address(function_code: int) -> Optional[int]:
    """Register base address of a function code, None if it has none."""
    return FUNCTION_CODES.get(function_code, (UNKNOWN_FUNCTION_LABEL, None))[1]


def register_addresses(message: DecodedMessage) -> Optional[List[int]]:
    """
    Compute the register address of every decoded value.

    Args:
        message: Decoded message.

    Returns:
        One address per value, or None when the frame has no start address.
    """
    start = message.header.start_address
    if start is None:
        return None
    first = (base_address(message.header.function_code) or 0) + start
    return [first + REGISTERS_PER_VALUE * i for i in range(len(message.values))]


def format_value(value: float) -> str:
    """Format a float with single-precision significance."""
    return format(value, ".7g")


class ReportFormatter:
    """Render decoded messages as fixed-layout text reports."""

    @staticmethod
    def _field(label: str, text: str) -> str:
        return f"{label:<{LABEL_WIDTH}}{text}"

    @staticmethod
    def format(message: DecodedMessage) -> str:
        """
        Render a message.

        Args:
            message: Decoded message.

        Returns:
            Multi-line report ending with a newline.
        """
        header = message.header
        fc = header.function_code
        field = ReportFormatter._field

        lines = [
            f"{fc:02d} (0x{fc:02X}) {function_label(fc)}",
            "-" * RULE_WIDTH,
        ]
        if header.direction is not MessageDirection.UNKNOWN:
            lines.append(field("Message Type:", header.direction.label))
        lines.append(field("Slave ID:", f"{header.slave_id:>5} (0x{header.slave_id:02X})"))
        lines.append(field("Function Code:", f"{fc:>5} (0x{fc:02X})"))
        if header.start_address is not None:
            lines.append(
                field("Start Address:", f"{header.start_address:>5} (0x{header.start_address:04X})")
            )
        if header.register_count is not None:
            lines.append(
                field("Register Count:", f"{header.register_count:>5} (0x{header.register_count:04X})")
            )
        if header.byte_count > 0:
            lines.append(field("Byte Count:", f"{header.byte_count:>5} (0x{header.byte_count:02X})"))
        lines.append(field("Checksum:", f"{header.checksum or '':>5}"))
        lines.append(f"Float Values ({len(message.values)}):")

        addresses = register_addresses(message)
        for i, value in enumerate(message.values):
            number = f"{i + 1:03d}"
            detail = f"{value.raw_tokens} -> {value.reordered_hex} -> {format_value(value.value)}"
            if addresses is not None:
                lines.append(f"{number:>10} {addresses[i]:05d}: {detail}")
            else:
                lines.append(f"{number:>10}: {detail}")

        return "\n".join(lines) + "\n"


def format_report(message: DecodedMessage) -> str:
    """Render a message as text; see `ReportFormatter.format`."""
    return ReportFormatter.format(message)
