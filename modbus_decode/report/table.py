"""Rich table view of decoded messages."""

from rich.table import Table

from modbus_decode.decoding import DecodedMessage
from modbus_decode.report.formatter import (
    format_value,
    function_label,
    register_addresses,
)


def render_table(message: DecodedMessage) -> Table:
    """
    Build a rich table of the decoded values.

    Args:
        message: Decoded message.

    Returns:
        Table titled with the function code, one row per value. The address
        column is present only when the frame carries a start address.
    """
    header = message.header
    fc = header.function_code
    table = Table(
        title=f"{fc:02d} (0x{fc:02X}) {function_label(fc)}",
        caption=f"Slave {header.slave_id} | Checksum {header.checksum or '-'}",
    )

    addresses = register_addresses(message)
    table.add_column("#", justify="right", style="cyan")
    if addresses is not None:
        table.add_column("Address", justify="right", style="magenta")
    table.add_column("Raw")
    table.add_column("Hex")
    table.add_column("Value", justify="right", style="green")

    for i, value in enumerate(message.values):
        row = [f"{i + 1:03d}"]
        if addresses is not None:
            row.append(f"{addresses[i]:05d}")
        row.extend([value.raw_tokens, value.reordered_hex, format_value(value.value)])
        table.add_row(*row)

    return table
