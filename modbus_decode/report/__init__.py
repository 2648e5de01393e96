"""Text and table rendering of decoded messages."""

from modbus_decode.report.formatter import (
    COIL_BASE_ADDRESS,
    CONTACT_BASE_ADDRESS,
    HOLDING_REGISTER_BASE_ADDRESS,
    INPUT_REGISTER_BASE_ADDRESS,
    FUNCTION_CODES,
    ReportFormatter,
    base_address,
    format_report,
    format_value,
    function_label,
    register_addresses,
)
from modbus_decode.report.table import render_table

__all__ = [
    "COIL_BASE_ADDRESS",
    "CONTACT_BASE_ADDRESS",
    "HOLDING_REGISTER_BASE_ADDRESS",
    "INPUT_REGISTER_BASE_ADDRESS",
    "FUNCTION_CODES",
    "ReportFormatter",
    "base_address",
    "format_report",
    "format_value",
    "function_label",
    "register_addresses",
    "render_table",
]
