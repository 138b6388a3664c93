"""Socket, interface and pin extraction for specification parsing."""

import re

from ..models import CompatibilityRequirements
from .patterns import INTERFACE_PATTERN, PIN_PATTERN, SOCKET_PATTERN


def normalize_socket(raw: str) -> str:
    """Uppercase and drop whitespace: "lga 1700" -> "LGA1700"."""
    return re.sub(r'\s+', '', raw).upper()


def normalize_interface(raw: str) -> str:
    """Uppercase and collapse whitespace: "PCIe  4.0" -> "PCIE 4.0"."""
    return re.sub(r'\s+', ' ', raw).strip().upper()


def extract_socket(text: str) -> str:
    match = SOCKET_PATTERN.search(text)
    return normalize_socket(match.group(1)) if match else ""


def extract_interface(text: str) -> str:
    match = INTERFACE_PATTERN.search(text)
    return normalize_interface(match.group(1)) if match else ""


def extract_pin_configuration(text: str, socket_type: str = "") -> tuple[str, ...]:
    """Derive a pin count from an explicit "N-pin" token or the socket digits.

    LGA sockets are named after their pin count, so "LGA1700" yields
    ("1700-pin",). An explicit token wins over the socket.
    """
    match = PIN_PATTERN.search(text)
    if match:
        return (f"{int(match.group(1))}-pin",)
    if socket_type.startswith("LGA"):
        digits = socket_type[3:]
        if digits.isdigit():
            return (f"{int(digits)}-pin",)
    return ()


def extract_compatibility(text: str) -> CompatibilityRequirements:
    socket_type = extract_socket(text)
    return CompatibilityRequirements(
        socket_type=socket_type,
        interface_type=extract_interface(text),
        pin_configuration=extract_pin_configuration(text, socket_type),
    )
