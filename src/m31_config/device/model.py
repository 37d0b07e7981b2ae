"""
Device Configuration Model
==========================

Decoded configuration snapshot of the gateway and the lookup tables used
to classify its enumerated fields.

A DeviceConfig is created fresh on every read and never mutated; field
updates are separate register writes and need a new read to be observed.

License: MIT
"""

import ipaddress
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional, Union

# Lookup tables (immutable)
BAUD_RATES = (2400, 4800, 9600, 19200, 38400, 57600, 115200, 230400)
PARITY_CHECKS = ("NONE", "ODD", "EVEN")
NETWORK_MODES = ("TCP server", "TCP client", "UDP server", "UDP client")


class ProtocolType(Enum):
    """Serial-side protocol. Only code 1 means TCP."""

    TCP = "TCP"
    RTU = "RTU"


@dataclass(frozen=True)
class EnumeratedValue:
    """
    Classified value of an enumerated register.

    Attributes:
        code: Raw register value as read from the device
        symbol: Table entry for the code, None if the code is unknown
    """

    code: int
    symbol: Optional[Union[int, str]] = None

    @property
    def known(self) -> bool:
        return self.symbol is not None

    def __str__(self) -> str:
        if self.known:
            return str(self.symbol)
        return f"unknown({self.code})"


@dataclass(frozen=True)
class DeviceConfig:
    """Decoded gateway configuration."""

    serial_port_rate: EnumeratedValue
    serial_port_parity: EnumeratedValue
    network_mode: EnumeratedValue
    dhcp_enabled: bool
    mac_address: bytes
    address: ipaddress.IPv4Address
    subnet_mask: ipaddress.IPv4Address
    gateway: ipaddress.IPv4Address
    dns: ipaddress.IPv4Address
    reserved: bytes
    port: int
    destination_domain_name: str
    destination_port: int
    protocol_type: ProtocolType
    address_negotiation_write_register: int
    address_negotiation_register: int
    negotiation_status: int
    exception_code: int

    @property
    def mac_address_text(self) -> str:
        """MAC address as six colon-separated hex octets."""
        return ":".join(f"{octet:02X}" for octet in self.mac_address)

    def as_dict(self) -> Dict[str, Any]:
        """Plain representation for debug logging."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, EnumeratedValue):
                value = str(value)
            elif isinstance(value, ProtocolType):
                value = value.value
            elif isinstance(value, ipaddress.IPv4Address):
                value = str(value)
            elif isinstance(value, bytes):
                value = value.hex()
            result[f.name] = value
        result["mac_address"] = self.mac_address_text
        return result
