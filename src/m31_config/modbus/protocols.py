"""
Modbus Protocol Encoding/Decoding
==================================

Data conversion utilities for the gateway's register encoding.

This module handles ONLY data format conversion:
- IPv4 addresses ↔ Modbus register pairs
- Python ints ↔ Modbus registers
- Register lists ↔ big-endian byte blocks

No protocol logic, no I/O.

License: MIT
"""

import ipaddress
from typing import Sequence, Tuple, Union

import numpy as np

from ..errors import InvalidAddress

AddressLike = Union[str, ipaddress.IPv4Address]


def validate_ipv4(address: AddressLike) -> ipaddress.IPv4Address:
    """
    Parse and validate an IPv4 address.

    IPv4-mapped IPv6 addresses (``::ffff:a.b.c.d``) are reduced to their
    IPv4 form; any other IPv6 address is rejected.

    Args:
        address: Dotted-quad string or IPv4Address

    Returns:
        Parsed IPv4Address

    Raises:
        InvalidAddress: If the input is not a valid IPv4 address
    """
    if isinstance(address, ipaddress.IPv4Address):
        return address

    if not isinstance(address, str):
        raise InvalidAddress(address)

    try:
        parsed = ipaddress.ip_address(address)
    except ValueError:
        raise InvalidAddress(address) from None

    if isinstance(parsed, ipaddress.IPv6Address):
        if parsed.ipv4_mapped is None:
            raise InvalidAddress(address, "IP address is not v4")
        return parsed.ipv4_mapped

    return parsed


class IPv4RegisterCodec:
    """
    Converts IPv4 addresses to and from a pair of 16-bit registers.

    Octets are stored in big-endian order:

        reg0 = (octet0 << 8) | octet1
        reg1 = (octet2 << 8) | octet3
    """

    @staticmethod
    def encode(address: AddressLike) -> Tuple[int, int]:
        """
        Convert an IPv4 address to two 16-bit register values.

        Args:
            address: Dotted-quad string or IPv4Address

        Returns:
            Tuple of (high word, low word)

        Raises:
            InvalidAddress: If the address is not a valid IPv4 address

        Example:
            >>> IPv4RegisterCodec.encode("10.0.0.5")
            (2560, 5)
        """
        o0, o1, o2, o3 = validate_ipv4(address).packed
        return (o0 << 8) | o1, (o2 << 8) | o3

    @staticmethod
    def decode(reg0: int, reg1: int) -> ipaddress.IPv4Address:
        """
        Convert two 16-bit register values to an IPv4 address.

        Total function: any pair of register values yields an address.
        """
        octets = bytes(
            [
                (reg0 >> 8) & 0xFF,
                reg0 & 0xFF,
                (reg1 >> 8) & 0xFF,
                reg1 & 0xFF,
            ]
        )
        return ipaddress.IPv4Address(octets)


class ModbusEncoder:
    """Encoder for converting Python values to Modbus register format."""

    @staticmethod
    def uint16_to_register(value: int) -> int:
        """
        Convert Python unsigned int to 16-bit Modbus register.

        Raises:
            ValueError: If value out of range
        """
        if not 0 <= value <= 65535:
            raise ValueError(f"uint16 value {value} out of range [0, 65535]")

        return value


class ModbusDecoder:
    """Decoder for converting Modbus register format to Python values."""

    @staticmethod
    def registers_to_bytes(registers: Sequence[int]) -> bytes:
        """
        Pack 16-bit registers into a big-endian byte block.

        Args:
            registers: Register values as returned by the device

        Returns:
            ``len(registers) * 2`` bytes, high byte of each register first

        Raises:
            ValueError: If a register value is outside [0, 65535]
        """
        values = np.asarray(list(registers), dtype=np.int64)

        if values.size and (values.min() < 0 or values.max() > 0xFFFF):
            raise ValueError("register value out of range [0, 65535]")

        return values.astype(">u2").tobytes()
