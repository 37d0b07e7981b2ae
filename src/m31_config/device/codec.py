"""
Configuration Block Codec
=========================

Decodes the raw configuration block into a DeviceConfig.

Decoding is driven by the offset table in ConfigRegisterMap: each field
is read at its declared byte offset with its declared width, big-endian.
Enumerated fields are classified here, once; out-of-range codes become
``unknown(<code>)`` values rather than errors.

License: MIT
"""

import logging
import struct
from typing import Dict, Optional, Sequence, Union

from ..errors import MalformedPayload, ShortPayload
from ..modbus.client import RegisterSpace
from ..modbus.protocols import IPv4RegisterCodec
from ..modbus.register_map import ConfigRegisterMap, FieldDefinition, FieldType
from .model import (
    BAUD_RATES,
    NETWORK_MODES,
    PARITY_CHECKS,
    DeviceConfig,
    EnumeratedValue,
    ProtocolType,
)

logger = logging.getLogger(__name__)

_DEFAULT_MAP = ConfigRegisterMap()

FieldValue = Union[int, bytes]


def _classify(code: int, table: Sequence, index: int) -> EnumeratedValue:
    if 0 <= index < len(table):
        return EnumeratedValue(code, table[index])
    return EnumeratedValue(code)


def classify_baud_rate(code: int) -> EnumeratedValue:
    """Stored code is 1-based; 0 is always unknown."""
    if code == 0:
        return EnumeratedValue(code)
    return _classify(code, BAUD_RATES, code - 1)


def classify_parity(code: int) -> EnumeratedValue:
    return _classify(code, PARITY_CHECKS, code)


def classify_network_mode(code: int) -> EnumeratedValue:
    return _classify(code, NETWORK_MODES, code)


def _read_field(raw: bytes, field_def: FieldDefinition) -> FieldValue:
    if field_def.field_type == FieldType.UINT16:
        (value,) = struct.unpack_from(">H", raw, field_def.offset)
        return value

    chunk = raw[field_def.offset:field_def.end]
    if len(chunk) != field_def.size:
        raise struct.error(f"field {field_def.name} truncated")
    return bytes(chunk)


def _decode_ascii(buffer: bytes) -> str:
    # Zero padded; anything after the first NUL is padding
    return buffer.split(b"\x00", 1)[0].decode("ascii", errors="replace")


def _decode_ipv4(buffer: bytes):
    return IPv4RegisterCodec.decode(
        (buffer[0] << 8) | buffer[1], (buffer[2] << 8) | buffer[3]
    )


def decode_config(
    raw: bytes, register_map: Optional[ConfigRegisterMap] = None
) -> DeviceConfig:
    """
    Decode a configuration block.

    Args:
        raw: Register block as big-endian bytes (at least 178 bytes)
        register_map: Layout to apply (canonical layout by default)

    Returns:
        Decoded DeviceConfig

    Raises:
        ShortPayload: If fewer bytes than the layout requires were given
        MalformedPayload: If the layout cannot be applied to the bytes
    """
    register_map = register_map or _DEFAULT_MAP
    expected = register_map.block_size_bytes

    if len(raw) < expected:
        raise ShortPayload(len(raw), expected)

    try:
        values: Dict[str, FieldValue] = {
            field_def.name: _read_field(raw, field_def)
            for field_def in register_map.fields
        }

        config = DeviceConfig(
            serial_port_rate=classify_baud_rate(values["serial_port_rate_code"]),
            serial_port_parity=classify_parity(values["serial_port_parity_check"]),
            network_mode=classify_network_mode(values["network_mode"]),
            dhcp_enabled=values["dhcp"] == 1,
            mac_address=values["mac_address"],
            address=_decode_ipv4(values["address"]),
            subnet_mask=_decode_ipv4(values["subnet_mask"]),
            gateway=_decode_ipv4(values["gateway"]),
            dns=_decode_ipv4(values["dns"]),
            reserved=values["reserved"],
            port=values["port"],
            destination_domain_name=_decode_ascii(values["destination_domain_name"]),
            destination_port=values["destination_port"],
            protocol_type=(
                ProtocolType.TCP if values["protocol_type"] == 1 else ProtocolType.RTU
            ),
            address_negotiation_write_register=values[
                "address_negotiation_write_register"
            ],
            address_negotiation_register=values["address_negotiation_register"],
            negotiation_status=values["negotiation_status"],
            exception_code=values["exception_code"],
        )
    except (struct.error, KeyError, IndexError, TypeError) as e:
        raise MalformedPayload(f"failed to unmarshal configuration block: {e}") from e

    for name in ("serial_port_rate", "serial_port_parity", "network_mode"):
        value = getattr(config, name)
        if not value.known:
            logger.debug(f"{name}: unknown code {value.code}")

    return config


def read_device_config(
    space: RegisterSpace, register_map: Optional[ConfigRegisterMap] = None
) -> DeviceConfig:
    """
    Read and decode the configuration block through a RegisterSpace.

    Raises:
        TransportError: Propagated from the register space
        ShortPayload, MalformedPayload: See decode_config
    """
    register_map = register_map or _DEFAULT_MAP

    payload = space.read_registers(register_map.start_address, register_map.register_count)
    logger.debug(f"Reading data: {list(payload)}")

    config = decode_config(payload, register_map)
    logger.debug(f"Config: {config.as_dict()}")

    return config
