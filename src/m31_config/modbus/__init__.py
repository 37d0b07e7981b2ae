"""
Modbus Interface Package
=========================

Register layout, register encoding and transport for the gateway
configuration block.

It does NOT:
- Decode the configuration into a record
- Classify enumerated codes
- Format anything for display

Components:
- register_map.py: Configuration block layout and writable fields
- protocols.py: IPv4 ↔ register pair and register ↔ byte conversion
- client.py: RegisterSpace contract and Modbus/TCP implementation

Usage Example:
>>> from m31_config.modbus import ModbusClientConfig, ModbusTcpRegisterSpace
>>> config = ModbusClientConfig(host="192.168.3.7", port=502)
>>> with ModbusTcpRegisterSpace(config) as space:
...     raw = space.read_registers(30000, 89)

Dependencies:
- pymodbus: Python Modbus library
- numpy: register packing

License: MIT
"""

from .register_map import (
    CONFIG_BLOCK_SIZE,
    CONFIG_REGISTER_COUNT,
    CONFIG_START_ADDRESS,
    ConfigRegisterMap,
    FieldDefinition,
    FieldType,
    WritableField,
)

from .protocols import IPv4RegisterCodec, ModbusDecoder, ModbusEncoder, validate_ipv4

from .client import ModbusClientConfig, ModbusTcpRegisterSpace, RegisterSpace

__all__ = [
    # Register mapping
    "CONFIG_BLOCK_SIZE",
    "CONFIG_REGISTER_COUNT",
    "CONFIG_START_ADDRESS",
    "ConfigRegisterMap",
    "FieldDefinition",
    "FieldType",
    "WritableField",
    # Encoding/decoding
    "IPv4RegisterCodec",
    "ModbusDecoder",
    "ModbusEncoder",
    "validate_ipv4",
    # Transport
    "ModbusClientConfig",
    "ModbusTcpRegisterSpace",
    "RegisterSpace",
]
