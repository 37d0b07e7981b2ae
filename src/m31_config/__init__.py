"""
M31 Gateway Configuration Tool
==============================

Reads and writes the network/serial configuration of an M31 Modbus
gateway.

Packages:
- modbus: register layout, register encoding, Modbus/TCP transport
- device: configuration record, decoder, updater, display

License: MIT
"""

__version__ = "1.0.0"

from .errors import (
    InvalidAddress,
    M31ConfigError,
    MalformedPayload,
    PayloadError,
    ShortPayload,
    TransportError,
    UnsupportedField,
    WriteFailed,
)

from .modbus import (
    IPv4RegisterCodec,
    ModbusClientConfig,
    ModbusTcpRegisterSpace,
    RegisterSpace,
    WritableField,
)

from .device import (
    ConfigurationUpdater,
    DeviceConfig,
    decode_config,
    format_config,
    read_device_config,
)

__all__ = [
    "InvalidAddress",
    "M31ConfigError",
    "MalformedPayload",
    "PayloadError",
    "ShortPayload",
    "TransportError",
    "UnsupportedField",
    "WriteFailed",
    "IPv4RegisterCodec",
    "ModbusClientConfig",
    "ModbusTcpRegisterSpace",
    "RegisterSpace",
    "WritableField",
    "ConfigurationUpdater",
    "DeviceConfig",
    "decode_config",
    "format_config",
    "read_device_config",
]
