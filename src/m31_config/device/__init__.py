"""
Device Package
==============

Gateway configuration record, codec and updater.

Components:
- model.py: DeviceConfig and lookup tables
- codec.py: Register block → DeviceConfig
- updater.py: IPv4 field writes
- display.py: Text rendering

License: MIT
"""

from .model import (
    BAUD_RATES,
    NETWORK_MODES,
    PARITY_CHECKS,
    DeviceConfig,
    EnumeratedValue,
    ProtocolType,
)

from .codec import (
    classify_baud_rate,
    classify_network_mode,
    classify_parity,
    decode_config,
    read_device_config,
)

from .updater import ConfigurationUpdater, FieldUpdate

from .display import format_config

__all__ = [
    "BAUD_RATES",
    "NETWORK_MODES",
    "PARITY_CHECKS",
    "DeviceConfig",
    "EnumeratedValue",
    "ProtocolType",
    "classify_baud_rate",
    "classify_network_mode",
    "classify_parity",
    "decode_config",
    "read_device_config",
    "ConfigurationUpdater",
    "FieldUpdate",
    "format_config",
]
