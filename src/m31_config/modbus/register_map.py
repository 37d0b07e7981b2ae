"""
Gateway Configuration Register Map
==================================

Defines the layout of the configuration block exposed by the gateway.

This module contains ONLY the register layout - it does not:
- Talk to the device
- Decode values
- Classify enumerated codes

Layout:
- 89 holding registers starting at address 30000 (178 bytes)
- Fields occupy fixed, non-overlapping byte offsets
- Byte order: Big-endian (network byte order)
- The last register (30088) is read but not interpreted

Writable fields:
- IPv4 values split across two consecutive registers (high word first)

License: MIT
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

CONFIG_START_ADDRESS = 30000
CONFIG_REGISTER_COUNT = 89
CONFIG_BLOCK_SIZE = CONFIG_REGISTER_COUNT * 2


class FieldType(Enum):
    """How the bytes of a field are interpreted."""

    UINT16 = "uint16"  # Single big-endian register
    BYTES = "bytes"  # Raw octets (MAC, IPv4, reserved)
    ASCII = "ascii"  # Zero-padded ASCII buffer


@dataclass(frozen=True)
class FieldDefinition:
    """
    Definition of a single field of the configuration block.

    Attributes:
        name: Field identifier (matches the DeviceConfig attribute)
        offset: Byte offset inside the block (always register aligned)
        field_type: Interpretation of the field bytes
        size: Width in bytes
        description: What this field represents
    """

    name: str
    offset: int
    field_type: FieldType
    size: int
    description: str

    def validate(self):
        """Validate field definition."""
        if self.offset < 0 or self.offset % 2:
            raise ValueError(f"Field {self.name} offset {self.offset} not register aligned")

        if self.size <= 0 or self.size % 2:
            raise ValueError(f"Field {self.name} size {self.size} not a whole number of registers")

        if self.field_type == FieldType.UINT16 and self.size != 2:
            raise ValueError(f"uint16 field {self.name} must be 2 bytes wide")

        if self.offset + self.size > CONFIG_BLOCK_SIZE:
            raise ValueError(f"Field {self.name} extends past the configuration block")

    @property
    def size_words(self) -> int:
        """Number of 16-bit registers this field occupies."""
        return self.size // 2

    @property
    def register_address(self) -> int:
        """Device register address of the first word of this field."""
        return CONFIG_START_ADDRESS + self.offset // 2

    @property
    def end(self) -> int:
        """Byte offset just past this field."""
        return self.offset + self.size


def _u16(name: str, offset: int, description: str) -> FieldDefinition:
    return FieldDefinition(name, offset, FieldType.UINT16, 2, description)


# Canonical (most complete) layout revision, in block order
CONFIG_FIELDS: Tuple[FieldDefinition, ...] = (
    _u16("serial_port_rate_code", 0, "1-based index into the baud rate table"),
    _u16("serial_port_parity_check", 2, "Index into the parity table"),
    _u16("network_mode", 4, "Index into the network mode table"),
    _u16("dhcp", 6, "1 = DHCP enabled"),
    FieldDefinition("mac_address", 8, FieldType.BYTES, 6, "Hardware address"),
    FieldDefinition("address", 14, FieldType.BYTES, 4, "Device IPv4 address"),
    FieldDefinition("subnet_mask", 18, FieldType.BYTES, 4, "IPv4 subnet mask"),
    FieldDefinition("gateway", 22, FieldType.BYTES, 4, "Default gateway"),
    FieldDefinition("dns", 26, FieldType.BYTES, 4, "DNS server"),
    FieldDefinition("reserved", 30, FieldType.BYTES, 4, "Unused"),
    _u16("port", 34, "Listening/target port"),
    FieldDefinition(
        "destination_domain_name",
        36,
        FieldType.ASCII,
        128,
        "Target domain name (zero padded)",
    ),
    _u16("destination_port", 164, "Port for the domain name target"),
    _u16("protocol_type", 166, "1 = TCP, otherwise RTU"),
    _u16("address_negotiation_write_register", 168, "Negotiation bookkeeping"),
    _u16("address_negotiation_register", 170, "Negotiation bookkeeping"),
    _u16("negotiation_status", 172, "Negotiation status"),
    _u16("exception_code", 174, "Last exception code"),
)


class WritableField(Enum):
    """
    Configuration fields with a known write address.

    Each value is the base register; the IPv4 value is written to
    ``base`` (octets 0-1) and ``base + 1`` (octets 2-3).
    """

    DEVICE_ADDRESS = 30007
    SUBNET_MASK = 30009
    GATEWAY = 30011
    DNS = 30013

    @property
    def base_address(self) -> int:
        return self.value

    @property
    def register_addresses(self) -> Tuple[int, int]:
        return self.value, self.value + 1

    @property
    def label(self) -> str:
        return _WRITABLE_LABELS[self]

    @property
    def field_name(self) -> str:
        """Name of the matching FieldDefinition / DeviceConfig attribute."""
        return _WRITABLE_FIELD_NAMES[self]


_WRITABLE_LABELS = {
    WritableField.DEVICE_ADDRESS: "device address",
    WritableField.SUBNET_MASK: "subnet mask",
    WritableField.GATEWAY: "default gateway address",
    WritableField.DNS: "DNS address",
}

_WRITABLE_FIELD_NAMES = {
    WritableField.DEVICE_ADDRESS: "address",
    WritableField.SUBNET_MASK: "subnet_mask",
    WritableField.GATEWAY: "gateway",
    WritableField.DNS: "dns",
}

# Writes supported by each observed firmware layout revision. The earlier
# revisions are subsets of the canonical one and share its offsets.
LAYOUT_REVISION_WRITES: Dict[str, FrozenSet[WritableField]] = {
    "initial": frozenset(),
    "intermediate": frozenset({WritableField.DEVICE_ADDRESS, WritableField.SUBNET_MASK}),
    "canonical": frozenset(WritableField),
}
CANONICAL_REVISION = "canonical"


class ConfigRegisterMap:
    """
    Complete register map of the gateway configuration block.

    This class defines WHERE each field lives but does NOT read or
    decode anything.
    """

    def __init__(self, fields: Tuple[FieldDefinition, ...] = CONFIG_FIELDS):
        self.fields: List[FieldDefinition] = list(fields)
        self.start_address = CONFIG_START_ADDRESS
        self.register_count = CONFIG_REGISTER_COUNT

        self._by_name = {f.name: f for f in self.fields}
        self._validate_all()

    @property
    def block_size_bytes(self) -> int:
        return self.register_count * 2

    def _validate_all(self):
        """Validate all field definitions and check for conflicts."""
        for field_def in self.fields:
            field_def.validate()

        if len(self._by_name) != len(self.fields):
            raise ValueError("Duplicate field names in configuration layout")

        ordered = sorted(self.fields, key=lambda f: f.offset)
        for curr, nxt in zip(ordered, ordered[1:]):
            if curr.end > nxt.offset:
                raise ValueError(
                    f"Configuration field conflict: {curr.name} "
                    f"[{curr.offset}-{curr.end - 1}] overlaps with {nxt.name} "
                    f"[{nxt.offset}-{nxt.end - 1}]"
                )

    def get_field_by_name(self, name: str) -> Optional[FieldDefinition]:
        """Find field definition by name."""
        return self._by_name.get(name)

    def get_field_by_address(self, address: int) -> Optional[FieldDefinition]:
        """Find the field covering a device register address."""
        for field_def in self.fields:
            start = field_def.register_address
            if start <= address < start + field_def.size_words:
                return field_def

        return None

    def print_register_map(self):
        """Print complete register map for documentation."""
        print("=" * 80)
        print("GATEWAY CONFIGURATION REGISTER MAP")
        print("=" * 80)
        print(f"{'Address':<13} {'Name':<36} {'Type':<7} {'Description':<30}")
        print("-" * 80)
        for field_def in self.fields:
            start = field_def.register_address
            if field_def.size_words > 1:
                addr_str = f"{start}-{start + field_def.size_words - 1}"
            else:
                addr_str = str(start)
            print(
                f"{addr_str:<13} {field_def.name:<36} "
                f"{field_def.field_type.value:<7} {field_def.description:<30}"
            )

        print("\nWRITABLE FIELDS (IPv4, two registers each)")
        print("-" * 80)
        for writable in WritableField:
            high, low = writable.register_addresses
            print(f"{high}-{low:<7} {writable.label}")

        print("=" * 80)


if __name__ == "__main__":
    ConfigRegisterMap().print_register_map()
