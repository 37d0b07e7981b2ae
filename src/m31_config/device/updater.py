"""
Configuration Updater
=====================

Writes new IPv4 values for the gateway's writable fields.

Each update is two single-register writes, ``base`` strictly before
``base + 1``. The pair is not atomic: a concurrent reader may observe a
half-updated value. No retry and no read-back are done here; re-read the
configuration to confirm a change.

License: MIT
"""

import logging
from dataclasses import dataclass
from typing import List, Mapping, Tuple

from ..errors import UnsupportedField, WriteFailed
from ..modbus.client import RegisterSpace
from ..modbus.protocols import AddressLike, IPv4RegisterCodec, validate_ipv4
from ..modbus.register_map import CANONICAL_REVISION, LAYOUT_REVISION_WRITES, WritableField

logger = logging.getLogger(__name__)

# Order in which several pending updates are applied
APPLY_ORDER = (
    WritableField.DNS,
    WritableField.GATEWAY,
    WritableField.DEVICE_ADDRESS,
    WritableField.SUBNET_MASK,
)


@dataclass(frozen=True)
class FieldUpdate:
    """
    Result of a completed field update.

    Attributes:
        field: Field that was written
        address: New IPv4 address
        registers: (register address, value) pairs in write order
    """

    field: WritableField
    address: str
    registers: Tuple[Tuple[int, int], Tuple[int, int]]


class ConfigurationUpdater:
    """Issues register writes for WritableField updates."""

    def __init__(self, space: RegisterSpace, revision: str = CANONICAL_REVISION):
        if revision not in LAYOUT_REVISION_WRITES:
            raise ValueError(f"Unknown layout revision: {revision}")
        self.revision = revision
        self.space = space

    def set_field(self, field: WritableField, new_address: AddressLike) -> FieldUpdate:
        """
        Write a new IPv4 value to a writable field.

        Args:
            field: Field to update
            new_address: New IPv4 address

        Returns:
            FieldUpdate describing the writes

        Raises:
            UnsupportedField: Field not writable in this layout revision
            InvalidAddress: Validation failed, nothing was written
            WriteFailed: A register write failed; if the first one failed
                the second was not attempted
        """
        if field not in LAYOUT_REVISION_WRITES[self.revision]:
            raise UnsupportedField(field, self.revision)

        ip = validate_ipv4(new_address)
        high, low = IPv4RegisterCodec.encode(ip)
        writes = tuple(zip(field.register_addresses, (high, low)))

        for register_address, value in writes:
            try:
                self.space.write_register(register_address, value)
            except OSError as e:
                logger.debug(f"Writing {field.label} failed at register {register_address}")
                raise WriteFailed(field, register_address, e) from e

        logger.info(f"Set {field.label} to {ip}")
        return FieldUpdate(field=field, address=str(ip), registers=writes)

    def set_dns_address(self, address: AddressLike) -> FieldUpdate:
        return self.set_field(WritableField.DNS, address)

    def set_gateway_address(self, address: AddressLike) -> FieldUpdate:
        return self.set_field(WritableField.GATEWAY, address)

    def set_device_address(self, address: AddressLike) -> FieldUpdate:
        return self.set_field(WritableField.DEVICE_ADDRESS, address)

    def set_subnet_mask(self, address: AddressLike) -> FieldUpdate:
        return self.set_field(WritableField.SUBNET_MASK, address)

    def apply(self, changes: Mapping[WritableField, AddressLike]) -> List[FieldUpdate]:
        """
        Apply several field updates in APPLY_ORDER.

        Stops at the first failure; updates already written stay written.
        """
        updates = []
        for field in APPLY_ORDER:
            if field in changes:
                updates.append(self.set_field(field, changes[field]))
        return updates
