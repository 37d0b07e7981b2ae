"""Human-readable rendering of a DeviceConfig."""

from typing import List, Mapping, Optional

from ..modbus.register_map import WritableField
from .model import DeviceConfig, EnumeratedValue


def _enum_line(label: str, value: EnumeratedValue, unknown_label: str) -> str:
    if value.known:
        return f"{label}: {value.symbol}"
    return f"{unknown_label} unknown: {value.code}"


def format_config(
    config: DeviceConfig,
    pending: Optional[Mapping[WritableField, str]] = None,
) -> List[str]:
    """
    Render a configuration as display lines.

    Args:
        config: Decoded configuration
        pending: New values about to be written; shown as ``→ <value>``
            after the current one

    Returns:
        Lines without trailing newlines
    """
    pending = pending or {}

    def with_pending(field: WritableField) -> str:
        current = getattr(config, field.field_name)
        if field in pending:
            return f"{current} → {pending[field]}"
        return str(current)

    lines = [
        f"MAC : {config.mac_address_text}",
        f"DHCP: {'enabled' if config.dhcp_enabled else 'disabled'}",
        f"Protocol Type: {config.protocol_type.value}",
        _enum_line("Network Mode", config.network_mode, "Network Mode"),
        f"IP  : {with_pending(WritableField.DEVICE_ADDRESS)}",
        f"Port: {config.port}",
        f"Mask: {with_pending(WritableField.SUBNET_MASK)}",
        f"GW  : {with_pending(WritableField.GATEWAY)}",
        f"DNS : {with_pending(WritableField.DNS)}",
    ]

    if config.destination_domain_name:
        lines.append(
            f"Destination: {config.destination_domain_name}:{config.destination_port}"
        )

    lines.append("")
    lines.append(_enum_line("Baud rate", config.serial_port_rate, "Baud rate code"))
    lines.append(_enum_line("Parity check", config.serial_port_parity, "Parity check code"))

    return lines
