"""
Command Line Entry Point
========================

Shows the gateway configuration, applies any requested network changes,
then shows the configuration again.

Example:
    python -m m31_config -a 192.168.3.7 -p 502 --ip 10.0.0.5 -m 255.255.255.0

License: MIT
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

from .device import ConfigurationUpdater, format_config, read_device_config
from .device.updater import APPLY_ORDER
from .errors import M31ConfigError
from .modbus import ModbusClientConfig, ModbusTcpRegisterSpace, RegisterSpace, WritableField
from .modbus.register_map import CANONICAL_REVISION, LAYOUT_REVISION_WRITES

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_READ_FAILED = 1
EXIT_UPDATE_FAILED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="m31_config", description="Show and change M31 gateway network configuration"
    )
    parser.add_argument(
        "-a", "--address", required=True, help="current network address of the device"
    )
    parser.add_argument(
        "-p", "--port", type=int, default=502, help="current network port of the device"
    )
    parser.add_argument(
        "-s", "--slave-id", type=int, default=1, help="device slave identifier"
    )
    parser.add_argument("-d", "--debug", action="store_true", help="show debug info")
    parser.add_argument(
        "--timeout", type=float, default=5.0, help="request timeout [seconds]"
    )
    parser.add_argument(
        "--revision",
        choices=sorted(LAYOUT_REVISION_WRITES),
        default=CANONICAL_REVISION,
        help="firmware layout revision (limits which fields can be written)",
    )
    parser.add_argument("--dns", help="set new DNS address")
    parser.add_argument("--ip", help="set new device network address")
    parser.add_argument("--gw", help="set default gateway address")
    parser.add_argument("-m", "--mask", help="set subnet mask")
    return parser


def pending_changes(args: argparse.Namespace) -> Dict[WritableField, str]:
    requested = {
        WritableField.DNS: args.dns,
        WritableField.GATEWAY: args.gw,
        WritableField.DEVICE_ADDRESS: args.ip,
        WritableField.SUBNET_MASK: args.mask,
    }
    return {field: value for field, value in requested.items() if value}


def show_configuration(space: RegisterSpace, pending=None) -> bool:
    """Print the current configuration. Returns False if it could not be read."""
    try:
        config = read_device_config(space)
    except M31ConfigError as e:
        logger.error(f"Error reading data: {e}")
        return False

    for line in format_config(config, pending):
        print(line)
    print()
    return True


def apply_changes(
    space: RegisterSpace,
    changes: Dict[WritableField, str],
    revision: str = CANONICAL_REVISION,
) -> List[WritableField]:
    """Apply each change, continuing past failures. Returns the failed fields."""
    updater = ConfigurationUpdater(space, revision)
    failed = []

    for field in APPLY_ORDER:
        if field not in changes:
            continue
        try:
            updater.set_field(field, changes[field])
        except M31ConfigError as e:
            logger.error(f"Error setting {field.label}: {e}")
            failed.append(field)

    return failed


def run(args: argparse.Namespace, space: Optional[RegisterSpace] = None) -> int:
    changes = pending_changes(args)

    if space is None:
        config = ModbusClientConfig(
            host=args.address,
            port=args.port,
            unit_id=args.slave_id,
            timeout_sec=args.timeout,
        )
        try:
            tcp_space = ModbusTcpRegisterSpace(config)
            tcp_space.connect()
        except (ValueError, M31ConfigError) as e:
            logger.error(f"Error creating modbus tcp connection: {e}")
            return EXIT_READ_FAILED

        try:
            return run(args, tcp_space)
        finally:
            tcp_space.close()

    # Updates are applied even when the first read fails
    shown = show_configuration(space, changes)

    if not changes:
        return EXIT_OK if shown else EXIT_READ_FAILED

    failed = apply_changes(space, changes, args.revision)

    if not show_configuration(space):
        shown = False

    if failed:
        return EXIT_UPDATE_FAILED
    return EXIT_OK if shown else EXIT_READ_FAILED


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # pymodbus is chatty at DEBUG
    logging.getLogger("pymodbus").setLevel(logging.INFO if args.debug else logging.WARNING)

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
