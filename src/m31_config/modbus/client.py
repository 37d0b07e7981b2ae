"""
Modbus TCP Register Space
=========================

Transport for the configuration tool.

The codec and the updater only need two capabilities:
- read N holding registers starting at address A (as bytes)
- write a single holding register

Both are described by RegisterSpace; ModbusTcpRegisterSpace provides
them over Modbus/TCP with pymodbus.

License: MIT
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from pymodbus.client import ModbusTcpClient
from pymodbus.exceptions import ModbusException

from ..errors import TransportError
from .protocols import ModbusDecoder, ModbusEncoder

logger = logging.getLogger(__name__)


class RegisterSpace(ABC):
    """Register-addressed storage of a device."""

    @abstractmethod
    def read_registers(self, address: int, count: int) -> bytes:
        """
        Read ``count`` registers starting at ``address``.

        Returns:
            Exactly ``count * 2`` big-endian bytes

        Raises:
            TransportError: On connection, timeout or protocol failure
        """

    @abstractmethod
    def write_register(self, address: int, value: int) -> None:
        """
        Write one 16-bit register.

        Raises:
            TransportError: On connection, timeout or protocol failure
        """


@dataclass
class ModbusClientConfig:
    """Configuration for the Modbus TCP connection to the gateway."""

    host: str = ""
    port: int = 502
    unit_id: int = 1

    # Timeouts
    timeout_sec: float = 5.0
    retries: int = 0

    def validate(self):
        if not self.host:
            raise ValueError("Device address is required")
        if not 0 < self.port <= 65535:
            raise ValueError(f"Port {self.port} out of range [1, 65535]")
        if not 0 <= self.unit_id <= 255:
            raise ValueError(f"Slave id {self.unit_id} out of range [0, 255]")
        if self.timeout_sec <= 0:
            raise ValueError("Timeout must be positive")


class ModbusTcpRegisterSpace(RegisterSpace):
    """
    RegisterSpace backed by a pymodbus TCP client.

    Uses holding register function codes (03 read, 06 write single).
    """

    def __init__(
        self,
        config: ModbusClientConfig,
        client: Optional[ModbusTcpClient] = None,
    ):
        config.validate()
        self.config = config
        self.encoder = ModbusEncoder()
        self.decoder = ModbusDecoder()
        self.client = client or ModbusTcpClient(
            host=config.host,
            port=config.port,
            timeout=config.timeout_sec,
            retries=config.retries,
        )

    def connect(self):
        """Open the TCP connection."""
        try:
            connected = self.client.connect()
        except ModbusException as e:
            raise TransportError(
                f"Cannot connect to {self.config.host}:{self.config.port}: {e}"
            ) from e

        if not connected:
            raise TransportError(
                f"Cannot connect to {self.config.host}:{self.config.port}"
            )

        logger.debug(
            f"Connected to {self.config.host}:{self.config.port}, "
            f"unit_id={self.config.unit_id}"
        )

    def close(self):
        self.client.close()
        logger.debug("Connection closed")

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def read_registers(self, address: int, count: int) -> bytes:
        try:
            rr = self.client.read_holding_registers(
                address, count=count, device_id=self.config.unit_id
            )
        except ModbusException as e:
            raise TransportError(f"Reading {count} registers at {address} failed: {e}") from e

        if rr.isError():
            raise TransportError(f"Reading {count} registers at {address} failed: {rr}")

        return self.decoder.registers_to_bytes(rr.registers)

    def write_register(self, address: int, value: int) -> None:
        value = self.encoder.uint16_to_register(value)

        try:
            rr = self.client.write_register(
                address, value, device_id=self.config.unit_id
            )
        except ModbusException as e:
            raise TransportError(f"Writing register {address} failed: {e}") from e

        if rr.isError():
            raise TransportError(f"Writing register {address} failed: {rr}")

        logger.debug(f"Wrote register {address} = 0x{value:04X}")
