import struct

import pytest

from m31_config.errors import TransportError
from m31_config.modbus.client import RegisterSpace


class FakeRegisterSpace(RegisterSpace):
    """In-memory register space recording every call."""

    def __init__(self, payload=b"", fail_writes_at=()):
        self.payload = payload
        self.fail_writes_at = set(fail_writes_at)
        self.reads = []
        self.writes = []

    def read_registers(self, address, count):
        self.reads.append((address, count))
        return self.payload

    def write_register(self, address, value):
        if address in self.fail_writes_at:
            raise TransportError(f"write to {address} timed out")
        self.writes.append((address, value))


def build_payload(
    rate=3,
    parity=0,
    mode=0,
    dhcp=0,
    mac=b"\x00\x11\x22\x33\x44\x55",
    address=(192, 168, 1, 10),
    mask=(255, 255, 255, 0),
    gateway=(192, 168, 1, 1),
    dns=(8, 8, 8, 8),
    reserved=b"\x00\x00\x00\x00",
    port=502,
    domain=b"",
    destination_port=0,
    protocol=0,
    negotiation=(0, 0, 0, 0),
    trailer=b"\x00\x00",
):
    """Build a 178-byte configuration block."""
    raw = struct.pack(">HHHH", rate, parity, mode, dhcp)
    raw += mac + bytes(address) + bytes(mask) + bytes(gateway) + bytes(dns)
    raw += reserved + struct.pack(">H", port)
    raw += domain.ljust(128, b"\x00")
    raw += struct.pack(">HH", destination_port, protocol)
    raw += struct.pack(">HHHH", *negotiation)
    raw += trailer
    assert len(raw) == 178
    return raw


@pytest.fixture
def payload():
    return build_payload()


@pytest.fixture
def fake_space(payload):
    return FakeRegisterSpace(payload)
