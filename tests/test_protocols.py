import ipaddress

import pytest

from m31_config.errors import InvalidAddress
from m31_config.modbus.protocols import (
    IPv4RegisterCodec,
    ModbusDecoder,
    ModbusEncoder,
    validate_ipv4,
)


class TestIPv4RegisterCodec:
    def test_encode_splits_octets_high_word_first(self):
        assert IPv4RegisterCodec.encode("10.0.0.5") == (0x0A00, 0x0005)
        assert IPv4RegisterCodec.encode("192.168.3.7") == (0xC0A8, 0x0307)

    def test_encode_accepts_ipv4address(self):
        assert IPv4RegisterCodec.encode(ipaddress.IPv4Address("255.255.255.0")) == (
            0xFFFF,
            0xFF00,
        )

    def test_decode_joins_octets(self):
        assert IPv4RegisterCodec.decode(0xC0A8, 0x0307) == ipaddress.IPv4Address(
            "192.168.3.7"
        )

    def test_decode_is_total(self):
        assert str(IPv4RegisterCodec.decode(0, 0)) == "0.0.0.0"
        assert str(IPv4RegisterCodec.decode(0xFFFF, 0xFFFF)) == "255.255.255.255"

    @pytest.mark.parametrize(
        "address",
        ["0.0.0.0", "1.2.3.4", "10.0.0.5", "172.16.254.1", "255.255.255.255"],
    )
    def test_round_trip(self, address):
        assert str(IPv4RegisterCodec.decode(*IPv4RegisterCodec.encode(address))) == address

    @pytest.mark.parametrize(
        "address", ["300.1.1.1", "1.2.3", "", "not-an-ip", "1.2.3.4.5", "fe80::1", " 10.0.0.5 "]
    )
    def test_encode_rejects_invalid(self, address):
        with pytest.raises(InvalidAddress):
            IPv4RegisterCodec.encode(address)

    def test_ipv6_reported_as_not_v4(self):
        with pytest.raises(InvalidAddress, match="not v4"):
            validate_ipv4("2001:db8::1")

    def test_ipv4_mapped_ipv6_reduced_to_ipv4(self):
        assert validate_ipv4("::ffff:10.0.0.5") == ipaddress.IPv4Address("10.0.0.5")

    def test_invalid_address_is_value_error(self):
        with pytest.raises(ValueError):
            validate_ipv4(None)


class TestRegisterPacking:
    def test_registers_to_bytes_big_endian(self):
        assert ModbusDecoder.registers_to_bytes([0x0102, 0xA0B0]) == b"\x01\x02\xa0\xb0"

    def test_registers_to_bytes_empty(self):
        assert ModbusDecoder.registers_to_bytes([]) == b""

    def test_registers_to_bytes_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            ModbusDecoder.registers_to_bytes([0x10000])

    def test_uint16_range(self):
        assert ModbusEncoder.uint16_to_register(65535) == 65535
        with pytest.raises(ValueError):
            ModbusEncoder.uint16_to_register(-1)
