import ipaddress

import pytest

from conftest import FakeRegisterSpace, build_payload
from m31_config.device import (
    DeviceConfig,
    EnumeratedValue,
    ProtocolType,
    classify_baud_rate,
    classify_network_mode,
    classify_parity,
    decode_config,
    read_device_config,
)
from m31_config.errors import MalformedPayload, ShortPayload, TransportError
from m31_config.modbus.register_map import ConfigRegisterMap, FieldDefinition, FieldType


class TestClassification:
    def test_baud_rate_zero_is_unknown(self):
        value = classify_baud_rate(0)
        assert not value.known
        assert str(value) == "unknown(0)"

    def test_baud_rate_is_one_based(self):
        assert classify_baud_rate(1).symbol == 2400
        assert classify_baud_rate(3).symbol == 9600
        assert classify_baud_rate(8).symbol == 230400

    def test_baud_rate_past_table_is_unknown(self):
        assert classify_baud_rate(9) == EnumeratedValue(9)

    @pytest.mark.parametrize(
        "code, symbol",
        [(0, "TCP server"), (1, "TCP client"), (2, "UDP server"), (3, "UDP client")],
    )
    def test_network_modes(self, code, symbol):
        assert classify_network_mode(code).symbol == symbol

    def test_network_mode_out_of_range_keeps_code(self):
        value = classify_network_mode(4)
        assert value.code == 4
        assert str(value) == "unknown(4)"

    def test_parity(self):
        assert [classify_parity(c).symbol for c in range(3)] == ["NONE", "ODD", "EVEN"]
        assert not classify_parity(3).known


class TestDecodeConfig:
    def test_end_to_end_scenario(self):
        raw = build_payload(
            dhcp=1,
            protocol=1,
            mode=1,
            mac=bytes.fromhex("AABBCCDDEEFF"),
            address=(192, 168, 3, 7),
            port=502,
        )
        config = decode_config(raw)

        assert config.dhcp_enabled is True
        assert config.protocol_type is ProtocolType.TCP
        assert config.network_mode.symbol == "TCP client"
        assert config.mac_address_text == "AA:BB:CC:DD:EE:FF"
        assert config.address == ipaddress.IPv4Address("192.168.3.7")
        assert config.port == 502

    def test_all_fields(self):
        raw = build_payload(
            rate=7,
            parity=2,
            mode=3,
            mask=(255, 255, 0, 0),
            gateway=(10, 0, 0, 1),
            dns=(1, 1, 1, 1),
            reserved=b"\x01\x02\x03\x04",
            domain=b"plc.example.com",
            destination_port=8080,
            negotiation=(11, 12, 13, 14),
        )
        config = decode_config(raw)

        assert config.serial_port_rate.symbol == 115200
        assert config.serial_port_parity.symbol == "EVEN"
        assert config.network_mode.symbol == "UDP client"
        assert str(config.subnet_mask) == "255.255.0.0"
        assert str(config.gateway) == "10.0.0.1"
        assert str(config.dns) == "1.1.1.1"
        assert config.reserved == b"\x01\x02\x03\x04"
        assert config.destination_domain_name == "plc.example.com"
        assert config.destination_port == 8080
        assert config.address_negotiation_write_register == 11
        assert config.address_negotiation_register == 12
        assert config.negotiation_status == 13
        assert config.exception_code == 14

    @pytest.mark.parametrize("code", [0, 2, 0xFFFF])
    def test_flags_other_than_one_are_false(self, code):
        config = decode_config(build_payload(dhcp=code, protocol=code))
        assert config.dhcp_enabled is False
        assert config.protocol_type is ProtocolType.RTU

    def test_unknown_enums_do_not_abort_decode(self):
        config = decode_config(build_payload(rate=0, parity=9, mode=4, port=4196))
        assert not config.serial_port_rate.known
        assert config.serial_port_parity.code == 9
        assert str(config.network_mode) == "unknown(4)"
        assert config.port == 4196

    def test_decoding_twice_is_equal(self, payload):
        assert decode_config(payload) == decode_config(payload)

    def test_record_is_immutable(self, payload):
        config = decode_config(payload)
        with pytest.raises(AttributeError):
            config.port = 1

    @pytest.mark.parametrize("length", [0, 176, 177])
    def test_short_payload(self, payload, length):
        with pytest.raises(ShortPayload) as exc_info:
            decode_config(payload[:length])
        assert exc_info.value.received == length
        assert exc_info.value.expected == 178

    def test_extra_bytes_ignored(self, payload):
        assert decode_config(payload + b"\xff\xff") == decode_config(payload)

    def test_malformed_layout(self, payload):
        broken = ConfigRegisterMap(
            (FieldDefinition("port", 0, FieldType.UINT16, 2, ""),)
        )
        with pytest.raises(MalformedPayload):
            decode_config(payload, broken)

    def test_as_dict(self, payload):
        data = decode_config(payload).as_dict()
        assert data["address"] == "192.168.1.10"
        assert data["mac_address"] == "00:11:22:33:44:55"
        assert data["serial_port_rate"] == "9600"
        assert data["protocol_type"] == "RTU"


class TestReadDeviceConfig:
    def test_reads_89_registers_from_30000(self, fake_space):
        config = read_device_config(fake_space)
        assert fake_space.reads == [(30000, 89)]
        assert isinstance(config, DeviceConfig)

    def test_short_read_propagates(self):
        with pytest.raises(ShortPayload):
            read_device_config(FakeRegisterSpace(b"\x00" * 10))

    def test_transport_error_propagates(self):
        class Broken(FakeRegisterSpace):
            def read_registers(self, address, count):
                raise TransportError("timeout")

        with pytest.raises(TransportError):
            read_device_config(Broken())
