import ipaddress
from datetime import timedelta

import pytest

from dhcpsix.basic import (
    NetworkInterfaceType,
    OptBootFileParam,
    OptBootFileURL,
    OptClientArchType,
    OptClientLinkLayerAddress,
    OptDHCP4oDHCP6Server,
    OptDNS,
    OptElapsedTime,
    OptInformationRefreshTime,
    OptInterfaceID,
    OptNetworkInterfaceID,
    OptRelayPort,
    OptRemoteID,
)
from dhcpsix.options import (
    BufferTooShortError,
    OptionCode,
    OptionGeneric,
    Options,
    UnreadBytesError,
)

_KINDS = {
    int(OptionCode.INTERFACE_ID): OptInterfaceID,
    int(OptionCode.BOOTFILE_URL): OptBootFileURL,
    int(OptionCode.BOOTFILE_PARAM): OptBootFileParam,
    int(OptionCode.REMOTE_ID): OptRemoteID,
    int(OptionCode.ELAPSED_TIME): OptElapsedTime,
    int(OptionCode.INFORMATION_REFRESH_TIME): OptInformationRefreshTime,
    int(OptionCode.DNS_RECURSIVE_NAME_SERVER): OptDNS,
    int(OptionCode.DHCP4O_DHCP6_SERVER): OptDHCP4oDHCP6Server,
    int(OptionCode.CLIENT_LINK_LAYER_ADDR): OptClientLinkLayerAddress,
    int(OptionCode.NII): OptNetworkInterfaceID,
    int(OptionCode.CLIENT_ARCH_TYPE): OptClientArchType,
}


def _parser(option_code, data):
    kind = _KINDS.get(int(option_code))
    if kind is None:
        return OptionGeneric(option_code, data)
    return kind.parse(data)


def _parse(buf):
    return Options.from_bytes(buf, _parser)


def _serialize(*opts):
    return Options(list(opts)).to_bytes()


ADDR = bytes(
    [0x2A, 0x03, 0x28, 0x80, 0xFF, 0xFE, 0x00, 0x0C, 0xFA, 0xCE, 0xB0, 0x0C, 0, 0, 0, 0x35]
)


# Client arch type

@pytest.mark.parametrize(
    "buf,want",
    [
        (bytes([0, 61, 0, 2, 0, 7]), [7]),
        (bytes([0, 61, 0, 4, 0, 7, 0, 8]), [7, 8]),
    ],
)
def test_arch_type_parse_and_roundtrip(buf, want):
    opt = _parse(buf).get_one(OptionCode.CLIENT_ARCH_TYPE)
    assert opt.archs == want
    assert _serialize(OptClientArchType(want)) == buf


def test_arch_type_empty():
    assert _parse(b"").get_one(OptionCode.CLIENT_ARCH_TYPE) is None


@pytest.mark.parametrize("buf", [bytes([0, 61, 0, 1, 0]), bytes([0, 61, 0])])
def test_arch_type_unread(buf):
    with pytest.raises(UnreadBytesError):
        _parse(buf)


def test_arch_type_string():
    opt = OptClientArchType([2])
    assert opt.code == OptionCode.CLIENT_ARCH_TYPE
    assert "EFI Itanium" in str(opt)


# Boot file param

def test_boot_file_param_large_parameter():
    opt = OptBootFileParam(["foo=bar", "a" * (1 << 16)])
    want = bytes([0, 60, 0, 9, 0, 7]) + b"foo=bar"
    assert _serialize(opt) == want


def test_boot_file_param_parse_and_roundtrip():
    buf = bytes([0, 60, 0, 25, 0, 14]) + b"root=/dev/sda1" + bytes([0, 7]) + b"foo=bar"
    opt = _parse(buf).get_one(OptionCode.BOOTFILE_PARAM)
    assert opt.params == ["root=/dev/sda1", "foo=bar"]
    assert _serialize(OptBootFileParam(["root=/dev/sda1", "foo=bar"])) == buf


def test_boot_file_param_empty():
    assert _parse(b"").get_one(OptionCode.BOOTFILE_PARAM) is None


def test_boot_file_param_unread():
    with pytest.raises(UnreadBytesError):
        _parse(bytes([0, 60, 0]))


def test_boot_file_param_truncated():
    with pytest.raises(BufferTooShortError):
        OptBootFileParam.parse(bytes([0, 5, ord("a")]))


# Boot file URL

def test_boot_file_url_parse_and_roundtrip():
    buf = bytes([0, 59, 0, 17]) + b"http://u-root.org"
    opt = _parse(buf).get_one(OptionCode.BOOTFILE_URL)
    assert opt.url == "http://u-root.org"
    assert _serialize(OptBootFileURL("http://u-root.org")) == buf


def test_boot_file_url_empty_and_unread():
    assert _parse(b"").get_one(OptionCode.BOOTFILE_URL) is None
    with pytest.raises(UnreadBytesError):
        _parse(bytes([0, 59, 0]))


def test_boot_file_url_string():
    opt = OptBootFileURL("https://boot.example.com")
    assert "https://boot.example.com" in str(opt)


# Client link-layer address

def test_client_link_layer_address_parse_and_roundtrip():
    buf = bytes([0, 79, 0, 8, 0, 1, 1, 2, 3, 4, 5, 6])
    opt = _parse(buf).get_one(OptionCode.CLIENT_LINK_LAYER_ADDR)
    assert opt.link_layer_type == 1
    assert opt.link_layer_address == bytes([1, 2, 3, 4, 5, 6])
    assert _serialize(OptClientLinkLayerAddress(1, bytes([1, 2, 3, 4, 5, 6]))) == buf


def test_client_link_layer_address_errors():
    with pytest.raises(BufferTooShortError):
        _parse(bytes([0, 79, 0, 1, 0]))
    with pytest.raises(UnreadBytesError):
        _parse(bytes([0, 79, 0]))


def test_client_link_layer_address_string():
    opt = OptClientLinkLayerAddress(1, bytes([0x02, 0, 0, 0, 0, 0x01]))
    assert str(opt) == "Client Link-Layer Address: Type=Ethernet LinkLayerAddress=02:00:00:00:00:01"


# DHCP4oDHCP6 server

def test_dhcp4o6_parse_and_roundtrip():
    buf = bytes([0, 88, 0, 32]) + ADDR + ADDR
    opt = _parse(buf).get_one(OptionCode.DHCP4O_DHCP6_SERVER)
    want = [ipaddress.IPv6Address(ADDR), ipaddress.IPv6Address(ADDR)]
    assert opt.dhcp4o_dhcp6_servers == want
    assert _serialize(OptDHCP4oDHCP6Server(want)) == buf


def test_dhcp4o6_empty_option():
    buf = bytes([0, 88, 0, 0])
    opt = _parse(buf).get_one(OptionCode.DHCP4O_DHCP6_SERVER)
    assert opt.dhcp4o_dhcp6_servers == []
    assert _serialize(OptDHCP4oDHCP6Server()) == buf


@pytest.mark.parametrize(
    "buf", [bytes([0, 88, 0, 6, 0x2A, 0x03, 0x28, 0x80, 0xFF, 0xFE]), bytes([0, 88, 0])]
)
def test_dhcp4o6_unread(buf):
    with pytest.raises(UnreadBytesError):
        _parse(buf)


def test_dhcp4o6_string():
    opt = OptDHCP4oDHCP6Server([ipaddress.IPv6Address("2a03:2880:fffe:c:face:b00c:0:35")])
    assert "[2a03:2880:fffe:c:face:b00c:0:35]" in str(opt)


# DNS

@pytest.mark.parametrize("count", [1, 2])
def test_dns_parse_and_roundtrip(count):
    buf = bytes([0, 23, 0, 16 * count]) + ADDR * count
    opt = _parse(buf).get_one(OptionCode.DNS_RECURSIVE_NAME_SERVER)
    want = [ipaddress.IPv6Address(ADDR)] * count
    assert opt.name_servers == want
    assert _serialize(OptDNS(want)) == buf


def test_dns_empty():
    assert _parse(b"").get_one(OptionCode.DNS_RECURSIVE_NAME_SERVER) is None


@pytest.mark.parametrize(
    "buf",
    [
        bytes([0, 23, 0, 8]) + ADDR[:8],
        bytes([0, 23, 0, 1, 0]),
        bytes([0, 23, 0]),
    ],
)
def test_dns_unread(buf):
    with pytest.raises(UnreadBytesError):
        _parse(buf)


def test_dns_ipv4_is_mapped():
    opt = OptDNS([ipaddress.IPv4Address("192.0.2.1")])
    assert opt.to_bytes() == bytes(10) + b"\xff\xff" + bytes([192, 0, 2, 1])


# Elapsed time

def test_elapsed_time_parse_and_roundtrip():
    buf = bytes([0, 8, 0, 2, 0, 2])
    opt = _parse(buf).get_one(OptionCode.ELAPSED_TIME)
    assert opt.elapsed_time == timedelta(milliseconds=20)
    assert _serialize(OptElapsedTime(timedelta(milliseconds=20))) == buf


def test_elapsed_time_errors():
    with pytest.raises(BufferTooShortError):
        _parse(bytes([0, 8, 0, 1, 0]))
    with pytest.raises(UnreadBytesError):
        _parse(bytes([0, 8, 0, 3, 0, 2, 2]))
    with pytest.raises(UnreadBytesError):
        _parse(bytes([0, 8, 0]))


def test_elapsed_time_string():
    assert str(OptElapsedTime(timedelta(milliseconds=100))) == "Elapsed Time: 100ms"


def test_elapsed_time_rounds_to_hundredths():
    assert OptElapsedTime(timedelta(milliseconds=25)).to_bytes() == bytes([0, 3])


# Information refresh time

def test_information_refresh_time_parse_and_roundtrip():
    buf = bytes([0, 32, 0, 4, 0, 0, 0, 3])
    opt = _parse(buf).get_one(OptionCode.INFORMATION_REFRESH_TIME)
    assert opt.information_refresh_time == timedelta(seconds=3)
    assert _serialize(OptInformationRefreshTime(timedelta(seconds=3))) == buf


def test_information_refresh_time_errors():
    with pytest.raises(UnreadBytesError):
        _parse(bytes([0, 32, 0, 6, 0, 0, 0, 3, 0, 0]))
    with pytest.raises(BufferTooShortError):
        _parse(bytes([0, 32, 0, 1, 0]))
    with pytest.raises(UnreadBytesError):
        _parse(bytes([0, 32, 0]))


def test_information_refresh_time_value():
    opt = OptInformationRefreshTime.parse(bytes([0xAA, 0xBB, 0xCC, 0xDD]))
    assert opt.information_refresh_time == timedelta(seconds=0xAABBCCDD)


def test_information_refresh_time_to_bytes():
    assert OptInformationRefreshTime(timedelta(0)).to_bytes() == bytes(4)


def test_information_refresh_time_string():
    opt = OptInformationRefreshTime(timedelta(seconds=3600))
    assert str(opt) == "Information Refresh Time: 1h0m0s"


# Interface ID

def test_interface_id_parse_and_roundtrip():
    buf = bytes([0, 18, 0, 4]) + b"SLAM"
    opt = _parse(buf).get_one(OptionCode.INTERFACE_ID)
    assert opt.id == b"SLAM"
    assert _serialize(OptInterfaceID(b"SLAM")) == buf


def test_interface_id_empty_and_unread():
    assert _parse(bytes([0, 18, 0, 0])).get_one(OptionCode.INTERFACE_ID).id == b""
    with pytest.raises(UnreadBytesError):
        _parse(bytes([0, 18, 0]))


def test_interface_id_string():
    opt = OptInterfaceID(b"DSLAM01 eth2/1/01/21")
    assert "68 83 76 65 77 48 49 32 101 116 104 50 47 49 47 48 49 47 50 49" in str(opt)


# Network interface identifier

def test_nii_parse():
    opt = OptNetworkInterfaceID.parse(bytes([1, 3, 20]))
    assert opt.code == OptionCode.NII
    assert opt.typ == 1
    assert opt.major == 3
    assert opt.minor == 20


def test_nii_to_bytes():
    assert OptNetworkInterfaceID(NetworkInterfaceType(1), 3, 20).to_bytes() == bytes([1, 3, 20])


def test_nii_too_short():
    with pytest.raises(BufferTooShortError):
        OptNetworkInterfaceID.parse(bytes([1]))


def test_nii_string():
    opt = OptNetworkInterfaceID.parse(bytes([1, 3, 20]))
    assert "First gen. PXE boot ROMs (Revision 3.20)" in str(opt)
    opt.typ = NetworkInterfaceType(200)
    assert "NetworkInterfaceType(200, unknown)" in str(opt)


# Relay port

def test_relay_port_parse():
    assert OptRelayPort.parse(bytes([0x12, 0x32])) == OptRelayPort(0x1232)


def test_relay_port_to_bytes():
    assert OptRelayPort(0x3845).to_bytes() == bytes([0x38, 0x45])


# Remote ID

def test_remote_id_parse_and_roundtrip():
    buf = bytes([0, 37, 0, 8, 0, 0, 0, 16]) + b"SLAM"
    opt = _parse(buf).get_one(OptionCode.REMOTE_ID)
    assert opt == OptRemoteID(16, b"SLAM")
    assert _serialize(OptRemoteID(16, b"SLAM")) == buf


def test_remote_id_empty_identifier():
    buf = bytes([0, 37, 0, 4, 0, 0, 0, 6])
    opt = _parse(buf).get_one(OptionCode.REMOTE_ID)
    assert opt == OptRemoteID(6, b"")
    assert _serialize(opt) == buf


def test_remote_id_errors():
    with pytest.raises(BufferTooShortError):
        _parse(bytes([0, 37, 0, 0]))
    with pytest.raises(UnreadBytesError):
        _parse(bytes([0, 37, 0]))


def test_remote_id_string():
    text = str(OptRemoteID(123, b"Test1234"))
    assert "EnterpriseNumber=123" in text
    assert "RemoteID=0x5465737431323334" in text