"""Simple DHCPv6 options: identifiers, boot parameters, timers and address lists."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Union

from .duid import _hw_name, _mac
from .options import Option, OptionCode, _Reader

IPv6Like = Union[ipaddress.IPv4Address, ipaddress.IPv6Address, str, bytes]

_MICRO = timedelta(microseconds=1)


def _format_duration(value: timedelta) -> str:
    """Format a duration the way durations are usually shown: 1h0m0s, 100ms."""
    micros = value // _MICRO
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros < 1000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        whole, frac = divmod(micros, 1000)
        text = f"{whole}.{frac:03d}".rstrip("0") if frac else str(whole)
        return f"{sign}{text}ms"
    secs, frac = divmod(micros, 1_000_000)
    hours, rem = divmod(secs, 3600)
    minutes, seconds = divmod(rem, 60)
    sec_text = f"{seconds}.{frac:06d}".rstrip("0") if frac else str(seconds)
    if hours:
        prefix = f"{hours}h{minutes}m"
    elif minutes:
        prefix = f"{minutes}m"
    else:
        prefix = ""
    return f"{sign}{prefix}{sec_text}s"


def _ip16(ip: IPv6Like) -> bytes:
    """Return the 16-byte form of an address; IPv4 is mapped into IPv6."""
    if isinstance(ip, (bytes, bytearray)):
        raw = bytes(ip)
        if len(raw) == 4:
            return bytes(10) + b"\xff\xff" + raw
        if len(raw) != 16:
            raise ValueError(f"invalid IP address length {len(raw)}")
        return raw
    addr = ipaddress.ip_address(ip) if isinstance(ip, str) else ip
    if isinstance(addr, ipaddress.IPv4Address):
        return bytes(10) + b"\xff\xff" + addr.packed
    return addr.packed


def _read_addresses(data: bytes) -> list:
    reader = _Reader(data)
    addrs = []
    while reader.remaining >= 16:
        addrs.append(ipaddress.IPv6Address(reader.read(16)))
    reader.finish()
    return addrs


def _addr_list(addrs: list) -> str:
    return "[" + " ".join(str(a) for a in addrs) + "]"


@dataclass
class OptInterfaceID(Option):
    """Interface-Id option (RFC 3315 section 22.18)."""

    id: bytes = b""
    code = OptionCode.INTERFACE_ID

    def to_bytes(self) -> bytes:
        return bytes(self.id)

    def __str__(self) -> str:
        return f"{self.code}: [{' '.join(str(b) for b in bytes(self.id))}]"

    @classmethod
    def parse(cls, data: bytes) -> "OptInterfaceID":
        return cls(bytes(data))


@dataclass
class OptBootFileURL(Option):
    """Boot File URL option (RFC 5970)."""

    url: str = ""
    code = OptionCode.BOOTFILE_URL

    def to_bytes(self) -> bytes:
        return self.url.encode()

    def __str__(self) -> str:
        return f"{self.code}: {self.url}"

    @classmethod
    def parse(cls, data: bytes) -> "OptBootFileURL":
        return cls(bytes(data).decode("utf-8", "replace"))


@dataclass
class OptBootFileParam(Option):
    """Boot File Parameters option (RFC 5970 section 3.2)."""

    params: list = field(default_factory=list)
    code = OptionCode.BOOTFILE_PARAM

    def to_bytes(self) -> bytes:
        out = bytearray()
        for param in self.params:
            raw = param.encode()
            if len(raw) >= 1 << 16:
                # Too long to describe with a 16-bit length; left out.
                continue
            out += struct.pack(">H", len(raw)) + raw
        return bytes(out)

    def __str__(self) -> str:
        return f"{self.code}: [{' '.join(self.params)}]"

    @classmethod
    def parse(cls, data: bytes) -> "OptBootFileParam":
        reader = _Reader(data)
        params = []
        while reader.remaining >= 2:
            length = reader.read16()
            params.append(reader.read(length).decode("utf-8", "replace"))
        reader.finish()
        return cls(params)


@dataclass
class OptRelayPort(Option):
    """Relay Source Port option (RFC 8357)."""

    downstream_source_port: int = 0
    code = OptionCode.RELAY_PORT

    def to_bytes(self) -> bytes:
        return struct.pack(">H", self.downstream_source_port)

    def __str__(self) -> str:
        return f"{self.code}: {self.downstream_source_port}"

    @classmethod
    def parse(cls, data: bytes) -> "OptRelayPort":
        reader = _Reader(data)
        port = reader.read16()
        reader.finish()
        return cls(port)


@dataclass
class OptRemoteID(Option):
    """Remote ID option (RFC 4649)."""

    enterprise_number: int = 0
    remote_id: bytes = b""
    code = OptionCode.REMOTE_ID

    def to_bytes(self) -> bytes:
        return struct.pack(">I", self.enterprise_number) + bytes(self.remote_id)

    def __str__(self) -> str:
        rid = f"0x{bytes(self.remote_id).hex()}" if self.remote_id else ""
        return f"{self.code}: {{EnterpriseNumber={self.enterprise_number} RemoteID={rid}}}"

    @classmethod
    def parse(cls, data: bytes) -> "OptRemoteID":
        reader = _Reader(data)
        number = reader.read32()
        return cls(number, reader.rest())


@dataclass
class OptElapsedTime(Option):
    """Elapsed Time option (RFC 3315 section 22.9), in hundredths of a second."""

    elapsed_time: timedelta = timedelta(0)
    code = OptionCode.ELAPSED_TIME

    def to_bytes(self) -> bytes:
        micros = self.elapsed_time // _MICRO
        if micros >= 0:
            units = (micros + 5000) // 10000
        else:
            units = -((-micros + 5000) // 10000)
        return struct.pack(">H", units & 0xFFFF)

    def __str__(self) -> str:
        return f"{self.code}: {_format_duration(self.elapsed_time)}"

    @classmethod
    def parse(cls, data: bytes) -> "OptElapsedTime":
        reader = _Reader(data)
        units = reader.read16()
        reader.finish()
        return cls(timedelta(milliseconds=10 * units))


@dataclass
class OptInformationRefreshTime(Option):
    """Information Refresh Time option (RFC 8415 section 21.23)."""

    information_refresh_time: timedelta = timedelta(0)
    code = OptionCode.INFORMATION_REFRESH_TIME

    def to_bytes(self) -> bytes:
        micros = self.information_refresh_time // _MICRO
        if micros >= 0:
            seconds = (micros + 500_000) // 1_000_000
        else:
            seconds = -((-micros + 500_000) // 1_000_000)
        return struct.pack(">I", seconds & 0xFFFFFFFF)

    def __str__(self) -> str:
        return f"{self.code}: {_format_duration(self.information_refresh_time)}"

    @classmethod
    def parse(cls, data: bytes) -> "OptInformationRefreshTime":
        reader = _Reader(data)
        seconds = reader.read32()
        reader.finish()
        return cls(timedelta(seconds=seconds))


@dataclass
class OptDNS(Option):
    """DNS Recursive Name Server option (RFC 3646)."""

    name_servers: list = field(default_factory=list)
    code = OptionCode.DNS_RECURSIVE_NAME_SERVER

    def to_bytes(self) -> bytes:
        return b"".join(_ip16(ns) for ns in self.name_servers)

    def __str__(self) -> str:
        return f"{self.code}: {_addr_list(self.name_servers)}"

    @classmethod
    def parse(cls, data: bytes) -> "OptDNS":
        return cls(_read_addresses(data))


@dataclass
class OptDHCP4oDHCP6Server(Option):
    """DHCP 4o6 Server Address option (RFC 7341)."""

    dhcp4o_dhcp6_servers: list = field(default_factory=list)
    code = OptionCode.DHCP4O_DHCP6_SERVER

    def to_bytes(self) -> bytes:
        return b"".join(_ip16(addr) for addr in self.dhcp4o_dhcp6_servers)

    def __str__(self) -> str:
        return f"{self.code}: {_addr_list(self.dhcp4o_dhcp6_servers)}"

    @classmethod
    def parse(cls, data: bytes) -> "OptDHCP4oDHCP6Server":
        return cls(_read_addresses(data))


@dataclass
class OptClientLinkLayerAddress(Option):
    """Client Link-Layer Address option (RFC 6939)."""

    link_layer_type: int = 0
    link_layer_address: bytes = b""
    code = OptionCode.CLIENT_LINK_LAYER_ADDR

    def to_bytes(self) -> bytes:
        return struct.pack(">H", self.link_layer_type) + bytes(self.link_layer_address)

    def __str__(self) -> str:
        return (
            f"{self.code}: Type={_hw_name(self.link_layer_type)} "
            f"LinkLayerAddress={_mac(self.link_layer_address)}"
        )

    @classmethod
    def parse(cls, data: bytes) -> "OptClientLinkLayerAddress":
        reader = _Reader(data)
        hw_type = reader.read16()
        return cls(hw_type, reader.rest())


_NII_NAMES = {
    0: "LANDesk service agent boot ROMs. No PXE",
    1: "First gen. PXE boot ROMs",
    2: "Second gen. PXE boot ROMs",
    3: "UNDI 32/64 bit. UEFI drivers, no UEFI runtime",
    4: "UNDI 32/64 bit. UEFI runtime 1st gen",
    5: "UNDI 32/64 bit. UEFI runtime 2nd gen",
}


class NetworkInterfaceType(int):
    """Network interface type (RFC 4578 section 2.2); any 8-bit value is allowed."""

    def __str__(self) -> str:
        name = _NII_NAMES.get(int(self))
        if name is None:
            return f"NetworkInterfaceType({int(self)}, unknown)"
        return name

    def __repr__(self) -> str:
        return f"NetworkInterfaceType({int(self)})"


for _name, _value in (
    ("LANDESK_NOPXE", 0),
    ("PXE_GEN_I", 1),
    ("PXE_GEN_II", 2),
    ("UNDI_NOEFI", 3),
    ("UNDI_EFI_GEN_I", 4),
    ("UNDI_EFI_GEN_II", 5),
):
    setattr(NetworkInterfaceType, _name, NetworkInterfaceType(_value))


@dataclass
class OptNetworkInterfaceID(Option):
    """Client Network Interface Identifier option (RFC 4578, RFC 5970)."""

    typ: int = 0
    major: int = 0
    minor: int = 0
    code = OptionCode.NII

    def to_bytes(self) -> bytes:
        return bytes((int(self.typ), self.major, self.minor))

    def __str__(self) -> str:
        return (
            f"{self.code}: {str(NetworkInterfaceType(self.typ))} "
            f"(Revision {self.major}.{self.minor})"
        )

    @classmethod
    def parse(cls, data: bytes) -> "OptNetworkInterfaceID":
        reader = _Reader(data)
        typ = NetworkInterfaceType(reader.read8())
        major = reader.read8()
        minor = reader.read8()
        reader.finish()
        return cls(typ, major, minor)


_ARCH_NAMES = {
    0: "Intel x86PC",
    1: "NEC/PC98",
    2: "EFI Itanium",
    3: "DEC Alpha",
    4: "Arc x86",
    5: "Intel Lean Client",
    6: "EFI IA32",
    7: "EFI x86-64",
    8: "EFI Xscale",
    9: "EFI BC",
    10: "EFI ARM32",
    11: "EFI ARM64",
}


@dataclass
class OptClientArchType(Option):
    """Client System Architecture Type option (RFC 5970)."""

    archs: list = field(default_factory=list)
    code = OptionCode.CLIENT_ARCH_TYPE

    def to_bytes(self) -> bytes:
        return b"".join(struct.pack(">H", int(a)) for a in self.archs)

    def __str__(self) -> str:
        names = ", ".join(_ARCH_NAMES.get(int(a), "unknown") for a in self.archs)
        return f"{self.code}: {names}"

    @classmethod
    def parse(cls, data: bytes) -> "OptClientArchType":
        reader = _Reader(data)
        archs = []
        while reader.remaining >= 2:
            archs.append(reader.read16())
        reader.finish()
        return cls(archs)