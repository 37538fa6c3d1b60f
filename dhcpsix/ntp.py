"""NTP Server option and its suboptions (RFC 5908)."""

from __future__ import annotations

import enum
import ipaddress
from dataclasses import dataclass, field
from typing import Union

from .basic import _ip16
from .options import Option, OptionCode, OptionGeneric, Options, _Reader


class NTPSuboptionCode(enum.IntEnum):
    SRV_ADDR = 1
    MC_ADDR = 2
    SRV_FQDN = 3


def _to_address(value):
    if isinstance(value, (str, bytes, bytearray)):
        return ipaddress.ip_address(value if isinstance(value, str) else bytes(value))
    return value


def _read_address(data: bytes) -> ipaddress.IPv6Address:
    reader = _Reader(data)
    addr = ipaddress.IPv6Address(reader.read(16))
    reader.finish()
    return addr


@dataclass
class NTPSuboptionSrvAddr(Option):
    """NTP server address suboption."""

    address: ipaddress.IPv6Address
    code = NTPSuboptionCode.SRV_ADDR

    def __post_init__(self) -> None:
        self.address = _to_address(self.address)

    def to_bytes(self) -> bytes:
        return _ip16(self.address)

    def __str__(self) -> str:
        return f"Server Address: {self.address}"

    @classmethod
    def parse(cls, data: bytes) -> "NTPSuboptionSrvAddr":
        return cls(_read_address(data))


@dataclass
class NTPSuboptionMCAddr(Option):
    """NTP multicast address suboption."""

    address: ipaddress.IPv6Address
    code = NTPSuboptionCode.MC_ADDR

    def __post_init__(self) -> None:
        self.address = _to_address(self.address)

    def to_bytes(self) -> bytes:
        return _ip16(self.address)

    def __str__(self) -> str:
        return f"Multicast Address: {self.address}"

    @classmethod
    def parse(cls, data: bytes) -> "NTPSuboptionMCAddr":
        return cls(_read_address(data))


def parse_ntp_suboption(code: Union[int, OptionCode], data: bytes) -> Option:
    """Parse one NTP suboption body."""
    if int(code) == NTPSuboptionCode.SRV_ADDR:
        return NTPSuboptionSrvAddr.parse(data)
    if int(code) == NTPSuboptionCode.MC_ADDR:
        return NTPSuboptionMCAddr.parse(data)
    return OptionGeneric(OptionCode(code), bytes(data))


@dataclass
class OptNTPServer(Option):
    """NTP Server option (RFC 5908)."""

    suboptions: Options = field(default_factory=Options)
    code = OptionCode.NTP_SERVER

    def to_bytes(self) -> bytes:
        return self.suboptions.to_bytes()

    def __str__(self) -> str:
        return f"NTP: {self.suboptions}"

    @classmethod
    def parse(cls, data: bytes) -> "OptNTPServer":
        return cls(Options.from_bytes(data, parse_ntp_suboption))

    def server_addresses(self) -> list:
        """Return the server addresses among the suboptions."""
        return [s.address for s in self.suboptions if isinstance(s, NTPSuboptionSrvAddr)]