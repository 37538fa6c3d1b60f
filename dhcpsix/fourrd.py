"""4RD options (RFC 7600 section 4.9): the container and its rule options."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass, field
from typing import Optional, Union

from .options import Option, OptionCode, Options, _default_parser, _Reader

_WKP_AUTHORIZED_MASK = 1 << 7
_HUB_AND_SPOKE_MASK = 1 << 7
_TRAFFIC_CLASS_MASK = 1 << 0


class FourRDOptions(Options):
    """Options that may be carried inside a 4RD option."""

    @classmethod
    def from_bytes(cls, data: bytes, parser=None):
        return super().from_bytes(data, parser or parse_fourrd_option)

    def map_rules(self) -> list:
        """Return the encapsulated 4RD map rule options."""
        return [
            o for o in self.get(OptionCode.FOUR_RD_MAP_RULE) if isinstance(o, Opt4RDMapRule)
        ]

    def non_map_rule(self) -> Optional["Opt4RDNonMapRule"]:
        """Return the encapsulated 4RD non-map rule option, if any."""
        opt = self.get_one(OptionCode.FOUR_RD_NON_MAP_RULE)
        return opt if isinstance(opt, Opt4RDNonMapRule) else None


@dataclass
class Opt4RD(Option):
    """4RD option, a container for 4RD rule options."""

    options: FourRDOptions = field(default_factory=FourRDOptions)
    code = OptionCode.FOUR_RD

    def to_bytes(self) -> bytes:
        return self.options.to_bytes()

    def __str__(self) -> str:
        return f"{self.code}: {{Options={self.options}}}"

    @classmethod
    def parse(cls, data: bytes) -> "Opt4RD":
        return cls(FourRDOptions.from_bytes(data))


@dataclass
class Opt4RDMapRule(Option):
    """4RD mapping rule option (RFC 7600 sections 4.2 and 4.9)."""

    prefix4: ipaddress.IPv4Interface = field(
        default_factory=lambda: ipaddress.IPv4Interface("0.0.0.0/0")
    )
    prefix6: ipaddress.IPv6Interface = field(
        default_factory=lambda: ipaddress.IPv6Interface("::/0")
    )
    ea_bits_length: int = 0
    wkp_authorized: bool = False
    code = OptionCode.FOUR_RD_MAP_RULE

    def __post_init__(self) -> None:
        if isinstance(self.prefix4, (str, tuple)):
            self.prefix4 = ipaddress.IPv4Interface(self.prefix4)
        if isinstance(self.prefix6, (str, tuple)):
            self.prefix6 = ipaddress.IPv6Interface(self.prefix6)

    def to_bytes(self) -> bytes:
        head = bytes(
            (
                self.prefix4.network.prefixlen,
                self.prefix6.network.prefixlen,
                self.ea_bits_length,
                _WKP_AUTHORIZED_MASK if self.wkp_authorized else 0,
            )
        )
        return head + self.prefix4.ip.packed + self.prefix6.ip.packed

    def __str__(self) -> str:
        wkp = str(bool(self.wkp_authorized)).lower()
        return (
            f"{self.code}: {{Prefix4={self.prefix4}, Prefix6={self.prefix6}, "
            f"EA-Bits={self.ea_bits_length}, WKPAuthorized={wkp}}}"
        )

    @classmethod
    def parse(cls, data: bytes) -> "Opt4RDMapRule":
        reader = _Reader(data)
        p4_len = reader.read8()
        p6_len = reader.read8()
        ea_bits = reader.read8()
        wkp = bool(reader.read8() & _WKP_AUTHORIZED_MASK)
        ip4 = ipaddress.IPv4Address(reader.read(4))
        ip6 = ipaddress.IPv6Address(reader.read(16))
        reader.finish()
        return cls(
            ipaddress.IPv4Interface((ip4, p4_len)),
            ipaddress.IPv6Interface((ip6, p6_len)),
            ea_bits,
            wkp,
        )


@dataclass
class Opt4RDNonMapRule(Option):
    """4RD parameters other than mapping rules."""

    hub_and_spoke: bool = False
    traffic_class: Optional[int] = None
    domain_pmtu: int = 0
    code = OptionCode.FOUR_RD_NON_MAP_RULE

    def to_bytes(self) -> bytes:
        flags = 0
        if self.hub_and_spoke:
            flags |= _HUB_AND_SPOKE_MASK
        tclass = 0
        if self.traffic_class is not None:
            flags |= _TRAFFIC_CLASS_MASK
            tclass = self.traffic_class
        return struct.pack(">BBH", flags, tclass, self.domain_pmtu)

    def __str__(self) -> str:
        hub = str(bool(self.hub_and_spoke)).lower()
        tclass = "false" if self.traffic_class is None else str(self.traffic_class)
        return (
            f"{self.code}: {{HubAndSpoke={hub}, "
            f"TrafficClass={tclass}, DomainPMTU={self.domain_pmtu}}}"
        )

    @classmethod
    def parse(cls, data: bytes) -> "Opt4RDNonMapRule":
        reader = _Reader(data)
        flags = reader.read8()
        tclass = reader.read8()
        pmtu = reader.read16()
        reader.finish()
        return cls(
            bool(flags & _HUB_AND_SPOKE_MASK),
            tclass if flags & _TRAFFIC_CLASS_MASK else None,
            pmtu,
        )


_FOURRD_KINDS: dict = {
    OptionCode.FOUR_RD: Opt4RD,
    OptionCode.FOUR_RD_MAP_RULE: Opt4RDMapRule,
    OptionCode.FOUR_RD_NON_MAP_RULE: Opt4RDNonMapRule,
}


def parse_fourrd_option(code: Union[OptionCode, int], data: bytes) -> Option:
    """Parse one option body, knowing the 4RD option kinds."""
    kind = _FOURRD_KINDS.get(int(code))
    if kind is None:
        return _default_parser(OptionCode(code), data)
    return kind.parse(data)