"""Identity association options: IA_NA, IA_PD, IA Address and IA Prefix."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional, Union

from .basic import _format_duration, _ip16
from .options import (
    Option,
    OptionCode,
    Options,
    OptStatusCode,
    _default_parser,
    _Reader,
    decode_duration,
    encode_duration,
)


def _status_of(options: Options) -> Optional[OptStatusCode]:
    opt = options.get_one(OptionCode.STATUS_CODE)
    return opt if isinstance(opt, OptStatusCode) else None


def _addr16(ip) -> bytes:
    return bytes(16) if ip is None else _ip16(ip)


class _IAOptionList(Options):
    """Options container whose parser knows the IA option kinds."""

    @classmethod
    def from_bytes(cls, data: bytes, parser=None):
        return super().from_bytes(data, parser or parse_ia_option)


class AddressOptions(_IAOptionList):
    """Options carried inside an IA Address option."""

    def status(self) -> Optional[OptStatusCode]:
        return _status_of(self)


class PrefixOptions(_IAOptionList):
    """Options carried inside an IA Prefix option."""

    def status(self) -> Optional[OptStatusCode]:
        return _status_of(self)


class PDOptions(_IAOptionList):
    """Options carried inside an IA_PD option."""

    def prefixes(self) -> list:
        return [o for o in self.get(OptionCode.IA_PREFIX) if isinstance(o, OptIAPrefix)]

    def status(self) -> Optional[OptStatusCode]:
        return _status_of(self)


class IdentityOptions(_IAOptionList):
    """Options carried inside IA_NA and IA_TA options."""

    def addresses(self) -> list:
        return [o for o in self.get(OptionCode.IA_ADDR) if isinstance(o, OptIAAddress)]

    def one_address(self) -> Optional["OptIAAddress"]:
        return next(iter(self.addresses()), None)

    def status(self) -> Optional[OptStatusCode]:
        return _status_of(self)


def _check_ia_id(ia_id: bytes) -> bytes:
    ia_id = bytes(ia_id)
    if len(ia_id) != 4:
        raise ValueError(f"IAID must be 4 bytes, got {len(ia_id)}")
    return ia_id


def _show_ip(ip) -> str:
    return "<nil>" if ip is None else str(ip)


@dataclass
class OptIAAddress(Option):
    """IA Address option (RFC 8415 section 21.6)."""

    ipv6_addr: Optional[ipaddress.IPv6Address] = None
    preferred_lifetime: timedelta = timedelta(0)
    valid_lifetime: timedelta = timedelta(0)
    options: AddressOptions = field(default_factory=AddressOptions)
    code = OptionCode.IA_ADDR

    def __post_init__(self) -> None:
        if isinstance(self.ipv6_addr, str):
            self.ipv6_addr = ipaddress.ip_address(self.ipv6_addr)

    def to_bytes(self) -> bytes:
        return (
            _addr16(self.ipv6_addr)
            + encode_duration(self.preferred_lifetime)
            + encode_duration(self.valid_lifetime)
            + self.options.to_bytes()
        )

    def __str__(self) -> str:
        return (
            f"{self.code}: {{IP={_show_ip(self.ipv6_addr)} "
            f"PreferredLifetime={_format_duration(self.preferred_lifetime)} "
            f"ValidLifetime={_format_duration(self.valid_lifetime)} "
            f"Options={self.options}}}"
        )

    @classmethod
    def parse(cls, data: bytes) -> "OptIAAddress":
        reader = _Reader(data)
        addr = ipaddress.IPv6Address(reader.read(16))
        preferred = decode_duration(reader.read(4))
        valid = decode_duration(reader.read(4))
        options = AddressOptions.from_bytes(reader.rest())
        return cls(addr, preferred, valid, options)


@dataclass
class OptIAPrefix(Option):
    """IA Prefix option (RFC 3633 section 10)."""

    preferred_lifetime: timedelta = timedelta(0)
    valid_lifetime: timedelta = timedelta(0)
    prefix: Optional[ipaddress.IPv6Interface] = None
    options: PrefixOptions = field(default_factory=PrefixOptions)
    code = OptionCode.IA_PREFIX

    def __post_init__(self) -> None:
        if isinstance(self.prefix, str):
            self.prefix = ipaddress.IPv6Interface(self.prefix)

    def to_bytes(self) -> bytes:
        if self.prefix is None:
            head = bytes(1) + bytes(16)
        else:
            head = bytes((self.prefix.network.prefixlen,)) + self.prefix.ip.packed
        return (
            encode_duration(self.preferred_lifetime)
            + encode_duration(self.valid_lifetime)
            + head
            + self.options.to_bytes()
        )

    def __str__(self) -> str:
        prefix = "<nil>" if self.prefix is None else str(self.prefix.network)
        return (
            f"{self.code}: {{PreferredLifetime={_format_duration(self.preferred_lifetime)}, "
            f"ValidLifetime={_format_duration(self.valid_lifetime)}, "
            f"Prefix={prefix}, Options={self.options}}}"
        )

    @classmethod
    def parse(cls, data: bytes) -> "OptIAPrefix":
        reader = _Reader(data)
        preferred = decode_duration(reader.read(4))
        valid = decode_duration(reader.read(4))
        length = reader.read8()
        raw = reader.read(16)
        prefix = None
        if length:
            prefix = ipaddress.IPv6Interface((ipaddress.IPv6Address(raw), length))
        options = PrefixOptions.from_bytes(reader.rest())
        return cls(preferred, valid, prefix, options)


@dataclass
class OptIAPD(Option):
    """Identity Association for Prefix Delegation (RFC 3633 section 9)."""

    ia_id: bytes = bytes(4)
    t1: timedelta = timedelta(0)
    t2: timedelta = timedelta(0)
    options: PDOptions = field(default_factory=PDOptions)
    code = OptionCode.IAPD

    def __post_init__(self) -> None:
        self.ia_id = _check_ia_id(self.ia_id)

    def to_bytes(self) -> bytes:
        return (
            self.ia_id
            + encode_duration(self.t1)
            + encode_duration(self.t2)
            + self.options.to_bytes()
        )

    def __str__(self) -> str:
        return (
            f"{self.code}: {{IAID=0x{self.ia_id.hex()} T1={_format_duration(self.t1)} "
            f"T2={_format_duration(self.t2)} Options={self.options}}}"
        )

    @classmethod
    def parse(cls, data: bytes) -> "OptIAPD":
        reader = _Reader(data)
        ia_id = reader.read(4)
        t1 = decode_duration(reader.read(4))
        t2 = decode_duration(reader.read(4))
        return cls(ia_id, t1, t2, PDOptions.from_bytes(reader.rest()))


@dataclass
class OptIANA(Option):
    """Identity Association for Non-temporary Addresses (RFC 8415 section 21.4)."""

    ia_id: bytes = bytes(4)
    t1: timedelta = timedelta(0)
    t2: timedelta = timedelta(0)
    options: IdentityOptions = field(default_factory=IdentityOptions)
    code = OptionCode.IANA

    def __post_init__(self) -> None:
        self.ia_id = _check_ia_id(self.ia_id)

    def to_bytes(self) -> bytes:
        return (
            self.ia_id
            + encode_duration(self.t1)
            + encode_duration(self.t2)
            + self.options.to_bytes()
        )

    def __str__(self) -> str:
        return (
            f"{self.code}: {{IAID=0x{self.ia_id.hex()} T1={_format_duration(self.t1)} "
            f"T2={_format_duration(self.t2)} Options={self.options}}}"
        )

    @classmethod
    def parse(cls, data: bytes) -> "OptIANA":
        reader = _Reader(data)
        ia_id = reader.read(4)
        t1 = decode_duration(reader.read(4))
        t2 = decode_duration(reader.read(4))
        return cls(ia_id, t1, t2, IdentityOptions.from_bytes(reader.rest()))


_IA_KINDS: dict = {
    OptionCode.IA_ADDR: OptIAAddress,
    OptionCode.IA_PREFIX: OptIAPrefix,
    OptionCode.IAPD: OptIAPD,
    OptionCode.IANA: OptIANA,
}


def parse_ia_option(code: Union[OptionCode, int], data: bytes) -> Option:
    """Parse one option body, knowing the IA option kinds."""
    kind = _IA_KINDS.get(int(code))
    if kind is None:
        return _default_parser(OptionCode(code), data)
    return kind.parse(data)