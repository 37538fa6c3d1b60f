"""Option codes, the option container and the core DHCPv6 options."""

from __future__ import annotations

import abc
import struct
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .duid import DUID


class BufferTooShortError(ValueError):
    """Raised when the data ends before a field is complete."""


class UnreadBytesError(ValueError):
    """Raised when bytes are left over after parsing."""


class _Reader:
    """Sequential big-endian reader over a bytes object."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def read(self, n: int) -> bytes:
        if self.remaining < n:
            raise BufferTooShortError(
                f"buffer too short: have {self.remaining} bytes, want {n} bytes"
            )
        chunk = self._data[self._pos:self._pos + n]
        self._pos += n
        return chunk

    def read8(self) -> int:
        return self.read(1)[0]

    def read16(self) -> int:
        return struct.unpack(">H", self.read(2))[0]

    def read32(self) -> int:
        return struct.unpack(">I", self.read(4))[0]

    def rest(self) -> bytes:
        return self.read(self.remaining)

    def finish(self) -> None:
        if self.remaining:
            raise UnreadBytesError(f"{self.remaining} unread bytes left")


def encode_duration(value: timedelta) -> bytes:
    """Encode a duration as a 32-bit count of seconds, rounded to the nearest second."""
    micros = (value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds
    if micros >= 0:
        seconds = (micros + 500_000) // 1_000_000
    else:
        seconds = -((-micros + 500_000) // 1_000_000)
    return struct.pack(">I", seconds & 0xFFFFFFFF)


def decode_duration(data: bytes) -> timedelta:
    """Decode a 32-bit count of seconds into a duration."""
    return timedelta(seconds=_Reader(data[:4]).read32())


_CODE_TABLE = {
    "CLIENT_ID": (1, "Client ID"),
    "SERVER_ID": (2, "Server ID"),
    "IANA": (3, "IA_NA"),
    "IATA": (4, "IA_TA"),
    "IA_ADDR": (5, "IA Address"),
    "ORO": (6, "Option Request"),
    "PREFERENCE": (7, "Preference"),
    "ELAPSED_TIME": (8, "Elapsed Time"),
    "RELAY_MSG": (9, "Relay Message"),
    "AUTH": (11, "Authentication"),
    "UNICAST": (12, "Server Unicast"),
    "STATUS_CODE": (13, "Status Code"),
    "RAPID_COMMIT": (14, "Rapid Commit"),
    "USER_CLASS": (15, "User Class"),
    "VENDOR_CLASS": (16, "Vendor Class"),
    "VENDOR_OPTS": (17, "Vendor-specific Information"),
    "INTERFACE_ID": (18, "Interface-Id"),
    "RECONF_MSG": (19, "Reconfigure Message"),
    "RECONF_ACCEPT": (20, "Reconfigure Accept"),
    "DNS_RECURSIVE_NAME_SERVER": (23, "DNS"),
    "DOMAIN_SEARCH_LIST": (24, "Domain Search List"),
    "IAPD": (25, "IA_PD"),
    "IA_PREFIX": (26, "IA Prefix"),
    "INFORMATION_REFRESH_TIME": (32, "Information Refresh Time"),
    "REMOTE_ID": (37, "Remote ID"),
    "FQDN": (39, "FQDN"),
    "NTP_SERVER": (56, "NTP Server"),
    "BOOTFILE_URL": (59, "Boot File URL"),
    "BOOTFILE_PARAM": (60, "Boot File Parameters"),
    "CLIENT_ARCH_TYPE": (61, "Client System Architecture Type"),
    "NII": (62, "Client Network Interface Identifier"),
    "CLIENT_LINK_LAYER_ADDR": (79, "Client Link-Layer Address"),
    "DHCPV4_MSG": (87, "DHCPv4 Message"),
    "DHCP4O_DHCP6_SERVER": (88, "DHCP4oDHCP6 Server"),
    "FOUR_RD": (97, "4RD"),
    "FOUR_RD_MAP_RULE": (98, "4RD Map Rule"),
    "FOUR_RD_NON_MAP_RULE": (99, "4RD Non-Map Rule"),
    "RELAY_PORT": (135, "Relay Source Port"),
}
_CODE_NAMES = {value: label for value, label in _CODE_TABLE.values()}


class OptionCode(int):
    """A DHCPv6 option code; any 16-bit value is allowed."""

    def __str__(self) -> str:
        return _CODE_NAMES.get(int(self), "unknown")

    def __repr__(self) -> str:
        return f"OptionCode({int(self)})"


for _name, (_value, _label) in _CODE_TABLE.items():
    setattr(OptionCode, _name, OptionCode(_value))


class Option(abc.ABC):
    """A DHCPv6 option; subclasses define ``code``."""

    code: OptionCode

    @abc.abstractmethod
    def to_bytes(self) -> bytes:
        """Serialize the option body, without code and length."""


@dataclass
class OptionGeneric(Option):
    """An option of a code with no dedicated type."""

    code: OptionCode
    data: bytes = b""

    def __post_init__(self) -> None:
        self.code = OptionCode(self.code)

    def to_bytes(self) -> bytes:
        return bytes(self.data)

    def __str__(self) -> str:
        return f"{self.code}: {list(self.data)}"


Parser = Callable[[OptionCode, bytes], Option]


@dataclass
class Options:
    """An ordered collection of options."""

    options: list = field(default_factory=list)

    def __iter__(self) -> Iterator[Option]:
        return iter(self.options)

    def __len__(self) -> int:
        return len(self.options)

    def __str__(self) -> str:
        return "{" + ", ".join(str(o) for o in self.options) + "}"

    def add(self, option: Option) -> None:
        self.options.append(option)

    def get(self, code: int) -> list:
        return [o for o in self.options if o.code == code]

    def get_one(self, code: int) -> Optional[Option]:
        return next((o for o in self.options if o.code == code), None)

    def delete(self, code: int) -> None:
        self.options = [o for o in self.options if o.code != code]

    def update(self, option: Option) -> None:
        """Replace the first option of the same code, or add it."""
        for idx, existing in enumerate(self.options):
            if existing.code == option.code:
                self.options[idx] = option
                return
        self.add(option)

    def to_bytes(self) -> bytes:
        out = bytearray()
        for opt in self.options:
            body = opt.to_bytes()
            out += struct.pack(">HH", int(opt.code), len(body))
            out += body
        return bytes(out)

    @classmethod
    def from_bytes(cls, data: bytes, parser: Optional[Parser] = None):
        parse = parser or _default_parser
        reader = _Reader(data or b"")
        result = cls()
        while reader.remaining >= 4:
            code = OptionCode(reader.read16())
            length = reader.read16()
            body = reader.read(length)
            result.add(parse(code, body))
        reader.finish()
        return result


class OptionCodes(list):
    """A list of option codes without duplicates."""

    def __init__(self, codes: Iterable[int] = ()) -> None:
        super().__init__()
        for code in codes:
            self.add(code)

    def add(self, code: int) -> None:
        code = OptionCode(code)
        if code not in self:
            self.append(code)

    def to_bytes(self) -> bytes:
        return b"".join(struct.pack(">H", int(c)) for c in self)

    def __str__(self) -> str:
        return ", ".join(str(OptionCode(c)) for c in self)

    @classmethod
    def parse(cls, data: bytes) -> "OptionCodes":
        reader = _Reader(data)
        codes = cls()
        while reader.remaining >= 2:
            codes.add(reader.read16())
        reader.finish()
        return codes


@dataclass
class OptRequestedOption(Option):
    """Option Request option (RFC 3315 section 22.7)."""

    codes: OptionCodes = field(default_factory=OptionCodes)
    code = OptionCode.ORO

    def to_bytes(self) -> bytes:
        return OptionCodes(self.codes).to_bytes()

    def __str__(self) -> str:
        return f"{self.code}: {OptionCodes(self.codes)}"

    @classmethod
    def parse(cls, data: bytes) -> "OptRequestedOption":
        return cls(OptionCodes.parse(data))


_STATUS_NAMES = {
    0: "Success",
    1: "UnspecFail",
    2: "NoAddrsAvail",
    3: "NoBinding",
    4: "NotOnLink",
    5: "UseMulticast",
    6: "NoPrefixAvail",
    7: "UnknownQueryType",
    8: "MalformedQuery",
    9: "NotConfigured",
    10: "NotAllowed",
    11: "QueryTerminated",
    12: "DataMissing",
    13: "CatchUpComplete",
    14: "NotSupported",
    15: "TLSConnectionRefused",
}


@dataclass
class OptStatusCode(Option):
    """Status Code option (RFC 3315)."""

    status_code: int = 0
    status_message: str = ""
    code = OptionCode.STATUS_CODE

    def to_bytes(self) -> bytes:
        return struct.pack(">H", self.status_code) + self.status_message.encode()

    def __str__(self) -> str:
        name = _STATUS_NAMES.get(self.status_code, "Unknown")
        return (
            f"{self.code}: {{Code={name} ({self.status_code}); "
            f"Message={self.status_message}}}"
        )

    @classmethod
    def parse(cls, data: bytes) -> "OptStatusCode":
        reader = _Reader(data)
        status = reader.read16()
        message = reader.rest().decode("utf-8", "replace")
        reader.finish()
        return cls(status, message)


@dataclass
class OptClientID(Option):
    """Client Identifier option (RFC 3315 section 22.2)."""

    duid: "DUID"
    code = OptionCode.CLIENT_ID

    def to_bytes(self) -> bytes:
        return self.duid.to_bytes()

    def __str__(self) -> str:
        return f"{self.code}: {self.duid}"

    @classmethod
    def parse(cls, data: bytes) -> "OptClientID":
        from .duid import duid_from_bytes

        return cls(duid_from_bytes(data))


@dataclass
class OptServerID(Option):
    """Server Identifier option (RFC 3315 section 22.1)."""

    duid: "DUID"
    code = OptionCode.SERVER_ID

    def to_bytes(self) -> bytes:
        return self.duid.to_bytes()

    def __str__(self) -> str:
        return f"{self.code}: {self.duid}"

    @classmethod
    def parse(cls, data: bytes) -> "OptServerID":
        from .duid import duid_from_bytes

        return cls(duid_from_bytes(data))


_KNOWN = {
    OptionCode.CLIENT_ID: OptClientID,
    OptionCode.SERVER_ID: OptServerID,
    OptionCode.ORO: OptRequestedOption,
    OptionCode.STATUS_CODE: OptStatusCode,
}


def _default_parser(code: OptionCode, data: bytes) -> Option:
    kind = _KNOWN.get(code)
    if kind is None:
        return OptionGeneric(code, bytes(data))
    return kind.parse(data)