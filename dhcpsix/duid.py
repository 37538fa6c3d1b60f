"""DHCP Unique Identifiers (RFC 8415 section 11)."""

from __future__ import annotations

import abc
import enum
import struct
from dataclasses import dataclass

from .options import BufferTooShortError, _Reader


class DUIDType(enum.IntEnum):
    LLT = 1
    EN = 2
    LL = 3
    UUID = 4

    def __str__(self) -> str:
        return f"DUID-{self.name}"


_HW_NAMES = {
    1: "Ethernet",
    2: "Experimental Ethernet",
    6: "IEEE 802",
    7: "ARCNET",
    15: "Frame Relay",
    16: "ATM",
    24: "IEEE 1394",
    32: "InfiniBand",
}


def _hw_name(hw_type: int) -> str:
    return _HW_NAMES.get(hw_type, "unknown")


def _mac(addr: bytes) -> str:
    return ":".join(f"{b:02x}" for b in addr)


class DUID(abc.ABC):
    """Common interface of all DUID kinds."""

    @property
    @abc.abstractmethod
    def duid_type(self) -> int:
        """The DUID type number."""

    @abc.abstractmethod
    def to_bytes(self) -> bytes:
        """Serialize the DUID, type included."""


@dataclass
class DUIDLLT(DUID):
    """Link-layer address plus time."""

    hw_type: int = 0
    time: int = 0
    link_layer_addr: bytes = b""

    @property
    def duid_type(self) -> int:
        return DUIDType.LLT

    def to_bytes(self) -> bytes:
        return struct.pack(">HHI", DUIDType.LLT, self.hw_type, self.time) + bytes(
            self.link_layer_addr
        )

    def __str__(self) -> str:
        return (
            f"DUID-LLT{{HWType={_hw_name(self.hw_type)} "
            f"HWAddr={_mac(self.link_layer_addr)} Time={self.time}}}"
        )

    @classmethod
    def parse(cls, data: bytes) -> "DUIDLLT":
        reader = _Reader(data)
        hw_type = reader.read16()
        time = reader.read32()
        return cls(hw_type, time, reader.rest())


@dataclass
class DUIDLL(DUID):
    """Link-layer address."""

    hw_type: int = 0
    link_layer_addr: bytes = b""

    @property
    def duid_type(self) -> int:
        return DUIDType.LL

    def to_bytes(self) -> bytes:
        return struct.pack(">HH", DUIDType.LL, self.hw_type) + bytes(self.link_layer_addr)

    def __str__(self) -> str:
        return f"DUID-LL{{HWType={_hw_name(self.hw_type)} HWAddr={_mac(self.link_layer_addr)}}}"

    @classmethod
    def parse(cls, data: bytes) -> "DUIDLL":
        reader = _Reader(data)
        hw_type = reader.read16()
        return cls(hw_type, reader.rest())


@dataclass
class DUIDEN(DUID):
    """Enterprise number plus identifier."""

    enterprise_number: int = 0
    enterprise_identifier: bytes = b""

    @property
    def duid_type(self) -> int:
        return DUIDType.EN

    def to_bytes(self) -> bytes:
        return struct.pack(">HI", DUIDType.EN, self.enterprise_number) + bytes(
            self.enterprise_identifier
        )

    def __str__(self) -> str:
        ident = bytes(self.enterprise_identifier).decode("utf-8", "replace")
        return f"DUID-EN{{EnterpriseNumber={self.enterprise_number} EnterpriseIdentifier={ident}}}"

    @classmethod
    def parse(cls, data: bytes) -> "DUIDEN":
        reader = _Reader(data)
        number = reader.read32()
        return cls(number, reader.rest())


@dataclass
class DUIDUUID(DUID):
    """UUID-based DUID (RFC 6355)."""

    uuid: bytes = bytes(16)

    @property
    def duid_type(self) -> int:
        return DUIDType.UUID

    def to_bytes(self) -> bytes:
        return struct.pack(">H", DUIDType.UUID) + bytes(self.uuid)

    def __str__(self) -> str:
        return f"DUID-UUID{{0x{bytes(self.uuid).hex()}}}"

    @classmethod
    def parse(cls, data: bytes) -> "DUIDUUID":
        if len(data) < 16:
            raise BufferTooShortError(
                f"buffer is length {len(data)}, DUID-UUID must be exactly 16 bytes"
            )
        if len(data) != 16:
            raise ValueError(f"buffer is length {len(data)}, DUID-UUID must be exactly 16 bytes")
        return cls(bytes(data))


@dataclass
class DUIDOpaque(DUID):
    """DUID of an unknown type, kept as raw data."""

    type: int
    data: bytes = b""

    @property
    def duid_type(self) -> int:
        return self.type

    def to_bytes(self) -> bytes:
        return struct.pack(">H", self.type) + bytes(self.data)

    def __str__(self) -> str:
        data = f"0x{bytes(self.data).hex()}" if self.data else ""
        return f"DUID-Opaque{{Type={self.type} Data={data}}}"


_KINDS = {
    DUIDType.LLT: DUIDLLT,
    DUIDType.LL: DUIDLL,
    DUIDType.EN: DUIDEN,
    DUIDType.UUID: DUIDUUID,
}


def duid_from_bytes(data: bytes) -> DUID:
    """Parse a DUID, type included."""
    data = bytes(data or b"")
    if len(data) < 2:
        raise BufferTooShortError(f"have {len(data)} bytes, want 2 bytes")
    typ = struct.unpack(">H", data[:2])[0]
    kind = _KINDS.get(typ)
    if kind is None:
        return DUIDOpaque(typ, data[2:])
    return kind.parse(data[2:])