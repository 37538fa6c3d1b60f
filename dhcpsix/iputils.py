"""Helpers to find interface addresses and derive MACs from EUI-64 addresses."""

from __future__ import annotations

import ipaddress
import socket
from collections.abc import Callable
from typing import Optional, Union

import psutil

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
Lookup = Callable[[str], list]


def interface_addresses(ifname: str) -> list:
    """Return the IP addresses assigned to an interface."""
    all_addrs = psutil.net_if_addrs()
    if ifname not in all_addrs:
        raise LookupError(f"no such network interface: {ifname}")
    result = []
    for addr in all_addrs[ifname]:
        if addr.family in (socket.AF_INET, socket.AF_INET6):
            result.append(ipaddress.ip_address(addr.address.split("%", 1)[0]))
    return result


def get_matching_addr(
    ifname: str, matches: Callable[[IPAddress], bool], lookup: Optional[Lookup] = None
) -> IPAddress:
    """Return the first address of the interface accepted by ``matches``."""
    for ip in (lookup or interface_addresses)(ifname):
        if matches(ip):
            return ip
    raise LookupError(f"no matching address found for interface {ifname}")


def _is_plain_v6(ip: IPAddress) -> bool:
    return isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is None


def get_link_local_addr(ifname: str, lookup: Optional[Lookup] = None) -> IPAddress:
    """Return a link-local IPv6 address of the interface."""
    return get_matching_addr(
        ifname, lambda ip: _is_plain_v6(ip) and ip.is_link_local, lookup
    )


def get_global_addr(ifname: str, lookup: Optional[Lookup] = None) -> IPAddress:
    """Return a global unicast IPv6 address of the interface."""

    def is_global_unicast(ip: IPAddress) -> bool:
        return _is_plain_v6(ip) and not (
            ip.is_unspecified or ip.is_loopback or ip.is_multicast or ip.is_link_local
        )

    return get_matching_addr(ifname, is_global_unicast, lookup)


def get_mac_address_from_eui64(ip: Union[IPAddress, bytes]) -> bytes:
    """Return the MAC embedded in an EUI-48-derived IPv6 address."""
    if isinstance(ip, ipaddress.IPv4Address):
        raw = ipaddress.IPv6Address(f"::ffff:{ip}").packed
    elif isinstance(ip, ipaddress.IPv6Address):
        raw = ip.packed
    else:
        raw = bytes(ip)
        if len(raw) == 4:
            raw = bytes(10) + b"\xff\xff" + raw
    if len(raw) != 16:
        raise ValueError("IP address shorter than 16 bytes")
    if raw[11] != 0xFF or raw[12] != 0xFE:
        raise ValueError("IP address is not an EUI48 address")
    mac = bytearray(raw[8:11] + raw[13:16])
    mac[0] ^= 0x02
    return bytes(mac)