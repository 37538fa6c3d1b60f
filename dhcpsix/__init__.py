"""DHCPv6 DUIDs and options: parsing, serialization and interface helpers."""

__version__ = "0.1.0"

__all__ = ["basic", "duid", "fourrd", "ia", "iputils", "ntp", "options"]