from __future__ import annotations

import ipaddress
import os
from dataclasses import dataclass
from typing import Optional, Union

from text_codecs import DecodeError

Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass
class IPAddress:
    """An IPv4 or IPv6 address readable from text; ``None`` when unset."""

    address: Optional[Address] = None

    def unmarshal_text(self, text: bytes) -> None:
        raw = os.fsdecode(text)
        if not raw:
            self.address = None
            return
        try:
            address = ipaddress.ip_address(raw)
        except ValueError:
            raise DecodeError(raw, "IPAddress") from None
        if getattr(address, "scope_id", None) is not None:
            raise DecodeError(raw, "IPAddress", "zone not allowed")
        self.address = address

    def marshal_text(self) -> bytes:
        return os.fsencode("" if self.address is None else str(self.address))

    def equal(self, other: IPAddress) -> bool:
        """Compare addresses, treating IPv4 and IPv4-mapped IPv6 forms as one."""
        return _canonical(self.address) == _canonical(other.address)

    def __str__(self) -> str:
        return "<nil>" if self.address is None else str(self.address)


def _canonical(address: Optional[Address]) -> Optional[Address]:
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        return address.ipv4_mapped
    return address


def ipv4(a: int, b: int, c: int, d: int) -> IPAddress:
    return IPAddress(ipaddress.IPv4Address(bytes((a, b, c, d))))
