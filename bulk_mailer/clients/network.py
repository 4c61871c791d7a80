"""Network interface inspection.

Thin wrapper over ``psutil`` that lists the host's IPv4, non-loopback
addresses in the order the operating system reports them.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

import ipaddress
import socket

import psutil

from bulk_mailer.core.logger import get_logger
from bulk_mailer.models.server_info import NetworkInterface

logger = get_logger(__name__)


class NetworkInspector:
    """Enumerates host network interfaces."""

    def list_ipv4_interfaces(self) -> list[NetworkInterface]:
        """Return every IPv4 address that is not a loopback address.

        Returns:
            Interfaces in OS order; empty if the host only has loopback.
        """
        interfaces: list[NetworkInterface] = []

        for name, addresses in psutil.net_if_addrs().items():
            for addr in addresses:
                if addr.family != socket.AF_INET:
                    continue
                if self._is_loopback(addr.address):
                    continue
                interfaces.append(
                    NetworkInterface(
                        interface=name,
                        address=addr.address,
                        netmask=addr.netmask,
                    )
                )

        logger.debug(f"Found {len(interfaces)} IPv4 interface(s)")
        return interfaces

    @staticmethod
    def _is_loopback(address: str) -> bool:
        try:
            return ipaddress.ip_address(address).is_loopback
        except ValueError:
            return False

    @staticmethod
    def process_start_time() -> float:
        """Epoch seconds at which the current process started."""
        return psutil.Process().create_time()
