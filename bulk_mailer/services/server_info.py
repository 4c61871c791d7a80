"""Server information reporting.

Builds a live snapshot of host details, IPv4 interfaces and the URLs the
service answers on. Nothing is cached.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

import platform
import socket
import sys
import time

from bulk_mailer.clients.network import NetworkInspector
from bulk_mailer.core.exceptions import ServerInfoError
from bulk_mailer.core.logger import get_logger
from bulk_mailer.models.server_info import NetworkInterface, ServerInfo, ServerUrls

logger = get_logger(__name__)

LOCAL_HOST = "localhost"


class ServerInfoReporter:
    """Reports hostname, platform, interfaces, URLs and uptime."""

    def __init__(self, port: int, inspector: NetworkInspector | None = None) -> None:
        self.port = port
        self.inspector = inspector or NetworkInspector()

    @property
    def local_url(self) -> str:
        return f"http://{LOCAL_HOST}:{self.port}"

    def primary_ip(self, interfaces: list[NetworkInterface]) -> str:
        """Address of the first interface, or ``"localhost"`` when none."""
        return interfaces[0].address if interfaces else LOCAL_HOST

    def build_urls(self, interfaces: list[NetworkInterface]) -> ServerUrls:
        return ServerUrls(
            local=self.local_url,
            network=f"http://{self.primary_ip(interfaces)}:{self.port}",
        )

    def get_server_info(self) -> ServerInfo:
        """Collect a fresh server snapshot.

        Raises:
            ServerInfoError: If the operating system cannot be queried.
        """
        try:
            interfaces = self.inspector.list_ipv4_interfaces()
            uptime = max(time.time() - self.inspector.process_start_time(), 0.0)

            return ServerInfo(
                hostname=socket.gethostname(),
                platform=sys.platform,
                architecture=platform.machine(),
                port=self.port,
                network_interfaces=interfaces,
                primary_ip=self.primary_ip(interfaces),
                urls=self.build_urls(interfaces),
                uptime=uptime,
            )
        except Exception as e:
            logger.error(f"Error getting server info: {e}", exc_info=True)
            raise ServerInfoError() from e

    def startup_lines(self) -> list[str]:
        """Lines announcing where the service listens and what it serves."""
        try:
            urls = self.build_urls(self.inspector.list_ipv4_interfaces())
        except Exception as e:
            logger.warning(f"Could not enumerate interfaces at startup: {e}")
            urls = ServerUrls(local=self.local_url, network=self.local_url)

        return [
            "Bulk Mailer is running on:",
            f"  Local:   {urls.local}",
            f"  Network: {urls.network}",
            "Available endpoints:",
            "  POST   /api/login        - Exchange credentials for a bearer token",
            "  POST   /api/send-email   - Send bulk emails via BCC (bearer token)",
            "  GET    /api/health       - Health check",
            "  GET    /api/server-info  - Server IP and information",
        ]
