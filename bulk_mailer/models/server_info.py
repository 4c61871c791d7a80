"""Server information models.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from bulk_mailer.models.base import CamelModel, utc_now


class NetworkInterface(CamelModel):
    """One IPv4, non-loopback interface address."""

    interface: str = Field(..., description="Interface name")
    address: str = Field(..., description="IPv4 address")
    netmask: str | None = Field(default=None, description="IPv4 netmask")


class ServerUrls(CamelModel):
    """Base URLs the service can be reached at."""

    local: str
    network: str


class ServerInfo(CamelModel):
    """Live snapshot of host and network details.

    Computed on every request, never cached.
    """

    hostname: str
    platform: str
    architecture: str
    port: int
    network_interfaces: list[NetworkInterface] = Field(default_factory=list)
    primary_ip: str = Field(..., alias="primaryIP")
    urls: ServerUrls
    uptime: float = Field(..., ge=0, description="Seconds since process start")
    timestamp: datetime = Field(default_factory=utc_now)
