"""Hostname resolution for destination validation."""

import asyncio
import ipaddress
import logging
import socket
from abc import ABC, abstractmethod
from typing import Optional, Set, Union


IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class ResolutionError(Exception):
    """Raised when a hostname cannot be resolved to any address."""


class HostResolver(ABC):
    """Abstract hostname resolver."""

    @abstractmethod
    async def resolve(self, hostname: str, timeout: float) -> Set[IPAddress]:
        """Resolve a hostname to the full set of candidate addresses.

        Args:
            hostname: The hostname to resolve
            timeout: Maximum seconds to wait for the answer

        Returns:
            Set of resolved IP addresses

        Raises:
            ResolutionError: On resolver failure, timeout or an empty answer
        """
        pass


class SystemResolver(HostResolver):
    """Resolver backed by the operating system's getaddrinfo."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(self, hostname: str, timeout: float) -> Set[IPAddress]:
        loop = asyncio.get_running_loop()

        try:
            infos = await asyncio.wait_for(
                loop.getaddrinfo(
                    hostname,
                    None,
                    family=socket.AF_UNSPEC,
                    type=socket.SOCK_STREAM,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            self.logger.warning(f"DNS resolution timed out after {timeout}s for {hostname}")
            raise ResolutionError(f"Timed out resolving {hostname}")
        except (socket.gaierror, OSError, UnicodeError) as e:
            self.logger.info(f"DNS resolution failed for {hostname}: {e}")
            raise ResolutionError(f"Could not resolve {hostname}: {e}") from e

        addresses: Set[IPAddress] = set()
        for family, _, _, _, sockaddr in infos:
            if family not in (socket.AF_INET, socket.AF_INET6) or not sockaddr:
                continue
            # IPv6 sockaddr may carry a zone suffix (fe80::1%eth0)
            raw = str(sockaddr[0]).split("%", 1)[0]
            try:
                addresses.add(ipaddress.ip_address(raw))
            except ValueError:
                self.logger.debug(f"Ignoring unparsable address {raw!r} for {hostname}")

        if not addresses:
            raise ResolutionError(f"No addresses found for {hostname}")

        self.logger.debug(f"Resolved {hostname} -> {sorted(str(a) for a in addresses)}")
        return addresses
