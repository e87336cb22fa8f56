"""Destination address classification (SSRF protection)."""

import ipaddress
import logging
from typing import Optional

from .errors import UnsafeDestinationError
from .resolver import HostResolver, IPAddress, ResolutionError, SystemResolver


LOCALHOST_REASON = "cannot point to localhost"
PRIVATE_REASON = "cannot point to private or internal IP addresses"
UNRESOLVED_REASON = "could not be resolved"

BLOCKED_NETWORKS = tuple(ipaddress.ip_network(cidr) for cidr in (
    "0.0.0.0/8",
    "10.0.0.0/8",
    "127.0.0.0/8",
    "169.254.0.0/16",  # link-local, includes the 169.254.169.254 metadata endpoint
    "172.16.0.0/12",
    "192.168.0.0/16",
    "::/128",
    "::1/128",
    "fc00::/7",
    "fe80::/10",
))


def classify_address(address: IPAddress) -> Optional[str]:
    """Classify a single IP address.

    Args:
        address: Address to classify

    Returns:
        None if the address is public, otherwise the reason it is unsafe
    """
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        address = address.ipv4_mapped

    if address.is_unspecified or address.is_loopback:
        return LOCALHOST_REASON

    for network in BLOCKED_NETWORKS:
        if address in network:
            return PRIVATE_REASON

    if not address.is_global or address.is_multicast or address.is_reserved:
        return PRIVATE_REASON

    return None


def is_localhost_name(hostname: str) -> bool:
    name = hostname.rstrip(".").lower()
    return name == "localhost" or name.endswith(".localhost")


class AddressClassifier:
    """Decide whether a destination host is safe to store and redirect to.

    A host is safe only when every address it resolves to is public. Names
    that fail to resolve, resolve to nothing, or time out are rejected.
    """

    def __init__(
        self,
        resolver: Optional[HostResolver] = None,
        timeout_seconds: float = 0.3,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize address classifier.

        Args:
            resolver: Hostname resolver (system resolver if not specified)
            timeout_seconds: Resolution timeout per host
            logger: Optional logger
        """
        self.logger = logger or logging.getLogger(__name__)
        self.resolver = resolver or SystemResolver(logger=self.logger)
        self.timeout_seconds = timeout_seconds

    async def ensure_safe(self, host: str) -> None:
        """Raise if the host is not safe.

        Args:
            host: Hostname or IP literal from a normalized URL

        Raises:
            UnsafeDestinationError: If the host is local, private or unresolvable
        """
        if not host:
            raise UnsafeDestinationError("Destination must have a host")

        if is_localhost_name(host):
            self._reject(host, LOCALHOST_REASON)

        try:
            literal = ipaddress.ip_address(host.strip("[]"))
        except ValueError:
            literal = None

        if literal is not None:
            addresses = {literal}
        else:
            try:
                addresses = await self.resolver.resolve(host, self.timeout_seconds)
            except ResolutionError as e:
                self.logger.info(f"Rejecting destination host {host}: {e}")
                raise UnsafeDestinationError(f"Destination {UNRESOLVED_REASON}") from e

        if not addresses:
            self._reject(host, UNRESOLVED_REASON)

        for address in addresses:
            reason = classify_address(address)
            if reason:
                self._reject(host, reason, address)

    def _reject(self, host: str, reason: str, address: Optional[IPAddress] = None) -> None:
        detail = f" ({address})" if address is not None else ""
        self.logger.info(f"Rejecting destination host {host}{detail}: {reason}")
        raise UnsafeDestinationError(f"Destination {reason}")
