#!/usr/bin/env python3
"""
Network Utilities Module

Public IP detection through plain-text reflection endpoints.

License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

import errno
import logging
import socket
from typing import Optional, Tuple, Any, Iterator, Set

import requests

from .exceptions import NetworkError

# Errors raised when the host simply has no IPv6 connectivity
NO_IPV6_ERRNOS: Set[int] = {
    errno.ENETUNREACH,
    errno.EHOSTUNREACH,
    errno.EADDRNOTAVAIL,
    errno.EAFNOSUPPORT,
}
NO_IPV6_GAI_ERRORS: Set[int] = {
    code for code in (
        getattr(socket, "EAI_NODATA", None),
        getattr(socket, "EAI_ADDRFAMILY", None),
        getattr(socket, "EAI_NONAME", None),
    ) if code is not None
}

################################################################################
# EXCEPTION INSPECTION
################################################################################

def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Walk the causes of a requests error down to the socket error (urllib3 nests them)."""
    seen = set()
    pending = [exc]
    while pending:
        current = pending.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        pending.append(current.__cause__)
        pending.append(current.__context__)
        reason = getattr(current, "reason", None)
        if isinstance(reason, BaseException):
            pending.append(reason)
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))


def is_ipv6_unavailable(exc: BaseException) -> bool:
    """True if the failure means "no IPv6 route/address" rather than a real error."""
    if not isinstance(exc, requests.exceptions.ConnectionError):
        return False
    for cause in _exception_chain(exc):
        if isinstance(cause, socket.gaierror) and cause.errno in NO_IPV6_GAI_ERRORS:
            return True
        if isinstance(cause, OSError) and cause.errno in NO_IPV6_ERRNOS:
            return True
    return False

################################################################################
# NETWORK DATA CLASS - IP Detection
################################################################################

class NetworkData:
    """Network data container for the current public IP addresses."""

    def __init__(self) -> None:
        self.ipv4_address: Optional[str] = None
        self.ipv6_address: Optional[str] = None

        self.ipv6_enabled = True
        self.ipv4_detection_url = "http://ip4.seeip.org"
        self.ipv6_detection_url = "http://ip6.seeip.org"
        self.timeout = 10
        self.logger = logging.getLogger(__name__)

    def setup(self, ipv6_enabled: bool = True,
              ipv4_detection_url: Optional[str] = None, ipv6_detection_url: Optional[str] = None,
              timeout: Optional[int] = None, logger: Optional[Any] = None) -> bool:
        """Configure detection URLs, timeout and logger."""
        self.ipv6_enabled = ipv6_enabled

        if ipv4_detection_url:
            self.ipv4_detection_url = ipv4_detection_url
        if ipv6_detection_url:
            self.ipv6_detection_url = ipv6_detection_url
        if timeout is not None:
            self.timeout = timeout
        if logger:
            self.logger = logger

        return True

    ################################################################################
    # IP ADDRESS DETECTION
    ################################################################################

    def load_current_ip_addresses(self) -> Tuple[str, Optional[str]]:
        """Load current public IP addresses. Returns (ipv4, ipv6 or None). Raises NetworkError."""
        self.ipv4_address = self.get_current_public_ipv4_address()

        if self.ipv6_enabled:
            self.ipv6_address = self.get_current_public_ipv6_address()
        else:
            self.logger.debug("IPv6 detection disabled")
            self.ipv6_address = None

        return self.ipv4_address, self.ipv6_address

    def get_current_public_ipv4_address(self) -> str:
        """Get current public IPv4 address. Any failure is fatal."""
        try:
            address = self._fetch_address(self.ipv4_detection_url)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"IPv4 detection failed ({self.ipv4_detection_url}): {e}") from e

        if not address:
            raise NetworkError(f"IPv4 detection returned an empty response ({self.ipv4_detection_url})")

        self.logger.debug(f"IPv4 address detected: {address}")
        return address

    def get_current_public_ipv6_address(self) -> Optional[str]:
        """Get current public IPv6 address, or None when the host has no IPv6 connectivity."""
        try:
            address = self._fetch_address(self.ipv6_detection_url)
        except requests.exceptions.RequestException as e:
            if is_ipv6_unavailable(e):
                self.logger.info("No IPv6 connectivity, continuing without IPv6 address")
                return None
            raise NetworkError(f"IPv6 detection failed ({self.ipv6_detection_url}): {e}") from e

        if not address:
            self.logger.info("IPv6 detection returned no address")
            return None

        self.logger.debug(f"IPv6 address detected: {address}")
        return address

    def _fetch_address(self, url: str) -> str:
        """GET the reflection endpoint and return the trimmed body."""
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.text.strip()
