#!/usr/bin/env python3
"""
Main Application Module

One update pass: detect the current IP addresses once, reconcile every
configured domain in order, and reduce the per-domain outcomes to an exit
status.

License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
from dataclasses import dataclass
from typing import Any, List, Optional

# Project imports
from .api import DomainRecordsClient
from .exceptions import DNSUpdateError
from .logger import LOG_SYMBOLS
from .models import DomainConfiguration
from .network import NetworkData
from .reconciler import Reconciler

EXIT_SUCCESS = 0
EXIT_NO_DOMAINS = 1
EXIT_DOMAIN_FAILED = 2

################################################################################
# DOMAIN OUTCOME
################################################################################

@dataclass(frozen=True)
class DomainOutcome:
    """Result of reconciling one domain."""

    domain: str
    success: bool
    error: Optional[str] = None

################################################################################
# APPLICATION CLASS - Update Pass
################################################################################

class Application:
    """Runs one reconciliation pass over all configured domains."""

    def __init__(self, config: Any, logger: Any, network: Optional[NetworkData] = None,
                 reconciler: Optional[Reconciler] = None) -> None:
        """
        Initialize application.

        Args:
            config: ConfigManager instance
            logger: Logger instance from logger.py
            network: IP detection, built from config when omitted
            reconciler: Record reconciler, built from config when omitted
        """
        self.config = config
        self.logger = logger

        if network is None:
            network = NetworkData()
            network.setup(
                ipv6_enabled=config.network_ipv6_enabled,
                ipv4_detection_url=config.network_ipv4_detection_url,
                ipv6_detection_url=config.network_ipv6_detection_url,
                timeout=config.network_timeout,
                logger=logger,
            )
        self.network = network
        self.reconciler = reconciler if reconciler else Reconciler(self._build_client, logger=logger)

        self.ipv4: Optional[str] = None
        self.ipv6: Optional[str] = None

    def _build_client(self, api_key: str) -> DomainRecordsClient:
        return DomainRecordsClient(
            api_key=api_key,
            base_url=self.config.provider_api_base_url,
            timeout=self.config.provider_api_timeout,
            logger=self.logger,
        )

    ################################################################################
    # PUBLIC INTERFACE
    ################################################################################

    def run(self) -> List[DomainOutcome]:
        """
        Execute one pass. Raises NetworkError when IP detection fails.

        Returns:
            One DomainOutcome per configured domain, in config order
        """
        domains = self.config.configuration.domains
        if not domains:
            self.logger.error("No domains specified on configuration")
            return []

        self.ipv4, self.ipv6 = self.network.load_current_ip_addresses()
        self.logger.info(f"Current IPv4 address {LOG_SYMBOLS['ARROW']} {self.ipv4}")
        self.logger.info(f"Current IPv6 address {LOG_SYMBOLS['ARROW']} {self.ipv6 or 'none'}")

        outcomes = [
            self.process_domain(domain, domain_config)
            for domain, domain_config in domains.items()
        ]

        failed = [outcome.domain for outcome in outcomes if not outcome.success]
        if failed:
            self.logger.warning(f"{len(outcomes) - len(failed)}/{len(outcomes)} domains updated, failed: {', '.join(failed)}")
        else:
            self.logger.success(f"All {len(outcomes)} domains up to date")
        return outcomes

    def process_domain(self, domain: str, domain_config: DomainConfiguration) -> DomainOutcome:
        """Reconcile one domain. Errors are logged and reported as a failed outcome."""
        try:
            self.reconciler.process_domain(domain, domain_config, self.ipv4, self.ipv6)
        except DNSUpdateError as e:
            self.logger.error(f"{domain}: {e}")
            return DomainOutcome(domain=domain, success=False, error=str(e))
        return DomainOutcome(domain=domain, success=True)

    @staticmethod
    def exit_status(outcomes: List[DomainOutcome]) -> int:
        """0 if every domain succeeded, 1 if there were no domains, 2 if any failed."""
        if not outcomes:
            return EXIT_NO_DOMAINS
        if all(outcome.success for outcome in outcomes):
            return EXIT_SUCCESS
        return EXIT_DOMAIN_FAILED
