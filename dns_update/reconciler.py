#!/usr/bin/env python3
"""
Record Reconciler

Converges the provider's records for one domain to the declared records:

    existing | desired   | action
    ---------+-----------+----------------------------------------
    no       | empty     | nothing
    no       | non-empty | create (type, name, desired)
    yes      | empty     | delete by existing id
    yes      | equal     | nothing
    yes      | different | update existing with new data, no id

The record list is fetched once per domain. The first failing provider call
aborts the rest of the domain.

License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

import logging
from enum import Enum
from typing import Any, Callable, ContextManager, List, Optional

from .exceptions import APIError, MissingCredentialsError
from .models import DomainConfiguration, DomainRecord, RecordConfiguration, RecordList

################################################################################
# RECORD ACTIONS
################################################################################

class RecordAction(Enum):
    """Outcome of reconciling one desired record."""

    NONE = "none"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def plan_action(existing: Optional[DomainRecord], desired: Optional[str]) -> RecordAction:
    """Pick the action for one record from the decision table."""
    if existing is None:
        return RecordAction.CREATE if desired else RecordAction.NONE
    if not desired:
        return RecordAction.DELETE
    if existing.data == desired:
        return RecordAction.NONE
    return RecordAction.UPDATE

################################################################################
# RECONCILER CLASS
################################################################################

class Reconciler:
    """Applies declared records to one domain at a time."""

    def __init__(self, client_factory: Callable[[str], ContextManager[Any]], logger: Optional[Any] = None) -> None:
        """
        Args:
            client_factory: Builds a provider client for an API key. The client
                is used as a context manager and closed once the domain is done.
            logger: Logger instance
        """
        self.client_factory = client_factory
        self.logger = logger if logger else logging.getLogger(__name__)

    def process_domain(self, domain: str, domain_config: DomainConfiguration,
                       ipv4: Optional[str], ipv6: Optional[str]) -> List[RecordAction]:
        """
        Reconcile every declared record of a domain.

        Returns:
            List of actions taken, one per declared record, in config order

        Raises:
            MissingCredentialsError: the domain has no apiKey
            APIError: a provider call failed; remaining records are not processed
        """
        if not domain_config.api_key:
            raise MissingCredentialsError(f"No apiKey specified, skipping {domain}")

        with self.client_factory(domain_config.api_key) as client:
            self.logger.info(f"Fetching current records for {domain}...")
            records = client.list_records(domain)

            return [
                self.reconcile_record(client, domain, records, record_config, ipv4, ipv6)
                for record_config in domain_config.records
            ]

    def reconcile_record(self, client: Any, domain: str, records: RecordList,
                         record_config: RecordConfiguration,
                         ipv4: Optional[str], ipv6: Optional[str]) -> RecordAction:
        """Reconcile one declared record against the fetched record list."""
        record_type = record_config.type
        name = record_config.name
        desired = record_config.desired_value(ipv4, ipv6)
        existing = records.find(record_type, name)
        action = plan_action(existing, desired)

        if action is RecordAction.CREATE:
            self.logger.info(f"Creating new {record_type} record for {name}.{domain}...")
            created = client.create_record(domain, DomainRecord.for_create(record_type, name, desired))
            self.logger.success(f"... new record id is {created.id}")

        elif action is RecordAction.DELETE:
            if existing.id is None:
                raise APIError(f"Cannot delete {record_type} record for {name}.{domain}: provider record has no id")
            self.logger.info(f"Removing unroutable record {existing.id} {record_type} for {name}.{domain}")
            client.delete_record(domain, existing.id)
            self.logger.success(f"... removed {record_type} record for {name}.{domain}")

        elif action is RecordAction.UPDATE:
            self.logger.info(
                f"Updating record {existing.id}, {record_type} record for {name}.{domain}: "
                f"{existing.data} -> {desired}"
            )
            client.update_record(domain, existing.for_update(desired))
            self.logger.success(f"... updated {record_type} record for {name}.{domain}")

        elif existing is None:
            self.logger.debug(f"No {record_type} record for {name}.{domain} and nothing to publish")

        else:
            self.logger.debug(f"{record_type} record for {name}.{domain} is up to date")

        return action
