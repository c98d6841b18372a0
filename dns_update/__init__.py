#!/usr/bin/env python3
"""
DNS-UPDATE

Keeps provider DNS records in line with the current public IP addresses.

License: MIT
"""

# Package metadata
__version__ = "1.0.0"
__description__ = "Dynamic DNS record updater"
__software_name__ = "DNS-UPDATE"
__syslog_identifier__ = "dns-update"  # Used for systemd journal logging

# Package imports
from .exceptions import DNSUpdateError, ConfigError, ValidationError, NetworkError, APIError, MissingCredentialsError
from .logger import LoggerManager
from .models import Configuration, DomainConfiguration, RecordConfiguration, ValueSource, DomainRecord, RecordList
from .config import ConfigManager
from .network import NetworkData
from .api import HTTPClient, DomainRecordsClient
from .reconciler import Reconciler, RecordAction
from .application import Application, DomainOutcome

__all__ = [
    'DNSUpdateError',
    'ConfigError',
    'ValidationError',
    'NetworkError',
    'APIError',
    'MissingCredentialsError',
    'LoggerManager',
    'Configuration',
    'DomainConfiguration',
    'RecordConfiguration',
    'ValueSource',
    'DomainRecord',
    'RecordList',
    'ConfigManager',
    'NetworkData',
    'HTTPClient',
    'DomainRecordsClient',
    'Reconciler',
    'RecordAction',
    'Application',
    'DomainOutcome',
]
