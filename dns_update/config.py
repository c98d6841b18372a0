#!/usr/bin/env python3
"""
Configuration Manager

Loads config.json: the declared domains and records plus optional
[debug], [network] and [provider_api] sections.

License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import json
import os
import sys
from typing import Dict, Any, Optional

# Internal imports
from .exceptions import ConfigError
from .models import Configuration, DomainConfiguration, RecordConfiguration

CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "DNS_UPDATE_CONFIG"

DEFAULT_IPV4_DETECTION_URL = "http://ip4.seeip.org"
DEFAULT_IPV6_DETECTION_URL = "http://ip6.seeip.org"
DEFAULT_PROVIDER_BASE_URL = "https://api.digitalocean.com/v2/domains/"

################################################################################
# PATH RESOLUTION
################################################################################

def default_config_path(explicit_path: Optional[str] = None) -> str:
    """Resolve config path: explicit argument, then $DNS_UPDATE_CONFIG, then next to the executable."""
    if explicit_path:
        return explicit_path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return env_path
    executable_dir = os.path.dirname(os.path.abspath(sys.argv[0])) if sys.argv and sys.argv[0] else os.getcwd()
    return os.path.join(executable_dir, CONFIG_FILENAME)

################################################################################
# CONFIGURATION MANAGER CLASS
################################################################################

class ConfigManager:
    """Configuration handler for declared domains and runtime settings."""

    def __init__(self, config_path: str) -> None:
        """Load and validate the JSON config. Raises ConfigError."""
        self.config_path = config_path
        self.config = self.load_config(config_path)

        self._load_debug_config()
        self._load_network_config()
        self._load_api_config()
        self.configuration = self.parse_configuration(self.config)

    ################################################################################
    # PUBLIC INTERFACE
    ################################################################################

    def load_config(self, path: str) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except FileNotFoundError:
            raise ConfigError(f"Configuration file not found: {path}")
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON syntax in {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Error reading configuration from {path}: {e}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration root in {path} must be an object")
        return config

    @staticmethod
    def parse_configuration(raw: Dict[str, Any]) -> Configuration:
        """Build the typed domain model from the raw `domains` mapping."""
        domains_raw = raw.get("domains") or {}
        if not isinstance(domains_raw, dict):
            raise ConfigError("'domains' must be an object keyed by domain name")

        domains: Dict[str, DomainConfiguration] = {}
        for domain, domain_raw in domains_raw.items():
            if not isinstance(domain_raw, dict):
                raise ConfigError(f"Domain '{domain}' must be an object")

            api_key = domain_raw.get("apiKey")
            if api_key is not None and not isinstance(api_key, str):
                raise ConfigError(f"'apiKey' for domain '{domain}' must be a string")

            records_raw = domain_raw.get("records") or []
            if not isinstance(records_raw, list):
                raise ConfigError(f"'records' for domain '{domain}' must be a list")

            domains[domain] = DomainConfiguration(
                api_key=api_key,
                records=[RecordConfiguration.from_dict(item) for item in records_raw],
            )

        return Configuration(domains=domains)

    ################################################################################
    # PRIVATE METHODS - Runtime Settings
    ################################################################################

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.config.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"'{name}' section must be an object")
        return section

    def _boolean(self, section: str, key: str, default: bool) -> bool:
        value = self._section(section).get(key, default)
        if not isinstance(value, bool):
            raise ConfigError(f"'{section}.{key}' must be a boolean (true/false), got {value!r}")
        return value

    def _load_debug_config(self) -> None:
        """Load debug config from [debug] section."""
        self.log_level = str(self._section("debug").get("level", "INFO")).upper()
        self.console_colors = self._boolean("debug", "console_colors", True)

    def _load_network_config(self) -> None:
        """Load network config from [network] section."""
        network = self._section("network")
        self.network_ipv4_detection_url = network.get("ipv4_detection_url", DEFAULT_IPV4_DETECTION_URL)
        self.network_ipv6_detection_url = network.get("ipv6_detection_url", DEFAULT_IPV6_DETECTION_URL)
        self.network_ipv6_enabled = self._boolean("network", "ipv6_enabled", True)
        self.network_timeout = network.get("timeout", 10)

    def _load_api_config(self) -> None:
        """Load API config from [provider_api] section."""
        provider_api = self._section("provider_api")
        self.provider_api_base_url = provider_api.get("base_url", DEFAULT_PROVIDER_BASE_URL)
        self.provider_api_timeout = provider_api.get("timeout", 30)
