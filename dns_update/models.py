#!/usr/bin/env python3
"""
Data Models

Desired state (Configuration, DomainConfiguration, RecordConfiguration) as
read from config.json, and provider state (DomainRecord, RecordList) as
exchanged with the provider API.

License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from .exceptions import ValidationError

################################################################################
# DESIRED STATE - Configuration Models
################################################################################

class ValueSource(Enum):
    """Where the desired value of a record comes from."""

    LITERAL = "literal"
    CURRENT_IPV4 = "currentIp4"
    CURRENT_IPV6 = "currentIp6"


@dataclass(frozen=True)
class RecordConfiguration:
    """A desired record. `data` is only meaningful for LITERAL sources."""

    type: str
    name: str
    source: ValueSource = ValueSource.LITERAL
    data: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "RecordConfiguration":
        """Build from a config.json record entry. Raises ValidationError on bad shape."""
        if not isinstance(raw, dict):
            raise ValidationError(f"Record entry must be an object, got {type(raw).__name__}")

        record_type = raw.get("type")
        name = raw.get("name")
        if not isinstance(record_type, str) or not record_type:
            raise ValidationError(f"Record entry is missing 'type': {raw}")
        if not isinstance(name, str) or not name:
            raise ValidationError(f"Record entry is missing 'name': {raw}")

        use_ip4 = raw.get("currentIp4", False)
        use_ip6 = raw.get("currentIp6", False)
        for flag, value in (("currentIp4", use_ip4), ("currentIp6", use_ip6)):
            if not isinstance(value, bool):
                raise ValidationError(f"'{flag}' must be a boolean for {record_type} {name}")
        if use_ip4 and use_ip6:
            raise ValidationError(
                f"{record_type} record {name} sets both currentIp4 and currentIp6; pick one"
            )

        data = raw.get("data")
        if data is not None and not isinstance(data, str):
            raise ValidationError(f"'data' must be a string for {record_type} {name}")

        if use_ip4:
            return cls(type=record_type, name=name, source=ValueSource.CURRENT_IPV4)
        if use_ip6:
            return cls(type=record_type, name=name, source=ValueSource.CURRENT_IPV6)
        return cls(type=record_type, name=name, source=ValueSource.LITERAL, data=data)

    def desired_value(self, ipv4: Optional[str], ipv6: Optional[str]) -> Optional[str]:
        """Effective desired value given the current addresses. None or "" means absent."""
        if self.source is ValueSource.CURRENT_IPV4:
            return ipv4
        if self.source is ValueSource.CURRENT_IPV6:
            return ipv6
        return self.data


@dataclass(frozen=True)
class DomainConfiguration:
    """API credential and desired records for one domain."""

    api_key: Optional[str] = None
    records: List[RecordConfiguration] = field(default_factory=list)


@dataclass(frozen=True)
class Configuration:
    """All configured domains, keyed by domain name, in file order."""

    domains: Dict[str, DomainConfiguration] = field(default_factory=dict)

################################################################################
# PROVIDER STATE - Wire Models
################################################################################

# Wire fields interpreted by the reconciler; everything else is kept in `extra`
CORE_FIELDS = ("id", "type", "name", "data")


@dataclass
class DomainRecord:
    """A provider record. Metadata (priority, port, ttl, weight, flags, tag, ...)
    lives in `extra` and is sent back untouched on update."""

    type: str
    name: str
    data: Optional[str] = None
    id: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DomainRecord":
        return cls(
            type=raw.get("type"),
            name=raw.get("name"),
            data=raw.get("data"),
            id=raw.get("id"),
            extra={key: value for key, value in raw.items() if key not in CORE_FIELDS},
        )

    @classmethod
    def for_create(cls, record_type: str, name: str, data: str) -> "DomainRecord":
        return cls(type=record_type, name=name, data=data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to wire JSON. `id` is omitted when unset."""
        payload: Dict[str, Any] = {}
        if self.id is not None:
            payload["id"] = self.id
        payload["type"] = self.type
        payload["name"] = self.name
        payload["data"] = self.data
        payload.update(self.extra)
        return payload

    def for_update(self, data: str) -> "DomainRecord":
        """Copy with `data` replaced and the identifier cleared."""
        return replace(self, data=data, id=None, extra=dict(self.extra))

    def matches(self, record_type: str, name: str) -> bool:
        return self.type == record_type and self.name == name


@dataclass
class RecordList:
    """Records of one domain as returned by the provider (`domain_records`)."""

    records: List[DomainRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "RecordList":
        return cls(records=[DomainRecord.from_dict(item) for item in raw.get("domain_records") or []])

    def find(self, record_type: str, name: str) -> Optional[DomainRecord]:
        """First record with matching (type, name), or None."""
        return next((record for record in self.records if record.matches(record_type, name)), None)

    def __len__(self) -> int:
        return len(self.records)
