"""Shared fixtures: in-memory provider client, config builders."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

from dns_update.exceptions import APIError
from dns_update.models import DomainRecord, RecordList

# =============================================================================
# Fake Provider Client
# =============================================================================


class FakeRecordsClient:
    """In-memory provider client recording every call.

    `fail_on` names a method ("create_record", "update_record", "delete_record",
    "list_records") that raises APIError.
    """

    def __init__(self, records: Optional[List[DomainRecord]] = None, fail_on: Optional[str] = None) -> None:
        self.records = list(records or [])
        self.fail_on = fail_on
        self.api_keys: List[str] = []
        self.list_calls: List[str] = []
        self.create_calls: List[Tuple[str, Dict[str, Any]]] = []
        self.update_calls: List[Tuple[str, Dict[str, Any]]] = []
        self.delete_calls: List[Tuple[str, int]] = []
        self.closed = 0
        self._next_id = 1000

    # Used as client_factory
    def __call__(self, api_key: str) -> "FakeRecordsClient":
        self.api_keys.append(api_key)
        return self

    def __enter__(self) -> "FakeRecordsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.closed += 1

    @property
    def write_calls(self) -> int:
        return len(self.create_calls) + len(self.update_calls) + len(self.delete_calls)

    def _maybe_fail(self, method: str) -> None:
        if self.fail_on == method:
            raise APIError(f"{method} failed", status_code=500, response_text="boom")

    def list_records(self, domain: str) -> RecordList:
        self.list_calls.append(domain)
        self._maybe_fail("list_records")
        return RecordList(records=[DomainRecord.from_dict(r.to_dict()) for r in self.records])

    def create_record(self, domain: str, record: DomainRecord) -> DomainRecord:
        self.create_calls.append((domain, record.to_dict()))
        self._maybe_fail("create_record")
        self._next_id += 1
        return DomainRecord(type=record.type, name=record.name, data=record.data, id=self._next_id)

    def update_record(self, domain: str, record: DomainRecord) -> DomainRecord:
        self.update_calls.append((domain, record.to_dict()))
        self._maybe_fail("update_record")
        return record

    def delete_record(self, domain: str, record_id: int) -> None:
        self.delete_calls.append((domain, record_id))
        self._maybe_fail("delete_record")


@pytest.fixture
def fake_client() -> FakeRecordsClient:
    return FakeRecordsClient()


# =============================================================================
# Config Helpers
# =============================================================================


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a config dict to tmp_path/config.json and return its path."""

    def _write(config: Dict[str, Any]) -> str:
        path = tmp_path / "config.json"
        path.write_text(json.dumps(config), encoding="utf-8")
        return str(path)

    return _write
