"""Unit tests for configuration and wire models."""

import pytest

from dns_update.exceptions import ValidationError
from dns_update.models import DomainRecord, RecordConfiguration, RecordList, ValueSource


class TestRecordConfiguration:
    """Tests for parsing record declarations and computing desired values."""

    def test_literal_record(self) -> None:
        record = RecordConfiguration.from_dict({"type": "TXT", "name": "_owner", "data": "home"})

        assert record.source is ValueSource.LITERAL
        assert record.desired_value("203.0.113.5", "2001:db8::1") == "home"

    def test_current_ipv4_ignores_data(self) -> None:
        record = RecordConfiguration.from_dict(
            {"type": "A", "name": "@", "data": "10.0.0.1", "currentIp4": True}
        )

        assert record.source is ValueSource.CURRENT_IPV4
        assert record.data is None
        assert record.desired_value("203.0.113.5", "2001:db8::1") == "203.0.113.5"

    def test_current_ipv6_without_address_is_absent(self) -> None:
        record = RecordConfiguration.from_dict({"type": "AAAA", "name": "@", "currentIp6": True})

        assert record.source is ValueSource.CURRENT_IPV6
        assert record.desired_value("203.0.113.5", None) is None

    def test_both_flags_rejected(self) -> None:
        with pytest.raises(ValidationError, match="both currentIp4 and currentIp6"):
            RecordConfiguration.from_dict(
                {"type": "A", "name": "@", "currentIp4": True, "currentIp6": True}
            )

    def test_missing_type_rejected(self) -> None:
        with pytest.raises(ValidationError, match="type"):
            RecordConfiguration.from_dict({"name": "@", "data": "x"})

    def test_non_boolean_flag_rejected(self) -> None:
        with pytest.raises(ValidationError, match="currentIp4"):
            RecordConfiguration.from_dict({"type": "A", "name": "@", "currentIp4": "yes"})

    def test_literal_without_data_is_absent(self) -> None:
        record = RecordConfiguration.from_dict({"type": "CNAME", "name": "www"})

        assert record.desired_value("203.0.113.5", None) is None


class TestDomainRecord:
    """Tests for DomainRecord wire mapping."""

    WIRE = {
        "id": 42,
        "type": "MX",
        "name": "@",
        "data": "mail.example.org",
        "priority": 10,
        "port": None,
        "ttl": 1800,
        "weight": None,
        "flags": None,
        "tag": None,
    }

    def test_metadata_round_trips(self) -> None:
        record = DomainRecord.from_dict(self.WIRE)

        assert record.id == 42
        assert record.extra["priority"] == 10
        assert record.to_dict() == self.WIRE

    def test_unknown_fields_are_preserved(self) -> None:
        record = DomainRecord.from_dict({"id": 1, "type": "A", "name": "@", "data": "1.2.3.4", "future": "x"})

        assert record.to_dict()["future"] == "x"

    def test_for_update_clears_id_and_keeps_metadata(self) -> None:
        record = DomainRecord.from_dict(self.WIRE)

        updated = record.for_update("mail2.example.org")

        payload = updated.to_dict()
        assert "id" not in payload
        assert payload["data"] == "mail2.example.org"
        assert payload["ttl"] == 1800
        assert record.id == 42

    def test_for_create_payload(self) -> None:
        payload = DomainRecord.for_create("A", "@", "203.0.113.5").to_dict()

        assert payload == {"type": "A", "name": "@", "data": "203.0.113.5"}


class TestRecordList:
    """Tests for RecordList parsing and matching."""

    def test_from_dict_reads_domain_records(self) -> None:
        records = RecordList.from_dict(
            {"domain_records": [{"id": 1, "type": "A", "name": "@", "data": "1.1.1.1"}], "meta": {"total": 1}}
        )

        assert len(records) == 1
        assert records.records[0].data == "1.1.1.1"

    def test_missing_wrapper_is_empty(self) -> None:
        assert len(RecordList.from_dict({})) == 0

    def test_find_requires_type_and_name(self) -> None:
        records = RecordList(records=[DomainRecord(type="AAAA", name="@", data="2001:db8::1", id=1)])

        assert records.find("A", "@") is None
        assert records.find("AAAA", "www") is None
        assert records.find("AAAA", "@").id == 1

    def test_find_returns_first_match(self) -> None:
        records = RecordList(
            records=[
                DomainRecord(type="A", name="@", data="1.1.1.1", id=1),
                DomainRecord(type="A", name="@", data="2.2.2.2", id=2),
            ]
        )

        assert records.find("A", "@").id == 1
