"""Unit tests for the record reconciliation algorithm."""

import pytest

from dns_update.exceptions import APIError, MissingCredentialsError
from dns_update.models import DomainConfiguration, DomainRecord, RecordConfiguration, ValueSource
from dns_update.reconciler import Reconciler, RecordAction, plan_action

from conftest import FakeRecordsClient

IPV4 = "203.0.113.5"
IPV6 = "2001:db8::5"


def _domain(*records: RecordConfiguration, api_key: str = "token") -> DomainConfiguration:
    return DomainConfiguration(api_key=api_key, records=list(records))


def _ip4(name: str = "@") -> RecordConfiguration:
    return RecordConfiguration(type="A", name=name, source=ValueSource.CURRENT_IPV4)


def _ip6(name: str = "@") -> RecordConfiguration:
    return RecordConfiguration(type="AAAA", name=name, source=ValueSource.CURRENT_IPV6)


class TestPlanAction:
    """Decision table."""

    @pytest.mark.parametrize(
        "existing_data, desired, expected",
        [
            (None, None, RecordAction.NONE),
            (None, "", RecordAction.NONE),
            (None, IPV4, RecordAction.CREATE),
            ("198.51.100.1", None, RecordAction.DELETE),
            ("198.51.100.1", "", RecordAction.DELETE),
            (IPV4, IPV4, RecordAction.NONE),
            ("198.51.100.1", IPV4, RecordAction.UPDATE),
        ],
    )
    def test_decision_table(self, existing_data, desired, expected) -> None:
        existing = None if existing_data is None else DomainRecord(type="A", name="@", data=existing_data, id=1)

        assert plan_action(existing, desired) is expected


class TestReconcilerActions:
    """Network effects of each branch."""

    def test_absent_and_empty_makes_no_call(self) -> None:
        client = FakeRecordsClient()

        actions = Reconciler(client).process_domain("example.org", _domain(_ip6()), IPV4, None)

        assert actions == [RecordAction.NONE]
        assert client.write_calls == 0

    def test_absent_and_desired_creates_once(self) -> None:
        client = FakeRecordsClient()

        actions = Reconciler(client).process_domain("example.org", _domain(_ip4()), IPV4, None)

        assert actions == [RecordAction.CREATE]
        assert client.create_calls == [("example.org", {"type": "A", "name": "@", "data": IPV4})]
        assert client.write_calls == 1

    def test_present_and_empty_deletes_by_id(self) -> None:
        client = FakeRecordsClient([DomainRecord(type="AAAA", name="@", data="2001:db8::1", id=9)])

        actions = Reconciler(client).process_domain("example.org", _domain(_ip6()), IPV4, None)

        assert actions == [RecordAction.DELETE]
        assert client.delete_calls == [("example.org", 9)]
        assert client.write_calls == 1

    def test_present_and_equal_makes_no_call(self) -> None:
        client = FakeRecordsClient([DomainRecord(type="A", name="@", data=IPV4, id=3)])

        actions = Reconciler(client).process_domain("example.org", _domain(_ip4()), IPV4, None)

        assert actions == [RecordAction.NONE]
        assert client.write_calls == 0

    def test_present_and_different_updates_without_id(self) -> None:
        client = FakeRecordsClient(
            [DomainRecord(type="A", name="@", data="198.51.100.1", id=3, extra={"ttl": 600})]
        )

        actions = Reconciler(client).process_domain("example.org", _domain(_ip4()), IPV4, None)

        assert actions == [RecordAction.UPDATE]
        assert len(client.update_calls) == 1
        domain, payload = client.update_calls[0]
        assert domain == "example.org"
        assert payload["data"] == IPV4
        assert payload["ttl"] == 600
        assert "id" not in payload
        assert client.write_calls == 1

    def test_literal_value(self) -> None:
        client = FakeRecordsClient([DomainRecord(type="TXT", name="@", data="old", id=4)])
        record = RecordConfiguration(type="TXT", name="@", data="new")

        actions = Reconciler(client).process_domain("example.org", _domain(record), IPV4, IPV6)

        assert actions == [RecordAction.UPDATE]
        assert client.update_calls[0][1]["data"] == "new"

    def test_same_name_different_type_does_not_match(self) -> None:
        client = FakeRecordsClient([DomainRecord(type="AAAA", name="@", data=IPV6, id=5)])

        actions = Reconciler(client).process_domain("example.org", _domain(_ip4()), IPV4, IPV6)

        assert actions == [RecordAction.CREATE]
        assert client.update_calls == []
        assert client.delete_calls == []


class TestReconcilerDomain:
    """Per-domain behavior: credentials, single fetch, abort on failure."""

    def test_missing_api_key_skips_domain(self) -> None:
        client = FakeRecordsClient()

        with pytest.raises(MissingCredentialsError, match="example.com"):
            Reconciler(client).process_domain("example.com", _domain(_ip4(), api_key=""), IPV4, None)

        assert client.list_calls == []
        assert client.api_keys == []

    def test_fetches_record_list_once_per_domain(self) -> None:
        client = FakeRecordsClient()

        Reconciler(client).process_domain(
            "example.org", _domain(_ip4("@"), _ip4("www"), _ip6("@")), IPV4, IPV6
        )

        assert client.list_calls == ["example.org"]
        assert client.api_keys == ["token"]
        assert client.closed == 1
        assert len(client.create_calls) == 3

    def test_failed_call_aborts_remaining_records(self) -> None:
        client = FakeRecordsClient(fail_on="create_record")

        with pytest.raises(APIError):
            Reconciler(client).process_domain("example.org", _domain(_ip4("@"), _ip4("www")), IPV4, None)

        assert len(client.create_calls) == 1
        assert client.closed == 1

    def test_list_failure_propagates(self) -> None:
        client = FakeRecordsClient(fail_on="list_records")

        with pytest.raises(APIError):
            Reconciler(client).process_domain("example.org", _domain(_ip4()), IPV4, None)

        assert client.write_calls == 0

    def test_records_processed_in_config_order(self) -> None:
        client = FakeRecordsClient([DomainRecord(type="A", name="www", data=IPV4, id=1)])

        actions = Reconciler(client).process_domain(
            "example.org", _domain(_ip4("www"), _ip4("@"), _ip6("@")), IPV4, None
        )

        assert actions == [RecordAction.NONE, RecordAction.CREATE, RecordAction.NONE]


def test_delete_without_provider_id_is_an_api_error() -> None:
    """A provider record lacking an id cannot be deleted; nothing is sent."""
    client = FakeRecordsClient([DomainRecord(type="AAAA", name="@", data="2001:db8::1", id=None)])

    with pytest.raises(APIError, match="no id"):
        Reconciler(client).process_domain("example.org", _domain(_ip6()), IPV4, None)

    assert client.delete_calls == []
    assert client.closed == 1
