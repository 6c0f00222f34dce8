"""Tests for model (de)serialization."""

from datetime import datetime, timedelta, timezone

from nextdns_client.analytics import AnalyticsQuery, DestinationType
from nextdns_client.models import (
    ListEntry,
    Privacy,
    PrivacyBlocklist,
    Settings,
    SettingsBlockPage,
    SettingsLogs,
    parse_datetime,
    to_payload,
)


class TestFromDict:
    """Tests for decoding API documents."""

    def test_camel_case_keys(self):
        settings = Settings.from_dict({"blockPage": {"enabled": True}, "web3": False})
        assert settings.block_page == SettingsBlockPage(enabled=True)
        assert settings.web3 is False

    def test_missing_keys_stay_none(self):
        settings = Settings.from_dict({})
        assert settings.logs is None
        assert settings.block_page is None

    def test_unknown_keys_ignored(self):
        entry = ListEntry.from_dict({"id": "a.com", "active": True, "extra": 1})
        assert entry == ListEntry(id="a.com", active=True)

    def test_nested_list_of_models(self):
        privacy = Privacy.from_dict({"blocklists": [{"id": "oisd"}, {"id": "1hosts-lite"}]})
        assert privacy.blocklists == [PrivacyBlocklist(id="oisd"), PrivacyBlocklist(id="1hosts-lite")]

    def test_from_list_none(self):
        assert ListEntry.from_list(None) == []

    def test_null_values_decode_to_none(self):
        logs = SettingsLogs.from_dict({"enabled": None, "drop": None, "retention": 3600})
        assert logs.enabled is None
        assert logs.drop is None
        assert logs.retention == 3600

    def test_nested_null_not_decoded_as_model(self):
        settings = Settings.from_dict({"logs": None, "blockPage": {"enabled": None}})
        assert settings.logs is None
        assert settings.block_page == SettingsBlockPage()


class TestToDict:
    """Tests for encoding request bodies."""

    def test_none_fields_omitted(self):
        assert ListEntry(active=False).to_dict() == {"active": False}

    def test_nested_model(self):
        settings = Settings(logs=SettingsLogs(enabled=True, retention=86400))
        assert settings.to_dict() == {"logs": {"enabled": True, "retention": 86400}}

    def test_json_field_name(self):
        assert AnalyticsQuery(from_="-1d").to_dict() == {"from": "-1d"}

    def test_to_payload_list(self):
        payload = to_payload([ListEntry(id="a.com", active=True), {"id": "b.com"}])
        assert payload == [{"id": "a.com", "active": True}, {"id": "b.com"}]

    def test_to_payload_enum_and_datetime(self):
        when = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        payload = to_payload({"type": DestinationType.GAFAM, "at": when})
        assert payload == {"type": "gafam", "at": "2024-05-01T12:00:00+00:00"}


class TestParseDatetime:
    """Tests for timestamp parsing."""

    def test_zulu_suffix(self):
        assert parse_datetime("2024-03-01T10:00:00Z") == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_offset(self):
        parsed = parse_datetime("2024-03-01T10:00:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_datetime_passthrough(self):
        now = datetime.now(timezone.utc)
        assert parse_datetime(now) is now
