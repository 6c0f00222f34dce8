"""Tests for the Click command line interface."""

import json
from unittest.mock import patch

import pytest
import requests
import responses
from click.testing import CliRunner

from nextdns_client import __version__
from nextdns_client.cli import main
from nextdns_client.client import API_URL, NextDNSClient

PROFILE_URL = f"{API_URL}profiles/abc123"

ENV_KEYS = (
    "NEXTDNS_API_KEY",
    "NEXTDNS_PROFILE_ID",
    "NEXTDNS_API_URL",
    "API_TIMEOUT",
    "NEXTDNS_DEBUG",
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Empty config directory with credentials coming from the environment."""
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.setenv("NEXTDNS_API_KEY", "test_api_key")
    monkeypatch.setenv("NEXTDNS_PROFILE_ID", "abc123")
    monkeypatch.chdir(tmp_path)
    return str(tmp_path)


class TestMain:
    """Tests for the command group itself."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_command_shows_help(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_missing_api_key(self, runner, config_dir, monkeypatch):
        monkeypatch.delenv("NEXTDNS_API_KEY")
        result = runner.invoke(main, ["profiles", "--config-dir", config_dir])
        assert result.exit_code == 1
        assert "Config error" in result.output


class TestProfilesCommand:
    """Tests for the profiles and show commands."""

    @responses.activate
    def test_profiles(self, runner, config_dir):
        responses.add(
            responses.GET,
            f"{API_URL}profiles",
            json={"data": [{"id": "abc123", "name": "Home"}, {"id": "def456", "name": "Kids"}]},
            status=200,
        )

        result = runner.invoke(main, ["profiles", "--config-dir", config_dir])

        assert result.exit_code == 0
        assert "Profiles (2)" in result.output
        assert "Kids" in result.output

    @responses.activate
    def test_show_uses_default_profile(self, runner, config_dir):
        responses.add(
            responses.GET,
            PROFILE_URL,
            json={"data": {"name": "Home", "denylist": [{"id": "bad.com", "active": True}]}},
            status=200,
        )

        result = runner.invoke(main, ["show", "--config-dir", config_dir])

        assert result.exit_code == 0
        assert "Home" in result.output
        assert "Denylist:  1 domain(s)" in result.output

    def test_show_without_profile(self, runner, config_dir, monkeypatch):
        monkeypatch.delenv("NEXTDNS_PROFILE_ID")
        result = runner.invoke(main, ["show", "--config-dir", config_dir])
        assert result.exit_code == 1
        assert "No profile given" in result.output

    @responses.activate
    def test_show_not_found(self, runner, config_dir):
        responses.add(
            responses.GET,
            f"{API_URL}profiles/zzz999",
            json={"errors": [{"code": "notFound"}]},
            status=404,
        )

        result = runner.invoke(main, ["show", "-p", "zzz999", "--config-dir", config_dir])

        assert result.exit_code == 1
        assert "not_found" in result.output


class TestListCommands:
    """Tests for the allowlist and denylist groups."""

    @responses.activate
    def test_denylist_add(self, runner, config_dir):
        responses.add(responses.POST, f"{PROFILE_URL}/denylist", status=204)

        result = runner.invoke(main, ["denylist", "add", "bad.com", "--config-dir", config_dir])

        assert result.exit_code == 0
        assert "Added to denylist: bad.com" in result.output
        assert json.loads(responses.calls[0].request.body) == {"id": "bad.com", "active": True}

    def test_denylist_add_invalid_domain(self, runner, config_dir):
        result = runner.invoke(main, ["denylist", "add", "not a domain", "--config-dir", config_dir])
        assert result.exit_code == 1
        assert "Invalid domain format" in result.output

    @responses.activate
    def test_denylist_remove(self, runner, config_dir):
        responses.add(responses.DELETE, f"{PROFILE_URL}/denylist/bad.com", status=204)

        result = runner.invoke(main, ["denylist", "remove", "bad.com", "--config-dir", config_dir])

        assert result.exit_code == 0
        assert len(responses.calls) == 1

    @responses.activate
    def test_denylist_disable(self, runner, config_dir):
        responses.add(responses.PATCH, f"{PROFILE_URL}/denylist/bad.com", status=204)

        result = runner.invoke(main, ["denylist", "disable", "bad.com", "--config-dir", config_dir])

        assert result.exit_code == 0
        assert "bad.com disabled in denylist" in result.output
        assert json.loads(responses.calls[0].request.body) == {"active": False}

    @responses.activate
    def test_allowlist_enable_other_profile(self, runner, config_dir):
        responses.add(responses.PATCH, f"{API_URL}profiles/def456/allowlist/good.com", status=204)

        result = runner.invoke(
            main, ["allowlist", "enable", "good.com", "-p", "def456", "--config-dir", config_dir]
        )

        assert result.exit_code == 0
        assert json.loads(responses.calls[0].request.body) == {"active": True}

    @responses.activate
    def test_allowlist_list(self, runner, config_dir):
        responses.add(
            responses.GET,
            f"{PROFILE_URL}/allowlist",
            json={"data": [{"id": "good.com", "active": True}, {"id": "meh.com", "active": False}]},
            status=200,
        )

        result = runner.invoke(main, ["allowlist", "list", "--config-dir", config_dir])

        assert result.exit_code == 0
        assert "Allowlist (2)" in result.output
        assert "inactive" in result.output

    @responses.activate
    def test_api_error(self, runner, config_dir):
        responses.add(
            responses.POST,
            f"{PROFILE_URL}/denylist",
            json={"errors": [{"code": "duplicate"}]},
            status=200,
        )

        result = runner.invoke(main, ["denylist", "add", "bad.com", "--config-dir", config_dir])

        assert result.exit_code == 1
        assert "API error" in result.output
        assert "duplicate" in result.output

    @responses.activate
    def test_connection_error(self, runner, config_dir):
        responses.add(
            responses.GET, f"{PROFILE_URL}/denylist", body=requests.exceptions.ConnectionError()
        )

        result = runner.invoke(main, ["denylist", "list", "--config-dir", config_dir])

        assert result.exit_code == 1
        assert "Connection error" in result.output


class TestAnalyticsCommand:
    """Tests for the analytics command."""

    @responses.activate
    def test_domains(self, runner, config_dir):
        responses.add(
            responses.GET,
            f"{PROFILE_URL}/analytics/domains",
            json={
                "data": [{"domain": "example.com", "queries": 42}],
                "meta": {"pagination": {"cursor": "abc"}},
            },
            status=200,
        )

        result = runner.invoke(
            main,
            ["analytics", "domains", "--from=-7d", "--limit", "5", "--config-dir", config_dir],
        )

        assert result.exit_code == 0
        assert "example.com" in result.output
        assert "42" in result.output
        assert "cursor: abc" in result.output
        url = responses.calls[0].request.url
        assert "from=-7d" in url
        assert "limit=5" in url

    @responses.activate
    def test_destinations_type(self, runner, config_dir):
        responses.add(
            responses.GET,
            f"{PROFILE_URL}/analytics/destinations",
            json={"data": [{"company": "google", "queries": 3}]},
            status=200,
        )

        result = runner.invoke(
            main, ["analytics", "destinations", "--type", "gafam", "--config-dir", config_dir]
        )

        assert result.exit_code == 0
        assert "google" in result.output
        assert "type=gafam" in responses.calls[0].request.url

    def test_unknown_kind(self, runner, config_dir):
        result = runner.invoke(main, ["analytics", "bogus", "--config-dir", config_dir])
        assert result.exit_code == 2


class TestSetupAndHealth:
    """Tests for the setup and health commands."""

    @responses.activate
    def test_setup(self, runner, config_dir):
        responses.add(
            responses.GET,
            f"{PROFILE_URL}/setup",
            json={"data": {"ipv4": ["45.90.28.1"], "linkedIp": {"ip": "198.51.100.7"}}},
            status=200,
        )

        result = runner.invoke(main, ["setup", "--config-dir", config_dir])

        assert result.exit_code == 0
        assert "45.90.28.1" in result.output
        assert "198.51.100.7" in result.output

    @responses.activate
    def test_health_ok(self, runner, config_dir):
        responses.add(
            responses.GET, f"{API_URL}profiles", json={"data": [{"id": "abc123"}]}, status=200
        )

        result = runner.invoke(main, ["health", "--config-dir", config_dir])

        assert result.exit_code == 0
        assert "HEALTHY" in result.output
        assert "3/3" in result.output

    @responses.activate
    def test_health_unknown_profile(self, runner, config_dir):
        responses.add(
            responses.GET, f"{API_URL}profiles", json={"data": [{"id": "other1"}]}, status=200
        )

        result = runner.invoke(main, ["health", "--config-dir", config_dir])

        assert result.exit_code == 1
        assert "DEGRADED" in result.output

    @responses.activate
    def test_health_api_failure(self, runner, config_dir):
        responses.add(
            responses.GET, f"{API_URL}profiles", json={"errors": [{"code": "forbidden"}]}, status=403
        )

        result = runner.invoke(main, ["health", "--config-dir", config_dir])

        assert result.exit_code == 1
        assert "API connectivity failed" in result.output


class TestClientLifecycle:
    """Tests that commands release the client they open."""

    @responses.activate
    def test_command_closes_client(self, runner, config_dir):
        responses.add(responses.GET, f"{API_URL}profiles", json={"data": []}, status=200)

        with patch.object(NextDNSClient, "close") as mock_close:
            result = runner.invoke(main, ["profiles", "--config-dir", config_dir])

        assert result.exit_code == 0
        mock_close.assert_called_once()

    @responses.activate
    def test_client_closed_on_api_error(self, runner, config_dir):
        responses.add(
            responses.GET, f"{PROFILE_URL}/denylist", json={"errors": [{"code": "forbidden"}]}, status=403
        )

        with patch.object(NextDNSClient, "close") as mock_close:
            result = runner.invoke(main, ["denylist", "list", "--config-dir", config_dir])

        assert result.exit_code == 1
        mock_close.assert_called_once()

    @responses.activate
    def test_health_closes_client(self, runner, config_dir):
        responses.add(responses.GET, f"{API_URL}profiles", json={"data": [{"id": "abc123"}]}, status=200)

        with patch.object(NextDNSClient, "close") as mock_close:
            result = runner.invoke(main, ["health", "--config-dir", config_dir])

        assert result.exit_code == 0
        mock_close.assert_called_once()
