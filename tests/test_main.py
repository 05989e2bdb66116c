"""
Tests for the circonus-api command line.
"""

import io
import json
import logging

import pytest

from circonus_api.client import CirconusClient
from circonus_api.error_handler import EXIT_CONFIG_ERROR, EXIT_ERROR, ErrorHandler
from circonus_api.exceptions import (
    CirconusError,
    ConfigurationError,
    InvalidIdentifierError,
    RateLimitError,
    TransportError
)
from circonus_api.main import build_parser, main, parse_filters


@pytest.fixture
def run(transport, monkeypatch):
    monkeypatch.setenv("CIRCONUS_API_TOKEN", "tok")

    def factory(config):
        return CirconusClient(config, transport=transport)

    def _run(*argv):
        return main(list(argv), client_factory=factory)

    return _run


class TestCommands:

    def test_list(self, run, transport, capsys):
        transport.respond("GET", "/maintenance", [{"_cid": "/maintenance/1", "severities": "1,2"}])

        assert run("maintenance", "list") == 0

        out = json.loads(capsys.readouterr().out)
        assert out == [{"_cid": "/maintenance/1", "severities": ["1", "2"]}]
        assert transport.closed

    def test_get(self, run, transport, capsys):
        transport.respond("GET", "/annotation/5", {"_cid": "/annotation/5", "title": "v1"})

        assert run("annotation", "get", "5") == 0
        assert json.loads(capsys.readouterr().out)["title"] == "v1"

    def test_get_current_user(self, run, transport, capsys):
        transport.respond("GET", "/user/current", {"_cid": "/user/1", "email": "a@example.com"})

        assert run("user", "get") == 0
        assert transport.calls[0][1] == "/user/current"

    def test_search(self, run, transport, capsys):
        run("annotation", "search", "--query", "deploy", "-f", "f_category=a", "-f", "f_category=b")
        assert transport.calls[0][1] == "/annotation?search=deploy&f_category=a&f_category=b"

    def test_create_from_file(self, run, transport, tmp_path, capsys):
        path = tmp_path / "window.json"
        path.write_text(json.dumps({"item": "/host/1", "start": 10, "stop": 20}))
        transport.respond("POST", "/maintenance", {"_cid": "/maintenance/9", "item": "/host/1"})

        assert run("maintenance", "create", "--file", str(path)) == 0
        assert transport.sent_json() == {"item": "/host/1", "start": 10, "stop": 20}
        assert json.loads(capsys.readouterr().out)["_cid"] == "/maintenance/9"

    def test_update_from_stdin(self, run, transport, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps({"_cid": "/user/3", "email": "b@example.com"})))
        transport.respond("PUT", "/user/3", {"_cid": "/user/3"})

        assert run("user", "update", "--file", "-") == 0
        assert transport.calls[0][:2] == ("PUT", "/user/3")

    def test_delete(self, run, transport, capsys):
        assert run("maintenance", "delete", "12") == 0
        assert transport.calls == [("DELETE", "/maintenance/12", None)]
        assert json.loads(capsys.readouterr().out) == {"_cid": "/maintenance/12", "deleted": True}


class TestFailures:

    def test_invalid_cid(self, run, transport, capsys):
        assert run("maintenance", "get", "abc") == EXIT_ERROR
        assert "Invalid identifier" in capsys.readouterr().err
        assert transport.calls == []

    def test_api_error(self, run, transport, capsys):
        transport.respond("GET", "/annotation", TransportError("boom", status_code=500))
        assert run("annotation", "list") == EXIT_ERROR
        assert "HTTP Status: 500" in capsys.readouterr().err

    def test_rate_limited(self, run, transport, capsys):
        transport.respond("GET", "/maintenance/1", RateLimitError("slow", retry_after=3))
        assert run("maintenance", "get", "1") == EXIT_ERROR

        err = capsys.readouterr().err
        assert "Rate Limit Error in maintenance get: fetching maintenance window: slow" in err
        assert "Retry after: 3 seconds" in err

    def test_unsupported(self, run, transport, capsys):
        assert run("user", "delete", "3") == EXIT_ERROR
        assert transport.calls == []

    def test_missing_token(self, monkeypatch, capsys):
        monkeypatch.delenv("CIRCONUS_API_TOKEN", raising=False)
        assert main(["maintenance", "list"]) == EXIT_CONFIG_ERROR
        assert "Configuration Error" in capsys.readouterr().err

    def test_bad_env(self, monkeypatch, capsys):
        monkeypatch.setenv("CIRCONUS_API_TIMEOUT", "0")
        assert main(["maintenance", "list"]) == EXIT_CONFIG_ERROR
        assert "timeout" in capsys.readouterr().err

    def test_validate_config(self, run, capsys):
        assert run("--validate-config") == 0
        assert "Configuration is valid" in capsys.readouterr().out

    def test_validate_config_without_token(self, monkeypatch, capsys):
        monkeypatch.delenv("CIRCONUS_API_TOKEN", raising=False)
        assert main(["--validate-config"]) == EXIT_CONFIG_ERROR

    def test_resource_required(self, run):
        with pytest.raises(SystemExit):
            run()


class TestHelpers:

    def test_parse_filters_groups_in_order(self):
        assert parse_filters(["a=1", "b=2", "a=3"]) == {"a": ["1", "3"], "b": ["2"]}

    def test_parse_filters_rejects_bad_pair(self):
        with pytest.raises(CirconusError):
            parse_filters(["novalue"])

    def test_error_handler_exit_codes(self):
        handler = ErrorHandler()
        assert handler.handle_command_error(ConfigurationError("no token"), "x")[0] == EXIT_CONFIG_ERROR
        assert handler.handle_command_error(InvalidIdentifierError("bad", cid="/x"), "x")[0] == EXIT_ERROR

    def test_error_handler_rate_limit_message(self):
        _, message = ErrorHandler().handle_command_error(RateLimitError("slow", retry_after=3), "user list")
        assert "Retry after: 3 seconds" in message

    def test_help_lists_retry_delay_variables(self):
        epilog = build_parser().epilog
        assert "CIRCONUS_API_MIN_RETRY_DELAY" in epilog
        assert "CIRCONUS_API_MAX_RETRY_DELAY" in epilog

    def test_client_close_closes_transport(self, config, transport, caplog):
        with caplog.at_level(logging.DEBUG, logger="circonus_api.client"):
            with CirconusClient(config, transport=transport) as client:
                assert set(client.resources) == {"maintenance", "annotation", "user"}

        assert transport.closed
        assert "Circonus client closed" in caplog.text
