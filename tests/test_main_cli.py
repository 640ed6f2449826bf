import sys
from pathlib import Path
from unittest import mock

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import main
from main import _parse_args


def test_default_command_invokes_serve() -> None:
    args = _parse_args([])
    assert args.command == "serve"


def test_default_command_accepts_options_without_subcommand() -> None:
    args = _parse_args(["--host", "127.0.0.1", "--port", "8080"])
    assert args.command == "serve"
    assert args.host == "127.0.0.1"
    assert args.port == 8080


def test_client_subcommands_available() -> None:
    args = _parse_args(["count-users", "--service-url", "http://example.test"])
    assert args.command == "count-users"
    assert args.service_url == "http://example.test"
    assert _parse_args(["list-users"]).command == "list-users"


def test_check_config_reports_invalid_seed_user(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "userdirectory.yaml"
    config_path.write_text(
        "seed_users:\n  - name: John\n    nick: johndoe\n    birth_date: '1986-1-1'\n",
        encoding="utf-8",
    )

    assert main.main(["check-config", "--config", str(config_path)]) == 1
    assert "Seed user #1 is invalid" in capsys.readouterr().out


def test_check_config_accepts_valid_file(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "userdirectory.yaml"
    config_path.write_text(
        "port: 8081\nseed_users:\n  - name: John\n    nick: johndoe\n    birth_date: '1986-01-01'\n",
        encoding="utf-8",
    )

    assert main.main(["check-config", "--config", str(config_path)]) == 0
    output = capsys.readouterr().out
    assert ":8081" in output
    assert "1 seed user(s) configured." in output


def test_count_users_queries_service(capsys) -> None:
    response = httpx.Response(200, json=3, request=httpx.Request("GET", "http://svc/count-user"))
    with mock.patch.object(main.httpx, "get", return_value=response) as fake_get:
        assert main.main(["count-users", "--service-url", "http://svc/"]) == 0

    fake_get.assert_called_once_with("http://svc/count-user", timeout=10.0)
    assert "3 user(s) registered." in capsys.readouterr().out


def test_list_users_reports_connection_failure(capsys) -> None:
    error = httpx.ConnectError("connection refused")
    with mock.patch.object(main.httpx, "get", side_effect=error):
        assert main.main(["list-users", "--service-url", "http://svc"]) == 1

    assert "Failed to contact user directory service" in capsys.readouterr().out


def test_unknown_subcommand_is_rejected() -> None:
    with pytest.raises(SystemExit):
        _parse_args(["frobnicate"])


def test_help_is_not_rerouted_to_serve(capsys) -> None:
    with pytest.raises(SystemExit):
        _parse_args(["--help"])
    assert "check-config" in capsys.readouterr().out
