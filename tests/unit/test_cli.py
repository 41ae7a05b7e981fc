"""Tests for the vlcm-connect command line."""
import json

import pytest

from vlcm_session import cli
from vlcm_session.credentials import UsernamePassword, UsernameSecret
from vlcm_session.exceptions import AuthenticationError, TlsError
from vlcm_session.models import SessionContext


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("VLCM_SERVER", "VLCM_USERNAME", "VLCM_PASSWORD"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fake_connect(monkeypatch):
    calls = []

    def _connect(server, credential, options):
        calls.append((server, credential, options))
        username, _ = credential.resolve()
        return SessionContext(
            server_base_url=f"https://{server}",
            token="abcdef123456",
            username=username,
            certificates_validated=options.certificates_validated,
            negotiated_ssl_protocol=options.protocol_name,
        )

    monkeypatch.setattr(cli, "connect", _connect)
    return calls


def test_prints_session_with_masked_token(fake_connect, capsys):
    rc = cli.main(["--server", "vlcm.test", "--username", "admin", "--password", "pw"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["server_base_url"] == "https://vlcm.test"
    assert out["username"] == "admin"
    assert out["token"] == "abcdef******"
    assert isinstance(fake_connect[0][1], UsernamePassword)


def test_show_token(fake_connect, capsys):
    cli.main(["--server", "vlcm.test", "--username", "admin", "--password", "pw", "--show-token"])
    assert json.loads(capsys.readouterr().out)["token"] == "abcdef123456"


def test_reads_environment(fake_connect, monkeypatch, capsys):
    monkeypatch.setenv("VLCM_SERVER", "env.test")
    monkeypatch.setenv("VLCM_USERNAME", "envuser")
    monkeypatch.setenv("VLCM_PASSWORD", "envpw")
    assert cli.main([]) == 0
    server, credential, _ = fake_connect[0]
    assert server == "env.test"
    assert credential.resolve() == ("envuser", "envpw")


def test_prompts_for_password(fake_connect, monkeypatch):
    monkeypatch.setattr("vlcm_session.credentials.getpass.getpass", lambda prompt: "prompted")
    assert cli.main(["--server", "vlcm.test", "--username", "admin"]) == 0
    credential = fake_connect[0][1]
    assert isinstance(credential, UsernameSecret)
    assert credential.resolve() == ("admin", "prompted")


def test_transport_flags(fake_connect, capsys):
    rc = cli.main([
        "--server", "vlcm.test", "--username", "admin", "--password", "pw",
        "--ignore-cert-requirements", "--ssl-protocol", "TLS1.2", "--timeout", "5",
    ])
    assert rc == 0
    options = fake_connect[0][2]
    assert options.ignore_cert_requirements is True
    assert options.protocol_name == "TLS1.2"
    assert options.timeout == 5.0
    captured = capsys.readouterr()
    assert "certificate validation is disabled" in captured.err
    assert json.loads(captured.out)["certificates_validated"] is False


def test_missing_server_is_usage_error(fake_connect):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--username", "admin", "--password", "pw"])
    assert exc_info.value.code == 2


def test_bad_timeout_is_configuration_error(fake_connect, capsys):
    rc = cli.main(["--server", "vlcm.test", "--username", "a", "--password", "b", "--timeout", "0"])
    assert rc == 2
    assert "Configuration error" in capsys.readouterr().err
    assert fake_connect == []


@pytest.mark.parametrize("error", [AuthenticationError("HTTP 401", status=401), TlsError("handshake failed")])
def test_login_failure_exit_code(monkeypatch, capsys, error):
    def _connect(server, credential, options):
        raise error

    monkeypatch.setattr(cli, "connect", _connect)
    rc = cli.main(["--server", "vlcm.test", "--username", "admin", "--password", "pw"])
    assert rc == 1
    assert "Login failed" in capsys.readouterr().err
