from __future__ import annotations

import tomllib
from datetime import datetime

import pytest

from src.zermelo_cli.cli import NO_APPOINTMENTS_MESSAGE, main
from src.zermelo_cli.errors import AuthenticationError, FetchError
from src.zermelo_cli.models import Appointment

NOW = datetime(2024, 1, 15, 9, 30)
MIDNIGHT = int(datetime(2024, 1, 15).timestamp())


def test_no_arguments_exits_with_error(capsys, fake_client):
    assert main([], client=fake_client, now=NOW) == 1

    err = capsys.readouterr().err
    assert "Error: not enough arguments specified." in err
    assert "Note: use `--help`" in err


def test_auth_without_school_exits_with_error(capsys, fake_client):
    assert main(["--auth", "123"], client=fake_client, now=NOW) == 1

    assert "without school" in capsys.readouterr().err
    assert fake_client.auth_calls == []


def test_access_token_fetches_today(capsys, make_client):
    client = make_client(appointments=[Appointment(subjects=["wisb"])])

    code = main(["--access_token", "tok", "--school", "lyceum"], client=client, now=NOW)

    assert code == 0
    session, start, end = client.fetch_calls[0]
    assert session.access_token == "tok"
    assert (start, end) == (MIDNIGHT, MIDNIGHT + 86399)
    assert "Subjects: wisb" in capsys.readouterr().out


def test_config_with_temp_code_bootstraps_and_rewrites(capsys, make_client, write_config):
    path = write_config('school = "lyceum"\n\n[temp]\nauth_code = "123 456"\n')
    assert "access_token" not in tomllib.loads(path.read_text(encoding="utf-8"))
    client = make_client(token="new-token", appointments=[Appointment(subjects=["nat"])])

    code = main(["--config", str(path)], client=client, now=NOW)

    assert code == 0
    assert client.auth_calls == [("lyceum", "123 456")]
    assert tomllib.loads(path.read_text(encoding="utf-8")) == {
        "school": "lyceum",
        "access_token": "new-token",
    }
    out = capsys.readouterr().out
    assert "Your access token is: new-token" in out
    assert "It will be stored in your config." in out
    assert "Subjects: nat" in out


def test_config_with_token_does_not_authenticate(make_client, write_config):
    path = write_config('school = "lyceum"\naccess_token = "stored"\n')
    client = make_client(appointments=[Appointment()])

    assert main(["-c", str(path)], client=client, now=NOW) == 0

    assert client.auth_calls == []
    assert client.fetch_calls[0][0].access_token == "stored"


def test_empty_schedule_prints_message(capsys, fake_client):
    code = main(["-a", "tok", "-s", "lyceum", "--tomorrow"], client=fake_client, now=NOW)

    assert code == 0
    assert capsys.readouterr().out.strip() == NO_APPOINTMENTS_MESSAGE
    _, start, _ = fake_client.fetch_calls[0]
    assert start == MIDNIGHT + 86400


def test_bad_future_value_fails_before_authenticating(capsys, fake_client):
    code = main(["--auth", "123", "--school", "lyceum", "--future", "soon"], client=fake_client, now=NOW)

    assert code == 1
    assert "could not parse days in the future" in capsys.readouterr().err
    assert fake_client.auth_calls == []


def test_authentication_failure_exits_with_error(capsys, make_client, write_config):
    original = 'school = "lyceum"\n\n[temp]\nauth_code = "123"\n'
    path = write_config(original)
    client = make_client(auth_error=AuthenticationError("server rejected the authentication code"))

    assert main(["--config", str(path)], client=client, now=NOW) == 1

    assert "rejected" in capsys.readouterr().err
    assert path.read_text(encoding="utf-8") == original
    assert client.fetch_calls == []


def test_fetch_failure_exits_with_error(capsys, make_client):
    client = make_client(fetch_error=FetchError("could not fetch appointments (HTTP 500)"))

    assert main(["-a", "tok", "-s", "lyceum"], client=client, now=NOW) == 1

    assert "HTTP 500" in capsys.readouterr().err


def test_unreadable_config_exits_with_error(capsys, fake_client, tmp_path):
    assert main(["--config", str(tmp_path / "missing.toml")], client=fake_client, now=NOW) == 1

    assert "could not read config" in capsys.readouterr().err


@pytest.mark.parametrize(
    "flags, shown",
    [
        ([], {"regular", "cancelled"}),
        (["--hide_cancelled"], {"regular"}),
        (["--show_invalid"], {"regular", "cancelled", "invalid"}),
    ],
)
def test_filter_flags(capsys, make_client, flags, shown):
    client = make_client(
        appointments=[
            Appointment(subjects=["regular"]),
            Appointment(subjects=["cancelled"], cancelled=True),
            Appointment(subjects=["invalid"], valid=False),
        ]
    )

    assert main(["-a", "tok", "-s", "lyceum", *flags], client=client, now=NOW) == 0

    out = capsys.readouterr().out
    for subject in ("regular", "cancelled", "invalid"):
        assert (f"Subjects: {subject}" in out) is (subject in shown)


@pytest.mark.parametrize("argv", [["--future"], ["--no-such-flag"]])
def test_usage_errors_exit_with_status_one(capsys, fake_client, argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv, client=fake_client, now=NOW)

    assert exc_info.value.code == 1
    assert "Error:" in capsys.readouterr().err


def test_invalid_settings_exit_with_error(capsys, monkeypatch, fake_client):
    monkeypatch.setenv("ZERMELO_REQUEST_TIMEOUT", "abc")

    assert main(["-a", "tok", "-s", "lyceum"], client=fake_client, now=NOW) == 1

    err = capsys.readouterr().err
    assert "Error: invalid settings: request_timeout" in err
    assert fake_client.fetch_calls == []


def test_invalid_toml_config_exits_with_error(capsys, fake_client, write_config):
    path = write_config("school = \n")

    assert main(["--config", str(path)], client=fake_client, now=NOW) == 1

    assert "Error: could not parse config" in capsys.readouterr().err


def test_config_without_credentials_exits_with_error(capsys, fake_client, write_config):
    path = write_config('school = "lyceum"\n')

    assert main(["--config", str(path)], client=fake_client, now=NOW) == 1

    err = capsys.readouterr().err
    assert "Error: access token and authentication code not present in config!" in err
    assert "Note: set access token or authentication code." in err


def test_unwritable_config_announces_token_then_exits_with_error(capsys, make_client, tmp_path):
    # The config file is replaced by a directory during authentication, so the rewrite fails
    path = tmp_path / "zermelo.toml"
    path.write_text('school = "lyceum"\n\n[temp]\nauth_code = "123"\n', encoding="utf-8")
    client = make_client(token="new-token")

    def authenticate(school: str, auth_code: str) -> str:
        path.unlink()
        path.mkdir()
        return "new-token"

    client.authenticate = authenticate

    assert main(["--config", str(path)], client=client, now=NOW) == 1

    captured = capsys.readouterr()
    assert "Your access token is: new-token" in captured.out
    assert "Error: could not write config" in captured.err
    assert client.fetch_calls == []


def test_failure_is_reported_once(capsys, fake_client):
    assert main([], client=fake_client, now=NOW) == 1

    err = capsys.readouterr().err
    assert "run_failed" not in err
    assert err.count("Error:") == 1
