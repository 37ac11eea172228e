from __future__ import annotations

import logging

import pytest
import structlog

from src.zermelo_cli import config
from src.zermelo_cli.errors import AuthenticationError, FetchError
from src.zermelo_cli.models import Appointment, Session


class FakeClient:
    """In-memory stand-in for ZermeloClient."""

    def __init__(
        self,
        token: str = "fresh-token",
        appointments: list[Appointment] | None = None,
        auth_error: AuthenticationError | None = None,
        fetch_error: FetchError | None = None,
    ) -> None:
        self.token = token
        self.appointments = appointments or []
        self.auth_error = auth_error
        self.fetch_error = fetch_error
        self.auth_calls: list[tuple[str, str]] = []
        self.fetch_calls: list[tuple[Session, int, int]] = []

    def authenticate(self, school: str, auth_code: str) -> str:
        self.auth_calls.append((school, auth_code))
        if self.auth_error is not None:
            raise self.auth_error
        return self.token

    def construct_session(self, school: str, access_token: str) -> Session:
        return Session(school=school, access_token=access_token)

    def fetch_appointments(self, session: Session, start: int, end: int) -> list[Appointment]:
        self.fetch_calls.append((session, start, end))
        if self.fetch_error is not None:
            raise self.fetch_error
        return list(self.appointments)


@pytest.fixture
def make_client():
    return FakeClient


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def write_config(tmp_path):
    """Write a TOML config file and return its path."""

    def _write(text: str, name: str = "zermelo.toml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _isolate_settings_and_logging(monkeypatch):
    monkeypatch.setattr(config, "_settings", None)
    yield
    # Drop handlers bound to pytest's capture streams
    structlog.reset_defaults()
    logging.getLogger().handlers = []
