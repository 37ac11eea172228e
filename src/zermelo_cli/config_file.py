"""Persisted config document (TOML).

Layout:

    school = "myschool"
    access_token = "abc123"

or, before the first run:

    school = "myschool"

    [temp]
    auth_code = "123 456 789 012"

After the auth code has been exchanged the file is rewritten with
access_token set and the [temp] table dropped.
"""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, ValidationError

from src.zermelo_cli.errors import ConfigParseError, ConfigReadError, ConfigWriteError
from src.zermelo_cli.logging import get_logger

logger = get_logger(__name__)


class TempCredentials(BaseModel):
    """Temporary credentials awaiting exchange."""

    auth_code: str


class PersistedConfig(BaseModel):
    """User config stored on disk between runs."""

    school: str
    access_token: str | None = None
    temp: TempCredentials | None = None


def load_config(path: str | Path) -> PersistedConfig:
    """Read and validate the config document at ``path``.

    Raises:
        ConfigReadError: If the file cannot be opened or read.
        ConfigParseError: If the file is not TOML or lacks required fields.
    """
    path = Path(path)
    try:
        with path.open("rb") as f:
            raw = tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigParseError(f"could not parse config {path}: {e}") from e
    except OSError as e:
        raise ConfigReadError(f"could not read config {path}: {e.strerror or e}") from e

    try:
        config = PersistedConfig.model_validate(raw)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ConfigParseError(f"invalid config {path}: bad or missing field(s) {fields}") from e

    logger.debug(
        "config_loaded",
        path=str(path),
        has_access_token=config.access_token is not None,
        has_temp=config.temp is not None,
    )
    return config


def write_config(config: PersistedConfig, path: str | Path) -> None:
    """Serialize ``config`` to TOML and overwrite ``path``.

    Absent optional fields are left out of the document.

    Raises:
        ConfigWriteError: If the file cannot be written.
    """
    path = Path(path)
    document = config.model_dump(exclude_none=True)
    try:
        with path.open("wb") as f:
            tomli_w.dump(document, f)
    except OSError as e:
        raise ConfigWriteError(f"could not write config {path}: {e.strerror or e}") from e

    logger.info("config_written", path=str(path))
