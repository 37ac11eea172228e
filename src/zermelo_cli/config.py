"""Runtime settings loaded from environment variables.

These are settings of the tool itself (API location, timeouts, logging).
The user's school and credentials live in the persisted config document,
see config_file.py.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class CliSettings(BaseSettings):
    """zermelo-cli settings loaded from environment variables.

    Settings are loaded from ZERMELO_* environment variables with sensible
    defaults. For local development, create a .env file in the project root.
    """

    # Zermelo portal API, one host per school
    api_url: str = Field(
        default="https://{school}.zportal.nl/api/v3",
        description="Zermelo API base URL; {school} is replaced by the school identifier",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for each request to the Zermelo API",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "ZERMELO_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_settings: CliSettings | None = None


def get_settings() -> CliSettings:
    """Get the settings singleton.

    Returns:
        CliSettings: Settings instance
    """
    global _settings
    if _settings is None:
        _settings = CliSettings()
    return _settings
