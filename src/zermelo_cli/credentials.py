"""Credential resolution.

Decides which way the session is obtained from the command line inputs.
The first matching source wins: config file, then explicit auth code, then
explicit access token.
"""

from pathlib import Path

from src.zermelo_cli.config_file import load_config
from src.zermelo_cli.errors import (
    InsufficientArgumentsError,
    MissingCredentialError,
    MissingSchoolError,
)
from src.zermelo_cli.logging import get_logger
from src.zermelo_cli.models import (
    ConfigDerived,
    ConfigDerivedPending,
    Credentials,
    DirectAccessToken,
    DirectAuthCode,
)

logger = get_logger(__name__)

_SCHOOL_NOTE = "use `--school [your_school]` to specify your school."


def resolve_credentials(
    config_path: str | Path | None = None,
    auth_code: str | None = None,
    access_token: str | None = None,
    school: str | None = None,
) -> Credentials:
    """Select exactly one credential variant.

    Args:
        config_path: Path of the persisted config document.
        auth_code: Auth code given on the command line.
        access_token: Access token given on the command line.
        school: School given on the command line; ignored when a config
            file is used.

    Returns:
        One of ConfigDerived, ConfigDerivedPending, DirectAuthCode,
        DirectAccessToken.

    Raises:
        ConfigReadError, ConfigParseError: If the config file is unusable.
        MissingCredentialError: Config has neither access token nor auth code.
        MissingSchoolError: Auth code or access token given without school.
        InsufficientArgumentsError: No credential source given at all.
    """
    if config_path is not None:
        config_path = Path(config_path)
        config = load_config(config_path)

        if config.access_token is not None:
            logger.debug("credentials_resolved", source="config", kind="access_token")
            return ConfigDerived(
                school=config.school,
                access_token=config.access_token,
                config_path=config_path,
            )
        if config.temp is not None:
            logger.debug("credentials_resolved", source="config", kind="auth_code")
            return ConfigDerivedPending(
                school=config.school,
                auth_code=config.temp.auth_code,
                config_path=config_path,
            )
        raise MissingCredentialError(
            "access token and authentication code not present in config!",
            notes=(
                "set access token or authentication code.",
                '`access_token = "your_token"` or',
                '```\n[temp]\nauth_code = "your_auth_code"\n```',
            ),
        )

    if auth_code is not None:
        if school is None:
            raise MissingSchoolError("authenticating without school!", notes=(_SCHOOL_NOTE,))
        logger.debug("credentials_resolved", source="arguments", kind="auth_code")
        return DirectAuthCode(school=school, auth_code=auth_code)

    if access_token is not None:
        if school is None:
            raise MissingSchoolError(
                "retrieving schedule without school!", notes=(_SCHOOL_NOTE,)
            )
        logger.debug("credentials_resolved", source="arguments", kind="access_token")
        return DirectAccessToken(school=school, access_token=access_token)

    raise InsufficientArgumentsError(
        "not enough arguments specified.", notes=("use `--help` to get some help.",)
    )
