"""Session bootstrap for the Zermelo API.

Turns resolved credentials into a Session. Credentials holding an auth code
are exchanged once for a durable access token; when the code came from a
config file the token is written back so later runs skip the exchange.
"""

from typing import TYPE_CHECKING, Callable

from src.zermelo_cli.config_file import PersistedConfig, write_config
from src.zermelo_cli.errors import ConfigWriteError
from src.zermelo_cli.logging import get_logger
from src.zermelo_cli.models import (
    ConfigDerivedPending,
    Credentials,
    DirectAuthCode,
    Session,
)

if TYPE_CHECKING:
    from src.zermelo_cli.client import ZermeloClient

logger = get_logger(__name__)


def needs_bootstrap(credentials: Credentials) -> bool:
    """Return True if the credentials carry an auth code instead of a token."""
    return isinstance(credentials, (ConfigDerivedPending, DirectAuthCode))


def open_session(
    credentials: Credentials,
    client: "ZermeloClient",
    announce: Callable[[str], None] = print,
) -> Session:
    """Build the Session for ``credentials``, bootstrapping when required.

    Args:
        credentials: Output of resolve_credentials().
        client: Object with authenticate() and construct_session(), usually a
            ZermeloClient.
        announce: Receives the user-facing lines reporting a new token.

    Returns:
        Session authorizing the appointment fetch.

    Raises:
        AuthenticationError: If the auth code exchange fails. Nothing is written.
        ConfigWriteError: If the new token cannot be stored. The session is
            attached to the error.
    """
    if not needs_bootstrap(credentials):
        logger.debug("session_opened", type="existing_token", school=credentials.school)
        return client.construct_session(credentials.school, credentials.access_token)

    access_token = client.authenticate(credentials.school, credentials.auth_code)
    session = client.construct_session(credentials.school, access_token)
    logger.info("session_opened", type="bootstrapped", school=session.school)

    announce(f"Your access token is: {session.access_token}")

    if isinstance(credentials, ConfigDerivedPending):
        announce("It will be stored in your config.")
        new_config = PersistedConfig(
            school=session.school,
            access_token=session.access_token,
            temp=None,
        )
        try:
            write_config(new_config, credentials.config_path)
        except ConfigWriteError as e:
            e.session = session
            raise
    else:
        announce("You might want to store it somewhere.")

    return session
