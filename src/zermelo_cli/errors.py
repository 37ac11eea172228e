"""Error hierarchy for schedule retrieval failures.

Every failure the CLI can report derives from ZermeloCliError. The command
line entry point catches the base class, prints the message (and any notes)
to stderr and exits with status 1. Nothing in this hierarchy is retried.

Example usage:
    try:
        credentials = resolve_credentials(config_path=args.config)
    except ZermeloCliError as e:
        print(f"Error: {e}", file=sys.stderr)
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.zermelo_cli.models import Session


class ZermeloCliError(Exception):
    """Base exception for all zermelo-cli errors.

    Args:
        message: Human-readable description of the failure.
        notes: Optional hint lines shown below the message.
    """

    def __init__(self, message: str, notes: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.notes = tuple(notes)


class ConfigError(ZermeloCliError):
    """Problem with the persisted config document."""

    pass


class ConfigReadError(ConfigError):
    """Config file could not be opened or read."""

    pass


class ConfigParseError(ConfigError):
    """Config file is not valid TOML or is missing required fields."""

    pass


class ConfigWriteError(ConfigError):
    """Config file could not be rewritten after a successful bootstrap.

    The session obtained before the write failed is still valid for this run
    and is attached as ``session``.
    """

    def __init__(
        self,
        message: str,
        notes: tuple[str, ...] = (),
        session: "Session | None" = None,
    ) -> None:
        super().__init__(message, notes)
        self.session = session


class CredentialError(ZermeloCliError):
    """The given arguments do not describe a usable set of credentials."""

    pass


class MissingCredentialError(CredentialError):
    """Config file has neither an access token nor a temporary auth code."""

    pass


class MissingSchoolError(CredentialError):
    """An auth code or access token was given without a school."""

    pass


class InsufficientArgumentsError(CredentialError):
    """No config file, auth code or access token was given."""

    pass


class AuthenticationError(ZermeloCliError):
    """Exchanging the auth code for an access token failed.

    Wrong or already used codes won't be fixed by trying again.
    """

    pass


class DateParseError(ZermeloCliError):
    """A --future/--past day count is not an integer."""

    pass


class FetchError(ZermeloCliError):
    """Retrieving appointments from the schedule service failed."""

    pass


class RenderError(ZermeloCliError):
    """Setting the terminal color or writing one appointment failed.

    Raised per appointment; the printer skips the appointment and continues.
    """

    pass
