"""Show your Zermelo schedule in the terminal.

Run with: python -m src.zermelo_cli --config ~/.zermelo.toml
First run: python -m src.zermelo_cli --auth "123 456 789 012" --school myschool
Tomorrow:  python -m src.zermelo_cli --config ~/.zermelo.toml --tomorrow
In 3 days: python -m src.zermelo_cli --config ~/.zermelo.toml --future 3

Appointments are colored: red for cancelled or invalid, yellow for exams and
modified, new or moved appointments, white otherwise.

Exit codes:
  0 = success (schedule on stdout, possibly empty)
  1 = error (message on stderr)
"""

import argparse
import sys
from datetime import datetime
from typing import Sequence

from pydantic import ValidationError

from src.zermelo_cli import __version__
from src.zermelo_cli.client import ZermeloClient
from src.zermelo_cli.config import get_settings
from src.zermelo_cli.credentials import resolve_credentials
from src.zermelo_cli.dates import compute_date_range, resolve_day_offset
from src.zermelo_cli.errors import ZermeloCliError
from src.zermelo_cli.logging import get_logger, setup_logging
from src.zermelo_cli.printer import Printer
from src.zermelo_cli.session import open_session

logger = get_logger(__name__)

NO_APPOINTMENTS_MESSAGE = "No appointments found. Go have some fun!"


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that exits with status 1 on usage errors."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(1, f"Error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = ArgumentParser(
        prog="zermelo-cli",
        description="A command line application that shows you your schedule from Zermelo.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-u",
        "--auth",
        metavar="CODE",
        help=(
            "Authenticate with your code found in the Zermelo Portal "
            "(Koppelingen -> Koppel App). School has to be set."
        ),
    )
    parser.add_argument(
        "-a",
        "--access_token",
        metavar="TOKEN",
        help="The access token retrieved with your authentication code.",
    )
    parser.add_argument(
        "-s",
        "--school",
        help="The school identifier found in the Zermelo Portal (Koppelingen -> Koppel App).",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        help="The location of the config file.",
    )
    parser.add_argument(
        "--hide_cancelled",
        action="store_true",
        help="Do not display cancelled appointments.",
    )
    parser.add_argument(
        "-i",
        "--show_invalid",
        action="store_true",
        help="Show invalid appointments. These will be displayed in red.",
    )

    day_group = parser.add_argument_group("day selection (first one given wins)")
    day_group.add_argument(
        "-t", "--tomorrow", action="store_true", help="Display tomorrow's schedule."
    )
    day_group.add_argument(
        "-y", "--yesterday", action="store_true", help="Display yesterday's schedule."
    )
    day_group.add_argument(
        "-f", "--future", metavar="N", help="Display schedule from n days in the future."
    )
    day_group.add_argument(
        "-p", "--past", metavar="N", help="Display schedule from n days in the past."
    )
    return parser


def _report(error: ZermeloCliError) -> None:
    """Write an error and its notes to stderr."""
    print(f"Error: {error.message}", file=sys.stderr)
    for note in error.notes:
        print(f"Note: {note}", file=sys.stderr)


def main(
    argv: Sequence[str] | None = None,
    client: ZermeloClient | None = None,
    now: datetime | None = None,
) -> int:
    """Run the CLI and return the process exit code.

    Args:
        argv: Arguments without the program name; defaults to sys.argv[1:].
        client: Schedule client; defaults to a ZermeloClient from settings.
        now: Reference time for the day window; defaults to the current time.
    """
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        print(f"Error: invalid settings: {fields}", file=sys.stderr)
        print("Note: check the ZERMELO_* environment variables and .env file.", file=sys.stderr)
        return 1
    setup_logging(json_output=settings.log_json, log_level=settings.log_level)

    try:
        credentials = resolve_credentials(
            config_path=args.config,
            auth_code=args.auth,
            access_token=args.access_token,
            school=args.school,
        )
        # Validate the day selection before an auth code gets used up
        offset = resolve_day_offset(
            tomorrow=args.tomorrow,
            yesterday=args.yesterday,
            future=args.future,
            past=args.past,
        )

        if client is None:
            client = ZermeloClient()
        session = open_session(credentials, client)

        window = compute_date_range(now or datetime.now(), offset)
        appointments = client.fetch_appointments(session, window.start, window.end)
    except ZermeloCliError as e:
        logger.debug("run_failed", error_type=type(e).__name__, error=e.message)
        _report(e)
        return 1

    if not appointments:
        print(NO_APPOINTMENTS_MESSAGE)
        return 0

    printer = Printer(hide_cancelled=args.hide_cancelled, show_invalid=args.show_invalid)
    printer.print_all(appointments)
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
