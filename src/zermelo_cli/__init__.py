"""Zermelo schedule client for the terminal.

Resolves credentials, bootstraps a session with the Zermelo portal API and
prints the day's appointments color-coded by status.
"""

__version__ = "0.3.0"

from src.zermelo_cli.classify import Classification, Color, classify
from src.zermelo_cli.client import ZermeloClient
from src.zermelo_cli.credentials import resolve_credentials
from src.zermelo_cli.dates import DateRange, compute_date_range, resolve_day_offset
from src.zermelo_cli.models import Appointment, AppointmentType, Session
from src.zermelo_cli.printer import Printer, format_appointment
from src.zermelo_cli.session import open_session

__all__ = [
    "Appointment",
    "AppointmentType",
    "Classification",
    "Color",
    "DateRange",
    "Printer",
    "Session",
    "ZermeloClient",
    "classify",
    "compute_date_range",
    "format_appointment",
    "open_session",
    "resolve_credentials",
    "resolve_day_offset",
]
