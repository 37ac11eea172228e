"""Appointment rendering.

format_appointment() builds the text block for one appointment; Printer
filters appointments and writes each block to a terminal stream in its
classified color.

Block layout (only lines for present fields are emitted):

    #2-3 9:30 - 11:10
    Subjects: wisb
    Teachers: abc
    Locations: 104
    Groups: 5v.wisb1
    ! Bring your calculator
"""

import sys
from datetime import datetime, timezone
from typing import Iterable, TextIO

from src.zermelo_cli.classify import Color, classify
from src.zermelo_cli.errors import RenderError
from src.zermelo_cli.logging import get_logger
from src.zermelo_cli.models import Appointment

logger = get_logger(__name__)

# ANSI SGR sequences
RESET = "\x1b[0m"
ANSI_FOREGROUND: dict[Color, str] = {
    Color.RED: "\x1b[31m",
    Color.YELLOW: "\x1b[33m",
    Color.WHITE: "\x1b[37m",
}


def format_clock(timestamp: int) -> str:
    """Render an epoch timestamp as H:MM.

    The hour is the UTC hour plus one; this is how the schedule has always
    been displayed and is not a timezone conversion.
    """
    time = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return f"{time.hour + 1}:{time.minute:02d}"


def _format_header(appointment: Appointment) -> str | None:
    header = ""
    if appointment.start_time_slot is not None:
        header += f"#{appointment.start_time_slot}"
        end_slot = appointment.end_time_slot
        if end_slot is not None and end_slot != appointment.start_time_slot:
            header += f"-{end_slot}"

    if appointment.start is not None:
        header += f" {format_clock(appointment.start)}"
        if appointment.end is not None:
            header += f" - {format_clock(appointment.end)}"
    elif appointment.start_time_slot is None:
        return None

    return header


def format_appointment(appointment: Appointment) -> str:
    """Build the multi-line text block for one appointment.

    Every line, including the last, ends with a newline. An appointment
    without any displayable field gives an empty string.
    """
    lines: list[str] = []

    header = _format_header(appointment)
    if header is not None:
        lines.append(header)

    for label, values in (
        ("Subjects", appointment.subjects),
        ("Teachers", appointment.teachers),
        ("Locations", appointment.locations),
        ("Groups", appointment.groups),
    ):
        if values:
            lines.append(f"{label}: {', '.join(values)}")

    if appointment.remark:
        remark = appointment.remark.replace("\n", " ")
        lines.append(f"! {remark}")

    return "".join(f"{line}\n" for line in lines)


class ColorStream:
    """Text stream that can switch its foreground color."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def reset(self) -> None:
        self.stream.write(RESET)

    def set_color(self, color: Color) -> None:
        self.stream.write(ANSI_FOREGROUND[color])

    def write(self, text: str) -> None:
        self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()


class Printer:
    """Writes visible appointments to a ColorStream.

    Args:
        hide_cancelled: Skip cancelled appointments.
        show_invalid: Include invalid appointments (shown in red).
        out: Destination stream; defaults to stdout with colors.
    """

    def __init__(
        self,
        hide_cancelled: bool = False,
        show_invalid: bool = False,
        out: ColorStream | None = None,
    ) -> None:
        self.hide_cancelled = hide_cancelled
        self.show_invalid = show_invalid
        self.out = out or ColorStream(sys.stdout)

    def print_appointment(self, appointment: Appointment) -> bool:
        """Write one appointment if it is visible.

        Returns:
            True if the appointment was written, False if it was filtered out.

        Raises:
            RenderError: If setting the color or writing fails.
        """
        classification = classify(appointment, self.hide_cancelled, self.show_invalid)
        if not classification.visible:
            return False

        block = format_appointment(appointment)
        try:
            self.out.reset()
            self.out.set_color(classification.color)
            # Blank line between appointments
            self.out.write(block + "\n")
        except (OSError, ValueError) as e:
            raise RenderError(f"could not print appointment: {e}") from e
        return True

    def print_all(self, appointments: Iterable[Appointment]) -> int:
        """Print every appointment, skipping ones that fail to render.

        Returns:
            Number of appointments written.
        """
        printed = 0
        for appointment in appointments:
            try:
                if self.print_appointment(appointment):
                    printed += 1
            except RenderError as e:
                logger.warning("appointment_render_failed", error=e.message)

        try:
            self.out.reset()
            self.out.flush()
        except (OSError, ValueError) as e:
            logger.warning("terminal_reset_failed", error=str(e))

        logger.debug("appointments_printed", printed=printed)
        return printed
