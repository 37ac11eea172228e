"""Appointment classification: whether to show it and in which color."""

from dataclasses import dataclass
from enum import Enum

from src.zermelo_cli.models import Appointment, AppointmentType


class Color(str, Enum):
    WHITE = "white"
    YELLOW = "yellow"
    RED = "red"


@dataclass(frozen=True)
class Classification:
    visible: bool
    color: Color


def is_visible(
    appointment: Appointment, hide_cancelled: bool = False, show_invalid: bool = False
) -> bool:
    """Return False for cancelled appointments when hiding them, and for
    invalid appointments unless they are requested."""
    if appointment.cancelled is True and hide_cancelled:
        return False
    if appointment.valid is False and not show_invalid:
        return False
    return True


def classify_color(appointment: Appointment) -> Color:
    """Pick the display color.

    Red (cancelled or invalid) beats yellow (exam, modified, new or moved),
    which beats white.
    """
    if appointment.cancelled is True or appointment.valid is False:
        return Color.RED
    if appointment.kind is AppointmentType.EXAM:
        return Color.YELLOW
    if appointment.modified is True or appointment.new is True or appointment.moved is True:
        return Color.YELLOW
    return Color.WHITE


def classify(
    appointment: Appointment, hide_cancelled: bool = False, show_invalid: bool = False
) -> Classification:
    return Classification(
        visible=is_visible(appointment, hide_cancelled, show_invalid),
        color=classify_color(appointment),
    )
