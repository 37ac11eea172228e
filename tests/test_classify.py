from __future__ import annotations

from itertools import product

import pytest

from src.zermelo_cli.classify import Color, classify, classify_color, is_visible
from src.zermelo_cli.models import Appointment, AppointmentType


@pytest.mark.parametrize(
    "appointment_type, changed, cancelled, invalid",
    list(product(["exam", "lesson", None], [None, "modified", "new", "moved"], [False, True], [False, True])),
)
def test_color_table_is_total(appointment_type, changed, cancelled, invalid):
    fields = {"type": appointment_type, "cancelled": cancelled, "valid": not invalid}
    if changed is not None:
        fields[changed] = True
    appointment = Appointment.model_validate(fields)

    if cancelled or invalid:
        expected = Color.RED
    elif appointment_type == "exam" or changed is not None:
        expected = Color.YELLOW
    else:
        expected = Color.WHITE

    assert classify_color(appointment) is expected


def test_absent_flags_are_white():
    assert classify_color(Appointment()) is Color.WHITE


def test_false_flags_do_not_color():
    appointment = Appointment(modified=False, new=False, moved=False, cancelled=False, valid=True)

    assert classify_color(appointment) is Color.WHITE


@pytest.mark.parametrize("hide_cancelled", [False, True])
def test_cancelled_hidden_only_when_requested(hide_cancelled):
    appointment = Appointment(cancelled=True, valid=True)

    assert is_visible(appointment, hide_cancelled=hide_cancelled) is not hide_cancelled


@pytest.mark.parametrize("show_invalid", [False, True])
def test_invalid_shown_only_when_requested(show_invalid):
    appointment = Appointment(valid=False)

    assert is_visible(appointment, show_invalid=show_invalid) is show_invalid


def test_absent_valid_is_not_invalid():
    assert is_visible(Appointment(), hide_cancelled=True, show_invalid=False)


def test_classify_combines_visibility_and_color():
    result = classify(Appointment(cancelled=True), hide_cancelled=True)

    assert result.visible is False
    assert result.color is Color.RED


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("exam", AppointmentType.EXAM),
        ("EXAM", AppointmentType.EXAM),
        ("lesson", AppointmentType.LESSON),
        ("talk", AppointmentType.TALK),
        ("something-new", AppointmentType.OTHER),
        (None, AppointmentType.OTHER),
    ],
)
def test_appointment_type_parse(raw, expected):
    assert AppointmentType.parse(raw) is expected
