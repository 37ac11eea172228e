"""Day window computation.

A schedule is always fetched for one full local day: 00:00:00 up to and
including 23:59:59. Other days are reached by shifting today's window by a
whole number of 86400-second days.
"""

from dataclasses import dataclass
from datetime import datetime

from src.zermelo_cli.errors import DateParseError

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class DateRange:
    start: int  # epoch seconds, local midnight
    end: int  # epoch seconds, local 23:59:59


def _parse_days(value: str, label: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise DateParseError(f"could not parse days in the {label}: {value!r}")


def resolve_day_offset(
    tomorrow: bool = False,
    yesterday: bool = False,
    future: str | None = None,
    past: str | None = None,
) -> int:
    """Turn the day selectors into a signed day offset.

    Selectors are checked in order tomorrow, yesterday, future, past; the
    first one given wins and the rest are ignored.

    Raises:
        DateParseError: If the selected future/past value is not an integer.
    """
    if tomorrow:
        return 1
    if yesterday:
        return -1
    if future is not None:
        return _parse_days(future, "future")
    if past is not None:
        return -_parse_days(past, "past")
    return 0


def compute_date_range(now: datetime, offset_days: int = 0) -> DateRange:
    """Return the day window for ``now``'s local day shifted by ``offset_days``.

    A naive ``now`` is taken as local time. An aware ``now`` is converted to
    naive local time so the UTC offset is looked up at each boundary, not
    carried over from ``now``.
    """
    local = now.astimezone().replace(tzinfo=None) if now.tzinfo is not None else now
    start = local.replace(hour=0, minute=0, second=0, microsecond=0)
    end = local.replace(hour=23, minute=59, second=59, microsecond=0)

    shift = offset_days * SECONDS_PER_DAY
    return DateRange(
        start=int(start.timestamp()) + shift,
        end=int(end.timestamp()) + shift,
    )
