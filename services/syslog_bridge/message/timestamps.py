"""
Timestamp layouts found in RFC 3164 messages.

Each layout both recognizes a timestamp at the start of a string and renders
a datetime back in exactly the same shape, so a parsed message re-serializes
byte for byte.
"""
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_MONTH_NUMBERS = {name: number for number, name in enumerate(MONTHS, start=1)}

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_RFC3339_RE = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d{1,9}))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2}|[+-]\d{4})"
)

_BSD_RE = re.compile(
    r"(?P<month>" + "|".join(MONTHS) + r") "
    r"(?P<day>[ \d]\d) "
    r"(?:(?P<year>\d{4}) )?"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
)


def _utc(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def _clock(dt: datetime) -> str:
    return f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"


def _offset(dt: datetime, colon: bool) -> str:
    minutes = int(dt.utcoffset().total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    separator = ":" if colon else ""
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


@dataclass(frozen=True)
class RFC3339Format:
    """``2006-01-02T15:04:05.999999-07:00`` and its fraction/offset variants."""

    fraction_digits: int = 6
    # "Z": Z for UTC, otherwise +hh:mm; "colon": always +hh:mm; "compact": +hhmm
    offset_style: str = "colon"

    def render(self, dt: datetime) -> str:
        dt = _utc(dt)
        text = f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}T{_clock(dt)}"
        if self.fraction_digits:
            micros = f"{dt.microsecond:06d}"
            if self.fraction_digits <= 6:
                text += "." + micros[:self.fraction_digits]
            else:
                text += "." + micros + "0" * (self.fraction_digits - 6)
        if self.offset_style == "Z" and not dt.utcoffset():
            return text + "Z"
        return text + _offset(dt, colon=self.offset_style != "compact")


@dataclass(frozen=True)
class BSDFormat:
    """``Jan _2 15:04:05``, optionally with a year after the day."""

    day_padding: str = " "
    with_year: bool = False

    def render(self, dt: datetime) -> str:
        day = f"{dt.day:{self.day_padding}>2}"
        year = f"{dt.year:04d} " if self.with_year else ""
        return f"{MONTHS[dt.month - 1]} {day} {year}{_clock(dt)}"


DEFAULT_FORMAT = RFC3339Format()


def _parse_rfc3339(m) -> Tuple[datetime, RFC3339Format]:
    offset = m.group("offset")
    if offset == "Z":
        tz, style = timezone.utc, "Z"
    else:
        sign = -1 if offset[0] == "-" else 1
        digits = offset[1:].replace(":", "")
        delta = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
        tz = timezone(sign * delta)
        style = "colon" if ":" in offset else "compact"

    fraction = m.group("fraction") or ""
    dt = datetime(
        int(m.group("year")), int(m.group("month")), int(m.group("day")),
        int(m.group("hour")), int(m.group("minute")), int(m.group("second")),
        int(fraction[:6].ljust(6, "0")) if fraction else 0,
        tzinfo=tz,
    )
    return dt, RFC3339Format(fraction_digits=len(fraction), offset_style=style)


def _parse_bsd(m, now: Optional[datetime]) -> Tuple[datetime, BSDFormat]:
    day_text = m.group("day")
    year_text = m.group("year")
    month = _MONTH_NUMBERS[m.group("month")]
    clock = (int(m.group("hour")), int(m.group("minute")), int(m.group("second")))

    if year_text:
        dt = datetime(int(year_text), month, int(day_text), *clock, tzinfo=timezone.utc)
    else:
        # No year on the wire: assume the current one unless that lands in the future
        now = _utc(now or datetime.now(timezone.utc))
        dt = datetime(now.year, month, int(day_text), *clock, tzinfo=timezone.utc)
        if dt > now + timedelta(days=1):
            dt = dt.replace(year=now.year - 1)

    padding = "0" if day_text.startswith("0") else " "
    return dt, BSDFormat(day_padding=padding, with_year=bool(year_text))


def match_timestamp(text: str, pos: int = 0, now: Optional[datetime] = None):
    """
    Recognize a timestamp starting at ``pos``.

    Returns:
        ``(datetime, format, end)`` or None when no layout matches.
    """
    m = _RFC3339_RE.match(text, pos)
    if m:
        try:
            dt, fmt = _parse_rfc3339(m)
        except ValueError:
            return None
        return dt, fmt, m.end()

    m = _BSD_RE.match(text, pos)
    if m:
        try:
            dt, fmt = _parse_bsd(m, now)
        except ValueError:
            return None
        return dt, fmt, m.end()

    return None


def format_instant(dt: datetime) -> str:
    """
    Canonical instant encoding used in JSON exports: RFC 3339 with trailing
    fraction zeros trimmed and ``Z`` for UTC.
    """
    dt = _utc(dt)
    text = f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}T{_clock(dt)}"
    if dt.microsecond:
        text += "." + f"{dt.microsecond:06d}".rstrip("0")
    if not dt.utcoffset():
        return text + "Z"
    return text + _offset(dt, colon=True)
