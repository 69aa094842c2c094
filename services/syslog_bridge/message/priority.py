"""
Syslog priority: facility and severity codes and their text renderings.
"""
from dataclasses import dataclass
from enum import IntEnum

from .errors import InvalidEnumValue

# Highest legal PRI value: facility local7 (23) * 8 + severity debug (7)
MAX_PRIORITY = 191


class Facility(IntEnum):
    KERN = 0
    USER = 1
    MAIL = 2
    DAEMON = 3
    AUTH = 4
    SYSLOG = 5
    LPR = 6
    NEWS = 7
    UUCP = 8
    CRON = 9
    AUTHPRIV = 10
    FTP = 11
    NTP = 12
    AUDIT = 13
    ALERT = 14
    CLOCK = 15
    LOCAL0 = 16
    LOCAL1 = 17
    LOCAL2 = 18
    LOCAL3 = 19
    LOCAL4 = 20
    LOCAL5 = 21
    LOCAL6 = 22
    LOCAL7 = 23

    @property
    def text(self) -> str:
        return self.name.lower()


class Severity(IntEnum):
    EMERG = 0
    ALERT = 1
    CRIT = 2
    ERR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @property
    def text(self) -> str:
        return self.name.lower()


def _coerce(enum_cls, value):
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        raise InvalidEnumValue(f"{value!r} is not a valid {enum_cls.__name__.lower()}") from None


@dataclass
class Priority:
    """The PRI part of a syslog message."""

    facility: Facility = Facility.KERN
    severity: Severity = Severity.EMERG

    @classmethod
    def from_value(cls, value: int) -> "Priority":
        if not 0 <= value <= MAX_PRIORITY:
            raise InvalidEnumValue(f"priority {value} is outside 0..{MAX_PRIORITY}")
        return cls(Facility(value >> 3), Severity(value & 0x07))

    @property
    def value(self) -> int:
        return (int(self.facility) << 3) | int(self.severity)

    def set_facility(self, facility) -> None:
        self.facility = _coerce(Facility, facility)

    def set_severity(self, severity) -> None:
        self.severity = _coerce(Severity, severity)

    def facility_text(self) -> str:
        return self.facility.text

    def severity_text(self) -> str:
        return self.severity.text

    def render(self) -> str:
        return str(self.value)

    def __str__(self) -> str:
        return self.render()
