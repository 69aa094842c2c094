"""
Syslog message model.
Parses RFC 3164 lines, mutates them safely, and converts them back to syslog
text or to flat JSON documents (including CEE ``@cee:`` structured bodies).
"""

from .content import CEE_MARKER, Content, ContentMode, classify_content
from .errors import (
    EncodingError,
    InvalidEnumValue,
    MalformedJSON,
    ParseError,
    SyslogError,
    TypeMismatch,
)
from .parser import Parser, parse_bytes
from .priority import Facility, Priority, Severity
from .schema import validate_export
from .syslog_msg import SyslogMsg
from .tag import Tag
from .timestamps import BSDFormat, RFC3339Format

__all__ = [
    "BSDFormat",
    "CEE_MARKER",
    "Content",
    "ContentMode",
    "EncodingError",
    "Facility",
    "InvalidEnumValue",
    "MalformedJSON",
    "ParseError",
    "RFC3339Format",
    "Parser",
    "Priority",
    "Severity",
    "SyslogError",
    "SyslogMsg",
    "Tag",
    "TypeMismatch",
    "classify_content",
    "parse_bytes",
    "validate_export",
]
