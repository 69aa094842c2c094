"""
RFC 3164 line parser.

Splits ``<pri>timestamp host program[pid]: content`` into a SyslogMsg,
remembering the exact timestamp layout and tag shape so the message can be
written back out unchanged.
"""
import logging
import re
from datetime import datetime
from typing import Optional

from .content import classify_content
from .errors import InvalidEnumValue, MalformedJSON, ParseError
from .priority import Priority
from .syslog_msg import SyslogMsg
from .tag import Tag
from .timestamps import match_timestamp

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_PRI_RE = re.compile(r"<(\d{1,3})>")

_HOST_RE = re.compile(
    r" (?P<host>\S+)"                   # hostname
    r"(?: |$)"                          # separator before the tag
)

_TAG_RE = re.compile(
    r"(?P<program>[^\s\[:]*)"           # program name
    r"(?:\[(?P<pid>[^\]\s]*)\])?"       # optional [pid]
    r"(?P<colon>:)?"                    # optional colon
)


class Parser:
    """
    Parse RFC 3164 lines into SyslogMsg records.

    Args:
        suppress_json_reparse: leave CEE bodies undecoded; they are decoded
            when the message is exported instead.
        now: reference time for inferring the year of year-less timestamps.
    """

    def __init__(self, suppress_json_reparse: bool = False, now: Optional[datetime] = None):
        self.suppress_json_reparse = suppress_json_reparse
        self.now = now

    def parse_bytes(self, data: bytes) -> SyslogMsg:
        # surrogateescape keeps undecodable bytes so to_bytes() can restore them
        return self.parse(data.decode("utf-8", "surrogateescape"))

    def parse(self, line: str) -> SyslogMsg:
        """
        Raises:
            ParseError: the line has no valid priority, timestamp or host.
            MalformedJSON: a CEE body that is not a JSON object.
        """
        line = line.rstrip("\r\n")

        m = _PRI_RE.match(line)
        if not m:
            raise ParseError(f"missing priority: {line[:40]!r}")
        try:
            priority = Priority.from_value(int(m.group(1)))
        except InvalidEnumValue as e:
            raise ParseError(str(e)) from e

        stamp = match_timestamp(line, m.end(), now=self.now)
        if stamp is None:
            raise ParseError(f"unrecognized timestamp: {line[m.end():m.end() + 32]!r}")
        timestamp, timestamp_format, pos = stamp

        m = _HOST_RE.match(line, pos)
        if not m:
            raise ParseError(f"missing hostname: {line[:60]!r}")
        host = m.group("host")

        m = _TAG_RE.match(line, m.end())
        tag = Tag(
            program=m.group("program"),
            pid=m.group("pid") or "",
            has_colon=m.group("colon") is not None,
        )

        try:
            content = classify_content(line[m.end():], parse_json=not self.suppress_json_reparse)
        except MalformedJSON:
            logger.debug("Rejected line with malformed CEE body", extra={'host': host, 'program': tag.program})
            raise

        return SyslogMsg(
            priority=priority,
            timestamp=timestamp,
            timestamp_format=timestamp_format,
            host=host,
            tag=tag,
            content=content.raw,
            structured=content.structured,
            mode=content.mode,
            cee_marker=content.cee_marker,
            suppress_json_reparse=self.suppress_json_reparse,
            body_deferred=content.deferred,
        )


def parse_bytes(data: bytes, suppress_json_reparse: bool = False) -> SyslogMsg:
    return Parser(suppress_json_reparse=suppress_json_reparse).parse_bytes(data)
