"""
SyslogMsg: one RFC 3164 message, its mutators, and its two output shapes
(the syslog text line and a flat JSON export document).
"""
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union

from .content import CEE_MARKER, Content, ContentMode, classify_content
from .errors import MalformedJSON, TypeMismatch
from .jsoncodec import JSONObject, decode_object, encode
from .priority import Priority
from .schema import validate_export
from .tag import Tag
from .timestamps import DEFAULT_FORMAT, BSDFormat, RFC3339Format, format_instant

logger = logging.getLogger(__name__)

# Zero value for records that were never given a timestamp
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass(eq=False)
class SyslogMsg:
    """
    A parsed (or hand-built) RFC 3164 message.

    ``content`` is the body exactly as received, leading separator included;
    for CEE messages it is the text after ``cee_marker``. ``structured``
    holds the decoded body fields and any fields added by callers.
    ``body_deferred`` marks a JSON or CEE body kept undecoded in ``content``
    (see ``suppress_json_reparse``). It is decoded on demand and is left
    alone by promotion, so a promoted plain body is never decoded as JSON.

    Every mutator and both serializers hold ``lock``. It is reentrant, so
    callers sharing a record between threads can hold it across several calls.
    """

    priority: Priority = field(default_factory=Priority)
    timestamp: datetime = ZERO_TIME
    timestamp_format: Union[RFC3339Format, BSDFormat] = DEFAULT_FORMAT
    host: str = ""
    tag: Tag = field(default_factory=Tag)
    content: str = ""
    structured: JSONObject = field(default_factory=dict)
    mode: ContentMode = ContentMode.PLAIN
    cee_marker: str = ""
    suppress_json_reparse: bool = False
    body_deferred: bool = False
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @classmethod
    def from_bytes(cls, data: bytes, suppress_json_reparse: bool = False) -> "SyslogMsg":
        """Parse an RFC 3164 line. See ``Parser.parse_bytes``."""
        from .parser import Parser

        return Parser(suppress_json_reparse=suppress_json_reparse).parse_bytes(data)

    @property
    def is_json(self) -> bool:
        return self.mode is ContentMode.JSON

    @property
    def is_cee(self) -> bool:
        return self.mode is ContentMode.CEE

    # -----------------------------------------------------------------------
    # Mutators
    # -----------------------------------------------------------------------

    def set_facility(self, facility) -> None:
        with self.lock:
            self.priority.set_facility(facility)

    def set_severity(self, severity) -> None:
        with self.lock:
            self.priority.set_severity(severity)

    def set_timestamp(self, timestamp: datetime) -> None:
        with self.lock:
            self.timestamp = timestamp

    def set_program(self, program: str) -> None:
        with self.lock:
            self.tag.program = program

    def set_pid(self, pid: str) -> None:
        with self.lock:
            self.tag.pid = pid

    def set_host(self, host: str) -> None:
        with self.lock:
            self.host = host

    def set_content(self, text: str) -> None:
        """
        Replace the body, classifying it as plain, JSON or CEE.

        Raises:
            MalformedJSON: a CEE body that does not decode. The raw text is
                still committed as a plain body so the record stays inspectable.
        """
        with self.lock:
            try:
                content = classify_content(text, parse_json=not self.suppress_json_reparse)
            except MalformedJSON as e:
                self._apply_content(e.content)
                raise
            self._apply_content(content)

    def add_tag(self, key: str, value: Any) -> None:
        """Set ``key`` in the structured values, overwriting any existing value."""
        with self.lock:
            self.structured[key] = value

    def add_to_tag_array(self, key: str, value: Any) -> None:
        """
        Append ``value`` to the array at ``key``, creating the array if needed.

        The first array tag added to a record that is not yet CEE promotes it,
        copying the body (minus its leading separator) into ``msg``.

        Raises:
            TypeMismatch: ``key`` holds something other than an array; the
                record is left unchanged.
        """
        with self.lock:
            current = self.structured.get(key, [])
            if not isinstance(current, list):
                raise TypeMismatch(f"{key!r} key in message is not an array")

            values = dict(self.structured)
            values[key] = current + [value]
            if self.mode is ContentMode.CEE:
                self.structured = values
            else:
                self._commit_promotion(self._promoted(values, self.content[1:]))

    def promote_to_cee(self, msg: Optional[str] = None) -> bool:
        """
        Switch the record to CEE output. Plain records keep their text under
        ``msg`` (``content`` left-trimmed, unless ``msg`` is given); JSON
        records already carry their body as structured values.

        Returns:
            False if the record was already CEE.
        """
        with self.lock:
            if self.mode is ContentMode.CEE:
                return False
            if msg is None:
                msg = self.content.lstrip(" ")
            self._commit_promotion(self._promoted(dict(self.structured), msg))
            return True

    # -----------------------------------------------------------------------
    # Output
    # -----------------------------------------------------------------------

    def to_text(self) -> str:
        """
        Render the record as an RFC 3164 line terminated by a newline.

        Non-empty structured values on a record that is not already CEE
        promote it first (see ``promote_to_cee``); repeated calls give the
        same output.

        Raises:
            EncodingError: structured values that cannot be encoded. The
                record is left unchanged.
            MalformedJSON: a deferred JSON or CEE body that has to be merged with
                added values but does not decode.
        """
        with self.lock:
            if self.mode is ContentMode.JSON and not self.body_deferred:
                body = encode(self.structured)
            elif self.structured:
                values = self._promoted(dict(self.structured), self.content.lstrip(" "))
                body = encode(self._with_raw_body(values))
                if self.mode is not ContentMode.CEE:
                    self._commit_promotion(values)
            else:
                body = self.content

            return "<{}>{} {} {}{}{}\n".format(
                self.priority,
                self.timestamp_format.render(self.timestamp),
                self.host,
                self.tag,
                self.cee_marker,
                body,
            )

    def to_bytes(self) -> bytes:
        return self.to_text().encode("utf-8", "surrogateescape")

    def to_dict(self) -> JSONObject:
        """
        Build the flat export mapping: body fields, then structured values,
        then the ``syslog_`` prefixed metadata keys, which always win.

        Raises:
            MalformedJSON: a deferred CEE body that does not decode.
        """
        with self.lock:
            document = {}
            if self.body_deferred and self.mode is ContentMode.CEE:
                document.update(decode_object(self.content))
            document.update(self.structured)

            document["syslog_time"] = format_instant(self.timestamp)
            document["syslog_host"] = self.host
            document["syslog_tag"] = self.tag.render()
            document["syslog_programname"] = self.tag.program
            document["syslog_pid"] = self.tag.pid
            document["syslog_facilitytext"] = self.priority.facility_text()
            document["syslog_severitytext"] = self.priority.severity_text()

            if self.mode is not ContentMode.CEE:
                document["syslog_content"] = self.content
            return document

    def to_json(self, validate: bool = False) -> bytes:
        """
        Export the record as a JSON document. Syslog fields are prefixed with
        ``syslog_`` so they cannot collide with fields from the body.

        Raises:
            MalformedJSON: see ``to_dict``.
            EncodingError: values that cannot be encoded, or (with
                ``validate``) a document that fails the export schema.
        """
        document = self.to_dict()
        if validate:
            validate_export(document)
        return encode(document).encode("utf-8", "surrogateescape")

    def __str__(self) -> str:
        return self.to_text()

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    # -----------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------

    def _apply_content(self, content: Content) -> None:
        self.content = content.raw
        self.structured = content.structured
        self.mode = content.mode
        self.cee_marker = content.cee_marker
        self.body_deferred = content.deferred

    def _promoted(self, values: JSONObject, msg: str) -> JSONObject:
        # Only plain bodies need copying; JSON and CEE bodies are already values
        if self.mode is ContentMode.PLAIN:
            values["msg"] = msg
        return values

    def _with_raw_body(self, values: JSONObject) -> JSONObject:
        # A deferred body was never decoded into structured; merge it underneath
        if self.body_deferred:
            merged = decode_object(self.content)
            merged.update(values)
            return merged
        return values

    def _commit_promotion(self, values: JSONObject) -> None:
        previous = self.mode
        self.structured = values
        self.mode = ContentMode.CEE
        self.cee_marker = CEE_MARKER
        logger.debug("Message promoted to CEE", extra={
            'previous_mode': previous.value,
            'program': self.tag.program,
            'keys': sorted(values),
        })
