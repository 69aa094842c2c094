"""
Content classification: decides whether a message body is plain text, a
JSON object, or a CEE (``@cee:``) structured body.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum

from .errors import MalformedJSON
from .jsoncodec import JSONObject, decode_object

logger = logging.getLogger(__name__)

CEE_COOKIE = "@cee:"
CEE_MARKER = " " + CEE_COOKIE


class ContentMode(Enum):
    PLAIN = "plain"
    JSON = "json"
    CEE = "cee"


@dataclass
class Content:
    raw: str
    mode: ContentMode = ContentMode.PLAIN
    structured: JSONObject = field(default_factory=dict)
    cee_marker: str = ""
    # JSON or CEE body left undecoded in raw
    deferred: bool = False


def classify_content(text: str, parse_json: bool = True) -> Content:
    """
    Classify a message body.

    For CEE bodies the marker (any leading spaces plus ``@cee:``) is split off
    into ``cee_marker`` and ``raw`` holds what follows it. With ``parse_json``
    unset, JSON and CEE bodies are left undecoded and marked ``deferred``.

    Raises:
        MalformedJSON: a CEE body that is not a JSON object; ``exc.content``
            holds the whole text as a plain body.
    """
    stripped = text.lstrip(" ")
    if stripped.startswith(CEE_COOKIE):
        marker_end = len(text) - len(stripped) + len(CEE_COOKIE)
        content = Content(
            raw=text[marker_end:],
            mode=ContentMode.CEE,
            cee_marker=text[:marker_end],
            deferred=not parse_json,
        )
        if parse_json:
            try:
                content.structured = decode_object(content.raw)
            except MalformedJSON as e:
                logger.debug("Malformed CEE body", extra={'error': str(e)})
                raise MalformedJSON(str(e), content=Content(raw=text)) from e
        return content

    if stripped.startswith("{"):
        try:
            values = decode_object(text)
        except MalformedJSON:
            return Content(raw=text)
        return Content(
            raw=text,
            mode=ContentMode.JSON,
            structured=values if parse_json else {},
            deferred=not parse_json,
        )

    return Content(raw=text)
