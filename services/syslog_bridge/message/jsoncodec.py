"""
JSON encoding and decoding for message bodies.

Floats decode to ``decimal.Decimal`` and integers to ``int`` so numbers in a
body survive a decode/encode cycle without losing precision. Encoding is
compact with sorted keys so output is reproducible.
"""
from decimal import Decimal
from typing import Any, Dict, List, Union

import simplejson

from .errors import EncodingError, MalformedJSON

JSONValue = Union[None, bool, int, Decimal, str, List[Any], Dict[str, Any]]
JSONObject = Dict[str, JSONValue]


def decode_object(text: str) -> JSONObject:
    """Decode ``text`` as a JSON object, raising MalformedJSON otherwise."""
    try:
        value = simplejson.loads(text, use_decimal=True)
    except simplejson.JSONDecodeError as e:
        raise MalformedJSON(f"invalid JSON body: {e}") from e
    if not isinstance(value, dict):
        raise MalformedJSON(f"JSON body is a {type(value).__name__}, not an object")
    return value


def encode(values: JSONObject) -> str:
    try:
        return simplejson.dumps(
            values,
            use_decimal=True,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise EncodingError(f"could not encode message values: {e}") from e
