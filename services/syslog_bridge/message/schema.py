"""
Validation of JSON export documents against the bundled export schema.
"""
import json
import logging
import os
from functools import lru_cache

import jsonschema

from .errors import EncodingError

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "schemas",
    "syslog_export.json",
)


def load_validator(schema_path: str = None) -> jsonschema.Draft202012Validator:
    """Load the export schema (SYSLOG_EXPORT_SCHEMA_PATH overrides the bundled one)."""
    if schema_path is None:
        schema_path = os.getenv("SYSLOG_EXPORT_SCHEMA_PATH", DEFAULT_SCHEMA_PATH)
    return _load_validator(schema_path)


@lru_cache(maxsize=None)
def _load_validator(schema_path: str) -> jsonschema.Draft202012Validator:
    with open(schema_path, "r") as f:
        schema = json.load(f)
    logger.debug("Export schema loaded", extra={'path': schema_path})
    return jsonschema.Draft202012Validator(schema)


def validate_export(document: dict, schema_path: str = None) -> None:
    """
    Raises:
        EncodingError: listing every schema violation in the document.
    """
    errors = list(load_validator(schema_path).iter_errors(document))
    if errors:
        messages = [error.message for error in errors]
        logger.warning("Export document failed schema validation", extra={'errors': messages})
        raise EncodingError("export document failed validation: " + "; ".join(messages))
