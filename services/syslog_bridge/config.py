"""
Bridge configuration: optional YAML file, then environment overrides.
"""
import os
from dataclasses import dataclass, field
from typing import List

import yaml

OUTPUT_FORMATS = ("json", "text")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class BridgeConfig:
    """Options for converting a stream of syslog lines"""

    suppress_json_reparse: bool = False
    output_format: str = "json"
    validate_export: bool = False
    tags: List[str] = field(default_factory=list)
    log_level: str = "INFO"

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {', '.join(OUTPUT_FORMATS)}, got {self.output_format!r}"
            )
        if isinstance(self.tags, str):
            self.tags = _split_tags(self.tags)


def _parse_bool(name: str, value) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _split_tags(value: str) -> List[str]:
    return [t.strip() for t in value.split(",") if t.strip()]


def load_config(path: str = None) -> BridgeConfig:
    """
    Load configuration

    Args:
        path: YAML file to read (default: BRIDGE_CONFIG env, or none)

    Returns:
        BridgeConfig with env overrides (SUPPRESS_JSON_REPARSE, OUTPUT_FORMAT,
        VALIDATE_EXPORT, BRIDGE_TAGS, LOG_LEVEL) applied

    Raises:
        ValueError: unknown keys or invalid values
    """
    if path is None:
        path = os.getenv("BRIDGE_CONFIG")

    values = {}
    if path:
        with open(path, "r") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"{path} is not valid YAML: {e}") from e
        if not isinstance(loaded, dict):
            raise ValueError(f"{path} must contain a mapping")
        unknown = set(loaded) - set(BridgeConfig.__dataclass_fields__)
        if unknown:
            raise ValueError(f"unknown configuration keys: {', '.join(sorted(unknown))}")
        values.update(loaded)

    env = os.environ
    if "SUPPRESS_JSON_REPARSE" in env:
        values["suppress_json_reparse"] = env["SUPPRESS_JSON_REPARSE"]
    if "OUTPUT_FORMAT" in env:
        values["output_format"] = env["OUTPUT_FORMAT"].strip().lower()
    if "VALIDATE_EXPORT" in env:
        values["validate_export"] = env["VALIDATE_EXPORT"]
    if "BRIDGE_TAGS" in env:
        values["tags"] = _split_tags(env["BRIDGE_TAGS"])
    if "LOG_LEVEL" in env:
        values["log_level"] = env["LOG_LEVEL"]

    for name in ("suppress_json_reparse", "validate_export"):
        if name in values:
            values[name] = _parse_bool(name, values[name])

    return BridgeConfig(**values)
