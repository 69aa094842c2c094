"""
Syslog bridge command line: reads RFC 3164 lines from a file or stdin and
writes each one out as a JSON document or as (CEE-enriched) syslog text.
"""
import argparse
import sys
from typing import BinaryIO, Iterable, List, Optional

from syslog_common.logging_config import log_audit_event, setup_logging

from .config import OUTPUT_FORMATS, BridgeConfig, load_config
from .message import Parser, SyslogError, SyslogMsg

TAGS_KEY = "tags"


def convert(msg: SyslogMsg, config: BridgeConfig) -> bytes:
    """Apply configured tags and render one message in the configured format"""
    for tag in config.tags:
        msg.add_to_tag_array(TAGS_KEY, tag)
    if config.output_format == "text":
        return msg.to_bytes()
    return msg.to_json(validate=config.validate_export) + b"\n"


def run(lines: Iterable[bytes], out, config: BridgeConfig, logger) -> tuple:
    """
    Convert every line, logging and counting the ones that fail

    Returns:
        (converted, failed) counts
    """
    parser = Parser(suppress_json_reparse=config.suppress_json_reparse)
    converted = failed = 0

    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            msg = parser.parse_bytes(line)
            out.write(convert(msg, config))
            converted += 1
        except SyslogError as e:
            failed += 1
            logger.warning("Syslog line rejected", extra={
                'line_no': line_no,
                'error_type': type(e).__name__,
                'error': str(e),
            })

    return converted, failed


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="syslog-bridge",
        description="Convert RFC 3164 syslog lines to JSON documents or CEE syslog text.",
    )
    p.add_argument("input", nargs="?", default="-", help="Input file (default: stdin)")
    p.add_argument("--config", default=None, help="YAML configuration file")
    p.add_argument("--format", dest="output_format", choices=OUTPUT_FORMATS, default=None,
                   help="Output format (default: json)")
    p.add_argument("--tag", dest="tags", action="append", default=None,
                   help="Append a value to the message's tags array (repeatable)")
    p.add_argument("--suppress-json-reparse", action="store_true", default=None,
                   help="Defer CEE body decoding until export")
    p.add_argument("--validate", dest="validate_export", action="store_true", default=None,
                   help="Validate JSON exports against the export schema")
    p.add_argument("--log-level", default=None, help="Log level (default: INFO)")
    return p


def _open_input(path: str) -> BinaryIO:
    if path == "-":
        return sys.stdin.buffer
    return open(path, "rb")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    # Command line flags win over file and environment settings
    for name in ("output_format", "suppress_json_reparse", "validate_export", "log_level"):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)
    if args.tags:
        config.tags = list(config.tags) + args.tags

    logger = setup_logging("syslog_bridge", config.log_level)

    try:
        source = _open_input(args.input)
    except OSError as e:
        logger.error("Could not open input", extra={'path': args.input, 'error': str(e)})
        return 2

    try:
        converted, failed = run(source, sys.stdout.buffer, config, logger)
    finally:
        if source is not sys.stdin.buffer:
            source.close()
    sys.stdout.flush()

    log_audit_event(logger, 'conversion_completed',
                    input=args.input,
                    output_format=config.output_format,
                    converted=converted,
                    failed=failed)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
