"""
JSON log output for the syslog bridge. Logs go to stderr by default,
leaving stdout to the converted records.
"""
import logging
import os
import sys
from pythonjsonlogger import jsonlogger


def setup_logging(service_name: str, log_level: str = None, stream=None) -> logging.Logger:
    """
    Attach a JSON handler to a named logger, replacing any handlers set up
    by an earlier call. LOG_FILE adds a second handler writing to that file.

    Args:
        service_name: Logger name (e.g., 'syslog_bridge')
        log_level: Level name; falls back to LOG_LEVEL, then INFO
        stream: Console stream (default: sys.stderr)

    Returns:
        The configured logger, detached from the root logger
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO')

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(service_name)
    logger.setLevel(numeric_level)

    logger.handlers = []

    log_format = '%(asctime)s %(name)s %(levelname)s %(message)s %(pathname)s %(lineno)d'
    formatter = jsonlogger.JsonFormatter(
        log_format,
        rename_fields={
            'levelname': 'level',
            'asctime': 'timestamp',
            'pathname': 'file',
            'lineno': 'line'
        }
    )

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = os.getenv('LOG_FILE')
    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning("Could not create file handler", extra={'path': log_file, 'error': str(e)})

    logger.propagate = False

    return logger


def log_audit_event(logger: logging.Logger, event_type: str, **kwargs):
    """
    Emit an AUDIT_EVENT record flagged with ``audit: true``

    Args:
        logger: Logger from setup_logging
        event_type: What happened (e.g., 'conversion_completed')
        **kwargs: Extra fields for the record, such as line counts
    """
    audit_data = {
        'audit': True,
        'event_type': event_type,
        **kwargs
    }
    logger.info('AUDIT_EVENT', extra=audit_data)
