"""Exceptions raised by the syslog message model."""


class SyslogError(Exception):
    """Base class for syslog message errors."""


class InvalidEnumValue(SyslogError, ValueError):
    """A facility or severity code outside its defined range."""


class MalformedJSON(SyslogError, ValueError):
    """
    A message body (or an export-time body) that should be a JSON object
    could not be decoded.

    ``content`` carries the best-effort classification of the text when the
    error came from the content classifier, so callers can still commit it.
    """

    def __init__(self, message, content=None):
        super().__init__(message)
        self.content = content


class TypeMismatch(SyslogError, TypeError):
    """An array operation on a structured key that does not hold an array."""


class EncodingError(SyslogError):
    """A record could not be serialized."""


class ParseError(SyslogError, ValueError):
    """A line is not a recognizable RFC 3164 message."""
