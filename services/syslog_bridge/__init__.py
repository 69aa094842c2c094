"""Syslog bridge: converts RFC 3164 syslog lines to JSON documents or CEE text."""

from .message import SyslogMsg, Parser

__all__ = ["SyslogMsg", "Parser"]
