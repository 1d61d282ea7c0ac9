"""Utility modules for visitor greeting."""

from .log import LogOnce, setup_logging
from .network import client_ip_from_headers, is_local_address, normalize_ip, parse_ip
from .text import first_grapheme, normalize_emoji

__all__ = [
    "LogOnce",
    "client_ip_from_headers",
    "first_grapheme",
    "is_local_address",
    "normalize_emoji",
    "normalize_ip",
    "parse_ip",
    "setup_logging",
]
