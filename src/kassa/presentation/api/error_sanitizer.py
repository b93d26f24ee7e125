"""Scrub infrastructure details from outgoing error messages.

Messages produced by domain exceptions are written for end users and pass
through unchanged. Anything that looks like it leaked from a driver, the
network stack or the filesystem is replaced by a generic message.
"""

import re

GENERIC_ERROR_MESSAGE = "An internal error occurred"

_OCTET = r"(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)"
# A dotted quad standing on its own; quoted values and longer dotted runs
# (amounts such as 1.250.000.00) are not addresses.
_IPV4 = rf"(?<![\w.'])(?:{_OCTET}\.){{3}}{_OCTET}(?![\w'])(?!\.\d)"

# Ordered (pattern, replacement) rules; the first match wins.
SANITIZE_RULES: list[tuple[re.Pattern[str], str]] = [
    (
        re.compile(r"asyncpg|psycopg|aiosqlite|sqlite3?|sqlalchemy|postgres|sql:"),
        GENERIC_ERROR_MESSAGE,
    ),
    (re.compile(r"connection|timeout|timed out|refused"), GENERIC_ERROR_MESSAGE),
    (
        re.compile(r"/var/|/tmp/|/home/|/app/|/usr/|\.py:\d+|\.py\", line \d+"),
        GENERIC_ERROR_MESSAGE,
    ),
    (re.compile(r"dial tcp|network|socket"), GENERIC_ERROR_MESSAGE),
    (re.compile(r"traceback|panic|runtime error"), GENERIC_ERROR_MESSAGE),
    (re.compile(r"internal server|stack trace"), GENERIC_ERROR_MESSAGE),
    (re.compile(_IPV4), GENERIC_ERROR_MESSAGE),
    (
        re.compile(r"/.*\b(open|read|write)\b|\b(open|read|write)\b.*/"),
        GENERIC_ERROR_MESSAGE,
    ),
]


def sanitize_message(message: str) -> str:
    """
    Return ``message`` or the generic error if it leaks internals.

    Matching is case-insensitive.

    Examples
    --------
    >>> sanitize_message("invalid amount 'abc'")
    "invalid amount 'abc'"
    >>> sanitize_message("connection refused by 10.0.0.5:5432")
    'An internal error occurred'
    """
    lowered = message.lower()
    for pattern, replacement in SANITIZE_RULES:
        if pattern.search(lowered):
            return replacement
    return message
