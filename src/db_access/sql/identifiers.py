"""String escaping and identifier quoting for MySQL-flavoured SQL text."""

import re
from typing import Callable

# Characters escaped by mysql_real_escape_string()
_ESCAPE_MAP = {
    "\\": "\\\\",
    "\x00": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "'": "\\'",
    '"': '\\"',
    "\x1a": "\\Z",
}

_ESCAPE_RE = re.compile("[" + re.escape("".join(_ESCAPE_MAP)) + "]")
_UNESCAPE_MAP = {"0": "\x00", "n": "\n", "r": "\r", "Z": "\x1a"}
_UNESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_PLAIN_IDENTIFIER_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")


def sql_fix(value: object) -> str:
    """
    Escape a value for use inside a quoted SQL string literal.

    Args:
        value: Any value; it is converted with str() first (None becomes "")

    Returns:
        Escaped string, without surrounding quotes
    """
    text = "" if value is None else str(value)
    return _ESCAPE_RE.sub(lambda m: _ESCAPE_MAP[m.group(0)], text)


def sql_unfix(value: object) -> str:
    """
    Reverse sql_fix() by stripping the escaping backslashes.

    Only meant for strings produced by sql_fix()/sql_value(); data read back
    from the database is already unescaped.
    """
    text = "" if value is None else str(value)

    def _unescape(match: re.Match) -> str:
        char = match.group(1)
        return _UNESCAPE_MAP.get(char, char)

    return _UNESCAPE_RE.sub(_unescape, text)


def backtick(name: object, escape: Callable[[object], str] = sql_fix) -> str:
    """Wrap an escaped name in backticks unconditionally."""
    return "`" + escape(name) + "`"


def quote_identifier(name: str, escape: Callable[[object], str] = sql_fix) -> str:
    """
    Quote a (possibly dotted) table or column identifier.

    Each dot-separated segment is back-quoted unless it is the ``*`` wildcard
    or a plain ASCII name (letters and digits, not starting with a digit).

    Args:
        name: Identifier such as ``users``, ``user data`` or ``u.id``
        escape: String escaping function of the target engine

    Returns:
        Quoted identifier
    """
    segments = []
    for segment in escape(name).split("."):
        if segment == "*" or _PLAIN_IDENTIFIER_RE.match(segment):
            segments.append(segment)
        else:
            segments.append(f"`{segment}`")
    return ".".join(segments)
