"""
Identifier escaping for SQL text built at runtime.

Column names supplied by callers are interpolated into INSERT statements, so
they go through `escape_string` before being wrapped in identifier quotes.
Bound values never pass through here; they travel as statement parameters.
"""

from __future__ import annotations

_BASE_ESCAPES = {
    "\0": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "\\": "\\\\",
    "'": "\\'",
    "\x1a": "\\Z",
}

# U+00A5 (yen) and U+20A9 (won) render as a backslash in some legacy
# encodings; they are deliberately left untouched.
_KEEP_DOUBLE_QUOTES = str.maketrans(_BASE_ESCAPES)
_ESCAPE_DOUBLE_QUOTES = str.maketrans({**_BASE_ESCAPES, '"': '\\"'})


def escape_string(value: str, escape_double_quotes: bool = True) -> str:
    """
    Backslash-escape the characters that could break out of a quoted identifier.

    Parameters
    ----------
    value : str
        Raw identifier text. The empty string is returned unchanged.
    escape_double_quotes : bool
        Whether `"` is escaped as well. Identifiers wrapped in double quotes
        need this.

    Returns
    -------
    str
        The escaped text. Escaping is single-pass: escaping the output again
        escapes the inserted backslashes too.
    """
    table = _ESCAPE_DOUBLE_QUOTES if escape_double_quotes else _KEEP_DOUBLE_QUOTES
    return value.translate(table)


__all__ = ["escape_string"]
