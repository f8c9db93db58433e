"""Quoting of text as JSON string literals."""

from __future__ import annotations

import re

__all__ = ["quote_string", "quote_string_html"]


def _control_escapes() -> dict[int, str]:
    table = {code: f"\\u{code:04x}" for code in range(0x20)}
    table[ord("\n")] = "\\n"
    table[ord("\r")] = "\\r"
    table[ord("\t")] = "\\t"
    table[ord('"')] = '\\"'
    table[ord("\\")] = "\\\\"
    return table


_PLAIN = _control_escapes()

_HTML = dict(_PLAIN)
_HTML.update({ord(ch): f"\\u{ord(ch):04x}" for ch in "<>&"})
# Line and paragraph separators break JSONP, so they are always escaped.
_HTML[0x2028] = "\\u2028"
_HTML[0x2029] = "\\u2029"

_SURROGATE = re.compile("[\ud800-\udfff]")


def quote_string(text: str) -> str:
    """Quote text, escaping control characters, quotes and backslashes."""
    return '"' + text.translate(_PLAIN) + '"'


def quote_string_html(text: str) -> str:
    """Quote text, also escaping <, >, &, U+2028 and U+2029.

    Characters that cannot be encoded as UTF-8 become \\ufffd.
    """
    body = _SURROGATE.sub(lambda _match: "\\ufffd", text.translate(_HTML))
    return '"' + body + '"'