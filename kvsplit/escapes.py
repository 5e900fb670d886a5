from __future__ import annotations

from .errors import InvalidEscape, UnterminatedEscape

_ESCAPES: dict[str, str] = {
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}


def unescape(literal: str) -> str:
    """Decode backslash escapes in a separator literal.

    Only \\\\, \\n, \\t and \\r are recognised; anything else after a backslash
    raises InvalidEscape and a trailing lone backslash raises UnterminatedEscape.
    """
    if "\\" not in literal:
        return literal
    out: list[str] = []
    chars = iter(literal)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        escaped = next(chars, None)
        if escaped is None:
            raise UnterminatedEscape()
        if escaped not in _ESCAPES:
            raise InvalidEscape(escaped)
        out.append(_ESCAPES[escaped])
    return "".join(out)
