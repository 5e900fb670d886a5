"""Split key/value style text into mappings using %{key}/%{val} templates."""

from __future__ import annotations

from .errors import DoubleSeparator, InvalidEscape, InvalidPattern, KvError, UnterminatedEscape
from .pattern import Pattern, multi_split

__all__ = [
    "DoubleSeparator",
    "InvalidEscape",
    "InvalidPattern",
    "KvError",
    "Pattern",
    "UnterminatedEscape",
    "multi_split",
]
