"""Errors raised while compiling a template into a Pattern."""

from __future__ import annotations


class KvError(Exception):
    """Base class for template compilation errors.

    Two errors are equal when they have the same type and carry the same value,
    so callers and tests can compare against an expected error directly.
    """

    def __init__(self, message: str, value: object = None) -> None:
        super().__init__(message)
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KvError):
            return NotImplemented
        return type(self) is type(other) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.value))

    def __repr__(self) -> str:
        if self.value is None:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}({self.value!r})"


class InvalidPattern(KvError):
    """A %{key} marker has no %{val} marker after it."""

    def __init__(self, position: int) -> None:
        super().__init__(f"invalid pattern at character {position}", position)
        self.position = position


class DoubleSeparator(KvError):
    """A separator overlaps with another one, so splitting would be ambiguous."""

    def __init__(self, separator: str) -> None:
        super().__init__(
            f"The separator '{separator}' is used for both key value separation as well as pair separation.",
            separator,
        )
        self.separator = separator


class InvalidEscape(KvError):
    def __init__(self, char: str) -> None:
        super().__init__(f"Invalid escape sequence \\'{char}' is not valid.", char)
        self.char = char


class UnterminatedEscape(KvError):
    def __init__(self) -> None:
        super().__init__("Unterminated escape at the end of line or of a delimiter %{ can't be escaped")
