"""Compile %{key}/%{val} templates and split text with the result.

A template such as ``%{key}=%{val}&`` describes two kinds of separators:
the literal between ``%{key}`` and ``%{val}`` splits a key from its value,
everything outside a marker pair splits fields from each other. Compiling
collects both sets once; ``Pattern.run`` then applies them to any number of
input lines.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TypeVar

from .errors import DoubleSeparator, InvalidPattern
from .escapes import unescape
from .types import KvTarget

logger = logging.getLogger(__name__)

KEY_MARKER = "%{key}"
VAL_MARKER = "%{val}"
DEFAULT_FIELD_SEPARATOR = " "
DEFAULT_KEY_SEPARATOR = ":"

T = TypeVar("T", bound=KvTarget)


@dataclass(frozen=True)
class Pattern:
    """Sorted, deduplicated field and key separators.

    Every Pattern has at least one non-empty separator of each kind and no
    separator contained in another one; the constructor sorts and checks them
    and raises DoubleSeparator or ValueError otherwise.
    """
    field_separators: tuple[str, ...]
    key_separators: tuple[str, ...]

    def __post_init__(self) -> None:
        fields = tuple(sorted(set(self.field_separators)))
        keys = tuple(sorted(set(self.key_separators)))
        if not fields or not keys:
            raise ValueError("a pattern needs at least one field and one key separator")
        if "" in fields or "" in keys:
            raise ValueError("separators must not be empty")
        _check_overlaps(fields, keys)
        _check_overlaps(keys, fields)
        object.__setattr__(self, "field_separators", fields)
        object.__setattr__(self, "key_separators", keys)

    @classmethod
    def default(cls) -> Pattern:
        """Pattern equivalent to compiling ``%{key}:%{val}``."""
        return cls(field_separators=(DEFAULT_FIELD_SEPARATOR,), key_separators=(DEFAULT_KEY_SEPARATOR,))

    @classmethod
    def compile(cls, template: str) -> Pattern:
        """Compile a template into a Pattern.

        Raises:
            InvalidPattern: a %{key} has no %{val} after it.
            InvalidEscape, UnterminatedEscape: a literal has a bad escape.
            DoubleSeparator: two separators overlap.
        """
        field_separators: list[str] = []
        key_separators: list[str] = []
        i = 0
        while True:
            if template.startswith(KEY_MARKER, i):
                i += len(KEY_MARKER)
                end = template.find(VAL_MARKER, i)
                if end == -1:
                    raise InvalidPattern(i)
                if end != i:
                    key_separators.append(unescape(template[i:end]))
                i = end + len(VAL_MARKER)
                continue

            start = template.find(KEY_MARKER, i)
            if start != -1:
                field_separators.append(unescape(template[i:start]))
                i = start
            elif i >= len(template):
                break
            else:
                field_separators.append(unescape(template[i:]))
                break

        pattern = cls._build(field_separators, key_separators)
        logger.debug(
            "compiled %r: field separators %r, key separators %r",
            template,
            pattern.field_separators,
            pattern.key_separators,
        )
        return pattern

    @classmethod
    def from_separators(cls, field_split: Iterable[str] = (), value_split: Iterable[str] = ()) -> Pattern:
        """Build a Pattern from explicit separator lists.

        Separators are used literally, without escape decoding. Empty strings
        are ignored and missing lists fall back to the defaults.
        """
        return cls._build([s for s in field_split if s], [s for s in value_split if s])

    @classmethod
    def from_dict(cls, data: Mapping[str, Sequence[str]]) -> Pattern:
        return cls.from_separators(data.get("field_separators", ()), data.get("key_separators", ()))

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "field_separators": list(self.field_separators),
            "key_separators": list(self.key_separators),
        }

    @classmethod
    def _build(cls, field_separators: list[str], key_separators: list[str]) -> Pattern:
        if not field_separators:
            field_separators = [DEFAULT_FIELD_SEPARATOR]
        if not key_separators:
            key_separators = [DEFAULT_KEY_SEPARATOR]
        return cls(field_separators=tuple(field_separators), key_separators=tuple(key_separators))

    def run(self, line: str, factory: Callable[[], T] = dict) -> T | None:  # type: ignore[assignment]
        """Split a line into key/value pairs.

        Fields that do not split into exactly a key and a value are dropped.
        Later duplicates of a key overwrite earlier ones. Returns None when no
        field produced a pair, or when the target built by ``factory``
        rejects a pair.
        """
        target = factory()
        found = False
        for field in multi_split(line, self.field_separators):
            kv = multi_split(field, self.key_separators)
            if len(kv) != 2:
                continue
            found = True
            try:
                target[kv[0]] = kv[1]
            except (TypeError, ValueError, KeyError) as e:
                logger.debug("target rejected key %r: %s", kv[0], e)
                return None
        return target if found else None

    def describe(self) -> str:
        return "field separators: {}\nkey separators: {}".format(
            ", ".join(repr(s) for s in self.field_separators),
            ", ".join(repr(s) for s in self.key_separators),
        )


def multi_split(text: str, separators: Sequence[str]) -> list[str]:
    """Split text by each separator in turn, flattening the pieces.

    >>> multi_split("this=is;a=test for:seperators", [" ", ";"])
    ['this=is', 'a=test', 'for:seperators']
    """
    tokens = [text]
    for separator in separators:
        tokens = [piece for token in tokens for piece in token.split(separator)]
    return tokens


def _check_overlaps(own: tuple[str, ...], other: tuple[str, ...]) -> None:
    # A separator must not occur inside a separator of the other kind, nor
    # inside a different separator of its own kind.
    for sep in own:
        if any(sep in o for o in other):
            raise DoubleSeparator(sep)
        if any(o != sep and sep in o for o in own):
            raise DoubleSeparator(sep)
