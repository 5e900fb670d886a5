from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class KvTarget(Protocol):
    """Anything a parsed pair can be stored into by string key.

    Implementations signal a rejected pair by raising TypeError, ValueError or
    KeyError from __setitem__.
    """

    def __setitem__(self, key: str, value: str, /) -> None: ...


@dataclass
class ParsedLine:
    """Result of running a pattern over one input line.

    - fields: parsed pairs, or None when nothing on the line matched
    """
    line_no: int
    # Line as read, without the trailing newline
    original_line: str
    fields: dict[str, str] | None = None

    @property
    def matched(self) -> bool:
        return self.fields is not None

    def as_mapping(self) -> dict[str, object]:
        """Return the values an output template is rendered with.

        Parsed pairs take precedence over the built-in names fields, line,
        line_no and meta; meta.line, meta.line_no and meta.fields carry the
        built-ins for templates that need them next to a clashing pair.
        """
        fields = dict(self.fields or {})
        mapping: dict[str, object] = {
            "fields": fields,
            "line": self.original_line,
            "line_no": self.line_no,
            "meta": {"line": self.original_line, "line_no": self.line_no, "fields": fields},
        }
        mapping.update(fields)
        return mapping
