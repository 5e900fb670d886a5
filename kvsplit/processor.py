from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TextIO

from jinja2 import Template, UndefinedError

from .config import Config
from .jinja import compile_template
from .pattern import Pattern
from .types import ParsedLine

logger = logging.getLogger(__name__)


@dataclass
class ProcessStats:
    lines: int = 0
    matched: int = 0
    unmatched: int = 0
    emitted: int = 0


@dataclass
class Processor:
    config: Config
    pattern: Pattern
    _template: Template | None = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        if self.config.output.format:
            self._template = compile_template(self.config.output.format)

    def process_line(self, raw_line: str, line_no: int = 1) -> ParsedLine:
        line = raw_line.rstrip("\n")
        return ParsedLine(line_no=line_no, original_line=line, fields=self.pattern.run(line))

    def process_stream(self, src: TextIO, dst: TextIO) -> ProcessStats:
        stats = ProcessStats()
        for line_number, raw_line in enumerate(src, start=1):
            stats.lines += 1
            parsed = self.process_line(raw_line, line_number)
            if parsed.matched:
                stats.matched += 1
                dst.write(self.render(parsed) + "\n")
                stats.emitted += 1
                continue
            stats.unmatched += 1
            if self.config.unmatched == "pass":
                dst.write(parsed.original_line + "\n")
                stats.emitted += 1
        logger.info(
            "processed %d lines: %d matched, %d unmatched, %d emitted",
            stats.lines,
            stats.matched,
            stats.unmatched,
            stats.emitted,
        )
        return stats

    def render(self, parsed: ParsedLine) -> str:
        """Render a matched line as JSON or through the configured template."""
        if self._template is not None:
            try:
                return self._template.render(**parsed.as_mapping())
            except UndefinedError as e:
                logger.warning("line %d: cannot render output format: %s", parsed.line_no, e)
                return parsed.original_line
        payload: dict[str, object] = dict(parsed.fields or {})
        if self.config.target:
            payload = {self.config.target: payload}
        return json.dumps(payload, ensure_ascii=False)
