from __future__ import annotations

import io
import json
import logging

import pytest

from kvsplit import Pattern
from kvsplit.config import Config, OutputFormatConfig
from kvsplit.processor import ProcessStats, Processor


def _run(cfg: Config, text: str) -> tuple[str, ProcessStats]:
    processor = Processor(config=cfg, pattern=cfg.compile_pattern())
    dst = io.StringIO()
    stats = processor.process_stream(io.StringIO(text), dst)
    return dst.getvalue(), stats


def test_matched_lines_become_json_and_unmatched_pass() -> None:
    out, stats = _run(Config(pattern="%{key}=%{val}"), "a=1 b=2\nplain text\nc=ü\n")

    lines = out.splitlines()
    assert json.loads(lines[0]) == {"a": "1", "b": "2"}
    assert lines[1] == "plain text"
    assert lines[2] == '{"c": "ü"}'
    assert (stats.lines, stats.matched, stats.unmatched, stats.emitted) == (3, 2, 1, 3)


def test_unmatched_skip_drops_lines() -> None:
    out, stats = _run(Config(pattern="%{key}=%{val}", unmatched="skip"), "nothing\nk=v\n")

    assert out == '{"k": "v"}\n'
    assert stats.emitted == 1


def test_target_nests_fields() -> None:
    out, _ = _run(Config(pattern="%{key}=%{val}", target="kv"), "a=1\n")

    assert json.loads(out) == {"kv": {"a": "1"}}


def test_output_format_template() -> None:
    cfg = Config(
        pattern="%{key}=%{val}",
        output=OutputFormatConfig(format="{{ line_no }}: user={{ user }} {{ fields | kv(':', ',') }}"),
    )

    out, _ = _run(cfg, "user=bob id=7\n")

    assert out == "1: user=bob user:bob,id:7\n"


def test_output_format_missing_name_falls_back_to_line(caplog: pytest.LogCaptureFixture) -> None:
    cfg = Config(pattern="%{key}=%{val}", output=OutputFormatConfig(format="{{ user }}"))

    with caplog.at_level(logging.WARNING, logger="kvsplit.processor"):
        out, _ = _run(cfg, "id=7\n")

    assert out == "id=7\n"
    assert "cannot render output format" in caplog.text


def test_process_line_strips_newline() -> None:
    processor = Processor(config=Config(), pattern=Pattern.default())

    parsed = processor.process_line("a:1 b:2\n", 4)

    assert parsed.matched
    assert parsed.line_no == 4
    assert parsed.original_line == "a:1 b:2"
    assert parsed.fields == {"a": "1", "b": "2"}


def test_process_line_without_pairs() -> None:
    processor = Processor(config=Config(), pattern=Pattern.default())

    parsed = processor.process_line("just words\n")

    assert not parsed.matched
    assert parsed.fields is None


def test_parsed_keys_take_precedence_over_builtin_names() -> None:
    cfg = Config(
        pattern="%{key}=%{val}",
        output=OutputFormatConfig(format="{{ line }} {{ line_no }} {{ meta.line_no }} [{{ meta.line }}]"),
    )

    out, _ = _run(cfg, "line=42 line_no=x\n")

    assert out == "42 x 1 [line=42 line_no=x]\n"


def test_builtin_names_without_clash() -> None:
    parsed = Processor(config=Config(), pattern=Pattern.default()).process_line("a:1\n", 3)

    mapping = parsed.as_mapping()

    assert mapping["line"] == "a:1"
    assert mapping["line_no"] == 3
    assert mapping["fields"] == {"a": "1"}
    assert mapping["meta"] == {"line": "a:1", "line_no": 3, "fields": {"a": "1"}}
