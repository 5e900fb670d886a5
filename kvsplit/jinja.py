"""Jinja2 environment used to render output lines.

The environment is created once at import time and reused to avoid per-line
construction overhead.
"""

from __future__ import annotations

from collections.abc import Mapping

from jinja2 import Environment, StrictUndefined, Template


def _kv_filter(fields: Mapping[str, str], sep: str = "=", join: str = " ") -> str:
    """Render parsed pairs back into key/value text: {{ fields | kv(':', ',') }}."""
    return join.join(f"{k}{sep}{v}" for k, v in fields.items())


JINJA_ENV: Environment = Environment(undefined=StrictUndefined, autoescape=False)
JINJA_ENV.filters["kv"] = _kv_filter


def compile_template(source: str) -> Template:
    """Compile a Jinja2 template from a string."""
    return JINJA_ENV.from_string(source)
