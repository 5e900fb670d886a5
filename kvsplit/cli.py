from __future__ import annotations

import argparse
import contextlib
import logging
import sys

from .config import Config, load_config
from .errors import KvError
from .processor import Processor

logger = logging.getLogger("kvsplit")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kvsplit", description="Split key/value text into JSON using a %{key}/%{val} template.")
    parser.add_argument("input", type=str, nargs="?", default="-", help="Input file path or '-' for stdin")
    parser.add_argument("-c", "--config", type=str, default=None, help="Path to YAML config file")
    parser.add_argument("-p", "--pattern", type=str, default=None, help="Template overriding the configured pattern, e.g. '%%{key}=%%{val}'")
    parser.add_argument("-o", "--output", type=str, default="-", help="Output file path or '-' for stdout")
    parser.add_argument("--explain", action="store_true", help="Print the compiled separators and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    try:
        cfg: Config = load_config(args.config) if args.config else Config()
        if args.pattern is not None:
            cfg = cfg.model_copy(update={"pattern": args.pattern, "field_split": None, "value_split": None})
        pattern = cfg.compile_pattern()
    except (OSError, ValueError, KvError) as e:
        logger.error("%s", e)
        return 2

    if args.explain:
        print(pattern.describe())
        return 0

    processor = Processor(config=cfg, pattern=pattern)

    with contextlib.ExitStack() as stack:
        try:
            src = sys.stdin if args.input == "-" else stack.enter_context(open(args.input, "r", encoding="utf-8"))
            dst = sys.stdout if args.output == "-" else stack.enter_context(open(args.output, "w", encoding="utf-8"))
        except OSError as e:
            logger.error("%s", e)
            return 2
        processor.process_stream(src, dst)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
