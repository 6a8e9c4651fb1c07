from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Iterable, Optional, TextIO, Tuple

from pydantic import ValidationError

from logmask.common.pii.config import MaskingConfig
from logmask.common.pii.gate import build_masker
from logmask.common.pii.masker import SensitiveDataMasker
from logmask.common.pii.patterns import DEFAULT_MAX_DEPTH, MAX_DEPTH_CEILING
from logmask.config.settings import load_masking_config, load_profile


def _resolve_masker(args: argparse.Namespace) -> Optional[SensitiveDataMasker]:
    """None means masking is switched off by the resolved config."""
    config: Optional[MaskingConfig] = None
    if args.profile:
        config = load_profile(args.profile)
    elif args.env:
        config = load_masking_config()
    if config is None:
        return SensitiveDataMasker(max_depth=args.max_depth)
    if not config.enabled:
        return None
    return build_masker(config)


def _mask_line(masker: SensitiveDataMasker, line: str, as_json: bool) -> Tuple[str, int]:
    if as_json:
        try:
            payload: Any = json.loads(line)
        except ValueError:
            return masker.mask_text_with_count(line)
        masked, hits = masker.mask_value_with_count(payload)
        return json.dumps(masked, ensure_ascii=False), hits
    return masker.mask_text_with_count(line)


def mask_lines(
    lines: Iterable[str],
    out: TextIO,
    masker: Optional[SensitiveDataMasker],
    *,
    as_json: bool = False,
) -> int:
    total = 0
    for raw in lines:
        line = raw.rstrip("\r\n")
        if masker is not None and line:
            line, hits = _mask_line(masker, line, as_json)
            total += hits
        out.write(line + "\n")
    return total


def _open_stream(parser: argparse.ArgumentParser, path: str, mode: str, default: TextIO) -> TextIO:
    if path == "-":
        return default
    try:
        return open(path, mode, encoding="utf-8")
    except OSError as exc:
        parser.exit(2, f"[logmask] cannot open {path}: {exc.strerror}\n")


def _depth(value: str) -> int:
    depth = int(value)
    if not 0 <= depth <= MAX_DEPTH_CEILING:
        raise argparse.ArgumentTypeError(f"max depth must be within 0..{MAX_DEPTH_CEILING}")
    return depth


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="logmask-mask", description="Mask secrets and PII in log lines")
    parser.add_argument("--in", dest="src", default="-", help="input path ('-' for stdin)")
    parser.add_argument("--out", dest="dst", default="-", help="output path ('-' for stdout)")
    parser.add_argument("--json", action="store_true", help="treat each line as a JSON document")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--profile", help="JSON/YAML masking profile")
    source.add_argument("--env", action="store_true", help="use LOGMASK_* environment settings")
    parser.add_argument("--max-depth", type=_depth, default=DEFAULT_MAX_DEPTH, help="depth bound without a config")
    parser.add_argument("--stats", action="store_true", help="print replacement count to stderr")
    args = parser.parse_args(argv)

    try:
        masker = _resolve_masker(args)
    except ValidationError as exc:
        parser.exit(2, f"[logmask] invalid masking config: {exc.error_count()} error(s)\n")

    src = _open_stream(parser, args.src, "r", sys.stdin)
    try:
        dst = _open_stream(parser, args.dst, "w", sys.stdout)
    except SystemExit:
        if src is not sys.stdin:
            src.close()
        raise
    try:
        total = mask_lines(src, dst, masker, as_json=args.json)
    finally:
        if src is not sys.stdin:
            src.close()
        if dst is not sys.stdout:
            dst.close()

    if args.stats:
        print(f"[logmask] replacements={total}", file=sys.stderr)


if __name__ == "__main__":
    main()
