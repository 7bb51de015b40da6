#!/usr/bin/env python3
"""Command line: map an HTML file through a template file and print JSON"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from htmlmapper.config import config
from htmlmapper.errors import MapperError
from htmlmapper.mapper.engine import map_html_sync
from htmlmapper.template_loader import load_template


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="htmlmapper",
        description="Map an HTML document to JSON using a selector template",
    )
    p.add_argument("template", help="Template file (.json, .yaml or .yml)")
    p.add_argument("document", nargs="?", default="-", help="HTML file, '-' or omitted for stdin")
    p.add_argument("--scope-key", default=None, help=f"Scope selector key (default: {config.scope_key})")
    p.add_argument("--pipe-key", default=None, help=f"Pipe chain key (default: {config.pipe_key})")
    p.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def read_document(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def cmd_map(args: argparse.Namespace) -> int:
    try:
        template = load_template(args.template)
        document = read_document(args.document)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    options = {"scope_key": args.scope_key, "pipe_key": args.pipe_key}
    try:
        result = map_html_sync(document, template, options)
    except MapperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(json.dumps(result, indent=args.indent, ensure_ascii=False))
    sys.stdout.write("\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    return cmd_map(args)


if __name__ == "__main__":
    raise SystemExit(main())
