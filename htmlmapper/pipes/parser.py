"""
Pipe-Chain Parser

Grammar of one pipe entry:

    name[:arg1[;arg2...]]

Only the first ':' separates the name; later colons belong to the
arguments (e.g. "log:time: 12:30"). Arguments are trimmed and empty ones
dropped. A leaf string chains entries with the pipe key:

    selector|pipe1:arg|pipe2

Parsing never fails: entries that are not a non-empty string, a PipeSpec
or a mapping with a string "name" are skipped.
"""

import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from htmlmapper.types.pipe_spec import PipeSpec

logger = logging.getLogger(__name__)

QUOTES = ("'", '"')


def is_quoted_literal(text: str) -> bool:
    """True when the whole text sits inside one matching pair of quotes"""
    return len(text) >= 2 and text[0] in QUOTES and text[-1] == text[0]


def split_chain(text: str, delimiter: str) -> List[str]:
    """Split a leaf into its selector part followed by raw pipe entries"""
    parts: List[str] = []
    start = 0
    i = 0
    step = len(delimiter)
    while i <= len(text) - step:
        if text.startswith(delimiter, i):
            parts.append(text[start:i])
            i += step
            start = i
        else:
            i += 1
    parts.append(text[start:])
    return parts


def _tokenize_entry(entry: str) -> Tuple[str, List[str]]:
    name_end = entry.find(":")
    if name_end < 0:
        return entry.strip(), []

    name = entry[:name_end].strip()
    args: List[str] = []
    current: List[str] = []
    for ch in entry[name_end + 1:]:
        if ch == ";":
            args.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    args.append("".join(current).strip())
    return name, [a for a in args if a]


def parse_entry(entry: Any) -> Optional[PipeSpec]:
    """Parse one pipe entry, returning None for anything malformed"""
    if isinstance(entry, PipeSpec):
        return entry
    if isinstance(entry, str):
        if not entry:
            return None
        name, args = _tokenize_entry(entry)
        return PipeSpec(name=name, args=tuple(args))
    if isinstance(entry, dict) and isinstance(entry.get("name"), str):
        args = entry.get("args") or ()
        if isinstance(args, (str, bytes)) or not isinstance(args, Iterable):
            args = (args,)
        return PipeSpec(name=entry["name"], args=tuple(str(a) for a in args))
    logger.debug(f"Skipping malformed pipe entry: {entry!r}")
    return None


def parse_pipes(spec: Any, delimiter: Optional[str] = None) -> List[PipeSpec]:
    """
    Normalize a pipe chain into an ordered list of PipeSpec.

    Args:
        spec: "a|b:x", ["a", "b:x"], [{"name": "a"}], a single PipeSpec,
            a single {"name": ...} mapping, or None
        delimiter: Pipe key used to split strings; when None, string
            entries are taken as single pipes

    Returns:
        List of PipeSpec in execution order
    """
    if spec is None:
        return []
    if isinstance(spec, (list, tuple)):
        entries: Sequence[Any] = spec
    else:
        entries = [spec]

    pipes: List[PipeSpec] = []
    for entry in entries:
        if isinstance(entry, str) and delimiter:
            raw = split_chain(entry, delimiter)
        else:
            raw = [entry]
        for item in raw:
            parsed = parse_entry(item)
            if parsed is not None:
                pipes.append(parsed)
    return pipes
