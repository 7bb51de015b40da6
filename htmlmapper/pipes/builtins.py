"""
Built-in pipes

Every pipe takes a single PipeInput and returns the new value. None is
the absence marker: selector pipes return it when nothing matched, and
parseAs returns it when a coercion fails.
"""

import json
import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

from htmlmapper.pipes.registry import PipeCollector
from htmlmapper.scope.resolver import resolve_scope
from htmlmapper.types.pipe_spec import PipeInput

logger = logging.getLogger(__name__)

_collector = PipeCollector()
builtin_pipe = _collector.pipe

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

NUMBER_PATTERN = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')
PREFIXED_INT_PATTERN = re.compile(r'^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$')
LEADING_FLOAT_PATTERN = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')

# Differ in year, month and day only, so a date-only text still means midnight
DATE_DEFAULTS = (datetime(2000, 1, 1), datetime(2004, 2, 2))


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _int_arg(arg: Optional[str], default: int) -> int:
    if arg is None:
        return default
    try:
        number = float(arg)
    except ValueError:
        return default
    if not math.isfinite(number):
        return default
    return int(number)


# -- selector pipes ---------------------------------------------------------

@builtin_pipe("text")
def text_pipe(pipe_input: PipeInput) -> Optional[str]:
    """Trimmed text content of the nodes matched by the selector"""
    scope = resolve_scope(pipe_input.scope, pipe_input.selector, pipe_input.options)
    if not scope:
        return None
    return scope.text().strip()


@builtin_pipe("attr")
def attr_pipe(pipe_input: PipeInput) -> Optional[str]:
    """Trimmed attribute value of the first node matched by the selector"""
    name = pipe_input.arg(0, "")
    scope = resolve_scope(pipe_input.scope, pipe_input.selector, pipe_input.options)
    value = scope.attr(name)
    if value is None:
        return None
    return value.strip()


# -- string pipes -----------------------------------------------------------

@builtin_pipe("trim")
def trim_pipe(pipe_input: PipeInput) -> Optional[str]:
    """Strip surrounding whitespace"""
    if pipe_input.value is None:
        return None
    return _as_text(pipe_input.value).strip()


@builtin_pipe("lower")
def lower_pipe(pipe_input: PipeInput) -> Optional[str]:
    """Lowercase"""
    if pipe_input.value is None:
        return None
    return _as_text(pipe_input.value).lower()


@builtin_pipe("upper")
def upper_pipe(pipe_input: PipeInput) -> Optional[str]:
    """Uppercase"""
    if pipe_input.value is None:
        return None
    return _as_text(pipe_input.value).upper()


@builtin_pipe("substr")
def substr_pipe(pipe_input: PipeInput) -> Optional[str]:
    """Substring between start and end; end 0 or omitted means end of text"""
    if pipe_input.value is None:
        return None
    text = _as_text(pipe_input.value)
    start = _int_arg(pipe_input.arg(0), 0)
    end = _int_arg(pipe_input.arg(1), 0) or len(text)

    start = min(max(start, 0), len(text))
    end = min(max(end, 0), len(text))
    if start > end:
        start, end = end, start
    return text[start:end]


@builtin_pipe("default")
def default_pipe(pipe_input: PipeInput) -> Any:
    """Current value when truthy, otherwise the fallback argument"""
    return pipe_input.value or pipe_input.arg(0)


# -- coercion ---------------------------------------------------------------

def _finite(number: float) -> Optional[float]:
    return number if math.isfinite(number) else None


def parse_number(text: str) -> Optional[float]:
    text = text.strip()
    if not text:
        return 0
    if NUMBER_PATTERN.match(text):
        if text.lstrip("+-").isdigit():
            return int(text)
        return _finite(float(text))
    prefixed = PREFIXED_INT_PATTERN.match(text)
    if prefixed:
        return int(text, 0)
    return None


def parse_int(text: str, radix: int = 10) -> Optional[int]:
    """Parse the leading integer of text in the given radix"""
    if not 2 <= radix <= 36:
        return None
    text = text.lstrip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if radix == 16 and text[:2].lower() == "0x":
        text = text[2:]

    valid = DIGITS[:radix]
    end = 0
    while end < len(text) and text[end].lower() in valid:
        end += 1
    if end == 0:
        return None
    return sign * int(text[:end], radix)


def parse_float(text: str) -> Optional[float]:
    """Parse the leading decimal number of text"""
    match = LEADING_FLOAT_PATTERN.match(text.lstrip())
    if not match:
        return None
    return _finite(float(match.group(0)))


def parse_date(text: str) -> Optional[str]:
    """ISO-8601 UTC timestamp with milliseconds, naive input taken as UTC"""
    try:
        parsed = date_parser.parse(text, default=DATE_DEFAULTS[0])
        # Missing year, month or day would be filled from the default
        if parsed != date_parser.parse(text, default=DATE_DEFAULTS[1]):
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        iso = parsed.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    except (ValueError, OverflowError):
        return None
    return iso.replace("+00:00", "Z")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite JSON number: {name}")


def _json_float(text: str) -> float:
    number = float(text)
    if not math.isfinite(number):
        _reject_constant(text)
    return number


def parse_json(text: str) -> Any:
    try:
        return json.loads(text, parse_float=_json_float, parse_constant=_reject_constant)
    except ValueError:
        return None


@builtin_pipe("parseAs")
def parse_as_pipe(pipe_input: PipeInput) -> Any:
    """Coerce the value: string, number, int[;radix], float, bool, date, json"""
    kind = (pipe_input.arg(0) or "noop").lower()
    text = _as_text(pipe_input.value)

    if kind == "string":
        return text
    if kind == "number":
        return parse_number(text)
    if kind == "int":
        radix_arg = pipe_input.arg(1)
        if radix_arg is None:
            return parse_int(text)
        radix = parse_int(radix_arg)
        return parse_int(text, radix) if radix is not None else None
    if kind == "float":
        return parse_float(text)
    if kind == "bool":
        return text.lower() == "true"
    if kind == "date":
        return parse_date(text)
    if kind == "json":
        return parse_json(text)
    return pipe_input.value


# -- diagnostics ------------------------------------------------------------

@builtin_pipe("log")
def log_pipe(pipe_input: PipeInput) -> Any:
    """Log the value under a label and pass it through"""
    label = pipe_input.arg(0, "")
    logger.info(f"{label} {pipe_input.value!r}")
    return pipe_input.value


DEFAULT_PIPES = _collector.freeze()
