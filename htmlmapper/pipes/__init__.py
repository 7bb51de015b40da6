"""
Pipes - named value transformations chained after a selector

    "span.price|trim|parseAs:float"
"""

from htmlmapper.pipes.registry import PipeRegistry, PipeInfo, PipeCollector
from htmlmapper.pipes.parser import parse_pipes, parse_entry, split_chain, is_quoted_literal
from htmlmapper.pipes.executor import apply_pipes
from htmlmapper.pipes.builtins import DEFAULT_PIPES

__all__ = [
    'PipeRegistry',
    'PipeInfo',
    'PipeCollector',
    'parse_pipes',
    'parse_entry',
    'split_chain',
    'is_quoted_literal',
    'apply_pipes',
    'DEFAULT_PIPES',
]
