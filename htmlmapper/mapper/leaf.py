"""Leaf Evaluator - resolves one non-nested template value"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from htmlmapper.pipes.executor import apply_pipes
from htmlmapper.pipes.parser import is_quoted_literal, parse_pipes, split_chain
from htmlmapper.scope.resolver import resolve_scope
from htmlmapper.scope.scope import Scope
from htmlmapper.types.options import MapperOptions
from htmlmapper.types.pipe_spec import PipeSpec

logger = logging.getLogger(__name__)

TEXT_PIPE = PipeSpec(name="text")


@dataclass
class LeafValue:
    value: Any
    position: Optional[int] = None


async def evaluate_leaf(leaf: Any, scope: Scope, options: MapperOptions) -> LeafValue:
    """
    Resolve a leaf against the current scope.

    Quoted strings are literals and never touch the scope. Other
    non-strings pass through. Everything else is
    selector[|pipe[:args]]*, run behind an implicit leading text pipe.
    """
    if isinstance(leaf, str) and is_quoted_literal(leaf):
        return LeafValue(leaf[1:-1])
    if not isinstance(leaf, str):
        return LeafValue(leaf)

    selector, *entries = split_chain(leaf, options.pipe_key)
    selector = selector.strip()
    pipes = [TEXT_PIPE] + parse_pipes(entries)
    value = await apply_pipes(pipes, None, selector, scope, options)

    matched = resolve_scope(scope, selector, options)
    if matched is scope:
        position = 0
    else:
        position = matched.position or 0
    return LeafValue(value, position)
