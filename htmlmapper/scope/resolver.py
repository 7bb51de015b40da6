"""Scope Resolver"""

from typing import Optional

from htmlmapper.scope.scope import Scope
from htmlmapper.types.options import MapperOptions


def resolve_scope(scope: Scope, selector: Optional[str], options: MapperOptions) -> Scope:
    """Narrow scope by selector; empty selector or the scope key itself means self"""
    if not selector or selector == options.scope_key:
        return scope
    return scope.find(selector)
