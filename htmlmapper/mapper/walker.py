"""
Template Walker

Recursively resolves object and array templates against a scope.

Object templates fan out over every element their scope selector
matches; array templates collect all entries of their elements and put
them back into document order.
"""

import logging
from typing import Any, Dict, List

from htmlmapper.errors import InvalidInputError
from htmlmapper.mapper.leaf import evaluate_leaf
from htmlmapper.pipes.executor import apply_pipes
from htmlmapper.pipes.parser import parse_pipes
from htmlmapper.scope.resolver import resolve_scope
from htmlmapper.scope.scope import Scope
from htmlmapper.types.options import MapperOptions
from htmlmapper.types.template import (
    LITERAL_POSITION_KEY,
    ObjectTemplate,
    ResultEntry,
    is_template,
)

logger = logging.getLogger(__name__)


class TemplateWalker:
    """Walks one template with options fixed for the whole call"""

    def __init__(self, options: MapperOptions):
        self.options = options

    async def walk(self, scope: Scope, template: Any) -> Any:
        """
        Top-level dispatch.

        Arrays give the ordered list of values; objects give the result
        for the first matched element only, or None when nothing matched.
        """
        if isinstance(template, list):
            return await self.map_array(scope, template)
        if isinstance(template, dict):
            entries = await self.map_object(scope, template)
            return entries[0].value if entries else None
        raise InvalidInputError(f"Template must be an object or an array, got {type(template).__name__}")

    async def map_object(self, scope: Scope, data: Dict[str, Any]) -> List[ResultEntry]:
        """Map an object template once per element matched by its scope selector"""
        options = self.options
        template = ObjectTemplate.from_mapping(data, options)
        if template.has_scope_selector:
            sub_scope = resolve_scope(scope, template.scope_selector, options)
        else:
            sub_scope = scope
        object_pipes = parse_pipes(template.pipe_chain, options.pipe_key)

        logger.debug(f"object {template.scope_selector!r}: {len(sub_scope)} match(es)")

        results: List[ResultEntry] = []
        for element in sub_scope:
            result: Dict[str, Any] = {}
            position: Dict[str, int] = {}
            if template.has_scope_selector:
                position[options.scope_key] = element.position or 0

            for key, value in template.fields.items():
                if is_template(value):
                    # Nested selectors are relative to this element
                    result[key] = await self.walk(element, value)
                else:
                    leaf = await evaluate_leaf(value, element, options)
                    result[key] = leaf.value
                    position[key] = leaf.position or 0

            value = await apply_pipes(object_pipes, result, "", element, options)
            results.append(ResultEntry(value, position))
        return results

    async def map_array(self, scope: Scope, template: List[Any]) -> List[Any]:
        """Map every element of an array template and restore document order"""
        options = self.options
        entries: List[ResultEntry] = []
        for item in template:
            if isinstance(item, dict):
                entries.extend(await self.map_object(scope, item))
            elif isinstance(item, list):
                entries.append(ResultEntry(await self.map_array(scope, item)))
            else:
                leaf = await evaluate_leaf(item, scope, options)
                entries.append(ResultEntry(
                    leaf.value,
                    {LITERAL_POSITION_KEY: leaf.position or 0},
                    literal=True,
                ))

        # sorted() is stable: equal positions keep declaration order
        ordered = sorted(entries, key=lambda entry: entry.sort_key(options.scope_key))
        logger.debug(f"array: {len(ordered)} item(s) from {len(template)} template element(s)")
        return [entry.value for entry in ordered]
