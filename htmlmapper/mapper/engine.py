"""
Mapper entry point

Usage:
    from htmlmapper import map_html

    html = '<ul><li><a href="/a">A</a></li><li><a href="/b">B</a></li></ul>'
    template = [{"$": "li", "name": "a", "url": "a|attr:href"}]
    await map_html(html, template)
    # [{"name": "A", "url": "/a"}, {"name": "B", "url": "/b"}]
"""

import asyncio
import dataclasses
import logging
from typing import Any, Mapping, Union

from bs4 import Tag

from htmlmapper.errors import InvalidInputError
from htmlmapper.mapper.walker import TemplateWalker
from htmlmapper.pipes.builtins import DEFAULT_PIPES
from htmlmapper.scope.scope import Scope
from htmlmapper.template_loader import decode_template
from htmlmapper.types.options import MapperOptions

logger = logging.getLogger(__name__)

Document = Union[str, bytes, Scope, Tag]
OptionsInput = Union[MapperOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsInput = None) -> MapperOptions:
    """Merge caller options over the defaults; caller pipes win over built-ins"""
    if options is None:
        options = MapperOptions()
    elif isinstance(options, Mapping):
        options = MapperOptions.from_mapping(options)
    elif not isinstance(options, MapperOptions):
        raise InvalidInputError(f"Options must be MapperOptions or a mapping, got {type(options).__name__}")

    if not isinstance(options.scope_key, str) or not options.scope_key:
        raise InvalidInputError("scope_key must be a non-empty string")
    if not isinstance(options.pipe_key, str) or not options.pipe_key:
        raise InvalidInputError("pipe_key must be a non-empty string")
    if not isinstance(options.pipes, Mapping):
        raise InvalidInputError(f"pipes must be a mapping, got {type(options.pipes).__name__}")

    return dataclasses.replace(options, pipes=DEFAULT_PIPES.merged(options.pipes))


def to_scope(document: Document) -> Scope:
    """Accept markup, a BeautifulSoup node, or an existing Scope"""
    if isinstance(document, Scope):
        return document
    if isinstance(document, Tag):
        return Scope.from_node(document)
    if isinstance(document, (str, bytes)):
        return Scope.from_markup(document)
    raise InvalidInputError(f"Document must be markup, a Tag or a Scope, got {type(document).__name__}")


async def map_html(document: Document, template: Any, options: OptionsInput = None) -> Any:
    """
    Map a document through a template.

    Args:
        document: Markup text, a BeautifulSoup Tag, or a Scope
        template: dict/list template, or the same encoded as JSON text
        options: MapperOptions or a dict with scope_key, pipe_key, pipes

    Returns:
        The mapped JSON value; None when an object template matches nothing

    Raises:
        TemplateSyntaxError: template text is not valid JSON
        NamedPipeNotFound: a pipe chain names an unregistered pipe
        InvalidInputError: document, template or options have the wrong shape
    """
    if isinstance(template, (str, bytes)):
        template = decode_template(template)
    if not isinstance(template, (dict, list)):
        raise InvalidInputError(f"Template must be an object or an array, got {type(template).__name__}")

    resolved = resolve_options(options)
    scope = to_scope(document)
    return await TemplateWalker(resolved).walk(scope, template)


def map_html_sync(document: Document, template: Any, options: OptionsInput = None) -> Any:
    """Run map_html to completion outside an event loop"""
    return asyncio.run(map_html(document, template, options))
