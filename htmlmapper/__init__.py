"""
htmlmapper - declarative HTML to JSON mapping

A JSON-shaped template of CSS selectors and pipes is resolved against a
markup document:

    template = [{
        "$": "article",
        "title": "h2|trim",
        "url": "a|attr:href",
        "published": "time|attr:datetime|parseAs:date",
    }]
"""

from htmlmapper.config import Config, config
from htmlmapper.errors import (
    MapperError,
    TemplateSyntaxError,
    NamedPipeNotFound,
    InvalidInputError,
)
from htmlmapper.types import MapperOptions, PipeSpec, PipeInput
from htmlmapper.scope import Scope, resolve_scope
from htmlmapper.pipes import PipeRegistry, DEFAULT_PIPES, parse_pipes, apply_pipes
from htmlmapper.template_loader import load_template, decode_template
from htmlmapper.mapper import map_html, map_html_sync

__all__ = [
    'map_html',
    'map_html_sync',
    'MapperOptions',
    'PipeSpec',
    'PipeInput',
    'PipeRegistry',
    'DEFAULT_PIPES',
    'parse_pipes',
    'apply_pipes',
    'Scope',
    'resolve_scope',
    'load_template',
    'decode_template',
    'MapperError',
    'TemplateSyntaxError',
    'NamedPipeNotFound',
    'InvalidInputError',
    'Config',
    'config',
]
