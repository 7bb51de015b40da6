"""Mapper - template walking and leaf evaluation"""

from htmlmapper.mapper.leaf import evaluate_leaf, LeafValue
from htmlmapper.mapper.walker import TemplateWalker
from htmlmapper.mapper.engine import map_html, map_html_sync, resolve_options, to_scope

__all__ = [
    'evaluate_leaf',
    'LeafValue',
    'TemplateWalker',
    'map_html',
    'map_html_sync',
    'resolve_options',
    'to_scope',
]
