"""Data types shared by the mapper components"""

from htmlmapper.types.options import MapperOptions
from htmlmapper.types.pipe_spec import PipeSpec, PipeInput
from htmlmapper.types.template import (
    ObjectTemplate,
    ResultEntry,
    LITERAL_POSITION_KEY,
    is_template,
)

__all__ = [
    'MapperOptions',
    'PipeSpec',
    'PipeInput',
    'ObjectTemplate',
    'ResultEntry',
    'LITERAL_POSITION_KEY',
    'is_template',
]
