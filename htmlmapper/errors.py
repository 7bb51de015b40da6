"""
Mapper Errors

Every failure raised by htmlmapper derives from MapperError so callers
can catch the whole family at once.

Absence (no match, missing attribute, failed coercion) is never an error:
it is represented by None and flows through the pipe chain.
"""

from typing import Optional


class MapperError(Exception):
    """Base class for all mapping failures"""
    pass


class TemplateSyntaxError(MapperError, ValueError):
    """Template text could not be decoded"""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        lineno: Optional[int] = None,
        colno: Optional[int] = None,
    ):
        self.source = source
        self.lineno = lineno
        self.colno = colno
        location = ""
        if source:
            location = f"{source}: "
        if lineno is not None:
            location += f"line {lineno}"
            if colno is not None:
                location += f" column {colno}"
            location += ": "
        super().__init__(f"{location}{message}")


class NamedPipeNotFound(MapperError):
    """A pipe chain references a name missing from the registry"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Pipe function not found: {name}")


class InvalidInputError(MapperError, TypeError):
    """Document, template or options have an unsupported shape"""
    pass
