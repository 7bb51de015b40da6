"""
Pipe Registry

Immutable mapping from pipe name to pipe function.

Usage:
    from htmlmapper.pipes import DEFAULT_PIPES

    def only_https(pipe_input):
        return str(pipe_input.value).replace("http:", "https:", 1)

    pipes = DEFAULT_PIPES.merged({"onlyHttps": only_https})
    pipes["onlyHttps"]

A registry never changes after construction. merged() always returns a
new registry, so two calls with different overrides cannot see each
other's pipes.
"""

import inspect
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from htmlmapper.errors import InvalidInputError

logger = logging.getLogger(__name__)

PipeFunction = Callable[..., Any]


@dataclass(frozen=True)
class PipeInfo:
    """Metadata about a registered pipe"""

    name: str
    func: PipeFunction
    description: str = ""
    is_async: bool = False
    builtin: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "is_async": self.is_async,
            "builtin": self.builtin,
        }


def describe_pipe(name: str, func: PipeFunction, builtin: bool = False) -> PipeInfo:
    doc = inspect.getdoc(func) or ""
    return PipeInfo(
        name=name,
        func=func,
        description=doc.splitlines()[0] if doc else "",
        is_async=inspect.iscoroutinefunction(func),
        builtin=builtin,
    )


class PipeRegistry(Mapping[str, PipeFunction]):
    """Read-only name -> pipe function mapping"""

    def __init__(self, pipes: Optional[Mapping[str, PipeFunction]] = None, builtin: bool = False):
        infos: Dict[str, PipeInfo] = {}
        for name, func in (pipes or {}).items():
            if not callable(func):
                raise InvalidInputError(f"Pipe {name!r} is not callable: {func!r}")
            infos[name] = describe_pipe(name, func, builtin=builtin)
        self._infos = MappingProxyType(infos)

    def __getitem__(self, name: str) -> PipeFunction:
        return self._infos[name].func

    def __iter__(self) -> Iterator[str]:
        return iter(self._infos)

    def __len__(self) -> int:
        return len(self._infos)

    def __repr__(self) -> str:
        return f"PipeRegistry({list(self._infos)})"

    def info(self, name: str) -> Optional[PipeInfo]:
        return self._infos.get(name)

    def list(self) -> List[PipeInfo]:
        return list(self._infos.values())

    def merged(self, overrides: Optional[Mapping[str, PipeFunction]] = None) -> "PipeRegistry":
        """
        Return a new registry with overrides layered on top.

        Args:
            overrides: Extra or replacement pipes; they win on name collision

        Returns:
            New PipeRegistry, self is left untouched
        """
        if not overrides:
            return self
        registry = PipeRegistry.__new__(PipeRegistry)
        infos = dict(self._infos)
        for name, func in overrides.items():
            if not callable(func):
                raise InvalidInputError(f"Pipe {name!r} is not callable: {func!r}")
            if name in infos and infos[name].func is func:
                continue
            if name in infos:
                logger.debug(f"Pipe override replaces {name}")
            infos[name] = describe_pipe(name, func)
        registry._infos = MappingProxyType(infos)
        return registry


@dataclass
class PipeCollector:
    """Collects functions at import time through the pipe() decorator"""

    pipes: Dict[str, PipeFunction] = field(default_factory=dict)

    def pipe(self, name: Optional[str] = None):
        """
        Decorator to collect a pipe function.

        Example:
            @collector.pipe("upper")
            def upper_pipe(pipe_input):
                ...
        """
        def decorator(func: PipeFunction) -> PipeFunction:
            self.pipes[name or func.__name__] = func
            return func
        return decorator

    def freeze(self) -> PipeRegistry:
        return PipeRegistry(self.pipes, builtin=True)
