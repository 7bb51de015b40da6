"""Mapper options dataclass"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping

from htmlmapper.config import config
from htmlmapper.errors import InvalidInputError


@dataclass(frozen=True)
class MapperOptions:
    """
    Options threaded unchanged through one mapping call.

    scope_key and pipe_key are the reserved template keys. pipes holds
    caller overrides until the engine merges them over the built-ins;
    after that it holds the complete registry for the call.
    """
    scope_key: str = field(default_factory=lambda: config.scope_key)
    pipe_key: str = field(default_factory=lambda: config.pipe_key)
    pipes: Mapping[str, Callable[..., Any]] = field(default_factory=lambda: MappingProxyType({}))

    FIELDS = ("scope_key", "pipe_key", "pipes")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MapperOptions":
        """Build options from a plain dict, leaving unset keys at their defaults"""
        unknown = [k for k in data if k not in cls.FIELDS]
        if unknown:
            raise InvalidInputError(f"Unknown mapper options: {', '.join(map(str, unknown))}")
        return cls(**{k: v for k, v in data.items() if v is not None})
