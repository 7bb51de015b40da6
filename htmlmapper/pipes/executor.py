"""Pipe Executor - runs a parsed chain strictly left to right"""

import inspect
import logging
from typing import Any, Sequence

from htmlmapper.errors import NamedPipeNotFound
from htmlmapper.scope.scope import Scope
from htmlmapper.types.options import MapperOptions
from htmlmapper.types.pipe_spec import PipeInput, PipeSpec

logger = logging.getLogger(__name__)


async def apply_pipes(
    pipes: Sequence[PipeSpec],
    value: Any,
    selector: str,
    scope: Scope,
    options: MapperOptions,
) -> Any:
    """
    Run pipes in order, feeding each one the previous output.

    Each pipe sees only its own args. Awaitable results are awaited
    before the next pipe starts.

    Raises:
        NamedPipeNotFound: a pipe name is missing from options.pipes
    """
    for spec in pipes:
        func = options.pipes.get(spec.name)
        if func is None:
            raise NamedPipeNotFound(spec.name)

        result = func(PipeInput(
            value=value,
            selector=selector,
            scope=scope,
            options=options,
            args=spec.args,
        ))
        if inspect.isawaitable(result):
            result = await result

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"pipe {spec.name}{list(spec.args) if spec.args else ''}: {value!r} -> {result!r}")
        value = result
    return value
