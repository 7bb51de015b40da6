"""Tests for sequential pipe execution."""

import asyncio

import pytest

from htmlmapper import MapperOptions, NamedPipeNotFound, PipeSpec, apply_pipes
from htmlmapper.mapper.engine import resolve_options

pytestmark = pytest.mark.asyncio


def options_with(**pipes):
    return resolve_options(MapperOptions(pipes=pipes))


class TestApplyPipes:

    async def test_left_to_right_composition(self, make_scope):
        calls = []

        def step(tag):
            def pipe(pipe_input):
                calls.append((tag, pipe_input.value, pipe_input.args))
                return f"{pipe_input.value}{tag}"
            return pipe

        options = options_with(a=step("a"), b=step("b"), c=step("c"))
        pipes = [PipeSpec("a", ("1",)), PipeSpec("b"), PipeSpec("c", ("3", "x"))]
        result = await apply_pipes(pipes, "v", "", make_scope("<p/>"), options)

        assert result == "vabc"
        assert calls == [("a", "v", ("1",)), ("b", "va", ()), ("c", "vab", ("3", "x"))]

    async def test_awaits_each_step_before_the_next(self, make_scope):
        events = []

        async def slow(pipe_input):
            events.append("slow-start")
            await asyncio.sleep(0.01)
            events.append("slow-end")
            return pipe_input.value + 1

        def fast(pipe_input):
            events.append("fast")
            return pipe_input.value * 10

        options = options_with(slow=slow, fast=fast)
        result = await apply_pipes([PipeSpec("slow"), PipeSpec("fast")], 1, "", make_scope("<p/>"), options)

        assert result == 20
        assert events == ["slow-start", "slow-end", "fast"]

    async def test_receives_selector_scope_and_options(self, make_scope):
        seen = {}

        def spy(pipe_input):
            seen.update(selector=pipe_input.selector, scope=pipe_input.scope, options=pipe_input.options)
            return pipe_input.value

        scope = make_scope("<p>x</p>")
        options = options_with(spy=spy)
        await apply_pipes([PipeSpec("spy")], None, "p", scope, options)

        assert seen["selector"] == "p"
        assert seen["scope"] is scope
        assert seen["options"] is options
        assert "text" in seen["options"].pipes

    async def test_unknown_pipe_aborts(self, make_scope):
        calls = []

        def record(pipe_input):
            calls.append(pipe_input.value)
            return pipe_input.value

        options = options_with(record=record)
        with pytest.raises(NamedPipeNotFound) as exc:
            await apply_pipes(
                [PipeSpec("record"), PipeSpec("bogus"), PipeSpec("record")],
                "v", "", make_scope("<p/>"), options,
            )
        assert exc.value.name == "bogus"
        assert "bogus" in str(exc.value)
        assert calls == ["v"]

    async def test_pipe_errors_propagate(self, make_scope):
        def broken(pipe_input):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await apply_pipes([PipeSpec("broken")], None, "", make_scope("<p/>"), options_with(broken=broken))

    async def test_empty_chain_returns_value(self, make_scope):
        assert await apply_pipes([], {"k": 1}, "", make_scope("<p/>"), options_with()) == {"k": 1}
