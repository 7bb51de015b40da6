"""
Pytest configuration and shared fixtures
"""

import asyncio
import logging

import pytest

from htmlmapper import Scope


def only_https(pipe_input):
    """Replace a leading http: with https:"""
    if pipe_input.value is None:
        return None
    text = str(pipe_input.value)
    if text.startswith("http:"):
        return "https:" + text[len("http:"):]
    return text


def required_props(pipe_input):
    """Object pipe: drop the object when any listed prop is missing"""
    obj = pipe_input.value
    missing = [prop for prop in pipe_input.args if obj is None or obj.get(prop) is None]
    if missing:
        logging.getLogger(__name__).warning(f"Dropping object, missing props {missing}: {obj!r}")
        return None
    return obj


def clean_array(pipe_input):
    """Object pipe: remove None items from a list prop"""
    obj = dict(pipe_input.value)
    prop = pipe_input.arg(0)
    items = obj.get(prop)
    obj[prop] = [item for item in items if item is not None] if isinstance(items, list) else []
    return obj


def replace_with_prop(pipe_input):
    """Object pipe: replace the object with one of its props"""
    return pipe_input.value.get(pipe_input.arg(0))


async def dummy_delay(pipe_input):
    """Async pass-through after sleeping for args[0] milliseconds"""
    try:
        delay = float(pipe_input.arg(0, 0))
    except ValueError:
        delay = 0
    await asyncio.sleep(delay / 1000)
    return pipe_input.value


def transform_table(pipe_input):
    """Root object pipe: turn {rows: [{cols: [{value}]}]} into a list of dicts"""
    table = pipe_input.value
    if not isinstance(table, dict):
        return table
    headers = [col["value"] for col in table["rows"][0]["cols"]]
    return [
        {header: row["cols"][i]["value"] for i, header in enumerate(headers)}
        for row in table["rows"][1:]
    ]


CUSTOM_PIPES = {
    "onlyHttps": only_https,
    "requiredProps": required_props,
    "cleanArray": clean_array,
    "replaceWithProp": replace_with_prop,
    "dummyDelay": dummy_delay,
    "transformTable": transform_table,
}


@pytest.fixture
def custom_pipes():
    return dict(CUSTOM_PIPES)


@pytest.fixture
def make_scope():
    """Build a Scope from markup"""
    def factory(markup: str) -> Scope:
        return Scope.from_markup(markup)
    return factory
