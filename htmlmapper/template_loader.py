"""
Template loading

Templates are JSON values. They reach the mapper either as Python
dicts/lists, as JSON text, or as .json/.yaml/.yml files.

Example template.yaml:
```yaml
$: article.post
title: h2
url: a|attr:href
tags:
  - $: .tag
    name: $
```
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from htmlmapper.errors import TemplateSyntaxError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def decode_template(text: Union[str, bytes], source: Optional[str] = None) -> Any:
    """Decode JSON template text"""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise TemplateSyntaxError(e.msg, source=source, lineno=e.lineno, colno=e.colno) from e


def decode_yaml_template(text: str, source: Optional[str] = None) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        raise TemplateSyntaxError(
            getattr(e, "problem", None) or str(e),
            source=source,
            lineno=mark.line + 1 if mark else None,
            colno=mark.column + 1 if mark else None,
        ) from e


def load_template(path: Union[str, Path]) -> Any:
    """Load a template file, picking the decoder from the file suffix"""
    path = Path(path)
    content = path.read_text(encoding="utf-8")
    logger.debug(f"Loading template {path}")
    if path.suffix.lower() in YAML_SUFFIXES:
        return decode_yaml_template(content, source=str(path))
    return decode_template(content, source=str(path))
