"""Template model"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from htmlmapper.errors import InvalidInputError
from htmlmapper.types.options import MapperOptions

# Leaf values: selector strings, quoted literals, or JSON primitives
Leaf = Union[str, int, float, bool, None]

# Synthetic position key for literal elements of an array template
LITERAL_POSITION_KEY = "_"


def is_template(value: Any) -> bool:
    return isinstance(value, (dict, list))


@dataclass
class ObjectTemplate:
    """
    Object template with the reserved keys pulled out of the field mapping.

    has_scope_selector is tracked separately from scope_selector because
    declaring the key (even with an empty value) is what makes a result
    carry a document position.
    """
    fields: Dict[str, Any] = field(default_factory=dict)
    scope_selector: Optional[str] = None
    has_scope_selector: bool = False
    pipe_chain: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], options: MapperOptions) -> "ObjectTemplate":
        template = cls()
        for key, value in data.items():
            if key == options.scope_key:
                if is_template(value):
                    raise InvalidInputError(f"Scope selector {key!r} must be a string, got {type(value).__name__}")
                template.has_scope_selector = True
                template.scope_selector = None if value is None else str(value)
            elif key == options.pipe_key:
                # String, list of strings or structured {name, args} entries
                template.pipe_chain = value
            else:
                template.fields[key] = value
        return template


@dataclass
class ResultEntry:
    """A mapped value plus the positions used to order array output"""
    value: Any
    position: Dict[str, int] = field(default_factory=dict)
    literal: bool = False

    def sort_key(self, scope_key: str) -> int:
        if scope_key in self.position:
            return self.position[scope_key]
        if self.literal:
            return self.position.get(LITERAL_POSITION_KEY, 0)
        return 0
