"""Scope - read-only view over nodes of one parsed document"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from bs4 import BeautifulSoup, Tag

from htmlmapper.config import config

logger = logging.getLogger(__name__)


class DocumentIndex:
    """Document-order ordinals for every node below a root"""

    def __init__(self, root: Tag):
        # Holding the root keeps every indexed node alive, so ids stay unique
        self.root = root
        self._order: Dict[int, int] = {id(root): 0}
        for i, node in enumerate(root.descendants, start=1):
            self._order[id(node)] = i

    def position(self, node) -> int:
        return self._order.get(id(node), 0)

    @classmethod
    def for_node(cls, node: Tag) -> "DocumentIndex":
        root = node
        while root.parent is not None:
            root = root.parent
        return cls(root)


class Scope:
    """
    Ordered, deduplicated set of element nodes from a single document.

    A scope never changes after construction; narrowing returns a new
    scope whose nodes are descendants of the current ones.
    """

    def __init__(self, nodes: Iterable[Tag], index: DocumentIndex):
        self._nodes: Tuple[Tag, ...] = tuple(nodes)
        self._index = index

    @classmethod
    def from_markup(cls, markup: Union[str, bytes], parser: Optional[str] = None) -> "Scope":
        """Parse markup once and return a scope over the whole document"""
        soup = BeautifulSoup(markup, parser or config.parser, multi_valued_attributes=None)
        logger.debug(f"Parsed {len(markup)} chars of markup with {parser or config.parser}")
        return cls([soup], DocumentIndex(soup))

    @classmethod
    def from_node(cls, node: Tag) -> "Scope":
        """Wrap an already-parsed BeautifulSoup node"""
        return cls([node], DocumentIndex.for_node(node))

    @property
    def nodes(self) -> Tuple[Tag, ...]:
        return self._nodes

    @property
    def position(self) -> Optional[int]:
        """Document-order position of the first node, None for an empty scope"""
        if not self._nodes:
            return None
        return self._index.position(self._nodes[0])

    def find(self, selector: str) -> "Scope":
        """Descendants of any node in this scope matching a CSS selector"""
        seen = set()
        matches: List[Tag] = []
        for node in self._nodes:
            for match in node.select(selector):
                if id(match) not in seen:
                    seen.add(id(match))
                    matches.append(match)
        if len(self._nodes) > 1:
            matches.sort(key=self._index.position)
        return Scope(matches, self._index)

    def text(self) -> str:
        return "".join(node.get_text() for node in self._nodes)

    def attr(self, name: str) -> Optional[str]:
        if not self._nodes:
            return None
        value = self._nodes[0].get(name)
        if isinstance(value, list):
            # Trees parsed outside from_markup keep class/rel as lists
            value = " ".join(value)
        return value

    def __iter__(self) -> Iterator["Scope"]:
        for node in self._nodes:
            yield Scope([node], self._index)

    def __len__(self) -> int:
        return len(self._nodes)

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def __repr__(self) -> str:
        names = [node.name for node in self._nodes[:3]]
        more = "..." if len(self._nodes) > 3 else ""
        return f"Scope({len(self._nodes)} nodes: {names}{more})"
