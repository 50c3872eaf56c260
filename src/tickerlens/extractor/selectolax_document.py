"""
selectolax (lexbor backend) implementation of DocumentView.
"""

from __future__ import annotations

from typing import List, Optional

from selectolax.lexbor import LexborHTMLParser, LexborNode


class SelectolaxElement:
    __slots__ = ("_node",)

    def __init__(self, node: LexborNode) -> None:
        self._node = node

    def text(self) -> str:
        return self._node.text(deep=True, separator="", strip=False)

    def all_matches(self, selector: str) -> List[SelectolaxElement]:
        # Node.css also matches the node itself; only descendants count.
        own_id = self._node.mem_id
        return [SelectolaxElement(node) for node in self._node.css(selector) if node.mem_id != own_id]


class SelectolaxDocument:
    """DocumentView over a selectolax parse tree; tolerant of malformed markup."""

    name = "selectolax"

    def __init__(self, html: str) -> None:
        self._tree = LexborHTMLParser(html)

    def first_match(self, selector: str) -> Optional[SelectolaxElement]:
        node = self._tree.css_first(selector)
        return SelectolaxElement(node) if node is not None else None

    def all_matches(self, selector: str) -> List[SelectolaxElement]:
        return [SelectolaxElement(node) for node in self._tree.css(selector)]
