"""
BeautifulSoup implementation of DocumentView.
"""

from __future__ import annotations

from typing import List, Optional

from bs4 import BeautifulSoup, Tag


class SoupElement:
    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def text(self) -> str:
        return self._tag.get_text()

    def all_matches(self, selector: str) -> List[SoupElement]:
        return [SoupElement(tag) for tag in self._tag.select(selector)]


class SoupDocument:
    """DocumentView over a BeautifulSoup tree."""

    name = "soup"

    def __init__(self, html: str, parser: str = "html.parser") -> None:
        # Use built-in parser for maximum compatibility
        self._soup = BeautifulSoup(html, parser)

    def first_match(self, selector: str) -> Optional[SoupElement]:
        tag = self._soup.select_one(selector)
        return SoupElement(tag) if tag is not None else None

    def all_matches(self, selector: str) -> List[SoupElement]:
        return [SoupElement(tag) for tag in self._soup.select(selector)]
