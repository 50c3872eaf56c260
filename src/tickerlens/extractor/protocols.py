"""
Protocols for pluggable HTML document backends.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Element(Protocol):
    """A node of a parsed document."""

    def text(self) -> str:
        """Concatenated text of the node and all its descendants, untrimmed."""
        ...

    def all_matches(self, selector: str) -> Sequence["Element"]:
        """Descendants matching a CSS selector, in document order."""
        ...


@runtime_checkable
class DocumentView(Protocol):
    """Selector-based read access to a parsed HTML document."""

    name: str

    def first_match(self, selector: str) -> Optional[Element]:
        """First element matching a CSS selector, or None."""
        ...

    def all_matches(self, selector: str) -> Sequence[Element]:
        """All elements matching a CSS selector, in document order."""
        ...
