"""
Indicator extraction from instrument pages.

An instrument page carries its name in the first ``<h1>`` and its metrics in
``.info`` blocks, each holding a ``.title`` label and a ``.value``::

    <div class="info">
        <h3 class="title">P/VP</h3>
        <strong class="value">1,02</strong>
    </div>

A label or value spread over several ``.title``/``.value`` descendants is the
concatenation of their text, which is how the duplicated labels handled by
``tickerlens.normalizer`` come to exist.
"""

from __future__ import annotations

import re
from typing import Callable, Dict

import structlog

from tickerlens.errors import NotFoundError, ParseError

from .models import ExtractionResult
from .protocols import DocumentView, Element
from .selectolax_document import SelectolaxDocument
from .soup_document import SoupDocument

logger = structlog.get_logger(__name__)

HEADING_SELECTOR = "h1"
INFO_BLOCK_SELECTOR = ".info"
LABEL_SELECTOR = ".title"
VALUE_SELECTOR = ".value"

_WHITESPACE_RE = re.compile(r"\s+")

DOCUMENT_BACKENDS: Dict[str, Callable[[str], DocumentView]] = {
    "selectolax": SelectolaxDocument,
    "soup": SoupDocument,
}


def parse_document(html: str, parser: str = "selectolax") -> DocumentView:
    """Parse ``html`` with the named backend."""
    try:
        backend = DOCUMENT_BACKENDS[parser]
    except KeyError:
        raise ValueError(f"Unknown HTML parser backend: {parser!r}") from None
    try:
        return backend(html)
    except Exception as e:
        logger.warning("HTML parsing failed", parser=parser, error=str(e))
        raise ParseError("Não foi possível interpretar a página retornada.") from e


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def _joined_text(element: Element, selector: str) -> str:
    return "".join(match.text() for match in element.all_matches(selector))


def extract_title(document: DocumentView) -> str:
    heading = document.first_match(HEADING_SELECTOR)
    return heading.text().strip() if heading is not None else ""


def extract_indicator_map(document: DocumentView) -> Dict[str, str]:
    """Collect label -> value pairs from every info block, last duplicate wins."""
    indicators: Dict[str, str] = {}
    for block in document.all_matches(INFO_BLOCK_SELECTOR):
        label = _joined_text(block, LABEL_SELECTOR).strip()
        value = collapse_whitespace(_joined_text(block, VALUE_SELECTOR))
        if label and value:
            indicators[label] = value
    return indicators


def extract_indicators(html: str, *, parser: str = "selectolax") -> ExtractionResult:
    """
    Extract the instrument title and raw indicators from a page.

    Args:
        html: Page markup, well-formed or not.
        parser: Document backend name, see ``DOCUMENT_BACKENDS``.

    Raises:
        NotFoundError: the page has no heading or an empty one.
        ParseError: the markup could not be parsed at all.
    """
    if not html.strip():
        raise NotFoundError()

    document = parse_document(html, parser)

    title = extract_title(document)
    if not title:
        raise NotFoundError()

    return ExtractionResult(title=title, indicators=extract_indicator_map(document))
