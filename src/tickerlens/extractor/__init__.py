"""
Instrument page extraction.

Pages are parsed through a ``DocumentView`` backend (selectolax by default,
BeautifulSoup on request) and scraped for a title and the label/value pairs
of their informational blocks.
"""

from .indicator_extractor import (
    DOCUMENT_BACKENDS,
    collapse_whitespace,
    extract_indicator_map,
    extract_indicators,
    extract_title,
    parse_document,
)
from .models import ExtractionResult
from .protocols import DocumentView, Element
from .selectolax_document import SelectolaxDocument
from .soup_document import SoupDocument

__all__ = [
    "DOCUMENT_BACKENDS",
    "DocumentView",
    "Element",
    "ExtractionResult",
    "SelectolaxDocument",
    "SoupDocument",
    "collapse_whitespace",
    "extract_indicator_map",
    "extract_indicators",
    "extract_title",
    "parse_document",
]
