"""
TickerLens - indicator dashboard for Brazilian listed instruments.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .errors import LookupFailure
from .extractor import ExtractionResult, extract_indicators
from .lookup import Category, InstrumentFetcher, lookup_categories
from .normalizer import normalize

__all__ = [
    "__version__",
    "Category",
    "Config",
    "ExtractionResult",
    "InstrumentFetcher",
    "LookupFailure",
    "extract_indicators",
    "lookup_categories",
    "normalize",
]
