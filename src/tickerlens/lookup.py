"""
Instrument lookups: URL building, fetching, extraction and fan-out.

``InstrumentFetcher.extract`` is the single-shot operation behind both the
JSON API and the dashboard. ``lookup_categories`` runs several lookups
concurrently and keeps going when some of them fail.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional
from urllib.parse import quote

import structlog

from tickerlens.config.config import FetcherConfig
from tickerlens.crawler.http_client import HttpClient
from tickerlens.errors import LookupFailure, MissingParameterError
from tickerlens.extractor import ExtractionResult, extract_indicators
from tickerlens.normalizer import normalize
from tickerlens.observability.metrics import record_lookup

logger = structlog.get_logger(__name__)


class Category(str, Enum):
    """Instrument categories, valued by their upstream path segment."""

    ACOES = "acoes"
    FUNDOS_IMOBILIARIOS = "fundos-imobiliarios"
    FIAGROS = "fiagros"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    Category.ACOES: "Ações",
    Category.FUNDOS_IMOBILIARIOS: "Fundos Imobiliários",
    Category.FIAGROS: "Fiagros",
}


_CATEGORY_VALUES = frozenset(c.value for c in Category)


def _metric_category(category: str) -> str:
    # bound label cardinality, category is caller input
    return category if category in _CATEGORY_VALUES else "other"


def build_instrument_url(base_url: str, category: str, ticker: str) -> str:
    """``{base_url}/{category}/{ticker}`` with both segments percent-encoded."""
    return f"{base_url.rstrip('/')}/{quote(category, safe='')}/{quote(ticker, safe='')}"


def _decode_body(body: bytes, charset: Optional[str]) -> str:
    try:
        return body.decode(charset or "utf-8", errors="replace")
    except LookupError:
        # unknown charset label in Content-Type
        return body.decode("utf-8", errors="replace")


class InstrumentFetcher:
    """Fetches and scrapes one instrument page per call."""

    def __init__(self, client: HttpClient, config: FetcherConfig):
        self.client = client
        self.config = config

    async def extract(self, category: Optional[str], ticker: Optional[str]) -> ExtractionResult:
        """
        Look up ``ticker`` under ``category``.

        Category values are not checked against ``Category``; routing is left
        to the upstream site.

        Raises:
            MissingParameterError: either argument is empty, no request made.
            UpstreamError, TransportError, ParseError, NotFoundError
        """
        if not category or not ticker:
            raise MissingParameterError()

        url = build_instrument_url(self.config.base_url, category, ticker)
        log = logger.bind(category=category, ticker=ticker, url=url)
        try:
            response = await self.client.fetch(url)
            html = _decode_body(response.body, response.charset)
            result = extract_indicators(html, parser=self.config.parser)
        except LookupFailure as e:
            record_lookup(_metric_category(category), e.kind)
            log.info("Lookup failed", kind=e.kind, error=e.message)
            raise

        record_lookup(_metric_category(category), "ok")
        log.info("Lookup succeeded", title=result.title, indicators=len(result.indicators))
        return result


@dataclass
class CategoryLookup:
    """Outcome of one category lookup in a fan-out; exactly one of result/error is set."""

    category: str
    ticker: str
    result: Optional[ExtractionResult] = None
    error: Optional[LookupFailure] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


async def lookup_categories(
    fetcher: InstrumentFetcher,
    tickers: Mapping[str, str],
    *,
    normalized: bool = True,
) -> List[CategoryLookup]:
    """
    Look up every ``category -> ticker`` pair concurrently.

    Failures are captured per category; anything that is not a
    ``LookupFailure`` is logged and reported as an internal error. Results keep
    the order of ``tickers``.
    """

    async def _one(category: str, ticker: str) -> CategoryLookup:
        try:
            result = await fetcher.extract(category, ticker)
        except LookupFailure as e:
            return CategoryLookup(category=category, ticker=ticker, error=e)
        except Exception:
            logger.exception("Unexpected error during lookup", category=category, ticker=ticker)
            return CategoryLookup(category=category, ticker=ticker, error=LookupFailure())
        return CategoryLookup(
            category=category,
            ticker=ticker,
            result=normalize(result) if normalized else result,
        )

    return list(await asyncio.gather(*(_one(c, t) for c, t in tickers.items())))

