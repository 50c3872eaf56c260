"""
FastAPI application: the instrument JSON API and the dashboard page.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, Callable, Dict, Optional
from uuid import uuid4

import structlog
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.templating import Jinja2Templates

from tickerlens import __version__
from tickerlens.config.config import Config, LazyConfig
from tickerlens.crawler.http_client import HttpClient
from tickerlens.errors import LookupFailure
from tickerlens.lookup import Category, InstrumentFetcher, lookup_categories
from tickerlens.observability import export_prometheus

logger = structlog.get_logger(__name__)

TEMPLATES = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def get_fetcher(request: Request) -> InstrumentFetcher:
    return request.app.state.fetcher


async def lookup_failure_handler(request: Request, exc: LookupFailure) -> JSONResponse:
    """Render a ``LookupFailure`` as ``{"error": message}`` with its status code."""
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def bind_request_context(request: Request, call_next: Callable) -> Any:
    """Bind a request id for log correlation and add timing headers."""
    start_time = time.time()
    request_id = str(uuid4())
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)

    response = await call_next(request)

    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "Request handled",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        response_time_ms=round(process_time * 1000, 2),
    )
    return response


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Build the application; ``config`` defaults to the lazily loaded settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        cfg = config or LazyConfig().resolve()
        client = HttpClient(cfg.fetcher)
        await client.initialize()
        app.state.config = cfg
        app.state.http_client = client
        app.state.fetcher = InstrumentFetcher(client, cfg.fetcher)
        app.state.start_time = time.time()
        logger.info("TickerLens web app started", upstream=cfg.fetcher.base_url, parser=cfg.fetcher.parser)

        yield

        await client.close()
        logger.info("TickerLens web app stopped")

    app = FastAPI(title="TickerLens", version=__version__, lifespan=lifespan)
    app.add_exception_handler(LookupFailure, lookup_failure_handler)
    app.middleware("http")(bind_request_context)

    @app.get("/api/statusinvest")
    async def get_instrument(
        type: Optional[str] = Query(default=None),
        ticker: Optional[str] = Query(default=None),
        fetcher: InstrumentFetcher = Depends(get_fetcher),
    ) -> Dict[str, Any]:
        """Raw title and indicators for one instrument page."""
        try:
            result = await fetcher.extract(type, ticker)
        except LookupFailure:
            raise
        except Exception as e:
            logger.exception("Unexpected error during lookup", category=type, ticker=ticker)
            raise LookupFailure() from e
        return result.to_dict()

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request, fetcher: InstrumentFetcher = Depends(get_fetcher)) -> Response:
        """Ticker form; once submitted, one normalized section per category."""
        cfg: Config = request.app.state.config
        submitted = any(category.value in request.query_params for category in Category)
        tickers = {
            category.value: (
                request.query_params.get(category.value, "").strip()
                if submitted
                else cfg.web.default_tickers.get(category.value, "")
            )
            for category in Category
        }

        sections = []
        if submitted:
            for lookup in await lookup_categories(fetcher, tickers):
                sections.append({"category": Category(lookup.category), "lookup": lookup})

        return TEMPLATES.TemplateResponse(
            request,
            "index.html",
            {"categories": list(Category), "tickers": tickers, "sections": sections},
        )

    @app.get("/health")
    async def health_check(request: Request) -> Dict[str, Any]:
        """Liveness document."""
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": __version__,
            "uptime_seconds": time.time() - request.app.state.start_time,
            "http_client": request.app.state.http_client.get_stats(),
        }

    @app.get("/metrics")
    async def get_prometheus_metrics() -> Response:
        """Endpoint for Prometheus to scrape."""
        return Response(export_prometheus(), media_type="text/plain; version=0.0.4")

    return app


app = create_app()


def run_web_server(host: str = "127.0.0.1", port: int = 8000, config: Optional[Config] = None) -> None:
    """Run the FastAPI server with uvicorn."""
    import uvicorn

    logger.info("Starting TickerLens web UI", url=f"http://{host}:{port}")
    uvicorn.run(create_app(config) if config else app, host=host, port=port, log_config=None)
