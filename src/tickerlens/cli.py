"""Command-line interface for TickerLens."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from tickerlens import __version__
from tickerlens.config.config import Config, LazyConfig, load_config
from tickerlens.crawler.http_client import HttpClient
from tickerlens.errors import LookupFailure
from tickerlens.extractor.models import ExtractionResult
from tickerlens.lookup import Category, InstrumentFetcher
from tickerlens.normalizer import normalize
from tickerlens.observability.logging import configure_logging

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (overrides the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """TickerLens - indicators for Brazilian listed instruments."""
    cfg = load_config(Path(config) if config else None)
    if log_level:
        cfg.monitoring.log_level = log_level
    configure_logging(cfg.monitoring)
    LazyConfig.override(cfg)

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to web.host)")
@click.option("--port", default=None, type=int, help="Bind port (defaults to web.port)")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Run the web dashboard and JSON API."""
    from tickerlens.web.main import run_web_server

    cfg: Config = ctx.obj["config"]
    run_web_server(host=host or cfg.web.host, port=port or cfg.web.port, config=cfg)


async def _lookup(cfg: Config, category: str, ticker: str) -> ExtractionResult:
    async with HttpClient(cfg.fetcher) as client:
        return await InstrumentFetcher(client, cfg.fetcher).extract(category, ticker)


def _render_table(category: str, result: ExtractionResult) -> Table:
    try:
        heading = f"{Category(category).label} - {result.title}"
    except ValueError:
        heading = result.title
    table = Table(title=heading)
    table.add_column("Indicador", style="bold")
    table.add_column("Valor", justify="right")
    for label, value in result.indicators.items():
        table.add_row(label, value)
    return table


@cli.command()
@click.argument("category")
@click.argument("ticker")
@click.option("--raw", is_flag=True, help="Skip label normalization")
@click.option("--json", "as_json", is_flag=True, help="Print the API JSON document instead of a table")
@click.pass_context
def lookup(ctx: click.Context, category: str, ticker: str, raw: bool, as_json: bool) -> None:
    """Look up TICKER under CATEGORY (acoes, fundos-imobiliarios, fiagros)."""
    cfg: Config = ctx.obj["config"]
    try:
        result = asyncio.run(_lookup(cfg, category, ticker))
    except LookupFailure as e:
        console.print(f"[red]{e.message}[/red]")
        sys.exit(1)

    if not raw:
        result = normalize(result)

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        console.print(_render_table(category, result))


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
