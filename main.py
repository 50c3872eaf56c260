#!/usr/bin/env python3
"""
Production entry point for TickerLens.

Serves the web dashboard and JSON API. ``python main.py health`` probes a
running instance for container orchestration.
"""

from __future__ import annotations

import json
import os
import sys
import urllib.request
from pathlib import Path

import structlog
from tickerlens.config.config import LazyConfig, load_config
from tickerlens.observability.logging import configure_logging
from tickerlens.web.main import run_web_server

logger = structlog.get_logger(__name__)


def health_check(host: str, port: int) -> dict:
    """Query /health on a running instance."""
    try:
        with urllib.request.urlopen(f"http://{host}:{port}/health", timeout=5) as response:
            return json.loads(response.read())
    except OSError as e:
        return {"status": "unhealthy", "error": str(e)}


def main() -> None:
    """Main entry point."""
    config_path = os.getenv("TICKERLENS_CONFIG")
    config = load_config(Path(config_path) if config_path else None)

    if len(sys.argv) > 1 and sys.argv[1] == "health":
        health = health_check(config.web.host, config.web.port)
        print(json.dumps(health, indent=2))
        sys.exit(0 if health.get("status") == "healthy" else 1)

    configure_logging(config.monitoring)
    LazyConfig.override(config)
    try:
        run_web_server(host=config.web.host, port=config.web.port, config=config)
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down")


if __name__ == "__main__":
    main()
