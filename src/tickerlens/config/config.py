"""
Configuration management for TickerLens using Pydantic.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, ClassVar, Dict, Literal, cast

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/58.0.3029.110 Safari/537.3"
)

# --- Nested Configuration Models ---


class FetcherConfig(BaseModel):
    """Upstream page fetching configuration."""

    base_url: str = Field(default="https://statusinvest.com.br", description="Root of the instrument pages.")
    timeout: float = Field(default=30.0, gt=0, description="Total HTTP request timeout in seconds.")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent sent upstream.")
    accept_language: str = Field(default="pt-BR,pt;q=0.9,en;q=0.8", description="Accept-Language sent upstream.")
    referer: str = Field(default="https://statusinvest.com.br/", description="Referer sent upstream.")
    parser: Literal["selectolax", "soup"] = Field(default="selectolax", description="HTML parser backend.")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return v.rstrip("/")

    def request_headers(self) -> Dict[str, str]:
        """Browser-like header set sent with every page request."""
        return {
            "User-Agent": self.user_agent,
            "Accept-Language": self.accept_language,
            "Referer": self.referer,
        }


class WebUIConfig(BaseModel):
    """Configuration for the web UI."""

    host: str = Field(default="127.0.0.1", description="Host for the web server.")
    port: int = Field(default=8000, description="Port for the web server.")
    default_tickers: Dict[str, str] = Field(
        default_factory=lambda: {
            "acoes": "BBDC4",
            "fundos-imobiliarios": "KNRI11",
            "fiagros": "HGAG11",
        },
        description="Ticker pre-filled in the form for each category.",
    )


class MonitoringConfig(BaseModel):
    """Configuration for logging and metrics."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(
        default=None,
        description="Path to log file. If None, logs to console.",
    )
    json_logs: bool = Field(default=False, description="Render console logs as JSON.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "TickerLens"
    version: str = "0.1.0"
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)
    web: WebUIConfig = Field(default_factory=WebUIConfig)

    model_config = SettingsConfigDict(env_prefix="TICKERLENS_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for path in (current_dir / "config.yaml", current_dir / "config.yml"):
        if path.exists():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load from an explicit path, a discovered config file, or defaults."""
    path = path or find_config_file()
    if path is None:
        log.info("No config file found. Using default settings.")
        return Config()
    log.info("Loading configuration from: %s", path)
    return Config.from_yaml(path)


# --- Lazy Configuration Loader ---


class LazyConfig:
    """
    A proxy for the Config object that delays its loading and validation
    until an attribute is first accessed. This prevents configuration errors
    from crashing the application on import.
    """

    _config: ClassVar[Config | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __getattr__(self, name: str) -> Any:
        return getattr(self.resolve(), name)

    def resolve(self) -> Config:
        if self.__class__._config is None:
            with self.__class__._lock:
                if self.__class__._config is None:
                    self.__class__._config = self._load_config_with_fallback()
        return self.__class__._config

    @classmethod
    def override(cls, config: Config | None) -> None:
        """Replace the resolved configuration (None forces a reload on next access)."""
        with cls._lock:
            cls._config = config

    def _load_config_with_fallback(self) -> Config:
        """Load configuration from file or fall back to defaults."""
        try:
            return load_config()
        except (ValidationError, FileNotFoundError, yaml.YAMLError) as e:
            log.error(
                "Failed to load or validate configuration: %s. "
                "Falling back to default settings. Please check your config file.",
                e,
                exc_info=log.getEffectiveLevel() <= logging.DEBUG,
            )

        try:
            return Config()
        except ValidationError as e:
            log.critical("FATAL: Default configuration is invalid: %s", e, exc_info=True)
            raise RuntimeError(f"Default configuration is invalid, cannot start: {e}") from e


# --- Global Settings Instance ---
settings: "Config" = cast("Config", LazyConfig())
