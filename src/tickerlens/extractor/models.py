"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Instrument title plus its label -> value indicators, in document order."""

    title: str
    indicators: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze a private copy so callers cannot mutate a result after the fact.
        object.__setattr__(self, "indicators", MappingProxyType(dict(self.indicators)))

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape served by the API: ``{"name": ..., "indicators": {...}}``."""
        return {"name": self.title, "indicators": dict(self.indicators)}
