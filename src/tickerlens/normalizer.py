"""
Label normalization for extracted indicators.

The upstream pages render responsive variants of some labels side by side
("Val. patrim. p/cota", "Valor patrim. p/cota", ...) and append tooltip text
after a ``help_outline`` icon glyph. Normalization strips the tooltip, folds
known variant concatenations onto one canonical label, and drops labels that
still carry the marker.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Dict, Mapping

from tickerlens.extractor.models import ExtractionResult

HELP_MARKER = "help_outline"

# Marker glued to the preceding text is not stripped; such labels are dropped.
_HELP_SUFFIX_RE = re.compile(r"\s+" + re.escape(HELP_MARKER) + r".*$", re.DOTALL)

RENAME_RULES: Mapping[str, str] = MappingProxyType(
    {
        "Val. patrim. p/cotaValor patrim. p/cotaVal. patrimonial p/cota": "Val. patrim. cota",
        "REND. MÉD. (24M)RENDIM. MÉDIO (24M)RENDIMENTO MENSAL MÉDIO (24M)": "REND. MÉD.",
        "PARTIC. NO IFIXPARTICIPAÇÃO NO IFIX": "PARTIC. NO IFIX",
    }
)


def strip_help_text(label: str) -> str:
    """Remove the tooltip suffix, marker included, and trim."""
    return _HELP_SUFFIX_RE.sub("", label, count=1).strip()


def canonical_label(label: str) -> str:
    """Cleaned and renamed form of a raw label; may be empty."""
    cleaned = strip_help_text(label)
    return RENAME_RULES.get(cleaned, cleaned)


def normalize_indicators(indicators: Mapping[str, str]) -> Dict[str, str]:
    normalized: Dict[str, str] = {}
    for label, value in indicators.items():
        final_label = canonical_label(label)
        if final_label and HELP_MARKER not in final_label:
            normalized[final_label] = value.strip()
    return normalized


def normalize(result: ExtractionResult) -> ExtractionResult:
    """Return a normalized copy of ``result``; the input is left untouched."""
    return ExtractionResult(
        title=result.title.strip(),
        indicators=normalize_indicators(result.indicators),
    )
