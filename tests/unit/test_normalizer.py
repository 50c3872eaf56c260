"""
Unit tests for label normalization.
"""

import pytest
from tickerlens.extractor import ExtractionResult, extract_indicators
from tickerlens.normalizer import (
    HELP_MARKER,
    RENAME_RULES,
    canonical_label,
    normalize,
    strip_help_text,
)


class TestStripHelpText:
    def test_removes_marker_and_tooltip(self):
        assert strip_help_text("P/VP help_outlinePreço sobre valor patrimonial") == "P/VP"

    def test_removes_multiline_tooltip(self):
        assert strip_help_text("DY\n  help_outline\n  Dividend yield dos\n últimos 12 meses") == "DY"

    def test_marker_without_leading_whitespace_is_kept(self):
        assert strip_help_text("Liquidezhelp_outline") == "Liquidezhelp_outline"

    def test_plain_label_is_trimmed(self):
        assert strip_help_text("  P/L  ") == "P/L"


class TestCanonicalLabel:
    @pytest.mark.parametrize("raw, canonical", list(RENAME_RULES.items()))
    def test_rename_table(self, raw, canonical):
        assert canonical_label(raw) == canonical

    def test_rename_applies_after_help_text_removal(self):
        raw = "PARTIC. NO IFIXPARTICIPAÇÃO NO IFIX help_outline Participação do fundo no índice"
        assert canonical_label(raw) == "PARTIC. NO IFIX"

    def test_unknown_label_passes_through(self):
        assert canonical_label("Valor atual") == "Valor atual"


class TestNormalize:
    def test_patrimonial_value_scenario(self):
        raw = ExtractionResult(
            title="KNRI11",
            indicators={"Val. patrim. p/cotaValor patrim. p/cotaVal. patrimonial p/cota": "  10,50  \n"},
        )

        assert dict(normalize(raw).indicators) == {"Val. patrim. cota": "10,50"}

    def test_title_is_trimmed(self):
        assert normalize(ExtractionResult(title="  KNRI11 \n", indicators={})).title == "KNRI11"

    def test_residual_marker_labels_are_dropped(self):
        raw = ExtractionResult(
            title="X",
            indicators={"Liquidez média diáriahelp_outline": "8.000.000", "P/L": "7,0"},
        )

        result = normalize(raw)

        assert list(result.indicators) == ["P/L"]
        assert all(HELP_MARKER not in label for label in result.indicators)

    def test_labels_emptied_by_stripping_are_dropped(self):
        raw = ExtractionResult(title="X", indicators={" help_outline tooltip only": "1"})
        assert dict(normalize(raw).indicators) == {}

    def test_collision_after_rename_keeps_later_value(self):
        raw = ExtractionResult(
            title="X",
            indicators={
                "Val. patrim. p/cotaValor patrim. p/cotaVal. patrimonial p/cota": "10,50",
                "P/VP": "0,98",
                "Val. patrim. cota help_outline": "11,00",
            },
        )

        result = normalize(raw)

        assert list(result.indicators.items()) == [("Val. patrim. cota", "11,00"), ("P/VP", "0,98")]

    def test_input_is_not_mutated(self):
        raw = ExtractionResult(title=" X ", indicators={"P/VP help_outline tip": " 1 "})

        normalize(raw)

        assert raw.title == " X "
        assert dict(raw.indicators) == {"P/VP help_outline tip": " 1 "}

    @pytest.mark.parametrize("parser", ["selectolax", "soup"])
    def test_idempotent_on_scraped_pages(self, parser, stock_page, fund_page):
        for page in (stock_page, fund_page):
            once = normalize(extract_indicators(page, parser=parser))
            twice = normalize(once)
            assert once == twice
            assert list(once.indicators.items()) == list(twice.indicators.items())

    def test_fund_page_end_to_end(self, fund_page):
        result = normalize(extract_indicators(fund_page))

        assert list(result.indicators.items()) == [
            ("Val. patrim. cota", "10,50"),
            ("REND. MÉD.", "R$ 0,98"),
            ("PARTIC. NO IFIX", "1,23%"),
        ]
        for raw_label in RENAME_RULES:
            assert raw_label not in result.indicators


def test_rename_rules_are_read_only():
    with pytest.raises(TypeError):
        RENAME_RULES["P/L"] = "PL"  # type: ignore[index]
