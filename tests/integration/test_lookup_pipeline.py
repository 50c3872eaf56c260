"""
End-to-end lookup: fetch, extract and normalize against a mocked upstream.
"""

import pytest
from tickerlens.config.config import FetcherConfig
from tickerlens.crawler.http_client import HttpClient
from tickerlens.lookup import InstrumentFetcher, lookup_categories
from tickerlens.normalizer import normalize

pytestmark = pytest.mark.integration

BASE_URL = "http://upstream.test"

FIAGRO_PAGE = """
<html><body>
<h1>  HGAG11 - Hectare Agro  </h1>
<div class="info">
  <h3 class="title">Val. patrim. p/cota</h3><h3 class="title">Valor patrim. p/cota</h3><h3 class="title">Val. patrimonial p/cota</h3>
  <strong class="value">  10,50
  </strong>
</div>
<div class="info">
  <h3 class="title">P/VP</h3>
  <strong class="value">0,87</strong>
</div>
<div class="info">
  <h3 class="title">Val. patrim. cota <i>help_outline</i> Valor patrimonial dividido pelo número de cotas</h3>
  <strong class="value">11,20</strong>
</div>
</body></html>
"""


@pytest.mark.asyncio
@pytest.mark.parametrize("parser", ["selectolax", "soup"])
async def test_fetch_extract_normalize(mock_upstream, parser):
    config = FetcherConfig(base_url=BASE_URL, parser=parser, timeout=5.0)
    mock_upstream.get(f"{BASE_URL}/fiagros/HGAG11", status=200, body=FIAGRO_PAGE, content_type="text/html")

    async with HttpClient(config) as client:
        raw = await InstrumentFetcher(client, config).extract("fiagros", "HGAG11")

    result = normalize(raw)

    assert result.title == "HGAG11 - Hectare Agro"
    # both blocks fold onto one label, the later block wins
    assert list(result.indicators.items()) == [("Val. patrim. cota", "11,20"), ("P/VP", "0,87")]
    assert normalize(result) == result


@pytest.mark.asyncio
async def test_fan_out_against_configured_upstream(mock_upstream, stock_page, fund_page):
    config = FetcherConfig(base_url=BASE_URL + "/", timeout=5.0)
    mock_upstream.get(f"{BASE_URL}/acoes/BBDC4", status=200, body=stock_page, content_type="text/html")
    mock_upstream.get(f"{BASE_URL}/fundos-imobiliarios/KNRI11", status=200, body=fund_page, content_type="text/html")
    mock_upstream.get(f"{BASE_URL}/fiagros/HGAG11", status=500, reason="Internal Server Error")

    async with HttpClient(config) as client:
        outcomes = await lookup_categories(
            InstrumentFetcher(client, config),
            {"acoes": "BBDC4", "fundos-imobiliarios": "KNRI11", "fiagros": "HGAG11"},
        )

    by_category = {o.category: o for o in outcomes}
    assert by_category["acoes"].result.indicators["P/VP"] == "0,95"
    assert by_category["fundos-imobiliarios"].result.indicators["REND. MÉD."] == "R$ 0,98"
    assert by_category["fiagros"].error.status_code == 500
