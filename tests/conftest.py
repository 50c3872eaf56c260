"""
Shared test configuration for TickerLens.

Provides instrument page fixtures, a test configuration and helpers for
mocking the upstream site with aioresponses.
"""

from typing import Generator

import pytest
from aioresponses import aioresponses
from tickerlens.config.config import Config, LazyConfig

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


# ============================================================================
# Page fixtures
# ============================================================================

STOCK_PAGE = """
<!DOCTYPE html>
<html lang="pt-br">
<head><title>BBDC4 - Banco Bradesco | Status Invest</title></head>
<body>
  <header><nav><a href="/">Status Invest</a></nav></header>
  <main>
    <h1 class="lh-4">
        BBDC4 - Banco Bradesco
    </h1>
    <div class="top-info">
      <div class="info">
        <h3 class="title m-0">Valor atual</h3>
        <strong class="value">R$
            15,32</strong>
      </div>
      <div class="info">
        <h3 class="title m-0">P/VP <i class="material-icons">help_outline</i><span class="d-none">Preço sobre valor patrimonial</span></h3>
        <strong class="value">0,95</strong>
      </div>
      <div class="info">
        <h3 class="title m-0">Dividend Yield</h3>
        <strong class="value">   </strong>
      </div>
      <div class="info">
        <h3 class="title m-0"></h3>
        <strong class="value">orphan</strong>
      </div>
    </div>
  </main>
</body>
</html>
"""

FUND_PAGE = """
<html><body>
<h1>KNRI11 - Kinea Renda Imobiliária</h1>
<div class="info">
  <span class="title">Val. patrim. p/cota</span><span class="title">Valor patrim. p/cota</span><span class="title">Val. patrimonial p/cota</span>
  <strong class="value">  10,50
</strong>
</div>
<div class="info">
  <span class="title">REND. MÉD. (24M)</span><span class="title">RENDIM. MÉDIO (24M)</span><span class="title">RENDIMENTO MENSAL MÉDIO (24M)</span>
  <strong class="value">R$ 0,98</strong>
</div>
<div class="info">
  <span class="title">PARTIC. NO IFIX</span><span class="title">PARTICIPAÇÃO NO IFIX</span>
  <strong class="value">1,23%</strong>
</div>
<div class="info">
  <span class="title">Liquidez média diária<i>help_outline</i></span>
  <strong class="value">8.000.000</strong>
</div>
</body></html>
"""

EMPTY_HEADING_PAGE = """
<html><body>
<h1>   </h1>
<div class="info"><h3 class="title">Valor atual</h3><strong class="value">1,00</strong></div>
</body></html>
"""

MALFORMED_PAGE = """
<html><body><h1>HGAG11 - Hectare Agro</h1>
<div class="info"><h3 class="title">Valor atual</h3><strong class="value">9,10
<div class="info"><h3 class="title">Último rendimento</h3><strong class="value">0,11
"""


@pytest.fixture
def stock_page() -> str:
    return STOCK_PAGE


@pytest.fixture
def fund_page() -> str:
    return FUND_PAGE


@pytest.fixture
def empty_heading_page() -> str:
    return EMPTY_HEADING_PAGE


@pytest.fixture
def malformed_page() -> str:
    return MALFORMED_PAGE


# ============================================================================
# Core Test Fixtures
# ============================================================================


@pytest.fixture
def config() -> Config:
    """Default configuration with console logging."""
    cfg = Config()
    cfg.fetcher.timeout = 5.0
    return cfg


@pytest.fixture
def mock_upstream() -> Generator[aioresponses, None, None]:
    """Intercept every aiohttp request; unregistered URLs fail to connect."""
    with aioresponses() as m:
        yield m


@pytest.fixture(autouse=True)
def reset_lazy_config() -> Generator[None, None, None]:
    yield
    LazyConfig.override(None)
