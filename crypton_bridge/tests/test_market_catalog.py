"""
Tests para MarketCatalog.
"""

import pytest

import sys
from pathlib import Path
src_path = Path(__file__).parent.parent.parent
sys.path.insert(0, str(src_path))

from crypton_bridge.core.models import Market
from crypton_bridge.execution.market_catalog import MarketCatalog, EMPTY_CATALOG


def make_market(market_id):
    base, quote = market_id.split("-")
    return Market(
        id=market_id,
        symbol=f"{base}/{quote}",
        base=base,
        quote=quote,
        base_id=base,
        quote_id=quote,
    )


@pytest.fixture
def catalog():
    return MarketCatalog([make_market("BTC-EUR"), make_market("ETH-EUR")])


class TestMarketCatalog:
    """Tests para el snapshot de mercados"""

    def test_empty_catalog(self):
        """El catalogo vacio no esta cargado"""
        assert not EMPTY_CATALOG.is_loaded
        assert EMPTY_CATALOG.generation == 0
        assert len(EMPTY_CATALOG) == 0
        assert EMPTY_CATALOG.get("BTC/EUR") is None

    def test_lookup_by_symbol_and_id(self, catalog):
        """Un mercado se encuentra por simbolo y por id nativo"""
        assert catalog.get("BTC/EUR").id == "BTC-EUR"
        assert catalog.get_by_id("ETH-EUR").symbol == "ETH/EUR"
        assert catalog.get_by_id("LTC-EUR") is None
        assert catalog.get_by_id(None) is None

    def test_container_protocol(self, catalog):
        assert "BTC/EUR" in catalog
        assert "BTC-EUR" not in catalog
        assert len(catalog) == 2
        assert {m.symbol for m in catalog} == {"BTC/EUR", "ETH/EUR"}
        assert catalog.symbols == ["BTC/EUR", "ETH/EUR"]
        assert catalog.ids == ["BTC-EUR", "ETH-EUR"]

    def test_views_are_read_only(self, catalog):
        """Las vistas del catalogo no se pueden modificar"""
        with pytest.raises(TypeError):
            catalog.markets["LTC/EUR"] = make_market("LTC-EUR")
        with pytest.raises(TypeError):
            catalog.markets_by_id["LTC-EUR"] = make_market("LTC-EUR")

    def test_generation_increases(self, catalog):
        """Cada catalogo nuevo tiene una generacion mayor"""
        newer = MarketCatalog([make_market("LTC-EUR")])

        assert catalog.generation > 0
        assert newer.generation > catalog.generation

    def test_rebuild_does_not_touch_old_snapshot(self, catalog):
        """Construir otro catalogo no altera el anterior"""
        MarketCatalog([make_market("LTC-EUR")])

        assert catalog.get("LTC/EUR") is None
        assert len(catalog) == 2

    def test_repr(self, catalog):
        assert "markets=2" in repr(catalog)
