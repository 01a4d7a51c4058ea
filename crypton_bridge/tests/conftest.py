"""
Fixtures compartidos para tests de crypton_bridge.
"""

import json
import pytest
from unittest.mock import MagicMock
from urllib.parse import urlparse
import sys
from pathlib import Path

# Add package root to path for imports
src_path = Path(__file__).parent.parent.parent
sys.path.insert(0, str(src_path))

from crypton_bridge.core.interfaces import HttpTransport
from crypton_bridge.adapters.crypton.crypton_broker import CryptonBroker


FIXED_TIMESTAMP = 1528000000000


def envelope(result, success=True):
    """Serializar un sobre de respuesta como lo devuelve el exchange"""
    return json.dumps({"success": success, "result": result})


def make_transport(routes):
    """
    Crear un transporte mock que responde segun (metodo, ruta).

    Args:
        routes: Diccionario (metodo, ruta) -> cuerpo crudo de respuesta
    """
    transport = MagicMock(spec=HttpTransport)

    def fetch(url, method="GET", headers=None, body=None):
        path = urlparse(url).path
        try:
            return routes[(method, path)]
        except KeyError:
            raise AssertionError(f"Unexpected request: {method} {url}")

    transport.fetch.side_effect = fetch
    return transport


# ============================================================================
# Raw Payloads
# ============================================================================

@pytest.fixture
def raw_markets():
    """Respuesta de /markets (id -> mercado)"""
    return {
        "BTC-EUR": {
            "base": "BTC",
            "quote": "EUR",
            "enabled": True,
            "minSize": 0.01,
            "priceStep": 0.5,
        },
        "ETH-EUR": {
            "base": "ETH",
            "quote": "EUR",
            "enabled": True,
            "minSize": 0.1,
            "priceStep": "0.01",
        },
        "DRK-BTC": {
            "base": "DRK",
            "quote": "BTC",
            "enabled": False,
            "minSize": 1,
            "priceStep": "0.00001",
        },
    }


@pytest.fixture
def raw_tickers():
    return {
        "BTC-EUR": {"bid": 30000.0, "ask": 30010.5, "last": 30005, "change24h": 0.05, "volume24h": 12.5},
        "ETH-EUR": {"bid": "2000", "ask": "2001", "last": "2000.5", "volume24h": "300"},
        "LTC-EUR": {"bid": 80, "ask": 81, "last": 80.5, "change24h": -0.01, "volume24h": 40},
    }


@pytest.fixture
def raw_order_book():
    return {
        "bids": [[29990, 0.5], [30000, 1.2], [29980, 2.0]],
        "asks": [{"price": 30020, "size": 0.7}, {"price": 30010, "size": 0.3}],
    }


@pytest.fixture
def raw_trades():
    """Trades publicos de BTC-EUR"""
    return [
        {"id": 3, "time": "2018-06-01T10:00:02.000Z", "side": "sell", "price": 30001, "size": 0.2},
        {"id": 1, "time": "2018-06-01T10:00:00.000Z", "side": "buy", "price": 30000, "size": 0.1},
        {"id": 2, "time": "2018-06-01T10:00:01.000Z", "side": "buy", "price": "30000.5", "size": "0.3"},
    ]


@pytest.fixture
def raw_fills():
    """Fills propios de varios mercados mezclados"""
    return [
        {
            "id": 101, "market": "BTC-EUR", "time": "2018-06-01T10:00:00.000Z",
            "side": "buy", "price": 30000, "size": 0.1,
            "fee": 6.0, "feeCurrency": "EUR", "orderId": 42,
        },
        {
            "id": 102, "market": "ETH-EUR", "time": "2018-06-01T10:01:00.000Z",
            "side": "sell", "price": 2000, "size": 1.0,
            "fee": 4.0, "feeCurrency": "EUR", "orderId": 43,
        },
        {
            "id": 103, "market": "BTC-EUR", "time": "2018-06-01T10:02:00.000Z",
            "side": "sell", "price": 30100, "size": 0.05,
            "fee": 3.0, "feeCurrency": "EUR", "orderId": 44,
        },
        {
            "id": 104, "market": "XBT-USD", "time": "2018-06-01T10:03:00.000Z",
            "side": "buy", "price": 35000, "size": 0.01, "orderId": 45,
        },
    ]


@pytest.fixture
def raw_order():
    return {
        "id": 42,
        "status": "open",
        "side": "buy",
        "type": "limit",
        "market": "BTC-EUR",
        "createdAt": "2018-06-01T10:00:00.000Z",
        "price": 30000.5,
        "size": 0.5,
        "filledSize": 0.2,
        "fee": 1.5,
        "feeCurrency": "EUR",
    }


@pytest.fixture
def raw_balances():
    return {
        "EUR": {"total": 1000.0, "free": 800.0, "locked": 200.0},
        "XBT": {"total": "1.5", "free": "1.0", "locked": "0.5"},
        "ETH": {"total": 3.0, "free": 3.0},
    }


@pytest.fixture
def raw_currencies():
    return {
        "BTC": {"name": "Bitcoin", "enabled": True, "precision": 8},
        "XBT": {"name": "Bitcoin (legacy)", "enabled": False, "precision": 8},
        "EUR": {"name": "Euro", "enabled": True, "precision": 2},
    }


@pytest.fixture
def raw_deposits():
    return [
        {
            "id": 7, "currency": "BTC", "amount": "0.5", "status": "confirmed",
            "address": "1BoatSLRHtKNngkdXEeobR76b53LETtpyT", "txid": "abc",
            "createdAt": "2018-06-02T00:00:00.000Z",
        },
        {
            "id": 8, "currency": "EUR", "amount": 100, "status": "pending",
            "createdAt": "2018-06-01T00:00:00.000Z",
        },
        {
            "id": 9, "currency": "BTC", "amount": 0.1, "status": "confirmed",
            "createdAt": "2018-06-03T00:00:00.000Z",
        },
    ]


# ============================================================================
# Broker
# ============================================================================

@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def routes(raw_markets, raw_tickers, raw_order_book, raw_trades, raw_fills,
           raw_order, raw_balances, raw_currencies, raw_deposits):
    """Rutas por defecto del transporte mock"""
    return {
        ("GET", "/markets"): envelope(raw_markets),
        ("GET", "/currencies"): envelope(raw_currencies),
        ("GET", "/tickers"): envelope(raw_tickers),
        ("GET", "/markets/BTC-EUR/orderbook"): envelope(raw_order_book),
        ("GET", "/markets/BTC-EUR/trades"): envelope(raw_trades),
        ("GET", "/fills"): envelope(raw_fills),
        ("GET", "/balances"): envelope(raw_balances),
        ("GET", "/orders"): envelope([raw_order]),
        ("GET", "/orders/42"): envelope(raw_order),
        ("POST", "/orders"): envelope(raw_order),
        ("DELETE", "/orders/42"): envelope(dict(raw_order, status="cancelled")),
        ("GET", "/deposit_address/BTC"): envelope({"address": "1BoatSLRHtKNngkdXEeobR76b53LETtpyT"}),
        ("GET", "/deposits"): envelope(raw_deposits),
    }


@pytest.fixture
def mock_transport(routes):
    return make_transport(routes)


@pytest.fixture
def broker(mock_transport, fixed_clock):
    """Broker con credenciales y transporte mock, sin mercados cargados"""
    return CryptonBroker(
        api_key="test-key",
        api_secret="test-secret",
        transport=mock_transport,
        clock=fixed_clock,
    )


@pytest.fixture
def loaded_broker(broker):
    """Broker con el catalogo de mercados cargado"""
    broker.load_markets()
    return broker
