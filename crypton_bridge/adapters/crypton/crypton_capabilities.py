"""
Capacidades del exchange Crypton.

Define que operaciones del contrato comun soporta el adaptador
y la superficie REST que consume.
"""

from typing import Dict, List

from ...config.settings import CRYPTON_SETTINGS, TRANSPORT_DEFAULTS
from ...core.models import ExchangeCapabilities


# Operaciones del contrato comun
CRYPTON_HAS: Dict[str, bool] = {
    "fetchMarkets": True,
    "fetchCurrencies": True,
    "fetchBalance": True,
    "fetchOrderBook": True,
    "fetchTicker": True,   # Derivado de /tickers, no hay endpoint propio
    "fetchTickers": True,
    "fetchTrades": True,
    "fetchMyTrades": True,
    "fetchOrder": True,
    "fetchOpenOrders": True,
    "fetchClosedOrders": False,
    "createOrder": True,
    "cancelOrder": True,
    "fetchDepositAddress": True,
    "fetchDeposits": True,
    "fetchWithdrawals": False,
    "fetchOHLCV": False,
    "editOrder": False,
    "ws": False,
}


# Superficie REST: acceso -> metodo -> plantillas de ruta
API_ENDPOINTS: Dict[str, Dict[str, List[str]]] = {
    "public": {
        "GET": [
            "currencies",
            "markets",
            "markets/{id}",
            "markets/{id}/orderbook",
            "markets/{id}/trades",
            "tickers",
        ],
    },
    "private": {
        "GET": [
            "balances",
            "orders",
            "orders/{id}",
            "fills",
            "deposit_address/{currency}",
            "deposits",
        ],
        "POST": [
            "orders",
        ],
        "DELETE": [
            "orders/{id}",
        ],
    },
}


def get_exchange_capabilities() -> ExchangeCapabilities:
    """
    Obtener capacidades de Crypton.

    Returns:
        ExchangeCapabilities con operaciones, comisiones y rate limit
    """
    return ExchangeCapabilities(
        exchange_id=CRYPTON_SETTINGS.exchange_id,
        has=dict(CRYPTON_HAS),
        maker_fee=CRYPTON_SETTINGS.maker_fee,
        taker_fee=CRYPTON_SETTINGS.taker_fee,
        tier_based=CRYPTON_SETTINGS.tier_based,
        percentage=True,
        rate_limit_ms=TRANSPORT_DEFAULTS.rate_limit_ms,
    )


def is_endpoint(access: str, method: str, path: str) -> bool:
    """Verificar si una ruta pertenece a la superficie REST declarada"""
    return path in API_ENDPOINTS.get(access, {}).get(method, [])
