"""
Crypton Bridge - Adaptador REST para el exchange Crypton

Traduce la API nativa de Crypton al modelo canonico comun
(mercados, tickers, order books, trades, ordenes y balances)
y firma las peticiones privadas.

Uso basico:
    from crypton_bridge import CryptonBroker

    broker = CryptonBroker()  # credenciales desde CRYPTON_API_KEY / CRYPTON_API_SECRET
    broker.load_markets()

    ticker = broker.fetch_ticker("BTC/EUR")
    order = broker.create_order("BTC/EUR", "limit", "buy", 0.01, 30000)
    broker.cancel_order(order.id)
"""

# Core
from .core.enums import (
    ApiAccess,
    HttpMethod,
    OrderSide,
    OrderType,
    SignatureEncoding,
)

from .core.models import (
    Market,
    MarketLimits,
    MarketPrecision,
    Currency,
    Ticker,
    OrderBook,
    Fee,
    Trade,
    Order,
    BalanceAccount,
    Balance,
    DepositAddress,
    Deposit,
    ExchangeCapabilities,
)

from .core.interfaces import (
    HttpTransport,
    SignedRequestSource,
    MarketCatalogSource,
)

from .core.exceptions import (
    BrokerError,
    BrokerConnectionError,
    AuthenticationError,
    ExchangeError,
    InvalidOrderError,
    InvalidAddressError,
    RateLimitError,
    TimeoutError,
    SymbolNotFoundError,
    MarketsNotLoadedError,
)

# Adapters
from .adapters.crypton import CryptonBroker, CryptonMapper, CryptonSigner

# Execution
from .execution.market_catalog import MarketCatalog

# Transport
from .transport.http_client import RequestsTransport

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Enums
    "ApiAccess",
    "HttpMethod",
    "OrderSide",
    "OrderType",
    "SignatureEncoding",
    # Models
    "Market",
    "MarketLimits",
    "MarketPrecision",
    "Currency",
    "Ticker",
    "OrderBook",
    "Fee",
    "Trade",
    "Order",
    "BalanceAccount",
    "Balance",
    "DepositAddress",
    "Deposit",
    "ExchangeCapabilities",
    # Interfaces
    "HttpTransport",
    "SignedRequestSource",
    "MarketCatalogSource",
    # Exceptions
    "BrokerError",
    "BrokerConnectionError",
    "AuthenticationError",
    "ExchangeError",
    "InvalidOrderError",
    "InvalidAddressError",
    "RateLimitError",
    "TimeoutError",
    "SymbolNotFoundError",
    "MarketsNotLoadedError",
    # Adapters
    "CryptonBroker",
    "CryptonMapper",
    "CryptonSigner",
    # Execution
    "MarketCatalog",
    # Transport
    "RequestsTransport",
]
