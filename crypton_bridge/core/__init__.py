"""
Core module for crypton_bridge.

Contiene interfaces, modelos, enums y excepciones.
"""

from .enums import (
    ApiAccess,
    HttpMethod,
    OrderSide,
    OrderType,
    SignatureEncoding,
)

from .models import (
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

from .interfaces import (
    HttpTransport,
    SignedRequestSource,
    MarketCatalogSource,
)

from .exceptions import (
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

__all__ = [
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
]
