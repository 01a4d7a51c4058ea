"""
Modelos de datos para el modulo crypton_bridge.

Define las estructuras canonicas (independientes del exchange)
para mercados, tickers, order books, trades, ordenes y balances.

Todos los registros son inmutables: se construyen una vez por
respuesta y nunca se modifican. Los campos sin valor quedan en
None, nunca se rellenan con cero.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Tuple


@dataclass(frozen=True)
class MarketPrecision:
    """Decimales aceptados para cantidad y precio"""
    amount: Optional[int] = None
    price: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"amount": self.amount, "price": self.price}


@dataclass(frozen=True)
class MarketLimits:
    """Limites minimos y maximos de cantidad y precio"""
    amount_min: Optional[float] = None
    amount_max: Optional[float] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": {"min": self.amount_min, "max": self.amount_max},
            "price": {"min": self.price_min, "max": self.price_max},
        }


@dataclass(frozen=True)
class Market:
    """
    Mercado canonico.

    El simbolo siempre es derivable como "{base}/{quote}".
    """
    id: str
    symbol: str
    base: str
    quote: str
    base_id: str
    quote_id: str
    active: Optional[bool] = None
    precision: MarketPrecision = field(default_factory=MarketPrecision)
    limits: MarketLimits = field(default_factory=MarketLimits)
    info: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convertir a diccionario"""
        return {
            "id": self.id,
            "symbol": self.symbol,
            "base": self.base,
            "quote": self.quote,
            "baseId": self.base_id,
            "quoteId": self.quote_id,
            "active": self.active,
            "precision": self.precision.to_dict(),
            "limits": self.limits.to_dict(),
            "info": self.info,
        }


@dataclass(frozen=True)
class Currency:
    """Moneda listada por el exchange"""
    id: str
    code: str
    name: Optional[str] = None
    active: Optional[bool] = None
    precision: Optional[int] = None
    info: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convertir a diccionario"""
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "active": self.active,
            "precision": self.precision,
            "info": self.info,
        }


@dataclass(frozen=True)
class Ticker:
    """
    Ticker canonico.

    El exchange solo publica bid, ask, last, cambio relativo
    y volumen de 24h; el resto de campos queda sin valor.
    """
    symbol: Optional[str]
    bid: Optional[float] = None
    ask: Optional[float] = None
    last: Optional[float] = None
    close: Optional[float] = None
    percentage: Optional[float] = None
    base_volume: Optional[float] = None

    # Campos que el exchange no provee
    timestamp: Optional[int] = None
    datetime: Optional[str] = None
    high: Optional[float] = None
    low: Optional[float] = None
    bid_volume: Optional[float] = None
    ask_volume: Optional[float] = None
    vwap: Optional[float] = None
    open: Optional[float] = None
    previous_close: Optional[float] = None
    change: Optional[float] = None
    average: Optional[float] = None
    quote_volume: Optional[float] = None

    info: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convertir a diccionario"""
        return {
            "symbol": self.symbol,
            "timestamp": self.timestamp,
            "datetime": self.datetime,
            "high": self.high,
            "low": self.low,
            "bid": self.bid,
            "bidVolume": self.bid_volume,
            "ask": self.ask,
            "askVolume": self.ask_volume,
            "vwap": self.vwap,
            "open": self.open,
            "close": self.close,
            "last": self.last,
            "previousClose": self.previous_close,
            "change": self.change,
            "percentage": self.percentage,
            "average": self.average,
            "baseVolume": self.base_volume,
            "quoteVolume": self.quote_volume,
            "info": self.info,
        }


@dataclass(frozen=True)
class OrderBook:
    """
    Order book canonico.

    bids ordenados por precio descendente, asks ascendente.
    """
    symbol: Optional[str]
    bids: List[Tuple[float, float]] = field(default_factory=list)
    asks: List[Tuple[float, float]] = field(default_factory=list)
    timestamp: Optional[int] = None
    datetime: Optional[str] = None
    nonce: Optional[int] = None

    @property
    def best_bid(self) -> Optional[float]:
        return self.bids[0][0] if self.bids else None

    @property
    def best_ask(self) -> Optional[float]:
        return self.asks[0][0] if self.asks else None

    def to_dict(self) -> Dict[str, Any]:
        """Convertir a diccionario"""
        return {
            "symbol": self.symbol,
            "bids": [list(level) for level in self.bids],
            "asks": [list(level) for level in self.asks],
            "timestamp": self.timestamp,
            "datetime": self.datetime,
            "nonce": self.nonce,
        }


@dataclass(frozen=True)
class Fee:
    """Comision cobrada por el exchange"""
    cost: Optional[float]
    currency: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"cost": self.cost, "currency": self.currency}


@dataclass(frozen=True)
class Trade:
    """
    Trade canonico (publico o fill propio).
    """
    id: Optional[str]
    timestamp: Optional[int]
    datetime: Optional[str]
    symbol: Optional[str]
    side: Optional[str]
    price: Optional[float]
    amount: Optional[float]
    order: Optional[str] = None
    fee: Optional[Fee] = None
    type: Optional[str] = None
    info: Dict[str, Any] = field(default_factory=dict)

    @property
    def cost(self) -> Optional[float]:
        """Valor nocional del trade"""
        if self.price is None or self.amount is None:
            return None
        return self.price * self.amount

    def to_dict(self) -> Dict[str, Any]:
        """Convertir a diccionario"""
        return {
            "id": self.id,
            "info": self.info,
            "timestamp": self.timestamp,
            "datetime": self.datetime,
            "symbol": self.symbol,
            "type": self.type,
            "side": self.side,
            "price": self.price,
            "amount": self.amount,
            "order": self.order,
            "fee": self.fee.to_dict() if self.fee else None,
        }


@dataclass(frozen=True)
class Order:
    """
    Orden canonica.

    remaining y cost se derivan en el normalizador a partir de
    amount, filled y price; nunca se leen del payload.
    """
    id: Optional[str]
    timestamp: Optional[int]
    datetime: Optional[str]
    symbol: Optional[str]
    type: Optional[str]
    side: Optional[str]
    price: Optional[float]
    amount: Optional[float]
    filled: Optional[float]
    remaining: Optional[float]
    cost: Optional[float]
    status: Optional[str]
    fee: Optional[Fee] = None
    last_trade_timestamp: Optional[int] = None
    average: Optional[float] = None
    info: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_open(self) -> bool:
        """Verificar si la orden sigue abierta"""
        return self.status == "open"

    def to_dict(self) -> Dict[str, Any]:
        """Convertir a diccionario"""
        return {
            "info": self.info,
            "id": self.id,
            "timestamp": self.timestamp,
            "datetime": self.datetime,
            "lastTradeTimestamp": self.last_trade_timestamp,
            "symbol": self.symbol,
            "type": self.type,
            "side": self.side,
            "price": self.price,
            "cost": self.cost,
            "average": self.average,
            "amount": self.amount,
            "filled": self.filled,
            "remaining": self.remaining,
            "status": self.status,
            "fee": self.fee.to_dict() if self.fee else None,
        }


@dataclass(frozen=True)
class BalanceAccount:
    """Balance de una moneda. used equivale a "locked" del exchange."""
    free: Optional[float] = None
    used: Optional[float] = None
    total: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"free": self.free, "used": self.used, "total": self.total}


@dataclass(frozen=True)
class Balance:
    """
    Balance de la cuenta por moneda canonica.
    """
    accounts: Dict[str, BalanceAccount] = field(default_factory=dict)
    info: Dict[str, Any] = field(default_factory=dict)

    @property
    def free(self) -> Dict[str, Optional[float]]:
        return {code: account.free for code, account in self.accounts.items()}

    @property
    def used(self) -> Dict[str, Optional[float]]:
        return {code: account.used for code, account in self.accounts.items()}

    @property
    def total(self) -> Dict[str, Optional[float]]:
        return {code: account.total for code, account in self.accounts.items()}

    def __getitem__(self, code: str) -> BalanceAccount:
        return self.accounts[code]

    def __contains__(self, code: object) -> bool:
        return code in self.accounts

    def to_dict(self) -> Dict[str, Any]:
        """Convertir a diccionario"""
        result: Dict[str, Any] = {"info": self.info}
        for code, account in self.accounts.items():
            result[code] = account.to_dict()
        result["free"] = self.free
        result["used"] = self.used
        result["total"] = self.total
        return result


@dataclass(frozen=True)
class DepositAddress:
    """Direccion de deposito para una moneda"""
    currency: str
    address: str
    tag: Optional[str] = None
    status: str = "ok"
    info: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convertir a diccionario"""
        return {
            "currency": self.currency,
            "address": self.address,
            "tag": self.tag,
            "status": self.status,
            "info": self.info,
        }


@dataclass(frozen=True)
class Deposit:
    """Deposito recibido en la cuenta"""
    id: Optional[str]
    currency: Optional[str]
    amount: Optional[float]
    status: Optional[str]
    timestamp: Optional[int] = None
    datetime: Optional[str] = None
    address: Optional[str] = None
    tag: Optional[str] = None
    txid: Optional[str] = None
    type: str = "deposit"
    info: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convertir a diccionario"""
        return {
            "info": self.info,
            "id": self.id,
            "txid": self.txid,
            "timestamp": self.timestamp,
            "datetime": self.datetime,
            "address": self.address,
            "tag": self.tag,
            "type": self.type,
            "amount": self.amount,
            "currency": self.currency,
            "status": self.status,
        }


@dataclass(frozen=True)
class ExchangeCapabilities:
    """
    Capacidades y comisiones de un exchange.

    has indica que operaciones del contrato comun implementa el adaptador.
    """
    exchange_id: str
    has: Dict[str, bool] = field(default_factory=dict)
    maker_fee: float = 0.0
    taker_fee: float = 0.0
    tier_based: bool = False
    percentage: bool = True
    rate_limit_ms: int = 0

    def supports(self, capability: str) -> bool:
        """Verificar si una operacion esta soportada"""
        return self.has.get(capability, False)

    def to_dict(self) -> Dict[str, Any]:
        """Convertir a diccionario"""
        return {
            "id": self.exchange_id,
            "has": dict(self.has),
            "fees": {
                "trading": {
                    "tierBased": self.tier_based,
                    "percentage": self.percentage,
                    "maker": self.maker_fee,
                    "taker": self.taker_fee,
                },
            },
            "rateLimit": self.rate_limit_ms,
        }
