"""
Normalizador de respuestas de Crypton.

Convierte los payloads nativos del exchange en los modelos
canonicos de crypton_bridge. Todas las funciones son puras:
reciben el payload crudo y, cuando hace falta resolver simbolos,
el snapshot del catalogo de mercados capturado por la llamada.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import ccxt

from ...config.settings import CRYPTON_SETTINGS, COMMON_CURRENCIES
from ...core.exceptions import InvalidAddressError
from ...core.models import (
    Balance, BalanceAccount, Currency, Deposit, DepositAddress, Fee,
    Market, MarketLimits, MarketPrecision, Order, OrderBook, Ticker, Trade,
)
from ...execution.market_catalog import MarketCatalog, EMPTY_CATALOG
from .crypton_schemas import (
    RawBalance, RawCurrency, RawDeposit, RawDepositAddress, RawMarket,
    RawOrder, RawTicker, RawTrade, to_float,
)


# Helpers de tiempo y precision del framework ccxt
_helpers = ccxt.Exchange()


def common_currency_code(code: Optional[str]) -> Optional[str]:
    """Codigo canonico de una moneda ('XBT' -> 'BTC')"""
    if code is None:
        return None
    return COMMON_CURRENCIES.get(code, code)


def parse_symbol(market_id: str) -> str:
    """
    Derivar el simbolo canonico de un id nativo 'BASE-QUOTE'.

    Cada lado se canonicaliza por separado. Un id sin guion se
    devuelve tal cual, asi que aplicar la funcion dos veces no
    cambia el resultado.
    """
    parts = market_id.split("-")
    if len(parts) != 2:
        return market_id
    base, quote = parts
    return f"{common_currency_code(base)}/{common_currency_code(quote)}"


def precision_from_string(value: Optional[str]) -> Optional[int]:
    """Decimales de la forma decimal de un paso ('0.5' -> 1)"""
    if value is None:
        return None
    return _helpers.precision_from_string(value)


def parse8601(value: Optional[str]) -> Optional[int]:
    """Timestamp en ms desde una fecha ISO-8601"""
    if value is None:
        return None
    return _helpers.parse8601(value)


def iso8601(timestamp: Optional[int]) -> Optional[str]:
    if timestamp is None:
        return None
    return _helpers.iso8601(timestamp)


def check_address(address: Optional[str], broker_id: Optional[str] = None) -> str:
    """
    Validar una direccion de deposito.

    Raises:
        InvalidAddressError: Si falta, tiene espacios o es demasiado corta
    """
    if (
        address is None
        or any(ch.isspace() for ch in address)
        or len(address) < CRYPTON_SETTINGS.min_address_length
    ):
        raise InvalidAddressError(address, broker_id)
    return address


def filter_by_since_limit(records: List[Any], since: Optional[int] = None,
                          limit: Optional[int] = None) -> List[Any]:
    """Ordenar por timestamp, descartar anteriores a since y truncar a limit"""
    result = sorted(records, key=lambda r: r.timestamp if r.timestamp is not None else 0)
    if since is not None:
        result = [r for r in result if r.timestamp is not None and r.timestamp >= since]
    if limit:
        result = result[:limit]
    return result


class CryptonMapper:
    """
    Mapper para convertir payloads de Crypton a modelos canonicos.
    """

    def __init__(self, exchange_id: str = CRYPTON_SETTINGS.exchange_id):
        """
        Inicializar mapper.

        Args:
            exchange_id: ID del exchange (para errores)
        """
        self.exchange_id = exchange_id

    # ==================== Symbols ====================

    def resolve_market(
        self,
        market_id: Optional[str],
        catalog: MarketCatalog = EMPTY_CATALOG
    ) -> Tuple[Optional[Market], Optional[str]]:
        """
        Resolver mercado y simbolo de un id nativo.

        Primero busca en el catalogo; si el id no esta cacheado,
        deriva el simbolo partiendo el id por el guion.

        Returns:
            Tupla (Market o None, simbolo o None)
        """
        if market_id is None:
            return None, None
        market = catalog.get_by_id(market_id)
        if market is not None:
            return market, market.symbol
        return None, parse_symbol(market_id)

    # ==================== Markets ====================

    def parse_market(self, market_id: str, raw: Dict[str, Any]) -> Market:
        """
        Convertir un mercado nativo.

        Args:
            market_id: Id nativo (clave del diccionario de /markets)
            raw: Payload del mercado

        Returns:
            Market canonico
        """
        data = RawMarket.model_validate(raw)
        base = common_currency_code(data.base)
        quote = common_currency_code(data.quote)
        price_min = to_float(data.price_step)
        return Market(
            id=market_id,
            symbol=f"{base}/{quote}",
            base=base,
            quote=quote,
            base_id=data.base,
            quote_id=data.quote,
            active=data.enabled,
            precision=MarketPrecision(
                amount=CRYPTON_SETTINGS.amount_precision,
                price=precision_from_string(data.price_step) if price_min is not None else None,
            ),
            limits=MarketLimits(
                amount_min=data.min_size,
                price_min=price_min,
            ),
            info=raw,
        )

    def parse_markets(self, response: Dict[str, Dict[str, Any]]) -> List[Market]:
        """Convertir la respuesta de /markets (id -> mercado)"""
        return [self.parse_market(market_id, raw) for market_id, raw in response.items()]

    # ==================== Currencies ====================

    def parse_currency(self, currency_id: str, raw: Dict[str, Any]) -> Currency:
        data = RawCurrency.model_validate(raw)
        precision = int(data.precision) if data.precision is not None else None
        return Currency(
            id=currency_id,
            code=common_currency_code(currency_id),
            name=data.name,
            active=data.enabled,
            precision=precision,
            info=raw,
        )

    def parse_currencies(self, response: Any) -> Dict[str, Currency]:
        """
        Convertir la respuesta de /currencies.

        Acepta tanto un diccionario id -> moneda como una lista
        de monedas con campo 'id'.
        """
        if isinstance(response, dict):
            items: Iterable[Tuple[str, Dict[str, Any]]] = response.items()
        else:
            items = ((str(raw.get("id")), raw) for raw in response if raw.get("id") is not None)

        result = {}
        for currency_id, raw in items:
            currency = self.parse_currency(currency_id, raw)
            result[currency.code] = currency
        return result

    # ==================== Tickers ====================

    def parse_ticker(
        self,
        raw: Dict[str, Any],
        market: Optional[Market] = None,
        symbol: Optional[str] = None
    ) -> Ticker:
        """
        Convertir un ticker nativo.

        percentage es change24h * 100, con change24h en 0.0 cuando
        falta. El resto de campos ausentes quedan en None.
        """
        data = RawTicker.model_validate(raw)
        if market is not None:
            symbol = market.symbol
        relative_change = data.change24h if data.change24h is not None else 0.0
        return Ticker(
            symbol=symbol,
            bid=data.bid,
            ask=data.ask,
            last=data.last,
            close=data.last,
            percentage=relative_change * 100,
            base_volume=data.volume24h,
            info=raw,
        )

    def parse_tickers(
        self,
        response: Dict[str, Dict[str, Any]],
        catalog: MarketCatalog = EMPTY_CATALOG,
        symbols: Optional[Union[str, Iterable[str]]] = None
    ) -> Dict[str, Ticker]:
        """
        Convertir la respuesta de /tickers (id -> ticker).

        Args:
            symbols: Simbolo o lista de simbolos a conservar (todos si es None)

        Returns:
            Diccionario simbolo canonico -> Ticker
        """
        if isinstance(symbols, str):
            symbols = [symbols]
        wanted = set(symbols) if symbols else None
        result = {}
        for market_id, raw in response.items():
            market, symbol = self.resolve_market(market_id, catalog)
            if wanted is not None and symbol not in wanted:
                continue
            result[symbol] = self.parse_ticker(raw, market, symbol)
        return result

    # ==================== Order Book ====================

    def _parse_levels(self, levels: Optional[List[Any]], descending: bool) -> List[Tuple[float, float]]:
        result = []
        for level in levels or []:
            if isinstance(level, dict):
                price, amount = level.get("price"), level.get("size", level.get("amount"))
            elif isinstance(level, (list, tuple)) and len(level) >= 2:
                price, amount = level[0], level[1]
            else:
                continue
            # Niveles con numeros no parseables se descartan
            price, amount = to_float(price), to_float(amount)
            if price is None or amount is None:
                continue
            result.append((price, amount))
        return sorted(result, key=lambda lv: lv[0], reverse=descending)

    def parse_order_book(
        self,
        raw: Dict[str, Any],
        symbol: Optional[str] = None,
        limit: Optional[int] = None
    ) -> OrderBook:
        """
        Convertir un order book nativo.

        Cada nivel puede venir como [precio, cantidad] o como
        {'price': ..., 'size': ...}. limit recorta cada lado.
        """
        bids = self._parse_levels(raw.get("bids"), descending=True)
        asks = self._parse_levels(raw.get("asks"), descending=False)
        if limit:
            bids, asks = bids[:limit], asks[:limit]
        return OrderBook(symbol=symbol, bids=bids, asks=asks)

    # ==================== Trades ====================

    def parse_trade(
        self,
        raw: Dict[str, Any],
        catalog: MarketCatalog = EMPTY_CATALOG,
        market: Optional[Market] = None
    ) -> Trade:
        """
        Convertir un trade publico o un fill propio.

        El mercado recibido solo se usa si el payload no trae 'market'.
        """
        data = RawTrade.model_validate(raw)
        symbol = market.symbol if market is not None else None
        if data.market is not None:
            market, symbol = self.resolve_market(data.market, catalog)

        fee = None
        if "fee" in raw:
            fee = Fee(cost=data.fee, currency=common_currency_code(data.fee_currency))

        timestamp = parse8601(data.time)
        return Trade(
            id=data.id,
            timestamp=timestamp,
            datetime=iso8601(timestamp),
            symbol=symbol,
            side=data.side,
            price=data.price,
            amount=data.size,
            order=data.order_id,
            fee=fee,
            info=raw,
        )

    def parse_trades(
        self,
        trades: List[Dict[str, Any]],
        catalog: MarketCatalog = EMPTY_CATALOG,
        market: Optional[Market] = None,
        since: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[Trade]:
        result = [self.parse_trade(raw, catalog, market) for raw in trades]
        return filter_by_since_limit(result, since, limit)

    # ==================== Orders ====================

    def parse_order(
        self,
        raw: Dict[str, Any],
        catalog: MarketCatalog = EMPTY_CATALOG,
        market: Optional[Market] = None
    ) -> Order:
        """
        Convertir una orden nativa.

        Se usa para fetch, create y cancel, asi que todas producen
        la misma forma. remaining y cost se derivan siempre de
        amount, filled y price.
        """
        data = RawOrder.model_validate(raw)
        symbol = market.symbol if market is not None else None
        if data.market is not None:
            _, symbol = self.resolve_market(data.market, catalog)

        fee = None
        if "fee" in raw:
            fee = Fee(cost=data.fee, currency=common_currency_code(data.fee_currency))

        price = data.price
        amount = data.size
        filled = data.filled_size
        remaining = amount - filled if amount is not None and filled is not None else None
        cost = filled * price if filled is not None and price is not None else None

        timestamp = parse8601(data.created_at)
        return Order(
            id=data.id,
            timestamp=timestamp,
            datetime=iso8601(timestamp),
            symbol=symbol,
            type=data.type,
            side=data.side,
            price=price,
            amount=amount,
            filled=filled,
            remaining=remaining,
            cost=cost,
            status=data.status,
            fee=fee,
            info=raw,
        )

    def parse_orders(
        self,
        orders: List[Dict[str, Any]],
        catalog: MarketCatalog = EMPTY_CATALOG,
        market: Optional[Market] = None,
        since: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[Order]:
        result = [self.parse_order(raw, catalog, market) for raw in orders]
        return filter_by_since_limit(result, since, limit)

    # ==================== Account ====================

    def parse_balance(self, response: Dict[str, Dict[str, Any]]) -> Balance:
        """
        Convertir la respuesta de /balances (id de moneda -> balance).

        used corresponde a 'locked' en el vocabulario del exchange.
        """
        accounts = {}
        for currency_id, raw in response.items():
            data = RawBalance.model_validate(raw)
            accounts[common_currency_code(currency_id)] = BalanceAccount(
                free=data.free,
                used=data.locked,
                total=data.total,
            )
        return Balance(accounts=accounts, info=response)

    def parse_deposit_address(self, code: str, raw: Dict[str, Any]) -> DepositAddress:
        """
        Raises:
            InvalidAddressError: Si la direccion no es valida
        """
        data = RawDepositAddress.model_validate(raw)
        address = check_address(data.address, self.exchange_id)
        return DepositAddress(
            currency=code,
            address=address,
            tag=data.tag,
            status="ok",
            info=raw,
        )

    def parse_deposit(self, raw: Dict[str, Any], code: Optional[str] = None) -> Deposit:
        data = RawDeposit.model_validate(raw)
        timestamp = parse8601(data.created_at or data.time)
        currency = common_currency_code(data.currency) if data.currency is not None else code
        return Deposit(
            id=data.id,
            currency=currency,
            amount=data.amount,
            status=data.status,
            timestamp=timestamp,
            datetime=iso8601(timestamp),
            address=data.address,
            tag=data.tag,
            txid=data.txid,
            info=raw,
        )

    def parse_deposits(
        self,
        deposits: List[Dict[str, Any]],
        code: Optional[str] = None,
        since: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[Deposit]:
        result = [self.parse_deposit(raw, code) for raw in deposits]
        if code is not None:
            result = [d for d in result if d.currency == code]
        return filter_by_since_limit(result, since, limit)
