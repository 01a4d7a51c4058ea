"""
Implementacion del adaptador Crypton.

Cada operacion compone firma, transporte, clasificacion de errores
y normalizacion alrededor de una unica peticion HTTP.
"""

import json
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from ccxt.base.decimal_to_precision import (
    decimal_to_precision,
    DECIMAL_PLACES,
    ROUND,
    TRUNCATE,
)

from ...config.settings import ENV_CONFIG, CRYPTON_SETTINGS, get_credentials
from ...core.enums import (
    ApiAccess, HttpMethod, OrderSide, OrderType, SignatureEncoding
)
from ...core.models import (
    Balance, Currency, Deposit, DepositAddress, ExchangeCapabilities,
    Market, Order, OrderBook, Ticker, Trade
)
from ...core.interfaces import (
    HttpTransport, SignedRequestSource, MarketCatalogSource
)
from ...core.exceptions import (
    BrokerError, ExchangeError, InvalidOrderError, MarketsNotLoadedError,
    SymbolNotFoundError
)
from ...execution.market_catalog import MarketCatalog, EMPTY_CATALOG
from ...transport.http_client import RequestsTransport
from .crypton_capabilities import get_exchange_capabilities, is_endpoint
from .crypton_errors import handle_errors
from .crypton_mapper import CryptonMapper
from .crypton_signer import CryptonSigner, build_request, milliseconds


logger = logging.getLogger(__name__)


class CryptonBroker(SignedRequestSource, MarketCatalogSource):
    """
    Adaptador REST para el exchange Crypton.

    Las operaciones que necesitan un id de mercado requieren haber
    llamado antes a load_markets(); no se cargan de forma implicita.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
        base_url: Optional[str] = None,
        encoding: SignatureEncoding = SignatureEncoding.HEX,
        clock: Callable[[], int] = milliseconds,
        timeout: Optional[float] = None,
    ):
        """
        Inicializar adaptador Crypton.

        Las credenciales se pueden proporcionar directamente o via variables de entorno:
        - CRYPTON_API_KEY
        - CRYPTON_API_SECRET

        Sin credenciales solo se pueden usar los endpoints publicos.

        Args:
            api_key: API key de la cuenta (opcional si se usa env var)
            api_secret: Secreto de la cuenta (opcional si se usa env var)
            transport: Transporte HTTP (por defecto RequestsTransport)
            base_url: URL base de la API (por defecto CRYPTON_API_URL o la oficial)
            encoding: Codificacion de la firma
            clock: Funcion que devuelve ms desde epoch (para el timestamp)
            timeout: Timeout en segundos del transporte por defecto
        """
        self._exchange_id = CRYPTON_SETTINGS.exchange_id
        self._base_url = base_url or ENV_CONFIG["api_url"]

        resolved_api_key, resolved_api_secret = get_credentials(api_key, api_secret)

        # Advertir si las credenciales se pasan directamente (menos seguro)
        if api_key or api_secret:
            logger.warning(
                f"API credentials for {self._exchange_id} passed directly. "
                f"Consider using environment variables (CRYPTON_API_KEY, "
                f"CRYPTON_API_SECRET) for better security."
            )

        self._signer = CryptonSigner(
            resolved_api_key,
            resolved_api_secret,
            encoding=encoding,
            clock=clock,
            broker_id=self._exchange_id,
        )

        # Los errores JSON del exchange se clasifican antes que el status HTTP
        self._transport = transport or RequestsTransport(
            timeout=timeout if timeout is not None else ENV_CONFIG["timeout"],
            error_handler=lambda status, body: handle_errors(self._exchange_id, body),
            broker_id=self._exchange_id,
        )

        self._catalog: MarketCatalog = EMPTY_CATALOG
        self._currencies: Mapping[str, Currency] = MappingProxyType({})

        # Mapper y capacidades
        self._mapper = CryptonMapper(self._exchange_id)
        self._capabilities = get_exchange_capabilities()

        credentials_source = "direct" if api_key else "env"
        if not self._signer.has_credentials:
            credentials_source = "none"
        logger.info(
            f"CryptonBroker initialized "
            f"(url={self._base_url}, credentials={credentials_source})"
        )

    @property
    def broker_id(self) -> str:
        return self._exchange_id

    @property
    def catalog(self) -> MarketCatalog:
        """Snapshot actual del catalogo de mercados"""
        return self._catalog

    @property
    def markets(self) -> Mapping[str, Market]:
        return self._catalog.markets

    @property
    def markets_by_id(self) -> Mapping[str, Market]:
        return self._catalog.markets_by_id

    @property
    def symbols(self) -> List[str]:
        """Simbolos canonicos cargados, ordenados"""
        return self._catalog.symbols

    @property
    def ids(self) -> List[str]:
        """Ids nativos cargados, ordenados"""
        return self._catalog.ids

    @property
    def currencies(self) -> Mapping[str, Currency]:
        return self._currencies

    def get_capabilities(self) -> ExchangeCapabilities:
        """Obtener capacidades del exchange"""
        return self._capabilities

    # ==================== Requests ====================

    def sign(
        self,
        path: str,
        access: ApiAccess = ApiAccess.PUBLIC,
        method: HttpMethod = HttpMethod.GET,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Construir la peticion, firmada si es privada.

        Raises:
            BrokerError: Si la ruta no pertenece a la superficie REST
        """
        if not is_endpoint(access.value, method.value, path):
            raise BrokerError(
                f"Unsupported endpoint: {access.value} {method.value} {path}",
                self._exchange_id,
            )
        return build_request(
            self._base_url, path, access, method, params, self._signer
        )

    def request(
        self,
        path: str,
        access: ApiAccess = ApiAccess.PUBLIC,
        method: HttpMethod = HttpMethod.GET,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Ejecutar una peticion y devolver el campo 'result' del sobre.

        Raises:
            AuthenticationError: Peticion privada sin credenciales
            ExchangeError: Si el exchange reporta un fallo
            BrokerConnectionError: Errores de transporte
        """
        request = self.sign(path, access, method, params)
        logger.debug(f"{access.value} {request['method']} {path}")

        body = self._transport.fetch(
            request["url"],
            method=request["method"],
            headers=request["headers"],
            body=request["body"],
        )

        check = handle_errors(self._exchange_id, body)
        payload = check.payload
        if payload is None:
            try:
                payload = json.loads(body)
            except ValueError:
                raise ExchangeError(
                    f"{self._exchange_id} returned a non-JSON response: {body}",
                    self._exchange_id,
                    body,
                )
        if not isinstance(payload, dict):
            raise ExchangeError(
                f"{self._exchange_id} {body}", self._exchange_id, body
            )
        return payload.get("result")

    # ==================== Markets ====================

    def fetch_markets(self) -> List[Market]:
        """Obtener mercados del exchange sin tocar el catalogo"""
        response = self.request("markets")
        return self._mapper.parse_markets(response or {})

    def load_markets(self, reload: bool = False) -> Mapping[str, Market]:
        """
        Cargar mercados y reemplazar el snapshot.

        El catalogo anterior sigue siendo valido para las llamadas
        que ya lo habian capturado.
        """
        if self._catalog.is_loaded and not reload:
            return self._catalog.markets

        catalog = MarketCatalog(self.fetch_markets())
        self._catalog = catalog
        logger.info(
            f"Loaded {len(catalog)} markets for {self._exchange_id} "
            f"(generation={catalog.generation})"
        )
        return catalog.markets

    def market(self, symbol: str) -> Market:
        """Obtener el mercado de un simbolo canonico"""
        catalog = self._catalog
        if not catalog.is_loaded:
            raise MarketsNotLoadedError(self._exchange_id)
        market = catalog.get(symbol)
        if market is None:
            raise SymbolNotFoundError(symbol, self._exchange_id)
        return market

    def fetch_currencies(self) -> Dict[str, Currency]:
        """Obtener monedas y guardarlas para resolver ids de deposito"""
        response = self.request("currencies")
        currencies = self._mapper.parse_currencies(response or {})
        self._currencies = MappingProxyType(dict(currencies))
        return currencies

    # ==================== Market Data ====================

    def fetch_order_book(self, symbol: str, limit: Optional[int] = None) -> OrderBook:
        """
        Obtener order book.

        El endpoint no acepta profundidad; limit se aplica en cliente.
        """
        market = self.market(symbol)
        response = self.request(
            "markets/{id}/orderbook", params={"id": market.id}
        )
        return self._mapper.parse_order_book(response or {}, market.symbol, limit)

    def fetch_tickers(self, symbols: Optional[Union[str, Iterable[str]]] = None) -> Dict[str, Ticker]:
        """
        Obtener tickers de todos los mercados.

        Los ids sin cachear se resuelven partiendo el id por el guion.
        """
        catalog = self._catalog
        response = self.request("tickers")
        return self._mapper.parse_tickers(response or {}, catalog, symbols)

    def fetch_ticker(self, symbol: str) -> Ticker:
        """Obtener ticker de un simbolo (derivado de /tickers)"""
        tickers = self.fetch_tickers([symbol])
        if symbol not in tickers:
            raise SymbolNotFoundError(symbol, self._exchange_id)
        return tickers[symbol]

    def fetch_trades(
        self,
        symbol: str,
        since: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[Trade]:
        """Obtener trades publicos de un mercado"""
        catalog = self._catalog
        market = self.market(symbol)
        params: Dict[str, Any] = {"id": market.id}
        if limit:
            params["limit"] = limit
        response = self.request("markets/{id}/trades", params=params)
        return self._mapper.parse_trades(response or [], catalog, market, since, limit)

    # ==================== Account ====================

    def fetch_balance(self) -> Balance:
        """Obtener balance de la cuenta"""
        response = self.request("balances", ApiAccess.PRIVATE)
        return self._mapper.parse_balance(response or {})

    def fetch_my_trades(
        self,
        symbol: Optional[str] = None,
        since: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[Trade]:
        """
        Obtener fills propios.

        /fills no filtra por mercado: se piden todos y se filtran
        en cliente por simbolo normalizado.
        """
        catalog = self._catalog
        if symbol is not None:
            symbol = self.market(symbol).symbol

        params: Dict[str, Any] = {}
        if limit:
            params["limit"] = limit
        response = self.request("fills", ApiAccess.PRIVATE, params=params)

        trades = self._mapper.parse_trades(response or [], catalog, since=since, limit=limit)
        if symbol is None:
            return trades
        return [trade for trade in trades if trade.symbol == symbol]

    def fetch_deposit_address(self, code: str) -> DepositAddress:
        """
        Obtener direccion de deposito de una moneda.

        Si fetch_currencies() no se llamo, el codigo se usa como id.

        Raises:
            InvalidAddressError: Si la direccion recibida no es valida
        """
        currency = self._currencies.get(code)
        currency_id = currency.id if currency is not None else code
        response = self.request(
            "deposit_address/{currency}",
            ApiAccess.PRIVATE,
            params={"currency": currency_id},
        )
        return self._mapper.parse_deposit_address(code, response or {})

    def fetch_deposits(
        self,
        code: Optional[str] = None,
        since: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[Deposit]:
        """Obtener depositos, opcionalmente de una sola moneda"""
        response = self.request("deposits", ApiAccess.PRIVATE)
        return self._mapper.parse_deposits(response or [], code, since, limit)

    # ==================== Orders ====================

    def fetch_order(self, order_id: str) -> Order:
        """Obtener una orden por id"""
        catalog = self._catalog
        response = self.request(
            "orders/{id}", ApiAccess.PRIVATE, params={"id": order_id}
        )
        return self._mapper.parse_order(response or {}, catalog)

    def fetch_open_orders(
        self,
        symbol: Optional[str] = None,
        since: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[Order]:
        """Obtener ordenes abiertas, filtradas por mercado en servidor"""
        catalog = self._catalog
        params: Dict[str, Any] = {}
        market = None
        if symbol is not None:
            market = self.market(symbol)
            params["market"] = market.id
        response = self.request("orders", ApiAccess.PRIVATE, params=params)
        return self._mapper.parse_orders(response or [], catalog, market, since, limit)

    def create_order(
        self,
        symbol: str,
        type: str,
        side: str,
        amount: float,
        price: Optional[float] = None
    ) -> Order:
        """
        Crear una orden.

        amount se trunca y price se redondea a la precision del mercado.

        Raises:
            InvalidOrderError: Tipo o lado desconocido, o limit sin precio
        """
        catalog = self._catalog
        market = self.market(symbol)

        try:
            order_type = OrderType(type)
        except ValueError:
            raise InvalidOrderError(f"Unsupported order type: {type}", self._exchange_id, "type")
        try:
            order_side = OrderSide(side)
        except ValueError:
            raise InvalidOrderError(f"Unsupported order side: {side}", self._exchange_id, "side")
        if order_type == OrderType.LIMIT and price is None:
            raise InvalidOrderError("Limit orders require a price", self._exchange_id, "price")

        params: Dict[str, Any] = {
            "market": market.id,
            "side": order_side.value,
            "type": order_type.value,
            "size": self.amount_to_precision(market, amount),
        }
        if price is not None:
            params["price"] = self.price_to_precision(market, price)

        response = self.request("orders", ApiAccess.PRIVATE, HttpMethod.POST, params)
        order = self._mapper.parse_order(response or {}, catalog, market)
        logger.info(
            f"Order created on {self._exchange_id}: {order.id} "
            f"{order_side.value} {params['size']} {market.symbol}"
        )
        return order

    def cancel_order(self, order_id: str) -> Order:
        """Cancelar una orden por id"""
        catalog = self._catalog
        response = self.request(
            "orders/{id}", ApiAccess.PRIVATE, HttpMethod.DELETE, {"id": order_id}
        )
        order = self._mapper.parse_order(response or {}, catalog)
        logger.info(f"Order cancelled on {self._exchange_id}: {order_id}")
        return order

    # ==================== Precision ====================

    def amount_to_precision(self, market: Market, amount: float) -> str:
        """Truncar la cantidad a los decimales del mercado"""
        if market.precision.amount is None:
            return str(amount)
        return decimal_to_precision(
            amount,
            rounding_mode=TRUNCATE,
            precision=market.precision.amount,
            counting_mode=DECIMAL_PLACES,
        )

    def price_to_precision(self, market: Market, price: float) -> str:
        """Redondear el precio a los decimales del mercado"""
        if market.precision.price is None:
            return str(price)
        return decimal_to_precision(
            price,
            rounding_mode=ROUND,
            precision=market.precision.price,
            counting_mode=DECIMAL_PLACES,
        )

    # ==================== Lifecycle ====================

    def close(self) -> None:
        """Cerrar el transporte"""
        self._transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return (
            f"<CryptonBroker(url={self._base_url}, "
            f"markets={len(self._catalog)}, signer={self._signer!r})>"
        )
