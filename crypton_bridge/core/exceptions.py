"""
Excepciones para el modulo crypton_bridge.

Define excepciones especificas para errores de transporte,
autenticacion, errores reportados por el exchange y
precondiciones de mercado.
"""

from typing import Optional


class BrokerError(Exception):
    """
    Error base para todos los errores del adaptador.

    Todas las excepciones especificas heredan de esta clase.
    """

    def __init__(self, message: str, broker_id: Optional[str] = None):
        super().__init__(message)
        self.broker_id = broker_id


class BrokerConnectionError(BrokerError):
    """
    Error de conexion al exchange.

    Se lanza cuando la peticion HTTP falla a nivel de red
    o el servidor responde con un status de error.
    """

    def __init__(
        self,
        message: str,
        broker_id: Optional[str] = None,
        status_code: Optional[int] = None,
        url: Optional[str] = None
    ):
        super().__init__(message, broker_id)
        self.status_code = status_code
        self.url = url


class AuthenticationError(BrokerError):
    """
    Error de autenticacion.

    Se lanza antes de enviar una peticion privada si faltan
    las credenciales, o cuando el servidor rechaza la firma.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        broker_id: Optional[str] = None
    ):
        super().__init__(message, broker_id)


class ExchangeError(BrokerError):
    """
    Error reportado por el exchange.

    Se lanza cuando la respuesta JSON trae un indicador
    de exito falso. Conserva el cuerpo crudo para diagnostico.
    """

    def __init__(
        self,
        message: str,
        broker_id: Optional[str] = None,
        body: Optional[str] = None
    ):
        super().__init__(message, broker_id)
        self.body = body


class InvalidOrderError(BrokerError):
    """
    Error de orden invalida.

    Se lanza cuando los parametros de la orden son invalidos.
    """

    def __init__(
        self,
        message: str,
        broker_id: Optional[str] = None,
        field: Optional[str] = None
    ):
        super().__init__(message, broker_id)
        self.field = field


class InvalidAddressError(BrokerError):
    """
    Error de direccion de deposito invalida.
    """

    def __init__(
        self,
        address: Optional[str],
        broker_id: Optional[str] = None
    ):
        message = f"Invalid deposit address: {address!r}"
        super().__init__(message, broker_id)
        self.address = address


class RateLimitError(BrokerConnectionError):
    """
    Error de rate limit.

    Se lanza cuando el exchange responde con HTTP 429.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        broker_id: Optional[str] = None,
        retry_after: Optional[float] = None
    ):
        super().__init__(message, broker_id, status_code=429)
        self.retry_after = retry_after  # Segundos hasta poder reintentar


class TimeoutError(BrokerConnectionError):
    """
    Error de timeout.

    Se lanza cuando la peticion HTTP tarda demasiado.
    """

    def __init__(
        self,
        message: str = "Operation timed out",
        timeout_seconds: Optional[float] = None,
        broker_id: Optional[str] = None
    ):
        super().__init__(message, broker_id)
        self.timeout_seconds = timeout_seconds


class SymbolNotFoundError(BrokerError):
    """
    Error de simbolo no encontrado en el catalogo de mercados.
    """

    def __init__(
        self,
        symbol: str,
        broker_id: Optional[str] = None
    ):
        message = f"Symbol '{symbol}' not found"
        super().__init__(message, broker_id)
        self.symbol = symbol


class MarketsNotLoadedError(BrokerError):
    """
    Error de mercados no cargados.

    Se lanza cuando una operacion necesita el catalogo de
    mercados y todavia no se llamo a load_markets().
    """

    def __init__(
        self,
        broker_id: Optional[str] = None
    ):
        message = "Markets not loaded, call load_markets() first"
        if broker_id:
            message = f"Markets for '{broker_id}' not loaded, call load_markets() first"
        super().__init__(message, broker_id)
