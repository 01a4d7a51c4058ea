"""
Interfaces para el modulo crypton_bridge.

En lugar de una clase base profunda, el adaptador implementa
un conjunto de capacidades pequenas:

- HttpTransport: ejecuta una peticion HTTP y devuelve el cuerpo crudo.
- SignedRequestSource: construye y ejecuta peticiones (firmadas si son privadas).
- MarketCatalogSource: mantiene el snapshot de mercados y resuelve simbolos.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, Mapping

from .enums import ApiAccess, HttpMethod
from .models import Market


class HttpTransport(ABC):
    """
    Transporte HTTP externo.

    No clasifica errores del exchange ni decodifica el JSON:
    devuelve el cuerpo tal cual para que el adaptador lo inspeccione.
    """

    @abstractmethod
    def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None
    ) -> str:
        """
        Ejecutar una peticion HTTP.

        Args:
            url: URL completa, con query string ya resuelta
            method: Metodo HTTP
            headers: Headers adicionales
            body: Cuerpo serializado (None si no hay)

        Returns:
            Cuerpo de la respuesta como texto

        Raises:
            BrokerConnectionError: Error de red o status HTTP de error
            RateLimitError: HTTP 429
            TimeoutError: Timeout de la peticion
        """
        pass

    def close(self) -> None:
        """Liberar recursos del transporte"""


class SignedRequestSource(ABC):
    """
    Capacidad de construir y ejecutar peticiones contra la API.
    """

    @abstractmethod
    def sign(
        self,
        path: str,
        access: ApiAccess = ApiAccess.PUBLIC,
        method: HttpMethod = HttpMethod.GET,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Construir la peticion (url, method, headers, body).

        Las peticiones privadas se firman; las publicas nunca.

        Raises:
            AuthenticationError: Si faltan credenciales para una peticion privada
        """
        pass

    @abstractmethod
    def request(
        self,
        path: str,
        access: ApiAccess = ApiAccess.PUBLIC,
        method: HttpMethod = HttpMethod.GET,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Firmar, ejecutar, clasificar y devolver el campo 'result'.

        Raises:
            ExchangeError: Si el exchange reporta un fallo
        """
        pass


class MarketCatalogSource(ABC):
    """
    Capacidad de cargar y consultar el catalogo de mercados.
    """

    @abstractmethod
    def load_markets(self, reload: bool = False) -> Mapping[str, Market]:
        """
        Cargar mercados y reemplazar el snapshot de forma atomica.

        Args:
            reload: Forzar recarga aunque ya haya un snapshot

        Returns:
            Mapping simbolo -> Market
        """
        pass

    @abstractmethod
    def market(self, symbol: str) -> Market:
        """
        Obtener el mercado de un simbolo canonico.

        Raises:
            MarketsNotLoadedError: Si no se cargaron mercados
            SymbolNotFoundError: Si el simbolo no existe
        """
        pass

    def market_id(self, symbol: str) -> str:
        """Obtener el id nativo del exchange para un simbolo"""
        return self.market(symbol).id
