"""
Firma de peticiones privadas para Crypton.

La firma es HMAC-SHA256 sobre timestamp + method + path + body,
con el secreto de la cuenta como clave. El timestamp (ms desde epoch)
se usa a la vez como nonce y como parte del payload firmado.
"""

import base64
import hashlib
import hmac
import json
import re
import time
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlencode

from ...core.enums import ApiAccess, HttpMethod, SignatureEncoding
from ...core.exceptions import AuthenticationError


HEADER_API_KEY = "CRYPTON-APIKEY"
HEADER_SIGNATURE = "CRYPTON-SIGNATURE"
HEADER_TIMESTAMP = "CRYPTON-TIMESTAMP"

_PATH_PARAM = re.compile(r"\{([\w-]+)\}")


def milliseconds() -> int:
    """Milisegundos desde epoch"""
    return int(time.time() * 1000)


def extract_params(path: str) -> List[str]:
    """Nombres de los parametros de una plantilla de ruta ('orders/{id}' -> ['id'])"""
    return _PATH_PARAM.findall(path)


def implode_params(path: str, params: Dict[str, Any]) -> str:
    """Sustituir los parametros de ruta por sus valores"""
    return _PATH_PARAM.sub(lambda m: str(params[m.group(1)]), path)


def to_json(data: Dict[str, Any]) -> str:
    """Serializar JSON compacto, igual al que se firma y se envia"""
    return json.dumps(data, separators=(",", ":"))


class CryptonSigner:
    """
    Construye los headers de autenticacion de Crypton.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        encoding: SignatureEncoding = SignatureEncoding.HEX,
        clock: Callable[[], int] = milliseconds,
        broker_id: Optional[str] = None,
    ):
        """
        Inicializar firmador.

        Args:
            api_key: API key de la cuenta
            api_secret: Secreto de la cuenta (clave HMAC)
            encoding: Codificacion de la firma (hex por defecto)
            clock: Funcion que devuelve ms desde epoch
            broker_id: Id del exchange para los errores
        """
        self._api_key = api_key
        self._api_secret = api_secret
        self.encoding = encoding
        self.clock = clock
        self.broker_id = broker_id

    @property
    def has_credentials(self) -> bool:
        return bool(self._api_key) and bool(self._api_secret)

    def check_required_credentials(self) -> None:
        """
        Raises:
            AuthenticationError: Si falta la API key o el secreto
        """
        missing = []
        if not self._api_key:
            missing.append("apiKey")
        if not self._api_secret:
            missing.append("secret")
        if missing:
            raise AuthenticationError(
                f"{self.broker_id or 'exchange'} requires \"{', '.join(missing)}\" credential",
                self.broker_id,
            )

    def signature(self, timestamp: str, method: str, path: str, body: str = "") -> str:
        """
        Calcular la firma.

        Determinista: mismos timestamp, method, path, body y secreto
        producen siempre la misma cadena.
        """
        payload = timestamp + method + path + body
        digest = hmac.new(
            self._api_secret.encode("utf-8"),
            payload.encode("utf-8"),
            hashlib.sha256,
        )
        if self.encoding == SignatureEncoding.BASE64:
            return base64.b64encode(digest.digest()).decode("ascii")
        return digest.hexdigest()

    def sign(
        self,
        method: str,
        path: str,
        body: str = "",
        timestamp: Optional[str] = None,
    ) -> Dict[str, str]:
        """
        Generar headers de una peticion privada.

        Args:
            method: Metodo HTTP en mayusculas
            path: Ruta con query ya resuelta (ej: '/orders?market=BTC-USD')
            body: Cuerpo JSON, '' si no hay
            timestamp: Timestamp fijo (por defecto, el reloj)

        Returns:
            Headers de autenticacion

        Raises:
            AuthenticationError: Si faltan credenciales
        """
        self.check_required_credentials()
        if timestamp is None:
            timestamp = str(self.clock())
        return {
            HEADER_API_KEY: self._api_key,
            HEADER_SIGNATURE: self.signature(timestamp, method, path, body),
            HEADER_TIMESTAMP: timestamp,
            "Content-Type": "application/json",
        }

    def __repr__(self) -> str:
        # Nunca exponer el secreto
        return f"<CryptonSigner(encoding={self.encoding.value}, credentials={self.has_credentials})>"


def build_request(
    base_url: str,
    path: str,
    access: ApiAccess = ApiAccess.PUBLIC,
    method: HttpMethod = HttpMethod.GET,
    params: Optional[Dict[str, Any]] = None,
    signer: Optional[CryptonSigner] = None,
) -> Dict[str, Any]:
    """
    Construir una peticion lista para el transporte.

    Los parametros de ruta se sustituyen en la plantilla; el resto va
    como query string en GET o como cuerpo JSON en escrituras.

    Returns:
        Diccionario con url, method, body y headers

    Raises:
        AuthenticationError: Peticion privada sin credenciales
    """
    params = params or {}
    request_path = "/" + implode_params(path, params)
    path_keys = set(extract_params(path))
    query = {k: v for k, v in params.items() if k not in path_keys}

    body = None
    if method == HttpMethod.GET:
        if query:
            request_path += "?" + urlencode(query)
    elif query:
        body = to_json(query)

    headers = None
    if access == ApiAccess.PRIVATE:
        if signer is None:
            raise AuthenticationError("Private request without signer")
        headers = signer.sign(method.value, request_path, body or "")

    return {
        "url": base_url.rstrip("/") + request_path,
        "method": method.value,
        "body": body,
        "headers": headers,
    }
