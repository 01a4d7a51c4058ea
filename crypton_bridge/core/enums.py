"""
Enums para el modulo crypton_bridge.

Define niveles de acceso de la API, metodos HTTP,
lados y tipos de orden aceptados por el exchange.
"""

from enum import Enum


class ApiAccess(Enum):
    """Nivel de acceso de un endpoint"""
    PUBLIC = "public"      # Sin firma
    PRIVATE = "private"    # Requiere credenciales y firma HMAC


class HttpMethod(Enum):
    """Metodos HTTP usados por la API REST"""
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


class OrderSide(Enum):
    """Lado de la orden"""
    BUY = "buy"
    SELL = "sell"


class OrderType(Enum):
    """Tipos de orden"""
    MARKET = "market"
    LIMIT = "limit"


class SignatureEncoding(Enum):
    """Codificacion de la firma HMAC"""
    HEX = "hex"
    BASE64 = "base64"
