"""
Crypton adapter for crypton_bridge.

Firma de peticiones, clasificacion de errores y normalizacion
de respuestas del exchange Crypton.
"""

from .crypton_broker import CryptonBroker
from .crypton_capabilities import get_exchange_capabilities, CRYPTON_HAS, API_ENDPOINTS
from .crypton_errors import ResponseCheck, classify_response, handle_errors
from .crypton_mapper import CryptonMapper, parse_symbol
from .crypton_signer import CryptonSigner, build_request

__all__ = [
    "CryptonBroker",
    "get_exchange_capabilities",
    "CRYPTON_HAS",
    "API_ENDPOINTS",
    "ResponseCheck",
    "classify_response",
    "handle_errors",
    "CryptonMapper",
    "parse_symbol",
    "CryptonSigner",
    "build_request",
]
