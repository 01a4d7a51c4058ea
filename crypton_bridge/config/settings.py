"""
Configuracion centralizada para crypton_bridge.

Este modulo contiene las constantes del exchange y los valores
por defecto del transporte HTTP.

Uso:
    from crypton_bridge.config.settings import (
        CRYPTON_SETTINGS,
        TRANSPORT_DEFAULTS,
        ENV_CONFIG,
    )
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


# ============ Exchange Settings ============

@dataclass(frozen=True)
class CryptonSettings:
    """Constantes del exchange Crypton."""
    exchange_id: str = "crypton"
    name: str = "Crypton"
    countries: str = "EU"
    api_url: str = "https://api.cryptonbtc.com"
    www_url: str = "https://cryptonbtc.com"
    doc_url: str = "https://cryptonbtc.docs.apiary.io/"
    version: str = "1"

    # Decimales fijos para cantidades; el de precio sale de priceStep
    amount_precision: int = 8

    # Longitud minima aceptada para direcciones de deposito
    min_address_length: int = 1

    # Comisiones de trading (fraccion)
    maker_fee: float = 0.0020
    taker_fee: float = 0.0020
    tier_based: bool = False


CRYPTON_SETTINGS = CryptonSettings()


# ============ Transport Defaults ============

@dataclass(frozen=True)
class TransportDefaults:
    """Valores por defecto para el transporte HTTP."""
    rate_limit_ms: int = 500
    timeout_seconds: int = 30
    max_retries: int = 1  # 1 = un solo intento
    user_agent: str = "crypton-bridge/0.1"


TRANSPORT_DEFAULTS = TransportDefaults()


# ============ Currency Codes ============

# Codigos nativos que difieren del codigo canonico
COMMON_CURRENCIES: Dict[str, str] = {
    "XBT": "BTC",
    "BCC": "BCH",
    "DRK": "DASH",
}


# ============ Environment Variables ============

def get_env_or_default(key: str, default: Any, cast_type: type = str) -> Any:
    """
    Obtiene un valor de variable de entorno o usa el default.

    Args:
        key: Nombre de la variable de entorno
        default: Valor por defecto
        cast_type: Tipo al que convertir el valor

    Returns:
        Valor de la variable de entorno o el default
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        if cast_type == bool:
            return value.lower() in ('true', '1', 'yes')
        return cast_type(value)
    except (ValueError, TypeError):
        return default


def get_credentials(
    api_key: Optional[str] = None,
    api_secret: Optional[str] = None
) -> Tuple[Optional[str], Optional[str]]:
    """
    Resolver credenciales desde argumentos o variables de entorno.

    Las variables son CRYPTON_API_KEY y CRYPTON_API_SECRET.

    Returns:
        Tupla (api_key, api_secret); cualquiera puede ser None
    """
    resolved_key = api_key or os.environ.get("CRYPTON_API_KEY")
    resolved_secret = api_secret or os.environ.get("CRYPTON_API_SECRET")
    return resolved_key, resolved_secret


# Configuracion desde variables de entorno
ENV_CONFIG = {
    "api_url": get_env_or_default("CRYPTON_API_URL", CRYPTON_SETTINGS.api_url, str),
    "timeout": get_env_or_default("CRYPTON_TIMEOUT", TRANSPORT_DEFAULTS.timeout_seconds, int),
    "log_level": get_env_or_default("CRYPTON_LOG_LEVEL", "INFO", str),
}


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configurar logging basico para aplicaciones que usan el adaptador.

    Args:
        level: Nivel de logging (por defecto CRYPTON_LOG_LEVEL o INFO)
    """
    logging.basicConfig(
        level=(level or ENV_CONFIG["log_level"]).upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
