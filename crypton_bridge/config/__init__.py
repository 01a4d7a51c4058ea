"""
Configuracion de crypton_bridge.
"""

from .settings import (
    CryptonSettings,
    CRYPTON_SETTINGS,
    TransportDefaults,
    TRANSPORT_DEFAULTS,
    COMMON_CURRENCIES,
    ENV_CONFIG,
    get_env_or_default,
    get_credentials,
    configure_logging,
)

__all__ = [
    "CryptonSettings",
    "CRYPTON_SETTINGS",
    "TransportDefaults",
    "TRANSPORT_DEFAULTS",
    "COMMON_CURRENCIES",
    "ENV_CONFIG",
    "get_env_or_default",
    "get_credentials",
    "configure_logging",
]
