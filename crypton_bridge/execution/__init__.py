"""
Execution module for crypton_bridge.

Contiene el catalogo de mercados compartido entre operaciones.
"""

from .market_catalog import MarketCatalog, EMPTY_CATALOG

__all__ = [
    "MarketCatalog",
    "EMPTY_CATALOG",
]
