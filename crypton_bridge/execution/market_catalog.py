"""
Catalogo de mercados para crypton_bridge.

Tabla de busqueda id nativo -> Market y simbolo -> Market,
construida una vez por recarga de metadatos y de solo lectura
despues de construida.
"""

import itertools
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from ..core.models import Market


_generations = itertools.count(1)


class MarketCatalog:
    """
    Snapshot inmutable de mercados.

    Una recarga construye un catalogo nuevo y lo reemplaza por
    referencia; las llamadas en vuelo siguen usando el snapshot
    que capturaron al empezar.
    """

    def __init__(self, markets: Iterable[Market] = ()):
        """
        Construir catalogo.

        Args:
            markets: Mercados normalizados
        """
        by_symbol: Dict[str, Market] = {}
        by_id: Dict[str, Market] = {}
        for market in markets:
            by_symbol[market.symbol] = market
            by_id[market.id] = market

        self._by_symbol: Mapping[str, Market] = MappingProxyType(by_symbol)
        self._by_id: Mapping[str, Market] = MappingProxyType(by_id)
        self._generation = next(_generations) if by_id else 0

    @property
    def generation(self) -> int:
        """Numero de recarga (0 = catalogo vacio)"""
        return self._generation

    @property
    def markets(self) -> Mapping[str, Market]:
        """Vista de solo lectura simbolo -> Market"""
        return self._by_symbol

    @property
    def markets_by_id(self) -> Mapping[str, Market]:
        """Vista de solo lectura id nativo -> Market"""
        return self._by_id

    @property
    def symbols(self) -> List[str]:
        return sorted(self._by_symbol)

    @property
    def ids(self) -> List[str]:
        return sorted(self._by_id)

    @property
    def is_loaded(self) -> bool:
        return bool(self._by_id)

    def get(self, symbol: str) -> Optional[Market]:
        """Buscar mercado por simbolo canonico"""
        return self._by_symbol.get(symbol)

    def get_by_id(self, market_id: Optional[str]) -> Optional[Market]:
        """Buscar mercado por id nativo del exchange"""
        if market_id is None:
            return None
        return self._by_id.get(market_id)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._by_symbol

    def __iter__(self) -> Iterator[Market]:
        return iter(self._by_symbol.values())

    def __len__(self) -> int:
        return len(self._by_symbol)

    def __repr__(self) -> str:
        return f"<MarketCatalog(generation={self._generation}, markets={len(self)})>"


EMPTY_CATALOG = MarketCatalog()
