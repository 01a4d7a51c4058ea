"""
Adapters module for crypton_bridge.

Contiene la implementacion especifica del exchange.
"""

from .crypton import CryptonBroker

__all__ = [
    "CryptonBroker",
]
