"""HTTP transport for crypton_bridge."""

from .http_client import RequestsTransport

__all__ = ["RequestsTransport"]
