"""REST access to the graph server."""

from .client import GraphClient
from .transport import CypherTransport, HttpxTransport

__all__ = ["CypherTransport", "GraphClient", "HttpxTransport"]
