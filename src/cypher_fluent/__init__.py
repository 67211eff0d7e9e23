"""Fluent Cypher query builder and client for a graph database's REST API."""

from .core.errors import (
    AuthoringError,
    DeserializationError,
    NotConnectedError,
    TransportError,
)
from .domain.models import Node, NodeReference, RelationshipReference
from .infrastructure.cypher import (
    CypherFluentQuery,
    CypherQuery,
    CypherResultMode,
    PlaceholderStyle,
    StartBit,
    expression,
)
from .infrastructure.rest import GraphClient, HttpxTransport

__all__ = [
    "AuthoringError",
    "CypherFluentQuery",
    "CypherQuery",
    "CypherResultMode",
    "DeserializationError",
    "GraphClient",
    "HttpxTransport",
    "Node",
    "NodeReference",
    "NotConnectedError",
    "PlaceholderStyle",
    "RelationshipReference",
    "StartBit",
    "TransportError",
    "expression",
]
