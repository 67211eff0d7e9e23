"""Domain models for the Cypher client."""

from .api import CypherApiQuery, CypherApiResponse, ServiceRoot
from .node import Node, is_rest_entity
from .references import GraphReference, NodeReference, RelationshipReference

__all__ = [
    # Wire
    "CypherApiQuery",
    "CypherApiResponse",
    "GraphReference",
    # Entities
    "Node",
    "NodeReference",
    "RelationshipReference",
    "ServiceRoot",
    "is_rest_entity",
]
