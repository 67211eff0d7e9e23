"""Rendered Cypher query."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from cypher_fluent.domain.models import CypherApiQuery

from .state import CypherResultMode


@dataclass(frozen=True)
class CypherQuery:
    """Final query text, its parameters and the result mode to materialize with."""

    query_text: str
    query_parameters: Mapping[str, Any] = field(default_factory=dict)
    result_mode: CypherResultMode | None = None

    def __post_init__(self) -> None:
        # Read-only view over a private copy
        object.__setattr__(self, "query_parameters", MappingProxyType(dict(self.query_parameters)))

    def to_api_query(self) -> CypherApiQuery:
        """Request body for the Cypher endpoint."""
        return CypherApiQuery(query=self.query_text, params=dict(self.query_parameters))
