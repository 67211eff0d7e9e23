"""Wire models for the Cypher REST endpoint."""

from typing import Any

from pydantic import BaseModel, Field


class CypherApiQuery(BaseModel):
    """Request body posted to the Cypher endpoint."""

    query: str
    params: dict[str, Any] = Field(default_factory=dict)


class CypherApiResponse(BaseModel):
    """Tabular response body returned by the Cypher endpoint."""

    columns: list[str]
    data: list[list[Any]]


class ServiceRoot(BaseModel):
    """Service root document used to discover the Cypher endpoint and root node."""

    cypher: str
    reference_node: str | None = None
