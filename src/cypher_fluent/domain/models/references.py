"""References to entities stored in the graph."""

import re
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field


class GraphReference(BaseModel):
    """Base class for references to nodes and relationships by id."""

    model_config = ConfigDict(frozen=True)

    # Cypher START function for this kind of entity: node(...) or relationship(...)
    start_function: ClassVar[str] = ""
    uri_segment: ClassVar[str] = ""

    id: int = Field(ge=0, description="Database id of the entity")

    def __init__(self, id: int, /, **data: object) -> None:
        super().__init__(id=id, **data)

    @classmethod
    def from_uri(cls, uri: str) -> Self:
        """Build a reference from a REST ``self`` URI such as ``.../db/data/node/123``."""
        match = re.search(rf"/{cls.uri_segment}/(\d+)/?$", uri)
        if match is None:
            raise ValueError(f"Not a {cls.uri_segment} URI: {uri!r}")
        return cls(int(match.group(1)))

    def __int__(self) -> int:
        return self.id

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id})"


class NodeReference(GraphReference):
    """Reference to a node by id."""

    start_function: ClassVar[str] = "node"
    uri_segment: ClassVar[str] = "node"


class RelationshipReference(GraphReference):
    """Reference to a relationship by id."""

    start_function: ClassVar[str] = "relationship"
    uri_segment: ClassVar[str] = "relationship"
