"""Typed wrapper for nodes returned by the REST API."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from .references import NodeReference

TData = TypeVar("TData")


def is_rest_entity(value: Any) -> bool:
    """Check whether a value looks like a REST node or relationship document."""
    return isinstance(value, dict) and "self" in value and "data" in value


class Node(BaseModel, Generic[TData]):
    """A node as returned by the server: its reference plus its typed properties.

    Used as a result type tag, e.g. ``return_("n", result_type=Node[Person])``.
    """

    reference: NodeReference
    data: TData

    @classmethod
    def from_rest(cls, value: dict[str, Any]) -> "Node[TData]":
        """Build a node from a REST document with ``self`` and ``data`` keys."""
        return cls.model_validate(
            {
                "reference": NodeReference.from_uri(value["self"]),
                "data": value["data"],
            }
        )
