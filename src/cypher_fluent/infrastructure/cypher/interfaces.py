"""Query builder interfaces.

These protocols decouple the builder's mixins and execution from concrete
implementations: mixins only need a way to append clauses, execution only
needs something that can run a rendered query.
"""

from typing import Protocol, Self, TypeVar

from .parameters import Bound
from .query import CypherQuery
from .results import RowMapper
from .state import ClauseType

T = TypeVar("T")


class ClauseAppender(Protocol):
    """Protocol for builders that accept new clause fragments."""

    def append_clause(self, kind: ClauseType, *parts: str | Bound, joiner: str | None = None) -> Self:
        """Return a copy of the builder with one more clause fragment.

        Args:
            kind: Clause the fragment belongs to
            *parts: Literal text and values to bind as parameters
            joiner: Separator to use in front of this fragment instead of the clause default
        """
        ...


class RawGraphClient(Protocol):
    """Protocol for clients that can execute rendered Cypher queries."""

    async def execute_get_cypher_results(
        self,
        query: CypherQuery,
        mapper: RowMapper[T],
    ) -> list[T]:
        """Execute a query and materialize its rows.

        Args:
            query: Rendered query text, parameters and result mode
            mapper: Converts response columns and rows into results

        Returns:
            Materialized results, in row order
        """
        ...
