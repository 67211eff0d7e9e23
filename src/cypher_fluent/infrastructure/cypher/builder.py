"""Fluent Cypher query builder.

Each call returns a new builder wrapping an updated clause accumulator; the
receiver is never modified, so partially built queries can be branched and
reused freely.

Example:
    ```python
    results = await (
        client.cypher
        .start("root", client.root_node)
        .match("root-->other")
        .return_(lambda other: {"Foo": other.as_(int)})
        .results()
    )
    ```
"""

from collections.abc import Callable, Mapping
from typing import Any, Generic, Self, TypeVar, overload

from cypher_fluent.core.config import settings
from cypher_fluent.core.decorators import with_error_handling
from cypher_fluent.core.logging import get_logger
from cypher_fluent.domain.models import GraphReference

from .clauses import ClauseAccumulator
from .interfaces import ClauseAppender, RawGraphClient
from .pagination import PaginationMixin
from .parameters import Bound
from .query import CypherQuery
from .renderer import PlaceholderStyle, render
from .results import RowMapper, mapper_for
from .returns import (
    ResultType,
    ReturnSpecification,
    SetReturn,
    translate_identities,
    translate_projection,
)
from .start import StartBit, coerce_start_bits
from .state import ClauseType, CypherResultMode

logger = get_logger(__name__)

T = TypeVar("T")

ShapeFunction = Callable[..., Mapping[str, Any]]

WHERE_PARAM_MARKER = "{}"


class CypherFluentQuery(PaginationMixin, ClauseAppender, Generic[T]):
    """Immutable fluent builder for Cypher queries.

    Generic Parameters:
        T: The type of the query results
    """

    def __init__(
        self,
        client: RawGraphClient | None = None,
        placeholder_style: PlaceholderStyle | str | None = None,
        *,
        clauses: ClauseAccumulator | None = None,
        returns: ReturnSpecification | None = None,
    ) -> None:
        """Create an empty query bound to ``client``.

        Args:
            client: Client used by ``results()``; render-only queries may omit it
            placeholder_style: Parameter placeholder syntax, defaults to settings
        """
        self._client = client
        self._style = PlaceholderStyle(placeholder_style or settings.placeholder_style)
        self._clauses = clauses or ClauseAccumulator()
        self._returns = returns

    def _derive(
        self,
        clauses: ClauseAccumulator | None = None,
        returns: ReturnSpecification | None = None,
    ) -> "CypherFluentQuery[Any]":
        return CypherFluentQuery(
            self._client,
            self._style,
            clauses=clauses or self._clauses,
            returns=returns or self._returns,
        )

    def append_clause(self, kind: ClauseType, *parts: str | Bound, joiner: str | None = None) -> Self:
        return self._derive(clauses=self._clauses.append(kind, *parts, joiner=joiner))  # type: ignore[return-value]

    def start(
        self,
        identity_or_bit: str | StartBit,
        *references_or_bits: GraphReference | StartBit,
    ) -> Self:
        """Add START bits. Repeated calls extend the same START clause.

        Args:
            identity_or_bit: Identity to bind, or the first of several start bits
            *references_or_bits: References for the identity, or more start bits

        Example:
            ```python
            query.start("n", NodeReference(3))          # START n=node({p0})
            query.start(
                StartBit("me", NodeReference(123)),
                StartBit("viewer", NodeReference(456)),
            )                                           # START me=node({p0}), viewer=node({p1})
            ```
        """
        query: Self = self
        for bit in coerce_start_bits(identity_or_bit, references_or_bits):
            query = query.append_clause(ClauseType.START, *bit.to_parts())
        return query

    def match(self, *patterns: str) -> Self:
        """Add MATCH patterns. Repeated calls extend the same MATCH clause.

        Example:
            ```python
            query.match("me-[:FRIEND]-common-[:FRIEND]-viewer")
            ```
        """
        query: Self = self
        for pattern in patterns:
            query = query.append_clause(ClauseType.MATCH, pattern)
        return query

    def where(self, condition: str) -> Self:
        """Add a WHERE condition; further conditions are ANDed.

        The condition text is used verbatim.
        """
        return self.append_clause(ClauseType.WHERE, condition)

    def and_where(self, condition: str) -> Self:
        return self.append_clause(ClauseType.WHERE, condition, joiner=" AND ")

    def or_where(self, condition: str) -> Self:
        return self.append_clause(ClauseType.WHERE, condition, joiner=" OR ")

    def where_param(self, condition: str, *values: Any) -> Self:
        """Add a WHERE condition whose ``{}`` markers are bound as parameters.

        Args:
            condition: Condition with one ``{}`` marker per value
            *values: Values bound, in order, for the markers

        Example:
            ```python
            query.where_param("n.age > {} AND n.age < {}", 18, 65)
            # WHERE n.age > {p0} AND n.age < {p1}
            ```
        """
        pieces = condition.split(WHERE_PARAM_MARKER)
        if len(pieces) - 1 != len(values):
            raise ValueError(
                f"Condition has {len(pieces) - 1} parameter markers but {len(values)} values were given"
            )

        parts: list[str | Bound] = [pieces[0]]
        for value, piece in zip(values, pieces[1:], strict=True):
            parts.append(Bound(value))
            if piece:
                parts.append(piece)
        return self.append_clause(ClauseType.WHERE, *parts)

    def with_(self, *items: str) -> Self:
        """Add WITH items. Repeated calls extend the same WITH clause."""
        if not items:
            raise ValueError("with_() needs at least one item")
        return self.append_clause(ClauseType.WITH, ", ".join(items))

    @overload
    def return_(self, shape: ShapeFunction, *, into: Callable[..., Any] | None = None) -> "CypherFluentQuery[Any]": ...

    @overload
    def return_(
        self, identity: str, *identities: str, result_type: ResultType = object
    ) -> "CypherFluentQuery[Any]": ...

    def return_(
        self,
        identity_or_shape: str | ShapeFunction,
        *identities: str,
        result_type: ResultType = object,
        into: Callable[..., Any] | None = None,
    ) -> "CypherFluentQuery[Any]":
        """Set the RETURN clause, replacing any earlier one.

        Passing identities returns them as they are (Set mode), each row
        converted with ``result_type``. Passing a shape function returns a
        record per row (Projection mode).

        Example:
            ```python
            query.return_("n", result_type=Node[Person])
            query.return_(lambda other: {"Foo": other.as_(int)})
            ```
        """
        return self._return(identity_or_shape, identities, result_type, into, distinct=False)

    def return_distinct(
        self,
        identity_or_shape: str | ShapeFunction,
        *identities: str,
        result_type: ResultType = object,
        into: Callable[..., Any] | None = None,
    ) -> "CypherFluentQuery[Any]":
        """Like ``return_`` but renders ``RETURN distinct ...``."""
        return self._return(identity_or_shape, identities, result_type, into, distinct=True)

    def _return(
        self,
        identity_or_shape: str | ShapeFunction,
        identities: tuple[str, ...],
        result_type: ResultType,
        into: Callable[..., Any] | None,
        distinct: bool,
    ) -> "CypherFluentQuery[Any]":
        specification: ReturnSpecification
        if callable(identity_or_shape):
            if identities:
                raise TypeError("A projection return takes a single shape function")
            specification = translate_projection(identity_or_shape, into=into, distinct=distinct)
        else:
            if into is not None:
                raise TypeError("into= only applies to projection returns")
            specification = translate_identities(
                (identity_or_shape, *identities),
                result_type=result_type,
                distinct=distinct,
            )

        return self._derive(
            clauses=self._clauses.append(ClauseType.RETURN, specification.render()),
            returns=specification,
        )

    def order_by(self, *properties: str) -> Self:
        """Set the ORDER BY clause, replacing any earlier one.

        Example:
            ```python
            query.order_by("n.name", "n.age")
            ```
        """
        if not properties:
            raise ValueError("order_by() needs at least one property")
        return self.append_clause(ClauseType.ORDER_BY, ", ".join(properties))

    def order_by_descending(self, *properties: str) -> Self:
        if not properties:
            raise ValueError("order_by_descending() needs at least one property")
        return self.append_clause(ClauseType.ORDER_BY, ", ".join(f"{item} DESC" for item in properties))

    @property
    def result_mode(self) -> CypherResultMode | None:
        return self._returns.result_mode if self._returns else None

    @property
    def query(self) -> CypherQuery:
        """Render the query text and parameters without executing anything."""
        return render(self._clauses, self.result_mode, self._style)

    def _row_mapper(self) -> RowMapper[Any]:
        # Queries without RETURN are rejected by the server; rows are kept raw otherwise
        return mapper_for(self._returns or SetReturn(identities=()))

    @with_error_handling()
    async def results(self) -> list[T]:
        """Execute the query and materialize its rows.

        Returns:
            One value per row: the returned identity (or a tuple of them) in
            Set mode, a record in Projection mode

        Raises:
            ValueError: If the query is not bound to a client
            AuthoringError: If the server rejects the query
            TransportError: If the request fails
            DeserializationError: If rows do not match the declared result shape
        """
        if self._client is None:
            raise ValueError("This query is not bound to a graph client")

        query = self.query
        logger.debug(
            "Executing Cypher query",
            extra={"query": query.query_text, "result_mode": query.result_mode},
        )
        return await self._client.execute_get_cypher_results(query, self._row_mapper())

    def __repr__(self) -> str:
        return f"CypherFluentQuery({self.query.query_text!r})"
