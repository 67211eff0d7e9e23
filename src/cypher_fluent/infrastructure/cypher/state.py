"""Clause kinds and result-mode state for the Cypher query builder.

Clause kinds are declared in the order they are rendered: the query text
always reads START, MATCH, WHERE, WITH, RETURN, ORDER BY, SKIP, LIMIT, no
matter in which order the fluent calls were made.
"""

from enum import Enum, auto


class ClauseType(Enum):
    """Enum for Cypher clause types, in rendering precedence."""

    START = auto()
    MATCH = auto()
    WHERE = auto()
    WITH = auto()
    RETURN = auto()
    ORDER_BY = auto()
    SKIP = auto()
    LIMIT = auto()

    @property
    def keyword(self) -> str:
        return _KEYWORDS[self]

    @property
    def bit_separator(self) -> str:
        """Separator between bits contributed to this clause by separate calls."""
        return _BIT_SEPARATORS.get(self, ", ")

    @property
    def groups_bits(self) -> bool:
        """Whether each bit is parenthesized when the clause holds several."""
        return self is ClauseType.WHERE

    @property
    def repeatable(self) -> bool:
        """Whether separate calls add bits (True) or replace the clause (False)."""
        return self in _REPEATABLE

    @property
    def precedence(self) -> int:
        return _PRECEDENCE.index(self)


_KEYWORDS: dict[ClauseType, str] = {
    ClauseType.START: "START",
    ClauseType.MATCH: "MATCH",
    ClauseType.WHERE: "WHERE",
    ClauseType.WITH: "WITH",
    ClauseType.RETURN: "RETURN",
    ClauseType.ORDER_BY: "ORDER BY",
    ClauseType.SKIP: "SKIP",
    ClauseType.LIMIT: "LIMIT",
}

_BIT_SEPARATORS: dict[ClauseType, str] = {
    ClauseType.WHERE: " AND ",
}

_REPEATABLE: frozenset[ClauseType] = frozenset(
    {
        ClauseType.START,
        ClauseType.MATCH,
        ClauseType.WHERE,
        ClauseType.WITH,
    }
)

_PRECEDENCE: tuple[ClauseType, ...] = tuple(ClauseType)


class CypherResultMode(str, Enum):
    """How the rows of a response are materialized.

    ``SET`` returns the bound identifiers themselves (one value per row, or a
    tuple when several identifiers are returned). ``PROJECTION`` returns one
    record per row, built from named return expressions.
    """

    SET = "set"
    PROJECTION = "projection"
