"""Fluent Cypher query builder.

This package assembles Cypher query text and parameters from chained clause
calls and materializes the rows of executed queries.
"""

from .builder import CypherFluentQuery
from .clauses import ClauseAccumulator, ClauseFragment
from .parameters import Bound, ParameterRef, ParameterTable
from .query import CypherQuery
from .renderer import PlaceholderStyle, render
from .results import ProjectionRowMapper, RowMapper, SetRowMapper, convert_value
from .returns import Identity, ProjectionField, expression
from .start import StartBit
from .state import ClauseType, CypherResultMode

__all__ = [
    "Bound",
    "ClauseAccumulator",
    "ClauseFragment",
    "ClauseType",
    # Builder
    "CypherFluentQuery",
    "CypherQuery",
    "CypherResultMode",
    # Returns
    "Identity",
    "ParameterRef",
    "ParameterTable",
    "PlaceholderStyle",
    "ProjectionField",
    "ProjectionRowMapper",
    "RowMapper",
    "SetRowMapper",
    "StartBit",
    "convert_value",
    "expression",
    "render",
]
