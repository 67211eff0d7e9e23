"""Renders accumulated clause fragments into Cypher query text."""

from collections.abc import Callable
from enum import Enum

from .clauses import ClauseAccumulator, ClauseFragment
from .parameters import ParameterRef
from .query import CypherQuery
from .state import ClauseType, CypherResultMode

LINE_SEPARATOR = "\n"


class PlaceholderStyle(str, Enum):
    """Wire syntax for parameter placeholders."""

    BRACES = "braces"  # {p0}
    DOLLAR = "dollar"  # $p0

    def placeholder(self, name: str) -> str:
        return _PLACEHOLDER_FORMATS[self](name)


_PLACEHOLDER_FORMATS: dict[PlaceholderStyle, Callable[[str], str]] = {
    PlaceholderStyle.BRACES: lambda name: f"{{{name}}}",
    PlaceholderStyle.DOLLAR: lambda name: f"${name}",
}


def render_fragment(fragment: ClauseFragment, style: PlaceholderStyle) -> str:
    return "".join(
        style.placeholder(segment.name) if isinstance(segment, ParameterRef) else segment
        for segment in fragment.segments
    )


def render_clause(kind: ClauseType, fragments: tuple[ClauseFragment, ...], style: PlaceholderStyle) -> str:
    """Render all bits of one clause kind as a single line.

    Several WHERE conditions are each wrapped in parentheses so that an OR
    inside one condition cannot bind to its neighbours.
    """
    grouped = kind.groups_bits and len(fragments) > 1
    parts: list[str] = []
    for index, fragment in enumerate(fragments):
        if index:
            parts.append(fragment.joiner or kind.bit_separator)
        text = render_fragment(fragment, style)
        parts.append(f"({text})" if grouped else text)
    return f"{kind.keyword} {''.join(parts)}"


def render(
    accumulator: ClauseAccumulator,
    result_mode: CypherResultMode | None = None,
    style: PlaceholderStyle = PlaceholderStyle.BRACES,
) -> CypherQuery:
    """Render clauses in fixed precedence order, one line per clause kind.

    Kinds without fragments are left out entirely. Missing clauses (no RETURN,
    for one) are not reported here; the server rejects such queries.
    """
    lines = [
        render_clause(kind, fragments, style)
        for kind in sorted(ClauseType, key=lambda kind: kind.precedence)
        if (fragments := accumulator.of_kind(kind))
    ]
    return CypherQuery(
        query_text=LINE_SEPARATOR.join(lines),
        query_parameters=accumulator.parameters.as_dict(),
        result_mode=result_mode,
    )
