"""Immutable clause accumulator for the Cypher query builder."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace

from .parameters import Bound, ParameterRef, ParameterTable
from .state import ClauseType

Segment = str | ParameterRef
ClauseBuild = Callable[[ParameterTable], tuple[ParameterTable, Sequence[Segment]]]


@dataclass(frozen=True, slots=True)
class ClauseFragment:
    """One bit of a clause: literal text interleaved with parameter references.

    ``joiner`` overrides the clause's bit separator in front of this bit
    (``" OR "`` for ``or_where``); it is dropped when the bit comes first.
    """

    kind: ClauseType
    segments: tuple[Segment, ...]
    joiner: str | None = None

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return tuple(segment.name for segment in self.segments if isinstance(segment, ParameterRef))


@dataclass(frozen=True, slots=True)
class ClauseAccumulator:
    """Ordered clause fragments plus the parameters they consume.

    Every method returns a new accumulator; the receiver is never changed.
    """

    fragments: tuple[ClauseFragment, ...] = field(default=())
    parameters: ParameterTable = field(default_factory=ParameterTable)

    def with_clause(
        self,
        kind: ClauseType,
        build: ClauseBuild,
        joiner: str | None = None,
    ) -> "ClauseAccumulator":
        """Append a fragment built against the current parameter table.

        ``build`` receives the table, binds whatever values it needs and
        returns the grown table with the fragment's segments. Clauses that
        may only appear once replace any earlier fragment of their kind;
        parameters bound by the replaced fragment keep their names.
        """
        parameters, segments = build(self.parameters)
        fragment = ClauseFragment(kind=kind, segments=tuple(segments), joiner=joiner)

        kept = self.fragments
        if not kind.repeatable:
            kept = tuple(existing for existing in kept if existing.kind is not kind)

        return replace(self, fragments=(*kept, fragment), parameters=parameters)

    def append(
        self,
        kind: ClauseType,
        *parts: str | Bound,
        joiner: str | None = None,
    ) -> "ClauseAccumulator":
        """Append a fragment from literal text and ``Bound`` values, binding values in order."""

        def build(table: ParameterTable) -> tuple[ParameterTable, list[Segment]]:
            segments: list[Segment] = []
            for part in parts:
                if isinstance(part, Bound):
                    table, ref = table.bind(part.value)
                    segments.append(ref)
                else:
                    segments.append(part)
            return table, segments

        return self.with_clause(kind, build, joiner=joiner)

    def of_kind(self, kind: ClauseType) -> tuple[ClauseFragment, ...]:
        return tuple(fragment for fragment in self.fragments if fragment.kind is kind)

    def __contains__(self, kind: object) -> bool:
        return any(fragment.kind is kind for fragment in self.fragments)
