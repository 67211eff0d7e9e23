"""Parameter table for Cypher queries.

Every literal value a clause introduces is bound to a positional name
(``p0``, ``p1``, ...) in order of introduction. Tables are immutable:
binding returns a new table, so two builders branched from the same base
never see each other's parameters.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

PARAMETER_PREFIX = "p"


@dataclass(frozen=True, slots=True)
class ParameterRef:
    """Reference to a bound parameter from within clause text."""

    name: str


@dataclass(frozen=True, slots=True)
class Bound:
    """Marker for a literal value that must be bound as a parameter."""

    value: Any


@dataclass(frozen=True, slots=True)
class ParameterTable:
    """Ordered, append-only mapping of parameter names to values."""

    _values: tuple[Any, ...] = field(default=())

    def bind(self, value: Any) -> tuple["ParameterTable", ParameterRef]:
        """Bind a value under the next free name.

        Values are stored as-is; equal values still get distinct names.

        Returns:
            The grown table and a reference to the new parameter
        """
        name = f"{PARAMETER_PREFIX}{len(self._values)}"
        return ParameterTable((*self._values, value)), ParameterRef(name)

    def as_dict(self) -> dict[str, Any]:
        return {f"{PARAMETER_PREFIX}{index}": value for index, value in enumerate(self._values)}

    def __getitem__(self, name: str) -> Any:
        if not name.startswith(PARAMETER_PREFIX) or not name[len(PARAMETER_PREFIX):].isdigit():
            raise KeyError(name)
        index = int(name[len(PARAMETER_PREFIX):])
        if index >= len(self._values):
            raise KeyError(name)
        return self._values[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.as_dict())

    def __len__(self) -> int:
        return len(self._values)
