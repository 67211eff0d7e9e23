"""START clause bits.

A start bit binds an identity to one or more graph entities, e.g.
``n=node({p0})`` or ``r=relationship({p0}, {p1})``. Entity ids are always
bound as parameters.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from cypher_fluent.domain.models import GraphReference

from .parameters import Bound


@dataclass(frozen=True, init=False)
class StartBit:
    """An ``identity=function(ids...)`` binding for the START clause.

    Example:
        ```python
        StartBit("me", NodeReference(123))
        StartBit("r", RelationshipReference(7), RelationshipReference(8))
        ```
    """

    identity: str
    references: tuple[GraphReference, ...]

    def __init__(self, identity: str, *references: GraphReference) -> None:
        if not identity:
            raise ValueError("A start bit needs an identity")
        if not references:
            raise ValueError(f"Start bit {identity!r} needs at least one reference")

        functions = {reference.start_function for reference in references}
        if len(functions) > 1:
            raise ValueError(
                f"Start bit {identity!r} mixes node and relationship references"
            )

        object.__setattr__(self, "identity", identity)
        object.__setattr__(self, "references", tuple(references))

    @property
    def start_function(self) -> str:
        return self.references[0].start_function

    def to_parts(self) -> list[str | Bound]:
        """Literal text and bound ids for this bit, in rendering order."""
        parts: list[str | Bound] = [f"{self.identity}={self.start_function}("]
        for index, reference in enumerate(self.references):
            if index:
                parts.append(", ")
            parts.append(Bound(reference.id))
        parts.append(")")
        return parts


def coerce_start_bits(
    identity_or_bit: "str | StartBit",
    rest: Sequence["GraphReference | StartBit"],
) -> list[StartBit]:
    """Normalize the two calling styles of ``start()`` into start bits.

    ``start("n", NodeReference(3))`` and ``start(StartBit(...), StartBit(...))``
    are both accepted; mixing them is not.
    """
    if isinstance(identity_or_bit, str):
        if not all(isinstance(reference, GraphReference) for reference in rest):
            raise TypeError("start(identity, ...) takes node or relationship references")
        return [StartBit(identity_or_bit, *rest)]  # type: ignore[arg-type]

    bits = [identity_or_bit, *rest]
    if not all(isinstance(bit, StartBit) for bit in bits):
        raise TypeError("start() takes either an identity with references, or start bits")
    return bits  # type: ignore[return-value]
