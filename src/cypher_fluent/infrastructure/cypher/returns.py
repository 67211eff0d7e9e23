"""RETURN clause translation.

Two styles are supported:

Identity-based returns name identifiers bound by earlier clauses:

```python
query.return_("n", result_type=Node[Person])        # RETURN n
query.return_distinct("a", "b")                     # RETURN distinct a, b
```

Projection returns describe a record shape with a function. Each parameter of
the function receives a handle named after a query identifier, and the
function returns a mapping of field name to return expression:

```python
query.return_(lambda other: {"Foo": other.as_(int)})            # RETURN other AS Foo
query.return_(lambda n: {"Name": n.name.as_(str, alias="nm")})  # RETURN n.name AS nm
```

The shape function only ever sees handles, never live data; calling it just
records which expressions go into which fields.
"""

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import create_model

from .state import CypherResultMode

ResultType = Any  # a type, Node[T], or a plain conversion function


class Identity:
    """Handle for a query identifier (or raw expression) inside a shape function.

    Attribute access builds property paths: ``n.address.city`` stands for the
    Cypher expression ``n.address.city``.
    """

    __slots__ = ("_text",)

    def __init__(self, text: str) -> None:
        self._text = text

    def __getattr__(self, name: str) -> "Identity":
        if name.startswith("_"):
            raise AttributeError(name)
        return Identity(f"{self._text}.{name}")

    def as_(self, result_type: ResultType = object, alias: str | None = None) -> "ReturnExpression":
        """Tag this expression with the type its column is converted to.

        Args:
            result_type: Type (or conversion function) for the column values
            alias: Column name in the RETURN clause; defaults to the field name
        """
        return ReturnExpression(text=self._text, result_type=result_type, alias=alias)

    def __repr__(self) -> str:
        return f"Identity({self._text!r})"


def expression(text: str) -> Identity:
    """Handle for a raw Cypher expression, e.g. ``expression("count(n)").as_(int)``."""
    return Identity(text)


@dataclass(frozen=True)
class ReturnExpression:
    text: str
    result_type: ResultType = object
    alias: str | None = None


@dataclass(frozen=True)
class ProjectionField:
    """One output field: where its value comes from and what it converts to."""

    name: str
    expression: str
    column: str
    result_type: ResultType = object

    def render(self) -> str:
        return f"{self.expression} AS {self.column}"


@dataclass(frozen=True)
class SetReturn:
    """Identity-based return: rows hold the identifiers themselves."""

    identities: tuple[str, ...]
    result_type: ResultType = object
    distinct: bool = False

    result_mode = CypherResultMode.SET

    def render(self) -> str:
        prefix = "distinct " if self.distinct else ""
        return prefix + ", ".join(self.identities)


@dataclass(frozen=True)
class ProjectionReturn:
    """Projection return: rows are mapped positionally onto ``fields``."""

    fields: tuple[ProjectionField, ...]
    record_type: Callable[..., Any]
    distinct: bool = False

    result_mode = CypherResultMode.PROJECTION

    def render(self) -> str:
        prefix = "distinct " if self.distinct else ""
        return prefix + ", ".join(field.render() for field in self.fields)


ReturnSpecification = SetReturn | ProjectionReturn


def translate_identities(
    identities: tuple[str, ...],
    result_type: ResultType = object,
    distinct: bool = False,
) -> SetReturn:
    """Build an identity-based return specification."""
    if not identities:
        raise ValueError("return_() needs at least one identity")
    for identity in identities:
        if not isinstance(identity, str) or not identity:
            raise TypeError(f"Return identities must be non-empty strings, got {identity!r}")
    return SetReturn(identities=identities, result_type=result_type, distinct=distinct)


def _annotation_for(result_type: ResultType) -> Any:
    if result_type is object or not isinstance(result_type, type):
        # Conversion functions produce values of unknown type
        return Any
    return result_type


def _generated_record_type(fields: tuple[ProjectionField, ...]) -> type:
    return create_model(
        "CypherProjection",
        **{field.name: (_annotation_for(field.result_type), ...) for field in fields},
    )


def translate_projection(
    shape: Callable[..., Mapping[str, Any]],
    into: Callable[..., Any] | None = None,
    distinct: bool = False,
) -> ProjectionReturn:
    """Enumerate the fields a shape function describes.

    Args:
        shape: Function whose parameter names are query identifiers and which
            returns a mapping of field name to ``Identity.as_(...)`` expressions
        into: Record type to build for each row (pydantic model, dataclass or
            any callable taking the fields as keywords); a pydantic model is
            generated from the field names and type tags when omitted
        distinct: Emit ``RETURN distinct``

    Raises:
        TypeError: If the shape function takes variadic parameters or does not
            return a mapping of expressions
    """
    handles: list[Identity] = []
    keyword_handles: dict[str, Identity] = {}
    for parameter in inspect.signature(shape).parameters.values():
        if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            raise TypeError("Projection shape functions cannot take *args or **kwargs")
        if parameter.kind is inspect.Parameter.KEYWORD_ONLY:
            keyword_handles[parameter.name] = Identity(parameter.name)
        else:
            handles.append(Identity(parameter.name))

    described = shape(*handles, **keyword_handles)
    if not isinstance(described, Mapping):
        raise TypeError(
            f"Projection shape functions must return a mapping of field names, got {type(described).__name__}"
        )
    if not described:
        raise ValueError("Projection shape functions must describe at least one field")

    fields: list[ProjectionField] = []
    for name, value in described.items():
        if isinstance(value, Identity):
            value = value.as_()
        if not isinstance(value, ReturnExpression):
            raise TypeError(
                f"Projection field {name!r} must be an identity expression, got {value!r}"
            )
        fields.append(
            ProjectionField(
                name=name,
                expression=value.text,
                column=value.alias or name,
                result_type=value.result_type,
            )
        )

    frozen = tuple(fields)
    return ProjectionReturn(
        fields=frozen,
        record_type=into or _generated_record_type(frozen),
        distinct=distinct,
    )
