"""Materialization of Cypher response rows into typed values.

Set-mode rows convert each column through the declared result type.
Projection rows are mapped positionally: column ``i`` feeds projection field
``i``, then the record type is built from the converted fields.
"""

from collections.abc import Iterator, Sequence
from functools import lru_cache
from typing import Any, Generic, Protocol, TypeVar, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

from cypher_fluent.core.base import ResultShapeErrorDetails
from cypher_fluent.core.errors import DeserializationError
from cypher_fluent.domain.models import Node, is_rest_entity

from .returns import ProjectionReturn, ResultType, SetReturn

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@lru_cache(maxsize=128)
def _adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def convert_value(value: Any, result_type: ResultType) -> Any:
    """Convert one response value to ``result_type``.

    ``object`` (and ``Any``) keep the raw value. ``Node[T]`` builds a node
    wrapper from a REST node document. Pydantic models are validated from the
    document's ``data`` when given a REST entity. Other types go through a
    pydantic ``TypeAdapter``; plain functions are called with the value.

    Raises:
        ValueError, TypeError, KeyError or pydantic.ValidationError from the
        underlying conversion
    """
    if result_type is object or result_type is Any:
        return value

    # Parametrized generics such as list[int] go straight to the adapter
    generic = get_origin(result_type) is not None

    if not generic and isinstance(result_type, type):
        if issubclass(result_type, Node):
            if is_rest_entity(value):
                return result_type.from_rest(value)
            return result_type.model_validate(value)
        if issubclass(result_type, BaseModel) and is_rest_entity(value):
            return result_type.model_validate(value["data"])
        return _adapter(result_type).validate_python(value)

    if not generic and callable(result_type):
        return result_type(value)

    return _adapter(result_type).validate_python(value)


def _type_name(result_type: ResultType) -> str:
    return getattr(result_type, "__name__", repr(result_type))


def _convert_column(value: Any, result_type: ResultType, row_index: int, column: str) -> Any:
    try:
        return convert_value(value, result_type)
    except (ValidationError, ValueError, TypeError, KeyError) as e:
        raise DeserializationError(
            f"Could not convert column {column!r} of row {row_index} to {_type_name(result_type)}: {e}",
            details=ResultShapeErrorDetails(
                source="results",
                operation="convert_value",
                row_index=row_index,
                column=column,
                expected_type=_type_name(result_type),
                actual_value=repr(value),
            ),
        ) from e


class RowMapper(Protocol[T_co]):
    """Turns the columns and rows of a response into typed results."""

    def map_rows(self, columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> Iterator[T_co]: ...


def _check_row_width(row: Sequence[Any], width: int, row_index: int) -> None:
    if len(row) != width:
        raise DeserializationError(
            f"Row {row_index} has {len(row)} values but the response declares {width} columns",
            details=ResultShapeErrorDetails(
                source="results",
                operation="map_rows",
                row_index=row_index,
            ),
        )


class SetRowMapper(Generic[T]):
    """Maps rows of an identity-based return.

    A single column yields one converted value per row; several columns yield
    a tuple per row, every value converted with the same result type.
    """

    def __init__(self, specification: SetReturn) -> None:
        self.specification = specification

    def map_rows(self, columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> Iterator[T]:
        result_type = self.specification.result_type
        identities = self.specification.identities
        width = len(columns)
        # Without a RETURN clause there are no identities and rows stay raw
        if identities and width != len(identities):
            raise DeserializationError(
                f"Response has {width} columns {list(columns)} but the query returns "
                f"{len(identities)} identities {list(identities)}",
                details=ResultShapeErrorDetails(
                    source="results",
                    operation="map_rows",
                    expected_type=_type_name(result_type),
                ),
            )

        for row_index, row in enumerate(rows):
            _check_row_width(row, width, row_index)
            values = [
                _convert_column(value, result_type, row_index, column)
                for column, value in zip(columns, row, strict=True)
            ]
            yield values[0] if width == 1 else tuple(values)  # type: ignore[misc]


class ProjectionRowMapper(Generic[T]):
    """Maps rows of a projection return onto its record type."""

    def __init__(self, specification: ProjectionReturn) -> None:
        self.specification = specification

    def map_rows(self, columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> Iterator[T]:
        fields = self.specification.fields
        if len(columns) != len(fields):
            raise DeserializationError(
                f"Response has {len(columns)} columns {list(columns)} but the projection "
                f"declares {len(fields)} fields {[field.name for field in fields]}",
                details=ResultShapeErrorDetails(source="results", operation="map_rows"),
            )

        record_type = self.specification.record_type
        for row_index, row in enumerate(rows):
            _check_row_width(row, len(fields), row_index)
            values = {
                field.name: _convert_column(value, field.result_type, row_index, field.column)
                for field, value in zip(fields, row, strict=True)
            }
            yield self._build_record(record_type, values, row_index)

    @staticmethod
    def _build_record(record_type: Any, values: dict[str, Any], row_index: int) -> Any:
        try:
            if isinstance(record_type, type) and issubclass(record_type, BaseModel):
                return record_type.model_validate(values)
            return record_type(**values)
        except (ValidationError, ValueError, TypeError) as e:
            raise DeserializationError(
                f"Could not build {_type_name(record_type)} from row {row_index}: {e}",
                details=ResultShapeErrorDetails(
                    source="results",
                    operation="build_record",
                    row_index=row_index,
                    expected_type=_type_name(record_type),
                ),
            ) from e


def mapper_for(specification: SetReturn | ProjectionReturn) -> RowMapper[Any]:
    if isinstance(specification, ProjectionReturn):
        return ProjectionRowMapper(specification)
    return SetRowMapper(specification)
