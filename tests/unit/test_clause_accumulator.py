"""Parameter table, clause accumulator and renderer."""

from __future__ import annotations

from cypher_fluent.infrastructure.cypher import (
    Bound,
    ClauseAccumulator,
    ClauseType,
    ParameterRef,
    ParameterTable,
    PlaceholderStyle,
    render,
)


class TestParameterTable:
    def test_names_follow_binding_order(self) -> None:
        table = ParameterTable()
        table, first = table.bind("a")
        table, second = table.bind("b")

        assert (first, second) == (ParameterRef("p0"), ParameterRef("p1"))
        assert table.as_dict() == {"p0": "a", "p1": "b"}

    def test_binding_leaves_the_original_table_untouched(self) -> None:
        base, _ = ParameterTable().bind(1)
        grown, _ = base.bind(2)

        assert len(base) == 1
        assert len(grown) == 2
        assert list(grown) == ["p0", "p1"]

    def test_lookup_by_name(self) -> None:
        table, _ = ParameterTable().bind(42)

        assert table["p0"] == 42


class TestClauseAccumulator:
    def test_with_clause_passes_the_current_table(self) -> None:
        accumulator = ClauseAccumulator().append(ClauseType.START, "n=node(", Bound(3), ")")

        def build(table: ParameterTable) -> tuple[ParameterTable, list[str | ParameterRef]]:
            table, ref = table.bind(5)
            return table, [ref]

        grown = accumulator.with_clause(ClauseType.LIMIT, build)

        assert grown.fragments[-1].parameter_names == ("p1",)
        assert grown.parameters.as_dict() == {"p0": 3, "p1": 5}
        assert len(accumulator.fragments) == 1

    def test_repeatable_kinds_accumulate(self) -> None:
        accumulator = ClauseAccumulator().append(ClauseType.MATCH, "a-->b").append(ClauseType.MATCH, "b-->c")

        assert len(accumulator.of_kind(ClauseType.MATCH)) == 2

    def test_single_occurrence_kinds_replace(self) -> None:
        accumulator = ClauseAccumulator().append(ClauseType.RETURN, "a").append(ClauseType.RETURN, "b")

        assert [fragment.segments for fragment in accumulator.of_kind(ClauseType.RETURN)] == [("b",)]

    def test_membership_by_kind(self) -> None:
        accumulator = ClauseAccumulator().append(ClauseType.WHERE, "a.x = 1")

        assert ClauseType.WHERE in accumulator
        assert ClauseType.RETURN not in accumulator


class TestRender:
    def test_empty_accumulator_renders_nothing(self) -> None:
        rendered = render(ClauseAccumulator())

        assert rendered.query_text == ""
        assert dict(rendered.query_parameters) == {}

    def test_absent_kinds_leave_no_blank_lines(self) -> None:
        accumulator = (
            ClauseAccumulator()
            .append(ClauseType.LIMIT, Bound(1))
            .append(ClauseType.START, "n=node(", Bound(2), ")")
        )

        assert render(accumulator).query_text == "START n=node({p1})\nLIMIT {p0}"

    def test_placeholder_style(self) -> None:
        accumulator = ClauseAccumulator().append(ClauseType.SKIP, Bound(3))

        assert render(accumulator, style=PlaceholderStyle.DOLLAR).query_text == "SKIP $p0"
