"""RETURN clause rendering and result-mode selection."""

from __future__ import annotations

import pytest

from cypher_fluent import (
    CypherFluentQuery,
    CypherResultMode,
    Node,
    NodeReference,
    StartBit,
)
from tests.fixtures.graph import RecordingHandler, cypher_response, make_client


class TestReturnRendering:
    def test_return_distinct(self) -> None:
        query = CypherFluentQuery().start("n", NodeReference(3)).return_distinct("n").query

        assert query.query_text == "START n=node({p0})\nRETURN distinct n"
        assert query.query_parameters["p0"] == 3

    def test_return_distinct_with_limit(self) -> None:
        query = CypherFluentQuery().start("n", NodeReference(3)).return_distinct("n").limit(5).query

        assert query.query_text == "START n=node({p0})\nRETURN distinct n\nLIMIT {p1}"
        assert dict(query.query_parameters) == {"p0": 3, "p1": 5}

    def test_return_distinct_with_limit_and_order_by(self) -> None:
        query = (
            CypherFluentQuery()
            .start("n", NodeReference(3))
            .return_distinct("n")
            .order_by("n.Foo")
            .limit(5)
            .query
        )

        assert query.query_text == "START n=node({p0})\nRETURN distinct n\nORDER BY n.Foo\nLIMIT {p1}"
        assert dict(query.query_parameters) == {"p0": 3, "p1": 5}

    def test_return(self) -> None:
        query = CypherFluentQuery().start("n", NodeReference(3)).return_("n").query

        assert query.query_text == "START n=node({p0})\nRETURN n"
        assert query.query_parameters["p0"] == 3

    def test_return_with_limit(self) -> None:
        query = CypherFluentQuery().start("n", NodeReference(3)).return_("n").limit(5).query

        assert query.query_text == "START n=node({p0})\nRETURN n\nLIMIT {p1}"
        assert dict(query.query_parameters) == {"p0": 3, "p1": 5}

    def test_return_with_limit_and_order_by(self) -> None:
        query = CypherFluentQuery().start("n", NodeReference(3)).return_("n").order_by("n.Foo").limit(5).query

        assert query.query_text == "START n=node({p0})\nRETURN n\nORDER BY n.Foo\nLIMIT {p1}"
        assert dict(query.query_parameters) == {"p0": 3, "p1": 5}

    def test_order_by_renders_before_limit_when_limit_is_called_first(self) -> None:
        query = (
            CypherFluentQuery()
            .start(
                StartBit("me", NodeReference(123)),
                StartBit("viewer", NodeReference(456)),
            )
            .match("me-[:FRIEND]-common-[:FRIEND]-viewer")
            .return_("common", result_type=Node[object])
            .limit(5)
            .order_by("common.FirstName")
            .query
        )

        assert query.query_text == (
            "START me=node({p0}), viewer=node({p1})\n"
            "MATCH me-[:FRIEND]-common-[:FRIEND]-viewer\n"
            "RETURN common\n"
            "ORDER BY common.FirstName\n"
            "LIMIT {p2}"
        )
        assert dict(query.query_parameters) == {"p0": 123, "p1": 456, "p2": 5}

    def test_second_return_replaces_the_first(self) -> None:
        query = CypherFluentQuery().start("n", NodeReference(3)).return_("n").return_distinct("n.name").query

        assert query.query_text == "START n=node({p0})\nRETURN distinct n.name"

    def test_return_several_identities(self) -> None:
        query = CypherFluentQuery().match("a-->b").return_("a", "b").query

        assert query.query_text == "MATCH a-->b\nRETURN a, b"

    def test_projection_return_renders_aliases(self) -> None:
        query = (
            CypherFluentQuery()
            .start("root", NodeReference(123))
            .match("root-->other")
            .return_(lambda other: {"Foo": other.as_(int)})
            .query
        )

        assert query.query_text == "START root=node({p0})\nMATCH root-->other\nRETURN other AS Foo"

    def test_distinct_projection_return(self) -> None:
        query = CypherFluentQuery().return_distinct(lambda a, b: {"A": a.name.as_(str), "B": b}).query

        assert query.query_text == "RETURN distinct a.name AS A, b AS B"


class TestResultMode:
    def test_identity_based_return_uses_set_mode(self) -> None:
        assert CypherFluentQuery().return_("foo").query.result_mode is CypherResultMode.SET

    def test_lambda_based_return_uses_projection_mode(self) -> None:
        query = CypherFluentQuery().return_(lambda a: {"Foo": a.as_(object)}).query

        assert query.result_mode is CypherResultMode.PROJECTION

    def test_node_wrapper_return_still_uses_set_mode(self) -> None:
        query = CypherFluentQuery().return_("n", result_type=Node[object]).query

        assert query.result_mode is CypherResultMode.SET

    def test_distinct_identity_return_uses_set_mode(self) -> None:
        assert CypherFluentQuery().return_distinct("n").result_mode is CypherResultMode.SET

    def test_query_without_return_has_no_mode(self) -> None:
        assert CypherFluentQuery().match("a-->b").query.result_mode is None


@pytest.mark.asyncio
async def test_supports_projection_return_types_end_to_end() -> None:
    handler = RecordingHandler(
        cypher_response(["Foo"], [[1], [2], [3]]),
    )
    client = make_client(handler)
    await client.connect()

    results = await (
        client.cypher
        .start("root", client.root_node)
        .match("root-->other")
        .return_(lambda other: {"Foo": other.as_(int)})
        .results()
    )

    assert handler.cypher_requests == [
        {
            "query": "START root=node({p0})\nMATCH root-->other\nRETURN other AS Foo",
            "params": {"p0": 123},
        }
    ]
    assert [result.Foo for result in results] == [1, 2, 3]
    await client.aclose()
