"""GraphClient against a mocked REST API."""

from __future__ import annotations

from typing import Any

import httpx
import pytest
from pydantic import BaseModel

from cypher_fluent import (
    AuthoringError,
    DeserializationError,
    GraphClient,
    Node,
    NodeReference,
    NotConnectedError,
    TransportError,
)
from cypher_fluent.core import ErrorCode
from cypher_fluent.infrastructure.cypher import CypherQuery, CypherResultMode, SetRowMapper
from cypher_fluent.infrastructure.cypher.returns import translate_identities
from tests.fixtures.graph import RecordingHandler, cypher_response, make_client


class Person(BaseModel):
    name: str


class FakeTransport:
    """In-memory CypherTransport returning canned bodies."""

    def __init__(self, post_reply: tuple[int, Any]) -> None:
        self.post_reply = post_reply
        self.posts: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    async def get(self, path: str) -> tuple[int, Any]:
        return 200, {"cypher": "/cypher"}

    async def post(self, path: str, body: dict[str, Any]) -> tuple[int, Any]:
        self.posts.append((path, body))
        return self.post_reply

    async def aclose(self) -> None:
        self.closed = True


class TestConnect:
    @pytest.mark.asyncio
    async def test_discovers_endpoint_and_root_node(self) -> None:
        client = make_client(RecordingHandler())

        await client.connect()

        assert client.is_connected
        assert client.root_node == NodeReference(123)
        await client.aclose()

    def test_root_node_requires_connect(self) -> None:
        client = make_client(RecordingHandler())

        with pytest.raises(NotConnectedError):
            client.root_node  # noqa: B018

    @pytest.mark.asyncio
    async def test_root_without_reference_node(self) -> None:
        client = GraphClient("http://foo/db/data/", transport=FakeTransport((200, {"columns": [], "data": []})))

        await client.connect()

        with pytest.raises(NotConnectedError, match="reference node"):
            client.root_node  # noqa: B018

    @pytest.mark.asyncio
    async def test_malformed_service_root(self) -> None:
        client = make_client(RecordingHandler(service_root={"nodes": "elsewhere"}))

        with pytest.raises(DeserializationError):
            await client.connect()

    @pytest.mark.asyncio
    async def test_service_root_errors(self) -> None:
        client = make_client(lambda request: httpx.Response(503, text="down"))

        with pytest.raises(TransportError) as excinfo:
            await client.connect()

        assert excinfo.value.status_code == 503

    @pytest.mark.asyncio
    async def test_async_context_manager_connects_and_closes(self) -> None:
        transport = FakeTransport((200, {"columns": [], "data": []}))

        async with GraphClient("http://foo/db/data/", transport=transport) as client:
            assert client.is_connected

        assert transport.closed


class TestExecute:
    @pytest.mark.asyncio
    async def test_posts_query_and_parameters(self) -> None:
        transport = FakeTransport((200, {"columns": ["n"], "data": [[1]]}))
        client = GraphClient("http://foo/db/data/", transport=transport)
        await client.connect()

        results = await client.cypher.start("n", NodeReference(3)).return_distinct("n").limit(5).results()

        assert results == [1]
        assert transport.posts == [
            (
                "/cypher",
                {"query": "START n=node({p0})\nRETURN distinct n\nLIMIT {p1}", "params": {"p0": 3, "p1": 5}},
            )
        ]

    @pytest.mark.asyncio
    async def test_set_mode_with_node_wrappers(self) -> None:
        handler = RecordingHandler(
            cypher_response(
                ["common"],
                [
                    [{"self": "http://foo/db/data/node/5", "data": {"name": "Ada"}}],
                    [{"self": "http://foo/db/data/node/6", "data": {"name": "Grace"}}],
                ],
            )
        )
        client = make_client(handler)
        await client.connect()

        results = await (
            client.cypher
            .start("me", client.root_node)
            .match("me-[:FRIEND]-common")
            .return_("common", result_type=Node[Person])
            .results()
        )

        assert [(node.reference.id, node.data.name) for node in results] == [(5, "Ada"), (6, "Grace")]
        await client.aclose()

    @pytest.mark.asyncio
    async def test_execute_requires_connect(self) -> None:
        client = GraphClient("http://foo/db/data/", transport=FakeTransport((200, {})))
        query = CypherQuery("RETURN 1", {}, CypherResultMode.SET)

        with pytest.raises(NotConnectedError):
            await client.execute_get_cypher_results(query, SetRowMapper(translate_identities(("n",))))

    @pytest.mark.asyncio
    async def test_server_rejection_is_an_authoring_error(self) -> None:
        handler = RecordingHandler(
            httpx.Response(
                400,
                json={"message": "Unknown identifier `other`.", "exception": "SyntaxException"},
            )
        )
        client = make_client(handler)
        await client.connect()

        with pytest.raises(AuthoringError, match="Unknown identifier") as excinfo:
            await client.cypher.match("root-->x").return_(lambda other: {"Foo": other.as_(int)}).results()

        assert excinfo.value.server_exception == "SyntaxException"
        assert excinfo.value.details.query_text == "MATCH root-->x\nRETURN other AS Foo"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_unexpected_status_is_a_transport_error(self) -> None:
        client = make_client(RecordingHandler(httpx.Response(500, text="boom")))
        await client.connect()

        with pytest.raises(TransportError) as excinfo:
            await client.cypher.return_("n").results()

        assert excinfo.value.status_code == 500
        await client.aclose()

    @pytest.mark.asyncio
    async def test_network_failures_are_transport_errors(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(RecordingHandler(refuse))
        await client.connect()

        with pytest.raises(TransportError) as excinfo:
            await client.cypher.return_("n").results()

        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_timeouts_carry_their_own_code(self) -> None:
        def stall(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        client = make_client(RecordingHandler(stall))
        await client.connect()

        with pytest.raises(TransportError) as excinfo:
            await client.cypher.return_("n").results()

        assert excinfo.value.code == ErrorCode.TIMEOUT
        await client.aclose()

    @pytest.mark.asyncio
    async def test_malformed_response_is_a_deserialization_error(self) -> None:
        client = make_client(RecordingHandler(httpx.Response(200, json={"rows": []})))
        await client.connect()

        with pytest.raises(DeserializationError):
            await client.cypher.return_("n").results()
        await client.aclose()

    @pytest.mark.asyncio
    async def test_non_json_success_is_a_deserialization_error(self) -> None:
        client = make_client(RecordingHandler(httpx.Response(200, text="<html>")))
        await client.connect()

        with pytest.raises(DeserializationError, match="not JSON"):
            await client.cypher.return_("n").results()
        await client.aclose()

    @pytest.mark.asyncio
    async def test_projection_field_mismatch_aborts_the_results(self) -> None:
        client = make_client(RecordingHandler(cypher_response(["Foo", "Bar"], [[1, 2]])))
        await client.connect()

        with pytest.raises(DeserializationError):
            await client.cypher.return_(lambda other: {"Foo": other.as_(int)}).results()
        await client.aclose()

    @pytest.mark.asyncio
    async def test_identity_column_mismatch_aborts_the_results(self) -> None:
        client = make_client(RecordingHandler(cypher_response(["n", "m"], [[1, 2]])))
        await client.connect()

        with pytest.raises(DeserializationError, match="1 identities"):
            await client.cypher.match("n-->m").return_("n", result_type=int).results()
        await client.aclose()

    @pytest.mark.asyncio
    async def test_dollar_placeholders_from_the_client(self) -> None:
        transport = FakeTransport((200, {"columns": ["n"], "data": []}))
        client = GraphClient("http://foo/db/data/", transport=transport, placeholder_style="dollar")
        await client.connect()

        assert await client.cypher.start("n", NodeReference(1)).return_("n").results() == []
        assert transport.posts[0][1]["query"] == "START n=node($p0)\nRETURN n"
