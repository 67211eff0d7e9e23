"""Graph client for the REST Cypher endpoint.

The client discovers the Cypher endpoint and root node from the service root,
hands out fluent queries bound to itself, and executes rendered queries.
"""

import time
from types import TracebackType
from typing import Any, Self, TypeVar

from pydantic import ValidationError

from cypher_fluent.core.base import QueryErrorDetails, ResultShapeErrorDetails, ServiceErrorDetails
from cypher_fluent.core.config import settings
from cypher_fluent.core.decorators import with_error_handling
from cypher_fluent.core.errors import (
    AuthoringError,
    DeserializationError,
    NotConnectedError,
    TransportError,
)
from cypher_fluent.core.logging import get_logger, log_with_context, update_log_context
from cypher_fluent.domain.models import CypherApiResponse, NodeReference, ServiceRoot
from cypher_fluent.infrastructure.cypher import CypherFluentQuery, CypherQuery, PlaceholderStyle, RowMapper

from .transport import CypherTransport, HttpxTransport

logger = get_logger(__name__)

T = TypeVar("T")

HTTP_OK = 200
HTTP_BAD_REQUEST = 400


def _server_error(payload: Any) -> tuple[str, str | None]:
    """Message and exception name from an error response body."""
    if isinstance(payload, dict):
        return str(payload.get("message") or payload), payload.get("exception")
    return str(payload), None


class GraphClient:
    """Client for a graph database's REST API.

    Example:
        ```python
        async with GraphClient("http://localhost:7474/db/data/") as client:
            names = await (
                client.cypher
                .start("n", client.root_node)
                .match("n-->friend")
                .return_(lambda friend: {"Name": friend.name.as_(str)})
                .results()
            )
        ```
    """

    def __init__(
        self,
        root_uri: str | None = None,
        transport: CypherTransport | None = None,
        placeholder_style: PlaceholderStyle | str | None = None,
    ) -> None:
        """Initialize the client; call ``connect()`` before running queries.

        Args:
            root_uri: Service root URI; defaults to ``settings.graph_uri``
            transport: Request primitive; an ``HttpxTransport`` is created when omitted
            placeholder_style: Placeholder syntax for queries from ``cypher``
        """
        self.root_uri = root_uri or settings.graph_uri
        self._transport = transport or HttpxTransport(self.root_uri)
        self._placeholder_style = placeholder_style
        self._cypher_endpoint: str | None = None
        self._root_node: NodeReference | None = None

    @property
    def is_connected(self) -> bool:
        return self._cypher_endpoint is not None

    @with_error_handling()
    async def connect(self) -> None:
        """Read the service root to discover the Cypher endpoint and root node.

        Raises:
            TransportError: If the service root cannot be fetched
            DeserializationError: If the service root document is malformed
        """
        status_code, payload = await self._transport.get("")
        if status_code != HTTP_OK:
            raise TransportError(
                f"Service root {self.root_uri} returned status {status_code}",
                details=ServiceErrorDetails(
                    source="graph_client",
                    operation="connect",
                    endpoint=self.root_uri,
                    status_code=status_code,
                ),
            )

        try:
            root = ServiceRoot.model_validate(payload)
        except ValidationError as e:
            raise DeserializationError(
                f"Service root {self.root_uri} is not a valid service root document",
                details=ResultShapeErrorDetails(source="graph_client", operation="connect"),
            ) from e

        self._cypher_endpoint = root.cypher
        self._root_node = NodeReference.from_uri(root.reference_node) if root.reference_node else None

        update_log_context("graph_uri", self.root_uri)
        log_with_context(
            "info",
            "Connected to graph server",
            extra={"cypher_endpoint": self._cypher_endpoint, "root_node": repr(self._root_node)},
            logger_name=__name__,
        )

    @property
    def root_node(self) -> NodeReference:
        """Reference node discovered by ``connect()``, usable as a START argument."""
        if not self.is_connected:
            raise NotConnectedError("The client must be connected before the root node is available")
        if self._root_node is None:
            raise NotConnectedError(f"The service root of {self.root_uri} does not expose a reference node")
        return self._root_node

    @property
    def cypher(self) -> CypherFluentQuery[Any]:
        """A new, empty fluent query bound to this client."""
        return CypherFluentQuery(self, self._placeholder_style)

    async def execute_get_cypher_results(self, query: CypherQuery, mapper: RowMapper[T]) -> list[T]:
        """Post a rendered query to the Cypher endpoint and materialize the rows.

        Args:
            query: Rendered query
            mapper: Converts the response columns and rows

        Returns:
            Results in row order

        Raises:
            NotConnectedError: If ``connect()`` has not run
            AuthoringError: If the server rejects the query
            TransportError: On network failure or an unexpected status code
            DeserializationError: If the response does not have the expected shape
        """
        if self._cypher_endpoint is None:
            raise NotConnectedError("The client must be connected before running Cypher queries")

        body = query.to_api_query().model_dump()
        started = time.perf_counter()
        status_code, payload = await self._transport.post(self._cypher_endpoint, body)
        latency_ms = (time.perf_counter() - started) * 1000

        log_with_context(
            "debug",
            "Cypher query executed",
            extra={"status_code": status_code, "latency_ms": round(latency_ms, 2)},
            logger_name=__name__,
        )

        if status_code == HTTP_BAD_REQUEST:
            message, exception = _server_error(payload)
            raise AuthoringError(
                f"The server rejected the query: {message}",
                details=QueryErrorDetails(
                    source="graph_client",
                    operation="execute_cypher",
                    endpoint=self._cypher_endpoint,
                    status_code=status_code,
                    latency_ms=latency_ms,
                    query_text=query.query_text,
                    server_exception=exception,
                ),
            )
        if status_code != HTTP_OK:
            message, _ = _server_error(payload)
            raise TransportError(
                f"Cypher endpoint returned status {status_code}: {message}",
                details=ServiceErrorDetails(
                    source="graph_client",
                    operation="execute_cypher",
                    endpoint=self._cypher_endpoint,
                    status_code=status_code,
                    latency_ms=latency_ms,
                ),
            )

        try:
            response = CypherApiResponse.model_validate(payload)
        except ValidationError as e:
            raise DeserializationError(
                "Cypher response does not have columns and data",
                details=ResultShapeErrorDetails(source="graph_client", operation="execute_cypher"),
            ) from e

        return list(mapper.map_rows(response.columns, response.data))

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> Self:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
