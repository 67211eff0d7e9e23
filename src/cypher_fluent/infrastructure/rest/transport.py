"""HTTP transport for the graph server's REST API."""

from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from cypher_fluent.core.base import ErrorCode, ResultShapeErrorDetails, ServiceErrorDetails
from cypher_fluent.core.config import settings
from cypher_fluent.core.errors import DeserializationError, TransportError
from cypher_fluent.core.logging import get_logger

logger = get_logger(__name__)


class CypherTransport(Protocol):
    """Protocol for the request primitive the client runs on.

    Paths may be absolute URLs or relative to the service root. Response
    bodies are decoded JSON (or the raw text of a non-JSON error response).
    """

    async def get(self, path: str) -> tuple[int, Any]: ...

    async def post(self, path: str, body: Mapping[str, Any]) -> tuple[int, Any]: ...

    async def aclose(self) -> None: ...


class HttpxTransport:
    """``CypherTransport`` on top of an ``httpx.AsyncClient``.

    Network failures are raised as ``TransportError``; status codes are
    returned to the caller untouched. No retries are attempted.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Service root; defaults to ``settings.graph_uri``
            timeout: Request timeout in seconds; defaults to ``settings.request_timeout``
            client: Preconfigured client to use instead of creating one
        """
        self.base_url = base_url or settings.graph_uri
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            headers={"Accept": "application/json"},
        )

    async def get(self, path: str) -> tuple[int, Any]:
        return await self._request("GET", path)

    async def post(self, path: str, body: Mapping[str, Any]) -> tuple[int, Any]:
        return await self._request("POST", path, json=dict(body))

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> tuple[int, Any]:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            raise TransportError(
                f"{method} {path} timed out: {e!s}",
                details=ServiceErrorDetails(source="transport", operation=method, endpoint=path),
                code=ErrorCode.TIMEOUT,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"{method} {path} failed: {e!s}",
                details=ServiceErrorDetails(source="transport", operation=method, endpoint=path),
            ) from e

        logger.debug(
            "Graph server responded",
            extra={"method": method, "path": path, "status_code": response.status_code},
        )

        if not response.content:
            return response.status_code, None

        try:
            return response.status_code, response.json()
        except ValueError as e:
            if response.is_success:
                raise DeserializationError(
                    f"{method} {path} returned a body that is not JSON",
                    details=ResultShapeErrorDetails(
                        source="transport",
                        operation="decode_json",
                        actual_value=response.text[:200],
                    ),
                ) from e
            return response.status_code, response.text

    async def aclose(self) -> None:
        await self._client.aclose()
