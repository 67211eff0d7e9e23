"""Shared pytest fixtures for the cypher-fluent test suite.

HTTP traffic is served by ``httpx.MockTransport``; no graph server is needed.
"""

from __future__ import annotations

import pytest

from cypher_fluent import CypherFluentQuery
from tests.fixtures.graph import make_client


@pytest.fixture()
def client_factory():
    """Return the ``make_client`` factory callable."""
    return make_client


@pytest.fixture()
def query() -> CypherFluentQuery:
    """An empty, render-only query with brace placeholders."""
    return CypherFluentQuery(placeholder_style="braces")
