"""Pagination mixin for the Cypher query builder.

This module keeps SKIP and LIMIT handling apart from the core builder. Both
clauses bind their count as a parameter, and each may only appear once: a
later call replaces the earlier clause.
"""

from typing import Self

from .parameters import Bound
from .state import ClauseType


class PaginationMixin:
    """Mixin adding skip, limit and paginate to a builder.

    The host class must implement ``ClauseAppender``.
    """

    def skip(self, count: int) -> Self:
        """Add a SKIP clause to the query.

        Args:
            count: Number of results to skip

        Returns:
            A new builder with the clause added
        """
        return self.append_clause(ClauseType.SKIP, Bound(count))  # type: ignore[attr-defined]

    def limit(self, count: int) -> Self:
        """Add a LIMIT clause to the query.

        Args:
            count: Maximum number of results to return

        Returns:
            A new builder with the clause added
        """
        return self.append_clause(ClauseType.LIMIT, Bound(count))  # type: ignore[attr-defined]

    def paginate(self, page: int, page_size: int) -> Self:
        """Add SKIP and LIMIT based on page number and size.

        Args:
            page: Page number (1-based)
            page_size: Number of items per page

        Returns:
            A new builder with both clauses added
        """
        if page < 1:
            raise ValueError("Page number must be greater than or equal to 1")

        if page_size < 1:
            raise ValueError("Page size must be greater than or equal to 1")

        return self.skip((page - 1) * page_size).limit(page_size)
