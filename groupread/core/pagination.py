"""
Pagination support for read queries.

A page is produced in two steps against the same session: a count of every
row matching the filters (ordering, limit and offset stripped), then the
requested window of rows. Both steps see the same predicates, so the total
does not change when only the window moves.
"""

import logging
from typing import Callable, Generic, Optional, TypeVar

from sqlalchemy.orm import Query

from groupread.schemas.common import Page

logger = logging.getLogger(__name__)

T = TypeVar('T')


class PaginationHelper(Generic[T]):
    """Fetches a counted page of mapped rows from a query."""

    def fetch_page(
        self,
        query: Query,
        row_mapper: Callable[..., T],
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Page[T]:
        """
        Count ``query`` and fetch the ``limit``/``offset`` window from it.

        Args:
            query: Filtered and ordered query; must not already carry a window
            row_mapper: Converts one result row into a result item
            limit: Maximum number of rows in the window; ``None`` for all rows
            offset: Rows to skip; only honoured when ``limit`` is given

        Returns:
            Page with the total row count and the mapped window
        """
        total_count = query.order_by(None).count()

        window = query
        if limit is not None:
            window = window.limit(limit)
            if offset is not None:
                window = window.offset(offset)

        items = [row_mapper(row) for row in window.all()] if total_count else []
        logger.debug(f"Fetched page: {len(items)} of {total_count} rows (limit={limit}, offset={offset})")

        return Page(total_count=total_count, items=items)
