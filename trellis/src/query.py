"""In-memory menu queries.

Applies the menu query parameters (ID set, code and name substrings,
kinds, parent ID, parent path prefix) and optional pagination to an
already loaded list of records. Input order is preserved.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from dataclasses import dataclass, field, replace

from trellis.src.models import Menu, MenuKind

logger = logging.getLogger(__name__)


class MenuQueryError(Exception):
    """Raised for invalid query or pagination parameters."""


@dataclass
class MenuQuery:
    """Filter conditions for menu records.

    Empty values mean "no condition". ``parent_id`` distinguishes None
    (any parent) from "" (roots only).

    Attributes:
        record_ids: Only records with one of these IDs.
        code: Case-sensitive substring of the code.
        name: Case-sensitive substring of the name.
        kinds: Only records of one of these kinds.
        parent_id: Exact parent ID.
        parent_path: Prefix of the parent path.
    """

    record_ids: Collection[str] = field(default_factory=list)
    code: str = ""
    name: str = ""
    kinds: list[MenuKind] = field(default_factory=list)
    parent_id: str | None = None
    parent_path: str = ""

    def matches(self, menu: Menu) -> bool:
        """Check whether a record satisfies every condition."""
        if self.record_ids and menu.id not in self.record_ids:
            return False
        if self.code and self.code not in menu.code:
            return False
        if self.name and self.name not in menu.name:
            return False
        if self.kinds and menu.kind not in self.kinds:
            return False
        if self.parent_id is not None and menu.parent_id != self.parent_id:
            return False
        if self.parent_path and not menu.parent_path.startswith(self.parent_path):
            return False
        return True


@dataclass(frozen=True)
class PaginationParam:
    """Page selection, 1-based."""

    page_index: int = 1
    page_size: int = 20

    def __post_init__(self) -> None:
        if self.page_index < 1:
            raise MenuQueryError(f"page_index must be >= 1, got {self.page_index}")
        if self.page_size < 1:
            raise MenuQueryError(f"page_size must be >= 1, got {self.page_size}")

    @property
    def offset(self) -> int:
        return (self.page_index - 1) * self.page_size


@dataclass(frozen=True)
class PaginationResult:
    """Total number of matching records before paging."""

    total: int


@dataclass
class MenuQueryResult:
    """Matching records and, when paging was requested, the page result."""

    data: list[Menu]
    page_result: PaginationResult | None = None


def query_menus(
    menus: Sequence[Menu],
    query: MenuQuery | None = None,
    pagination: PaginationParam | None = None,
) -> MenuQueryResult:
    """Filter and optionally paginate menu records.

    Args:
        menus: Records to search.
        query: Filter conditions; None matches everything.
        pagination: Page to return; None returns all matches.

    Returns:
        MenuQueryResult with records in input order.
    """
    query = query or MenuQuery()
    if query.record_ids:
        query = replace(query, record_ids=frozenset(query.record_ids))
    matched = [menu for menu in menus if query.matches(menu)]
    logger.debug("Menu query matched %d of %d records", len(matched), len(menus))

    if pagination is None:
        return MenuQueryResult(data=matched)

    page = matched[pagination.offset : pagination.offset + pagination.page_size]
    return MenuQueryResult(data=page, page_result=PaginationResult(total=len(matched)))
