"""Tests for in-memory menu queries."""

from __future__ import annotations

import pytest

from trellis.src.models import MenuKind
from trellis.src.query import (
    MenuQuery,
    MenuQueryError,
    PaginationParam,
    query_menus,
)


def _ids(result) -> list[str]:
    return [m.id for m in result.data]


class TestMenuQuery:
    """MenuQuery filter tests."""

    def test_empty_query_matches_all(self, admin_menus):
        result = query_menus(admin_menus)
        assert _ids(result) == ["sys", "users", "users_query", "dash"]
        assert result.page_result is None

    def test_record_ids(self, admin_menus):
        result = query_menus(admin_menus, MenuQuery(record_ids=["dash", "sys"]))
        assert _ids(result) == ["sys", "dash"]

    def test_code_substring(self, admin_menus):
        assert _ids(query_menus(admin_menus, MenuQuery(code="users"))) == ["users", "users_query"]

    def test_name_substring_is_case_sensitive(self, admin_menus):
        assert _ids(query_menus(admin_menus, MenuQuery(name="User"))) == ["users", "users_query"]
        assert _ids(query_menus(admin_menus, MenuQuery(name="Management"))) == ["users"]
        assert _ids(query_menus(admin_menus, MenuQuery(name="user"))) == []

    def test_record_ids_as_set(self, admin_menus):
        result = query_menus(admin_menus, MenuQuery(record_ids={"users_query", "sys"}))
        assert _ids(result) == ["sys", "users_query"]

    def test_record_ids_large_set_keeps_caller_query(self, admin_menus):
        wanted = [f"menu_{i}" for i in range(10000)] + ["dash"]
        query = MenuQuery(record_ids=wanted)
        assert _ids(query_menus(admin_menus, query)) == ["dash"]
        assert query.record_ids is wanted

    def test_kinds(self, admin_menus):
        query = MenuQuery(kinds=[MenuKind.FUNCTION, MenuKind.RESOURCE])
        assert _ids(query_menus(admin_menus, query)) == ["users", "users_query"]

    def test_parent_id_roots_only(self, admin_menus):
        assert _ids(query_menus(admin_menus, MenuQuery(parent_id=""))) == ["sys", "dash"]

    def test_parent_id_exact(self, admin_menus):
        assert _ids(query_menus(admin_menus, MenuQuery(parent_id="users"))) == ["users_query"]

    def test_parent_path_prefix(self, admin_menus):
        assert _ids(query_menus(admin_menus, MenuQuery(parent_path="sys"))) == [
            "users",
            "users_query",
        ]

    def test_conditions_combine(self, admin_menus):
        query = MenuQuery(parent_path="sys", kinds=[MenuKind.RESOURCE])
        assert _ids(query_menus(admin_menus, query)) == ["users_query"]


class TestPagination:
    """Pagination tests."""

    def test_first_page(self, admin_menus):
        result = query_menus(admin_menus, pagination=PaginationParam(page_index=1, page_size=3))
        assert _ids(result) == ["sys", "users", "users_query"]
        assert result.page_result.total == 4

    def test_last_partial_page(self, admin_menus):
        result = query_menus(admin_menus, pagination=PaginationParam(page_index=2, page_size=3))
        assert _ids(result) == ["dash"]
        assert result.page_result.total == 4

    def test_page_past_end(self, admin_menus):
        result = query_menus(admin_menus, pagination=PaginationParam(page_index=5, page_size=3))
        assert result.data == []
        assert result.page_result.total == 4

    def test_total_counts_filtered_records(self, admin_menus):
        result = query_menus(
            admin_menus,
            MenuQuery(parent_id=""),
            PaginationParam(page_index=1, page_size=1),
        )
        assert _ids(result) == ["sys"]
        assert result.page_result.total == 2

    def test_offset(self):
        assert PaginationParam(page_index=3, page_size=10).offset == 20

    @pytest.mark.parametrize("page_index,page_size", [(0, 10), (1, 0), (-1, 5)])
    def test_invalid_params(self, page_index, page_size):
        with pytest.raises(MenuQueryError):
            PaginationParam(page_index=page_index, page_size=page_size)
