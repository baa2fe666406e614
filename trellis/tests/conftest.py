"""Shared fixtures for Trellis tests."""

from __future__ import annotations

from datetime import datetime

import pytest

from trellis.src.models import Menu, MenuKind


def make_menu(
    menu_id: str,
    parent_id: str = "",
    parent_path: str = "",
    sequence: int = 0,
    kind: MenuKind = MenuKind.MODULE,
) -> Menu:
    """Create a menu record with placeholder descriptive fields."""
    return Menu(
        id=menu_id,
        code=f"code_{menu_id}",
        name=f"Menu {menu_id}",
        kind=kind,
        sequence=sequence,
        parent_id=parent_id,
        parent_path=parent_path,
    )


@pytest.fixture
def small_tree_menus() -> list[Menu]:
    """Root 1 with children 2 and 3; 2 has child 4."""
    return [
        make_menu("1"),
        make_menu("2", parent_id="1", parent_path="1"),
        make_menu("3", parent_id="1", parent_path="1"),
        make_menu("4", parent_id="2", parent_path="1/2"),
    ]


@pytest.fixture
def admin_menus() -> list[Menu]:
    """A realistic two-root menu set with mixed kinds."""
    created = datetime(2024, 3, 1, 9, 30)
    return [
        Menu(
            id="sys",
            code="system",
            name="System",
            kind=MenuKind.MODULE,
            sequence=2,
            icon="setting",
            created_at=created,
        ),
        Menu(
            id="users",
            code="users",
            name="User Management",
            kind=MenuKind.FUNCTION,
            sequence=1,
            path="/system/users",
            parent_id="sys",
            parent_path="sys",
            created_at=created,
        ),
        Menu(
            id="users_query",
            code="users_query",
            name="Query Users",
            kind=MenuKind.RESOURCE,
            path="/api/v1/users",
            method="GET",
            parent_id="users",
            parent_path="sys/users",
            created_at=created,
        ),
        Menu(
            id="dash",
            code="dashboard",
            name="Dashboard",
            kind=MenuKind.MODULE,
            sequence=1,
            path="/dashboard",
            created_at=created,
        ),
    ]
