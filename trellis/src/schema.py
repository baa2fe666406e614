"""Pydantic request/response models for menu payloads.

Parses raw menu payloads (the snake_case JSON shape produced by the
query layer) into Menu records, and shapes built forests into plain
dicts for the presentation layer, leaving out empty children lists.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from trellis.src.models import Menu, MenuKind, MenuTreeNode


class MenuSchemaError(Exception):
    """Raised when a menu payload cannot be parsed."""


class MenuPayload(BaseModel):
    """Incoming menu record."""

    record_id: str = Field(..., min_length=1)
    code: str = ""
    name: str = ""
    type: MenuKind = MenuKind.MODULE
    sequence: int = 0
    icon: str = ""
    path: str = ""
    method: str = ""
    parent_id: str = ""
    parent_path: str = ""
    creator: str = ""
    created_at: datetime | None = None

    def to_menu(self) -> Menu:
        """Convert to a Menu record."""
        menu = Menu(
            id=self.record_id,
            code=self.code,
            name=self.name,
            kind=self.type,
            sequence=self.sequence,
            icon=self.icon,
            path=self.path,
            method=self.method,
            parent_id=self.parent_id,
            parent_path=self.parent_path,
            creator=self.creator,
        )
        if self.created_at is not None:
            menu.created_at = self.created_at
        return menu


class MenuTreeResponse(BaseModel):
    """Outgoing menu tree node; ``children`` is None on leaves."""

    record_id: str
    code: str
    name: str
    type: int
    sequence: int
    icon: str
    path: str
    parent_id: str
    parent_path: str
    children: list[MenuTreeResponse] | None = None

    @classmethod
    def from_node(cls, node: MenuTreeNode) -> MenuTreeResponse:
        """Build a childless response from a forest node's own fields."""
        return cls(
            record_id=node.id,
            code=node.code,
            name=node.name,
            type=node.kind.value,
            sequence=node.sequence,
            icon=node.icon,
            path=node.path,
            parent_id=node.parent_id,
            parent_path=node.parent_path,
        )


MenuTreeResponse.model_rebuild()


def parse_menus(payload: Sequence[dict[str, Any]]) -> list[Menu]:
    """Parse a list of raw menu dicts into Menu records.

    Raises:
        MenuSchemaError: If any entry fails validation.
    """
    menus: list[Menu] = []
    for position, item in enumerate(payload):
        try:
            menus.append(MenuPayload.model_validate(item).to_menu())
        except ValidationError as exc:
            raise MenuSchemaError(f"Invalid menu at position {position}: {exc}") from exc
    return menus


def _render_node(node: MenuTreeNode) -> dict[str, Any]:
    return MenuTreeResponse.from_node(node).model_dump(exclude_none=True)


def render_forest(roots: Sequence[MenuTreeNode]) -> list[dict[str, Any]]:
    """Render a forest as JSON-ready dicts.

    Each node is validated on its own and the nested ``children`` lists
    are attached with an explicit stack, so tree depth is not limited by
    the interpreter's recursion limit.
    """
    rendered = [_render_node(root) for root in roots]
    stack: list[tuple[MenuTreeNode, dict[str, Any]]] = list(zip(roots, rendered))
    while stack:
        node, data = stack.pop()
        if node.children:
            data["children"] = [_render_node(child) for child in node.children]
            stack.extend(zip(node.children, data["children"]))
    return rendered
