"""Trellis data models for menu hierarchies.

Defines the flat menu record as it comes out of the persistence and
query layers, and the tree node projection used for hierarchy
building. All models use dataclasses with serialization support and
UUID-based ID generation.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class MenuKind(int, Enum):
    """Kind of menu entry."""

    MODULE = 1
    FUNCTION = 2
    RESOURCE = 3


@dataclass
class Menu:
    """A flat menu record.

    Attributes:
        id: Unique identifier (prefixed with 'menu_').
        code: Menu code.
        name: Display name.
        kind: Module, function or resource.
        sequence: Ordering hint among siblings.
        icon: Icon name.
        path: Access path.
        method: Request method for resource entries.
        parent_id: Parent menu ID, empty for roots.
        parent_path: Ancestor IDs joined by '/', root first.
        creator: ID of the creating user.
        created_at: Creation timestamp.
    """

    id: str
    code: str
    name: str
    kind: MenuKind = MenuKind.MODULE
    sequence: int = 0
    icon: str = ""
    path: str = ""
    method: str = ""
    parent_id: str = ""
    parent_path: str = ""
    creator: str = ""
    created_at: datetime = field(default_factory=datetime.now)

    @staticmethod
    def generate_id() -> str:
        """Generate a unique menu ID."""
        return f"menu_{uuid.uuid4().hex[:12]}"

    @property
    def is_root(self) -> bool:
        return self.parent_id == ""

    def to_tree_node(self) -> MenuTreeNode:
        """Project this record onto a childless tree node."""
        return MenuTreeNode(
            id=self.id,
            code=self.code,
            name=self.name,
            kind=self.kind,
            sequence=self.sequence,
            icon=self.icon,
            path=self.path,
            parent_id=self.parent_id,
            parent_path=self.parent_path,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "record_id": self.id,
            "code": self.code,
            "name": self.name,
            "type": self.kind.value,
            "sequence": self.sequence,
            "icon": self.icon,
            "path": self.path,
            "method": self.method,
            "parent_id": self.parent_id,
            "parent_path": self.parent_path,
            "creator": self.creator,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Menu:
        """Deserialize from dictionary."""
        created_at = data.get("created_at")
        return cls(
            id=data["record_id"],
            code=data["code"],
            name=data["name"],
            kind=MenuKind(data.get("type", MenuKind.MODULE.value)),
            sequence=data.get("sequence", 0),
            icon=data.get("icon", ""),
            path=data.get("path", ""),
            method=data.get("method", ""),
            parent_id=data.get("parent_id", ""),
            parent_path=data.get("parent_path", ""),
            creator=data.get("creator", ""),
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.now(),
        )


@dataclass(eq=False)
class MenuTreeNode:
    """A menu in hierarchy form.

    An empty ``children`` list marks a leaf. Forests are always fully
    built, so there is no separate "not yet expanded" state. Equality
    and ``to_dict`` walk the subtree with explicit stacks.
    """

    id: str
    code: str
    name: str
    kind: MenuKind = MenuKind.MODULE
    sequence: int = 0
    icon: str = ""
    path: str = ""
    parent_id: str = ""
    parent_path: str = ""
    children: list[MenuTreeNode] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return len(self.children) == 0

    def detached(self) -> MenuTreeNode:
        """Return a copy of this node without children."""
        return MenuTreeNode(
            id=self.id,
            code=self.code,
            name=self.name,
            kind=self.kind,
            sequence=self.sequence,
            icon=self.icon,
            path=self.path,
            parent_id=self.parent_id,
            parent_path=self.parent_path,
        )

    def flat_dict(self) -> dict[str, Any]:
        """Serialize this node's own fields, without children."""
        return {
            "record_id": self.id,
            "code": self.code,
            "name": self.name,
            "type": self.kind.value,
            "sequence": self.sequence,
            "icon": self.icon,
            "path": self.path,
            "parent_id": self.parent_id,
            "parent_path": self.parent_path,
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary, omitting ``children`` on leaves."""
        result = self.flat_dict()
        stack: list[tuple[MenuTreeNode, dict[str, Any]]] = [(self, result)]
        while stack:
            node, data = stack.pop()
            if node.children:
                data["children"] = [child.flat_dict() for child in node.children]
                stack.extend(zip(node.children, data["children"]))
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MenuTreeNode):
            return NotImplemented
        stack: list[tuple[MenuTreeNode, MenuTreeNode]] = [(self, other)]
        while stack:
            left, right = stack.pop()
            if left.flat_dict() != right.flat_dict():
                return False
            if len(left.children) != len(right.children):
                return False
            stack.extend(zip(left.children, right.children))
        return True

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<MenuTreeNode {self.id} '{self.name[:40]}' children={len(self.children)}>"
