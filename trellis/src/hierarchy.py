"""Menu hierarchy construction.

Turns flat menu records into a forest of tree nodes and derives the
ancestor ID set and the leaf ID list from them. Every function builds
fresh state from its input and never mutates the records it is given.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum

from trellis.src.models import Menu, MenuTreeNode

logger = logging.getLogger(__name__)


class HierarchyConfigError(Exception):
    """Raised for invalid hierarchy configuration."""


class OrphanPolicy(str, Enum):
    """What to do with nodes whose parent is not in the working set."""

    DROP = "drop"
    PROMOTE = "promote"


@dataclass(frozen=True)
class HierarchyConfig:
    """Configuration for hierarchy building.

    Attributes:
        path_delimiter: Separator between IDs in ``parent_path``.
        orphan_policy: DROP leaves orphans out of the forest entirely,
            PROMOTE turns them into roots.
        sort_by_sequence: Stably order roots and siblings by
            ``sequence`` instead of keeping input order.
    """

    path_delimiter: str = "/"
    orphan_policy: OrphanPolicy = OrphanPolicy.DROP
    sort_by_sequence: bool = False

    def __post_init__(self) -> None:
        if not self.path_delimiter:
            raise HierarchyConfigError("path_delimiter must not be empty")
        if not isinstance(self.orphan_policy, OrphanPolicy):
            raise HierarchyConfigError(f"Unknown orphan policy: {self.orphan_policy!r}")


DEFAULT_CONFIG = HierarchyConfig()


def split_parent_path(parent_path: str, delimiter: str = "/") -> list[str]:
    """Split an ancestor path into its non-empty ID segments.

    Example: "1//2" -> ["1", "2"]
    """
    if not parent_path:
        return []
    return [segment for segment in parent_path.split(delimiter) if segment]


def resolve_ancestor_ids(
    menus: Sequence[Menu],
    config: HierarchyConfig | None = None,
) -> list[str]:
    """Collect every record ID plus every ancestor ID named in the paths.

    For each record the record's own ID comes first, followed by the
    segments of its ``parent_path`` from left to right. Each ID is kept
    only at its first occurrence across the whole walk.

    Args:
        menus: Flat menu records.
        config: Hierarchy configuration, defaults when None.

    Returns:
        Deduplicated IDs in first-seen order.
    """
    config = config or DEFAULT_CONFIG
    seen: set[str] = set()
    ids: list[str] = []

    for menu in menus:
        for menu_id in [menu.id, *split_parent_path(menu.parent_path, config.path_delimiter)]:
            if menu_id in seen:
                continue
            seen.add(menu_id)
            ids.append(menu_id)

    return ids


def to_tree_nodes(menus: Sequence[Menu]) -> list[MenuTreeNode]:
    """Project flat records onto childless tree nodes."""
    return [menu.to_tree_node() for menu in menus]


def build_forest(
    nodes: Sequence[Menu | MenuTreeNode],
    config: HierarchyConfig | None = None,
) -> list[MenuTreeNode]:
    """Link flat nodes into a forest via their parent IDs.

    Strategy:
    1. Copy every input node into an arena and index it by ID
       (the last node wins when IDs repeat)
    2. Walk the input in order and record each node's index either as
       a root or under its parent's index
    3. Assemble the owned children lists from the index lists

    Nodes with an empty ``parent_id`` are roots. A node whose parent ID
    does not resolve is handled by ``config.orphan_policy``. Sibling
    order is input order unless ``config.sort_by_sequence`` is set.

    Args:
        nodes: Menu records or tree node projections.
        config: Hierarchy configuration, defaults when None.

    Returns:
        Root nodes, each carrying its descendants.
    """
    config = config or DEFAULT_CONFIG

    arena: list[MenuTreeNode] = [
        node.to_tree_node() if isinstance(node, Menu) else node.detached() for node in nodes
    ]
    index_by_id: dict[str, int] = {}
    for i, node in enumerate(arena):
        if node.id in index_by_id:
            logger.warning("Duplicate menu ID %s; later record replaces earlier one", node.id)
        index_by_id[node.id] = i

    root_indexes: list[int] = []
    child_indexes: list[list[int]] = [[] for _ in arena]
    for i, node in enumerate(arena):
        if node.parent_id == "":
            root_indexes.append(i)
            continue

        parent_index = index_by_id.get(node.parent_id)
        if parent_index is not None:
            child_indexes[parent_index].append(i)
        elif config.orphan_policy == OrphanPolicy.PROMOTE:
            logger.debug("Promoting orphan %s (parent %s not found)", node.id, node.parent_id)
            root_indexes.append(i)
        else:
            logger.debug("Dropping orphan %s (parent %s not found)", node.id, node.parent_id)

    for i, node in enumerate(arena):
        node.children = [arena[c] for c in _ordered(child_indexes[i], arena, config)]

    roots = [arena[i] for i in _ordered(root_indexes, arena, config)]
    logger.debug("Built forest of %d roots from %d nodes", len(roots), len(arena))
    return roots


def _ordered(
    indexes: list[int],
    arena: list[MenuTreeNode],
    config: HierarchyConfig,
) -> list[int]:
    """Apply sequence ordering to a list of arena indexes when enabled."""
    if not config.sort_by_sequence:
        return indexes
    return sorted(indexes, key=lambda i: arena[i].sequence)


def iter_forest(roots: Sequence[MenuTreeNode]) -> Iterator[tuple[MenuTreeNode, int]]:
    """Walk a forest pre-order, depth first, without recursion.

    Yields:
        (node, depth) pairs with roots at depth 0.
    """
    stack: list[tuple[MenuTreeNode, int]] = [(root, 0) for root in reversed(roots)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))


def collect_leaf_ids(
    nodes: Sequence[Menu | MenuTreeNode],
    config: HierarchyConfig | None = None,
) -> list[str]:
    """Build the forest and return the IDs of its leaves in pre-order.

    Args:
        nodes: The same flat input accepted by build_forest.
        config: Hierarchy configuration, defaults when None.

    Returns:
        Leaf IDs, children visited before the next sibling.
    """
    roots = build_forest(nodes, config)
    return [node.id for node, _ in iter_forest(roots) if node.is_leaf]
