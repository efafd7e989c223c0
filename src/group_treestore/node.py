# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeStore node class."""

from __future__ import annotations

from typing import Any


class TreeNode:
    """A node in a TreeStore hierarchy.

    Each node has:
    - id: Unique, immutable identifier across the whole tree
    - label: Display text, mutable via TreeStore.rename()
    - children: Ordered list of child ids

    Nodes never hold references to other nodes. The store keeps them in a
    flat id -> node mapping, so a node's subtree is only reachable through
    the store.

    Example:
        >>> node = TreeNode('dbms', 'DBMS')
        >>> node.is_leaf
        True
        >>> node.children.append('pg')
        >>> node.is_branch
        True
    """

    __slots__ = ('id', 'label', 'children')

    def __init__(
        self,
        id: str,
        label: str,
        children: list[str] | None = None,
    ) -> None:
        """Initialize a TreeNode.

        Args:
            id: The node's unique identifier.
            label: The node's display label.
            children: Optional list of child ids (copied).
        """
        self.id = id
        self.label = label
        self.children = list(children) if children else []

    def __repr__(self) -> str:
        return f"TreeNode({self.id!r}, {self.label!r}, children={self.children!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TreeNode):
            return NotImplemented
        return (
            self.id == other.id
            and self.label == other.label
            and self.children == other.children
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_branch(self) -> bool:
        """True if this node has at least one child."""
        return bool(self.children)

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self.children

    def copy(self) -> TreeNode:
        """Return a detached copy with its own children list."""
        return TreeNode(self.id, self.label, self.children)
