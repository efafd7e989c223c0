# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Read-only tree snapshots handed to rendering collaborators.

A TreeView is produced by TreeStore.view(). It shares nothing mutable with
the store: nodes are tuples and the id mapping is a read-only proxy, so a
renderer can keep a view around while the store keeps changing.

Example:
    >>> view = store.view()
    >>> view.root_id
    'root'
    >>> [node.label for _, node in view.walk()]
    ['ROOT', 'System', 'Kubernetes', ...]
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterator, Mapping, NamedTuple


class ViewNode(NamedTuple):
    """Immutable node as seen by a renderer."""

    id: str
    label: str
    children: tuple[str, ...] = ()

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children in the view."""
        return not self.children


class TreeView:
    """An immutable id -> ViewNode mapping plus the root id.

    Attributes:
        root_id: Id of the root node, always present in the view.
        nodes: Read-only mapping of id to ViewNode.
        filter_text: The filter the view was computed with ('' if none).
    """

    __slots__ = ('root_id', 'nodes', 'filter_text')

    def __init__(
        self,
        root_id: str,
        nodes: Mapping[str, ViewNode],
        filter_text: str = '',
    ) -> None:
        self.root_id = root_id
        self.nodes: Mapping[str, ViewNode] = MappingProxyType(dict(nodes))
        self.filter_text = filter_text

    def __repr__(self) -> str:
        return f"TreeView(root={self.root_id!r}, nodes={len(self.nodes)})"

    def __eq__(self, other: Any) -> bool:
        """Views are equal when they hold the same tree, whatever the filter."""
        if not isinstance(other, TreeView):
            return NotImplemented
        return self.root_id == other.root_id and dict(self.nodes) == dict(other.nodes)

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __getitem__(self, node_id: str) -> ViewNode:
        return self.nodes[node_id]

    def __iter__(self) -> Iterator[str]:
        """Iterate over ids in depth-first document order."""
        for _, node in self.walk():
            yield node.id

    @property
    def root(self) -> ViewNode:
        """The root ViewNode."""
        return self.nodes[self.root_id]

    @property
    def is_filtered(self) -> bool:
        return bool(self.filter_text)

    def children(self, node_id: str) -> tuple[str, ...]:
        """Return the child ids of node_id in the view."""
        return self.nodes[node_id].children

    def walk(self, node_id: str | None = None) -> Iterator[tuple[int, ViewNode]]:
        """Yield (level, node) pairs in pre-order, starting at node_id.

        Args:
            node_id: Start node, defaults to the root. Its level is 0.
        """
        start = self.root_id if node_id is None else node_id
        stack: list[tuple[int, str]] = [(0, start)]
        while stack:
            level, current = stack.pop()
            node = self.nodes[current]
            yield level, node
            for child_id in reversed(node.children):
                stack.append((level + 1, child_id))

    def as_dict(self, node_id: str | None = None) -> dict[str, Any]:
        """Convert to a nested {'id', 'label', 'children'} dict."""
        result: dict[str, Any] = {}
        stack = [(self.root_id if node_id is None else node_id, result)]
        while stack:
            current, item = stack.pop()
            node = self.nodes[current]
            item['id'] = node.id
            item['label'] = node.label
            item['children'] = [{} for _ in node.children]
            stack.extend(zip(node.children, item['children']))
        return result
