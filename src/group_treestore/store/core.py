# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeStore - The canonical group tree behind a tree widget.

This module provides the TreeStore class. It owns one valid tree, applies
mutation commands to it and computes the (optionally filtered) snapshots
that tree widgets render.

Key Features:
    - **Adjacency list**: Flat id -> TreeNode mapping, O(1) lookup by id
    - **Parent index**: child -> parent mapping kept in step with every
      command, so detaching is O(siblings) and the cycle guard is O(depth)
    - **All-or-nothing commands**: every precondition is checked before the
      tree is touched; a failed command leaves it unchanged
    - **Filtered views**: case-insensitive label filter keeping the ancestor
      path of every match
    - **Presentation state**: open and selected ids (see ViewStateMixin)

Example:
    Basic usage::

        store = TreeStore()
        system = store.create('root', 'System')
        k8s = store.create(system, 'Kubernetes')
        database = store.create('root', 'Database')
        store.move(k8s, database)

        store.set_filter('kube')
        view = store.view()
        list(view)  # ['root', database, k8s]

    From widget data::

        store = TreeStore([{'id': 'root', 'label': 'ROOT', 'children': [
            {'id': 'dbms', 'label': 'DBMS'},
        ]}])
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from ..config import StoreConfig
from ..exceptions import (
    IntegrityError,
    InvalidArgumentError,
    InvalidOperationError,
    NodeNotFoundError,
)
from ..node import TreeNode
from ..view import TreeView, ViewNode
from .filtering import matching_ids, normalize_filter, surviving_ids
from .loading import load_source
from .viewstate import ViewStateMixin

logger = logging.getLogger(__name__)


class TreeStore(ViewStateMixin):
    """A hierarchical id -> node container with structural commands.

    TreeStore provides:
    - create(parent_id, label): Append a new node, return its id
    - rename(node_id, label): Change a node's label
    - move(node_id, new_parent_id): Re-parent a node with its subtree
    - delete(node_ids): Remove nodes with their subtrees
    - set_filter(text) / view(): Filtered read-only snapshots

    Attributes:
        root_id: Id of the root node. The root cannot be moved or deleted.
        config: The StoreConfig the store was built with.

    Example:
        >>> store = TreeStore()
        >>> node_id = store.create('root', 'DBMS')
        >>> store.children('root') == [node_id]
        True
    """

    __slots__ = (
        '_nodes', '_parent_of', 'root_id', 'config',
        '_filter', '_next_id', '_retired', '_open', '_selected',
    )

    def __init__(
        self,
        source: dict | list | None = None,
        config: StoreConfig | None = None,
    ) -> None:
        """Initialize a TreeStore.

        Args:
            source: Optional initial tree. Can be:
                - list or dict with an id key: nested-object tree, children
                  inline (see load_from_nested)
                - dict of id -> node: flat tree with child ids, rooted at
                  config.root_id (see load_from_flat)
            config: Optional StoreConfig. Defaults to StoreConfig().

        Example:
            >>> TreeStore()  # just the root
            >>> TreeStore([{'id': 'root', 'label': 'ROOT', 'children': []}])
            >>> TreeStore({'root': {'name': 'ROOT', 'children': ['a']},
            ...            'a': {'name': 'A'}})
            >>> TreeStore(config=StoreConfig(id_strategy='uuid'))
        """
        self.config = config or StoreConfig()
        self.root_id = self.config.root_id
        self._nodes: dict[str, TreeNode] = {
            self.root_id: TreeNode(self.root_id, self.config.root_label)
        }
        self._parent_of: dict[str, str] = {}
        self._next_id = self.config.id_source()
        self._retired: set[str] = set()
        self._reset_view()

        if source is not None:
            load_source(self, source)

    def _reset_view(self) -> None:
        """Clear the filter and restore the configured open/selected state."""
        self._filter = ''
        initially_open = self.config.initially_open
        self._init_view_state(
            (self.root_id,) if initially_open is None else initially_open,
            self.root_id if self.config.select_root else None,
        )

    def _replace_tree(
        self,
        root_id: str,
        nodes: dict[str, TreeNode],
        parent_of: dict[str, str],
    ) -> None:
        """Swap in a fully built tree (used by the loading functions).

        Ids of the previous tree that are not reused are retired, and the
        view state starts over for the new root.
        """
        self._retired.update(set(self._nodes) - set(nodes))
        self.root_id = root_id
        self._nodes = nodes
        self._parent_of = parent_of
        self._reset_view()
        logger.debug("loaded %d nodes, root %s", len(nodes), root_id)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"TreeStore(root={self.root_id!r}, nodes={len(self._nodes)})"

    def __len__(self) -> int:
        """Return the number of nodes, root included."""
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[str]:
        """Iterate over ids in depth-first document order."""
        for _, node in self._walk():
            yield node.id

    # ==================== Lookup ====================

    def _require(self, node_id: str) -> TreeNode:
        """Return the live node for node_id or raise NodeNotFoundError."""
        try:
            return self._nodes[node_id]
        except (KeyError, TypeError):
            raise NodeNotFoundError(node_id) from None

    def _check_label(self, label: str) -> None:
        if not isinstance(label, str):
            raise InvalidArgumentError(
                f"label must be a string, not {type(label).__name__}"
            )
        if not label.strip() and not self.config.allow_empty_labels:
            raise InvalidArgumentError("label must not be empty")

    def _new_id(self) -> str:
        node_id = self._next_id()
        while node_id in self._nodes or node_id in self._retired:
            node_id = self._next_id()
        return node_id

    def get_node(self, node_id: str) -> TreeNode:
        """Return a detached copy of the node.

        Raises:
            NodeNotFoundError: If node_id is not in the tree.
        """
        return self._require(node_id).copy()

    def label(self, node_id: str) -> str:
        return self._require(node_id).label

    def children(self, node_id: str) -> list[str]:
        """Return a copy of node_id's child ids, in order."""
        return list(self._require(node_id).children)

    def parent(self, node_id: str) -> str | None:
        """Return the parent id, or None for the root."""
        self._require(node_id)
        return self._parent_of.get(node_id)

    def ancestors(self, node_id: str) -> list[str]:
        """Return ancestor ids, nearest first and ending at the root."""
        self._require(node_id)
        result = []
        current = self._parent_of.get(node_id)
        while current is not None:
            result.append(current)
            current = self._parent_of.get(current)
        return result

    def descendants(self, node_id: str) -> list[str]:
        """Return every id below node_id in pre-order, node_id excluded."""
        return [node.id for _, node in self._walk(node_id)][1:]

    def level(self, node_id: str) -> int:
        """Return the depth of node_id (root=0)."""
        return len(self.ancestors(node_id))

    def is_leaf(self, node_id: str) -> bool:
        return self._require(node_id).is_leaf

    def is_ancestor(self, ancestor_id: str, node_id: str) -> bool:
        """True if ancestor_id is a strict ancestor of node_id. O(depth)."""
        current = self._parent_of.get(node_id)
        while current is not None:
            if current == ancestor_id:
                return True
            current = self._parent_of.get(current)
        return False

    # ==================== Commands ====================

    def create(self, parent_id: str, label: str) -> str:
        """Append a new node as the last child of parent_id.

        Any node can take children: a leaf silently becomes a folder.

        Args:
            parent_id: Id of the parent node.
            label: Label of the new node.

        Returns:
            The id of the new node.

        Raises:
            NodeNotFoundError: If parent_id is not in the tree.
            InvalidArgumentError: If label is empty.
        """
        parent = self._require(parent_id)
        self._check_label(label)

        node_id = self._new_id()
        self._nodes[node_id] = TreeNode(node_id, label)
        parent.children.append(node_id)
        self._parent_of[node_id] = parent_id
        logger.debug("create %s under %s", node_id, parent_id)
        return node_id

    def rename(self, node_id: str, label: str) -> None:
        """Change the label of node_id.

        Raises:
            NodeNotFoundError: If node_id is not in the tree.
            InvalidArgumentError: If label is empty.
        """
        node = self._require(node_id)
        self._check_label(label)
        node.label = label
        logger.debug("rename %s", node_id)

    def move(self, node_id: str, new_parent_id: str) -> None:
        """Detach node_id (with its subtree) and append it under new_parent_id.

        Moving a node to its current parent puts it in last position.

        Raises:
            NodeNotFoundError: If either id is not in the tree.
            InvalidOperationError: If node_id is the root, or new_parent_id
                is node_id itself or one of its descendants.
        """
        self._require(node_id)
        new_parent = self._require(new_parent_id)

        if node_id == self.root_id:
            logger.debug("rejected move of root %s", node_id)
            raise InvalidOperationError("the root node cannot be moved")
        if new_parent_id == node_id or self.is_ancestor(node_id, new_parent_id):
            logger.debug("rejected move %s -> %s: cycle", node_id, new_parent_id)
            raise InvalidOperationError(
                f"cannot move '{node_id}' under itself or its descendant "
                f"'{new_parent_id}'"
            )

        old_parent_id = self._parent_of[node_id]
        self._nodes[old_parent_id].children.remove(node_id)
        new_parent.children.append(node_id)
        self._parent_of[node_id] = new_parent_id
        logger.debug("move %s: %s -> %s", node_id, old_parent_id, new_parent_id)

    def delete(self, node_ids: Iterable[str] | str) -> None:
        """Remove every given node together with its subtree.

        Ids lying inside the subtree of another given id are skipped, so
        passing a node and its descendants together is fine.

        Args:
            node_ids: A single id or an iterable of ids.

        Raises:
            NodeNotFoundError: If any id is not in the tree. Nothing is
                removed in that case.
            InvalidOperationError: If the root is among the ids.
        """
        ids = [node_ids] if isinstance(node_ids, str) else list(node_ids)
        for node_id in ids:
            self._require(node_id)
            if node_id == self.root_id:
                logger.debug("rejected delete of root %s", node_id)
                raise InvalidOperationError("the root node cannot be deleted")

        targets = set(ids)
        tops = [
            node_id for node_id in dict.fromkeys(ids)
            if not any(a in targets for a in self.ancestors(node_id))
        ]

        removed: list[str] = []
        for node_id in tops:
            subtree = [node.id for _, node in self._walk(node_id)]
            self._nodes[self._parent_of[node_id]].children.remove(node_id)
            for sub_id in subtree:
                del self._nodes[sub_id]
                del self._parent_of[sub_id]
            removed.extend(subtree)

        self._retired.update(removed)
        self._forget(removed)
        logger.debug("delete %s: %d nodes removed", tops, len(removed))

    def set_filter(self, text: str | None) -> None:
        """Set the label filter used by view(). '' or None clears it.

        Raises:
            InvalidArgumentError: If text is neither a string nor None.
        """
        if text is not None and not isinstance(text, str):
            raise InvalidArgumentError(
                f"filter text must be a string, not {type(text).__name__}"
            )
        self._filter = text or ''
        logger.debug("filter %r", self._filter)

    # ==================== Views ====================

    @property
    def filter_text(self) -> str:
        return self._filter

    def matches(self) -> list[str]:
        """Return ids whose own label matches the current filter."""
        return matching_ids(self._nodes, self.root_id, normalize_filter(self._filter))

    def view(self) -> TreeView:
        """Return a read-only snapshot of the tree to render.

        Without a filter this is the whole tree. With a filter, only the
        root, the matching nodes and their ancestors are kept, and each
        kept node lists only its kept children.
        """
        needle = normalize_filter(self._filter)
        if not needle:
            nodes = {
                node_id: ViewNode(node_id, node.label, tuple(node.children))
                for node_id, node in self._nodes.items()
            }
            return TreeView(self.root_id, nodes)

        keep = surviving_ids(self._nodes, self._parent_of, self.root_id, needle)
        nodes = {}
        for node_id in keep:
            node = self._nodes[node_id]
            children = tuple(c for c in node.children if c in keep)
            nodes[node_id] = ViewNode(node_id, node.label, children)
        return TreeView(self.root_id, nodes, self._filter)

    # ==================== Walk ====================

    def _walk(self, node_id: str | None = None) -> Iterator[tuple[int, TreeNode]]:
        """Yield (level, live node) pairs in pre-order. Internal use only."""
        start = self._require(self.root_id if node_id is None else node_id)
        stack: list[tuple[int, TreeNode]] = [(0, start)]
        while stack:
            level, node = stack.pop()
            yield level, node
            for child_id in reversed(node.children):
                stack.append((level + 1, self._nodes[child_id]))

    def walk(self, node_id: str | None = None) -> Iterator[tuple[int, TreeNode]]:
        """Yield (level, node) pairs in pre-order.

        Levels are relative to the start node (level 0). Yielded nodes are
        detached copies, changing them does not touch the store.

        Args:
            node_id: Start node, defaults to the root.

        Example:
            >>> for level, node in store.walk():
            ...     print('  ' * level + node.label)
        """
        for level, node in self._walk(node_id):
            yield level, node.copy()

    # ==================== Conversion ====================

    def as_dict(self, node_id: str | None = None) -> dict[str, Any]:
        """Convert to a nested {'id', 'label', 'children'} dict.

        The result can be fed back to TreeStore() to rebuild the tree.
        """
        start = self._require(self.root_id if node_id is None else node_id)
        result: dict[str, Any] = {}
        stack = [(start.id, result)]
        while stack:
            current, item = stack.pop()
            node = self._nodes[current]
            item['id'] = node.id
            item['label'] = node.label
            item['children'] = [{} for _ in node.children]
            stack.extend(zip(node.children, item['children']))
        return result

    # ==================== Validation ====================

    def check_integrity(self) -> None:
        """Verify the structural invariants of the tree.

        Checks that the root resolves and has no parent, every child id
        exists, every node except the root is reached exactly once from the
        root, and the parent index agrees with the children lists.

        Raises:
            IntegrityError: Describing the first violation found.
        """
        if self.root_id not in self._nodes:
            raise IntegrityError(f"root '{self.root_id}' does not resolve")
        if self.root_id in self._parent_of:
            raise IntegrityError("root has a parent")

        seen = {self.root_id}
        stack = [self.root_id]
        while stack:
            parent_id = stack.pop()
            for child_id in self._nodes[parent_id].children:
                if child_id not in self._nodes:
                    raise IntegrityError(
                        f"'{parent_id}' references missing child '{child_id}'"
                    )
                if child_id in seen:
                    raise IntegrityError(f"'{child_id}' is reached twice")
                if self._parent_of.get(child_id) != parent_id:
                    raise IntegrityError(
                        f"parent index of '{child_id}' is "
                        f"{self._parent_of.get(child_id)!r}, expected '{parent_id}'"
                    )
                seen.add(child_id)
                stack.append(child_id)

        orphans = set(self._nodes) - seen
        if orphans:
            raise IntegrityError(f"unreachable nodes: {sorted(orphans)}")
        stale = set(self._parent_of) - seen
        if stale:
            raise IntegrityError(f"parent index has unknown ids: {sorted(stale)}")
