# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading functions for TreeStore.

Tree widgets ship their data in one of two shapes:

- nested: each node dict carries its children inline, e.g.
  ``{'id': 'root', 'label': 'ROOT', 'children': [{'id': 'dbms', ...}]}``
  (MUI X, react-arborist, PrimeReact use ``key`` instead of ``id``)
- flat: an id -> node mapping whose children are ids, e.g.
  ``{'root': {'name': 'ROOT', 'children': ['dbms']}, 'dbms': {...}}``
  (react-complex-tree uses ``data`` for the label)

Both loaders validate the whole source before touching the store, so a
malformed source leaves the store unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

from ..exceptions import InvalidArgumentError
from ..node import TreeNode

if TYPE_CHECKING:
    from .core import TreeStore

logger = logging.getLogger(__name__)

ID_KEYS = ('id', 'key', 'index')
LABEL_KEYS = ('label', 'name', 'data')


def _first_key(item: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if item.get(key) is not None:
            return item[key]
    return None


def _node_id(item: Any) -> str:
    if not isinstance(item, Mapping):
        raise InvalidArgumentError(
            f"node must be a dict, not {type(item).__name__}"
        )
    node_id = _first_key(item, ID_KEYS)
    if node_id is None or node_id == '':
        raise InvalidArgumentError(f"node has no id: {item!r}")
    return str(node_id)


def _node_label(item: Mapping[str, Any], default: str) -> str:
    label = _first_key(item, LABEL_KEYS)
    return default if label is None else str(label)


def load_from_nested(store: TreeStore, source: Mapping[str, Any] | list) -> None:
    """Load a nested-object tree into store, replacing its content.

    Args:
        store: The TreeStore to populate.
        source: The root node dict, or a list holding exactly one root.

    Raises:
        InvalidArgumentError: If the source has several roots, a node without
            id, a duplicate id or a children value that is not a list.

    Example:
        >>> load_from_nested(store, [{'id': 'root', 'label': 'ROOT',
        ...     'children': [{'id': 'dbms', 'label': 'DBMS'}]}])
    """
    if isinstance(source, list):
        if len(source) != 1:
            raise InvalidArgumentError(
                f"nested source must hold exactly one root, got {len(source)}"
            )
        source = source[0]

    root_id = _node_id(source)
    nodes: dict[str, TreeNode] = {}
    parent_of: dict[str, str] = {}
    stack: list[tuple[Mapping[str, Any], str | None]] = [(source, None)]

    while stack:
        item, parent_id = stack.pop()
        node_id = _node_id(item)
        if node_id in nodes:
            raise InvalidArgumentError(f"duplicate node id '{node_id}'")
        children = item.get('children') or []
        if not isinstance(children, list):
            raise InvalidArgumentError(
                f"children of '{node_id}' must be a list, not {type(children).__name__}"
            )
        nodes[node_id] = TreeNode(node_id, _node_label(item, node_id))
        if parent_id is not None:
            nodes[parent_id].children.append(node_id)
            parent_of[node_id] = parent_id
        for child in reversed(children):
            stack.append((child, node_id))

    store._replace_tree(root_id, nodes, parent_of)


def load_from_flat(
    store: TreeStore,
    source: Mapping[str, Mapping[str, Any]],
    root_id: str = 'root',
) -> None:
    """Load a flat id -> node mapping into store, replacing its content.

    Only nodes reachable from root_id are loaded. Unreachable entries are
    skipped with a warning.

    Args:
        store: The TreeStore to populate.
        source: Mapping of id to node dict; children are lists of ids.
        root_id: Key of the root entry.

    Raises:
        InvalidArgumentError: If the root is missing, a child id has no
            entry, or a node is reachable twice (shared child or cycle).
    """
    if root_id not in source:
        raise InvalidArgumentError(f"root '{root_id}' not in source")

    nodes: dict[str, TreeNode] = {}
    parent_of: dict[str, str] = {}
    stack: list[tuple[str, str | None]] = [(root_id, None)]

    while stack:
        node_id, parent_id = stack.pop()
        if node_id in nodes:
            raise InvalidArgumentError(
                f"node '{node_id}' is reachable more than once"
            )
        if node_id not in source:
            raise InvalidArgumentError(
                f"child '{node_id}' of '{parent_id}' not in source"
            )
        item = source[node_id]
        if not isinstance(item, Mapping):
            raise InvalidArgumentError(
                f"entry '{node_id}' must be a dict, not {type(item).__name__}"
            )
        children = item.get('children') or []
        if not isinstance(children, list):
            raise InvalidArgumentError(
                f"children of '{node_id}' must be a list, not {type(children).__name__}"
            )
        nodes[node_id] = TreeNode(node_id, _node_label(item, node_id))
        if parent_id is not None:
            nodes[parent_id].children.append(node_id)
            parent_of[node_id] = parent_id
        for child_id in reversed(children):
            stack.append((str(child_id), node_id))

    unreachable = [key for key in source if key not in nodes]
    if unreachable:
        logger.warning(
            "ignoring %d unreachable entries: %s", len(unreachable), unreachable
        )

    store._replace_tree(root_id, nodes, parent_of)


def load_source(store: TreeStore, source: Any) -> None:
    """Load source into store, detecting its shape.

    A list, or a dict carrying an id key, is nested. A dict with an
    'items' mapping (react-complex-tree) or any other dict is flat, rooted
    at the store's configured root id.

    Raises:
        TypeError: If source is neither a dict nor a list.
    """
    if isinstance(source, list):
        load_from_nested(store, source)
    elif isinstance(source, Mapping):
        if isinstance(source.get('items'), Mapping):
            load_from_flat(store, source['items'], store.config.root_id)
        elif isinstance(_first_key(source, ID_KEYS), (str, int)):
            load_from_nested(store, source)
        else:
            load_from_flat(store, source, store.config.root_id)
    else:
        raise TypeError(
            f"source must be dict or list, not {type(source).__name__}"
        )
