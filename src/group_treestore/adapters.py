# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Translations of a TreeView into the data shapes of tree widgets.

Each function is a thin adapter: it reads a view and returns plain dicts
and lists. Nothing here knows how the widget draws them.
"""

from __future__ import annotations

from typing import Any, Collection, NamedTuple

from .view import TreeView


def to_nested(
    view: TreeView,
    id_key: str = 'id',
    label_key: str = 'label',
) -> list[dict[str, Any]]:
    """Return the view as a one-root list of nested node dicts.

    This is the shape of MUI X RichTreeView ('id'/'label') and
    react-arborist (label_key='name'). Leaves have no 'children' key.
    """
    root: dict[str, Any] = {}
    stack = [(view.root_id, root)]
    while stack:
        node_id, item = stack.pop()
        node = view[node_id]
        item[id_key] = node.id
        item[label_key] = node.label
        if node.children:
            item['children'] = [{} for _ in node.children]
            stack.extend(zip(node.children, item['children']))
    return [root]


def to_prime(view: TreeView) -> list[dict[str, Any]]:
    """Return the view in PrimeReact Tree shape ({key, label, children})."""
    return to_nested(view, id_key='key')


def to_complex_tree(view: TreeView) -> dict[str, Any]:
    """Return the view in react-complex-tree StaticTreeDataProvider shape.

    Example:
        >>> to_complex_tree(view)['items']['root']
        {'index': 'root', 'isFolder': True, 'children': ['dbms'], 'data': 'ROOT'}
    """
    items = {
        node.id: {
            'index': node.id,
            'isFolder': not node.is_leaf,
            'children': list(node.children),
            'data': node.label,
        }
        for _, node in view.walk()
    }
    return {'items': items}


def to_flat(view: TreeView) -> dict[str, dict[str, Any]]:
    """Return the view as an id -> {id, name, children?} mapping."""
    result: dict[str, dict[str, Any]] = {}
    for _, node in view.walk():
        item: dict[str, Any] = {'id': node.id, 'name': node.label}
        if node.children:
            item['children'] = list(node.children)
        result[node.id] = item
    return result


class Row(NamedTuple):
    """One visible line of an indent-based tree."""

    level: int
    id: str
    label: str
    is_leaf: bool
    is_open: bool


def to_rows(view: TreeView, open_ids: Collection[str] = ()) -> list[Row]:
    """Flatten the visible part of the view into rows, in display order.

    Children of a node are listed only when the node is in open_ids. A
    filtered view is usually rendered fully expanded, pass every id for that.

    Args:
        view: The view to flatten.
        open_ids: Ids of expanded nodes, e.g. TreeStore.open_ids.
    """
    rows: list[Row] = []
    stack = [(0, view.root_id)]
    while stack:
        level, node_id = stack.pop()
        node = view[node_id]
        is_open = node_id in open_ids
        rows.append(Row(level, node.id, node.label, node.is_leaf, is_open))
        if is_open:
            for child_id in reversed(node.children):
                stack.append((level + 1, child_id))
    return rows
