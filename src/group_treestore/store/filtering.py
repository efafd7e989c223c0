# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Label filtering for TreeStore views.

A filter keeps every node whose label contains the filter text
(case-insensitive), every ancestor of such a node, and the root. Nothing
here looks at open/closed state.
"""

from __future__ import annotations

from typing import Mapping

from ..node import TreeNode


def normalize_filter(text: str | None) -> str:
    """Return the casefolded filter text, '' for blank or missing text."""
    if not text or text.isspace():
        return ''
    return text.casefold()


def label_matches(label: str, needle: str) -> bool:
    """True if needle (already normalized) occurs in label."""
    return needle in label.casefold()


def matching_ids(
    nodes: Mapping[str, TreeNode],
    root_id: str,
    needle: str,
) -> list[str]:
    """Return ids whose own label matches needle, in document order."""
    if not needle:
        return []
    result: list[str] = []
    stack = [root_id]
    while stack:
        node = nodes[stack.pop()]
        if label_matches(node.label, needle):
            result.append(node.id)
        stack.extend(reversed(node.children))
    return result


def surviving_ids(
    nodes: Mapping[str, TreeNode],
    parent_of: Mapping[str, str],
    root_id: str,
    needle: str,
) -> set[str]:
    """Return the ids kept by a filter: matches, their ancestors and the root.

    Each ancestor chain is walked through parent_of and stops at the first
    node already kept, so the whole pass is O(n).

    Args:
        nodes: The store's id -> node mapping.
        parent_of: The store's child -> parent index.
        root_id: Id of the root node.
        needle: Normalized filter text (see normalize_filter).
    """
    keep = {root_id}
    for node_id in matching_ids(nodes, root_id, needle):
        current: str | None = node_id
        while current is not None and current not in keep:
            keep.add(current)
            current = parent_of.get(current)
    return keep
