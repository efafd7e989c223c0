# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Open/selected presentation state for TreeStore.

Expansion and selection belong to the screen, not to the data: they are
kept as plain id sets next to the tree. Ids left behind after a filter
change are harmless, they are simply never rendered. Ids of deleted nodes
are dropped by TreeStore.delete().
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from ..node import TreeNode

logger = logging.getLogger(__name__)


class ViewStateMixin:
    """Mixin providing expand/collapse and single selection.

    The host class must define ``_nodes``, ``_open`` and ``_selected``
    slots and a ``_require(node_id)`` method.
    """

    __slots__ = ()

    _nodes: dict[str, TreeNode]
    _open: set[str]
    _selected: set[str]

    def _init_view_state(
        self, open_ids: Iterable[str], selected: str | None
    ) -> None:
        self._open = {node_id for node_id in open_ids if node_id in self._nodes}
        self._selected = {selected} if selected in self._nodes else set()

    def _forget(self, node_ids: Iterable[str]) -> None:
        """Drop removed ids from the open and selected sets."""
        ids = set(node_ids)
        self._open -= ids
        self._selected -= ids

    # ==================== Expansion ====================

    def toggle_open(self, node_id: str) -> None:
        """Switch node_id between open and closed."""
        self._require(node_id)
        if node_id in self._open:
            self._open.discard(node_id)
        else:
            self._open.add(node_id)

    def is_open(self, node_id: str) -> bool:
        return node_id in self._open

    def expand(self, *node_ids: str) -> None:
        """Open every given node. All ids must exist."""
        for node_id in node_ids:
            self._require(node_id)
        self._open.update(node_ids)

    def collapse(self, *node_ids: str) -> None:
        """Close every given node. Unknown ids are ignored."""
        self._open.difference_update(node_ids)

    def expand_all(self) -> None:
        """Open every node that has children."""
        self._open = {n.id for n in self._nodes.values() if n.children}

    def collapse_all(self) -> None:
        self._open.clear()

    @property
    def open_ids(self) -> frozenset[str]:
        return frozenset(self._open)

    # ==================== Selection ====================

    def select(self, node_id: str) -> None:
        """Select node_id, deselecting every other node."""
        self._require(node_id)
        self._selected = {node_id}
        logger.debug("select %s", node_id)

    def is_selected(self, node_id: str) -> bool:
        return node_id in self._selected

    def clear_selection(self) -> None:
        self._selected.clear()

    @property
    def selected_ids(self) -> frozenset[str]:
        return frozenset(self._selected)

    @property
    def selected(self) -> str | None:
        """The selected id, or None."""
        return next(iter(self._selected), None)
