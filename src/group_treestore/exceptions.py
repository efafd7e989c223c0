# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeStore exceptions."""

from __future__ import annotations


class TreeStoreError(Exception):
    """Base exception for TreeStore errors."""

    pass


class NodeNotFoundError(TreeStoreError, KeyError):
    """Raised when a referenced node id is not in the tree."""

    def __init__(self, node_id: str) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"Node '{self.node_id}' not found"


class InvalidOperationError(TreeStoreError):
    """Raised when a command would break the tree structure.

    Moving a node under itself or one of its descendants, moving the root
    and deleting the root all raise this error.
    """

    pass


class InvalidArgumentError(TreeStoreError, ValueError):
    """Raised on malformed input: empty labels, bad sources, bad events."""

    pass


class IntegrityError(TreeStoreError):
    """Raised by check_integrity() when an invariant does not hold."""

    pass
