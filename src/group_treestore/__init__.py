# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Group-TreeStore - The group tree behind device management tree widgets.

A lightweight, zero-dependency library holding one hierarchical group tree,
applying create/rename/move/delete commands to it without ever breaking
parent/child integrity, and handing read-only, optionally filtered views to
whatever tree widget renders it.
"""

__version__ = "0.1.0"

from .adapters import Row, to_complex_tree, to_flat, to_nested, to_prime, to_rows
from .config import StoreConfig
from .events import apply_event, apply_events
from .exceptions import (
    IntegrityError,
    InvalidArgumentError,
    InvalidOperationError,
    NodeNotFoundError,
    TreeStoreError,
)
from .node import TreeNode
from .store import TreeStore, load_from_flat, load_from_nested
from .view import TreeView, ViewNode

__all__ = [
    # Core classes
    "TreeStore",
    "TreeNode",
    "StoreConfig",
    # Views
    "TreeView",
    "ViewNode",
    # Loading
    "load_from_nested",
    "load_from_flat",
    # Events
    "apply_event",
    "apply_events",
    # Adapters
    "to_nested",
    "to_prime",
    "to_complex_tree",
    "to_flat",
    "to_rows",
    "Row",
    # Exceptions
    "TreeStoreError",
    "NodeNotFoundError",
    "InvalidOperationError",
    "InvalidArgumentError",
    "IntegrityError",
]
