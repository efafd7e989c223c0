# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeStore package - The canonical group tree.

This package provides the TreeStore class, an adjacency-list tree with a
parent index, all-or-nothing structural commands and filtered views.

The package is organized into:
- core: Main TreeStore class with commands, queries and views
- filtering: Label filter and ancestor-preserving pruning
- loading: Functions for loading nested or flat widget data
- viewstate: Open/selected presentation state

Example:
    >>> from group_treestore import TreeStore
    >>> store = TreeStore()
    >>> dbms = store.create('root', 'DBMS')
    >>> store.view().children('root') == (dbms,)
    True
"""

from .core import TreeStore
from .loading import load_from_flat, load_from_nested

__all__ = ["TreeStore", "load_from_flat", "load_from_nested"]
