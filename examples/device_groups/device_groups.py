# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""DeviceGroups - Example group tree for a device management screen.

A didactic example showing a TreeStore driven by widget intents, with the
same view rendered for two different tree widgets.
"""

from __future__ import annotations

import json
import logging

from group_treestore import (
    TreeStore,
    TreeStoreError,
    apply_event,
    to_complex_tree,
    to_prime,
    to_rows,
)

GROUPS = [
    {
        'id': 'root',
        'label': 'ROOT',
        'children': [
            {'id': 'system', 'label': 'System', 'children': [
                {'id': 'k8s', 'label': 'Kubernetes'},
                {'id': 'wms', 'label': 'WMS'},
            ]},
            {'id': 'network', 'label': 'Network', 'children': [
                {'id': 'nms', 'label': 'NMS'},
                {'id': 'sms', 'label': 'SMS'},
            ]},
            {'id': 'database', 'label': 'Database', 'children': [
                {'id': 'dbms', 'label': 'DBMS'},
            ]},
        ],
    },
]


class DeviceGroups:
    """The group tree of the device screen.

    Example:
        >>> groups = DeviceGroups()
        >>> groups.handle({'kind': 'create', 'parentId': 'database',
        ...                'label': 'PostgreSQL'})
        'node-1'
        >>> groups.handle({'kind': 'setFilter', 'text': 'sql'})
        >>> print(groups.render())
        ROOT
          Database
            PostgreSQL
    """

    def __init__(self) -> None:
        self._store = TreeStore(GROUPS)
        self._store.expand('system', 'network', 'database')

    @property
    def store(self) -> TreeStore:
        """Access the underlying TreeStore."""
        return self._store

    def handle(self, event: dict) -> str | None:
        """Apply a widget intent. Rejected intents are logged and ignored."""
        try:
            return apply_event(self._store, event)
        except TreeStoreError as e:
            logging.getLogger(__name__).warning("rejected %s: %s", event.get('kind'), e)
            return None

    def render(self) -> str:
        """Return the visible rows as indented text."""
        view = self._store.view()
        open_ids = set(view) if view.is_filtered else self._store.open_ids
        return '\n'.join(
            '  ' * row.level + row.label for row in to_rows(view, open_ids)
        )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format='%(levelname)s | %(message)s')
    groups = DeviceGroups()

    groups.handle({'kind': 'create', 'parentId': 'database', 'label': 'PostgreSQL'})
    groups.handle({'kind': 'move', 'nodeId': 'sms', 'newParentId': 'system'})
    groups.handle({'kind': 'move', 'nodeId': 'root', 'newParentId': 'system'})
    print(groups.render())

    groups.handle({'kind': 'setFilter', 'text': 'ms'})
    print('\nfilter "ms":')
    print(groups.render())

    print('\nPrimeReact:')
    print(json.dumps(to_prime(groups.store.view()), indent=2))
    print('\nreact-complex-tree:')
    print(json.dumps(to_complex_tree(groups.store.view())['items']['database'], indent=2))


if __name__ == '__main__':
    main()
