# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for widget-facing code: loading, events and adapters."""

import logging

import pytest

from group_treestore import (
    InvalidArgumentError,
    InvalidOperationError,
    NodeNotFoundError,
    Row,
    TreeStore,
    apply_event,
    apply_events,
    load_from_flat,
    load_from_nested,
    to_complex_tree,
    to_flat,
    to_nested,
    to_prime,
    to_rows,
)

MUI_GROUPS = [
    {'id': 'root', 'label': 'ROOT', 'children': [
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
    ]},
]

COMPLEX_ITEMS = {
    'root': {'index': 'root', 'isFolder': True, 'children': ['system', 'database'],
             'data': 'ROOT'},
    'system': {'index': 'system', 'isFolder': True, 'children': ['k8s'],
               'data': 'System'},
    'database': {'index': 'database', 'isFolder': True, 'children': ['dbms'],
                 'data': 'Database'},
    'dbms': {'index': 'dbms', 'isFolder': False, 'children': [], 'data': 'DBMS'},
    'k8s': {'index': 'k8s', 'isFolder': False, 'children': [], 'data': 'Kubernetes'},
}


@pytest.fixture
def groups():
    return TreeStore(MUI_GROUPS)


class TestLoadNested:
    """Tests for nested-object sources."""

    def test_load_mui_shape(self, groups):
        """Test loading id/label/children items."""
        assert groups.root_id == 'root'
        assert groups.children('root') == ['system', 'network', 'database']
        assert groups.label('k8s') == 'Kubernetes'
        assert groups.parent('dbms') == 'database'
        groups.check_integrity()

    def test_load_prime_shape(self):
        """Test loading key/label items (PrimeReact)."""
        store = TreeStore([{'key': '0', 'label': 'ROOT', 'children': [
            {'key': '0-0', 'label': 'DBMS'},
            {'key': '0-1', 'label': 'k8s'},
        ]}])
        assert store.root_id == '0'
        assert store.children('0') == ['0-0', '0-1']

    def test_load_arborist_shape(self):
        """Test loading id/name items (react-arborist)."""
        store = TreeStore({'id': 'root', 'name': 'ROOT', 'children': [
            {'id': '1', 'name': 'System'},
        ]})
        assert store.label('1') == 'System'

    def test_label_defaults_to_id(self):
        """Test a node without label shows its id."""
        store = TreeStore([{'id': 'root'}])
        assert store.label('root') == 'root'

    def test_root_state_follows_loaded_root(self):
        """Test the loaded root starts open and selected."""
        store = TreeStore([{'key': '0', 'label': 'ROOT'}])
        assert store.is_open('0')
        assert store.selected == '0'

    def test_several_roots(self):
        """Test a list must hold exactly one root."""
        with pytest.raises(InvalidArgumentError, match='exactly one root'):
            TreeStore([{'id': 'a'}, {'id': 'b'}])

    def test_duplicate_id(self):
        """Test duplicate ids are rejected."""
        with pytest.raises(InvalidArgumentError, match="duplicate node id 'x'"):
            TreeStore([{'id': 'root', 'children': [{'id': 'x'}, {'id': 'x'}]}])

    def test_missing_id(self):
        """Test nodes must carry an id."""
        with pytest.raises(InvalidArgumentError, match='no id'):
            TreeStore([{'id': 'root', 'children': [{'label': 'nameless'}]}])

    def test_bad_children(self):
        """Test children must be a list."""
        with pytest.raises(InvalidArgumentError):
            TreeStore([{'id': 'root', 'children': 'abc'}])

    def test_reload_failure_keeps_store(self, groups):
        """Test a bad source does not touch a loaded store."""
        with pytest.raises(InvalidArgumentError):
            load_from_nested(groups, [{'id': 'r', 'children': [{'id': 'r'}]}])
        assert groups.root_id == 'root'
        assert len(groups) == 9

    def test_reload_replaces_tree(self, groups):
        """Test loading into an existing store replaces its tree."""
        load_from_nested(groups, {'id': 'root', 'label': 'ROOT'})
        assert list(groups) == ['root']

    def test_reload_resets_view_state(self, groups):
        """Test a reload drops the old filter, open and selected ids."""
        groups.expand('system', 'database')
        groups.select('k8s')
        groups.set_filter('db')
        load_from_nested(groups, [{'key': '0', 'label': 'ROOT', 'children': [
            {'key': 'k8s', 'label': 'Kubernetes'},
            {'key': 'system', 'label': 'System'},
        ]}])
        assert groups.filter_text == ''
        assert groups.open_ids == {'0'}
        assert groups.selected == '0'
        assert not groups.is_selected('k8s')
        assert not groups.is_open('system')


class TestLoadFlat:
    """Tests for flat id -> node sources."""

    def test_load_custom_tree_shape(self):
        """Test loading id/name/children-ids entries."""
        store = TreeStore({
            'root': {'id': 'root', 'name': 'ROOT', 'children': ['dbms', 'k8s']},
            'dbms': {'id': 'dbms', 'name': 'DBMS'},
            'k8s': {'id': 'k8s', 'name': 'k8s'},
        })
        assert store.children('root') == ['dbms', 'k8s']
        assert store.label('dbms') == 'DBMS'

    def test_load_complex_tree_items(self):
        """Test loading react-complex-tree {'items': ...} data."""
        store = TreeStore({'items': COMPLEX_ITEMS})
        assert list(store) == ['root', 'system', 'k8s', 'database', 'dbms']
        assert store.label('k8s') == 'Kubernetes'

    def test_explicit_root(self):
        """Test load_from_flat with another root id."""
        store = TreeStore()
        load_from_flat(store, {'top': {'name': 'Top', 'children': ['a']},
                               'a': {'name': 'A'}}, root_id='top')
        assert store.root_id == 'top'
        assert store.parent('a') == 'top'

    def test_missing_root(self):
        """Test the root entry must exist."""
        with pytest.raises(InvalidArgumentError, match="root 'root'"):
            TreeStore({'a': {'name': 'A'}})

    def test_dangling_child(self):
        """Test child ids must have an entry."""
        with pytest.raises(InvalidArgumentError, match="'ghost'"):
            TreeStore({'root': {'name': 'R', 'children': ['ghost']}})

    def test_shared_child(self):
        """Test a node cannot have two parents."""
        with pytest.raises(InvalidArgumentError, match='more than once'):
            TreeStore({
                'root': {'name': 'R', 'children': ['a', 'b']},
                'a': {'name': 'A', 'children': ['c']},
                'b': {'name': 'B', 'children': ['c']},
                'c': {'name': 'C'},
            })

    def test_cycle(self):
        """Test a cycle is rejected."""
        with pytest.raises(InvalidArgumentError):
            TreeStore({
                'root': {'name': 'R', 'children': ['a']},
                'a': {'name': 'A', 'children': ['root']},
            })

    def test_unreachable_entries_warn(self, caplog):
        """Test entries not reachable from the root are skipped."""
        with caplog.at_level(logging.WARNING, logger='group_treestore'):
            store = TreeStore({'root': {'name': 'R'}, 'lost': {'name': 'L'}})
        assert 'lost' not in store
        assert 'unreachable' in caplog.text

    def test_invalid_source_type(self):
        """Test non dict/list sources are rejected."""
        with pytest.raises(TypeError):
            TreeStore('root')


class TestEvents:
    """Tests for apply_event()."""

    def test_create_returns_id(self, groups):
        """Test a create event returns the new id."""
        new_id = apply_event(groups, {'kind': 'create', 'parentId': 'database',
                                      'label': 'PostgreSQL'})
        assert groups.children('database') == ['dbms', new_id]

    def test_all_kinds(self, groups):
        """Test every event kind reaches the store."""
        results = apply_events(groups, [
            {'kind': 'rename', 'nodeId': 'dbms', 'label': 'MySQL'},
            {'kind': 'move', 'nodeId': 'sms', 'newParentId': 'system'},
            {'kind': 'delete', 'nodeIds': ['network']},
            {'kind': 'toggleOpen', 'nodeId': 'system'},
            {'kind': 'select', 'nodeId': 'wms'},
            {'kind': 'setFilter', 'text': 'ms'},
        ])
        assert results == [None] * 6
        assert groups.label('dbms') == 'MySQL'
        assert groups.children('system') == ['k8s', 'wms', 'sms']
        assert 'nms' not in groups
        assert groups.is_open('system')
        assert groups.selected == 'wms'
        assert set(groups.view()) == {'root', 'system', 'wms', 'sms'}

    def test_snake_case(self, groups):
        """Test snake-case kinds and fields are accepted."""
        apply_event(groups, {'kind': 'toggle_open', 'node_id': 'network'})
        apply_event(groups, {'kind': 'move', 'node_id': 'k8s',
                             'new_parent_id': 'network'})
        apply_event(groups, {'kind': 'set_filter', 'text': 'k'})
        assert groups.is_open('network')
        assert groups.parent('k8s') == 'network'
        assert groups.filter_text == 'k'

    def test_unknown_kind(self, groups):
        """Test unknown kinds are rejected."""
        with pytest.raises(InvalidArgumentError, match="unknown event kind 'drop'"):
            apply_event(groups, {'kind': 'drop', 'nodeId': 'k8s'})

    def test_missing_kind(self, groups):
        """Test events need a kind."""
        with pytest.raises(InvalidArgumentError):
            apply_event(groups, {'nodeId': 'k8s'})

    def test_missing_field(self, groups):
        """Test a missing field names the camelCase key."""
        with pytest.raises(InvalidArgumentError, match='newParentId'):
            apply_event(groups, {'kind': 'move', 'nodeId': 'k8s'})

    def test_store_errors_propagate(self, groups):
        """Test store errors reach the caller unchanged."""
        with pytest.raises(InvalidOperationError):
            apply_event(groups, {'kind': 'move', 'nodeId': 'system',
                                 'newParentId': 'k8s'})
        with pytest.raises(NodeNotFoundError):
            apply_event(groups, {'kind': 'select', 'nodeId': 'ghost'})

    def test_apply_events_stops_at_failure(self, groups):
        """Test events after a failure are not applied."""
        with pytest.raises(InvalidOperationError):
            apply_events(groups, [
                {'kind': 'rename', 'nodeId': 'wms', 'label': 'WMS 2'},
                {'kind': 'delete', 'nodeIds': ['root']},
                {'kind': 'rename', 'nodeId': 'nms', 'label': 'NMS 2'},
            ])
        assert groups.label('wms') == 'WMS 2'
        assert groups.label('nms') == 'NMS'


class TestAdapters:
    """Tests for widget data adapters."""

    def test_to_nested_round_trip(self, groups):
        """Test to_nested gives back the MUI source data."""
        assert to_nested(groups.view()) == MUI_GROUPS

    def test_to_nested_name_key(self, groups):
        """Test the react-arborist label key."""
        item = to_nested(groups.view(), label_key='name')[0]
        assert item['name'] == 'ROOT'
        assert 'label' not in item

    def test_to_nested_deep_chain(self):
        """Test exporting a chain deeper than the recursion limit."""
        store = TreeStore()
        parent = 'root'
        for i in range(1200):
            parent = store.create(parent, f"level {i}")
        item = to_nested(store.view())[0]
        depth = 0
        while 'children' in item:
            item = item['children'][0]
            depth += 1
        assert depth == 1200
        assert item == {'id': parent, 'label': 'level 1199'}

    def test_to_prime(self, groups):
        """Test PrimeReact key/label items."""
        root = to_prime(groups.view())[0]
        assert root['key'] == 'root'
        assert [c['key'] for c in root['children']] == ['system', 'network', 'database']
        assert 'children' not in root['children'][0]['children'][0]

    def test_to_complex_tree_round_trip(self):
        """Test react-complex-tree items survive a load/export cycle."""
        store = TreeStore({'items': COMPLEX_ITEMS})
        assert to_complex_tree(store.view()) == {'items': COMPLEX_ITEMS}

    def test_to_flat(self, groups):
        """Test the custom-tree flat shape."""
        flat = to_flat(groups.view())
        assert flat['database'] == {'id': 'database', 'name': 'Database',
                                    'children': ['dbms']}
        assert flat['dbms'] == {'id': 'dbms', 'name': 'DBMS'}
        assert TreeStore(flat).view() == groups.view()

    def test_adapters_on_filtered_view(self, groups):
        """Test adapters only see the filtered tree."""
        groups.set_filter('sms')
        assert to_nested(groups.view()) == [
            {'id': 'root', 'label': 'ROOT', 'children': [
                {'id': 'network', 'label': 'Network', 'children': [
                    {'id': 'sms', 'label': 'SMS'},
                ]},
            ]},
        ]

    def test_to_rows_respects_open_state(self, groups):
        """Test closed nodes hide their children."""
        groups.expand('network')
        rows = to_rows(groups.view(), groups.open_ids)
        assert [r.id for r in rows] == ['root', 'system', 'network', 'nms',
                                        'sms', 'database']
        assert rows[2] == Row(1, 'network', 'Network', False, True)
        assert rows[3] == Row(2, 'nms', 'NMS', True, False)

    def test_to_rows_collapsed(self, groups):
        """Test no open ids shows only the root."""
        assert [r.id for r in to_rows(groups.view())] == ['root']
