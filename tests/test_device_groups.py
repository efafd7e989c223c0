# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for the device groups example."""

import logging
from pathlib import Path

import pytest

EXAMPLE_DIR = Path(__file__).resolve().parent.parent / 'examples' / 'device_groups'


@pytest.fixture
def device_groups(monkeypatch):
    monkeypatch.syspath_prepend(str(EXAMPLE_DIR))
    import device_groups
    return device_groups


class TestDeviceGroups:
    """Tests for DeviceGroups."""

    def test_handle_create(self, device_groups):
        """Test a create intent returns the new id."""
        groups = device_groups.DeviceGroups()
        new_id = groups.handle({'kind': 'create', 'parentId': 'database',
                                'label': 'PostgreSQL'})
        assert groups.store.parent(new_id) == 'database'

    def test_rejected_intent_is_logged(self, device_groups, caplog):
        """Test a rejected intent is logged and ignored."""
        groups = device_groups.DeviceGroups()
        with caplog.at_level(logging.WARNING):
            assert groups.handle({'kind': 'move', 'nodeId': 'root',
                                  'newParentId': 'system'}) is None
        assert 'rejected move' in caplog.text

    def test_intent_without_kind_is_logged(self, device_groups, caplog):
        """Test an intent without kind is rejected without a KeyError."""
        groups = device_groups.DeviceGroups()
        with caplog.at_level(logging.WARNING):
            assert groups.handle({'nodeId': 'k8s'}) is None
        assert 'rejected None' in caplog.text

    def test_render_filtered(self, device_groups):
        """Test a filtered render shows the matches with their path."""
        groups = device_groups.DeviceGroups()
        groups.handle({'kind': 'create', 'parentId': 'database',
                       'label': 'PostgreSQL'})
        groups.handle({'kind': 'setFilter', 'text': 'sql'})
        assert groups.render() == 'ROOT\n  Database\n    PostgreSQL'
