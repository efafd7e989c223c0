# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Dispatch of presentation-layer intents onto a TreeStore.

Tree widgets report what the user did as small dicts:

    {'kind': 'create', 'parentId': 'root', 'label': 'DBMS'}
    {'kind': 'rename', 'nodeId': 'node-1', 'label': 'PostgreSQL'}
    {'kind': 'move', 'nodeId': 'node-1', 'newParentId': 'node-2'}
    {'kind': 'delete', 'nodeIds': ['node-1', 'node-3']}
    {'kind': 'setFilter', 'text': 'sms'}
    {'kind': 'toggleOpen', 'nodeId': 'node-2'}
    {'kind': 'select', 'nodeId': 'node-2'}

Snake-case keys (parent_id, node_id, new_parent_id, node_ids) and kinds
(set_filter, toggle_open) are accepted as well.
"""

from __future__ import annotations

import inspect
import logging
import re
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

from .exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from .store import TreeStore

logger = logging.getLogger(__name__)

_HANDLERS: dict[str, Callable[..., Any]] = {}
_CAMEL = re.compile(r'(?<!^)(?=[A-Z])')


def _snake(name: str) -> str:
    return _CAMEL.sub('_', name).lower()


def handles(kind: str) -> Callable:
    """Decorator registering an event handler for kind.

    The handler receives the store followed by the event fields it names,
    looked up by snake-case name.
    """
    def decorator(func: Callable) -> Callable:
        _HANDLERS[_snake(kind)] = func
        return func

    return decorator


def _field(event: Mapping[str, Any], name: str) -> Any:
    """Return event[name], accepting snake-case or camelCase keys."""
    if name in event:
        return event[name]
    camel = re.sub(r'_([a-z])', lambda m: m.group(1).upper(), name)
    if camel in event:
        return event[camel]
    raise InvalidArgumentError(
        f"event '{event.get('kind')}' is missing field '{camel}'"
    )


@handles('create')
def _create(store: TreeStore, parent_id: str, label: str) -> str:
    return store.create(parent_id, label)


@handles('rename')
def _rename(store: TreeStore, node_id: str, label: str) -> None:
    store.rename(node_id, label)


@handles('move')
def _move(store: TreeStore, node_id: str, new_parent_id: str) -> None:
    store.move(node_id, new_parent_id)


@handles('delete')
def _delete(store: TreeStore, node_ids: Iterable[str]) -> None:
    store.delete(node_ids)


@handles('setFilter')
def _set_filter(store: TreeStore, text: str) -> None:
    store.set_filter(text)


@handles('toggleOpen')
def _toggle_open(store: TreeStore, node_id: str) -> None:
    store.toggle_open(node_id)


@handles('select')
def _select(store: TreeStore, node_id: str) -> None:
    store.select(node_id)


_FIELDS: dict[str, tuple[str, ...]] = {
    kind: tuple(inspect.signature(func).parameters)[1:]
    for kind, func in _HANDLERS.items()
}


def apply_event(store: TreeStore, event: Mapping[str, Any]) -> Any:
    """Apply one intent dict to store.

    Args:
        store: The target TreeStore.
        event: Dict with a 'kind' key and the fields of that kind.

    Returns:
        The new node id for 'create', None otherwise.

    Raises:
        InvalidArgumentError: If the kind is unknown or a field is missing.
        TreeStoreError: Whatever the store command raises.
    """
    if not isinstance(event, Mapping) or 'kind' not in event:
        raise InvalidArgumentError(f"event must be a dict with a 'kind': {event!r}")
    kind = _snake(str(event['kind']))
    handler = _HANDLERS.get(kind)
    if handler is None:
        raise InvalidArgumentError(f"unknown event kind '{event['kind']}'")
    args = [_field(event, name) for name in _FIELDS[kind]]
    logger.debug("event %s", kind)
    return handler(store, *args)


def apply_events(store: TreeStore, events: Iterable[Mapping[str, Any]]) -> list[Any]:
    """Apply events in order and return their results.

    Stops at the first failing event; earlier events stay applied.
    """
    return [apply_event(store, event) for event in events]
