# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Construction options for TreeStore."""

from __future__ import annotations

import itertools
import uuid
from dataclasses import dataclass
from typing import Callable

from .exceptions import InvalidArgumentError

ID_STRATEGIES = ('counter', 'uuid')


@dataclass(frozen=True)
class StoreConfig:
    """Options applied when a TreeStore is created.

    - root_id / root_label: the root created for an empty store
    - id_prefix: prefix of generated node ids
    - id_strategy: 'counter' (node-1, node-2, ...) or 'uuid' (random token)
    - allow_empty_labels: accept labels that are empty after strip()
    - initially_open: ids expanded at start; None means just the root
    - select_root: select the root at start
    """

    root_id: str = 'root'
    root_label: str = 'ROOT'
    id_prefix: str = 'node-'
    id_strategy: str = 'counter'
    allow_empty_labels: bool = False
    initially_open: tuple[str, ...] | None = None
    select_root: bool = True

    def __post_init__(self) -> None:
        if self.id_strategy not in ID_STRATEGIES:
            raise InvalidArgumentError(
                f"id_strategy must be one of {ID_STRATEGIES}, not {self.id_strategy!r}"
            )
        if not self.root_id:
            raise InvalidArgumentError("root_id must not be empty")

    def id_source(self, start: int = 1) -> Callable[[], str]:
        """Return a callable producing candidate ids for new nodes."""
        prefix = self.id_prefix
        if self.id_strategy == 'uuid':
            return lambda: f"{prefix}{uuid.uuid4().hex}"
        counter = itertools.count(start)
        return lambda: f"{prefix}{next(counter)}"
