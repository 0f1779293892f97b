"""Bounded set of already-imported asset identifiers."""

from __future__ import annotations

from collections import OrderedDict
from typing import Iterable


class ImportedAssetSet:
    """LRU-capped membership set keyed by external asset id.

    Adding past ``max_size`` evicts the least recently added or checked id.
    """

    def __init__(self, ids: Iterable[str] = (), max_size: int = 10_000):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._ids: OrderedDict[str, None] = OrderedDict()
        for asset_id in ids:
            self.add(asset_id)

    def __contains__(self, asset_id: str) -> bool:
        if asset_id in self._ids:
            self._ids.move_to_end(asset_id)
            return True
        return False

    def __len__(self) -> int:
        return len(self._ids)

    def add(self, asset_id: str) -> None:
        self._ids[asset_id] = None
        self._ids.move_to_end(asset_id)
        while len(self._ids) > self.max_size:
            self._ids.popitem(last=False)

    def to_list(self) -> list[str]:
        """Ids from least to most recently used, for persisting."""

        return list(self._ids)
