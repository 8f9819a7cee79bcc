"""In-memory per-device state.

Only the reporter task mutates the store, so nothing here takes a lock.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


class ApplyOutcome(Enum):
    NEW = "new"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


@dataclass
class StateEntry:
    message: str
    changed: bool = False


class StateStore:
    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self._entries: Dict[str, StateEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._entries

    def get(self, device_id: str) -> Optional[StateEntry]:
        return self._entries.get(device_id)

    def apply(self, device_id: str, summary: str) -> ApplyOutcome:
        """
        Record the latest summary for a device.

        The first summary for a device is logged straight away as a new device
        and does not count as a change. Later summaries mark the entry changed
        only when they differ from the stored one.
        """
        entry = self._entries.get(device_id)
        if entry is None:
            self._entries[device_id] = StateEntry(message=summary)
            self.logger.info(
                "%s: new: %s",
                device_id,
                summary,
                extra={"details": {"device_id": device_id, "summary": summary, "new": True}},
            )
            return ApplyOutcome.NEW
        if entry.message == summary:
            return ApplyOutcome.UNCHANGED
        entry.message = summary
        entry.changed = True
        return ApplyOutcome.CHANGED

    def drain_changed(self) -> List[Tuple[str, str]]:
        drained: List[Tuple[str, str]] = []
        for device_id, entry in self._entries.items():
            if entry.changed:
                drained.append((device_id, entry.message))
                entry.changed = False
        return drained
