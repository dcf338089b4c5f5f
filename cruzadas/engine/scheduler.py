"""Cancellable deferred actions keyed by cell coordinate."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..core.models import Coord
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Clock = Callable[[], float]


@dataclass
class PendingClear:
    coord: Coord
    value: str
    due: float


class ClearScheduler:
    """Holds at most one pending clear per coordinate.

    Nothing runs on its own: the owner calls :meth:`pop_due` to collect the
    tasks whose due time has passed.
    """

    def __init__(self, delay: float, clock: Optional[Clock] = None) -> None:
        self.delay = delay
        self.clock = clock or time.monotonic
        self._pending: Dict[Coord, PendingClear] = {}

    def schedule(self, coord: Coord, value: str) -> PendingClear:
        self.cancel(coord)
        task = PendingClear(coord=coord, value=value, due=self.clock() + self.delay)
        self._pending[coord] = task
        return task

    def cancel(self, coord: Coord) -> bool:
        task = self._pending.pop(coord, None)
        if task is not None:
            LOGGER.debug("Cancelled pending clear at %s", coord)
        return task is not None

    def cancel_all(self) -> None:
        self._pending.clear()

    def pop_due(self, now: Optional[float] = None) -> List[PendingClear]:
        now = self.clock() if now is None else now
        due = sorted((t for t in self._pending.values() if t.due <= now), key=lambda t: t.due)
        for task in due:
            del self._pending[task.coord]
        return due

    def __len__(self) -> int:
        return len(self._pending)
