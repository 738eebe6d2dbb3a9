import logging
from typing import List, Optional

import numpy as np

from canvas import PixelBuffer

log = logging.getLogger(__name__)


class HistoryStack:
    """
    Bounded undo history of full-buffer snapshots.

    Snapshots are read-only copies of the pixel array. Once `max_size` entries
    are held, saving another evicts the oldest one first.
    """
    def __init__(self, max_size=20):
        if max_size < 1:
            raise ValueError(f"history needs room for at least one snapshot, got {max_size}")
        self.max_size = max_size
        self._snapshots: List[np.ndarray] = []

    def __len__(self):
        return len(self._snapshots)

    @property
    def can_undo(self) -> bool:
        return bool(self._snapshots)

    def save(self, buffer: PixelBuffer):
        """Captures the buffer's current pixels. Call before mutating it."""
        if len(self._snapshots) >= self.max_size:
            self._snapshots.pop(0)
            log.debug("history full at %d, dropped oldest snapshot", self.max_size)
        snapshot = buffer.copy_pixels()
        snapshot.flags.writeable = False
        self._snapshots.append(snapshot)

    def undo(self, buffer: PixelBuffer) -> Optional[np.ndarray]:
        """Restores the most recent snapshot into the buffer and returns it."""
        if not self._snapshots:
            return None
        snapshot = self._snapshots.pop()
        buffer.restore(snapshot)
        return snapshot

    def clear(self):
        self._snapshots.clear()
