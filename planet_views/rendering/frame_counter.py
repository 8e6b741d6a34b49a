from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(slots=True)
class FrameCounter:
    """
    Frames-per-second tally published on whole-second boundaries.

    A frame is counted into the second it was drawn in, so the rate
    published when a boundary is crossed covers exactly the frames of the
    previous second.
    """

    frames: int = 0
    last_second: int | None = None
    rate: int | None = None

    def record(self, now: float) -> int | None:
        """Count one frame drawn at ``now`` (seconds).

        Returns the newly published rate when a second boundary was crossed,
        otherwise ``None``.
        """
        second = math.floor(now)
        published = None
        if self.last_second is None:
            self.last_second = second
        elif second > self.last_second:
            published = self.frames
            self.rate = published
            self.frames = 0
            self.last_second = second
        self.frames += 1
        return published

    def reset(self) -> None:
        self.frames = 0
        self.last_second = None
        self.rate = None
