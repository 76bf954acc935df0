"""Smoothing for the microphone level meter shown while dictating."""
from __future__ import annotations

import collections.abc

MAX_STEP = 0.05
EDGE_FALLOFF = 0.6


def clamp_level(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


class LevelMeter:
    def __init__(self):
        self.target = 0.0
        self.displayed = 0.0

    def set_level(self, value: float):
        self.target = clamp_level(value)

    def tick(self) -> float:
        # approach the target at a bounded rate so the bars don't jump
        diff = self.target - self.displayed
        step = min(abs(diff), MAX_STEP)
        self.displayed += step if diff > 0 else -step
        return self.displayed

    def bar_heights(self, bars: int = 16) -> list[float]:
        if bars == 1:
            return [self.displayed]
        heights = []
        for i in range(bars):
            bias = abs((i / (bars - 1)) * 2 - 1)
            heights.append(max(0.0, self.displayed * (1 - bias * EDGE_FALLOFF)))
        return heights

    async def run(self, trigger: collections.abc.AsyncIterable, levels: collections.abc.Callable[[list[float]], None]):
        """Tick once per item from `trigger` (such as trio_util.periodic) and report bar heights."""
        async for _ in trigger:
            self.tick()
            levels(self.bar_heights())
