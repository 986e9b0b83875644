"""
どこで: `engine.core` のフレームドライバ。
何を: `Tickable` 群（テクスチャ束縛/オービット更新/オーバーレイ）を固定順序で呼ぶ FrameClock。
なぜ: pyglet の `schedule_interval` から呼ぶだけで、1 フレーム内の更新順を一定に保つため。
"""

from __future__ import annotations

import time
from typing import Sequence

from .tickable import Tickable


class FrameClock:
    """登録順に `tick(dt)` を呼び、経過フレーム数と時間を数える。"""

    def __init__(self, tickables: Sequence[Tickable]):
        self._tickables = tuple(tickables)
        self._last_time = time.perf_counter()
        self.frames = 0
        self.elapsed = 0.0

    def tick(self, dt: float | None = None) -> None:
        now = time.perf_counter()
        if dt is None:  # pyglet 以外のホストは dt を渡さない
            dt = now - self._last_time
        self._last_time = now

        for t in self._tickables:
            t.tick(dt)
        self.frames += 1
        self.elapsed += dt

    @property
    def fps(self) -> float:
        """起動からの平均フレームレート（未計測なら 0）。"""
        return self.frames / self.elapsed if self.elapsed > 0.0 else 0.0
