# -- Clock Sources -- #

'''
Elapsed-time sources driving the wave animation.

FixedStepClock advances by a constant step per frame (deterministic
exports and tests). WallClock reports real elapsed time for interactive
use. Both satisfy the ClockSource protocol.
'''

from __future__ import annotations

import math
import time as timeModule

from OceanPlane import constants as const
from OceanPlane.errors import ValidationError


class FixedStepClock:
    '''
    Deterministic clock advancing by dt on every advance() call.

    Parameters:
    -----------
    dt : float
        Time step [s], finite and >= 0
    start : float
        Initial time [s]
    '''

    def __init__(self, dt: float = 1.0 / const.defaultFramesPerSecond, start: float = 0.0) -> None:
        if not math.isfinite(dt) or dt < 0.0:
            raise ValidationError(f'Clock step must be finite and >= 0, got {dt}')
        if not math.isfinite(start):
            raise ValidationError(f'Clock start must be finite, got {start}')
        self._dt = float(dt)
        self._start = float(start)
        self._steps = 0

    @classmethod
    def fromFps(cls, fps: float, start: float = 0.0) -> FixedStepClock:
        '''Clock stepping at 1 / fps seconds.'''
        if not math.isfinite(fps) or fps <= 0.0:
            raise ValidationError(f'Frame rate must be positive, got {fps}')
        return cls(dt=1.0 / fps, start=start)

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def steps(self) -> int:
        return self._steps

    def now(self) -> float:
        # Derived from the step count, never summed
        return self._start + self._steps * self._dt

    def advance(self) -> float:
        '''Step forward once and return the new time.'''
        self._steps += 1
        return self.now()

    def reset(self) -> None:
        self._steps = 0


class WallClock:
    '''Seconds elapsed since construction (or the last reset()).'''

    def __init__(self) -> None:
        self._origin = timeModule.perf_counter()

    def now(self) -> float:
        return timeModule.perf_counter() - self._origin

    def reset(self) -> None:
        self._origin = timeModule.perf_counter()
