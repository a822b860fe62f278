# -- Clock Source Tests -- #

import math

import pytest

from OceanPlane.clock import FixedStepClock, WallClock
from OceanPlane.errors import ValidationError


def testFixedStepAdvance():
    clock = FixedStepClock(dt=0.25, start=1.0)
    assert clock.now() == 1.0
    assert clock.advance() == 1.25
    assert clock.advance() == 1.5
    assert clock.steps == 2


def testFixedStepDoesNotDrift():
    clock = FixedStepClock.fromFps(30.0)
    for _ in range(3000):
        clock.advance()
    assert clock.now() == pytest.approx(100.0, abs=1e-12)


def testFixedStepReset():
    clock = FixedStepClock(dt=0.1)
    clock.advance()
    clock.reset()
    assert clock.now() == 0.0
    assert clock.steps == 0


@pytest.mark.parametrize('dt', [-0.1, math.inf, math.nan])
def testInvalidStep(dt):
    with pytest.raises(ValidationError):
        FixedStepClock(dt=dt)


@pytest.mark.parametrize('fps', [0.0, -30.0, math.inf])
def testInvalidFrameRate(fps):
    with pytest.raises(ValidationError):
        FixedStepClock.fromFps(fps)


def testWallClockNonDecreasing():
    clock = WallClock()
    a = clock.now()
    b = clock.now()
    assert 0.0 <= a <= b
    clock.reset()
    assert clock.now() >= 0.0
