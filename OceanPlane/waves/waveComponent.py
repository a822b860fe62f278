# -- Wave Component Parameters -- #

'''
Sinusoidal wave components and the wave field configuration.

A wave component is one travelling sine term:

    amplitude * sin(k * (frequencyX * x + frequencyZ * z) + waveSpeed * t + phaseOffset)

Two sampling policies produce component lists:

    initializeComponents : "calm start", small positive amplitudes and
                           frequencies
    randomizeComponents  : wide signed ranges; negative amplitudes or
                           frequencies invert a component's phase or
                           travel direction
'''

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Optional

import numpy as np

from OceanPlane import constants as const
from OceanPlane.errors import RangeError, ValidationError


######################################################################
# -- Wave Component -- #
######################################################################

@dataclass
class WaveComponent:
    '''
    One sinusoidal term of the surface displacement.

    Parameters:
    -----------
    amplitude : float
        Peak height contribution
    frequencyX : float
        Spatial frequency multiplier along X
    frequencyZ : float
        Spatial frequency multiplier along Z
    phaseOffset : float
        Constant phase shift [rad]
    '''

    amplitude: float
    frequencyX: float
    frequencyZ: float
    phaseOffset: float

    def toDict(self) -> dict:
        return {
            'amplitude': self.amplitude,
            'frequencyX': self.frequencyX,
            'frequencyZ': self.frequencyZ,
            'phaseOffset': self.phaseOffset,
        }

    @classmethod
    def fromDict(cls, data: dict) -> WaveComponent:
        return cls(
            amplitude=float(data['amplitude']),
            frequencyX=float(data['frequencyX']),
            frequencyZ=float(data['frequencyZ']),
            phaseOffset=float(data['phaseOffset']),
        )


######################################################################
# -- Wave Field Configuration -- #
######################################################################

@dataclass(frozen=True)
class WaveFieldConfig:
    '''
    Global wave field settings shared by all components.

    Parameters:
    -----------
    waveSpeed : float
        Temporal phase rate [rad/s]
    waveLength : float
        Spatial wavelength; wave number k = 2*pi / waveLength
    waveCount : int
        Number of summed components, in [2, 10]
    '''

    waveSpeed: float = const.defaultWaveSpeed
    waveLength: float = const.defaultWaveLength
    waveCount: int = const.defaultWaveCount

    def __post_init__(self) -> None:
        for name, value in (('waveSpeed', self.waveSpeed), ('waveLength', self.waveLength)):
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValidationError(f'{name} must be a real number, got {value!r}')
        if not math.isfinite(self.waveSpeed):
            raise ValidationError(f'waveSpeed must be finite, got {self.waveSpeed}')
        if not math.isfinite(self.waveLength) or self.waveLength == 0.0:
            raise ValidationError(
                f'waveLength must be finite and non-zero, got {self.waveLength}'
            )
        validateWaveCount(self.waveCount)

    @property
    def waveNumber(self) -> float:
        '''Wave number k = 2*pi / waveLength [rad per unit length].'''
        return 2.0 * math.pi / self.waveLength


def validateWaveCount(waveCount) -> int:
    '''
    Check that a wave count is an integer in [minWaveCount, maxWaveCount].

    Returns:
    --------
    int : The wave count as a plain int

    Raises:
    -------
    RangeError : waveCount is not an integer or lies outside the range
    '''
    if isinstance(waveCount, bool) or not isinstance(waveCount, numbers.Integral):
        raise RangeError(f'waveCount must be an integer, got {waveCount!r}')
    if not const.minWaveCount <= waveCount <= const.maxWaveCount:
        raise RangeError(
            f'waveCount must be in [{const.minWaveCount}, {const.maxWaveCount}], '
            f'got {waveCount}'
        )
    return int(waveCount)


######################################################################
# -- Sampling Policies -- #
######################################################################

def sampleCalmComponent(rng: np.random.Generator) -> WaveComponent:
    '''Draw a single component from the calm-start ranges.'''
    return WaveComponent(
        amplitude=float(rng.uniform(*const.calmAmplitudeRange)),
        frequencyX=float(rng.uniform(*const.calmFrequencyRange)),
        frequencyZ=float(rng.uniform(*const.calmFrequencyRange)),
        phaseOffset=float(rng.uniform(*const.phaseOffsetRange)),
    )


def initializeComponents(
    waveCount: int,
    rng: Optional[np.random.Generator] = None,
) -> list[WaveComponent]:
    '''
    Calm-start component list.

    amplitude in [0.1, 0.5], frequencyX and frequencyZ in [0.2, 0.8],
    phaseOffset in [0, 2*pi).

    Parameters:
    -----------
    waveCount : int
        Number of components, in [2, 10]
    rng : np.random.Generator, optional
        Random source (fresh OS-seeded generator when omitted)

    Returns:
    --------
    list[WaveComponent] : waveCount new components
    '''
    waveCount = validateWaveCount(waveCount)
    if rng is None:
        rng = np.random.default_rng()

    return [sampleCalmComponent(rng) for _ in range(waveCount)]


def randomizeComponents(
    components: list[WaveComponent],
    rng: Optional[np.random.Generator] = None,
) -> list[WaveComponent]:
    '''
    Resample every component in place with the wide signed ranges.

    amplitude, frequencyX and frequencyZ in [-1, 1], phaseOffset in
    [0, 2*pi). The list object and its length are preserved.

    Parameters:
    -----------
    components : list[WaveComponent]
        Components to overwrite
    rng : np.random.Generator, optional
        Random source

    Returns:
    --------
    list[WaveComponent] : The same list, resampled
    '''
    if rng is None:
        rng = np.random.default_rng()

    for component in components:
        component.amplitude = float(rng.uniform(*const.randomAmplitudeRange))
        component.frequencyX = float(rng.uniform(*const.randomFrequencyRange))
        component.frequencyZ = float(rng.uniform(*const.randomFrequencyRange))
        component.phaseOffset = float(rng.uniform(*const.phaseOffsetRange))

    return components
