# -- Surface Configuration and Collaborator Protocols -- #

'''
Configuration dataclass and the protocols of the external collaborators.

Defines the SurfaceConfig consumed by the controller and runner, plus the
RenderSink and ClockSource protocols that output consumers and time
sources must satisfy.
'''

from __future__ import annotations

import json
import math
import numbers
from dataclasses import dataclass
from typing import Optional, Protocol

import numpy as np

from OceanPlane import constants as const
from OceanPlane.errors import ValidationError
from OceanPlane.waves.waveComponent import WaveFieldConfig


######################################################################
# -- Surface Configuration -- #
######################################################################

@dataclass
class SurfaceConfig:
    '''
    Configuration surface of one animated water plane.

    Parameters:
    -----------
    planeWidth : float
        Plane extent along X
    planeDepth : float
        Plane extent along Z
    resolution : int
        Subdivisions per side (clamped to [0, 250] before building)
    waveSpeed : float
        Temporal phase rate [rad/s]
    waveLength : float
        Spatial wavelength
    waveCount : int
        Number of sine components, in [2, 10]
    seed : int, optional
        Seed for wave parameter sampling (None = OS entropy)
    '''

    planeWidth: float = const.defaultPlaneWidth
    planeDepth: float = const.defaultPlaneDepth
    resolution: int = const.defaultResolution
    waveSpeed: float = const.defaultWaveSpeed
    waveLength: float = const.defaultWaveLength
    waveCount: int = const.defaultWaveCount
    seed: Optional[int] = None

    @property
    def planeSize(self) -> tuple[float, float]:
        '''(width, depth) pair.'''
        return self.planeWidth, self.planeDepth

    @property
    def clampedResolution(self) -> int:
        '''Resolution after the [0, 250] policy clamp.'''
        return clampResolution(self.resolution)

    def waveFieldConfig(self) -> WaveFieldConfig:
        '''
        Wave settings as a validated WaveFieldConfig.

        Raises:
        -------
        ValidationError : waveLength is zero or non-finite
        RangeError : waveCount outside [2, 10]
        '''
        return WaveFieldConfig(
            waveSpeed=self.waveSpeed,
            waveLength=self.waveLength,
            waveCount=self.waveCount,
        )

    def toDict(self) -> dict:
        '''Nested dict in the JSON configuration layout.'''
        return {
            'plane': {
                'width': self.planeWidth,
                'depth': self.planeDepth,
                'resolution': self.resolution,
            },
            'waves': {
                'speed': self.waveSpeed,
                'length': self.waveLength,
                'count': self.waveCount,
            },
            'random': {
                'seed': self.seed,
            },
        }

    @classmethod
    def fromDict(cls, data: dict) -> SurfaceConfig:
        '''
        Build a configuration from the nested JSON layout.

        Missing sections or keys fall back to the defaults.

        Parameters:
        -----------
        data : dict
            Parsed configuration with optional 'plane', 'waves' and
            'random' sections

        Returns:
        --------
        SurfaceConfig : Loaded configuration
        '''
        if not isinstance(data, dict):
            raise ValidationError(f'Configuration must be a JSON object, got {type(data).__name__}')

        planeSection = data.get('plane', {})
        waveSection = data.get('waves', {})
        randomSection = data.get('random', {})

        try:
            seed = randomSection.get('seed', None)
            return cls(
                planeWidth=float(planeSection.get('width', const.defaultPlaneWidth)),
                planeDepth=float(planeSection.get('depth', const.defaultPlaneDepth)),
                resolution=_toInt(planeSection.get('resolution', const.defaultResolution)),
                waveSpeed=float(waveSection.get('speed', const.defaultWaveSpeed)),
                waveLength=float(waveSection.get('length', const.defaultWaveLength)),
                waveCount=_toInt(waveSection.get('count', const.defaultWaveCount)),
                seed=None if seed is None else _toInt(seed),
            )
        except (AttributeError, TypeError, ValueError) as exc:
            raise ValidationError(f'Malformed configuration: {exc}') from exc

    @classmethod
    def fromJson(cls, configPath: str) -> SurfaceConfig:
        '''
        Load configuration from a JSON file.

        Parameters:
        -----------
        configPath : str
            Path to the JSON configuration file

        Returns:
        --------
        SurfaceConfig : Loaded configuration
        '''
        with open(configPath, 'r') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise ValidationError(f'Invalid JSON in {configPath}: {exc}') from exc
        return cls.fromDict(data)

    @classmethod
    def calm(cls) -> SurfaceConfig:
        '''
        Defaults of the original water plane.
        50 x 50 plane at resolution 250, four gentle components.
        '''
        return cls()

    @classmethod
    def choppy(cls) -> SurfaceConfig:
        '''
        Faster, shorter waves with more components.
        Pair with randomizeParameters() for a rough sea.
        '''
        return cls(waveSpeed=2.5, waveLength=2.5, waveCount=8)

    @classmethod
    def preview(cls) -> SurfaceConfig:
        '''
        Small, coarse plane for quick runs and plots.
        ~1,300 vertices, renders instantly in Plotly.
        '''
        return cls(planeWidth=20.0, planeDepth=20.0, resolution=35)


def clampResolution(resolution):
    '''
    Apply the [minResolution, maxResolution] policy clamp.

    Non-numeric values are returned unchanged so the mesh builder can
    reject them with a ValidationError.
    '''
    if isinstance(resolution, bool) or not isinstance(resolution, numbers.Real):
        return resolution
    if isinstance(resolution, float) and math.isnan(resolution):
        return resolution
    return max(const.minResolution, min(const.maxResolution, resolution))


def _toInt(value) -> int:
    if isinstance(value, bool):
        raise TypeError(f'expected an integer, got {value!r}')
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f'expected an integer, got {value!r}')
    return int(value)


######################################################################
# -- Collaborator Protocols -- #
######################################################################

class RenderSink(Protocol):
    '''
    Consumer of the surface buffers (renderer, exporter, plotter).

    Receives the buffers after every build and every animated tick.
    The push is one-directional: sinks report nothing back and must
    copy any data they keep, since buffers are mutated in place on the
    next tick and replaced on the next rebuild.
    '''

    def submit(
        self,
        vertices: np.ndarray,
        triangles: np.ndarray,
        normals: np.ndarray,
    ) -> None:
        '''Accept vertex (N, 3), triangle (T, 3) and normal (N, 3) arrays.'''
        ...


class ClockSource(Protocol):
    '''Monotonically non-decreasing elapsed-time source.'''

    def now(self) -> float:
        '''Elapsed time in seconds.'''
        ...
