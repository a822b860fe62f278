# -- Sum-of-Sines Wave Field -- #

'''
Animates grid vertex heights as a sum of travelling sine waves.

For every vertex with planar coordinates (x, z):

    y(x, z, t) = sum_j A_j * sin(k * (fx_j * x + fz_j * z) + c * t + phi_j)

where k = 2*pi / waveLength and c = waveSpeed. Heights are recomputed from
(x, z) each call, never accumulated, so the result depends only on the
time passed in. After the heights are written the smooth vertex normals
are recomputed from the unchanged triangle topology.

The evaluation is vectorized over vertices and components with numpy:
a (N, W) phase matrix is built once per call and reduced with a matrix
product against the amplitudes.
'''

from __future__ import annotations

import dataclasses
from typing import Optional, Sequence

import numpy as np

from OceanPlane.errors import RangeError, StateError
from OceanPlane.mesh.gridMesh import Mesh
from OceanPlane.mesh.normals import recalculateNormals
from OceanPlane.waves.waveComponent import (
    WaveComponent,
    WaveFieldConfig,
    initializeComponents,
    sampleCalmComponent,
    randomizeComponents,
    validateWaveCount,
)


class WaveField:
    '''
    Wave parameter set plus the per-frame displacement of a grid mesh.

    Parameters:
    -----------
    config : WaveFieldConfig
        Wave speed, wave length and component count
    components : Sequence[WaveComponent], optional
        Explicit components. Must have exactly config.waveCount entries.
        Calm-start components are sampled when omitted.
    seed : int, optional
        Seed for the internal numpy Generator (reproducible sampling)

    Examples:
    ---------
    >>> field = WaveField(WaveFieldConfig(waveCount=4), seed=7)
    >>> mesh = GridMeshBuilder().build((50.0, 50.0), 100)
    >>> field.apply(mesh, time=1.5)
    '''

    def __init__(
        self,
        config: Optional[WaveFieldConfig] = None,
        components: Optional[Sequence[WaveComponent]] = None,
        seed: Optional[int] = None,
    ) -> None:
        self._config = config if config is not None else WaveFieldConfig()
        self._rng = np.random.default_rng(seed)

        if components is None:
            self._components = initializeComponents(self._config.waveCount, self._rng)
        else:
            if len(components) != self._config.waveCount:
                raise RangeError(
                    f'Expected {self._config.waveCount} components, got {len(components)}'
                )
            self._components = list(components)

    ######################################################################
    # -- Properties -- #
    ######################################################################

    @property
    def config(self) -> WaveFieldConfig:
        return self._config

    @property
    def components(self) -> list[WaveComponent]:
        '''The live component list (mutated by randomize()).'''
        return self._components

    @property
    def waveCount(self) -> int:
        return self._config.waveCount

    @property
    def waveNumber(self) -> float:
        '''k = 2*pi / waveLength.'''
        return self._config.waveNumber

    ######################################################################
    # -- Parameter Policies -- #
    ######################################################################

    def initialize(self, waveCount: Optional[int] = None) -> list[WaveComponent]:
        '''
        Replace all components with a calm-start set.

        Parameters:
        -----------
        waveCount : int, optional
            New component count (defaults to the current one)

        Returns:
        --------
        list[WaveComponent] : The new component list
        '''
        if waveCount is None:
            waveCount = self._config.waveCount
        components = initializeComponents(waveCount, self._rng)

        self._config = dataclasses.replace(self._config, waveCount=len(components))
        self._components = components
        return components

    def randomize(self) -> list[WaveComponent]:
        '''Resample all components in place with the wide signed ranges.'''
        return randomizeComponents(self._components, self._rng)

    def resize(self, waveCount: int) -> list[WaveComponent]:
        '''
        Change the component count.

        Entries beyond the new count are discarded; missing entries are
        sampled with the calm-start policy. Existing entries are kept.

        Raises:
        -------
        RangeError : waveCount outside [2, 10]. Components are unchanged.
        '''
        waveCount = validateWaveCount(waveCount)

        kept = self._components[:waveCount]
        while len(kept) < waveCount:
            kept.append(sampleCalmComponent(self._rng))

        self._config = dataclasses.replace(self._config, waveCount=waveCount)
        self._components = kept
        return kept

    def setWaveSpeed(self, waveSpeed: float) -> None:
        self._config = dataclasses.replace(self._config, waveSpeed=waveSpeed)

    def setWaveLength(self, waveLength: float) -> None:
        self._config = dataclasses.replace(self._config, waveLength=waveLength)

    ######################################################################
    # -- Evaluation -- #
    ######################################################################

    def parameterArrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        '''
        Component parameters as arrays.

        Returns:
        --------
        tuple : (amplitudes, frequenciesX, frequenciesZ, phaseOffsets),
            each of shape (waveCount,)
        '''
        params = np.array(
            [[c.amplitude, c.frequencyX, c.frequencyZ, c.phaseOffset]
             for c in self._components],
            dtype=np.float64,
        ).reshape(-1, 4)
        return params[:, 0], params[:, 1], params[:, 2], params[:, 3]

    def heightAt(self, x, z, time: float):
        '''
        Evaluate the summed displacement at arbitrary planar points.

        Parameters:
        -----------
        x : float or np.ndarray
            X coordinates
        z : float or np.ndarray
            Z coordinates (broadcast against x)
        time : float
            Clock value [s]

        Returns:
        --------
        float or np.ndarray : Heights with the broadcast shape of (x, z)
        '''
        x, z = np.broadcast_arrays(np.asarray(x, dtype=np.float64),
                                   np.asarray(z, dtype=np.float64))
        heights = self._evaluate(x.reshape(-1), z.reshape(-1), time).reshape(x.shape)
        if heights.ndim == 0:
            return float(heights)
        return heights

    def apply(
        self,
        mesh: Mesh,
        time: float,
        expectedVertexCount: Optional[int] = None,
    ) -> Mesh:
        '''
        Displace the mesh heights for the given time and recompute normals.

        Only the Y column of the vertex buffer and the normal buffer are
        written; no buffer is reallocated.

        Parameters:
        -----------
        mesh : Mesh
            Grid mesh from GridMeshBuilder
        time : float
            Clock value [s]
        expectedVertexCount : int, optional
            Vertex count the caller expects from its last build

        Returns:
        --------
        Mesh : The same mesh, updated

        Raises:
        -------
        StateError : Buffers disagree with the mesh topology or with
            expectedVertexCount. Rebuild the mesh before retrying.
        '''
        self._checkBuffers(mesh, expectedVertexCount)

        vertices = mesh.vertices
        vertices[:, 1] = self._evaluate(vertices[:, 0], vertices[:, 2], time)
        recalculateNormals(vertices, mesh.triangles, out=mesh.normals)
        return mesh

    def _evaluate(self, x: np.ndarray, z: np.ndarray, time: float) -> np.ndarray:
        amplitudes, freqX, freqZ, offsets = self.parameterArrays()
        k = self._config.waveNumber

        # (N, W) phase matrix
        phase = k * (np.multiply.outer(x, freqX) + np.multiply.outer(z, freqZ))
        phase += self._config.waveSpeed * time + offsets

        return np.sin(phase) @ amplitudes

    @staticmethod
    def _checkBuffers(mesh: Mesh, expectedVertexCount: Optional[int]) -> None:
        vertices = mesh.vertices
        if vertices.ndim != 2 or vertices.shape[1] != 3:
            raise StateError(f'Vertex buffer must have shape (N, 3), got {vertices.shape}')

        nVertices = vertices.shape[0]
        if nVertices != mesh.spec.vertexCount:
            raise StateError(
                f'Mesh holds {nVertices} vertices but its grid defines '
                f'{mesh.spec.vertexCount}; rebuild the mesh'
            )
        if mesh.normals is None or mesh.normals.shape != vertices.shape:
            raise StateError(
                f'Normal buffer shape {getattr(mesh.normals, "shape", None)} '
                f'does not match vertex buffer {vertices.shape}'
            )
        if mesh.triangles.size and int(mesh.triangles.max()) >= nVertices:
            raise StateError('Triangle indices reference vertices beyond the buffer')
        if expectedVertexCount is not None and nVertices != expectedVertexCount:
            raise StateError(
                f'Expected {expectedVertexCount} vertices from the last build, '
                f'mesh has {nVertices}; rebuild the mesh'
            )
