# -- Water Surface Controller -- #

'''
Driver that owns one grid mesh and one wave parameter set.

Replaces the engine component lifecycle with an explicit loop:

    controller = SurfaceController(config, sinks=[exporter])
    controller.start()                 # build once, push to sinks
    controller.toggleWaves()           # Static -> Animating
    while running:
        controller.tick(clock.now())   # apply waves, push to sinks

Editor-style commands (reset, toggleWaves, randomizeParameters) and
configuration setters are dispatched between ticks. Topology changes
(size, resolution) rebuild the mesh immediately; a failed build leaves
the previous mesh and configuration in place and pushes nothing.
'''

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Iterable, Optional

from OceanPlane.errors import StateError
from OceanPlane.mesh.gridMesh import GridSpec, Mesh
from OceanPlane.mesh.gridMeshBuilder import GridMeshBuilder
from OceanPlane.protocols import RenderSink, SurfaceConfig, clampResolution
from OceanPlane.waves.waveComponent import WaveComponent
from OceanPlane.waves.waveField import WaveField


class AnimationState(Enum):
    '''Wave animation toggle.'''
    STATIC = 'static'
    ANIMATING = 'animating'


class SurfaceController:
    '''
    Owns the mesh, the wave field and the animation state of one surface.

    Parameters:
    -----------
    config : SurfaceConfig, optional
        Plane and wave settings (defaults to SurfaceConfig())
    sinks : Iterable[RenderSink], optional
        Consumers receiving the buffers after every build and tick
    builder : GridMeshBuilder, optional
        Mesh builder (a default instance when omitted)
    '''

    def __init__(
        self,
        config: Optional[SurfaceConfig] = None,
        sinks: Optional[Iterable[RenderSink]] = None,
        builder: Optional[GridMeshBuilder] = None,
    ) -> None:
        # Private copy; the caller's object is never written
        self._config = dataclasses.replace(config) if config is not None else SurfaceConfig()
        self._config.resolution = clampResolution(self._config.resolution)

        self._builder = builder if builder is not None else GridMeshBuilder()
        self._waveField = WaveField(self._config.waveFieldConfig(), seed=self._config.seed)
        self._sinks: list[RenderSink] = list(sinks) if sinks is not None else []

        self._state = AnimationState.STATIC
        self._mesh: Optional[Mesh] = None
        self._expectedVertexCount: Optional[int] = None

    ######################################################################
    # -- Properties -- #
    ######################################################################

    @property
    def config(self) -> SurfaceConfig:
        '''
        Snapshot of the current settings.

        A new SurfaceConfig is returned on every access; editing it has no
        effect on the controller. Use the setters to change settings.
        '''
        waves = self._waveField.config
        return dataclasses.replace(
            self._config,
            waveSpeed=waves.waveSpeed,
            waveLength=waves.waveLength,
            waveCount=waves.waveCount,
        )

    @property
    def mesh(self) -> Optional[Mesh]:
        '''Current mesh (None before start()). Replaced on every rebuild.'''
        return self._mesh

    @property
    def waveField(self) -> WaveField:
        return self._waveField

    @property
    def components(self) -> list[WaveComponent]:
        return self._waveField.components

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def isAnimating(self) -> bool:
        return self._state is AnimationState.ANIMATING

    @property
    def sinks(self) -> list[RenderSink]:
        return self._sinks

    def addSink(self, sink: RenderSink) -> None:
        self._sinks.append(sink)

    ######################################################################
    # -- Lifecycle -- #
    ######################################################################

    def start(self) -> Mesh:
        '''
        Build the initial mesh and push it to the sinks.

        Returns:
        --------
        Mesh : The freshly built mesh
        '''
        self._rebuild(self._config.planeWidth, self._config.planeDepth,
                      self._config.resolution)
        return self._mesh

    def tick(self, time: float) -> bool:
        '''
        Advance one frame.

        Parameters:
        -----------
        time : float
            Current clock value [s]

        Returns:
        --------
        bool : True if the surface was updated and pushed
        '''
        if not self.isAnimating:
            return False
        if self._mesh is None:
            raise StateError('No mesh built; call start() before tick()')

        self._waveField.apply(self._mesh, time, self._expectedVertexCount)
        self._push()
        return True

    ######################################################################
    # -- Commands -- #
    ######################################################################

    def reset(self) -> Mesh:
        '''Stop animating, rebuild the flat mesh and push it.'''
        self._state = AnimationState.STATIC
        return self.start()

    def toggleWaves(self) -> AnimationState:
        '''Flip between Static and Animating.'''
        if self.isAnimating:
            self._state = AnimationState.STATIC
        else:
            self._state = AnimationState.ANIMATING
        return self._state

    def setAnimating(self, animating: bool) -> None:
        self._state = AnimationState.ANIMATING if animating else AnimationState.STATIC

    def randomizeParameters(self) -> list[WaveComponent]:
        '''
        Resample the wave components with the wide signed ranges, then
        rebuild the mesh and push it.

        Returns:
        --------
        list[WaveComponent] : The resampled components
        '''
        components = self._waveField.randomize()
        self.start()
        return components

    ######################################################################
    # -- Configuration Surface -- #
    ######################################################################

    def setPlaneSize(self, width: float, depth: float) -> Mesh:
        '''Change the plane extent and rebuild.'''
        return self._rebuild(width, depth, self._config.resolution)

    def setResolution(self, resolution: int) -> Mesh:
        '''Change the subdivision count (clamped to [0, 250]) and rebuild.'''
        return self._rebuild(self._config.planeWidth, self._config.planeDepth, resolution)

    def setWaveSpeed(self, waveSpeed: float) -> None:
        self._waveField.setWaveSpeed(waveSpeed)

    def setWaveLength(self, waveLength: float) -> None:
        '''
        Raises:
        -------
        ValidationError : waveLength is zero or non-finite
        '''
        self._waveField.setWaveLength(waveLength)

    def setWaveCount(self, waveCount: int) -> list[WaveComponent]:
        '''
        Resize the component list.

        Raises:
        -------
        RangeError : waveCount outside [2, 10]; components are unchanged
        '''
        return self._waveField.resize(waveCount)

    ######################################################################
    # -- Internals -- #
    ######################################################################

    def _rebuild(self, width: float, depth: float, resolution: int) -> Mesh:
        # Clamped on every build path; GridSpec validation raises before
        # any state is touched
        spec = GridSpec(width, depth, clampResolution(resolution))
        mesh = self._builder.buildFromSpec(spec)

        self._mesh = mesh
        self._expectedVertexCount = mesh.nVertices
        self._config.planeWidth = spec.width
        self._config.planeDepth = spec.depth
        self._config.resolution = spec.resolution

        self._push()
        return mesh

    def _push(self) -> None:
        mesh = self._mesh
        for sink in self._sinks:
            sink.submit(mesh.vertices, mesh.triangles, mesh.normals)
