# -- OceanPlane Package -- #

'''
Procedural water surface: a regular grid mesh displaced by a sum of
travelling sine waves, with smooth normals recomputed every frame.

Core:
    - mesh: GridMeshBuilder, GridSpec, Mesh, recalculateNormals
    - waves: WaveField, WaveComponent, WaveFieldConfig

Driver and collaborators:
    - controller: SurfaceController (animation toggle, editor commands)
    - clock: FixedStepClock, WallClock
    - export: FrameExporter (JSON), StlExporter (trimesh)
    - visualization: Plotly surface plots
'''

__version__ = '0.1.0'

from OceanPlane.errors import OceanPlaneError, ValidationError, RangeError, StateError
from OceanPlane.mesh.gridMesh import GridSpec, Mesh
from OceanPlane.mesh.gridMeshBuilder import GridMeshBuilder
from OceanPlane.waves.waveComponent import WaveComponent, WaveFieldConfig
from OceanPlane.waves.waveField import WaveField
from OceanPlane.protocols import SurfaceConfig
from OceanPlane.controller import SurfaceController, AnimationState
