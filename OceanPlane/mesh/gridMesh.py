# -- Grid Mesh Data Structures -- #

'''
Data structures for the procedurally generated grid surface.

GridSpec describes the plane to build; Mesh holds the resulting vertex,
triangle and normal buffers. Vertex heights and normals are mutated in
place by the wave field, while the vertex count and triangle list stay
fixed for the lifetime of a Mesh.
'''

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Optional

import numpy as np

try:
    import trimesh
except ImportError:
    trimesh = None

from OceanPlane.errors import ValidationError


######################################################################
# -- Grid Specification -- #
######################################################################

@dataclass(frozen=True)
class GridSpec:
    '''
    Planar size and subdivision count of a grid surface.

    Parameters:
    -----------
    width : float
        Plane extent along X (must be positive and finite)
    depth : float
        Plane extent along Z (must be positive and finite)
    resolution : int
        Subdivisions per side (>= 0). Vertices per side = resolution + 1.
    '''

    width: float
    depth: float
    resolution: int

    def __post_init__(self) -> None:
        for name, value in (('width', self.width), ('depth', self.depth)):
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValidationError(f'Plane {name} must be a real number, got {value!r}')
            if not math.isfinite(value):
                raise ValidationError(f'Plane {name} must be finite, got {value}')
            if value <= 0.0:
                raise ValidationError(f'Plane {name} must be positive, got {value}')
            object.__setattr__(self, name, float(value))

        object.__setattr__(self, 'resolution', _coerceResolution(self.resolution))

    @property
    def verticesPerSide(self) -> int:
        '''Number of vertices along each edge (resolution + 1).'''
        return self.resolution + 1

    @property
    def vertexCount(self) -> int:
        '''Total vertex count, (resolution + 1)^2 or 1 for the degenerate grid.'''
        return self.verticesPerSide * self.verticesPerSide

    @property
    def triangleCount(self) -> int:
        '''Two triangles per cell, resolution^2 cells.'''
        return 2 * self.resolution * self.resolution

    @property
    def step(self) -> tuple[float, float]:
        '''
        Vertex spacing (stepX, stepZ).

        The degenerate resolution-0 grid has a single vertex and
        therefore no spacing; (0.0, 0.0) is returned instead of dividing.
        '''
        if self.resolution == 0:
            return 0.0, 0.0
        return self.width / self.resolution, self.depth / self.resolution


def _coerceResolution(value) -> int:
    '''Validate a resolution value and return it as a plain int.'''
    if isinstance(value, bool):
        raise ValidationError(f'Resolution must be an integer, got {value!r}')
    if isinstance(value, numbers.Integral):
        resolution = int(value)
    elif isinstance(value, numbers.Real):
        if not math.isfinite(value) or not float(value).is_integer():
            raise ValidationError(f'Resolution must be a finite integer, got {value!r}')
        resolution = int(value)
    else:
        raise ValidationError(f'Resolution must be an integer, got {value!r}')

    if resolution < 0:
        raise ValidationError(f'Resolution must be >= 0, got {resolution}')
    return resolution


######################################################################
# -- Mesh -- #
######################################################################

@dataclass
class Mesh:
    '''
    Vertex, triangle and normal buffers of a grid surface.

    Vertices are stored row-major: index = row * (resolution + 1) + col,
    with rows running along Z and columns along X.

    Parameters:
    -----------
    spec : GridSpec
        Grid the mesh was built from
    vertices : np.ndarray
        Vertex positions, shape (N, 3), float64
    triangles : np.ndarray
        Triangle vertex indices, shape (T, 3), int64
    normals : np.ndarray
        Per-vertex unit normals, shape (N, 3), float64
    '''

    spec: GridSpec
    vertices: np.ndarray
    triangles: np.ndarray
    normals: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        if self.normals is None:
            self.normals = np.zeros_like(self.vertices)

    @property
    def nVertices(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def nTriangles(self) -> int:
        return int(self.triangles.shape[0])

    @property
    def triangleIndices(self) -> np.ndarray:
        '''Flat triangle index list of length 3 * nTriangles.'''
        return self.triangles.reshape(-1)

    @property
    def heights(self) -> np.ndarray:
        '''View of the vertex heights (Y column). Writes go to the mesh.'''
        return self.vertices[:, 1]

    def vertexIndex(self, row: int, col: int) -> int:
        '''
        Index of the vertex at (row, col).

        Parameters:
        -----------
        row : int
            Row along Z, in [0, resolution]
        col : int
            Column along X, in [0, resolution]

        Returns:
        --------
        int : row * (resolution + 1) + col
        '''
        n = self.spec.verticesPerSide
        if not (0 <= row < n and 0 <= col < n):
            raise IndexError(f'Vertex ({row}, {col}) outside a {n}x{n} grid')
        return row * n + col

    def heightGrid(self) -> np.ndarray:
        '''Vertex heights reshaped to (rows, cols).'''
        n = self.spec.verticesPerSide
        return self.vertices[:, 1].reshape(n, n)

    def copy(self) -> Mesh:
        '''Deep copy of all buffers.'''
        return Mesh(
            spec=self.spec,
            vertices=self.vertices.copy(),
            triangles=self.triangles.copy(),
            normals=self.normals.copy(),
        )

    def toTrimesh(self) -> trimesh.Trimesh:
        '''
        Convert to a trimesh.Trimesh sharing the current positions.

        Faces are passed through unchanged (no merging, no winding fixes)
        so vertex indices keep their grid meaning.

        Returns:
        --------
        trimesh.Trimesh : Triangulated surface with per-vertex normals
        '''
        if trimesh is None:
            raise ImportError(
                'trimesh is required for mesh conversion. '
                'Install with: pip install trimesh'
            )
        return trimesh.Trimesh(
            vertices=self.vertices.copy(),
            faces=self.triangles.copy(),
            vertex_normals=self.normals.copy(),
            process=False,
        )
