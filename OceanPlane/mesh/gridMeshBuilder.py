# -- Procedural Grid Mesh Builder -- #

'''
Builds a flat rectangular grid mesh in the XZ plane.

The algorithm:
  1. Compute the vertex spacing stepX = width / resolution,
     stepZ = depth / resolution
  2. Emit (resolution + 1)^2 vertices row by row: row r runs along Z,
     column c along X, vertex = (c * stepX, 0, r * stepZ)
  3. Split every cell into two triangles sharing the cell diagonal,
     with one consistent winding so adjacent quads never flip
  4. Initialize the smooth per-vertex normals (all +Y for a flat grid)

A resolution of 0 is the degenerate grid: a single vertex at the origin
and no triangles.

Building is a pure function of (size, resolution). Clamping the
resolution to a policy ceiling is the caller's job.
'''

from __future__ import annotations

from typing import Sequence

import numpy as np

from OceanPlane.errors import ValidationError
from OceanPlane.mesh.gridMesh import GridSpec, Mesh
from OceanPlane.mesh.normals import recalculateNormals


######################################################################
# -- Resolution Presets -- #
######################################################################

RESOLUTION_PRESETS = {
    'draft': 50,
    'standard': 150,
    'high': 250,
}


class GridMeshBuilder:
    '''
    Generates regular grid meshes of quads split into triangle pairs.

    For the cell at (row, col) with i = row * (resolution + 1) + col the
    builder emits the triangles

        (i, i + resolution + 1, i + resolution + 2)
        (i, i + resolution + 2, i + 1)

    Examples:
    ---------
    >>> builder = GridMeshBuilder()
    >>> mesh = builder.build((4.0, 4.0), 4)
    >>> mesh.nVertices, mesh.nTriangles
    (25, 32)
    '''

    @staticmethod
    def presetResolution(preset: str) -> int:
        '''
        Look up a named resolution preset.

        Parameters:
        -----------
        preset : str
            Preset name: 'draft', 'standard', or 'high'

        Returns:
        --------
        int : Subdivisions per side
        '''
        if preset not in RESOLUTION_PRESETS:
            raise ValueError(
                f'Unknown preset \'{preset}\'. '
                f'Available: {list(RESOLUTION_PRESETS.keys())}'
            )
        return RESOLUTION_PRESETS[preset]

    def build(self, size: Sequence[float], resolution: int) -> Mesh:
        '''
        Build a grid mesh from a planar size and resolution.

        Parameters:
        -----------
        size : Sequence[float]
            (width, depth) extent along X and Z
        resolution : int
            Subdivisions per side (>= 0)

        Returns:
        --------
        Mesh : Newly allocated grid mesh

        Raises:
        -------
        ValidationError : size is negative, zero or non-finite, or the
            resolution is negative or not an integer
        '''
        try:
            width, depth = size
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f'Plane size must be a (width, depth) pair, got {size!r}'
            ) from exc

        return self.buildFromSpec(GridSpec(width, depth, resolution))

    def buildFromSpec(self, spec: GridSpec) -> Mesh:
        '''
        Build a grid mesh from a validated GridSpec.

        Parameters:
        -----------
        spec : GridSpec
            Plane size and resolution

        Returns:
        --------
        Mesh : Newly allocated grid mesh
        '''
        vertices = self._buildVertices(spec)
        triangles = self._buildTriangles(spec.resolution)
        normals = recalculateNormals(vertices, triangles)
        return Mesh(spec=spec, vertices=vertices, triangles=triangles, normals=normals)

    def buildPreset(self, size: Sequence[float], preset: str = 'standard') -> Mesh:
        '''Build a grid mesh using a named resolution preset.'''
        return self.build(size, self.presetResolution(preset))

    ######################################################################
    # -- Topology -- #
    ######################################################################

    def _buildVertices(self, spec: GridSpec) -> np.ndarray:
        '''
        Row-major vertex positions.

        Returns:
        --------
        np.ndarray : shape ((resolution + 1)^2, 3)
        '''
        n = spec.verticesPerSide
        stepX, stepZ = spec.step

        columns = np.arange(n, dtype=np.float64) * stepX
        rows = np.arange(n, dtype=np.float64) * stepZ

        vertices = np.zeros((n * n, 3), dtype=np.float64)
        # Column index varies fastest
        vertices[:, 0] = np.tile(columns, n)
        vertices[:, 2] = np.repeat(rows, n)
        return vertices

    def _buildTriangles(self, resolution: int) -> np.ndarray:
        '''
        Two triangles per cell, cells ordered row by row.

        Returns:
        --------
        np.ndarray : shape (2 * resolution^2, 3), int64
        '''
        if resolution == 0:
            return np.zeros((0, 3), dtype=np.int64)

        n = resolution + 1
        cellRows = np.arange(resolution, dtype=np.int64)[:, np.newaxis]
        cellCols = np.arange(resolution, dtype=np.int64)[np.newaxis, :]
        i = (cellRows * n + cellCols).ravel()

        triangles = np.empty((2 * i.size, 3), dtype=np.int64)

        # First triangle: corner, next row, next row + 1
        triangles[0::2, 0] = i
        triangles[0::2, 1] = i + n
        triangles[0::2, 2] = i + n + 1

        # Second triangle: corner, next row + 1, next column
        triangles[1::2, 0] = i
        triangles[1::2, 1] = i + n + 1
        triangles[1::2, 2] = i + 1

        return triangles
