# -- STL Snapshot Exporter -- #

'''
Render sink that keeps the latest surface and writes it as an STL file.

Uses trimesh for the STL encoding. Faces are exported exactly as built
(no vertex merging or winding repair) so the file mirrors the grid.
'''

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np

try:
    import trimesh
except ImportError:
    trimesh = None

from OceanPlane.mesh.gridMesh import Mesh


class StlExporter:
    '''
    Exports the most recently submitted surface as STL.

    Examples:
    ---------
    >>> exporter = StlExporter()
    >>> controller = SurfaceController(config, sinks=[exporter])
    >>> controller.start()
    >>> exporter.export('output/surface.stl')
    '''

    def __init__(self) -> None:
        if trimesh is None:
            raise ImportError(
                'trimesh is required for STL export. '
                'Install with: pip install trimesh'
            )
        self._vertices: Optional[np.ndarray] = None
        self._triangles: Optional[np.ndarray] = None
        self._normals: Optional[np.ndarray] = None
        self._nSubmits = 0

    @property
    def hasSurface(self) -> bool:
        return self._vertices is not None

    @property
    def nSubmits(self) -> int:
        '''Number of submit() calls received.'''
        return self._nSubmits

    def submit(
        self,
        vertices: np.ndarray,
        triangles: np.ndarray,
        normals: np.ndarray,
    ) -> None:
        '''Keep a copy of the latest buffers.'''
        self._vertices = vertices.copy()
        self._triangles = triangles.copy()
        self._normals = normals.copy()
        self._nSubmits += 1

    def toTrimesh(self) -> trimesh.Trimesh:
        '''The latest surface as an unprocessed trimesh.Trimesh.'''
        if not self.hasSurface:
            raise ValueError('No surface submitted; nothing to export')
        return trimesh.Trimesh(
            vertices=self._vertices,
            faces=self._triangles,
            vertex_normals=self._normals,
            process=False,
        )

    def export(self, filePath: str, binary: bool = True) -> str:
        '''
        Write the latest surface to an STL file.

        Parameters:
        -----------
        filePath : str
            Output file path (should end in .stl)
        binary : bool
            If True, write binary STL (smaller). If False, write ASCII STL.

        Returns:
        --------
        str : Path to the exported STL file
        '''
        surface = self.toTrimesh()
        if len(surface.faces) == 0:
            raise ValueError('Surface has no triangles; STL needs at least one face')

        outPath = Path(filePath)
        outPath.parent.mkdir(parents=True, exist_ok=True)

        fileType = 'stl' if binary else 'stl_ascii'
        surface.export(str(outPath), file_type=fileType)

        print(f'Exported {outPath.name}: '
              f'{len(surface.vertices)} vertices, '
              f'{len(surface.faces)} faces')

        return str(outPath)

    @staticmethod
    def exportMesh(mesh: Mesh, filePath: str, binary: bool = True) -> str:
        '''Export a Mesh directly, without going through submit().'''
        exporter = StlExporter()
        exporter.submit(mesh.vertices, mesh.triangles, mesh.normals)
        return exporter.export(filePath, binary=binary)
