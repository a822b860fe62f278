# -- Surface Frame Exporter -- #

'''
Records animated surface frames and exports them as JSON.

Acts as a render sink: every submit() stores a copy of the vertex heights
(and optionally the normals). The planar layout and triangle list are
stored once per topology, since only heights change between rebuilds.

Output JSON format:
{
    "meta": { "type": "oceanPlane", "nFrames": 120, "created": "...", ... },
    "config": { "plane": {...}, "waves": {...}, "random": {...} },
    "components": [ { "amplitude": ..., ... }, ... ],
    "topologies": [
        { "planar": [[x0, z0], ...], "triangles": [[i, j, k], ...] }
    ],
    "frames": [
        { "index": 0, "time": 0.0, "topology": 0,
          "heights": [y0, y1, ...], "normals": [[nx, ny, nz], ...] },
        ...
    ]
}
'''

from __future__ import annotations

import json
import os
from datetime import datetime
from typing import Optional, Sequence

import numpy as np

from OceanPlane.protocols import ClockSource, SurfaceConfig
from OceanPlane.waves.waveComponent import WaveComponent


class FrameExporter:
    '''
    Collects surface frames and writes them to a JSON file.

    Usage:
        exporter = FrameExporter(clock)
        controller = SurfaceController(config, sinks=[exporter])
        # ... run ticks ...
        exporter.export(config, outputDir='output')

    Parameters:
    -----------
    clock : ClockSource, optional
        Time source stamped onto each frame (frames carry time None
        without one)
    includeNormals : bool
        Also record per-vertex normals (larger files)
    precision : int
        Decimal places kept for heights and normals
    '''

    def __init__(
        self,
        clock: Optional[ClockSource] = None,
        includeNormals: bool = False,
        precision: int = 5,
    ) -> None:
        self._clock = clock
        self._includeNormals = includeNormals
        self._precision = precision

        self._frames: list[dict] = []
        self._topologies: list[dict] = []
        self._lastTriangles: Optional[np.ndarray] = None
        self._lastPlanar: Optional[np.ndarray] = None

    @property
    def nFrames(self) -> int:
        '''Number of collected frames.'''
        return len(self._frames)

    @property
    def frames(self) -> list[dict]:
        return self._frames

    @property
    def topologies(self) -> list[dict]:
        return self._topologies

    def submit(
        self,
        vertices: np.ndarray,
        triangles: np.ndarray,
        normals: np.ndarray,
    ) -> None:
        '''
        Record a frame.

        Parameters:
        -----------
        vertices : np.ndarray
            Vertex positions, shape (N, 3)
        triangles : np.ndarray
            Triangle indices, shape (T, 3)
        normals : np.ndarray
            Vertex normals, shape (N, 3)
        '''
        planar = vertices[:, [0, 2]]
        if self._isNewTopology(planar, triangles):
            self._lastPlanar = planar.copy()
            self._lastTriangles = triangles.copy()
            self._topologies.append({
                'planar': np.round(planar, self._precision).tolist(),
                'triangles': triangles.tolist(),
            })

        time = None if self._clock is None else round(float(self._clock.now()), 6)
        frame = {
            'index': len(self._frames),
            'time': time,
            'topology': len(self._topologies) - 1,
            'heights': np.round(vertices[:, 1], self._precision).tolist(),
        }
        if self._includeNormals:
            frame['normals'] = np.round(normals, self._precision).tolist()

        self._frames.append(frame)

    def heightFrames(self) -> list[np.ndarray]:
        '''Recorded heights as numpy arrays, one per frame.'''
        return [np.asarray(frame['heights'], dtype=np.float64) for frame in self._frames]

    def clear(self) -> None:
        self._frames.clear()
        self._topologies.clear()
        self._lastPlanar = None
        self._lastTriangles = None

    def export(
        self,
        config: SurfaceConfig,
        outputDir: str = 'output',
        scenarioName: str = 'surface',
        components: Optional[Sequence[WaveComponent]] = None,
    ) -> str:
        '''
        Write all collected frames to a JSON file.

        Parameters:
        -----------
        config : SurfaceConfig
            Surface configuration for metadata
        outputDir : str
            Output directory path
        scenarioName : str
            Scenario name for the filename
        components : Sequence[WaveComponent], optional
            Wave components in effect during the recording

        Returns:
        --------
        str : Path to the exported JSON file
        '''
        if not self._frames:
            raise ValueError('No frames recorded; nothing to export')

        os.makedirs(outputDir, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        filename = f'oceanPlane_{scenarioName}_{timestamp}.json'
        filepath = os.path.join(outputDir, filename)

        output = {
            'meta': {
                'type': 'oceanPlane',
                'nFrames': len(self._frames),
                'nTopologies': len(self._topologies),
                'nVertices': len(self._frames[-1]['heights']),
                'includesNormals': self._includeNormals,
                'created': datetime.now().isoformat(),
            },
            'config': config.toDict(),
            'components': [c.toDict() for c in components] if components is not None else [],
            'topologies': self._topologies,
            'frames': self._frames,
        }

        with open(filepath, 'w') as f:
            json.dump(output, f, indent=None, separators=(',', ':'))

        return filepath

    def _isNewTopology(self, planar: np.ndarray, triangles: np.ndarray) -> bool:
        if self._lastTriangles is None:
            return True
        if triangles.shape != self._lastTriangles.shape or planar.shape != self._lastPlanar.shape:
            return True
        return not (np.array_equal(triangles, self._lastTriangles)
                    and np.array_equal(planar, self._lastPlanar))
