# -- Vertex Normal Recalculation -- #

'''
Smooth per-vertex normals by face-normal accumulation.

Each triangle's unnormalized face normal (v1 - v0) x (v2 - v0) is added to
its three vertices, so larger triangles weigh more. The accumulated vectors
are then normalized. Vertices with no incident triangle get the up vector.
'''

from __future__ import annotations

from typing import Optional

import numpy as np

from OceanPlane import constants as const


def faceNormals(vertices: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    '''
    Unnormalized (area-weighted) face normals.

    Parameters:
    -----------
    vertices : np.ndarray
        Vertex positions, shape (N, 3)
    triangles : np.ndarray
        Triangle indices, shape (T, 3)

    Returns:
    --------
    np.ndarray : Face normals, shape (T, 3). Length = 2 * triangle area.
    '''
    v0 = vertices[triangles[:, 0]]
    v1 = vertices[triangles[:, 1]]
    v2 = vertices[triangles[:, 2]]
    return np.cross(v1 - v0, v2 - v0)


def recalculateNormals(
    vertices: np.ndarray,
    triangles: np.ndarray,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    '''
    Recompute smooth per-vertex normals from the triangle topology.

    Parameters:
    -----------
    vertices : np.ndarray
        Vertex positions, shape (N, 3)
    triangles : np.ndarray
        Triangle indices, shape (T, 3)
    out : np.ndarray, optional
        Buffer of shape (N, 3) to write into. A new array is allocated
        when omitted.

    Returns:
    --------
    np.ndarray : Unit normals, shape (N, 3) (``out`` when given)
    '''
    if out is None:
        out = np.empty_like(vertices, dtype=np.float64)

    out.fill(0.0)

    if len(triangles):
        fn = faceNormals(vertices, triangles)
        # Scatter-add: a vertex appears in up to six triangles
        for corner in range(3):
            np.add.at(out, triangles[:, corner], fn)

    lengths = np.linalg.norm(out, axis=1)
    degenerate = lengths < const.normalEpsilon

    valid = ~degenerate
    out[valid] /= lengths[valid, np.newaxis]
    out[degenerate] = const.upVector

    return out
