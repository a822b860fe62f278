# -- Surface Plot Tests -- #

import numpy as np
import pytest

go = pytest.importorskip('plotly.graph_objects')

from OceanPlane.mesh.gridMeshBuilder import GridMeshBuilder
from OceanPlane.visualization.surfacePlots import (
    plotAnimation,
    plotHeightMap,
    plotSurface,
    plotWaveComponents,
)
from OceanPlane.waves.waveComponent import WaveFieldConfig
from OceanPlane.waves.waveField import WaveField


@pytest.fixture
def animatedMesh():
    mesh = GridMeshBuilder().build((6.0, 6.0), 6)
    WaveField(WaveFieldConfig(waveCount=3), seed=5).apply(mesh, 0.5)
    return mesh


def testPlotSurface(animatedMesh):
    fig = plotSurface(animatedMesh)

    assert len(fig.data) == 1
    trace = fig.data[0]
    assert isinstance(trace, go.Mesh3d)
    assert len(trace.i) == animatedMesh.nTriangles
    np.testing.assert_allclose(trace.z, animatedMesh.heights)


def testPlotSurfaceNeedsTriangles():
    mesh = GridMeshBuilder().build((6.0, 6.0), 0)
    with pytest.raises(ValueError):
        plotSurface(mesh)


def testPlotHeightMap(animatedMesh):
    fig = plotHeightMap(animatedMesh)
    assert isinstance(fig.data[0], go.Heatmap)
    assert np.asarray(fig.data[0].z).shape == (7, 7)


def testPlotWaveComponents():
    field = WaveField(WaveFieldConfig(waveCount=4), seed=1)
    fig = plotWaveComponents(field.components, waveLength=5.0, waveSpeed=1.0, nPoints=50)

    assert len(fig.data) == 5
    assert fig.data[-1].name == 'Sum'
    np.testing.assert_allclose(
        fig.data[-1].y, np.sum([np.asarray(t.y) for t in fig.data[:-1]], axis=0))


def testPlotAnimation(animatedMesh):
    heights = [np.zeros(animatedMesh.nVertices), animatedMesh.heights.copy()]
    fig = plotAnimation(animatedMesh.vertices, animatedMesh.triangles, heights, times=[0.0, 0.5])

    assert len(fig.frames) == 2
    assert fig.frames[1].name == '0.50s'
    assert len(fig.layout.sliders[0].steps) == 2


def testPlotAnimationWithoutFrames(animatedMesh):
    with pytest.raises(ValueError):
        plotAnimation(animatedMesh.vertices, animatedMesh.triangles, [])
