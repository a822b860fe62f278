# -- Wave Field Tests -- #

'''
Sampling policies, displacement formula and buffer checks of the wave field.
'''

import math

import numpy as np
import pytest

from OceanPlane.errors import RangeError, StateError, ValidationError
from OceanPlane.mesh.gridMeshBuilder import GridMeshBuilder
from OceanPlane.waves.waveComponent import (
    WaveComponent,
    WaveFieldConfig,
    initializeComponents,
    randomizeComponents,
    validateWaveCount,
)
from OceanPlane.waves.waveField import WaveField


@pytest.fixture
def mesh():
    return GridMeshBuilder().build((20.0, 20.0), 20)


def _fixedComponents():
    return [
        WaveComponent(amplitude=0.3, frequencyX=0.5, frequencyZ=0.25, phaseOffset=1.0),
        WaveComponent(amplitude=-0.2, frequencyX=-0.7, frequencyZ=0.4, phaseOffset=4.0),
    ]


#--------------------------------------------------------------------#
# -- Sampling Policies -- #
#--------------------------------------------------------------------#

def testInitializeRanges():
    rng = np.random.default_rng(0)
    for _ in range(20):
        for c in initializeComponents(10, rng):
            assert 0.1 <= c.amplitude <= 0.5
            assert 0.2 <= c.frequencyX <= 0.8
            assert 0.2 <= c.frequencyZ <= 0.8
            assert 0.0 <= c.phaseOffset < 2.0 * math.pi


def testRandomizeRangesAndIdentity():
    rng = np.random.default_rng(1)
    components = initializeComponents(10, rng)
    original = list(components)

    sawNegative = False
    for _ in range(20):
        result = randomizeComponents(components, rng)
        assert result is components
        assert len(components) == 10
        for c in components:
            assert -1.0 <= c.amplitude <= 1.0
            assert -1.0 <= c.frequencyX <= 1.0
            assert -1.0 <= c.frequencyZ <= 1.0
            assert 0.0 <= c.phaseOffset < 2.0 * math.pi
            sawNegative |= c.amplitude < 0.0 or c.frequencyX < 0.0 or c.frequencyZ < 0.0

    assert sawNegative
    assert all(a is b for a, b in zip(components, original))


@pytest.mark.parametrize('waveCount', [1, 11, 0, -3, 3.0, True])
def testWaveCountOutOfRange(waveCount):
    with pytest.raises(RangeError):
        validateWaveCount(waveCount)
    with pytest.raises(RangeError):
        initializeComponents(waveCount)


def testSeededFieldsAreReproducible():
    a = WaveField(WaveFieldConfig(waveCount=5), seed=123)
    b = WaveField(WaveFieldConfig(waveCount=5), seed=123)
    assert a.components == b.components


#--------------------------------------------------------------------#
# -- Configuration -- #
#--------------------------------------------------------------------#

def testConfigDefaults():
    config = WaveFieldConfig()
    assert config.waveSpeed == 1.0
    assert config.waveLength == 5.0
    assert config.waveCount == 4
    assert config.waveNumber == pytest.approx(2.0 * math.pi / 5.0)


@pytest.mark.parametrize('waveLength', [0.0, math.inf, math.nan])
def testConfigRejectsBadWaveLength(waveLength):
    with pytest.raises(ValidationError):
        WaveFieldConfig(waveLength=waveLength)


def testConfigRejectsBadWaveCount():
    with pytest.raises(RangeError):
        WaveFieldConfig(waveCount=12)


def testComponentCountMustMatchConfig():
    with pytest.raises(RangeError):
        WaveField(WaveFieldConfig(waveCount=3), components=_fixedComponents())


def testSetWaveLengthValidationKeepsConfig():
    field = WaveField(WaveFieldConfig(waveLength=4.0), seed=0)
    with pytest.raises(ValidationError):
        field.setWaveLength(0.0)
    assert field.config.waveLength == 4.0

    field.setWaveLength(8.0)
    assert field.waveNumber == pytest.approx(math.pi / 4.0)


#--------------------------------------------------------------------#
# -- Resize / Reinitialize -- #
#--------------------------------------------------------------------#

def testResizeShrinkKeepsPrefix():
    field = WaveField(WaveFieldConfig(waveCount=6), seed=2)
    before = list(field.components)

    field.resize(3)

    assert field.waveCount == 3
    assert len(field.components) == 3
    assert all(a is b for a, b in zip(field.components, before[:3]))


def testResizeGrowAddsCalmComponents():
    field = WaveField(WaveFieldConfig(waveCount=2), seed=3)
    field.randomize()
    before = list(field.components)

    field.resize(7)

    assert len(field.components) == 7
    assert field.config.waveCount == 7
    assert all(a is b for a, b in zip(field.components[:2], before))
    for c in field.components[2:]:
        assert 0.1 <= c.amplitude <= 0.5


def testResizeOutOfRangeLeavesComponents():
    field = WaveField(WaveFieldConfig(waveCount=4), seed=4)
    before = [c.toDict() for c in field.components]

    with pytest.raises(RangeError):
        field.resize(11)

    assert field.waveCount == 4
    assert [c.toDict() for c in field.components] == before


def testInitializeWithNewCount():
    field = WaveField(WaveFieldConfig(waveCount=4), seed=5)
    components = field.initialize(9)
    assert len(components) == 9
    assert field.waveCount == 9
    assert field.components is components


def testRandomizeKeepsLength():
    field = WaveField(WaveFieldConfig(waveCount=8), seed=6)
    field.randomize()
    assert len(field.components) == field.waveCount == 8


#--------------------------------------------------------------------#
# -- Displacement -- #
#--------------------------------------------------------------------#

def testZeroAmplitudeLeavesSurfaceFlat(mesh):
    components = [
        WaveComponent(0.0, 0.9, -0.3, 2.0),
        WaveComponent(0.0, -0.4, 0.6, 5.0),
        WaveComponent(0.0, 0.1, 0.1, 0.5),
    ]
    field = WaveField(WaveFieldConfig(waveSpeed=3.7, waveLength=1.3, waveCount=3),
                      components=components)

    for t in (0.0, 0.5, 17.25, 1000.0):
        field.apply(mesh, t)
        assert np.all(mesh.heights == 0.0)
        np.testing.assert_allclose(mesh.normals[:, 1], 1.0)


def testMatchesSumOfSines(mesh):
    config = WaveFieldConfig(waveSpeed=1.5, waveLength=4.0, waveCount=2)
    components = _fixedComponents()
    field = WaveField(config, components=components)
    t = 2.25

    field.apply(mesh, t)

    k = 2.0 * math.pi / 4.0
    for idx in (0, 7, 213, mesh.nVertices - 1):
        x, _, z = mesh.vertices[idx]
        expected = sum(
            c.amplitude * math.sin(k * (c.frequencyX * x + c.frequencyZ * z)
                                   + 1.5 * t + c.phaseOffset)
            for c in components
        )
        assert mesh.vertices[idx, 1] == pytest.approx(expected, abs=1e-12)


def testApplyIsDeterministicAndNotAccumulated(mesh):
    field = WaveField(WaveFieldConfig(waveCount=4), seed=9)

    field.apply(mesh, 1.0)
    first = mesh.vertices.copy()
    firstNormals = mesh.normals.copy()

    field.apply(mesh, 1.0)
    np.testing.assert_array_equal(mesh.vertices, first)

    field.apply(mesh, 3.0)
    assert not np.allclose(mesh.heights, first[:, 1])

    field.apply(mesh, 1.0)
    np.testing.assert_allclose(mesh.vertices, first, atol=1e-12)
    np.testing.assert_allclose(mesh.normals, firstNormals, atol=1e-12)


def testApplyMutatesInPlace(mesh):
    field = WaveField(WaveFieldConfig(waveCount=4), seed=10)
    vertices = mesh.vertices
    normals = mesh.normals
    planar = mesh.vertices[:, [0, 2]].copy()

    result = field.apply(mesh, 0.75)

    assert result is mesh
    assert mesh.vertices is vertices
    assert mesh.normals is normals
    np.testing.assert_array_equal(mesh.vertices[:, [0, 2]], planar)
    np.testing.assert_allclose(np.linalg.norm(mesh.normals, axis=1), 1.0)


def testHeightAtMatchesApply(mesh):
    field = WaveField(WaveFieldConfig(waveCount=5), seed=11)
    field.apply(mesh, 4.0)

    heights = field.heightAt(mesh.vertices[:, 0], mesh.vertices[:, 2], 4.0)
    np.testing.assert_allclose(heights, mesh.heights, atol=1e-12)

    single = field.heightAt(3.0, 2.0, 4.0)
    assert isinstance(single, float)


def testDegenerateMeshApply():
    mesh = GridMeshBuilder().build((5.0, 5.0), 0)
    field = WaveField(WaveFieldConfig(waveCount=2), components=_fixedComponents())

    field.apply(mesh, 1.0)

    assert mesh.heights[0] == pytest.approx(field.heightAt(0.0, 0.0, 1.0))
    np.testing.assert_array_equal(mesh.normals[0], [0.0, 1.0, 0.0])


#--------------------------------------------------------------------#
# -- Buffer Checks -- #
#--------------------------------------------------------------------#

def testExpectedVertexCountMismatch(mesh):
    field = WaveField(seed=12)
    with pytest.raises(StateError):
        field.apply(mesh, 0.0, expectedVertexCount=mesh.nVertices + 1)


def testSwappedVertexBufferDetected(mesh):
    field = WaveField(seed=13)
    mesh.vertices = np.zeros((10, 3))
    with pytest.raises(StateError):
        field.apply(mesh, 0.0)


def testMismatchedNormalBufferDetected(mesh):
    field = WaveField(seed=14)
    mesh.normals = np.zeros((3, 3))
    with pytest.raises(StateError):
        field.apply(mesh, 0.0)


def testStateErrorIsRuntimeError(mesh):
    field = WaveField(seed=15)
    with pytest.raises(RuntimeError):
        field.apply(mesh, 0.0, expectedVertexCount=1)


@pytest.mark.parametrize('field, value', [
    ('waveSpeed', 'fast'),
    ('waveSpeed', None),
    ('waveLength', 'long'),
    ('waveLength', True),
])
def testConfigRejectsNonNumeric(field, value):
    with pytest.raises(ValidationError):
        WaveFieldConfig(**{field: value})


def testSetterRejectsNonNumeric():
    field = WaveField(WaveFieldConfig(waveSpeed=2.0), seed=16)
    with pytest.raises(ValidationError):
        field.setWaveSpeed('fast')
    assert field.config.waveSpeed == 2.0
