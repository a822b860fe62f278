# -- Surface Configuration Tests -- #

import json
import math

import pytest

from OceanPlane.errors import RangeError, ValidationError
from OceanPlane.protocols import SurfaceConfig, clampResolution


def testDefaults():
    config = SurfaceConfig()
    assert config.planeSize == (50.0, 50.0)
    assert config.resolution == 250
    assert config.waveSpeed == 1.0
    assert config.waveLength == 5.0
    assert config.waveCount == 4
    assert config.seed is None


def testFromDictPartialSections():
    config = SurfaceConfig.fromDict({'plane': {'width': 12}, 'waves': {'count': 6}})

    assert config.planeWidth == 12.0
    assert config.planeDepth == 50.0
    assert config.waveCount == 6
    assert config.waveLength == 5.0


def testDictLayoutReloads():
    config = SurfaceConfig(planeWidth=7.5, resolution=40, waveSpeed=0.5, seed=99)
    data = config.toDict()

    assert data['plane']['resolution'] == 40
    assert data['random']['seed'] == 99
    assert SurfaceConfig.fromDict(data) == config


def testFromJson(tmp_path):
    path = tmp_path / 'surface.json'
    path.write_text(json.dumps({
        'plane': {'width': 30.0, 'depth': 10.0, 'resolution': 64},
        'waves': {'speed': 2.0, 'length': 3.0, 'count': 5},
        'random': {'seed': 4},
    }))

    config = SurfaceConfig.fromJson(str(path))

    assert config.planeSize == (30.0, 10.0)
    assert config.resolution == 64
    assert config.waveCount == 5
    assert config.seed == 4


def testFromJsonInvalidFile(tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text('{"plane": ')
    with pytest.raises(ValidationError):
        SurfaceConfig.fromJson(str(path))


@pytest.mark.parametrize('data', [
    [1, 2, 3],
    {'plane': 'wide'},
    {'plane': {'width': 'wide'}},
    {'plane': {'resolution': 2.5}},
    {'waves': {'count': True}},
])
def testFromDictMalformed(data):
    with pytest.raises(ValidationError):
        SurfaceConfig.fromDict(data)


def testPresets():
    assert SurfaceConfig.calm() == SurfaceConfig()

    choppy = SurfaceConfig.choppy()
    assert choppy.waveCount == 8
    assert choppy.waveLength < SurfaceConfig().waveLength

    preview = SurfaceConfig.preview()
    assert preview.resolution < 50
    assert preview.planeSize == (20.0, 20.0)


def testWaveFieldConfigValidation():
    with pytest.raises(RangeError):
        SurfaceConfig(waveCount=1).waveFieldConfig()
    with pytest.raises(ValidationError):
        SurfaceConfig(waveLength=0.0).waveFieldConfig()


@pytest.mark.parametrize('value, expected', [
    (-10, 0),
    (0, 0),
    (120, 120),
    (250, 250),
    (251, 250),
    (10_000, 250),
])
def testClampResolution(value, expected):
    assert clampResolution(value) == expected


def testClampPassesThroughInvalidValues():
    assert clampResolution('high') == 'high'
    assert clampResolution(True) is True
    assert math.isnan(clampResolution(math.nan))
    assert SurfaceConfig(resolution=900).clampedResolution == 250
