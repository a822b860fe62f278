# -- Runner / CLI Tests -- #

import json
import os

import pytest

from OceanPlane.protocols import SurfaceConfig
from OceanPlane.runner import SurfaceRunner, buildParser, main


@pytest.fixture
def smallConfig():
    return SurfaceConfig(planeWidth=5.0, planeDepth=5.0, resolution=5, waveCount=3, seed=11)


def testParserDefaults():
    args = buildParser().parse_args([])
    assert args.preset == 'calm'
    assert args.config is None
    assert not args.no_export
    assert not args.randomize


def testRunExportsFrames(smallConfig, tmp_path):
    runner = SurfaceRunner(fps=10.0)
    results = runner.run(smallConfig, nFrames=4, exportDir=str(tmp_path), showProgress=False)

    assert results['nFrames'] == 5
    assert results['maxHeight'] >= results['minHeight']
    assert os.path.exists(results['exportPath'])

    with open(results['exportPath']) as f:
        data = json.load(f)
    assert data['meta']['nFrames'] == 5
    assert data['frames'][-1]['time'] == pytest.approx(0.4)


def testRunRandomizedWithoutExport(smallConfig, tmp_path):
    runner = SurfaceRunner()
    results = runner.run(smallConfig, nFrames=2, randomize=True, doExport=False,
                         exportDir=str(tmp_path), showProgress=False)

    assert results['exportPath'] is None
    for c in results['components']:
        assert -1.0 <= c.amplitude <= 1.0
    assert os.listdir(tmp_path) == []


def testRunFromConfig(tmp_path):
    path = tmp_path / 'tiny.json'
    path.write_text(json.dumps({'plane': {'width': 3.0, 'depth': 3.0, 'resolution': 3},
                                'waves': {'count': 2}, 'random': {'seed': 1}}))

    results = SurfaceRunner().runFromConfig(str(path), nFrames=1, doExport=False,
                                            showProgress=False)

    assert results['mesh'].nVertices == 16
    assert len(results['components']) == 2


def testRunStlAndHtml(smallConfig, tmp_path):
    pytest.importorskip('trimesh')
    pytest.importorskip('plotly')

    results = SurfaceRunner().run(smallConfig, nFrames=3, doExport=False, exportStl=True,
                                  exportHtml=True, exportDir=str(tmp_path), showProgress=False)

    assert os.path.exists(results['stlPath'])
    assert os.path.exists(results['htmlPath'])


def testMain(tmp_path, capsys):
    results = main(['--preset', 'preview', '--frames', '2', '--seed', '3',
                    '--no-export', '--output-dir', str(tmp_path)])

    assert results['nFrames'] == 3
    assert 'RUN SUMMARY' in capsys.readouterr().out


def testRepeatedRunsStartFresh(smallConfig, tmp_path):
    runner = SurfaceRunner(fps=10.0)
    runner.run(smallConfig, nFrames=3, doExport=False, showProgress=False)

    results = runner.run(SurfaceConfig.preview(), nFrames=3, exportDir=str(tmp_path),
                         showProgress=False)

    assert results['nFrames'] == 4
    assert len(runner.exporter.topologies) == 1
    with open(results['exportPath']) as f:
        data = json.load(f)
    assert data['meta']['nFrames'] == 4
    assert data['frames'][0]['time'] == 0.0
    assert data['frames'][-1]['time'] == pytest.approx(0.3)


def testHeightRangeCoversAnimatedFramesOnly(tmp_path):
    config = SurfaceConfig(resolution=0, seed=5)
    runner = SurfaceRunner(fps=30.0)

    results = runner.run(config, nFrames=2, doExport=False, showProgress=False)

    animated = [h[0] for h in runner.exporter.heightFrames()[1:]]
    assert results['minHeight'] == pytest.approx(min(animated), abs=1e-5)
    assert results['maxHeight'] == pytest.approx(max(animated), abs=1e-5)


def testCallerConfigUntouchedByRun():
    config = SurfaceConfig(planeWidth=3.0, planeDepth=3.0, resolution=400, seed=6)
    results = SurfaceRunner().run(config, nFrames=1, doExport=False, showProgress=False)

    assert config.resolution == 400
    assert results['mesh'].spec.resolution == 250
