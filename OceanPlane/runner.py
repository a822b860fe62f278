# -- OceanPlane Runner -- #

'''
Command-line entry point for generating and animating a water surface.

Loads a configuration, builds the grid mesh, runs the fixed-step wave
animation loop, reports progress, and optionally exports frame data
(JSON), a final STL snapshot and an animated Plotly HTML page.

Usage:
    python -m OceanPlane                                  # Calm defaults
    python -m OceanPlane --preset preview --frames 60     # Quick coarse run
    python -m OceanPlane --config OceanPlane/configs/calmSea.json
    python -m OceanPlane --randomize --seed 3 --stl       # Random waves + STL
    python -m OceanPlane --no-export                      # Skip frame export
'''

from __future__ import annotations

import argparse
import os
import time as timeModule
from typing import Optional

from tqdm import tqdm

from OceanPlane import constants as const
from OceanPlane.clock import FixedStepClock
from OceanPlane.controller import SurfaceController
from OceanPlane.export.frameExporter import FrameExporter
from OceanPlane.export.stlExporter import StlExporter
from OceanPlane.protocols import SurfaceConfig


#--------------------------------------------------------------------#
# -- CLI Argument Parser -- #
#--------------------------------------------------------------------#

PRESETS = {
    'calm': SurfaceConfig.calm,
    'choppy': SurfaceConfig.choppy,
    'preview': SurfaceConfig.preview,
}


def buildParser() -> argparse.ArgumentParser:
    '''Build the CLI argument parser.'''
    parser = argparse.ArgumentParser(
        description='OceanPlane -- procedural sum-of-sines water surface',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to JSON configuration file (overrides --preset)',
    )
    parser.add_argument(
        '--preset', type=str, default='calm',
        choices=sorted(PRESETS.keys()),
        help='Surface preset (default: calm)',
    )
    parser.add_argument(
        '--frames', type=int, default=const.defaultFrameCount,
        help=f'Number of animation frames (default: {const.defaultFrameCount})',
    )
    parser.add_argument(
        '--fps', type=float, default=const.defaultFramesPerSecond,
        help=f'Frames per simulated second (default: {const.defaultFramesPerSecond:g})',
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Seed for wave parameter sampling',
    )
    parser.add_argument(
        '--randomize', action='store_true',
        help='Resample wave parameters with the wide signed ranges before animating',
    )
    parser.add_argument(
        '--normals', action='store_true',
        help='Include vertex normals in the frame export',
    )
    parser.add_argument(
        '--no-export', action='store_true',
        help='Skip frame data export',
    )
    parser.add_argument(
        '--stl', action='store_true',
        help='Write the final surface as STL',
    )
    parser.add_argument(
        '--html', action='store_true',
        help='Write an animated Plotly HTML page of the recorded frames',
    )
    parser.add_argument(
        '--output-dir', type=str, default='OceanPlane/output',
        help='Output directory for exported files (default: OceanPlane/output)',
    )

    return parser


#--------------------------------------------------------------------#
# -- Runner Class -- #
#--------------------------------------------------------------------#

class SurfaceRunner:
    '''
    Runs a fixed-step surface animation and stores results.

    Handles the full pipeline: mesh setup, animation loop with progress
    reporting, and optional JSON / STL / HTML export.
    '''

    def __init__(self, fps: float = const.defaultFramesPerSecond, includeNormals: bool = False) -> None:
        self._clock = FixedStepClock.fromFps(fps)
        self._exporter = FrameExporter(clock=self._clock, includeNormals=includeNormals)

    @property
    def exporter(self) -> FrameExporter:
        return self._exporter

    def runFromConfig(self, configPath: str, **kwargs) -> dict:
        '''
        Run from a JSON configuration file.

        Parameters:
        -----------
        configPath : str
            Path to the JSON configuration file
        **kwargs
            Forwarded to run()

        Returns:
        --------
        dict : Run results summary
        '''
        return self.run(SurfaceConfig.fromJson(configPath), **kwargs)

    def run(
        self,
        config: SurfaceConfig,
        nFrames: int = const.defaultFrameCount,
        randomize: bool = False,
        doExport: bool = True,
        exportStl: bool = False,
        exportHtml: bool = False,
        exportDir: str = 'OceanPlane/output',
        showProgress: bool = True,
    ) -> dict:
        '''
        Build the surface and animate it for nFrames fixed steps.

        Parameters:
        -----------
        config : SurfaceConfig
            Surface configuration
        nFrames : int
            Number of animated frames after the initial flat frame
        randomize : bool
            Resample the wave parameters before animating
        doExport : bool
            Whether to export frame data as JSON
        exportStl : bool
            Whether to write the final surface as STL
        exportHtml : bool
            Whether to write an animated Plotly HTML page
        exportDir : str
            Output directory
        showProgress : bool
            Show a tqdm progress bar during the frame loop

        Returns:
        --------
        dict : Run results summary
        '''
        print()
        print('=' * 62)
        print('  OCEANPLANE -- SUM-OF-SINES WATER SURFACE')
        print('=' * 62)
        print()

        #--------------------------------------------------------------------#
        # Surface Setup
        #--------------------------------------------------------------------#
        print('-' * 62)
        print('  SURFACE SETUP')
        print('-' * 62)

        self._clock.reset()
        self._exporter.clear()

        stlExporter = StlExporter() if exportStl else None
        sinks = [self._exporter] + ([stlExporter] if stlExporter is not None else [])

        controller = SurfaceController(config, sinks=sinks)
        if randomize:
            controller.randomizeParameters()
        else:
            controller.start()
        mesh = controller.mesh
        config = controller.config

        print(f'  Plane Size:        {config.planeWidth:8.2f} x {config.planeDepth:.2f}')
        print(f'  Resolution:        {config.resolution:8d}')
        print(f'  Vertices:          {mesh.nVertices:8d}')
        print(f'  Triangles:         {mesh.nTriangles:8d}')
        print(f'  Wave Speed:        {config.waveSpeed:8.3f} rad/s')
        print(f'  Wave Length:       {config.waveLength:8.3f}')
        print(f'  Wave Count:        {config.waveCount:8d}')
        print(f'  Frames:            {nFrames:8d} @ {1.0 / self._clock.dt:.1f} fps')
        print()

        print(f'  {"#":>3}  {"Amplitude":>10}  {"FreqX":>8}  {"FreqZ":>8}  {"Phase":>8}')
        print('  ' + '-' * 44)
        for idx, c in enumerate(controller.components):
            print(f'  {idx:3d}  {c.amplitude:10.4f}  {c.frequencyX:8.4f}  '
                  f'{c.frequencyZ:8.4f}  {c.phaseOffset:8.4f}')
        print()

        #--------------------------------------------------------------------#
        # Animation Loop
        #--------------------------------------------------------------------#
        print('-' * 62)
        print('  RUNNING ANIMATION')
        print('-' * 62)

        controller.toggleWaves()
        wallClockStart = timeModule.time()

        minHeight = float('inf')
        maxHeight = float('-inf')
        for _ in tqdm(range(nFrames), desc='  Frames', disable=not showProgress):
            self._clock.advance()
            controller.tick(self._clock.now())
            heights = controller.mesh.heights
            if heights.size:
                minHeight = min(minHeight, float(heights.min()))
                maxHeight = max(maxHeight, float(heights.max()))

        wallClockSeconds = timeModule.time() - wallClockStart

        if minHeight > maxHeight:
            # No animated frame; report the current surface
            heights = controller.mesh.heights
            minHeight = float(heights.min())
            maxHeight = float(heights.max())

        fps = nFrames / wallClockSeconds if wallClockSeconds > 0.0 else float('inf')

        print()
        print(f'  Animation complete.')
        print(f'  Simulated time:    {self._clock.now():8.3f} s')
        print(f'  Wall-clock time:   {wallClockSeconds:8.2f} s ({fps:.1f} frames/s)')
        print(f'  Frames recorded:   {self._exporter.nFrames:8d}')
        print()

        #--------------------------------------------------------------------#
        # Export
        #--------------------------------------------------------------------#
        exportPath: Optional[str] = None
        stlPath: Optional[str] = None
        htmlPath: Optional[str] = None

        if doExport or stlExporter is not None or exportHtml:
            print('-' * 62)
            print('  EXPORTING')
            print('-' * 62)

        if doExport:
            exportPath = self._exporter.export(
                config=config,
                outputDir=exportDir,
                scenarioName='surface',
                components=controller.components,
            )
            print(f'  Frames:  {exportPath}')

        if stlExporter is not None:
            stlPath = stlExporter.export(os.path.join(exportDir, 'oceanPlane_surface.stl'))
            print(f'  STL:     {stlPath}')

        if exportHtml:
            htmlPath = self._exportHtml(controller, exportDir)
            print(f'  HTML:    {htmlPath}')

        #--------------------------------------------------------------------#
        # Summary
        #--------------------------------------------------------------------#
        print()
        print('=' * 62)
        print('  RUN SUMMARY')
        print(f'  Min Height:        {minHeight:10.4f}')
        print(f'  Max Height:        {maxHeight:10.4f}')
        print(f'  Peak-to-Trough:    {maxHeight - minHeight:10.4f}')
        print('=' * 62)
        print()

        return {
            'mesh': controller.mesh,
            'components': list(controller.components),
            'wallClockSeconds': wallClockSeconds,
            'nFrames': self._exporter.nFrames,
            'minHeight': minHeight,
            'maxHeight': maxHeight,
            'exportPath': exportPath,
            'stlPath': stlPath,
            'htmlPath': htmlPath,
        }

    def _exportHtml(self, controller: SurfaceController, exportDir: str) -> str:
        '''Write the recorded frames as an animated Plotly page.'''
        from OceanPlane.visualization.surfacePlots import plotAnimation

        mesh = controller.mesh
        frames = [f for f in self._exporter.frames if f['topology'] == len(self._exporter.topologies) - 1]
        heightFrames = [f['heights'] for f in frames]
        times = [f['time'] for f in frames]

        fig = plotAnimation(mesh.vertices, mesh.triangles, heightFrames, times)

        os.makedirs(exportDir, exist_ok=True)
        htmlPath = os.path.join(exportDir, 'oceanPlane_animation.html')
        fig.write_html(htmlPath)
        return htmlPath


#--------------------------------------------------------------------#
# -- CLI Entry Point -- #
#--------------------------------------------------------------------#

def main(argv: Optional[list[str]] = None) -> dict:
    '''CLI entry point.'''
    parser = buildParser()
    args = parser.parse_args(argv)

    if args.config:
        config = SurfaceConfig.fromJson(args.config)
    else:
        config = PRESETS[args.preset]()

    if args.seed is not None:
        config.seed = args.seed

    runner = SurfaceRunner(fps=args.fps, includeNormals=args.normals)
    return runner.run(
        config,
        nFrames=args.frames,
        randomize=args.randomize,
        doExport=not args.no_export,
        exportStl=args.stl,
        exportHtml=args.html,
        exportDir=args.output_dir,
    )


if __name__ == '__main__':
    main()
