# -- Code Interface (Entry-Point) -- #

'''
Main interface for the OceanPlane water surface toolkit.

Demonstrates the procedural water surface pipeline:
    1. Build a flat grid mesh from a plane size and resolution
    2. Animate it with a sum of travelling sine waves for a few frames
    3. Visualize the displaced surface, height map and wave components in Plotly
    4. Randomize the wave parameters and compare the resulting surface
    5. Export the final surface as STL

Run directly:
    python codeInterface.py
'''

import os

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from OceanPlane.clock import FixedStepClock
from OceanPlane.controller import SurfaceController
from OceanPlane.export.stlExporter import StlExporter
from OceanPlane.protocols import SurfaceConfig
from OceanPlane.visualization import theme
from OceanPlane.visualization.surfacePlots import plotWaveComponents

# Clear terminal
os.system('cls' if os.name == 'nt' else 'clear')


######################################################################
# -- Configuration -- #
######################################################################

# Surface preset: 'calm', 'choppy', or 'preview'
surfacePreset = 'preview'

# Number of animated frames and frame rate
nFrames = 90
framesPerSecond = 30.0

# Seed for reproducible wave parameters (None = random each run)
seed = 42

# Output directory for the exported STL
outputDir = 'OceanPlane/output'

# Whether to run the randomized-parameter comparison
runRandomizedComparison = True


######################################################################
# -- Surface Setup -- #
######################################################################

presetFactories = {
    'calm': SurfaceConfig.calm,
    'choppy': SurfaceConfig.choppy,
    'preview': SurfaceConfig.preview,
}

config = presetFactories[surfacePreset]()
config.seed = seed

stlExporter = StlExporter()
controller = SurfaceController(config, sinks=[stlExporter])
mesh = controller.start()
config = controller.config

print('=' * 60)
print(f'  PROCEDURAL WATER SURFACE')
print('=' * 60)
print(f'  Plane:       {config.planeWidth:.1f} x {config.planeDepth:.1f}')
print(f'  Resolution:  {config.resolution}')
print(f'  Vertices:    {mesh.nVertices:,}')
print(f'  Triangles:   {mesh.nTriangles:,}')
print(f'  Wave Count:  {config.waveCount}')
print(f'  Wave Length: {config.waveLength:.2f}')
print(f'  Wave Speed:  {config.waveSpeed:.2f} rad/s')


######################################################################
# -- Animation -- #
######################################################################

print('\nAnimating surface...')

clock = FixedStepClock.fromFps(framesPerSecond)
controller.toggleWaves()

for _ in range(nFrames):
    controller.tick(clock.advance())

heights = mesh.heights
print(f'  Simulated:   {clock.now():.2f} s over {nFrames} frames')
print(f'  Height Range:[{heights.min():+.3f}, {heights.max():+.3f}]')
print(f'  Mean Normal Y: {mesh.normals[:, 1].mean():.4f}')

os.makedirs(outputDir, exist_ok=True)
stlPath = stlExporter.export(os.path.join(outputDir, f'{surfacePreset}_surface.stl'))
print(f'\n  Exported: {stlPath}')


######################################################################
# -- Surface Visualization -- #
######################################################################

print('\nBuilding visualization...')

# Row 1: 3D surface (spans both columns)
# Row 2: Height map (left), center-line profile (right)
fig = make_subplots(
    rows=2, cols=2,
    specs=[
        [{'type': 'scene', 'colspan': 2}, None],
        [{'type': 'xy'}, {'type': 'xy'}],
    ],
    row_heights=[0.6, 0.4],
    subplot_titles=[
        '3D Surface',
        'Height Map', 'Center-Line Profile (z = depth / 2)',
    ],
    vertical_spacing=0.08,
    horizontal_spacing=0.08,
)

verts = mesh.vertices
tris = mesh.triangles

# -- Panel 1: 3D surface --

fig.add_trace(
    go.Mesh3d(
        x=verts[:, 0], y=verts[:, 2], z=verts[:, 1],
        i=tris[:, 0], j=tris[:, 1], k=tris[:, 2],
        intensity=verts[:, 1],
        colorscale=theme.WATER_COLORSCALE,
        lighting=theme.SURFACE_LIGHTING,
        flatshading=False,
        showscale=False,
        hoverinfo='skip',
    ),
    row=1, col=1,
)

fig.update_scenes(
    dict(
        xaxis=dict(title='X', showbackground=False),
        yaxis=dict(title='Z', showbackground=False),
        zaxis=dict(title='Height', showbackground=False),
        aspectmode='manual',
        aspectratio=dict(x=1.0, y=1.0, z=0.25),
    ),
    row=1, col=1,
)

# -- Panel 2: Height map --

n = mesh.spec.verticesPerSide
fig.add_trace(go.Heatmap(
    x=verts[:n, 0], y=verts[::n, 2], z=mesh.heightGrid(),
    colorscale=theme.WATER_COLORSCALE,
    showscale=False,
), row=2, col=1)
fig.update_xaxes(title_text='X', row=2, col=1)
fig.update_yaxes(title_text='Z', row=2, col=1, scaleanchor='x', scaleratio=1)

# -- Panel 3: Center-line profile --

midRow = n // 2
fig.add_trace(go.Scatter(
    x=verts[:n, 0], y=mesh.heightGrid()[midRow], mode='lines',
    line=dict(color=theme.BLUE, width=2),
    showlegend=False,
), row=2, col=2)
fig.add_trace(go.Scatter(
    x=verts[:n, 0], y=np.zeros(n), mode='lines',
    line=dict(color=theme.REFERENCE_LINE, dash='dot', width=0.5),
    showlegend=False,
), row=2, col=2)
fig.update_xaxes(title_text='X', row=2, col=2)
fig.update_yaxes(title_text='Height', row=2, col=2)

fig.update_layout(
    title=dict(
        text=f'{surfacePreset.title()} Surface at t = {clock.now():.2f} s '
             f'({mesh.nVertices:,} verts, {config.waveCount} waves)',
        font=dict(size=16),
    ),
    template=theme.TEMPLATE,
    height=1000,
    width=1100,
)

fig.show()

plotWaveComponents(
    controller.components,
    waveLength=config.waveLength,
    waveSpeed=config.waveSpeed,
    time=clock.now(),
    extent=config.planeWidth,
).show()


######################################################################
# -- Randomized Parameters -- #
######################################################################

if runRandomizedComparison:
    print('\n' + '=' * 60)
    print('  RANDOMIZED WAVE PARAMETERS')
    print('=' * 60)

    calmComponents = [c.toDict() for c in controller.components]
    controller.randomizeParameters()

    print(f'\n  {"#":>3}  {"Calm Amp":>9}  {"Rand Amp":>9}  {"Rand FX":>8}  {"Rand FZ":>8}')
    print('  ' + '-' * 46)
    for idx, (calm, c) in enumerate(zip(calmComponents, controller.components)):
        print(f'  {idx:3d}  {calm["amplitude"]:9.4f}  {c.amplitude:9.4f}  '
              f'{c.frequencyX:8.4f}  {c.frequencyZ:8.4f}')

    # randomizeParameters() leaves the animation running on a fresh flat mesh
    controller.tick(clock.now())
    randomMesh = controller.mesh
    print(f'\n  Height Range:[{randomMesh.heights.min():+.3f}, {randomMesh.heights.max():+.3f}]')

    plotWaveComponents(
        controller.components,
        waveLength=config.waveLength,
        waveSpeed=config.waveSpeed,
        time=clock.now(),
        extent=config.planeWidth,
    ).show()

print('\n' + '=' * 60)
print('  Done.')
print('=' * 60)
