# -- Surface Visualizations -- #

'''
Plotly-based interactive plots for the grid surface and its waves.
'''

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import plotly.graph_objects as go

from OceanPlane.mesh.gridMesh import Mesh
from OceanPlane.visualization import theme
from OceanPlane.waves.waveComponent import WaveComponent


def _surfaceTrace(
    vertices: np.ndarray,
    triangles: np.ndarray,
    heights: np.ndarray,
    heightRange: Optional[tuple[float, float]] = None,
) -> go.Mesh3d:
    '''Mesh3d trace colored by height. Scene Y (up) is plotted on Plotly's Z.'''
    cmin, cmax = heightRange if heightRange is not None else (None, None)
    return go.Mesh3d(
        x=vertices[:, 0],
        y=vertices[:, 2],
        z=heights,
        i=triangles[:, 0],
        j=triangles[:, 1],
        k=triangles[:, 2],
        intensity=heights,
        colorscale=theme.WATER_COLORSCALE,
        cmin=cmin,
        cmax=cmax,
        lighting=theme.SURFACE_LIGHTING,
        flatshading=False,
        showscale=True,
        colorbar=dict(title='Height'),
        name='Surface',
    )


def _sceneLayout(zRange: Optional[tuple[float, float]] = None) -> dict:
    scene = dict(
        xaxis_title='X',
        yaxis_title='Z',
        zaxis_title='Height',
        aspectmode='manual',
        aspectratio=dict(x=1.0, y=1.0, z=0.25),
    )
    if zRange is not None:
        scene['zaxis'] = dict(range=list(zRange))
    return scene


def plotSurface(mesh: Mesh, title: str = 'Water Surface') -> go.Figure:
    '''
    3D surface of the current mesh state.

    Parameters:
    -----------
    mesh : Mesh
        Grid mesh (flat or displaced)
    title : str
        Figure title

    Returns:
    --------
    go.Figure : Plotly figure
    '''
    if mesh.nTriangles == 0:
        raise ValueError('Mesh has no triangles to plot')

    fig = go.Figure(_surfaceTrace(mesh.vertices, mesh.triangles, mesh.vertices[:, 1]))
    fig.update_layout(
        title=title,
        scene=_sceneLayout(),
        template=theme.TEMPLATE,
        height=600,
    )
    return fig


def plotHeightMap(mesh: Mesh, title: str = 'Height Map') -> go.Figure:
    '''
    Top-down heat map of the vertex heights.

    Parameters:
    -----------
    mesh : Mesh
        Grid mesh
    title : str
        Figure title

    Returns:
    --------
    go.Figure : Plotly figure
    '''
    n = mesh.spec.verticesPerSide
    xs = mesh.vertices[:n, 0]
    zs = mesh.vertices[::n, 2]

    fig = go.Figure(go.Heatmap(
        x=xs, y=zs, z=mesh.heightGrid(),
        colorscale=theme.WATER_COLORSCALE,
        colorbar=dict(title='Height'),
    ))
    fig.update_layout(
        title=title,
        xaxis_title='X',
        yaxis_title='Z',
        yaxis=dict(scaleanchor='x', scaleratio=1),
        template=theme.TEMPLATE,
        height=500,
    )
    return fig


def plotWaveComponents(
    components: Sequence[WaveComponent],
    waveLength: float,
    waveSpeed: float,
    time: float = 0.0,
    extent: float = 50.0,
    nPoints: int = 400,
) -> go.Figure:
    '''
    Each component and their sum along the X axis (z = 0).

    Parameters:
    -----------
    components : Sequence[WaveComponent]
        Wave components to plot
    waveLength : float
        Wavelength used for k = 2*pi / waveLength
    waveSpeed : float
        Temporal phase rate
    time : float
        Clock value [s]
    extent : float
        X range [0, extent]
    nPoints : int
        Number of samples

    Returns:
    --------
    go.Figure : Plotly figure
    '''
    k = 2.0 * np.pi / waveLength
    xs = np.linspace(0.0, extent, nPoints)
    total = np.zeros_like(xs)

    fig = go.Figure()
    for idx, c in enumerate(components):
        ys = c.amplitude * np.sin(k * c.frequencyX * xs + waveSpeed * time + c.phaseOffset)
        total += ys
        fig.add_trace(go.Scatter(
            x=xs, y=ys, mode='lines',
            name=f'Component {idx}',
            line=dict(color=theme.PALETTE[idx % len(theme.PALETTE)], width=1, dash='dot'),
        ))

    fig.add_trace(go.Scatter(
        x=xs, y=total, mode='lines', name='Sum',
        line=dict(color=theme.WHITE, width=2.5),
    ))
    fig.add_hline(y=0, line=dict(color=theme.REFERENCE_LINE, dash='dash', width=0.5))

    fig.update_layout(
        title=f'Wave Components at t = {time:.2f} s (z = 0)',
        xaxis_title='X',
        yaxis_title='Height',
        template=theme.TEMPLATE,
        height=400,
    )
    return fig


def plotAnimation(
    vertices: np.ndarray,
    triangles: np.ndarray,
    heightFrames: Sequence[np.ndarray],
    times: Optional[Sequence[Optional[float]]] = None,
    title: str = 'Animated Water Surface',
    frameDurationMs: int = 50,
) -> go.Figure:
    '''
    Animated 3D surface from recorded height frames.

    Parameters:
    -----------
    vertices : np.ndarray
        Vertex positions of the shared topology, shape (N, 3)
    triangles : np.ndarray
        Triangle indices, shape (T, 3)
    heightFrames : Sequence[np.ndarray]
        Heights per frame, each shape (N,)
    times : Sequence[float], optional
        Frame times used as slider labels
    title : str
        Figure title
    frameDurationMs : int
        Playback delay per frame

    Returns:
    --------
    go.Figure : Plotly figure with play/pause controls and a slider
    '''
    if not heightFrames:
        raise ValueError('No frames to animate')
    if times is None:
        times = [None] * len(heightFrames)

    allHeights = np.concatenate([np.asarray(h) for h in heightFrames])
    lo, hi = float(allHeights.min()), float(allHeights.max())
    if hi - lo < 1e-9:
        lo, hi = lo - 0.5, hi + 0.5

    labels = [f'{t:.2f}s' if t is not None else str(i) for i, t in enumerate(times)]
    frames = [
        go.Frame(
            data=[_surfaceTrace(vertices, triangles, np.asarray(h), (lo, hi))],
            name=labels[i],
        )
        for i, h in enumerate(heightFrames)
    ]

    fig = go.Figure(
        data=[_surfaceTrace(vertices, triangles, np.asarray(heightFrames[0]), (lo, hi))],
        frames=frames,
    )

    playArgs = dict(frame=dict(duration=frameDurationMs, redraw=True),
                    fromcurrent=True, transition=dict(duration=0))
    pauseArgs = dict(frame=dict(duration=0, redraw=False), mode='immediate')

    fig.update_layout(
        title=title,
        scene=_sceneLayout(zRange=(lo, hi)),
        template=theme.TEMPLATE,
        height=650,
        updatemenus=[dict(
            type='buttons',
            showactive=False,
            x=0.05, y=0.05,
            buttons=[
                dict(label='Play', method='animate', args=[None, playArgs]),
                dict(label='Pause', method='animate', args=[[None], pauseArgs]),
            ],
        )],
        sliders=[dict(
            active=0,
            currentvalue=dict(prefix='Time: '),
            steps=[
                dict(method='animate', label=label,
                     args=[[label], dict(mode='immediate', frame=dict(duration=0, redraw=True))])
                for label in labels
            ],
        )],
    )
    return fig
