# -- Visualization Subpackage -- #

'''
Plotly figures for inspecting the generated and animated surface.
'''

from OceanPlane.visualization.surfacePlots import (
    plotSurface,
    plotHeightMap,
    plotWaveComponents,
    plotAnimation,
)
