# -- Surface Plot Theme -- #

'''
Shared dark styling for the OceanPlane Plotly figures.

Every figure pulls its template, line colors, height colorscale and
Mesh3d lighting from here.
'''

TEMPLATE = 'plotly_dark'

# Line colors
BLUE = '#29B6F6'
TEAL = '#26A69A'
SEAFOAM = '#80CBC4'
CORAL = '#FF8A65'
SAND = '#FFD54F'
WHITE = '#ECEFF1'
REFERENCE_LINE = '#78909C'

# Per-component cycle for wave component plots
PALETTE = [BLUE, CORAL, TEAL, SAND, SEAFOAM]

# Height colorscale: trough -> mid-water -> crest foam
WATER_COLORSCALE = [
    [0.0, '#0D47A1'],
    [0.5, '#1E88E5'],
    [0.85, '#4FC3F7'],
    [1.0, '#E1F5FE'],
]

# Mesh3d lighting for the animated surface
SURFACE_LIGHTING = dict(ambient=0.35, diffuse=0.8, specular=0.6, roughness=0.3, fresnel=0.4)
