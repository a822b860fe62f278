# -- Default Values and Policy Bounds for OceanPlane -- #

'''
Default plane, wave and sampling constants for the procedural water surface.
Lengths are in scene units, time in seconds, angles in radians.
'''

import math

#--------------------------------------------------------------------#
# -- Plane Defaults -- #
#--------------------------------------------------------------------#

# Plane extent along X and Z [scene units]
defaultPlaneWidth: float = 50.0
defaultPlaneDepth: float = 50.0

# Subdivisions per side of the plane (vertices per side = resolution + 1)
defaultResolution: int = 250

# Policy bounds applied by the controller before any build
# (250 subdivisions -> 63,001 vertices)
minResolution: int = 0
maxResolution: int = 250

#--------------------------------------------------------------------#
# -- Wave Defaults -- #
#--------------------------------------------------------------------#

# Temporal phase speed multiplier [rad/s]
defaultWaveSpeed: float = 1.0

# Spatial wavelength used for the wave number k = 2*pi / waveLength
defaultWaveLength: float = 5.0

# Number of summed sine components
defaultWaveCount: int = 4
minWaveCount: int = 2
maxWaveCount: int = 10

#--------------------------------------------------------------------#
# -- Sampling Ranges -- #
#--------------------------------------------------------------------#

# Calm start: small, positive, bounded waves
calmAmplitudeRange: tuple[float, float] = (0.1, 0.5)
calmFrequencyRange: tuple[float, float] = (0.2, 0.8)

# Randomize: wide and signed (negative values invert phase or direction)
randomAmplitudeRange: tuple[float, float] = (-1.0, 1.0)
randomFrequencyRange: tuple[float, float] = (-1.0, 1.0)

# Phase offsets are drawn from [0, 2*pi)
phaseOffsetRange: tuple[float, float] = (0.0, 2.0 * math.pi)

#--------------------------------------------------------------------#
# -- Shading -- #
#--------------------------------------------------------------------#

# Normal assigned to vertices with no incident triangle
upVector: tuple[float, float, float] = (0.0, 1.0, 0.0)

# Accumulated normals shorter than this are treated as degenerate
normalEpsilon: float = 1e-12

#--------------------------------------------------------------------#
# -- Runner Defaults -- #
#--------------------------------------------------------------------#

defaultFrameCount: int = 120
defaultFramesPerSecond: float = 30.0
