# -- Waves Subpackage -- #

'''
Sum-of-sines wave components and the wave field that displaces grid meshes.
'''

from OceanPlane.waves.waveComponent import (
    WaveComponent,
    WaveFieldConfig,
    initializeComponents,
    sampleCalmComponent,
    randomizeComponents,
    validateWaveCount,
)
from OceanPlane.waves.waveField import WaveField
