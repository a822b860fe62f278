# -- Export Package -- #

'''
Render sinks that record or write the animated surface.

Exports frame data as JSON for later playback and surface snapshots as
STL for CAD and mesh tools.
'''

from OceanPlane.export.frameExporter import FrameExporter
from OceanPlane.export.stlExporter import StlExporter
