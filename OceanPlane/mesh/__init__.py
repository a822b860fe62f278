# -- Mesh Subpackage -- #

'''
Grid topology construction and smooth normal recalculation.
'''

from OceanPlane.mesh.gridMesh import GridSpec, Mesh
from OceanPlane.mesh.gridMeshBuilder import GridMeshBuilder, RESOLUTION_PRESETS
from OceanPlane.mesh.normals import recalculateNormals, faceNormals
