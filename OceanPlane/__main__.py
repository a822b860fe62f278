# -- OceanPlane Module Entry -- #

'''
Allows running the surface animation with: python -m OceanPlane
'''

from OceanPlane.runner import main

main()
