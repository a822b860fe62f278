# -- OceanPlane Exceptions -- #

'''
Exception types raised by the mesh builder, wave field and controller.

Each error also derives from the closest builtin so callers can catch
either the OceanPlane type or the standard one.
'''


class OceanPlaneError(Exception):
    '''Base class for all OceanPlane errors.'''


class ValidationError(OceanPlaneError, ValueError):
    '''
    Invalid input geometry or configuration.

    Raised for negative, zero or non-finite plane sizes, negative or
    non-integer resolutions, unusable wave lengths and malformed
    configuration files.
    '''


class RangeError(OceanPlaneError, ValueError):
    '''A bounded setting (e.g. waveCount) was given a value outside its range.'''


class StateError(OceanPlaneError, RuntimeError):
    '''
    Mesh buffers do not match the expected topology.

    Indicates the driver skipped a rebuild after a topology change.
    Not recoverable by retrying: the caller must rebuild the mesh.
    '''
