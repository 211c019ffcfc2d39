"""@package docstring
Decoding and encoding the NIFTI-1 voxel payload according to the header
datatype code

Copyright (c) 2026 nifti1 developers
"""

__all__ = [
    "niidatatype",
    "read_image",
    "write_image",
    "get_image_ndarray",
    "image_length",
    "NiftiDatatypeError",
]

##====================================================================================
## dependent libraries
##====================================================================================

import numpy as np

from .constants import NIFTI_DATATYPES


class NiftiDatatypeError(ValueError):
    pass


def niidatatype(datatype):
    """Resolve a NIFTI datatype code to (field type, components per voxel)

    Raises
    ------
    NiftiDatatypeError
        for codes without a numeric decoding (binary, 64-bit integers,
        128-bit floats, 128/256-bit complex, unknown codes)
    """
    try:
        return NIFTI_DATATYPES[int(datatype)]
    except (KeyError, TypeError, ValueError):
        raise NiftiDatatypeError(f"Unsupported NIFTI datatype {datatype}") from None


def image_length(dim, datatype):
    """Number of samples the image of a header should hold"""
    components = niidatatype(datatype)[1]
    rank = int(dim[0])
    return int(np.prod(dim[1 : rank + 1], dtype=np.int64)) * components


def read_image(stream, header):
    """Decode everything from vox_offset to the end of the stream

    Returns
    -------
    image : numpy.ndarray
        flat array of voxel samples; complex and RGB voxels contribute 2 or
        3 consecutive samples
    """
    type = niidatatype(header["datatype"])[0]
    stream.index = min(int(header["vox_offset"]), len(stream))
    return stream.decode_array(stream.rest_length(), type)


def write_image(image, header, stream):
    """Encode a flat sequence of voxel samples and write it to the stream"""
    type = niidatatype(header["datatype"])[0]
    if isinstance(image, np.ndarray):
        if np.iscomplexobj(image):
            image = np.ascontiguousarray(image, dtype=np.complex64).view(np.float32)
        image = image.ravel()
    stream.write(stream.encode(image, type))


def get_image_ndarray(image, dim, datatype):
    """Reshape a flat image to the header dimensions, first axis slowest

    Composite datatypes gain a trailing axis holding the voxel components.
    """
    components = niidatatype(datatype)[1]
    rank = int(dim[0])
    shape = [int(d) for d in dim[1 : rank + 1]]
    if components > 1:
        shape.append(components)
    return np.asarray(image).reshape(shape)
