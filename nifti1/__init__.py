"""nifti1 - read, modify and write NIFTI-1 neuroimaging files

This module decodes and encodes the NIFTI-1 file format (.nii and .nii.gz):
the fixed 348-byte header, the optional header extensions and the voxel
payload, in either byte order.

    import nifti1 as nii

    obj = nii.niiobject("brain.nii.gz", image=True)
    obj.header["dim"]
    obj.view()[10][20][30]
    obj.write("copy.nii")

    nii.savenifti(img, "out.nii.gz")
    img = nii.loadnifti("out.nii.gz").image

The lower-level building blocks are exposed as well

* niistream ==> endian-aware field decoder/encoder over a byte buffer
* parse_header / write_header ==> the 348-byte header
* parse_extended_header / write_extended_header ==> header extensions
* read_image / write_image ==> the voxel payload
* niiview ==> shape-aware indexing over the flat image
"""

from .nstream import niistream, FieldType, NiftiLengthError, NiftiEncodeError
from .nheader import (
    check_header,
    parse_header,
    write_header,
    dim_info_to_freq_dim,
    dim_info_to_phase_dim,
    dim_info_to_slice_dim,
    fps_into_dim_info,
    niicodemap,
    xyzt_to_units,
    NiftiHeaderError,
    HeaderLengthError,
    MagicCodeError,
)
from .nextension import (
    parse_extended_header,
    write_extended_header,
    extended_header_size,
    NiftiExtensionError,
)
from .nimage import (
    niidatatype,
    read_image,
    write_image,
    get_image_ndarray,
    NiftiDatatypeError,
)
from .nview import niiview
from .nfile import (
    niiread,
    niiwrite,
    niiobject,
    nifticreate,
    loadnifti,
    savenifti,
)
from .constants import HEADER_SIGNATURE, XFORM_CODES, NIFTI_DATATYPES

__version__ = "0.1.0"
__all__ = [
    "niistream",
    "FieldType",
    "NiftiLengthError",
    "NiftiEncodeError",
    "check_header",
    "parse_header",
    "write_header",
    "dim_info_to_freq_dim",
    "dim_info_to_phase_dim",
    "dim_info_to_slice_dim",
    "fps_into_dim_info",
    "niicodemap",
    "xyzt_to_units",
    "NiftiHeaderError",
    "HeaderLengthError",
    "MagicCodeError",
    "parse_extended_header",
    "write_extended_header",
    "extended_header_size",
    "NiftiExtensionError",
    "niidatatype",
    "read_image",
    "write_image",
    "get_image_ndarray",
    "NiftiDatatypeError",
    "niiview",
    "niiread",
    "niiwrite",
    "niiobject",
    "nifticreate",
    "loadnifti",
    "savenifti",
    "HEADER_SIGNATURE",
    "XFORM_CODES",
    "NIFTI_DATATYPES",
]
__license__ = """Apache license 2.0, Copyright (c) 2026 nifti1 developers"""
