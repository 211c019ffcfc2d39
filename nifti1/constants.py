"""@package docstring
Static tables of the NIFTI-1 format: header byte signature, transform codes,
voxel datatypes and magic codes

Copyright (c) 2026 nifti1 developers
"""

__all__ = [
    "HEADER_SIGNATURE",
    "HEADER_SIZE",
    "EXTENSION_FLAG_SIZE",
    "MIN_VOX_OFFSET",
    "MAGIC",
    "XFORM_CODES",
    "NIFTI_DATATYPES",
    "GZIP_MAGIC",
]

##====================================================================================
## global variables
##====================================================================================

HEADER_SIZE = 348
EXTENSION_FLAG_SIZE = 4
MIN_VOX_OFFSET = HEADER_SIZE + EXTENSION_FLAG_SIZE

MAGIC = (b"ni1\x00", b"n+1\x00")

GZIP_MAGIC = b"\x1f\x8b"

""" @brief Byte signature of the 348-byte NIFTI-1 header

Each entry is (name, byte length, field type). The same sequence drives both
decoding and encoding, so the order must never change.
"""

HEADER_SIGNATURE = (
    ("sizeof_hdr", 4, "UL"),  # !< MUST be 348
    ("data_type", 10, "STR"),  # !< ++UNUSED++
    ("db_name", 18, "STR"),  # !< ++UNUSED++
    ("extents", 4, "SL"),  # !< ++UNUSED++
    ("session_error", 2, "SS"),  # !< ++UNUSED++
    ("regular", 1, "STR"),  # !< ++UNUSED++
    ("dim_info", 1, "BY"),  # !< MRI slice ordering.
    ("dim", 16, "US"),  # !< Data array dimensions.
    ("intent_p1", 4, "FL"),  # !< 1st intent parameter.
    ("intent_p2", 4, "FL"),  # !< 2nd intent parameter.
    ("intent_p3", 4, "FL"),  # !< 3rd intent parameter.
    ("intent_code", 2, "SS"),  # !< NIFTI_INTENT_* code.
    ("datatype", 2, "US"),  # !< Defines data type!
    ("bitpix", 2, "SS"),  # !< Number bits/voxel.
    ("slice_start", 2, "SS"),  # !< First slice index.
    ("pixdim", 32, "FL"),  # !< Grid spacings.
    ("vox_offset", 4, "FL"),  # !< Offset into .nii file
    ("scl_slope", 4, "FL"),  # !< Data scaling: slope.
    ("scl_inter", 4, "FL"),  # !< Data scaling: offset.
    ("slice_end", 2, "SS"),  # !< Last slice index.
    ("slice_code", 1, "BY"),  # !< Slice timing order.
    ("xyzt_units", 1, "BY"),  # !< Units of pixdim[1..4]
    ("cal_max", 4, "FL"),  # !< Max display intensity
    ("cal_min", 4, "FL"),  # !< Min display intensity
    ("slice_duration", 4, "FL"),  # !< Time for 1 slice.
    ("toffset", 4, "FL"),  # !< Time axis shift.
    ("glmax", 4, "SL"),  # !< ++UNUSED++
    ("glmin", 4, "SL"),  # !< ++UNUSED++
    ("descrip", 80, "STR"),  # !< any text you like.
    ("aux_file", 24, "STR"),  # !< auxiliary filename.
    ("qform_code", 2, "SS"),  # !< NIFTI_XFORM_* code.
    ("sform_code", 2, "SS"),  # !< NIFTI_XFORM_* code.
    ("quatern_b", 4, "FL"),  # !< Quaternion b param.
    ("quatern_c", 4, "FL"),  # !< Quaternion c param.
    ("quatern_d", 4, "FL"),  # !< Quaternion d param.
    ("qoffset_x", 4, "FL"),  # !< Quaternion x shift.
    ("qoffset_y", 4, "FL"),  # !< Quaternion y shift.
    ("qoffset_z", 4, "FL"),  # !< Quaternion z shift.
    ("srow_x", 16, "FL"),  # !< 1st row affine transform.
    ("srow_y", 16, "FL"),  # !< 2nd row affine transform.
    ("srow_z", 16, "FL"),  # !< 3rd row affine transform.
    ("intent_name", 16, "STR"),  # !< 'name' or meaning of data.
    ("magic", 4, "STR"),  # !< MUST be "ni1\0" or "n+1\0".
)

assert sum(item[1] for item in HEADER_SIGNATURE) == HEADER_SIZE

# Q/S form transform codes
XFORM_CODES = {
    0: "NIFTI_XFORM_UNKNOWN",  # Arbitrary coordinates
    1: "NIFTI_XFORM_SCANNER_ANAT",  # Scanner-based anatomical coordinates
    2: "NIFTI_XFORM_ALIGNED_ANAT",  # Aligned to another file or to anatomical "truth"
    3: "NIFTI_XFORM_TALAIRACH",  # Talairach-Tournoux atlas; (0,0,0)=AC
    4: "NIFTI_XFORM_MNI_152",  # MNI 152 normalized coordinates
}

""" @brief Mapping NIFTI datatype codes to (field type, components per voxel)

complex64 voxels are stored as two float32 samples, rgb24 voxels as three
unsigned bytes; codes absent from this table cannot be decoded or encoded
"""

NIFTI_DATATYPES = {
    2: ("BY", 1),  # unsigned char (8 bits/voxel)
    4: ("SS", 1),  # signed short (16 bits/voxel)
    8: ("SL", 1),  # signed int (32 bits/voxel)
    16: ("FL", 1),  # float (32 bits/voxel)
    32: ("FL", 2),  # complex (64 bits/voxel)
    64: ("FD", 1),  # double (64 bits/voxel)
    128: ("BY", 3),  # RGB triple (24 bits/voxel)
    256: ("SB", 1),  # signed char (8 bits)
    511: ("BY", 3),  # RGB triple, legacy code
    512: ("US", 1),  # unsigned short (16 bits)
    768: ("UL", 1),  # unsigned int (32 bits)
}
