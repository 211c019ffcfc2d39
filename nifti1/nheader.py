"""@package docstring
Validating, decoding and encoding the fixed 348-byte NIFTI-1 header

Copyright (c) 2026 nifti1 developers
"""

__all__ = [
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
]

##====================================================================================
## dependent libraries
##====================================================================================

import warnings

from .constants import HEADER_SIGNATURE, HEADER_SIZE, MAGIC, XFORM_CODES
from .nstream import NiftiEncodeError

##====================================================================================
## Exceptions
##====================================================================================


class HeaderLengthError(IOError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Bad Header Length {value}")


class MagicCodeError(IOError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Bad Magic Code {value} (should be ni1 or n+1)")


class NiftiHeaderError(IOError):
    """The header failed validation; `cause` holds the specific error"""

    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"Header appears to be malformed: {cause}")


##====================================================================================
## Header validation
##====================================================================================


def check_header(stream):
    """Validate the header size and magic code of a stream

    The stream index is restored to its original position afterwards, so the
    check can run at any point of the decoding.

    Raises
    ------
    NiftiHeaderError
        if sizeof_hdr is not 348 or the magic bytes are neither "ni1\\0" nor
        "n+1\\0"
    """
    starting_index = stream.index
    try:
        stream.index = 0
        sizeof_hdr = stream.decode(4, "UL")
        if sizeof_hdr != HEADER_SIZE:
            raise HeaderLengthError(sizeof_hdr)

        stream.index = 344
        magic = stream.read(4)
        if magic not in MAGIC:
            raise MagicCodeError(magic)
    except (HeaderLengthError, MagicCodeError) as e:
        raise NiftiHeaderError(e) from e
    finally:
        stream.index = starting_index


##====================================================================================
## Header decoding and encoding
##====================================================================================


def parse_header(stream):
    """Read the 348-byte header field by field from the stream cursor

    The stream is left positioned right after the magic field. Besides the
    fields of the byte signature, the returned dict holds freq_dim,
    phase_dim and slice_dim unpacked from dim_info, and qform_code_descr /
    sform_code_descr when the transform codes are known.
    """
    header = {}
    for name, length, type in HEADER_SIGNATURE:
        header[name] = stream.decode(length, type)

    if header["dim_info"] is not None:
        header["freq_dim"] = dim_info_to_freq_dim(header["dim_info"])
        header["phase_dim"] = dim_info_to_phase_dim(header["dim_info"])
        header["slice_dim"] = dim_info_to_slice_dim(header["dim_info"])

    for name in ("qform_code", "sform_code"):
        if header[name] in XFORM_CODES:
            header[name + "_descr"] = XFORM_CODES[header[name]]

    dim = header["dim"]
    if isinstance(dim, list) and not 1 <= dim[0] <= 7:
        warnings.warn(f"number of dimensions dim[0]={dim[0]} is outside of [1,7]")

    return header


def write_header(header, stream, pad="null"):
    """Encode the header fields in signature order and write them to the stream

    Every field is padded to its declared length. The whole header is encoded
    before anything is written, so a field that fails to encode leaves the
    stream untouched.

    Raises
    ------
    NiftiEncodeError
        naming the first field that can not be encoded at its type and length
    """
    buf = []
    for name, length, type in HEADER_SIGNATURE:
        try:
            binary = stream.encode(header[name], type)
            buf.append(stream.encode_string_to_length(binary, length, pad))
        except (KeyError, ValueError) as e:
            raise NiftiEncodeError(
                f"unable to encode header field {name} ({length} bytes, {type}): {e}"
            ) from e

    stream.write(b"".join(buf))


##====================================================================================
## dim_info packing
##====================================================================================


def extract_dim_info(dim_info, offset=0):
    return (int(dim_info) >> offset) & 0x03


def dim_info_to_freq_dim(dim_info):
    return extract_dim_info(dim_info, 0)


def dim_info_to_phase_dim(dim_info):
    return extract_dim_info(dim_info, 2)


def dim_info_to_slice_dim(dim_info):
    return extract_dim_info(dim_info, 4)


def fps_into_dim_info(frequency_dim, phase_dim, slice_dim):
    """Pack frequency, phase and slice dimensions into a dim_info byte"""
    return (
        ((frequency_dim & 0x03) << 0)
        | ((phase_dim & 0x03) << 2)
        | ((slice_dim & 0x03) << 4)
    )




##====================================================================================
## Code names
##====================================================================================

_codenames = {
    "datatype": {
        2: "uint8",
        4: "int16",
        8: "int32",
        16: "float32",
        32: "complex64",
        64: "float64",
        128: "rgb24",
        256: "int8",
        511: "rgb24",
        512: "uint16",
        768: "uint32",
        1024: "int64",
        1280: "uint64",
        1536: "float128",
        1792: "complex128",
        2048: "complex256",
        2304: "rgba32",
    },
    "slice_code": {
        0: "unknown",
        1: "seq_inc",
        2: "seq_dec",
        3: "alt_inc",
        4: "alt_dec",
        5: "alt_inc2",
        6: "alt_dec2",
    },
    "xform": {
        0: "unknown",
        1: "scanner_anat",
        2: "aligned_anat",
        3: "talairach",
        4: "mni_152",
    },
    # xyzt_units packs a space unit in bits 0-2 and a time unit in bits 3-5
    "space_units": {0: "unknown", 1: "meter", 2: "mm", 3: "micron"},
    "time_units": {
        0: "unknown",
        8: "sec",
        16: "msec",
        24: "usec",
        32: "hz",
        40: "ppm",
        48: "rads",
    },
}

_codealias = {"qform_code": "xform", "sform_code": "xform"}


def niicodemap(name, value):
    """
    Convert between NIFTI numeric codes and their names.

    Parameters
    ----------
    name : str
        one of 'datatype', 'slice_code', 'qform_code', 'sform_code',
        'space_units', 'time_units'
    value : int or str
        a code to name, or a name to convert back to its (first) code

    Returns
    -------
    str or int
    """
    table = _codenames.get(_codealias.get(name, name))
    if table is None:
        raise ValueError(f"Unsupported field name: {name}")

    if isinstance(value, str):
        for code, codename in table.items():
            if codename == value:
                return code
        raise ValueError(f"Name '{value}' not found in {name}")

    try:
        return table[int(value)]
    except (KeyError, TypeError, ValueError):
        raise ValueError(f"Code {value} not found in {name}") from None


def xyzt_to_units(xyzt_units):
    """Split xyzt_units into its (space, time) unit names"""
    xyzt_units = int(xyzt_units)
    return (
        niicodemap("space_units", xyzt_units & 0x07),
        niicodemap("time_units", xyzt_units & 0x38),
    )
