"""@package docstring
File IO to load/decode and encode/save NIFTI-1 (.nii/.nii.gz) files

Copyright (c) 2026 nifti1 developers
"""

__all__ = [
    "niiread",
    "niiwrite",
    "niiobject",
    "nifticreate",
    "loadnifti",
    "savenifti",
]

##====================================================================================
## dependent libraries
##====================================================================================

import os
import re
import warnings
import zlib

import numpy as np

from .constants import GZIP_MAGIC, HEADER_SIGNATURE, HEADER_SIZE, MIN_VOX_OFFSET
from .nstream import niistream, NiftiEncodeError
from .nheader import check_header, parse_header, write_header, niicodemap
from .nextension import parse_extended_header, write_extended_header
from .nimage import (
    niidatatype,
    read_image,
    write_image,
    get_image_ndarray,
    image_length,
)
from .nview import niiview

##====================================================================================
## global variables
##====================================================================================

_typesize = {"BY": 1, "SB": 1, "US": 2, "SS": 2, "UL": 4, "SL": 4, "FL": 4, "FD": 8}

##====================================================================================
## Reading
##====================================================================================


class niiread:
    """Parse a NIFTI-1 file or binary string

    Problems with the file itself (missing, unreadable, a directory, too
    small, broken gzip stream) are recorded in `msg` and leave `success`
    False; a malformed header always raises NiftiHeaderError.

    Parameters
    ----------
    source : str or bytes
        path to a .nii/.nii.gz file, or a binary NIFTI string if opt['bin']
    opt : dict
        'bin': source is a binary string (default False)
        'image': decode the voxel payload into `image` (default False)
        'ndarray': also reshape the image into `image_ndarray`; implies 'image'
        'endian': 'auto' (default), 'little' or 'big'
    """

    def __init__(self, source=None, opt={}, **kwargs):
        opt = dict(opt)
        opt.update(kwargs)
        opt.setdefault("bin", False)
        opt.setdefault("image", False)
        opt.setdefault("ndarray", False)
        opt.setdefault("endian", "auto")
        if opt["ndarray"]:
            opt["image"] = True

        self.opt = opt
        self.msg = []
        self.success = False
        self.stream = None
        self.hdr = None
        self.extended_header = []
        self.image = None
        self.image_ndarray = None

        self._set_stream(source)
        if self.stream is not None:
            self._parse_header()

    def read_image(self):
        """Decode the voxel payload from vox_offset to the end of the data"""
        self.image = read_image(self.stream, self.hdr)
        expected = image_length(self.hdr["dim"], self.hdr["datatype"])
        if len(self.image) != expected:
            self.add_msg(
                f"Warning! Image holds {len(self.image)} values, "
                f"the header dimensions expect {expected}."
            )
        return self.image

    def get_image_ndarray(self):
        try:
            self.image_ndarray = get_image_ndarray(
                self.image, self.hdr["dim"], self.hdr["datatype"]
            )
        except ValueError as e:
            self.add_msg(f"Can't reshape the image to the header dimensions: {e}")
        return self.image_ndarray

    def add_msg(self, msg):
        self.msg.append(msg)

    def _set_stream(self, source):
        if self.opt["bin"]:
            binary = source
        else:
            binary = self._open_file(source)
            if binary is None:
                return

        if bytes(binary[:2]) == GZIP_MAGIC:
            try:
                binary = zlib.decompress(bytes(binary), zlib.MAX_WBITS | 32)
            except zlib.error as e:
                self.add_msg(f"Error! Unable to decompress the gzip stream: {e}")
                return

        self.stream = niistream(binary, self._is_big_endian(binary))

    def _is_big_endian(self, binary):
        endian = self.opt["endian"]
        if endian in ("little", "big"):
            return endian == "big"
        if endian != "auto":
            raise ValueError(f"endian must be 'auto', 'little' or 'big', not {endian}")

        # a byte-swapped sizeof_hdr gives away a big-endian file
        sizeof_hdr = niistream(binary, False).decode(4, "UL")
        return sizeof_hdr != HEADER_SIZE and (
            niistream(binary, True).decode(4, "UL") == HEADER_SIZE
        )

    def _parse_header(self):
        check_header(self.stream)
        self.hdr = parse_header(self.stream)
        self.extended_header = parse_extended_header(
            self.stream, self.hdr["vox_offset"]
        )

        if self.opt["image"]:
            self.read_image()
        if self.opt["ndarray"]:
            self.get_image_ndarray()

        self.success = True

    def _open_file(self, file):
        if not isinstance(file, (str, os.PathLike)):
            self.add_msg(f"Error! Invalid file name {file!r}.")
        elif not os.path.exists(file):
            self.add_msg(f"Error! The file you have supplied does not exist ({file}).")
        elif os.path.isdir(file):
            self.add_msg(f"Error! File is a directory ({file}).")
        elif not os.access(file, os.R_OK):
            self.add_msg(
                f"Error! File exists but I don't have permission to read it ({file})."
            )
        elif os.path.getsize(file) <= 8:
            self.add_msg(
                f"Error! File is too small to contain NIFTI information ({file})."
            )
        else:
            with open(file, "rb") as fid:
                return fid.read()
        return None


##====================================================================================
## Writing
##====================================================================================


class niiwrite:
    """Encode a niiobject (header, extended header, image) to a NIFTI file

    The destination is checked first: an existing file must be writable,
    missing parent folders are created. File problems are recorded in `msg`
    and leave `success` False; a header or image that can not be encoded
    raises before anything is written. A file name ending with .gz is
    gzip-compressed.

    Parameters
    ----------
    obj : niiobject
        any object with header, extended_header and image attributes
    file_name : str
        the output .nii or .nii.gz path
    opt : dict
        'endian': 'little' (default) or 'big'
        'pad': padding of header strings, 'null' (default) or 'spaces'
    """

    def __init__(self, obj, file_name, opt={}, **kwargs):
        opt = dict(opt)
        opt.update(kwargs)
        opt.setdefault("endian", "little")
        opt.setdefault("pad", "null")

        self.obj = obj
        self.file_name = file_name
        self.opt = opt
        self.msg = []
        self.success = False

    def write(self):
        if not self._check_file(self.file_name):
            return self.success

        binary = self.encode()
        if re.search(r"\.[Gg][Zz]$", os.fspath(self.file_name)):
            gzipper = zlib.compressobj(wbits=(zlib.MAX_WBITS | 16))
            binary = gzipper.compress(binary) + gzipper.flush()

        try:
            with open(self.file_name, "wb") as fid:
                fid.write(binary)
        except OSError as e:
            self.msg.append(f"Error! Unable to write the file ({self.file_name}): {e}")
            return self.success

        self.success = True
        return self.success

    def encode(self):
        """Return the complete NIFTI byte string of the object"""
        stream = niistream(None, self.opt["endian"] == "big")
        header = self.obj.header
        extended = self.obj.extended_header or []

        write_header(header, stream, self.opt["pad"])
        write_extended_header(extended, stream)

        vox_offset = int(header["vox_offset"])
        if stream.index > vox_offset:
            raise NiftiEncodeError(
                f"vox_offset {vox_offset} is smaller than the {stream.index} bytes "
                "taken by the header and its extensions"
            )
        stream.write(b"\x00" * (vox_offset - stream.index))

        write_image(self.obj.image, header, stream)
        return bytes(stream.string)

    def _check_file(self, file):
        file = os.fspath(file)
        if os.path.exists(file):
            if os.path.isdir(file):
                self.msg.append(f"Error! The destination is a directory ({file}).")
                return False
            if not os.access(file, os.W_OK):
                self.msg.append(
                    "Error! The program does not have permission or resources "
                    f"to create the file you specified: ({file})"
                )
                return False
            return True

        path = os.path.dirname(file)
        if path and not os.path.isdir(path):
            try:
                os.makedirs(path)
            except OSError as e:
                self.msg.append(f"Error! Unable to create the folder {path}: {e}")
                return False
        return True


##====================================================================================
## NIFTI object
##====================================================================================


class niiobject:
    """Header, extended header and image of a NIFTI-1 dataset

    A niiobject is usually built by reading a file or a binary string, but
    can also start empty and be filled by the user.

        obj = niiobject("test.nii")
        obj = niiobject("test.nii.gz", image=True)
        obj = niiobject(rawbytes, image=True)
        obj.view()[0][1][2]
        obj.write("copy.nii.gz")

    Parameters
    ----------
    source : str, os.PathLike, bytes or None
        a file path, a binary NIFTI string, or None for an empty object
    opt : dict
        'verbose': emit recorded messages as warnings (default True); all
        other keys are passed to niiread
    """

    def __init__(self, source=None, opt={}, **kwargs):
        opt = dict(opt)
        opt.update(kwargs)
        opt.setdefault("verbose", True)

        self.opt = opt
        self.errors = []
        self.read_success = None
        self.write_success = None
        self.header = None
        self.extended_header = []
        self.image = None
        self._source = None

        if source is not None:
            self.read(source)

    def read(self, source):
        """Read header, extensions (and image if opt['image']) from a path or bytes"""
        if not isinstance(source, (bytes, bytearray, str, os.PathLike)):
            raise TypeError(
                f"Invalid argument. Expected a file name, bytes or None, got {type(source).__name__}."
            )
        self._source = source
        r = niiread(source, self._readopt(source))
        if r.success:
            self.read_success = True
            self.header = r.hdr
            self.extended_header = r.extended_header
            self.image = None
            if r.image_ndarray is not None:
                self.image = r.image_ndarray
            elif r.image is not None:
                self.image = r.image
        else:
            self.read_success = False
        if r.msg:
            self.add_msg(r.msg)
        return self.read_success

    def get_image(self):
        """Decode the image of the source this object was read from"""
        opt = self._readopt(self._source)
        opt["image"] = True
        opt["ndarray"] = False
        r = niiread(self._source, opt)
        if r.success:
            self.image = r.image
        if r.msg:
            self.add_msg(r.msg)
        return self.image

    def view(self):
        """Return a niiview over the flat image, loading the image if needed"""
        if self.image is None:
            self.get_image()
        if self.image is None:
            raise ValueError("no image data available")

        components = niidatatype(self.header["datatype"])[1]
        dim = list(self.header["dim"])
        rank = int(dim[0])
        if components > 1:
            dim = [rank + 1] + dim[1 : rank + 1] + [components]
        if isinstance(self.image, np.ndarray) and not self.image.flags.c_contiguous:
            # leaf writes must land in self.image, not in a reshaped copy
            self.image = np.ascontiguousarray(self.image)
        image = self.image
        if isinstance(image, np.ndarray):
            image = image.reshape(-1)
        return niiview(image, dim)

    def write(self, file_name, opt={}, **kwargs):
        """Write header, extended header and image to a .nii or .nii.gz file"""
        if not isinstance(file_name, (str, os.PathLike)):
            raise TypeError(
                f"Invalid file_name. Expected a string, got {type(file_name).__name__}."
            )
        w = niiwrite(self, file_name, opt, **kwargs)
        w.write()
        self.write_success = w.success
        if w.msg:
            self.add_msg(w.msg)
        return self.write_success

    def add_msg(self, msg):
        if not isinstance(msg, list):
            msg = [msg]
        if self.opt["verbose"]:
            for item in msg:
                warnings.warn(item)
        self.errors.extend(msg)

    def _readopt(self, source):
        opt = {k: v for k, v in self.opt.items() if k != "verbose"}
        opt["bin"] = isinstance(source, (bytes, bytearray))
        return opt


##====================================================================================
## Creating, loading and saving
##====================================================================================


def nifticreate(img, **kwargs):
    """
    Create a default NIFTI-1 header from an image array.

    Parameters
    ----------
    img : numpy.ndarray
        The image data array matching the header to create.
    **kwargs :
        values for any header field, replacing the defaults

    Returns
    -------
    header : dict
        Dictionary representing the NIFTI-1 header.
    """
    img = np.asarray(img)
    try:
        datatype = niicodemap("datatype", img.dtype.name)
        niidatatype(datatype)
    except ValueError:
        raise ValueError(f"Unsupported image data type: {img.dtype.name}") from None
    if not 1 <= img.ndim <= 7:
        raise ValueError(f"NIFTI-1 images have 1 to 7 dimensions, got {img.ndim}")

    header = {}
    for name, length, type in HEADER_SIGNATURE:
        if type == "STR":
            header[name] = ""
        elif length == _typesize[type]:
            header[name] = 0
        else:
            header[name] = [0] * (length // _typesize[type])

    header["sizeof_hdr"] = HEADER_SIZE
    header["datatype"] = datatype
    header["bitpix"] = img.dtype.itemsize * 8
    header["dim"] = [img.ndim] + list(img.shape) + [1] * (7 - img.ndim)
    header["pixdim"] = [1.0] * 8
    header["vox_offset"] = float(MIN_VOX_OFFSET)
    header["scl_slope"] = 1.0
    header["magic"] = "n+1"
    header["srow_x"] = [1.0, 0.0, 0.0, 0.0]
    header["srow_y"] = [0.0, 1.0, 0.0, 0.0]
    header["srow_z"] = [0.0, 0.0, 1.0, 0.0]
    header["sform_code"] = 1

    for key, value in kwargs.items():
        if key not in header:
            raise ValueError(f"Unknown NIFTI-1 header field: {key}")
        header[key] = value

    return header


def loadnifti(filename, opt={}, **kwargs):
    """
    Load a NIFTI-1 file (.nii or .nii.gz) with its image

    Returns
    -------
    obj : niiobject
        read_success tells whether the file could be read, errors lists why not
    """
    opt = dict(opt)
    opt.setdefault("image", True)
    return niiobject(filename, opt, **kwargs)


def savenifti(img, filename, header=None, opt={}, **kwargs):
    """
    Write an image to a NIFTI-1 (.nii) or compressed NIFTI-1 file (.nii.gz)

    Parameters
    ----------
    img : numpy.ndarray
        Numerical array to be stored in the NIFTI file
    filename : str
        Output file name, can have a suffix of '.nii' or '.nii.gz'
    header : dict, optional
        a header created by nifticreate or read from a file; a default
        header matching img is created if omitted

    Returns
    -------
    success : bool
    """
    opt = dict(opt)
    opt.update(kwargs)
    opt.setdefault("verbose", True)

    obj = niiobject(None, {"verbose": opt.pop("verbose")})
    obj.image = np.asarray(img)
    obj.header = nifticreate(obj.image) if header is None else header
    return obj.write(filename, opt)
