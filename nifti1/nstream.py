"""@package docstring
Endian-aware decoding and encoding of fixed-length binary fields over a byte
buffer with a movable cursor

Copyright (c) 2026 nifti1 developers
"""

__all__ = [
    "FieldType",
    "niistream",
    "NiftiLengthError",
    "NiftiEncodeError",
]

##====================================================================================
## dependent libraries
##====================================================================================

import sys
from enum import Enum
from functools import partial

import numpy as np

##====================================================================================
## global variables
##====================================================================================


class FieldType(Enum):
    """Closed set of field types found in a NIFTI-1 byte stream"""

    BY = "BY"  # unsigned char (1 byte)
    SB = "SB"  # signed char (1 byte)
    US = "US"  # unsigned short (2 bytes)
    SS = "SS"  # signed short (2 bytes)
    UL = "UL"  # unsigned long (4 bytes)
    SL = "SL"  # signed long (4 bytes)
    FL = "FL"  # floating point single (4 bytes)
    FD = "FD"  # floating point double (8 bytes)
    STR = "STR"  # fixed-width string


_numerictype = {
    FieldType.BY: "u1",
    FieldType.SB: "i1",
    FieldType.US: "u2",
    FieldType.SS: "i2",
    FieldType.UL: "u4",
    FieldType.SL: "i4",
    FieldType.FL: "f4",
    FieldType.FD: "f8",
}

_strippable = " \t\n\r\x0b\x0c\x00"

_padbyte = {"null": b"\x00", "spaces": b" "}


class NiftiLengthError(ValueError):
    pass


class NiftiEncodeError(ValueError):
    pass


##====================================================================================
## Stream class
##====================================================================================


class niistream:
    """A byte buffer with a cursor, decoding and encoding NIFTI field types

    The relationship between the declared stream endianness and the host
    endianness is resolved once in the constructor; the decoding and encoding
    function of every field type is bound at that point.

    Parameters
    ----------
    binary : bytes or bytearray, optional
        The instance string; an empty, writable buffer is created if omitted.
    big_endian : bool
        Endianness of the instance string (True for big endian).
    index : int
        Position in the instance string where reading starts.
    """

    def __init__(self, binary=None, big_endian=False, index=0):
        self.string = binary if binary is not None else bytearray()
        self.index = index
        self.file = None
        self.str_endian = bool(big_endian)
        self.equal_endian = self.str_endian == (sys.byteorder == "big")
        self._set_formats()

    def __len__(self):
        return len(self.string)

    def _set_formats(self):
        if self.equal_endian:
            order = "="
        else:
            order = ">" if self.str_endian else "<"

        self.format = {}
        self._decoder = {}
        self._encoder = {}
        for ftype, code in _numerictype.items():
            dtype = np.dtype(order + code)
            self.format[ftype] = dtype
            if not self.equal_endian and ftype in (FieldType.SS, FieldType.SL):
                # signed values in the foreign byte order go through the
                # unsigned type of the same width
                udtype = np.dtype(order + code.replace("i", "u"))
                self._decoder[ftype] = partial(_decode_swapped_signed, udtype)
                self._encoder[ftype] = partial(_encode_swapped_signed, udtype)
            else:
                self._decoder[ftype] = partial(_decode_numeric, dtype)
                self._encoder[ftype] = partial(_encode_numeric, dtype)
        self._decoder[FieldType.STR] = _decode_string
        self._encoder[FieldType.STR] = _encode_string

    def decode(self, length, type):
        """Decode `length` bytes at the cursor and advance the cursor

        A single decoded number is returned as a scalar, several numbers as a
        list, strings are right-trimmed of whitespace and NUL bytes. Returns
        None, leaving the cursor untouched, if the buffer is too short.
        """
        ftype = FieldType(type)
        if self.index + length > len(self.string):
            return None

        value = self._decoder[ftype](self._slice(length))
        self.skip(length)

        if ftype is FieldType.STR:
            return value
        value = value.tolist()
        if len(value) == 1:
            value = value[0]
        return value

    def decode_array(self, length, type):
        """Decode `length` bytes at the cursor into a flat numpy array

        Trailing bytes that do not fill a whole element are consumed but
        ignored.
        """
        ftype = FieldType(type)
        if ftype is FieldType.STR:
            raise ValueError("strings can not be decoded as an array")
        if self.index + length > len(self.string):
            return None

        value = self._decoder[ftype](self._slice(length))
        self.skip(length)
        return value

    def read(self, length):
        """Return `length` raw bytes at the cursor, or None past the end"""
        if self.index + length > len(self.string):
            return None
        value = bytes(self._slice(length))
        self.skip(length)
        return value

    def encode(self, value, type):
        """Encode a value, or a list of values, to a binary string"""
        ftype = FieldType(type)
        if ftype is FieldType.STR:
            return self._encoder[ftype](value)
        if not isinstance(value, (list, tuple, np.ndarray)):
            value = [value]
        return self._encoder[ftype](value)

    def encode_string_to_length(self, binary, target_length, pad="null"):
        """Pad a binary string to `target_length` bytes

        Parameters
        ----------
        binary : bytes or str
            The string to process.
        target_length : int
            The length of the returned binary string.
        pad : str
            'null' pads with zero bytes, 'spaces' with the space character.

        Returns
        -------
        bytes
            The padded string; a string of exactly `target_length` bytes is
            returned unchanged.
        """
        if pad not in _padbyte:
            raise ValueError(f"Could not identify padding type {pad}")

        if isinstance(binary, str):
            binary = binary.encode("latin-1")

        length = len(binary)
        if length < target_length:
            return bytes(binary) + _padbyte[pad] * (target_length - length)
        elif length == target_length:
            return bytes(binary)
        else:
            raise NiftiLengthError(
                f"The specified string is longer than the allowed maximum length "
                f"(String: {binary!r}, Target length: {target_length})."
            )

    def skip(self, offset):
        """Move the cursor forward (positive) or backward (negative)"""
        self.index += offset

    def rest_length(self):
        return len(self.string) - self.index

    def rest_string(self):
        return bytes(self.string[self.index :])

    def reset(self):
        self.string = bytearray()
        self.index = 0

    def reset_index(self):
        self.index = 0

    def set_string(self, binary):
        self.string = binary
        self.index = 0

    def set_file(self, file):
        """Write directly to an open binary file instead of the buffer"""
        self.file = file

    def write(self, binary):
        """Write a binary string at the cursor and advance the cursor

        A cursor moved past the end of the buffer zero-fills the gap first.
        """
        if self.file is not None:
            self.file.write(binary)
        else:
            if self.index < 0:
                raise IndexError(f"can not write at negative index {self.index}")
            if not isinstance(self.string, bytearray):
                self.string = bytearray(self.string)
            if self.index > len(self.string):
                self.string.extend(b"\x00" * (self.index - len(self.string)))
            self.string[self.index : self.index + len(binary)] = binary
        self.skip(len(binary))

    def _slice(self, length):
        return memoryview(self.string)[self.index : self.index + length]


##====================================================================================
## Field type codecs
##====================================================================================


def _decode_numeric(dtype, buf):
    count = len(buf) // dtype.itemsize
    if count == 0:
        return np.empty(0, dtype=dtype.newbyteorder("="))
    value = np.frombuffer(buf, dtype=dtype, count=count)
    return value.astype(dtype.newbyteorder("="))


def _decode_swapped_signed(udtype, buf):
    bits = udtype.itemsize * 8
    count = len(buf) // udtype.itemsize
    if count == 0:
        return np.empty(0, dtype=np.dtype("=i" + str(udtype.itemsize)))
    value = np.frombuffer(buf, dtype=udtype, count=count).astype(np.int64)
    value[value >= 2 ** (bits - 1)] -= 2**bits
    return value.astype(np.dtype("=i" + str(udtype.itemsize)))


def _checkinteger(dtype, value):
    if value.dtype.kind not in "biuf":
        raise NiftiEncodeError(f"can not encode {value.tolist()!r} as {dtype.name}")
    if value.size == 0:
        return value
    if value.dtype.kind == "f":
        if not np.all(np.isfinite(value)) or np.any(np.mod(value, 1) != 0):
            raise NiftiEncodeError(
                f"can not encode non-integer {value.tolist()!r} as {dtype.name}"
            )
    info = np.iinfo(dtype)
    if value.min() < info.min or value.max() > info.max:
        raise NiftiEncodeError(
            f"value {value.tolist()!r} is out of the range of {dtype.name}"
        )
    return value


def _asarray(dtype, values):
    try:
        value = np.asarray(values)
    except (TypeError, ValueError) as e:
        raise NiftiEncodeError(f"can not encode {values!r}: {e}") from e
    if dtype.kind in "iu":
        return _checkinteger(dtype, value)
    if value.dtype.kind not in "biuf":
        raise NiftiEncodeError(f"can not encode {values!r} as {dtype.name}")
    return value


def _encode_numeric(dtype, values):
    return _asarray(dtype, values).astype(dtype).tobytes()


def _encode_swapped_signed(udtype, values):
    bits = udtype.itemsize * 8
    value = _asarray(np.dtype("i" + str(udtype.itemsize)), values).astype(np.int64)
    return np.mod(value, 2**bits).astype(udtype).tobytes()


def _decode_string(buf):
    return bytes(buf).decode("latin-1").rstrip(_strippable)


def _encode_string(value):
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if value is None:
        return b""
    if not isinstance(value, str):
        raise NiftiEncodeError(f"can not encode {value!r} as a string")
    try:
        return value.encode("latin-1")
    except UnicodeEncodeError as e:
        raise NiftiEncodeError(f"can not encode {value!r} as a string: {e}") from e
