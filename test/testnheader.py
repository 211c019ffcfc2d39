"""nheader.py test unit

To run the test, please run

   python3 -m unittest test.testnheader

in the root folder.

Copyright (c) 2026 nifti1 developers
"""

import unittest
import sys
import os
import warnings

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from nifti1.constants import HEADER_SIGNATURE, HEADER_SIZE
from nifti1.nstream import niistream, NiftiEncodeError
from nifti1.nheader import (
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
from nifti1.nfile import nifticreate

import numpy as np


def encodeheader(header, big_endian=False, pad="null"):
    stream = niistream(None, big_endian)
    write_header(header, stream, pad)
    return stream


class Test_nheader(unittest.TestCase):
    def setUp(self):
        self.hdr = nifticreate(
            np.zeros((2, 3, 4), dtype=np.float32),
            descrip="test volume",
            intent_name="none",
            dim_info=fps_into_dim_info(1, 2, 3),
            qform_code=2,
        )

    def test_signature(self):
        self.assertEqual(len(HEADER_SIGNATURE), 43)
        self.assertEqual(sum(item[1] for item in HEADER_SIGNATURE), HEADER_SIZE)
        self.assertEqual(HEADER_SIGNATURE[0][0], "sizeof_hdr")
        self.assertEqual(HEADER_SIGNATURE[-1][0], "magic")

    def test_header_roundtrip(self):
        stream = encodeheader(self.hdr)
        self.assertEqual(len(stream), HEADER_SIZE)
        self.assertEqual(bytes(stream.string[0:4]), b"\x5c\x01\x00\x00")
        self.assertEqual(bytes(stream.string[344:348]), b"n+1\x00")

        stream.reset_index()
        check_header(stream)
        hdr = parse_header(stream)
        self.assertEqual(stream.index, HEADER_SIZE)
        for name, length, type in HEADER_SIGNATURE:
            self.assertEqual(hdr[name], self.hdr[name], name)

        self.assertEqual(hdr["dim"], [3, 2, 3, 4, 1, 1, 1, 1])
        self.assertEqual(hdr["vox_offset"], 352.0)
        self.assertEqual(hdr["descrip"], "test volume")

    def test_big_endian_roundtrip(self):
        self.hdr["intent_code"] = -5
        self.hdr["slice_start"] = -1
        stream = encodeheader(self.hdr, big_endian=True)
        self.assertEqual(bytes(stream.string[0:4]), b"\x00\x00\x01\x5c")

        stream.reset_index()
        check_header(stream)
        hdr = parse_header(stream)
        self.assertEqual(hdr["intent_code"], -5)
        self.assertEqual(hdr["slice_start"], -1)
        self.assertEqual(hdr["dim"], [3, 2, 3, 4, 1, 1, 1, 1])
        self.assertEqual(hdr["srow_x"], [1.0, 0.0, 0.0, 0.0])

    def test_derived_fields(self):
        stream = encodeheader(self.hdr)
        stream.reset_index()
        hdr = parse_header(stream)
        self.assertEqual(hdr["freq_dim"], 1)
        self.assertEqual(hdr["phase_dim"], 2)
        self.assertEqual(hdr["slice_dim"], 3)
        self.assertEqual(hdr["qform_code_descr"], "NIFTI_XFORM_ALIGNED_ANAT")
        self.assertEqual(hdr["sform_code_descr"], "NIFTI_XFORM_SCANNER_ANAT")

    def test_unknown_xform_code(self):
        self.hdr["qform_code"] = -1
        self.hdr["sform_code"] = 7
        stream = encodeheader(self.hdr)
        stream.reset_index()
        hdr = parse_header(stream)
        self.assertNotIn("qform_code_descr", hdr)
        self.assertNotIn("sform_code_descr", hdr)

    def test_bad_header_length(self):
        raw = bytearray(encodeheader(self.hdr).string)
        raw[0:4] = (100).to_bytes(4, "little")
        stream = niistream(raw)
        stream.index = 20
        with self.assertRaises(NiftiHeaderError) as cm:
            check_header(stream)
        self.assertIsInstance(cm.exception.cause, HeaderLengthError)
        self.assertIsInstance(cm.exception, IOError)
        self.assertEqual(stream.index, 20)

    def test_bad_magic(self):
        raw = bytearray(encodeheader(self.hdr).string)
        raw[344:348] = b"abc\x00"
        with self.assertRaises(NiftiHeaderError) as cm:
            check_header(niistream(raw))
        self.assertIsInstance(cm.exception.cause, MagicCodeError)
        self.assertIn("abc", str(cm.exception))

    def test_magic_needs_null_terminator(self):
        raw = bytearray(encodeheader(self.hdr).string)
        for magic in (b"n+1 ", b"ni1 ", b"n+1x", b"N+1\x00"):
            raw[344:348] = magic
            with self.assertRaises(NiftiHeaderError):
                check_header(niistream(raw))
        raw[344:348] = b"ni1\x00"
        check_header(niistream(raw))

    def test_truncated_header(self):
        with self.assertRaises(NiftiHeaderError):
            check_header(niistream(b"\x5c\x01\x00\x00" + b"\x00" * 100))

    def test_check_restores_index(self):
        stream = encodeheader(self.hdr)
        stream.index = 100
        check_header(stream)
        self.assertEqual(stream.index, 100)

    def test_write_missing_field(self):
        del self.hdr["descrip"]
        stream = niistream()
        with self.assertRaises(NiftiEncodeError) as cm:
            write_header(self.hdr, stream)
        self.assertIn("descrip", str(cm.exception))
        self.assertEqual(len(stream), 0)

    def test_write_too_long_string(self):
        self.hdr["descrip"] = "x" * 81
        with self.assertRaises(NiftiEncodeError) as cm:
            encodeheader(self.hdr)
        self.assertIn("descrip", str(cm.exception))

    def test_write_bad_value(self):
        self.hdr["datatype"] = -1
        with self.assertRaises(NiftiEncodeError):
            encodeheader(self.hdr)
        self.hdr["datatype"] = 16
        self.hdr["dim"] = [3, 2, 3, 4, 1, 1, 1, 1, 1]
        with self.assertRaises(NiftiEncodeError):
            encodeheader(self.hdr)

    def test_space_padding(self):
        self.hdr["descrip"] = ""
        stream = encodeheader(self.hdr, pad="spaces")
        self.assertEqual(bytes(stream.string[148:228]), b" " * 80)
        stream.reset_index()
        self.assertEqual(parse_header(stream)["descrip"], "")

    def test_bad_rank_warns(self):
        self.hdr["dim"] = [0, 2, 3, 4, 1, 1, 1, 1]
        stream = encodeheader(self.hdr)
        stream.reset_index()
        with self.assertWarns(UserWarning):
            parse_header(stream)

        self.hdr["dim"] = [3, 2, 3, 4, 1, 1, 1, 1]
        stream = encodeheader(self.hdr)
        stream.reset_index()
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            parse_header(stream)


class Test_dim_info(unittest.TestCase):
    def test_pack_unpack(self):
        dim_info = fps_into_dim_info(1, 2, 3)
        self.assertEqual(dim_info, 57)
        self.assertEqual(dim_info_to_freq_dim(dim_info), 1)
        self.assertEqual(dim_info_to_phase_dim(dim_info), 2)
        self.assertEqual(dim_info_to_slice_dim(dim_info), 3)
        self.assertEqual(fps_into_dim_info(0, 0, 0), 0)
        self.assertEqual(dim_info_to_slice_dim(0xFF), 3)


class Test_niicodemap(unittest.TestCase):
    def test_code_to_name(self):
        self.assertEqual(niicodemap("datatype", 16), "float32")
        self.assertEqual(niicodemap("datatype", 511), "rgb24")
        self.assertEqual(niicodemap("qform_code", 1), "scanner_anat")
        self.assertEqual(niicodemap("slice_code", np.int16(3)), "alt_inc")
        self.assertEqual(niicodemap("space_units", 2), "mm")

    def test_name_to_code(self):
        self.assertEqual(niicodemap("datatype", "uint8"), 2)
        self.assertEqual(niicodemap("datatype", "rgb24"), 128)
        self.assertEqual(niicodemap("sform_code", "mni_152"), 4)
        self.assertEqual(niicodemap("time_units", "msec"), 16)

    def test_unknown(self):
        with self.assertRaises(ValueError):
            niicodemap("datatype", 3)
        with self.assertRaises(ValueError):
            niicodemap("datatype", "bool")
        with self.assertRaises(ValueError):
            niicodemap("unknown", 3)

    def test_xyzt_units(self):
        self.assertEqual(xyzt_to_units(10), ("mm", "sec"))
        self.assertEqual(xyzt_to_units(0), ("unknown", "unknown"))
        with self.assertRaises(ValueError):
            xyzt_to_units(56)


if __name__ == "__main__":
    unittest.main()
