"""__main__.py test unit

To run the test, please run

   python3 -m unittest test.testcli

in the root folder.

Copyright (c) 2026 nifti1 developers
"""

import unittest
import sys
import os
import io
import json
import shutil
import tempfile
from contextlib import redirect_stdout
from unittest import mock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from nifti1.__main__ import main
from nifti1.nfile import savenifti, loadnifti

import numpy as np


def runmain(*args):
    out = io.StringIO()
    with mock.patch.object(sys, "argv", ["nifti1"] + list(args)):
        with redirect_stdout(out):
            main()
    return out.getvalue()


class Test_cli(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.file = os.path.join(self.tmpdir, "test.nii")
        savenifti(np.arange(24, dtype=np.int16).reshape(2, 3, 4), self.file)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_print_header(self):
        info = json.loads(runmain(self.file, "-i", "-x"))
        self.assertEqual(info["header"]["dim"], [3, 2, 3, 4, 1, 1, 1, 1])
        self.assertEqual(info["header"]["magic"], "n+1")
        self.assertEqual(info["names"]["datatype"], "int16")
        self.assertEqual(info["names"]["qform_code"], "unknown")
        self.assertEqual(info["names"]["sform_code"], "scanner_anat")
        self.assertEqual(info["names"]["space_units"], "unknown")
        self.assertEqual(info["extension"], [])
        self.assertEqual(info["image"]["length"], 24)
        self.assertEqual(info["image"]["min"], 0)
        self.assertEqual(info["image"]["max"], 23)

    def test_convert(self):
        output = os.path.join(self.tmpdir, "copy.nii.gz")
        runmain(self.file, "-o", output)
        obj = loadnifti(output)
        self.assertTrue(obj.read_success)
        self.assertEqual(obj.image.tolist(), list(range(24)))

        with self.assertRaises(SystemExit):
            runmain(self.file, "-o", output)
        runmain(self.file, "-o", output, "-f")

    def test_missing_file(self):
        with self.assertRaises(SystemExit):
            runmain(os.path.join(self.tmpdir, "none.nii"))


if __name__ == "__main__":
    unittest.main()
