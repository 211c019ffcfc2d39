"""Command line utility for nifti1.

Prints the header of NIFTI-1 (.nii/.nii.gz) files as JSON, or re-encodes a
file to a new .nii/.nii.gz file.

Call

    python -mnifti1 -h

to get help with command line usage.
"""

import argparse
import json
import os
import sys

import numpy as np

from . import niiobject, niidatatype, niicodemap
from .nheader import xyzt_to_units


def codename(name, value):
    try:
        return niicodemap(name, value)
    except ValueError:
        return None


def summary(obj, args):
    hdr = obj.header
    try:
        space, time = xyzt_to_units(hdr["xyzt_units"])
    except ValueError:
        space, time = None, None
    info = {
        "header": hdr,
        "names": {
            "datatype": codename("datatype", hdr["datatype"]),
            "slice_code": codename("slice_code", hdr["slice_code"]),
            "qform_code": codename("qform_code", hdr["qform_code"]),
            "sform_code": codename("sform_code", hdr["sform_code"]),
            "space_units": space,
            "time_units": time,
        },
    }
    if args.extension:
        info["extension"] = [
            {"esize": ext["esize"], "ecode": ext["ecode"], "bytes": len(ext["data"])}
            for ext in obj.extended_header
        ]
    if args.image:
        img = np.asarray(obj.image)
        info["image"] = {
            "type": niidatatype(obj.header["datatype"])[0],
            "length": int(img.size),
            "min": img.min().item() if img.size else None,
            "max": img.max().item() if img.size else None,
            "mean": float(img.mean().real) if img.size else None,
        }
    return info


def main():
    #
    # get arguments and invoke the reading/writing routines
    #

    parser = argparse.ArgumentParser(
        description="Print the header of NIFTI-1 files or re-encode them."
    )

    parser.add_argument(
        "file",
        nargs="+",
        help="path to a NIFTI-1 file (.nii or .nii.gz)",
    )
    parser.add_argument(
        "-i",
        "--image",
        action="store_const",
        const=True,
        default=False,
        help="decode the image and print its length, minimum, maximum and mean",
    )
    parser.add_argument(
        "-x",
        "--extension",
        action="store_const",
        const=True,
        default=False,
        help="list the header extensions",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="",
        help="re-encode the (single) input file to this .nii or .nii.gz file",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_const",
        const=True,
        default=False,
        help="overwrite existing files when converting",
    )

    args = parser.parse_args()

    if args.output and len(args.file) != 1:
        print("Error: --output requires exactly one input file")
        sys.exit(1)

    for path in args.file:
        try:
            obj = niiobject(
                path, image=(args.image or bool(args.output)), verbose=False
            )
            if not obj.read_success:
                raise IOError("; ".join(obj.errors))

            if args.output:
                if os.path.exists(args.output) and not args.force:
                    raise IOError("File {} already exists.".format(args.output))
                if not obj.write(args.output):
                    raise IOError("; ".join(obj.errors))
            else:
                print(json.dumps(summary(obj, args), indent=2))
        except (IOError, ValueError) as e:
            print("Error: {}".format(e))
            sys.exit(1)


if __name__ == "__main__":
    main()
