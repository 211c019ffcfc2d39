"""@package docstring
Reading and writing NIFTI-1 header extensions, the (esize, ecode, data)
records stored between the 348-byte header and vox_offset

Copyright (c) 2026 nifti1 developers
"""

__all__ = [
    "parse_extended_header",
    "write_extended_header",
    "extended_header_size",
    "NiftiExtensionError",
]

##====================================================================================
## dependent libraries
##====================================================================================

import warnings

# esize and ecode, 4 bytes each
EXTENSION_PREFIX_SIZE = 8


class NiftiExtensionError(IOError):
    pass


def parse_extended_header(stream, vox_offset):
    """Read the extension flag and any extension records at the stream cursor

    The cursor must sit right after the 348-byte header. Records are read
    until the cursor reaches vox_offset.

    Returns
    -------
    extended : list of dict
        one dict per record with keys 'esize', 'ecode' and 'data' (bytes)

    Raises
    ------
    NiftiExtensionError
        if a record declares an esize smaller than its own 8-byte prefix
    """
    extended = []
    extension = stream.decode(4, "BY")

    # a .hdr file may stop at 348 bytes, which means extension={0,0,0,0}
    if extension is None or extension[0] == 0:
        return extended

    vox_offset = int(vox_offset)
    while stream.index < vox_offset:
        prefix = stream.decode(EXTENSION_PREFIX_SIZE, "UL")
        if prefix is None:
            warnings.warn(
                f"extension record at byte {stream.index} is truncated, skipped"
            )
            break
        esize, ecode = prefix
        if esize < EXTENSION_PREFIX_SIZE:
            raise NiftiExtensionError(
                f"Bad extension size {esize} at byte {stream.index - EXTENSION_PREFIX_SIZE}"
            )
        if stream.index + esize - EXTENSION_PREFIX_SIZE > vox_offset:
            warnings.warn(
                f"extension record of {esize} bytes runs past vox_offset {vox_offset}, skipped"
            )
            break
        data = stream.read(esize - EXTENSION_PREFIX_SIZE)
        if data is None:
            warnings.warn(f"extension record of {esize} bytes is truncated, skipped")
            break
        extended.append({"esize": esize, "ecode": ecode, "data": data})

    return extended


def write_extended_header(extended, stream):
    """Write the extension flag followed by every extension record

    The data of each record is zero-padded or cut to esize - 8 bytes. All
    records are encoded before anything is written, so a bad record leaves
    the stream untouched.
    """
    buf = [stream.encode([1 if extended else 0, 0, 0, 0], "BY")]
    for extension in extended:
        esize = int(extension["esize"])
        if esize < EXTENSION_PREFIX_SIZE:
            raise NiftiExtensionError(f"Bad extension size {esize}")
        length = esize - EXTENSION_PREFIX_SIZE
        data = stream.encode(extension["data"], "STR")[:length]
        buf.append(stream.encode(esize, "UL"))
        buf.append(stream.encode(extension["ecode"], "UL"))
        buf.append(stream.encode_string_to_length(data, length))

    stream.write(b"".join(buf))


def extended_header_size(extended):
    """Total number of bytes taken by the extension records"""
    return sum(int(extension["esize"]) for extension in extended)
