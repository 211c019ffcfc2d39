"""@package docstring
Shape-aware indexing over a flat NIFTI image buffer without copying it

    view = niiview(image, hdr["dim"])
    view.shape          # [3, 3, 3]
    view[2][2][2]       # a single voxel
    view[2][2][0:3]     # the voxels along the last axis
    view[2][2][2] = 1.0 # written into image

Copyright (c) 2026 nifti1 developers
"""

__all__ = ["niiview"]

##====================================================================================
## dependent libraries
##====================================================================================

import operator

import numpy as np


class niiview:
    """Nested indexed access to a flat image shaped by a NIFTI dim array

    Every index applied to a view with more than one free axis returns a new
    niiview sharing the same buffer; once a single axis is left, indexing
    reads or writes the buffer itself. The first axis varies slowest.

    Parameters
    ----------
    array_image : numpy.ndarray or list
        the flat voxel buffer, borrowed and never copied
    dim : sequence of int
        the 8-element dim array of the header, dim[0] being the rank
    previous_indexes : sequence of int
        indexes already bound to the leading axes
    """

    __slots__ = ("array_image", "dim", "previous_indexes")

    def __init__(self, array_image, dim, previous_indexes=()):
        self.array_image = array_image
        self.dim = [int(d) for d in dim]
        self.previous_indexes = list(previous_indexes)

    @property
    def shape(self):
        start_index = 1 + len(self.previous_indexes)
        return self.dim[start_index : self.dim[0] + 1]

    def __len__(self):
        return self.shape[0]

    def __repr__(self):
        return f"niiview(shape={self.shape}, previous_indexes={self.previous_indexes})"

    def __getitem__(self, index):
        shape = self.shape
        if isinstance(index, (slice, range)):
            positions = _checkrange(index, shape[0])
            if len(shape) != 1:
                raise TypeError("ranges are only supported on the last free axis")
            if len(positions) == 0:
                return self.array_image[0:0]
            return self.array_image[
                self._offset(positions[0]) : self._offset(positions[-1])
                + 1 : positions.step
            ]

        index = _checkindex(index, shape[0])
        if len(shape) == 1:
            return self.array_image[self._offset(index)]
        return niiview(self.array_image, self.dim, self.previous_indexes + [index])

    def __setitem__(self, index, value):
        shape = self.shape
        if len(shape) != 1:
            raise IndexError("can only set leaf values")
        index = _checkindex(index, shape[0])
        self.array_image[self._offset(index)] = value

    def _offset(self, current_index):
        extents = self.dim[1 : self.dim[0] + 1]
        offset = 0
        for axis, index in enumerate(self.previous_indexes):
            offset += index * int(np.prod(extents[axis + 1 :], dtype=np.int64))
        return offset + current_index


def _checkindex(index, extent):
    try:
        index = operator.index(index)
    except TypeError:
        raise TypeError(
            f"indexes must be integers, slices or ranges, not {type(index).__name__}"
        ) from None
    if index < 0 or index >= extent:
        raise IndexError(f"Index {index} over bounds (axis length {extent})")
    return index


def _checkrange(index, extent):
    if isinstance(index, slice):
        start = 0 if index.start is None else operator.index(index.start)
        stop = extent if index.stop is None else operator.index(index.stop)
        step = 1 if index.step is None else operator.index(index.step)
        index = range(start, stop, step)
    if index.start < 0 or index.step <= 0:
        raise IndexError("only increasing, non-negative ranges are supported")
    if len(index) > 0 and index[-1] >= extent:
        raise IndexError(f"Index {index[-1]} over bounds (axis length {extent})")
    return index
