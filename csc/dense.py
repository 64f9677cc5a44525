"""
Dense conversion and reduction implementations.
"""

import logging
from collections import namedtuple

import numpy as np
from numba import njit

from . import config
from . import labels as _labels

_log = logging.getLogger(__name__)

LabeledArray = namedtuple('LabeledArray', ['array', 'row_labels', 'col_labels'])
LabeledArray.__doc__ = """
A dense array together with its row and column labels.

Attributes:
    array(numpy.ndarray): the dense matrix.
    row_labels(list or None): the labels of the array's rows.
    col_labels(list or None): the labels of the array's columns.
"""


@njit(nogil=True)
def _scatter(colptrs, rowinds, values, out):
    "Scatter stored entries into a zeroed matrix, with ``out[r, c]`` receiving entry (r, c)."
    nnz = len(rowinds)
    if nnz == 0:
        return

    c = 0
    c_end = colptrs[1]
    for e in range(nnz):
        while e == c_end:
            c += 1
            c_end = colptrs[c + 1]
        out[rowinds[e], c] = values[e]


def to_dense(csc, labels=False):
    """
    Expand a CSC into a dense array.

    Args:
        csc(CSC): the matrix.
        labels(bool): whether to return the labels along with the array.

    Returns:
        numpy.ndarray or LabeledArray: the dense matrix, of shape ``(nrows, ncols)``.
    """
    _check_if_enabled(csc)
    _log.debug('densifying %s', csc)
    out = np.zeros((csc.nrows, csc.ncols), dtype=csc.values.dtype)
    _scatter(csc.colptrs, csc.rowinds, csc.values, out)

    if labels:
        return LabeledArray(out, _labels.copy(csc.row_labels), _labels.copy(csc.col_labels))
    else:
        return out


def to_dense_transposed(csc, labels=False):
    """
    Expand a CSC into the dense form of its transpose, in one pass.

    Args:
        csc(CSC): the matrix.
        labels(bool): whether to return the (swapped) labels along with the array.

    Returns:
        numpy.ndarray or LabeledArray: the dense transpose, of shape ``(ncols, nrows)``.
    """
    _check_if_enabled(csc)
    _log.debug('densifying transpose of %s', csc)
    out = np.zeros((csc.ncols, csc.nrows), dtype=csc.values.dtype)
    # scattering through the transposed view stores entry (r, c) at out[c, r]
    _scatter(csc.colptrs, csc.rowinds, csc.values, out.T)

    if labels:
        rls, cls = _labels.swapped(csc.row_labels, csc.col_labels)
        return LabeledArray(out, rls, cls)
    else:
        return out


@njit(nogil=True)
def row_sums(nrows, rowinds, values):
    "Sum the stored values of each row."
    sums = np.zeros(nrows)
    for e in range(len(rowinds)):
        sums[rowinds[e]] += values[e]
    return sums


@njit(nogil=True)
def col_sums(ncols, colptrs, values):
    "Sum the stored values of each column."
    sums = np.zeros(ncols)
    for c in range(ncols):
        acc = 0.0
        for e in range(colptrs[c], colptrs[c + 1]):
            acc += values[e]
        sums[c] = acc
    return sums


def _check_if_enabled(csc):
    if config.validation_enabled():
        from .structure import check
        check(csc)
