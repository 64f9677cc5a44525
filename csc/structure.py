"""
Routines for working with matrix structure.

The compiled kernels here work on the raw CSC arrays rather than on
:py:class:`csc.CSC` objects, so Numba specializes them separately for 32-bit
and 64-bit column pointers.
"""

import logging
import numpy as np
from numba import njit

from .csc import CSC, INTC
from . import labels, config

_log = logging.getLogger(__name__)

_STRUCTURE_ERRORS = {
    1: 'column pointers do not start at 0',
    2: 'column pointers decrease',
    3: 'row index out of range',
    4: 'row indices not strictly increasing',
}


@njit(nogil=True)
def _bucket_order(keys, nbuckets):
    """
    Stable counting sort of entry positions by key.

    Returns:
        tuple: ``(ptrs, order)``, where ``ptrs`` has the start of each bucket and
        ``order[ptrs[k]:ptrs[k+1]]`` lists the positions with key ``k``, in their
        original order.
    """
    n = len(keys)
    ptrs = np.zeros(nbuckets + 1, dtype=np.int64)
    for i in range(n):
        ptrs[keys[i] + 1] += 1

    for k in range(nbuckets):
        ptrs[k + 1] += ptrs[k]

    pos = ptrs[:nbuckets].copy()
    order = np.empty(n, dtype=np.int64)
    for i in range(n):
        k = keys[i]
        order[pos[k]] = i
        pos[k] += 1

    return ptrs, order


def from_coo(nrows, ncols, rows, cols, values):
    """
    Transform COO data into canonical CSC arrays.  Entries are bucketed by row and
    then (stably) by column, so each column's rows come out in increasing order.
    """
    _, rorder = _bucket_order(rows, nrows)
    colptrs, corder = _bucket_order(cols[rorder], ncols)
    order = rorder[corder]
    return colptrs, rows[order], values[order]


@njit(nogil=True)
def _transpose(nrows, ncols, colptrs, rowinds, values):
    "Transpose CSC arrays with a counting sort on the row indices."
    nnz = colptrs[ncols]
    tcp = np.zeros(nrows + 1, colptrs.dtype)
    tri = np.zeros(nnz, np.intc)
    tvs = np.zeros(nnz, values.dtype)

    # count elements
    for e in range(nnz):
        tcp[rowinds[e] + 1] += 1

    # convert to pointers
    for r in range(nrows):
        tcp[r + 1] = tcp[r] + tcp[r + 1]

    # construct results, using the pointers as write cursors
    c = 0
    for e in range(nnz):
        while e >= colptrs[c + 1]:
            c += 1
        r = rowinds[e]
        tri[tcp[r]] = c
        tvs[tcp[r]] = values[e]
        tcp[r] += 1

    # restore pointers
    for r in range(nrows - 1, 0, -1):
        tcp[r] = tcp[r - 1]
    tcp[0] = 0

    return tcp, tri, tvs


def transpose(csc):
    "Transpose a CSC matrix, swapping its labels."
    if config.validation_enabled():
        check(csc)

    _log.debug('transposing %s', csc)
    tcp, tri, tvs = _transpose(csc.nrows, csc.ncols, csc.colptrs, csc.rowinds, csc.values)
    rls, cls = labels.swapped(csc.row_labels, csc.col_labels)
    return CSC(csc.ncols, csc.nrows, csc.nnz, tcp, tri, tvs, rls, cls, _cast=False)


@njit(nogil=True)
def _check_structure(nrows, ncols, colptrs, rowinds):
    """
    Scan CSC arrays for canonical form.

    Returns:
        tuple: ``(code, col, pos)``; ``code`` is 0 if the structure is canonical.
    """
    if colptrs[0] != 0:
        return 1, 0, 0

    # pointers must be checked before they are used to index the rows
    for c in range(ncols):
        if colptrs[c + 1] < colptrs[c]:
            return 2, c, int(colptrs[c])

    for c in range(ncols):
        sp = colptrs[c]
        ep = colptrs[c + 1]
        for e in range(sp, ep):
            r = rowinds[e]
            if r < 0 or r >= nrows:
                return 3, c, int(e)
            if e > sp and r <= rowinds[e - 1]:
                return 4, c, int(e)

    return 0, -1, -1


def check(csc):
    """
    Check that a matrix is in canonical CSC form.

    Raises:
        ValueError: if the matrix structure is invalid.
    """
    if len(csc.colptrs) != csc.ncols + 1:
        raise ValueError('column pointers have length %d, expected %d'
                         % (len(csc.colptrs), csc.ncols + 1))
    if csc.colptrs[csc.ncols] != csc.nnz:
        raise ValueError('column pointers end at %d, expected nnz %d'
                         % (csc.colptrs[csc.ncols], csc.nnz))

    code, col, pos = _check_structure(csc.nrows, csc.ncols, csc.colptrs, csc.rowinds)
    if code:
        raise ValueError('%s (column %d, position %d)' % (_STRUCTURE_ERRORS[code], col, pos))


def subset_cols(csc, begin, end):
    "Take a subset of the columns of a CSC."
    st = csc.colptrs[begin]
    ed = csc.colptrs[end]
    cps = csc.colptrs[begin:(end + 1)] - st

    ris = csc.rowinds[st:ed]
    vs = csc.values[st:ed]
    cls = csc.col_labels[begin:end] if csc.col_labels is not None else None
    return CSC(csc.nrows, end - begin, ed - st, cps, ris, vs,
               labels.copy(csc.row_labels), cls)


def _ptr_dtype(nnz):
    return np.intc if nnz <= INTC.max else np.int64


def rbind(mats):
    """
    Stack matrices vertically.

    Args:
        mats(list of CSC): the matrices, which must have the same number of columns.

    Returns:
        CSC: a matrix with the rows of each input matrix, in order.
    """
    mats = list(mats)
    if not mats:
        raise ValueError('no matrices to bind')
    ncols = mats[0].ncols
    for m in mats:
        if m.ncols != ncols:
            raise ValueError(f'cannot rbind {m} to matrix with {ncols} columns')

    nrows = sum(m.nrows for m in mats)
    nnz = sum(m.nnz for m in mats)
    _log.debug('binding %d matrices into %dx%d (%d nnz)', len(mats), nrows, ncols, nnz)

    offsets = np.cumsum([0] + [m.nrows for m in mats])
    rows = np.concatenate([m.rowinds.astype(np.int64) + off for m, off in zip(mats, offsets)])
    cols = np.concatenate([m.colinds() for m in mats])
    vals = np.concatenate([m.values for m in mats])

    # entries from earlier matrices have lower rows, so a stable bucket keeps columns sorted
    colptrs, order = _bucket_order(cols, ncols)
    rls = labels.concat([m.row_labels for m in mats], [m.nrows for m in mats])
    return CSC(nrows, ncols, nnz,
               colptrs.astype(_ptr_dtype(nnz)), rows[order].astype(np.intc), vals[order],
               rls, labels.copy(mats[0].col_labels), _cast=False)


def cbind(mats):
    """
    Stack matrices horizontally.

    Args:
        mats(list of CSC): the matrices, which must have the same number of rows.

    Returns:
        CSC: a matrix with the columns of each input matrix, in order.
    """
    mats = list(mats)
    if not mats:
        raise ValueError('no matrices to bind')
    nrows = mats[0].nrows
    for m in mats:
        if m.nrows != nrows:
            raise ValueError(f'cannot cbind {m} to matrix with {nrows} rows')

    ncols = sum(m.ncols for m in mats)
    nnz = sum(m.nnz for m in mats)
    _log.debug('binding %d matrices into %dx%d (%d nnz)', len(mats), nrows, ncols, nnz)

    cps = np.zeros(ncols + 1, _ptr_dtype(nnz))
    cs = 0
    for m in mats:
        off = cps[cs]
        ce = cs + m.ncols + 1
        cps[cs:ce] = m.colptrs.astype(np.int64) + off
        cs += m.ncols

    assert cps[ncols] == nnz, f'{cps[ncols]} != {nnz}'

    ris = np.concatenate([m.rowinds for m in mats])
    vs = np.concatenate([m.values for m in mats])
    cls = labels.concat([m.col_labels for m in mats], [m.ncols for m in mats])
    return CSC(nrows, ncols, nnz, cps, ris, vs,
               labels.copy(mats[0].row_labels), cls)
