from csc import CSC
from csc.test_utils import has_memory
import numpy as np

import pytest
from hypothesis import given
import hypothesis.strategies as st


@given(st.integers(0, 1000), st.integers(0, 1000))
def test_empty(nrows, ncols):
    csc = CSC.empty(nrows, ncols)
    assert csc.nrows == nrows
    assert csc.ncols == ncols
    assert csc.nnz == 0
    assert all(csc.colptrs == 0)
    assert len(csc.colptrs) == ncols + 1
    assert len(csc.rowinds) == 0
    assert len(csc.values) == 0
    assert csc.row_labels is None
    assert csc.col_labels is None


def test_empty_labels():
    csc = CSC.empty(2, 1, row_labels=['a', 'b'], col_labels=['c'])
    assert csc.row_labels == ['a', 'b']
    assert csc.col_labels == ['c']


def test_init_casts():
    csc = CSC(3, 2, 3, [0, 2, 3], [0, 2, 1], [1.0, 2.0, 3.0])
    assert csc.colptrs.dtype == np.intc
    assert csc.rowinds.dtype == np.intc
    assert csc.values.dtype == np.float64
    assert csc.shape == (3, 2)


def test_init_no_values():
    with pytest.raises(ValueError):
        CSC(3, 2, 3, [0, 2, 3], [0, 2, 1], None)


def test_init_bad_ptrs():
    with pytest.raises(ValueError):
        CSC(3, 2, 3, [0, 3], [0, 2, 1], [1.0, 2.0, 3.0])


def test_init_bad_rowinds():
    with pytest.raises(ValueError):
        CSC(3, 2, 3, [0, 2, 3], [0, 2], [1.0, 2.0, 3.0])


def test_init_bad_values():
    with pytest.raises(ValueError):
        CSC(3, 2, 3, [0, 2, 3], [0, 2, 1], [1.0, 2.0])


def test_init_bad_labels():
    with pytest.raises(ValueError):
        CSC(3, 2, 3, [0, 2, 3], [0, 2, 1], [1.0, 2.0, 3.0], col_labels=['a', 'b', 'c'])


def test_init_keeps_int64():
    cps = np.array([0, 2, 3], dtype=np.int64)
    csc = CSC(3, 2, 3, cps, np.array([0, 2, 1], np.intc), np.array([1.0, 2.0, 3.0]), _cast=False)
    assert csc.colptrs.dtype == np.int64


def test_normalize_too_small():
    csc = CSC(3, 2, 3, [0, 2, 3], [0, 2, 1], [1.0, 2.0, 3.0])
    big = CSC(1, 1, 0, np.zeros(2, np.int64), np.zeros(0, np.intc), np.zeros(0), _cast=False)
    big.nnz = np.iinfo(np.int32).max + 1
    with pytest.raises(ValueError):
        big._normalize(ptr_dtype=np.int32)
    assert csc._normalize(ptr_dtype=np.int64).colptrs.dtype == np.int64


@pytest.mark.skipif(not has_memory(48), reason='insufficient memory')
def test_large_transpose():
    # 10M * 250 = 2.5B >= INT_MAX
    nrows = 500
    ncols = 10000000
    nnz = ncols * 250

    colptrs = np.arange(0, nnz + 1, 250, dtype=np.int64)
    assert len(colptrs) == ncols + 1
    assert colptrs[-1] == nnz

    try:
        rowinds = np.tile(np.arange(0, 500, 2, dtype=np.intc), ncols)
        values = np.ones(nnz, dtype=np.float32)
    except MemoryError:
        pytest.skip('insufficient memory')

    csc = CSC(nrows, ncols, nnz, colptrs, rowinds, values)
    assert csc.colptrs.dtype == np.dtype('i8')

    try:
        cst = csc.transpose()
    except MemoryError:
        pytest.skip('insufficient memory')

    assert cst.nrows == ncols
    assert cst.ncols == nrows
    assert cst.nnz == nnz
    assert cst.colptrs.dtype == np.dtype('i8')
    assert cst.colptrs[1] == ncols
    assert cst.colptrs[2] == ncols
    assert cst.colptrs[-1] == nnz


def test_init_int_values():
    csc = CSC(2, 2, 1, [0, 1, 1], [0], [5])
    assert csc.values.dtype == np.float64
    assert csc.to_dense().dtype == np.float64
    assert csc.to_dense()[0, 0] == 5.0
