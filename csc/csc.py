"""
Python API for CSC matrices.
"""

import logging
import numpy as np
import scipy.sparse as sps

from . import labels

INTC = np.iinfo(np.intc)
_log = logging.getLogger(__name__)


class CSC:
    """
    Simple compressed sparse column matrix.  This is like :py:class:`scipy.sparse.csc_matrix`,
    with a few useful differences:

    * Rows and columns can carry labels, which follow the data through transposes,
      densification, and binding.
    * The column pointers are 32-bit when the matrix has few enough entries, and 64-bit
      otherwise; all operations work with either width.
    * Transposes and dense conversions are done with compiled linear-time kernels that
      never sort.

    Matrices are expected to be in *canonical* form: within each column, row indices
    are strictly increasing.  Operations assume this and do not check it, unless
    validation is turned on with :py:func:`csc.config.set_validation` (or the
    ``CSC_VALIDATE`` environment variable).

    You generally don't want to create this class yourself with the constructor.  Instead,
    use one of its class or static methods.  If you do use the constructor, be advised that
    the class may reuse the arrays that you pass, but does not guarantee that they will be
    used.  Operations never modify a matrix; they produce new ones.

    Attributes:
        nrows(int): the number of rows.
        ncols(int): the number of columns.
        nnz(int): the number of entries.
        colptrs(numpy.ndarray): the column pointers.
        rowinds(numpy.ndarray): the row indices.
        values(numpy.ndarray): the values.
        row_labels(list or None): the row labels.
        col_labels(list or None): the column labels.
    """

    def __init__(self, nrows, ncols, nnz, cps, ris, vs, row_labels=None, col_labels=None,
                 _cast=True):
        assert nrows >= 0
        assert nrows <= INTC.max
        assert ncols >= 0
        assert ncols <= INTC.max
        assert nnz >= 0
        if vs is None:
            raise ValueError('CSC matrices require a value array')

        if _cast:
            ris = np.require(ris, np.intc, 'C')
            if nnz <= INTC.max:
                cps = np.require(cps, np.intc, 'C')
            else:
                cps = np.require(cps, np.int64, 'C')
            vs = np.require(vs, requirements='C')
            if vs.dtype.kind != 'f':
                vs = vs.astype(np.float64)

        if len(cps) != ncols + 1:
            raise ValueError('column pointers have length %d, expected %d' % (len(cps), ncols + 1))
        if len(ris) != nnz:
            raise ValueError('row indices have length %d, expected %d' % (len(ris), nnz))
        if len(vs) != nnz:
            raise ValueError('values have length %d, expected %d' % (len(vs), nnz))

        self.nrows = int(nrows)
        self.ncols = int(ncols)
        self.nnz = int(nnz)
        self.colptrs = cps
        self.rowinds = ris
        self.values = vs
        self.row_labels = labels.normalize(row_labels, self.nrows, 'row')
        self.col_labels = labels.normalize(col_labels, self.ncols, 'column')

    @classmethod
    def empty(cls, nrows, ncols, row_labels=None, col_labels=None):
        """
        Create an empty CSC matrix (with no stored entries).

        Args:
            nrows(int): the number of rows.
            ncols(int): the number of columns.
        """
        assert nrows >= 0
        assert ncols >= 0
        colptrs = np.zeros(ncols + 1, dtype=np.intc)
        rowinds = np.zeros(0, dtype=np.intc)
        values = np.zeros(0)
        return cls(nrows, ncols, 0, colptrs, rowinds, values, row_labels, col_labels)

    @classmethod
    def from_coo(cls, rows, cols, vals, shape=None, *, row_labels=None, col_labels=None):
        """
        Create a CSC matrix from data in COO format.  The entries may be in any order,
        but each (row, column) pair must appear at most once.

        Args:
            rows(array-like): the row indices.
            cols(array-like): the column indices.
            vals(array-like): the data values.
            shape(tuple): the array shape, or ``None`` to infer from row & column indices.
        """
        from .structure import from_coo

        rows = np.require(rows, np.intc)
        cols = np.require(cols, np.intc)
        vals = np.require(vals, requirements='C')
        if vals.dtype.kind != 'f':
            vals = vals.astype(np.float64)

        assert np.min(rows, initial=0) >= 0
        assert np.min(cols, initial=0) >= 0

        if shape is not None:
            nrows, ncols = shape
            # if rows/cols is 0, that's fine; max must be zero
            assert np.max(rows, initial=0) < max(nrows, 1)
            assert np.max(cols, initial=0) < max(ncols, 1)
        else:
            nrows = np.max(rows, initial=-1) + 1
            ncols = np.max(cols, initial=-1) + 1

        nnz = len(rows)
        assert len(cols) == nnz
        assert len(vals) == nnz

        colptrs, rowinds, values = from_coo(nrows, ncols, rows, cols, vals)
        return cls(nrows, ncols, nnz, colptrs, rowinds, values, row_labels, col_labels)

    @classmethod
    def from_scipy(cls, mat, copy=True, row_labels=None, col_labels=None):
        """
        Convert a scipy sparse matrix to a CSC.  Unsorted SciPy matrices are put in
        canonical form.

        Args:
            mat(scipy.sparse.spmatrix): a SciPy sparse matrix.
            copy(bool): if ``False``, reuse the SciPy storage if possible.

        Returns:
            CSC: a CSC matrix.
        """
        if not sps.isspmatrix_csc(mat):
            mat = sps.csc_matrix(mat)
            copy = False
        if not mat.has_sorted_indices:
            _log.debug('sorting row indices of %dx%d SciPy matrix', *mat.shape)
            mat = mat.sorted_indices()
            copy = False

        cp = mat.indptr
        if copy:
            cp = cp.copy()
        ri = np.require(mat.indices, np.intc, 'C')
        if copy and ri is mat.indices:
            ri = ri.copy()
        vs = mat.data.copy() if copy else mat.data
        return cls(mat.shape[0], mat.shape[1], mat.nnz, cp, ri, vs, row_labels, col_labels)

    @classmethod
    def from_dense(cls, array, row_labels=None, col_labels=None):
        """
        Create a CSC from a dense array, storing its nonzero entries.

        Args:
            array(numpy.ndarray): a two-dimensional array.
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f'expected 2D array, got {array.ndim}D')
        # nonzero on the transpose yields entries in column-major order
        cols, rows = np.nonzero(array.T)
        vals = array[rows, cols]
        return cls.from_coo(rows, cols, vals, array.shape,
                            row_labels=row_labels, col_labels=col_labels)

    def to_scipy(self):
        """
        Convert a CSC matrix to a SciPy :py:class:`scipy.sparse.csc_matrix`.  Avoids copying
        if possible.

        Returns:
            scipy.sparse.csc_matrix:
                A SciPy sparse matrix with the same data.
        """
        return sps.csc_matrix((self.values, self.rowinds, self.colptrs),
                              shape=(self.nrows, self.ncols))

    @property
    def shape(self):
        "The matrix shape, as a ``(nrows, ncols)`` tuple."
        return (self.nrows, self.ncols)

    def _normalize(self, val_dtype=np.float64, ptr_dtype=None):
        """
        Normalize the matrix into a predictable structure and type.  It avoids copying
        if possible.

        Args:
            val_dtype(np.dtype or None):
                The value data type.  If ``None``, leave unchanged.
            ptr_dtype(np.dtype or None):
                The column pointer data type.  If ``None``, leave pointers untransformed.
        Returns:
            CSC: the transformed CSC matrix.
        """

        if ptr_dtype:
            info = np.iinfo(ptr_dtype)
            if self.nnz > info.max:
                raise ValueError(f'type {ptr_dtype} cannot address {self.nnz} entries')
            cps = np.require(self.colptrs, ptr_dtype)
        else:
            cps = self.colptrs

        if val_dtype:
            vs = np.require(self.values, val_dtype)
        else:
            vs = self.values

        return CSC(self.nrows, self.ncols, self.nnz, cps, self.rowinds, vs,
                   self.row_labels, self.col_labels, _cast=False)

    def copy(self, *, copy_structure=True):
        """
        Create a copy of this CSC.  Values and labels are always copied.

        Args:
            copy_structure(bool):
                whether to copy the structure (index & pointers) or share with the original matrix.
        """
        cps = self.colptrs
        ris = self.rowinds
        if copy_structure:
            cps = np.copy(cps)
            ris = np.copy(ris)
        return CSC(self.nrows, self.ncols, self.nnz, cps, ris, np.copy(self.values),
                   self.row_labels, self.col_labels, _cast=False)

    def check(self):
        """
        Check that this matrix is in canonical form: the column pointers are consistent,
        and each column's row indices are in range and strictly increasing.

        Raises:
            ValueError: if the matrix is not canonical.
        """
        from .structure import check
        check(self)

    def col_extent(self, col):
        """
        Get the extent of a column in the underlying row index and value arrays.

        Args:
            col(int): the column index.

        Returns:
            tuple: ``(s, e)``, where the column occupies positions :math:`[s, e)` in the
            CSC data.
        """
        return self.colptrs[col], self.colptrs[col + 1]

    def col_rs(self, col):
        """
        Get the row indices for the stored values of a column.
        """
        sp, ep = self.col_extent(col)
        return self.rowinds[sp:ep]

    def col_vs(self, col):
        """
        Get the stored values of a column.
        """
        sp, ep = self.col_extent(col)
        return self.values[sp:ep]

    def col_nnzs(self):
        """
        Get a vector of the number of nonzero entries in each column.

        Returns:
            numpy.ndarray: the number of nonzero entries in each column.
        """
        return np.diff(self.colptrs)

    def colinds(self) -> np.ndarray:
        """
        Get the column indices for the stored entries.  Combined with :py:attr:`rowinds`
        and :py:attr:`values`, this can form a COO-format sparse matrix.
        """
        return np.repeat(np.arange(self.ncols, dtype=np.intc), self.col_nnzs())

    def subset_cols(self, begin, end):
        """
        Subset the columns in this matrix.

        Args:
            begin(int): the first column index to include.
            end(int): one past the last column to include.

        Returns:
            CSC: the matrix only containing a subset of the columns.  It shares storage
                with the original matrix to the extent possible.
        """
        from .structure import subset_cols
        return subset_cols(self, begin, end)

    def transpose(self):
        """
        Transpose a CSC matrix.  The row and column labels are swapped.

        Returns:
            CSC: the transpose of this matrix, in canonical form.
        """
        from .structure import transpose
        return transpose(self)

    @property
    def T(self):
        "The transpose of this matrix."
        return self.transpose()

    def to_dense(self, labels=False):
        """
        Convert this matrix to a dense array.

        Args:
            labels(bool): if ``True``, return a :py:class:`csc.LabeledArray` with the
                row and column labels.

        Returns:
            numpy.ndarray or LabeledArray: the ``nrows`` × ``ncols`` dense matrix.
        """
        from .dense import to_dense
        return to_dense(self, labels)

    def to_dense_transposed(self, labels=False):
        """
        Convert this matrix to the dense form of its transpose.  This is equivalent to
        ``self.transpose().to_dense()``, but only passes over the entries once.

        Args:
            labels(bool): if ``True``, return a :py:class:`csc.LabeledArray` with the
                swapped row and column labels.

        Returns:
            numpy.ndarray or LabeledArray: the ``ncols`` × ``nrows`` dense matrix.
        """
        from .dense import to_dense_transposed
        return to_dense_transposed(self, labels)

    def row_sums(self):
        """
        Sum the stored values in each row.

        Returns:
            numpy.ndarray: the row sums, of length ``nrows``.
        """
        from .dense import row_sums
        return row_sums(self.nrows, self.rowinds, self.values)

    def col_sums(self):
        """
        Sum the stored values in each column.

        Returns:
            numpy.ndarray: the column sums, of length ``ncols``.
        """
        from .dense import col_sums
        return col_sums(self.ncols, self.colptrs, self.values)

    def __str__(self):
        return '<CSC {}x{} ({} nnz)>'.format(self.nrows, self.ncols, self.nnz)

    def __repr__(self):
        repr = '<CSC {}x{} ({} nnz)'.format(self.nrows, self.ncols, self.nnz)
        repr += ' {\n'
        repr += '  colptrs={}\n'.format(self.colptrs)
        repr += '  rowinds={}\n'.format(self.rowinds)
        repr += '  values={}\n'.format(self.values)
        repr += '  dtype={}\n'.format(self.values.dtype)
        repr += '}>'
        return repr

    def __reduce__(self):
        args = (self.nrows, self.ncols, self.nnz, self.colptrs, self.rowinds, self.values,
                self.row_labels, self.col_labels, False)
        return (CSC, args)
