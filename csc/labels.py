"""
Row and column labels carried alongside matrix structure.

Labels are opaque metadata; the kernels never look at them.  They are stored as
Python lists (or ``None`` when a matrix is unlabeled), and every operation that
produces a new matrix gets its own copy of the lists it needs.
"""


def normalize(labels, n, axis='row'):
    """
    Prepare a label sequence for storage on a matrix.

    Args:
        labels(sequence or None): the labels.
        n(int): the expected number of labels.
        axis(str): the axis name, for error messages.

    Returns:
        list or None: a fresh list of labels, or ``None``.
    """
    if labels is None:
        return None

    labels = list(labels)
    if len(labels) != n:
        raise ValueError(f'{axis} labels have length {len(labels)}, expected {n}')
    return labels


def copy(labels):
    "Copy a label list, passing through ``None``."
    if labels is None:
        return None
    return list(labels)


def swapped(row_labels, col_labels):
    """
    Get copies of the labels for a transposed matrix.

    Returns:
        tuple: ``(row_labels, col_labels)`` of the transpose.
    """
    return copy(col_labels), copy(row_labels)


def concat(label_lists, counts):
    """
    Concatenate the labels of several matrices along one axis.  If no matrix is
    labeled, the result is ``None``; if only some are, the missing labels are
    filled with ``None``.
    """
    if all(ls is None for ls in label_lists):
        return None

    out = []
    for ls, n in zip(label_lists, counts):
        if ls is None:
            out.extend([None] * n)
        else:
            out.extend(ls)
    return out
