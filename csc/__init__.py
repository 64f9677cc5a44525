"""
Compressed Sparse Column matrices for Python, with fast Numba transposes and dense conversion.
"""

__version__ = "0.1.0"
__all__ = [
    'CSC',
    'LabeledArray',
    'rbind',
    'cbind',
    'set_validation',
    'use_validation',
]

from .csc import CSC
from .dense import LabeledArray
from .structure import rbind, cbind
from .config import set_validation, use_validation
