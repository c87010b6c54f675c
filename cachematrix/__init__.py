from .cache import CacheMatrix, cache_solve, make_cache_matrix
from .errors import InvalidMatrixError, InverseShapeMismatch
from .solvers import DEFAULT_TOL, lu_solve, numpy_solve

__all__ = [
    "CacheMatrix",
    "DEFAULT_TOL",
    "InvalidMatrixError",
    "InverseShapeMismatch",
    "cache_solve",
    "lu_solve",
    "make_cache_matrix",
    "numpy_solve",
]
