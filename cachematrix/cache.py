import logging
from typing import Any, Callable, Optional

import numpy as np

from .errors import InverseShapeMismatch
from .solvers import numpy_solve

logger = logging.getLogger(__name__)


class CacheMatrix:
    """
    A matrix together with its lazily computed inverse.

    Usage:
        cache = CacheMatrix(np.random.randn(1000, 1000))
        inverse = cache_solve(cache)   # computes
        inverse = cache_solve(cache)   # served from the cache

    Replacing the matrix with set_matrix() drops the cached inverse, so the
    next cache_solve() call recomputes it.
    """

    def __init__(self, matrix: Any = None, solver: Callable = numpy_solve):
        """
        Args:
            matrix: Initial matrix [n, n]. Defaults to a 1x1 NaN matrix, which
                cannot be solved until a real matrix is set.
            solver: Inversion primitive, called as solver(matrix, *args, **kwargs)
        """
        if matrix is None:
            matrix = np.full((1, 1), np.nan)
        self._matrix = matrix
        self._inverse = None
        self.solver = solver

    def set_matrix(self, matrix: Any) -> None:
        self._matrix = matrix
        self._inverse = None  # reset the cached result

    def get_matrix(self) -> Any:
        return self._matrix

    def set_inverse(self, inverse: Any) -> None:
        """Store a result computed for the current matrix. Not verified."""
        self._inverse = inverse

    def get_inverse(self) -> Optional[Any]:
        """Cached result, or None if nothing was computed since the last set_matrix()."""
        return self._inverse

    def check_inverse_shape(self) -> None:
        """
        Raise InverseShapeMismatch if the cached inverse cannot belong to the
        current matrix. Does nothing while the cache is empty.
        """
        if self._inverse is None:
            return
        inv_shape = tuple(np.shape(self._inverse))
        if np.ndim(self._matrix) == 0:
            raise InverseShapeMismatch(f"Cached inverse of shape {inv_shape} held for a scalar matrix")
        n = np.shape(self._matrix)[0]
        if inv_shape[:1] != (n,):
            raise InverseShapeMismatch(
                f"Cached inverse of shape {inv_shape} does not fit matrix of shape {np.shape(self._matrix)}"
            )

    def __repr__(self) -> str:
        state = "cached" if self._inverse is not None else "empty"
        return f"CacheMatrix(shape={np.shape(self._matrix)}, inverse={state})"


def make_cache_matrix(matrix: Any = None, solver: Callable = numpy_solve) -> CacheMatrix:
    return CacheMatrix(matrix, solver=solver)


def cache_solve(cache: CacheMatrix, *args, **kwargs) -> Any:
    """
    Return the inverse of the matrix held by `cache`, computing it at most once.

    Extra arguments are passed to the solver unchanged, e.g. a right-hand side
    `b` or a singularity threshold `tol`. Solver errors propagate and leave the
    cache empty.

    Args:
        cache: CacheMatrix to read from and store into

    Returns:
        The cached result; the same object on every call until set_matrix()
    """
    inverse = cache.get_inverse()
    if inverse is not None:
        logger.info("getting cached result")
        return inverse

    logger.info("initialising cached result")
    matrix = cache.get_matrix()
    inverse = cache.solver(matrix, *args, **kwargs)
    cache.set_inverse(inverse)
    return inverse
