import numpy as np


class InvalidMatrixError(np.linalg.LinAlgError):
    """Matrix cannot be inverted: not square, not finite, or singular."""


class InverseShapeMismatch(AssertionError):
    """Cached inverse does not have the shape of the current matrix."""
