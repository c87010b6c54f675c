"""
Inversion primitives used by CacheMatrix.

Every solver has the signature ``solver(a, b=None, tol=None)``:

    a:   square coefficient matrix
    b:   right-hand side; when omitted the identity is used, so the result is
         the inverse of ``a``
    tol: reciprocal condition number below which ``a`` is rejected as
         singular (default: machine epsilon)
"""

import numpy as np

from .errors import InvalidMatrixError

DEFAULT_TOL = np.finfo(np.float64).eps


def as_numeric(x):
    X = np.asarray(x)
    if X.dtype.kind not in "biufc":
        raise InvalidMatrixError(f"Expected numeric entries, got dtype {X.dtype}")
    # ints and bools become float64, complex input stays complex
    return X.astype(np.result_type(X, np.float64))


def as_square_matrix(a):
    A = as_numeric(a)
    if A.ndim != 2 or A.shape[0] != A.shape[1] or A.shape[0] == 0:
        raise InvalidMatrixError(f"Expected a non-empty square matrix, got shape {A.shape}")
    if not np.all(np.isfinite(A)):
        raise InvalidMatrixError("Matrix contains NaN or infinite entries")
    return A


def as_rhs(b, n):
    B = as_numeric(b)
    if B.ndim not in (1, 2) or B.shape[0] != n:
        raise InvalidMatrixError(
            f"Right-hand side of shape {B.shape} does not match a {n}x{n} matrix"
        )
    return B


def check_condition(A, A_inv, tol=None):
    """
    Reject ill-conditioned matrices using the 1-norm reciprocal condition number.

    Args:
        A: Input matrix [n, n]
        A_inv: Computed inverse of A [n, n]
        tol: Threshold; None means DEFAULT_TOL

    Returns:
        rcond: The reciprocal condition number
    """
    if tol is None:
        tol = DEFAULT_TOL
    with np.errstate(all="ignore"):
        rcond = 1.0 / (np.linalg.norm(A, 1) * np.linalg.norm(A_inv, 1))
    if not np.isfinite(rcond) or rcond < tol:
        raise InvalidMatrixError(
            f"System is computationally singular: reciprocal condition number = {rcond:.6g}"
        )
    return rcond


def numpy_solve(a, b=None, tol=None):
    """
    Solve a @ x = b (or invert a) with numpy.linalg.solve.

    This is the default solver of CacheMatrix.
    """
    A = as_square_matrix(a)
    n = A.shape[0]
    try:
        A_inv = np.linalg.solve(A, np.eye(n))
    except np.linalg.LinAlgError as err:
        raise InvalidMatrixError(f"Singular matrix: {err}") from err
    check_condition(A, A_inv, tol)

    if b is None:
        return A_inv
    return np.linalg.solve(A, as_rhs(b, n))


def lu_decomposition(A):
    """
    Partial-pivot LU factorization, PA = LU.

    Works on a single compact array the way LAPACK getrf does (multipliers of
    L below the diagonal, U on and above it) and unpacks at the end.
    """
    LU = as_square_matrix(A).copy()
    n = LU.shape[0]
    perm = np.arange(n)
    for k in range(n):
        pivot = k + np.argmax(np.abs(LU[k:, k]))
        if LU[pivot, k] == 0:
            raise InvalidMatrixError("Singular matrix")

        if pivot != k:
            LU[[k, pivot]] = LU[[pivot, k]]
            perm[[k, pivot]] = perm[[pivot, k]]

        # Rank-1 update of the trailing block
        LU[k+1:, k] /= LU[k, k]
        LU[k+1:, k+1:] -= np.outer(LU[k+1:, k], LU[k, k+1:])

    L = np.tril(LU, k=-1) + np.eye(n, dtype=LU.dtype)
    U = np.triu(LU)
    P = np.eye(n)[perm]
    return P, L, U


def forward_substitution(L, B):
    n = L.shape[0]
    Y = np.zeros_like(B)
    for i in range(n):
        Y[i] = B[i] - L[i, :i] @ Y[:i]
    return Y


def backward_substitution(U, Y):
    n = U.shape[0]
    X = np.zeros_like(Y)
    for i in reversed(range(n)):
        X[i] = (Y[i] - U[i, i+1:] @ X[i+1:]) / U[i, i]
    return X


def lu_apply(P, L, U, B):
    B = np.asarray(B, dtype=np.result_type(L, U, B))
    # PA = LU  =>  x = U^-1 L^-1 P b
    return backward_substitution(U, forward_substitution(L, P @ B))


def lu_solve(a, b=None, tol=None):
    """
    Solve a @ x = b (or invert a) through our own partial-pivot LU.

    Slower than numpy_solve; useful as a reference and in the benchmark.
    """
    A = as_square_matrix(a)
    n = A.shape[0]
    P, L, U = lu_decomposition(A)
    A_inv = lu_apply(P, L, U, np.eye(n))
    check_condition(A, A_inv, tol)

    if b is None:
        return A_inv
    return lu_apply(P, L, U, as_rhs(b, n))
