import logging
from typing import Optional

import numpy as np
import torch

from .errors import InvalidMatrixError

logger = logging.getLogger(__name__)


class TorchSolver:
    """
    Inversion primitive backed by PyTorch, for use as a CacheMatrix solver.

        cache = CacheMatrix(A, solver=TorchSolver(device='cuda'))

    On GPU torch.linalg.solve calls cuSOLVER (getrf + getrs) under the hood.
    Results are tensors on self.device.
    """

    def __init__(self, device: str = 'cuda', dtype: torch.dtype = torch.float64):
        """
        Args:
            device: 'cuda' for GPU, 'cpu' for CPU comparison
            dtype: Floating point type used for the computation
        """
        self.device = torch.device(device if torch.cuda.is_available() else 'cpu')
        self.dtype = dtype
        if device == 'cuda' and not torch.cuda.is_available():
            logger.warning("CUDA not available, falling back to CPU")

    def to_tensor(self, x) -> torch.Tensor:
        if isinstance(x, torch.Tensor):
            return x.to(device=self.device, dtype=self.dtype)
        return torch.as_tensor(np.asarray(x), dtype=self.dtype, device=self.device)

    def __call__(self, a, b=None, tol: Optional[float] = None) -> torch.Tensor:
        """
        Solve a @ x = b, or invert a when b is None.

        Args:
            a: Coefficient matrix [n, n], numpy array or tensor
            b: Right-hand side [n] or [n, k]
            tol: Reciprocal condition number threshold (default: machine epsilon of self.dtype)

        Returns:
            x: Solution tensor on self.device
        """
        A = self.to_tensor(a)
        if A.ndim != 2 or A.shape[0] != A.shape[1] or A.shape[0] == 0:
            raise InvalidMatrixError(f"Expected a non-empty square matrix, got shape {tuple(A.shape)}")
        if not torch.isfinite(A).all():
            raise InvalidMatrixError("Matrix contains NaN or infinite entries")

        n = A.shape[0]
        I = torch.eye(n, device=self.device, dtype=self.dtype)
        try:
            A_inv = torch.linalg.solve(A, I)
        except torch.linalg.LinAlgError as err:
            raise InvalidMatrixError(f"Singular matrix: {err}") from err

        if tol is None:
            tol = torch.finfo(self.dtype).eps
        rcond = 1.0 / (torch.linalg.matrix_norm(A, ord=1) * torch.linalg.matrix_norm(A_inv, ord=1)).item()
        if not np.isfinite(rcond) or rcond < tol:
            raise InvalidMatrixError(
                f"System is computationally singular: reciprocal condition number = {rcond:.6g}"
            )

        if b is None:
            return A_inv
        B = self.to_tensor(b)
        if B.ndim not in (1, 2) or B.shape[0] != n:
            raise InvalidMatrixError(
                f"Right-hand side of shape {tuple(B.shape)} does not match a {n}x{n} matrix"
            )
        return torch.linalg.solve(A, B)
