import logging

import numpy as np
import pytest

torch = pytest.importorskip("torch")

from cachematrix import CacheMatrix, InvalidMatrixError, cache_solve  # noqa: E402
from cachematrix.torch_solver import TorchSolver  # noqa: E402


@pytest.fixture
def solver():
    return TorchSolver(device='cpu')


def test_inverse(solver):
    A = np.array([[4.0, 3.0, 2.0],
                  [3.0, 2.0, 1.0],
                  [2.0, 1.0, 3.0]])
    A_inv = solver(A)
    assert isinstance(A_inv, torch.Tensor)
    np.testing.assert_allclose(A_inv.numpy(), np.linalg.inv(A), atol=1e-12)


def test_accepts_tensor_and_rhs(solver):
    A = torch.tensor([[2.0, 0.0], [0.0, 4.0]])
    x = solver(A, torch.tensor([2.0, 2.0]))
    np.testing.assert_allclose(x.numpy(), [1.0, 0.5])


def test_singular(solver):
    with pytest.raises(InvalidMatrixError):
        solver(np.array([[1.0, 2.0], [2.0, 4.0]]))


def test_not_square(solver):
    with pytest.raises(InvalidMatrixError, match="square"):
        solver(np.ones((2, 3)))


def test_rhs_mismatch(solver):
    with pytest.raises(InvalidMatrixError, match="does not match"):
        solver(np.eye(2), np.ones(3))


def test_cpu_fallback_warns(caplog, monkeypatch):
    monkeypatch.setattr(torch.cuda, "is_available", lambda: False)
    with caplog.at_level(logging.WARNING, logger="cachematrix.torch_solver"):
        solver = TorchSolver(device='cuda')
    assert solver.device.type == 'cpu'
    assert "falling back to CPU" in caplog.text


def test_with_cache(solver):
    cache = CacheMatrix(np.diag([2.0, 2.0]), solver=solver)
    first = cache_solve(cache)
    assert cache_solve(cache) is first
    np.testing.assert_allclose(first.numpy(), np.diag([0.5, 0.5]))


def test_default_tol_follows_dtype():
    A = np.diag([1.0, 1e-8])
    np.testing.assert_allclose(TorchSolver(device='cpu')(A).numpy(), np.diag([1.0, 1e8]))
    with pytest.raises(InvalidMatrixError, match="computationally singular"):
        TorchSolver(device='cpu', dtype=torch.float32)(A)
