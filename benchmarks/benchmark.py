import os
import time

import matplotlib.pyplot as plt
import numpy as np

from cachematrix import CacheMatrix, cache_solve, lu_solve, numpy_solve


def time_call(fn, *args):
    t0 = time.perf_counter()
    fn(*args)
    return time.perf_counter() - t0


def benchmark(n=100, solver=numpy_solve):
    A = np.random.rand(n, n)
    A += n * np.eye(n)  # improve conditioning

    cache = CacheMatrix(A, solver=solver)
    t_miss = time_call(cache_solve, cache)
    t_hit = time_call(cache_solve, cache)
    return t_miss, t_hit


if __name__ == "__main__":
    sizes = [50, 100, 200, 500]
    solvers = {"numpy": numpy_solve, "LU": lu_solve}
    results = {name: [] for name in solvers}

    os.makedirs("plots", exist_ok=True)

    print("cache_solve timings (first call computes, second call hits the cache):")
    print(f"{'N':>6} | {'solver':>6} | {'miss (s)':>10} | {'hit (s)':>10} | {'speedup':>10}")
    print("-" * 56)

    for n in sizes:
        for name, solver in solvers.items():
            t_miss, t_hit = benchmark(n, solver)
            results[name].append((t_miss, t_hit))
            print(f"{n:6d} | {name:>6} | {t_miss:10.6f} | {t_hit:10.6f} | {t_miss / t_hit:9.0f}x")

    plt.figure()
    for name, timings in results.items():
        plt.plot(sizes, [t[0] for t in timings], label=f"{name} (miss)")
        plt.plot(sizes, [t[1] for t in timings], linestyle="--", label=f"{name} (hit)")
    plt.xlabel("Matrix size (N x N)")
    plt.ylabel("Time per cache_solve call (s)")
    plt.yscale("log")
    plt.title("Cached Matrix Inversion")
    plt.legend()
    plt.grid(True)
    plt.tight_layout()
    plt.savefig("plots/cache_benchmark.png")
    print("\nBenchmark plot saved to plots/cache_benchmark.png")
