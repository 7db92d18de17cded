"""Iterative (Jacobi) matrix-vector multiplication, sequential and threaded.

Each iteration computes ``y = d + A x``; it stops early once every element
of ``y`` is within :data:`ERROR_THRESHOLD` of ``x``, otherwise ``x = y``.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import IntEnum

THREAD_COUNT_MAX = 64
ERROR_THRESHOLD = 1e-3


class MatrixType(IntEnum):
    REGULAR = 0
    UPPER_TRIANGULAR = 1


class Mapping(IntEnum):
    BLOCK = 0
    BLOCK_CYCLIC = 1


@dataclass
class JacobiProblem:
    """Matrix ``a`` (row-major, ``n*n``), vectors ``x``, ``d`` and ``y``."""

    n: int
    a: list
    x: list
    d: list
    matrix_type: MatrixType = MatrixType.REGULAR
    y: list = field(default=None)

    def __post_init__(self):
        if self.n <= 0:
            raise ValueError("matrix dimension must be positive")
        if self.a is None or self.x is None or self.d is None:
            raise ValueError("matrix and vectors are required")
        if len(self.a) != self.n * self.n:
            raise ValueError("matrix must hold n*n elements")
        if len(self.x) != self.n or len(self.d) != self.n:
            raise ValueError("vectors must hold n elements")
        if self.y is None:
            self.y = [0.0] * self.n
        elif len(self.y) != self.n:
            raise ValueError("vectors must hold n elements")
        self.matrix_type = MatrixType(self.matrix_type)

    def mv_compute(self, i):
        """Set ``y[i] = d[i] + A[i] . x``."""
        n = self.n
        start = i if self.matrix_type == MatrixType.UPPER_TRIANGULAR else 0
        row = self.a[i * n + start:(i + 1) * n]
        self.y[i] = sum(
            (aij * xj for aij, xj in zip(row, self.x[start:])), self.d[i]
        )


def itmv_mult_seq(a, x, d, matrix_type, n, t):
    """Run up to ``t`` Jacobi iterations sequentially and return ``y``.

    The inputs are left untouched.
    """
    if a is None or x is None or d is None:
        raise ValueError("matrix and vectors are required")
    problem = JacobiProblem(n, list(a), list(x), list(d), matrix_type)
    for _ in range(t):
        for i in range(n):
            problem.mv_compute(i)
        if all(abs(xi - yi) <= ERROR_THRESHOLD for xi, yi in zip(problem.x, problem.y)):
            break
        problem.x[:] = problem.y
    return problem.y


def _block_rows(rank, n, thread_count):
    blocksize = (n + thread_count - 1) // thread_count
    start = rank * blocksize
    return range(start, min(start + blocksize, n))


def _cyclic_rows(rank, n, thread_count, blocksize):
    step = thread_count * blocksize
    return [
        i
        for block_start in range(rank * blocksize, n, step)
        for i in range(block_start, min(block_start + blocksize, n))
    ]


class _ParallelRun:
    def __init__(self, problem, thread_count, no_iterations, mapping, cyclic_blocksize):
        self.problem = problem
        self.thread_count = thread_count
        self.no_iterations = no_iterations
        self.mapping = mapping
        self.cyclic_blocksize = cyclic_blocksize
        self.local_errors = [0.0] * thread_count
        self.global_error = 0.0
        self.barrier = threading.Barrier(thread_count)
        self.failures = []

    def rows(self, rank):
        n = self.problem.n
        if self.mapping == Mapping.BLOCK_CYCLIC:
            return _cyclic_rows(rank, n, self.thread_count, self.cyclic_blocksize)
        return _block_rows(rank, n, self.thread_count)

    def converged(self):
        if self.mapping == Mapping.BLOCK_CYCLIC:
            return self.global_error < ERROR_THRESHOLD
        return self.global_error <= ERROR_THRESHOLD

    def work(self, rank):
        problem = self.problem
        rows = self.rows(rank)
        try:
            for _ in range(self.no_iterations):
                local_error = 0.0
                for i in rows:
                    problem.mv_compute(i)
                    local_error = max(local_error, abs(problem.x[i] - problem.y[i]))
                self.local_errors[rank] = local_error
                self.barrier.wait()
                for i in rows:
                    problem.x[i] = problem.y[i]
                if rank == 0:
                    self.global_error = max(self.local_errors)
                self.barrier.wait()
                if self.converged():
                    break
        except threading.BrokenBarrierError:
            pass
        except Exception as exc:  # noqa: BLE001 - re-raised by the caller
            self.failures.append(exc)
            self.barrier.abort()

    def run(self):
        threads = [
            threading.Thread(target=self.work, args=(rank,))
            for rank in range(self.thread_count)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        if self.failures:
            raise self.failures[0]


def parallel_itmv_mult(problem, thread_count, no_iterations, mapping, cyclic_blocksize):
    """Run up to ``no_iterations`` Jacobi iterations on ``thread_count`` threads.

    ``problem.x`` and ``problem.y`` are updated in place; ``problem.y`` is
    returned.
    """
    if not 0 < thread_count <= THREAD_COUNT_MAX:
        raise ValueError("The number of threads is not positive or too big")
    mapping = Mapping(mapping)
    if mapping == Mapping.BLOCK_CYCLIC and cyclic_blocksize <= 0:
        raise ValueError("cyclic block size must be positive")
    _ParallelRun(problem, thread_count, no_iterations, mapping, cyclic_blocksize).run()
    return problem.y