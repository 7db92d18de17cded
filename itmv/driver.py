"""Test driver for the threaded Jacobi matrix-vector multiplication."""

from __future__ import annotations

import sys
from typing import NamedTuple

from .minunit import MiniUnit, check_assert, get_time
from .mult import (
    ERROR_THRESHOLD,
    THREAD_COUNT_MAX,
    JacobiProblem,
    Mapping,
    MatrixType,
    itmv_mult_seq,
    parallel_itmv_mult,
)

MAX_TEST_MATRIX_SIZE = 256
THRESHOLD = 0.000001


class ItmvCase(NamedTuple):
    """One configuration handed to :func:`itmv_test`."""

    name: str
    test_correctness: bool
    test_reach_convergence: bool
    n: int
    mtype: MatrixType
    t: int
    mapping: Mapping
    cyclic_block: int


_REG = MatrixType.REGULAR
_UPPER = MatrixType.UPPER_TRIANGULAR
_BLOCK = Mapping.BLOCK
_CYCLIC = Mapping.BLOCK_CYCLIC

DEFAULT_CASES = (
    ItmvCase("Test 1", True, False, 16, _REG, 1, _BLOCK, 0),
    ItmvCase("Test 2", True, False, 17, _REG, 2, _BLOCK, 0),
    ItmvCase("Test 3", True, False, 16, _UPPER, 1, _BLOCK, 0),
    ItmvCase("Test 4", True, False, 17, _UPPER, 2, _BLOCK, 0),
    ItmvCase("Test 4c", True, False, 16, _REG, 1, _CYCLIC, 2),
    ItmvCase("Test 5", True, False, 17, _REG, 2, _CYCLIC, 2),
    ItmvCase("Test 6", True, False, 16, _UPPER, 1, _CYCLIC, 2),
    ItmvCase("Test 7", True, False, 17, _UPPER, 2, _CYCLIC, 2),
    ItmvCase("Test 7c", True, False, 16, _REG, 1, _CYCLIC, 1),
    ItmvCase("Test 8", True, False, 17, _UPPER, 2, _CYCLIC, 1),
    ItmvCase("Test 8a: n=0.5K t=8K blockmapping", False, True, 512, _REG, 4096, _BLOCK, 0),
    ItmvCase("Test 8b: n=0.5K t=8K blockmapping", False, True, 512, _UPPER, 4096, _BLOCK, 0),
)

# Large timing runs; not part of the default suite.
EXTENDED_CASES = (
    ItmvCase("Test 9: n=4K t=1K blockmapping", False, False, 4096, _REG, 1024, _BLOCK, 0),
    ItmvCase("Test 10: n=4K t=1K block cylic (r=1)", False, False, 4096, _REG, 1024, _CYCLIC, 1),
    ItmvCase("Test 11: n=4K t=1K block cyclic (r=16)", False, False, 4096, _REG, 1024, _CYCLIC, 16),
    ItmvCase("Test 12: n=4K t=1K upper block mapping", False, False, 4096, _UPPER, 1024, _BLOCK, 0),
    ItmvCase("Test 13: n=4K t=1K upper block cylic (r=1)", False, False, 4096, _UPPER, 1024, _CYCLIC, 1),
    ItmvCase("Test 14: n=4K t=1K upper block cyclic(r=16)", False, False, 4096, _UPPER, 1024, _CYCLIC, 16),
)


def _print_error(msgheader, msg):
    print(f"{msgheader} error msg: {msg}")


def initialize(n, matrix_type):
    """Build the test problem whose fixed point is the all-ones vector.

    ``A`` has ``-1/n`` off the diagonal (above it only for an upper
    triangular matrix), ``x`` starts at zero.
    """
    matrix_type = MatrixType(matrix_type)
    upper = matrix_type == MatrixType.UPPER_TRIANGULAR
    if upper:
        d = [(2.0 * n - 1.0 * i - 1.0) / n for i in range(n)]
    else:
        d = [(2.0 * n - 1.0) / n] * n
    a = [
        -1.0 / n if (j > i if upper else j != i) else 0.0
        for i in range(n)
        for j in range(n)
    ]
    return JacobiProblem(n, a, [0.0] * n, d, matrix_type)


def compute_expected(n, t, matrix_type):
    """The vector ``y`` that ``t`` sequential iterations produce."""
    problem = initialize(n, matrix_type)
    return itmv_mult_seq(problem.a, problem.x, problem.d, matrix_type, n, t)


def validate_vect(y, n, t, matrix_type):
    """Compare ``y`` with the sequential result; a message on mismatch."""
    if n <= 0:
        return "Failed: 0 or negative size"
    if n > MAX_TEST_MATRIX_SIZE:
        return "Failed: Too big to validate"
    expected = compute_expected(n, t, matrix_type)
    for actual, wanted in zip(y, expected):
        msg = check_assert(
            "One mismatch in iterative mat-vect multiplication",
            abs(actual - wanted) < THRESHOLD,
        )
        if msg:
            return msg
    return None


def validate_convergence(y, n):
    """Check that every element of ``y`` is close to 1; a message if not."""
    if n <= 0:
        return "Failed: 0 or negative size"
    for value in y[:n]:
        msg = check_assert(
            "Failed to reach convergence", abs(value - 1.0) < ERROR_THRESHOLD
        )
        if msg:
            return msg
    return None


def itmv_test(testmsg, test_correctness, test_reach_convergence, n, mtype, t,
              mappingtype, cyclic_block, thread_count):
    """Run the threaded computation once and validate it.

    Returns ``None`` on success, otherwise the failure message.
    """
    problem = initialize(n, mtype)
    start = get_time()
    parallel_itmv_mult(problem, thread_count, t, mappingtype, cyclic_block)
    latency = get_time() - start
    print(
        f"{testmsg}: Latency = {latency:f} sec with {thread_count} threads. "
        f"Matrix dimension {n} "
    )

    msg = None
    if test_correctness:
        msg = validate_vect(problem.y, n, t, mtype)
        if msg is not None:
            _print_error(testmsg, msg)
    if test_reach_convergence:
        msg = validate_convergence(problem.y, n)
        if msg is not None:
            _print_error(testmsg, msg)
    return msg


def run_all_tests(thread_count, runner=None):
    """Run the default suite with ``runner`` and return the runner."""
    if runner is None:
        runner = MiniUnit()
    for case in DEFAULT_CASES:
        runner.run_test(
            lambda case=case: itmv_test(
                case.name,
                case.test_correctness,
                case.test_reach_convergence,
                case.n,
                case.mtype,
                case.t,
                case.mapping,
                case.cyclic_block,
                thread_count,
            )
        )
    return runner


def _parse_int(text):
    try:
        return int(text.strip())
    except ValueError:
        return 0


def main(argv=None):
    """Command entry point: ``<number of threads>``."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 1:
        print("incorrect # of arguments", end="")
        print("./itmv_mult_test_pth  <number of threads> ")
        return 1
    thread_count = _parse_int(argv[0])
    if thread_count <= 0 or thread_count > THREAD_COUNT_MAX:
        print("The number of threads is not positive or too big")
        return 1
    runner = run_all_tests(thread_count, MiniUnit())
    print(runner.summary("Summary:"))
    return 0


if __name__ == "__main__":
    sys.exit(main())