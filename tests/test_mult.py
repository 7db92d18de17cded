import pytest

from itmv.mult import (
    ERROR_THRESHOLD,
    THREAD_COUNT_MAX,
    JacobiProblem,
    Mapping,
    MatrixType,
    itmv_mult_seq,
    parallel_itmv_mult,
)


def _test_system(n, matrix_type):
    """A diagonally dominant system whose fixed point is all ones."""
    x = [0.0] * n
    if matrix_type == MatrixType.UPPER_TRIANGULAR:
        d = [(2.0 * n - 1.0 * i - 1.0) / n for i in range(n)]
    else:
        d = [(2.0 * n - 1.0) / n] * n
    a = [0.0] * (n * n)
    for i in range(n):
        start = i + 1 if matrix_type == MatrixType.UPPER_TRIANGULAR else 0
        for j in range(start, n):
            if i != j:
                a[i * n + j] = -1.0 / n
    return a, x, d


def _problem(n, matrix_type):
    a, x, d = _test_system(n, matrix_type)
    return JacobiProblem(n, a, x, d, matrix_type)


def test_mv_compute_with_zero_matrix_copies_d():
    problem = JacobiProblem(3, [0.0] * 9, [5.0, 6.0, 7.0], [1.0, 2.0, 3.0])
    for i in range(3):
        problem.mv_compute(i)
    assert problem.y == [1.0, 2.0, 3.0]


def test_mv_compute_upper_ignores_lower_part():
    n = 4
    full = [float(k + 1) for k in range(n * n)]
    upper_only = [v if (k % n) >= (k // n) else 0.0 for k, v in enumerate(full)]
    x = [1.0, -2.0, 0.5, 3.0]
    d = [0.25] * n
    with_lower = JacobiProblem(n, full, x, d, MatrixType.UPPER_TRIANGULAR)
    without_lower = JacobiProblem(n, upper_only, x, d, MatrixType.REGULAR)
    for i in range(n):
        with_lower.mv_compute(i)
        without_lower.mv_compute(i)
    assert with_lower.y == without_lower.y


def test_problem_rejects_bad_shapes():
    with pytest.raises(ValueError):
        JacobiProblem(2, [0.0] * 3, [0.0, 0.0], [0.0, 0.0])
    with pytest.raises(ValueError):
        JacobiProblem(2, [0.0] * 4, [0.0], [0.0, 0.0])
    with pytest.raises(ValueError):
        JacobiProblem(0, [], [], [])


def test_seq_one_iteration_from_zero_gives_d():
    a, x, d = _test_system(8, MatrixType.REGULAR)
    assert itmv_mult_seq(a, x, d, MatrixType.REGULAR, 8, 1) == d


def test_seq_worked_example_two_iterations():
    y = itmv_mult_seq([0.0, 0.5, 0.5, 0.0], [0.0, 0.0], [1.0, 1.0], 0, 2, 2)
    assert y == [1.5, 1.5]


def test_seq_leaves_inputs_untouched():
    a, x, d = _test_system(6, MatrixType.REGULAR)
    snapshot = (list(a), list(x), list(d))
    itmv_mult_seq(a, x, d, MatrixType.REGULAR, 6, 5)
    assert (a, x, d) == snapshot


@pytest.mark.parametrize("matrix_type", list(MatrixType))
def test_seq_converges_to_ones(matrix_type):
    n = 32
    a, x, d = _test_system(n, matrix_type)
    y = itmv_mult_seq(a, x, d, matrix_type, n, 4096)
    assert all(abs(v - 1.0) < ERROR_THRESHOLD for v in y)


def test_seq_rejects_invalid_input():
    with pytest.raises(ValueError):
        itmv_mult_seq([], [], [], 0, 0, 1)
    with pytest.raises(ValueError):
        itmv_mult_seq(None, [0.0], [0.0], 0, 1, 1)


@pytest.mark.parametrize("threads", [1, 2, 3, 4])
@pytest.mark.parametrize(
    "n, t, matrix_type, mapping, blocksize",
    [
        (16, 1, MatrixType.REGULAR, Mapping.BLOCK, 0),
        (17, 2, MatrixType.REGULAR, Mapping.BLOCK, 0),
        (16, 1, MatrixType.UPPER_TRIANGULAR, Mapping.BLOCK, 0),
        (17, 2, MatrixType.UPPER_TRIANGULAR, Mapping.BLOCK, 0),
        (16, 1, MatrixType.REGULAR, Mapping.BLOCK_CYCLIC, 2),
        (17, 2, MatrixType.REGULAR, Mapping.BLOCK_CYCLIC, 2),
        (16, 1, MatrixType.UPPER_TRIANGULAR, Mapping.BLOCK_CYCLIC, 2),
        (17, 2, MatrixType.UPPER_TRIANGULAR, Mapping.BLOCK_CYCLIC, 2),
        (16, 1, MatrixType.REGULAR, Mapping.BLOCK_CYCLIC, 1),
        (17, 2, MatrixType.UPPER_TRIANGULAR, Mapping.BLOCK_CYCLIC, 1),
    ],
)
def test_parallel_matches_sequential(threads, n, t, matrix_type, mapping, blocksize):
    a, x, d = _test_system(n, matrix_type)
    expected = itmv_mult_seq(a, x, d, matrix_type, n, t)
    problem = _problem(n, matrix_type)
    y = parallel_itmv_mult(problem, threads, t, mapping, blocksize)
    assert y == pytest.approx(expected, abs=1e-6)
    assert problem.y is y


@pytest.mark.parametrize(
    "matrix_type, mapping, blocksize",
    [
        (MatrixType.REGULAR, Mapping.BLOCK, 0),
        (MatrixType.UPPER_TRIANGULAR, Mapping.BLOCK, 0),
        (MatrixType.REGULAR, Mapping.BLOCK_CYCLIC, 3),
        (MatrixType.UPPER_TRIANGULAR, Mapping.BLOCK_CYCLIC, 1),
    ],
)
def test_parallel_reaches_convergence(matrix_type, mapping, blocksize):
    problem = _problem(48, matrix_type)
    y = parallel_itmv_mult(problem, 4, 4096, mapping, blocksize)
    assert all(abs(v - 1.0) < ERROR_THRESHOLD for v in y)


def test_more_threads_than_rows():
    n = 3
    a, x, d = _test_system(n, MatrixType.REGULAR)
    expected = itmv_mult_seq(a, x, d, MatrixType.REGULAR, n, 3)
    y = parallel_itmv_mult(_problem(n, MatrixType.REGULAR), 8, 3, Mapping.BLOCK, 0)
    assert y == pytest.approx(expected, abs=1e-12)


@pytest.mark.parametrize("threads", [0, -1, THREAD_COUNT_MAX + 1])
def test_parallel_rejects_bad_thread_count(threads):
    with pytest.raises(ValueError):
        parallel_itmv_mult(_problem(4, MatrixType.REGULAR), threads, 1, Mapping.BLOCK, 0)


def test_parallel_rejects_zero_cyclic_block():
    with pytest.raises(ValueError):
        parallel_itmv_mult(_problem(4, MatrixType.REGULAR), 2, 1, Mapping.BLOCK_CYCLIC, 0)