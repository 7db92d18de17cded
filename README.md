# itmv

Iterative matrix-vector multiplication by the Jacobi method, `y = d + A x`,
repeated until the iterates stop changing (every element of `y` within
`1e-3` of `x`) or an iteration limit is reached. Work can be spread over
threads with either block or block-cyclic row mapping. The package also
holds a reusable sense-reversing barrier and a tiny test runner.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Command line

```
itmv-test 4
```

The single argument is the number of threads, from 1 to 64; anything else
prints a usage or range message and exits with status 1. The command runs
the built-in suite of correctness and convergence checks (full and
upper-triangular matrices, block and block-cyclic mapping), prints the
latency of each case and any failure message, and ends with a line such as
`Summary: Failed 0 out of 12 tests`.

## Library use

### `itmv.mult`

- `MatrixType.REGULAR` / `MatrixType.UPPER_TRIANGULAR` — with an upper
  triangular matrix only the columns from the diagonal onward are used.
- `Mapping.BLOCK` / `Mapping.BLOCK_CYCLIC`.
- `JacobiProblem(n, a, x, d, matrix_type=MatrixType.REGULAR, y=None)` —
  `a` is a row-major list of `n*n` numbers, `x`, `d` and `y` lists of `n`.
  Wrong sizes or a non-positive `n` raise `ValueError`; `y` defaults to
  zeros. `mv_compute(i)` sets `y[i] = d[i] + A[i] . x`.
- `itmv_mult_seq(a, x, d, matrix_type, n, t)` runs up to `t` iterations
  sequentially and returns `y`, leaving its inputs untouched.
- `parallel_itmv_mult(problem, thread_count, no_iterations, mapping,
  cyclic_blocksize)` runs the iterations on threads, updating `problem.x`
  and `problem.y` in place and returning `problem.y`. It raises
  `ValueError` if `thread_count` is not between 1 and `THREAD_COUNT_MAX`
  (64), or if block-cyclic mapping is given a block size below 1.

With `Mapping.BLOCK`, each thread takes one contiguous run of
`ceil(n / threads)` rows. With `Mapping.BLOCK_CYCLIC`, rows are dealt out in
blocks of `cyclic_blocksize`, round-robin across the threads.

```python
from itmv.driver import initialize
from itmv.mult import Mapping, MatrixType, itmv_mult_seq, parallel_itmv_mult

problem = initialize(16, MatrixType.REGULAR)
expected = itmv_mult_seq(problem.a, problem.x, problem.d,
                         problem.matrix_type, problem.n, 100)

parallel_itmv_mult(problem, 4, 100, Mapping.BLOCK_CYCLIC, 2)
print(problem.y)   # close to all ones
```

### `itmv.driver`

- `initialize(n, matrix_type)` returns a `JacobiProblem` whose fixed point is
  the all-ones vector (`-1/n` off the diagonal, `x` starting at zero).
- `compute_expected(n, t, matrix_type)` gives the sequential result.
- `validate_vect(y, n, t, matrix_type)` and `validate_convergence(y, n)`
  return `None` when `y` passes, otherwise a failure message.
- `itmv_test(...)` runs one threaded case and validates it;
  `run_all_tests(thread_count, runner=None)` runs the default suite and
  returns the `MiniUnit` runner; `main(argv=None)` is the command above.

### `itmv.barrier`

```python
from itmv.barrier import SenseBarrier

barrier = SenseBarrier(4)
# in each of four threads:
last = barrier.wait()   # True for exactly one thread per round, False for the rest
```

`barrier.odd_round` tells whether an odd number of rounds has completed.

### `itmv.minunit`

`check_assert(msg, condition)` returns `msg` when the condition is false,
otherwise `None`. `get_time()` returns wall-clock seconds. `MiniUnit` runs
test functions that return a message or `None`, counting runs and failures;
`summary(startmsg)` returns the report line.

## What it does not do

Matrices and vectors are Python lists held in memory; the package does not
read or write them from files, and the only command is the built-in test
suite.