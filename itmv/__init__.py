"""Iterative Jacobi matrix-vector multiplication on threads, with a sense-reversing barrier and a small test runner."""

__version__ = "0.1.0"
__all__ = ["barrier", "minunit", "mult", "driver"]