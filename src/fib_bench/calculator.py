"""Naive recursive Fibonacci.

The sequence is defined as::

    F(0) = 0
    F(1) = 1
    F(n) = F(n-1) + F(n-2) for n >= 2

:func:`compute` deliberately uses the exponential-time double recursion.
It is the workload being measured, so it must not be memoized or turned
into an iterative loop.
"""

from __future__ import annotations

__all__ = ["compute"]


def _fib(n: int) -> int:
    if n < 2:
        return n
    return _fib(n - 1) + _fib(n - 2)


def compute(n: int) -> int:
    """Return the ``n``-th Fibonacci number.

    Parameters
    ----------
    n : int
        Zero-based index into the sequence. Must be non-negative.

    Returns
    -------
    int
        The value of ``F(n)``.

    Raises
    ------
    TypeError
        If ``n`` is not an integer.
    ValueError
        If ``n`` is negative.
    """
    # bool is an int subclass; compute(True) is almost certainly a bug
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"n must be an integer, got {type(n).__name__}")
    if n < 0:
        raise ValueError("n must be non-negative")
    return _fib(n)
