"""Wall-clock timing helpers.

Usage:

```python
from fib_bench.timing import measure, timed

value, elapsed = measure(compute, 40)

@timed
def workload():
    ...

workload()
workload.last_elapsed  # seconds taken by the most recent call
```

Both helpers use :func:`time.perf_counter`, which has sub-millisecond
resolution and is unaffected by system clock adjustments.
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable, NamedTuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Callable[..., Any])

__all__ = ["TimedResult", "measure", "timed"]


class TimedResult(NamedTuple):
    """Return value of a timed call and the seconds it took."""

    value: Any
    elapsed: float


def measure(
    func: Callable[..., Any],
    *args: Any,
    clock: Callable[[], float] = time.perf_counter,
    **kwargs: Any,
) -> TimedResult:
    """Call ``func(*args, **kwargs)`` between two clock reads.

    Parameters
    ----------
    func : callable
        The function to time.
    clock : callable, optional
        Zero-argument callable returning seconds as a float.

    Returns
    -------
    TimedResult
        The function's result and the elapsed seconds, never negative.
    """
    start = clock()
    value = func(*args, **kwargs)
    end = clock()
    # perf_counter is monotonic, an injected clock need not be
    elapsed = max(end - start, 0.0)
    logger.debug({"event": "measure", "function": getattr(func, "__name__", repr(func)),
                  "elapsed_seconds": elapsed})
    return TimedResult(value, elapsed)


def timed(func: T) -> T:
    """Decorator recording how long each call to *func* takes.

    The wrapped function returns its original result. The elapsed time of
    the most recent call is stored on the wrapper as ``last_elapsed``
    (``None`` until the first call) and logged at DEBUG level.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        value, elapsed = measure(func, *args, **kwargs)
        wrapper.last_elapsed = elapsed  # type: ignore[attr-defined]
        return value

    wrapper.last_elapsed = None  # type: ignore[attr-defined]
    return wrapper  # type: ignore[return-value]
