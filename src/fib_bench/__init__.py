from .calculator import compute
from .errors import BenchmarkError, ConfigError, FibBenchError
from .report import BenchmarkReport, run_benchmark
from .timing import TimedResult, measure, timed

__version__ = "0.1.0"

__all__ = [
    "compute",
    "measure",
    "timed",
    "TimedResult",
    "run_benchmark",
    "BenchmarkReport",
    "FibBenchError",
    "ConfigError",
    "BenchmarkError",
]
