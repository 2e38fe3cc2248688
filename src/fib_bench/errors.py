"""Exception types raised by fib_bench."""


class FibBenchError(Exception):
    """Base class for fib_bench errors"""
    pass


class ConfigError(FibBenchError):
    """Configuration file could not be loaded or is malformed"""
    pass


class BenchmarkError(FibBenchError):
    """Benchmark parameters are invalid or runs disagree"""
    pass
