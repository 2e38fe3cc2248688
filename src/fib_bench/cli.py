import argparse
import json
import logging
import sys
import time
from logging import StreamHandler, Formatter

from .config import get_config
from .errors import ConfigError, FibBenchError
from .report import run_benchmark


# --- JSON Logging Setup ---
class JsonFormatter(Formatter):
    """
    Formats log records as JSON strings (JSONL format - one JSON object per line).
    """
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
        }
        # Structured records carry their fields as a dict message
        if isinstance(record.msg, dict):
            log_record.update(record.msg)
        else:
            log_record["message"] = record.getMessage()

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info).replace('\n', '\\n')
        if record.stack_info:
            log_record['stack_info'] = self.formatStack(record.stack_info).replace('\n', '\\n')

        return json.dumps(log_record, default=str)


def setup_logging(level=logging.WARNING):
    """Configures logging to output JSONL to stderr."""
    logger = logging.getLogger()
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    handler = StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter(datefmt='%Y-%m-%dT%H:%M:%S%z'))
    logger.addHandler(handler)
    logging.getLogger("fib_bench").setLevel(level)


def format_elapsed(elapsed, precision=None):
    """Render elapsed seconds; full float repr unless a precision is given."""
    if precision is None:
        return repr(elapsed)
    return f"{elapsed:.{precision}f}"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="fib-bench",
        description="Time the naive recursive Fibonacci computation.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "-n", "--n",
        type=int,
        default=None,
        help="Fibonacci index to compute (config: benchmark.n, default 40)."
    )
    parser.add_argument(
        "--repeat", "-r",
        type=int,
        default=None,
        help="Number of timed runs; the best time is printed (config: benchmark.repeat)."
    )
    parser.add_argument(
        "--warmup", "-w",
        type=int,
        default=None,
        help="Untimed runs before measuring (config: benchmark.warmup)."
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=None,
        help="Decimal places for the elapsed time (config: output.precision)."
    )
    parser.add_argument(
        "--report",
        metavar="REPORT_FILE",
        default=None,
        help="Write a JSON summary of all runs to this path (config: output.report)."
    )
    parser.add_argument(
        "--config", "-c",
        metavar="CONFIG_FILE",
        default=None,
        help="YAML config file. Overrides the FIB_BENCH_CONFIG environment variable."
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable DEBUG level logging."
    )
    return parser


_FLAG_SETTINGS = (
    ('n', 'benchmark.n'),
    ('repeat', 'benchmark.repeat'),
    ('warmup', 'benchmark.warmup'),
    ('precision', 'output.precision'),
    ('report', 'output.report'),
)


def _int_setting(config, key, minimum=None, optional=False):
    """Read an integer setting; env-expanded values arrive as strings."""
    value = config.get(key)
    if value is None and optional:
        return None
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ConfigError(f"{key} must be an integer, got {value!r}")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise ConfigError(f"{key} must be >= {minimum}, got {value}")
    return value


def main(argv=None):
    """
    Command-Line Interface: compute F(n) and print the result and elapsed seconds.
    """
    args = build_parser().parse_args(argv)

    setup_logging(logging.DEBUG if args.debug else logging.WARNING)
    logger = logging.getLogger(__name__)
    start_time = time.perf_counter()

    try:
        config = get_config(args.config)
        if not args.debug:
            level_name = str(config.get('logging.level', 'WARNING')).upper()
            setup_logging(getattr(logging, level_name, logging.WARNING))

        # Flags win over the file
        for attr, key in _FLAG_SETTINGS:
            if getattr(args, attr) is not None:
                config.update_runtime(key, getattr(args, attr))

        n = _int_setting(config, 'benchmark.n')
        repeat = _int_setting(config, 'benchmark.repeat')
        warmup = _int_setting(config, 'benchmark.warmup')
        precision = _int_setting(config, 'output.precision', minimum=0, optional=True)
        report_path = config.get('output.report')
        logger.info({"event": "cli_start", "n": n, "repeat": repeat, "warmup": warmup,
                     "config": config.path})

        report = run_benchmark(n, repeat=repeat, warmup=warmup)
    except (FibBenchError, ValueError, TypeError) as e:
        logger.error({"event": "benchmark", "status": "failed", "error": str(e)})
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    print(report.value)
    print(format_elapsed(report.best, precision))

    if report_path:
        try:
            report.save(report_path)
        except OSError as e:
            logger.exception({"event": "report_write", "status": "failed",
                              "destination": report_path, "error": str(e)})
            print(f"ERROR: Failed to write report to {report_path}: {e}", file=sys.stderr)
            sys.exit(1)

    total_duration = time.perf_counter() - start_time
    logger.info({"event": "cli_end", "status": "success", "total_duration_seconds": round(total_duration, 3)})


if __name__ == "__main__":
    main()
