import json
from datetime import datetime
from unittest.mock import patch

import pytest

from fib_bench.errors import BenchmarkError
from fib_bench.report import BenchmarkReport, run_benchmark


class FakeClock:
    """Returns successive readings from a list"""

    def __init__(self, readings):
        self.readings = iter(readings)

    def __call__(self):
        return next(self.readings)


class TestRunBenchmark:
    """Test cases for repeated benchmark runs"""

    def test_single_run(self):
        report = run_benchmark(10)
        assert report.n == 10
        assert report.value == 55
        assert report.runs == 1
        assert report.best >= 0.0

    def test_statistics_from_clock(self):
        clock = FakeClock([0.0, 1.0, 10.0, 13.0, 20.0, 22.0])
        report = run_benchmark(12, repeat=3, clock=clock)
        assert report.value == 144
        assert report.timings == [1.0, 3.0, 2.0]
        assert report.best == 1.0
        assert report.worst == 3.0
        assert report.mean == 2.0
        assert report.stdev == pytest.approx(1.0)
        assert report.total == 6.0

    def test_stdev_single_run_is_zero(self):
        assert run_benchmark(3).stdev == 0.0

    def test_warmup_calls_are_not_timed(self):
        with patch("fib_bench.report.compute", wraps=lambda n: 8) as fake_compute:
            report = run_benchmark(6, repeat=2, warmup=3)
        assert fake_compute.call_count == 5
        assert report.runs == 2
        assert report.warmup == 3

    @pytest.mark.parametrize("kwargs", [{"repeat": 0}, {"repeat": -2}, {"warmup": -1}])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(BenchmarkError):
            run_benchmark(5, **kwargs)

    def test_mismatched_runs_raise(self):
        with patch("fib_bench.report.compute", side_effect=[5, 6]):
            with pytest.raises(BenchmarkError, match="expected 5"):
                run_benchmark(5, repeat=2)

    def test_negative_n_propagates(self):
        with pytest.raises(ValueError):
            run_benchmark(-3)

    def test_started_at_precedes_warmup(self):
        seen = []

        def fake_compute(n):
            seen.append(datetime.now().isoformat())
            return 2

        with patch("fib_bench.report.compute", side_effect=fake_compute):
            report = run_benchmark(3, warmup=1)
        assert report.started_at <= seen[0]


class TestBenchmarkReport:

    @pytest.fixture
    def report(self):
        return BenchmarkReport(n=20, value=6765, timings=[0.5, 0.25], warmup=1)

    def test_to_dict(self, report):
        data = report.to_dict()
        assert data["n"] == 20
        assert data["value"] == 6765
        assert data["warmup"] == 1
        assert data["summary"]["runs"] == 2
        assert data["summary"]["best_seconds"] == 0.25
        assert data["summary"]["worst_seconds"] == 0.5
        assert data["timings_seconds"] == [0.5, 0.25]
        json.dumps(data)

    def test_save_creates_directories(self, report, tmp_path):
        target = tmp_path / "nested" / "dir" / "report.json"
        written = report.save(str(target))
        assert written == str(target)
        saved = json.loads(target.read_text(encoding="utf-8"))
        assert saved["summary"]["mean_seconds"] == pytest.approx(0.375)
