#!/usr/bin/env python3
"""
Fibonacci計算のテスト
"""
import pytest

from fib_bench.calculator import compute


class TestCompute:
    """compute() の基本テスト"""

    @pytest.mark.parametrize("n, expected", [
        (0, 0),
        (1, 1),
        (2, 1),
        (3, 2),
        (10, 55),
        (20, 6765),
    ])
    def test_known_values(self, n, expected):
        assert compute(n) == expected

    def test_recurrence_holds(self):
        """F(n) == F(n-1) + F(n-2)"""
        for n in range(2, 22):
            assert compute(n) == compute(n - 1) + compute(n - 2)

    def test_deterministic(self):
        assert compute(15) == compute(15) == 610

    def test_fib_40(self):
        assert compute(40) == 102334155


class TestDomainChecks:
    """入力チェック"""

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            compute(-1)

    @pytest.mark.parametrize("bad", [2.0, "10", None, True])
    def test_non_integer_rejected(self, bad):
        with pytest.raises(TypeError):
            compute(bad)
