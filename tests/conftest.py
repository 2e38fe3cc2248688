import os
import sys

import pytest

# srcディレクトリを追加（未インストールでも実行できるように）
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))


def pytest_addoption(parser):
    parser.addoption("--runslow", action="store_true", default=False, help="run the full F(40) benchmark")


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: full-size benchmark run, needs --runslow")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="needs --runslow")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)
