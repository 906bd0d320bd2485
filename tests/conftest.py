import time
from collections import namedtuple

import pytest

from peer_maintenance.collectors.host_stats import HostStatsSource
from peer_maintenance.core.config import Config
from peer_maintenance.core.errors import OsQueryError


scpufreq = namedtuple("scpufreq", ["current", "min", "max"])
scpustats = namedtuple("scpustats", ["ctx_switches", "interrupts", "soft_interrupts", "syscalls"])
scputimes = namedtuple("scputimes", ["user", "system", "idle"])
svmem = namedtuple("svmem", ["total", "available", "percent", "used", "free"])
sswap = namedtuple("sswap", ["total", "used", "free", "percent", "sin", "sout"])


class FakeStatsSource(HostStatsSource):
    """Deterministic host statistics with optional injected failures."""

    def __init__(self, failures=None, delay=0.0):
        self.failures = failures or {}
        self.delay = delay
        self.calls = []

    def _answer(self, metric, value):
        self.calls.append(metric)
        if self.delay:
            time.sleep(self.delay)
        if metric in self.failures:
            raise OsQueryError(metric, self.failures[metric])
        return value

    def cpu_frequency(self):
        return self._answer("cpu frequency", scpufreq(2400.0, 800.0, 3600.0))

    def cpu_stats(self):
        return self._answer("cpu stats", scpustats(1000, 200, 30, 0))

    def cpu_times(self):
        return self._answer("cpu time", scputimes(12.5, 3.25, 840.0))

    def virtual_memory(self):
        return self._answer("memory", svmem(16 * 1024 ** 3, 8 * 1024 ** 3, 50.0, 7 * 1024 ** 3, 1024 ** 3))

    def swap_memory(self):
        return self._answer("swap", sswap(2 * 1024 ** 3, 0, 2 * 1024 ** 3, 0.0, 0, 0))


@pytest.fixture
def fake_source():
    return FakeStatsSource()


@pytest.fixture
def block_store(tmp_path):
    """Block storage directory with two files of 10 and 20 bytes and a subdirectory."""
    store = tmp_path / "blocks"
    store.mkdir()
    (store / "1").write_bytes(b"a" * 10)
    (store / "2").write_bytes(b"b" * 20)
    nested = store / "nested"
    nested.mkdir()
    (nested / "ignored").write_bytes(b"c" * 100)
    return store


@pytest.fixture
def config(block_store):
    config = Config()
    config.storage.block_store_path = str(block_store)
    return config
