import asyncio

import psutil
import pytest

from peer_maintenance.core.config import Config
from peer_maintenance.core.errors import DirectoryUnreadable, OsQueryError
from peer_maintenance.system import MetricsSnapshot, System

from conftest import FakeStatsSource


def _host_reports_frequency():
    try:
        return psutil.cpu_freq() is not None
    except (psutil.Error, OSError, NotImplementedError, AttributeError):
        return False


def test_new_snapshot_is_seeded_with_path(config):
    snapshot = MetricsSnapshot.new(config)

    assert snapshot.disk.block_storage_path == config.storage.block_store_path
    assert snapshot.disk.block_storage_size == 0
    assert not snapshot.cpu.is_populated
    assert not snapshot.memory.is_populated


def test_system_owns_a_copy_of_config(config):
    system = System(config)
    config.storage.block_store_path = "/elsewhere"
    assert system.config.storage.block_store_path != "/elsewhere"


@pytest.mark.asyncio
async def test_scrape_metrics(config, fake_source):
    snapshot = await System(config, fake_source).scrape_metrics()

    assert snapshot.disk.block_storage_size == 30
    assert snapshot.cpu.is_populated
    assert snapshot.memory.is_populated


@pytest.mark.asyncio
async def test_probes_run_disk_cpu_memory(config, fake_source):
    await MetricsSnapshot.new(config).calculate(fake_source)
    assert fake_source.calls == ["cpu frequency", "cpu stats", "cpu time", "memory", "swap"]


@pytest.mark.asyncio
async def test_unreadable_disk_skips_remaining_probes(tmp_path, fake_source):
    config = Config()
    config.storage.block_store_path = str(tmp_path / "missing")

    with pytest.raises(DirectoryUnreadable):
        await System(config, fake_source).scrape_metrics()

    assert fake_source.calls == []


@pytest.mark.asyncio
async def test_cpu_failure_skips_memory(config):
    source = FakeStatsSource(failures={"cpu frequency": NotImplementedError("unsupported")})

    with pytest.raises(OsQueryError):
        await System(config, source).scrape_metrics()

    assert "memory" not in source.calls


@pytest.mark.asyncio
async def test_failed_calculate_leaves_snapshot_untouched(config):
    source = FakeStatsSource(failures={"swap": OSError("boom")})
    snapshot = MetricsSnapshot.new(config)

    with pytest.raises(OsQueryError):
        await snapshot.calculate(source)

    assert snapshot.disk.block_storage_size == 0
    assert not snapshot.cpu.is_populated


@pytest.mark.asyncio
async def test_repeated_scrapes_return_fresh_snapshots(config, block_store, fake_source):
    system = System(config, fake_source)
    first = await system.scrape_metrics()

    (block_store / "3").write_bytes(b"x" * 5)
    second = await system.scrape_metrics()

    assert first is not second
    assert first.disk.block_storage_size == 30
    assert second.disk.block_storage_size == 35


@pytest.mark.asyncio
async def test_concurrent_scrapes_are_independent(config, fake_source):
    system = System(config, fake_source)

    snapshots = await asyncio.gather(*[system.scrape_metrics() for _ in range(8)])

    assert len({id(s) for s in snapshots}) == 8
    assert all(s.disk.block_storage_size == 30 for s in snapshots)
    assert all(s == snapshots[0] for s in snapshots)


@pytest.mark.asyncio
async def test_timeout_abandons_scrape(config):
    source = FakeStatsSource(delay=0.2)

    with pytest.raises(asyncio.TimeoutError):
        await System(config, source).scrape_metrics(timeout=0.05)


@pytest.mark.asyncio
@pytest.mark.skipif(not _host_reports_frequency(), reason="host does not report cpu frequency")
async def test_scrape_real_host(config):
    snapshot = await System(config).scrape_metrics()

    assert snapshot.cpu.frequency
    assert snapshot.cpu.stats
    assert snapshot.cpu.time
    assert snapshot.memory.memory
    assert snapshot.memory.swap
