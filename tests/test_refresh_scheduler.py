import logging
import threading
import time

import pytest

from lexicon.dictionary import Dictionary, RefreshScheduler, SchedulerConfig, StaticFeedFetcher


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


def test_run_once_reports_outcome(sample_feed, caplog):
    fetcher = StaticFeedFetcher(sample_feed)
    dictionary = Dictionary("memory://feed", fetcher=fetcher)
    scheduler = RefreshScheduler(dictionary, SchedulerConfig(interval_seconds=60))

    assert scheduler.run_once() is True
    assert dictionary.version == 2

    fetcher.set_payload(ConnectionError("offline"))
    with caplog.at_level(logging.WARNING, logger="lexicon.dictionary.scheduler"):
        assert scheduler.run_once() is False
    assert "Scheduled refresh of memory://feed failed" in caplog.text
    assert dictionary.version == 2
    assert len(dictionary) == 5


def test_background_thread_refreshes_and_survives_failures(sample_feed):
    fetcher = StaticFeedFetcher(sample_feed)
    dictionary = Dictionary("memory://feed", fetcher=fetcher)
    fetcher.set_payload(ConnectionError("offline"))

    scheduler = RefreshScheduler(dictionary, SchedulerConfig(interval_seconds=0.01))
    scheduler.start()
    try:
        assert scheduler.is_running
        assert wait_for(lambda: fetcher.calls >= 4)
        assert dictionary.version == 1

        fetcher.set_payload(sample_feed)
        assert wait_for(lambda: dictionary.version > 1)
    finally:
        scheduler.stop()

    assert not scheduler.is_running


def test_start_twice_keeps_one_thread(sample_feed):
    dictionary = Dictionary("memory://feed", fetcher=StaticFeedFetcher(sample_feed))
    scheduler = RefreshScheduler(dictionary, SchedulerConfig(interval_seconds=60))
    scheduler.start()
    first = scheduler._thread
    scheduler.start()
    try:
        assert scheduler._thread is first
    finally:
        scheduler.stop()


def test_interval_must_be_positive(sample_feed):
    dictionary = Dictionary("memory://feed", fetcher=StaticFeedFetcher(sample_feed))
    with pytest.raises(ValueError):
        RefreshScheduler(dictionary, SchedulerConfig(interval_seconds=0))


class GatedFetcher:
    """Blocks every fetch after the first until the gate opens."""

    def __init__(self, payload):
        self.payload = payload.encode("utf-8")
        self.calls = 0
        self.entered = threading.Event()
        self.gate = threading.Event()

    def fetch(self, source):
        self.calls += 1
        if self.calls > 1:
            self.entered.set()
            assert self.gate.wait(5)
        return self.payload


def refresh_threads(name):
    return [t for t in threading.enumerate() if t.name == name and t.is_alive()]


def test_restart_while_a_refresh_is_stuck_keeps_one_loop(sample_feed):
    fetcher = GatedFetcher(sample_feed)
    dictionary = Dictionary("memory://feed", fetcher=fetcher)
    config = SchedulerConfig(interval_seconds=0.01, thread_name="dictionary-refresh-restart")
    scheduler = RefreshScheduler(dictionary, config)

    scheduler.start()
    assert fetcher.entered.wait(5)
    scheduler.stop(timeout=0.05)

    # The loop is still inside its fetch, so it is stopped but not yet gone.
    assert not scheduler.is_running
    assert len(refresh_threads(config.thread_name)) == 1

    opener = threading.Timer(0.1, fetcher.gate.set)
    opener.start()
    try:
        scheduler.start()
        assert scheduler.is_running
        assert len(refresh_threads(config.thread_name)) == 1
    finally:
        scheduler.stop()
        opener.join(5)

    assert wait_for(lambda: not refresh_threads(config.thread_name))
