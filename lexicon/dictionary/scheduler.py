from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from .errors import DictionaryError
from .store import Dictionary

logger = logging.getLogger(__name__)


@dataclass
class SchedulerConfig:
    interval_seconds: float = 3600.0
    thread_name: str = "dictionary-refresh"


class RefreshScheduler:
    """
    Background thread that refreshes a Dictionary on a fixed interval.

    A failed refresh is logged and the loop carries on; the dictionary keeps
    serving its last good dataset and the next tick is the retry.
    """

    def __init__(self, dictionary: Dictionary, config: Optional[SchedulerConfig] = None):
        self.dictionary = dictionary
        self.config = config or SchedulerConfig()
        if self.config.interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop.is_set()

    def start(self) -> None:
        if self.is_running:
            return
        if self._thread is not None:
            # A stopped loop is still finishing its last refresh; let it exit first.
            self._thread.join()
            self._thread = None
        stop = threading.Event()
        thread = threading.Thread(target=self._run, args=(stop,), name=self.config.thread_name, daemon=True)
        self._stop = stop
        self._thread = thread
        thread.start()
        logger.info("Refreshing %s every %.0fs", self.dictionary.source, self.config.interval_seconds)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if not self._thread.is_alive():
                self._thread = None

    def run_once(self) -> bool:
        try:
            self.dictionary.refresh()
        except DictionaryError as exc:
            logger.warning("Scheduled refresh of %s failed: %s", self.dictionary.source, exc)
            return False
        return True

    def _run(self, stop: threading.Event) -> None:
        while not stop.wait(self.config.interval_seconds):
            self.run_once()
