# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import threading
from dataclasses import dataclass

from files_manager.application.use_cases.thumbnails.generate_thumbnails import (
    GenerateThumbnailsUseCase,
)
from files_manager.infrastructure.observability import WORKER_GAUGE
from files_manager.infrastructure.queue import SqlThumbnailQueue
from files_manager.shared.logging import logger, set_correlation_id


@dataclass
class _WorkerState:
    stop: threading.Event
    threads: list[threading.Thread]


class ThumbnailWorkerPool:
    """Fixed set of threads draining the thumbnail queue.

    Each worker claims one message at a time, runs the thumbnail use case
    and acknowledges the message afterwards whatever the per-size outcome.
    A worker that dies mid-job leaves its message in flight until the
    visibility timeout hands it to someone else. A message claimed more than
    ``max_attempts`` times is acknowledged without running.
    """

    def __init__(
        self,
        *,
        queue: SqlThumbnailQueue,
        use_case: GenerateThumbnailsUseCase,
        workers: int,
        poll_interval: float,
        max_attempts: int = 5,
    ) -> None:
        self._queue = queue
        self._use_case = use_case
        self._workers = max(1, workers)
        self._poll_interval = poll_interval
        self._max_attempts = max(1, max_attempts)
        self._state: _WorkerState | None = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._state is not None

    def start(self) -> None:
        with self._lock:
            if self._state is not None:
                return
            state = _WorkerState(stop=threading.Event(), threads=[])
            for index in range(self._workers):
                th = threading.Thread(
                    target=self._run,
                    args=(index, state.stop),
                    name=f"thumbnail-worker-{index}",
                    daemon=True,
                )
                state.threads.append(th)
                th.start()
            self._state = state
        logger.info(f"thumbnails.pool: started workers={self._workers}")

    def stop(self, timeout: float | None = None) -> None:
        with self._lock:
            state = self._state
            self._state = None
        if state is None:
            return
        state.stop.set()
        for th in state.threads:
            th.join(timeout)
        logger.info("thumbnails.pool: stopped")

    def run_once(self) -> bool:
        """Process at most one message; return whether one was handled."""

        self._queue.requeue_expired()
        message = self._queue.get()
        if message is None:
            return False
        set_correlation_id(message.message_id)
        if message.attempts > self._max_attempts:
            logger.error(
                f"thumbnails.pool: dropping job file_id={message.payload.file_id} "
                f"attempts={message.attempts}"
            )
            self._queue.ack(message.message_id)
            return True
        logger.info(
            f"thumbnails.pool: job file_id={message.payload.file_id} "
            f"attempt={message.attempts}"
        )
        self._use_case.execute(message.payload)
        self._queue.ack(message.message_id)
        return True

    def drain(self) -> int:
        handled = 0
        while self.run_once():
            handled += 1
        return handled

    def _run(self, index: int, stop: threading.Event) -> None:
        logger.info(f"thumbnails.worker: start index={index}")
        WORKER_GAUGE.inc()
        try:
            while not stop.is_set():
                try:
                    handled = self.run_once()
                except Exception:
                    logger.exception(f"thumbnails.worker: iteration failed index={index}")
                    handled = False
                if not handled:
                    stop.wait(self._poll_interval)
        finally:
            WORKER_GAUGE.dec()
            logger.info(f"thumbnails.worker: exit index={index}")


__all__ = ["ThumbnailWorkerPool"]
