# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Standalone thumbnail worker: ``python -m files_manager.worker``."""

import signal
import threading

from files_manager.infrastructure.container import container
from files_manager.infrastructure.db import init_db
from files_manager.shared.logging import logger, setup_logging


def main() -> None:
    setup_logging(debug_mode=container.config.debug_logging)
    init_db(container.engine)

    stop = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info(f"worker: received signal {signum}, shutting down")
        stop.set()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    pool = container.thumbnail_worker_pool
    pool.start()
    try:
        stop.wait()
    finally:
        pool.stop(timeout=10.0)


if __name__ == "__main__":
    main()
