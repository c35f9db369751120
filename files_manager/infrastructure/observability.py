# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from prometheus_client import Counter, Gauge

from files_manager.shared.config import load_config

_config = load_config()

THUMBNAILS_GENERATED = Counter(
    "files_manager_thumbnails_generated_total",
    "Thumbnail variants written to the blob store",
    labelnames=("size",),
)
THUMBNAIL_FAILURES = Counter(
    "files_manager_thumbnail_failures_total",
    "Thumbnail variants that could not be rendered or written",
    labelnames=("size",),
)
WORKER_GAUGE = Gauge("files_manager_thumbnail_workers", "Active thumbnail workers")


def record_thumbnail_result(size: int, *, ok: bool) -> None:
    if not _config.observability.metrics_enabled:
        return
    counter = THUMBNAILS_GENERATED if ok else THUMBNAIL_FAILURES
    counter.labels(size=str(size)).inc()


__all__ = [
    "THUMBNAILS_GENERATED",
    "THUMBNAIL_FAILURES",
    "WORKER_GAUGE",
    "record_thumbnail_result",
]
