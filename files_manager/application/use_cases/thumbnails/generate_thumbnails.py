# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.domain.files.entities import THUMBNAIL_SIZES, ThumbnailJob
from files_manager.domain.files.repositories import (
    BlobStore,
    FileRepository,
    ThumbnailRenderer,
)
from files_manager.infrastructure.observability import record_thumbnail_result
from files_manager.shared.logging import logger


class GenerateThumbnailsUseCase:
    """Render every thumbnail variant of an uploaded image.

    Each size is rendered and written independently; a failing size is
    logged and counted but never stops the others. Running the same job
    twice rewrites the same paths.
    """

    def __init__(
        self,
        *,
        files: FileRepository,
        blobs: BlobStore,
        renderer: ThumbnailRenderer,
    ) -> None:
        self._files = files
        self._blobs = blobs
        self._renderer = renderer

    def execute(self, job: ThumbnailJob) -> dict[int, bool]:
        record = self._files.get(job.file_id)
        if record is None or not record.is_image or record.owner_id != job.user_id:
            logger.warning(
                f"thumbnails: skipping job file_id={job.file_id} user_id={job.user_id}"
            )
            return {}

        assert record.local_path is not None
        source = self._blobs.read(record.local_path)
        if source is None:
            logger.error(f"thumbnails: original missing file_id={record.id}")
            for size in THUMBNAIL_SIZES:
                record_thumbnail_result(size, ok=False)
            return {size: False for size in THUMBNAIL_SIZES}

        results: dict[int, bool] = {}
        for size in THUMBNAIL_SIZES:
            try:
                rendered = self._renderer.render(source, size)
                self._blobs.write(record.thumbnail_path(size), rendered)
            except Exception:
                logger.exception(f"thumbnails: size={size} failed file_id={record.id}")
                results[size] = False
            else:
                logger.debug(f"thumbnails: size={size} ok file_id={record.id}")
                results[size] = True
            record_thumbnail_result(size, ok=results[size])

        logger.info(
            f"thumbnails: done file_id={record.id} "
            f"ok={sum(results.values())}/{len(THUMBNAIL_SIZES)}"
        )
        return results


__all__ = ["GenerateThumbnailsUseCase"]
