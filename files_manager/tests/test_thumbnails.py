from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image, UnidentifiedImageError

from files_manager.application.use_cases.thumbnails.generate_thumbnails import (
    GenerateThumbnailsUseCase,
)
from files_manager.domain.files.entities import FileKind, FileRecord, ThumbnailJob
from files_manager.infrastructure.thumbnails import PillowThumbnailRenderer


def _png(width: int, height: int) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (width, height), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


def _store_image(files, blobs, owner_id: int, data: bytes, *, kind=FileKind.IMAGE):
    path = blobs.new_path()
    blobs.write(path, data)
    return files.add(
        FileRecord(
            id=0,
            owner_id=owner_id,
            name="cat.png",
            kind=kind,
            is_public=False,
            parent_id=0,
            local_path=path,
        )
    )


class _FlakyRenderer:
    def __init__(self, broken_width: int) -> None:
        self._inner = PillowThumbnailRenderer()
        self._broken_width = broken_width

    def render(self, data: bytes, width: int) -> bytes:
        if width == self._broken_width:
            raise OSError("disk full")
        return self._inner.render(data, width)


def test_renderer_keeps_aspect_ratio_and_format() -> None:
    rendered = PillowThumbnailRenderer().render(_png(1000, 400), 250)

    with Image.open(BytesIO(rendered)) as image:
        assert image.size == (250, 100)
        assert image.format == "PNG"


def test_renderer_rejects_non_images() -> None:
    with pytest.raises(UnidentifiedImageError):
        PillowThumbnailRenderer().render(b"hello", 100)


def test_generates_every_size_next_to_original(files, blobs) -> None:
    record = _store_image(files, blobs, 1, _png(800, 600))
    use_case = GenerateThumbnailsUseCase(
        files=files, blobs=blobs, renderer=PillowThumbnailRenderer()
    )

    results = use_case.execute(ThumbnailJob(user_id=1, file_id=record.id))

    assert results == {500: True, 250: True, 100: True}
    for size in (500, 250, 100):
        with Image.open(BytesIO(blobs.read(f"{record.local_path}_{size}"))) as image:
            assert image.width == size


def test_rerun_overwrites_same_paths(files, blobs) -> None:
    record = _store_image(files, blobs, 1, _png(640, 480))
    use_case = GenerateThumbnailsUseCase(
        files=files, blobs=blobs, renderer=PillowThumbnailRenderer()
    )
    job = ThumbnailJob(user_id=1, file_id=record.id)

    use_case.execute(job)
    paths_before = set(blobs.blobs)
    use_case.execute(job)

    assert set(blobs.blobs) == paths_before
    assert len(paths_before) == 4


def test_one_failing_size_does_not_block_others(files, blobs) -> None:
    record = _store_image(files, blobs, 1, _png(800, 600))
    use_case = GenerateThumbnailsUseCase(files=files, blobs=blobs, renderer=_FlakyRenderer(250))

    results = use_case.execute(ThumbnailJob(user_id=1, file_id=record.id))

    assert results == {500: True, 250: False, 100: True}
    assert not blobs.exists(record.thumbnail_path(250))
    assert blobs.exists(record.thumbnail_path(100))


def test_skips_jobs_for_non_images_and_missing_records(files, blobs) -> None:
    record = _store_image(files, blobs, 1, b"plain", kind=FileKind.FILE)
    use_case = GenerateThumbnailsUseCase(
        files=files, blobs=blobs, renderer=PillowThumbnailRenderer()
    )

    assert use_case.execute(ThumbnailJob(user_id=1, file_id=record.id)) == {}
    assert use_case.execute(ThumbnailJob(user_id=1, file_id=999)) == {}
    assert len(blobs.blobs) == 1


def test_missing_original_fails_every_size(files, blobs) -> None:
    record = _store_image(files, blobs, 1, _png(10, 10))
    blobs.blobs.clear()
    use_case = GenerateThumbnailsUseCase(
        files=files, blobs=blobs, renderer=PillowThumbnailRenderer()
    )

    results = use_case.execute(ThumbnailJob(user_id=1, file_id=record.id))

    assert results == {500: False, 250: False, 100: False}
