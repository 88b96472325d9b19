from __future__ import annotations

from surveyapp.adapters.photo_uri_local import LocalPhotoUriManager


def test_uris_are_unique_within_the_same_millisecond(tmp_path) -> None:
    manager = LocalPhotoUriManager(tmp_path / "photos", clock=lambda: 1700000000.0)

    first = manager.build_new_uri()
    second = manager.build_new_uri()

    assert first != second
    assert first.startswith("file://")
    assert first.endswith("selfie-1700000000000.jpg")
    assert second.endswith("selfie-1700000000000-1.jpg")
    assert (tmp_path / "photos").is_dir()


def test_existing_files_are_not_reused(tmp_path) -> None:
    (tmp_path / "selfie-5000.jpg").write_bytes(b"jpeg")
    manager = LocalPhotoUriManager(tmp_path, clock=lambda: 5.0)

    assert manager.build_new_uri().endswith("selfie-5000-1.jpg")
