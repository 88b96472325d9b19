from __future__ import annotations

import pytest

from surveyapp.adapters.storage_local import StorageLocal


def test_prefs_roundtrip(tmp_path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path / "prefs"))

    storage.save_user_prefs({"survey_source": "memory", "retries": 1})

    assert storage.load_user_prefs() == {"survey_source": "memory", "retries": 1}


def test_missing_prefs_file_yields_empty_dict(tmp_path) -> None:
    assert StorageLocal(root_dir=str(tmp_path)).load_user_prefs() == {}


def test_non_object_prefs_are_rejected(tmp_path) -> None:
    (tmp_path / "user_prefs.json").write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        StorageLocal(root_dir=str(tmp_path)).load_user_prefs()
