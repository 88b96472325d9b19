from __future__ import annotations
import json
import os
from typing import Dict

from surveyapp.domain.ports import StoragePort


class StorageLocal(StoragePort):
    """Local filesystem storage for user prefs (JSON)."""

    PREFS_FILENAME = "user_prefs.json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    @property
    def prefs_path(self) -> str:
        return os.path.join(self.root, self.PREFS_FILENAME)

    def save_user_prefs(self, prefs: Dict) -> None:
        os.makedirs(self.root, exist_ok=True)
        with open(self.prefs_path, "w", encoding="utf-8") as f:
            json.dump(prefs, f, ensure_ascii=False, indent=2)

    def load_user_prefs(self) -> Dict:
        if not os.path.exists(self.prefs_path):
            return {}
        with open(self.prefs_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.prefs_path} must contain a JSON object.")
        return data
