"""Runtime settings for the survey app.

Precedence: dataclass defaults, then the user-prefs JSON from a
``StoragePort``, then ``SURVEY_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional

from surveyapp.domain.ports import StoragePort

ENV_KEYS: Dict[str, str] = {
    "SURVEY_SOURCE": "survey_source",
    "SURVEY_API_KEY": "api_key",
    "SURVEY_REQUEST_TIMEOUT_S": "request_timeout_s",
    "SURVEY_RETRIES": "retries",
    "SURVEY_PHOTOS_DIR": "photos_dir",
}


@dataclass
class SurveySettings:
    """Typed runtime settings.

    ``survey_source`` is ``"memory"`` (built-in sample), a JSON file path, or an
    ``http(s)://`` base URL of a survey service.
    """

    survey_source: str = "memory"
    api_key: str = ""
    request_timeout_s: int = 10
    retries: int = 2
    photos_dir: str = "photos"
    debug_logging: bool = False

    @classmethod
    def load(
        cls,
        storage: Optional[StoragePort] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "SurveySettings":
        settings = cls()
        if storage is not None:
            settings.apply_dict(storage.load_user_prefs())
        env = os.environ if environ is None else environ
        overrides = {key: env[var] for var, key in ENV_KEYS.items() if env.get(var)}
        if overrides:
            settings.apply_dict(overrides)
        return settings

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply flat settings, rejecting unknown keys."""
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")
        allowed = {f.name for f in fields(self)}
        unknown = set(payload.keys()) - allowed
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        if "survey_source" in payload:
            self.survey_source = self._coerce_str(payload["survey_source"]) or "memory"
        if "api_key" in payload:
            self.api_key = self._coerce_str(payload["api_key"])
        if "request_timeout_s" in payload:
            self.request_timeout_s = self._coerce_int("request_timeout_s", payload["request_timeout_s"], minimum=1)
        if "retries" in payload:
            self.retries = self._coerce_int("retries", payload["retries"], minimum=0)
        if "photos_dir" in payload:
            self.photos_dir = self._coerce_str(payload["photos_dir"]) or "photos"
        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, storage: StoragePort) -> None:
        storage.save_user_prefs(self.to_dict())

    @staticmethod
    def _coerce_str(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any, *, minimum: int = 0) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if coerced < minimum:
            raise ValueError(f"{name} must be >= {minimum}.")
        return coerced


__all__ = ["ENV_KEYS", "SurveySettings"]
