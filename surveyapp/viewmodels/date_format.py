"""Date labeling helpers for the survey view model.

Call context:
    ``SurveyVM.on_date_picked`` formats picker selections with
    :func:`format_picker_date` before storing them as date answers.
"""

from __future__ import annotations

import time
from datetime import datetime, tzinfo
from typing import Optional


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def format_picker_date(timestamp_ms: int, tz: Optional[tzinfo] = None) -> str:
    """Render epoch milliseconds as ``"Tue, Nov 14"`` (weekday, month, day).

    ``tz`` defaults to the local timezone. Day numbers are not zero padded.
    """
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz)
    return f"{moment:%a, %b} {moment.day}"


__all__ = ["format_picker_date", "now_ms"]
