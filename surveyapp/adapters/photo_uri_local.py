from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Set, Union

from surveyapp.domain.ports import PhotoUriPort


class LocalPhotoUriManager(PhotoUriPort):
    """Allocates ``file://`` capture targets under a local photos directory.

    Names follow ``selfie-<epoch ms>.jpg``. When two calls land on the same
    millisecond, or the file already exists, a ``-<n>`` suffix keeps them apart.
    """

    def __init__(
        self,
        photos_dir: Union[str, Path],
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.photos_dir = Path(photos_dir)
        self._clock = clock
        self._issued: Set[str] = set()

    def build_new_uri(self) -> str:
        self.photos_dir.mkdir(parents=True, exist_ok=True)
        stem = f"selfie-{int(self._clock() * 1000)}"
        name = f"{stem}.jpg"
        counter = 1
        while name in self._issued or (self.photos_dir / name).exists():
            name = f"{stem}-{counter}.jpg"
            counter += 1
        self._issued.add(name)
        return (self.photos_dir / name).resolve().as_uri()


__all__ = ["LocalPhotoUriManager"]
