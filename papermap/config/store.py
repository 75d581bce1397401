"""
Persistence for filter configurations.

Settings live in a single JSON document on disk treated as a key-value
store: the current configuration under ``FILTER_SETTINGS_KEY`` and an
optional pinned snapshot under ``PINNED_FILTER_SETTINGS_KEY``.

Writes go through a temporary file and ``os.replace`` so a reader never sees
a half-written document. Reads never raise: a missing, unreadable or
malformed snapshot is reported with a warning and treated as absent, and the
caller falls back to defaults.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from papermap.config.settings import Settings, get_settings
from papermap.models.filters import FilterConfiguration, PinnedFilterConfiguration

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class JsonKeyValueStore:
    """Blocking key-value store backed by one JSON file."""

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            logger.warning("Ignoring unreadable settings store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring settings store %s: top level is not an object", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[Any]:
        return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)

    def _write_all(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class FilterSettingsStore:
    """Load and save FilterConfiguration snapshots under stable keys."""

    def __init__(
        self,
        store: Optional[JsonKeyValueStore] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.store = store or JsonKeyValueStore(self.settings.store_path)

    def load(self) -> FilterConfiguration:
        """Restore the saved configuration, or defaults if there is none."""
        snapshot = self._load_snapshot(self.settings.FILTER_SETTINGS_KEY, FilterConfiguration)
        return snapshot if snapshot is not None else FilterConfiguration()

    def save(self, config: FilterConfiguration) -> None:
        self.store.set(self.settings.FILTER_SETTINGS_KEY, config.to_snapshot())

    def pin(self, config: FilterConfiguration) -> PinnedFilterConfiguration:
        pinned = PinnedFilterConfiguration.model_validate(config.model_dump())
        self.store.set(self.settings.PINNED_FILTER_SETTINGS_KEY, pinned.to_snapshot())
        return pinned

    def load_pinned(self) -> Optional[PinnedFilterConfiguration]:
        return self._load_snapshot(
            self.settings.PINNED_FILTER_SETTINGS_KEY, PinnedFilterConfiguration
        )

    def _load_snapshot(self, key: str, model):
        raw = self.store.get(key)
        if raw is None:
            return None
        if not isinstance(raw, dict):
            logger.warning("Discarding filter snapshot %r: expected an object", key)
            return None
        try:
            return model.from_snapshot(raw)
        except ValidationError as exc:
            logger.warning("Discarding malformed filter snapshot %r: %s", key, exc)
            return None
