"""Reader display preferences: line colors and font.

One ``PreferencesStore`` is created by the app factory and handed to the
routes through a dependency. It loads once on construction and writes the
JSON file after every change; without a path it only keeps them in memory.
"""

import json
import logging
import threading
from pathlib import Path

from pydantic import Field

from docannotate.schemas.base import ApiModel

logger = logging.getLogger(__name__)


class ColorPreferences(ApiModel):
    hovered_line: str = "rgba(107,114,128,0.3)"
    selected_line: str = "rgba(59,130,246,0.10)"
    highlighted_line: str = "#fde68a"
    selected_highlighted_line: str = "#facc15"
    comment_dot: str = "#3b82f6"


class FontPreferences(ApiModel):
    family: str = "system-ui"
    size: int = Field(16, ge=8, le=48)
    line_height: float = Field(1.6, ge=1.0, le=3.0)


class ViewerPreferences(ApiModel):
    colors: ColorPreferences = ColorPreferences()
    font: FontPreferences = FontPreferences()


class PreferencesPatch(ApiModel):
    colors: dict[str, str] = {}
    font: dict[str, str | int | float] = {}


def merge_preferences(current: ViewerPreferences, patch: PreferencesPatch) -> ViewerPreferences:
    """Apply a partial update one section deep; unknown keys are ignored."""
    data = current.model_dump(by_alias=True)
    for section in ("colors", "font"):
        values = getattr(patch, section)
        data[section].update({k: v for k, v in values.items() if k in data[section]})
    return ViewerPreferences.model_validate(data)


class PreferencesStore:
    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else None
        self._lock = threading.Lock()
        self._current = self._load()

    def _load(self) -> ViewerPreferences:
        if self.path is None or not self.path.exists():
            return ViewerPreferences()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return merge_preferences(ViewerPreferences(), PreferencesPatch.model_validate(raw))
        except (OSError, ValueError) as e:
            # a corrupt file falls back to defaults and is overwritten on the next save
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, e)
            return ViewerPreferences()

    def _save(self):
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self._current.model_dump_json(by_alias=True, indent=2), encoding="utf-8")

    def get(self) -> ViewerPreferences:
        return self._current

    def update(self, patch: PreferencesPatch) -> ViewerPreferences:
        with self._lock:
            self._current = merge_preferences(self._current, patch)
            self._save()
            return self._current

    def reset(self) -> ViewerPreferences:
        with self._lock:
            self._current = ViewerPreferences()
            self._save()
            return self._current
