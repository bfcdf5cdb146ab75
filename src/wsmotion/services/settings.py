"""Editor settings and their JSON persistence."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Callable, Dict, Mapping

__all__ = [
    "Settings",
    "SettingsStore",
    "default_settings_path",
]

LOGGER = logging.getLogger(__name__)
_SETTINGS_VERSION = 1
_DEFAULT_SETTINGS_PATH = Path.home() / ".wsmotion" / "settings.json"
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}


@dataclass(slots=True)
class Settings:
    """Shortcut, notice and display preferences for the editor."""

    next_shortcut: str = "Alt+Right"
    previous_shortcut: str = "Alt+Left"
    end_of_document_notice: str = "At EOF."
    start_of_document_notice: str = "At start of file."
    notice_timeout_ms: int = 3000
    debug_logging: bool = False
    trace_motions: bool = False
    font_family: str = "JetBrains Mono"
    font_size: int = 13
    recent_files: list[str] = field(default_factory=list)


def _parse_flag(raw: str) -> bool:
    return raw.strip().lower() in _TRUE_VALUES


def _parse_int(raw: str) -> int:
    return int(raw.strip(), 10)


# environment variable -> (settings field, parser)
_ENV_OVERRIDES: Mapping[str, tuple[str, Callable[[str], Any]]] = {
    "WSMOTION_NEXT_SHORTCUT": ("next_shortcut", str),
    "WSMOTION_PREVIOUS_SHORTCUT": ("previous_shortcut", str),
    "WSMOTION_FONT_FAMILY": ("font_family", str),
    "WSMOTION_DEBUG_LOGGING": ("debug_logging", _parse_flag),
    "WSMOTION_TRACE_MOTIONS": ("trace_motions", _parse_flag),
    "WSMOTION_NOTICE_TIMEOUT_MS": ("notice_timeout_ms", _parse_int),
    "WSMOTION_FONT_SIZE": ("font_size", _parse_int),
}


def default_settings_path() -> Path:
    """Return the settings path, honoring ``WSMOTION_SETTINGS_PATH``."""

    override = os.environ.get("WSMOTION_SETTINGS_PATH")
    return Path(override).expanduser() if override else _DEFAULT_SETTINGS_PATH


class SettingsStore:
    """Reads and writes :class:`Settings` as a versioned JSON document.

    Values are resolved in three layers: the file on disk, then explicit
    ``overrides`` (usually from the command line), then ``WSMOTION_*``
    environment variables.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_settings_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> Settings:
        settings = self.load_file()
        if overrides:
            settings = _merge(settings, overrides, source="CLI")
        return _merge(settings, _environment_overrides(), source="environment")

    def load_file(self) -> Settings:
        """Return the settings on disk without CLI or environment overrides."""

        return self._from_payload(self._read_payload())

    def save(self, settings: Settings) -> Path:
        """Write ``settings`` through a temporary file so readers never see half a file."""

        document = asdict(settings)
        document["version"] = _SETTINGS_VERSION
        self._path.parent.mkdir(parents=True, exist_ok=True)
        staging = self._path.with_suffix(".tmp")
        staging.write_text(json.dumps(document, indent=2, sort_keys=True), encoding="utf-8")
        staging.replace(self._path)
        LOGGER.debug("Settings saved to %s", self._path)
        return self._path

    def _read_payload(self) -> Dict[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            LOGGER.debug("No settings file at %s; using defaults", self._path)
            return {}
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s does not contain an object", self._path)
            return {}
        return payload

    def _from_payload(self, payload: Mapping[str, Any]) -> Settings:
        if not payload:
            return Settings()
        version = payload.get("version")
        if version != _SETTINGS_VERSION:
            LOGGER.debug("Settings file %s has version %s (expected %s)", self._path, version, _SETTINGS_VERSION)
        defaults = Settings()
        accepted: Dict[str, Any] = {}
        for setting in fields(Settings):
            if setting.name not in payload:
                continue
            value = payload[setting.name]
            if not _matches_default_type(value, getattr(defaults, setting.name)):
                LOGGER.warning("Ignoring settings value %s=%r from %s", setting.name, value, self._path)
                continue
            accepted[setting.name] = value
        LOGGER.debug("Settings loaded from %s", self._path)
        return replace(defaults, **accepted)


def _matches_default_type(value: Any, default: Any) -> bool:
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(default, list):
        return isinstance(value, list) and all(isinstance(item, str) for item in value)
    return isinstance(value, type(default))


def _environment_overrides() -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for env_name, (field_name, parse) in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw is None:
            continue
        try:
            values[field_name] = parse(raw)
        except ValueError as exc:
            LOGGER.warning("Ignoring environment override %s=%r for %s: %s", env_name, raw, field_name, exc)
    return values


def _merge(settings: Settings, overrides: Mapping[str, Any], *, source: str) -> Settings:
    known = {setting.name for setting in fields(Settings)}
    applied = {key: value for key, value in overrides.items() if key in known and value is not None}
    if not applied:
        return settings
    LOGGER.debug("Applying %s settings overrides: %s", source, sorted(applied))
    return replace(settings, **applied)
