"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from datetime import datetime

APP_DIR_NAME: Final[str] = "subsync"
REPORTS_DIR_NAME: Final[str] = "reports"
REPORT_FILENAME_TEMPLATE: Final[str] = "member-sync-{stamp}.xlsx"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    reports_dir_name: str = REPORTS_DIR_NAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def reports_dir(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        reports = base / self.reports_dir_name
        if ensure:
            reports.mkdir(parents=True, exist_ok=True)
        return reports

    def report_path(self, synced_at: datetime, *, ensure: bool = True) -> Path:
        stamp = synced_at.strftime("%Y%m%dT%H%M%S")
        return self.reports_dir(ensure=ensure) / REPORT_FILENAME_TEMPLATE.format(stamp=stamp)


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("SUBSYNC_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    return StorageConfig(data_dir=data_dir)
