"""Runtime settings read from the environment.

``STOCKROOM_DATA_DIR``  directory holding products.json and sales.json
``STOCKROOM_ENV``       development | test | staging | production
``LOG_LEVEL``           overrides the level derived from STOCKROOM_ENV
``STOCKROOM_TZ``        IANA zone for report windows, e.g. Europe/Berlin
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LEVEL_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    env: str
    log_level: str
    timezone: tzinfo | None = None

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"

    @property
    def sales_file(self) -> Path:
        return self.data_dir / "sales.json"


def load_settings(data_dir: Path | None = None) -> Settings:
    """Build settings; an explicit ``data_dir`` wins over the environment."""
    env = os.getenv("STOCKROOM_ENV", "development").lower()
    if data_dir is None:
        raw_dir = os.getenv("STOCKROOM_DATA_DIR")
        data_dir = Path(raw_dir) if raw_dir else DEFAULT_DATA_DIR
    return Settings(
        data_dir=data_dir,
        env=env,
        log_level=os.getenv("LOG_LEVEL", _LEVEL_BY_ENV.get(env, "INFO")).upper(),
        timezone=_load_timezone(os.getenv("STOCKROOM_TZ")),
    )


def _load_timezone(name: str | None) -> tzinfo | None:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone {name!r} in STOCKROOM_TZ") from exc
