"""Config file discovery and loading.

Walk-up finder locates orgmap.toml, similar to how git finds .git/.
Supports the ORGMAP_CONFIG env var and the --config CLI flag.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from orgmap.config.models import OrgmapConfig

CONFIG_FILENAME = "orgmap.toml"
CONFIG_ENV_VAR = "ORGMAP_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for orgmap.toml.

    ORGMAP_CONFIG, when set, wins; if it points at a missing file no
    config is used.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> OrgmapConfig:
    """Load and validate config from a TOML file (defaults if none is found)."""
    if path is None:
        path = find_config(cwd)
    if path is None:
        return OrgmapConfig()

    data = tomllib.loads(path.read_text(encoding="utf-8"))
    return OrgmapConfig.model_validate(data)
