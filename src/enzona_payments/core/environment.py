"""
Collects ``ENZONA_*`` settings from the process environment, an optional
``.env`` file and explicit overrides into one plain dict.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

__all__ = ["ENV_PREFIX", "build_environment", "read_env_file"]

ENV_PREFIX = "ENZONA_"


def read_env_file(path: Path) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` lines; a missing file yields an empty dict."""
    if not path.is_file():
        return {}

    settings: Dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line.startswith("export "):
            line = line[7:].lstrip()
        if not line or line[0] == "#" or "=" not in line:
            continue
        key, _, value = line.partition("=")
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        settings[key.strip()] = value
    return settings


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Merge the settings sources, lowest precedence first: the ``.env`` file,
    then ``base`` (defaults to :data:`os.environ`), then ``overrides``.

    Only ``ENZONA_*`` keys are taken from ``base`` and the file.
    """
    file_settings = read_env_file(Path(env_file)) if env_file is not None else {}
    settings = {
        key: value
        for source in (file_settings, os.environ if base is None else base)
        for key, value in source.items()
        if key.startswith(ENV_PREFIX)
    }
    settings.update(overrides or {})
    return settings
