"""Helpers for loading the optional provisioning config file."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Optional

from .errors import ConfigError
from .model import STAGES, DiskLayout, NormalizedValue, ProvisionSettings
from .util.normalize import normalize

LOGGER = logging.getLogger(__name__)


def read_config(path: Path) -> Optional[Any]:
    """Parse ``path`` into a tree of ``SimpleNamespace`` objects, lists and scalars.

    Returns ``None`` when the file does not exist.
    """
    if not path.is_file():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8-sig"), object_hook=lambda obj: SimpleNamespace(**obj))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc


def load_config(path: Path) -> ProvisionSettings:
    raw = read_config(path)
    if raw is None:
        LOGGER.info("No configuration file at %s, using defaults", path)
        return ProvisionSettings()
    LOGGER.info("Loaded configuration from %s", path)
    return settings_from_document(normalize(raw))


def settings_from_document(document: NormalizedValue) -> ProvisionSettings:
    if not isinstance(document, dict):
        LOGGER.warning("Configuration document is not an object; ignoring its contents")
        return ProvisionSettings(raw=document)

    disk: Dict[str, Any] = document.get("disk") or {}
    if not isinstance(disk, dict):
        raise ConfigError("'disk' must be an object")
    defaults = DiskLayout()
    layout = DiskLayout(
        partition_style=str(disk.get("partition_style") or defaults.partition_style),
        file_system=str(disk.get("file_system") or defaults.file_system),
        label=str(disk.get("label") or defaults.label),
    )

    skip = document.get("skip") or []
    if isinstance(skip, str):
        skip = [skip]
    if not isinstance(skip, list):
        raise ConfigError("'skip' must be a list of stage names")

    skip = [str(item).lower() for item in skip]
    unknown = [name for name in skip if name not in STAGES]
    if unknown:
        raise ConfigError(f"Unknown stage name(s) in 'skip': {', '.join(unknown)}; expected one of {', '.join(STAGES)}")

    return ProvisionSettings(disk=layout, skip=skip, raw=document)
