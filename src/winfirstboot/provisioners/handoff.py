"""Hand off to an optional post-provisioning Python script."""
from __future__ import annotations

import logging
import runpy
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER = logging.getLogger(__name__)


def run_post_script(path: Path, context: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
    """Execute ``path`` in this process with ``context`` as its initial globals.

    Returns the script's resulting globals, or ``None`` when it does not exist.
    Exceptions raised by the script propagate.
    """
    if not path.is_file():
        LOGGER.info("No post-provisioning script found at %s", path)
        return None
    LOGGER.info("Running post-provisioning script %s", path)
    result = runpy.run_path(str(path), init_globals=dict(context or {}), run_name="__main__")
    LOGGER.info("Post-provisioning script %s finished", path)
    return result
