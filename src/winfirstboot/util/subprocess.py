"""Safe subprocess wrappers."""
from __future__ import annotations

import logging
import subprocess
from typing import Iterable, Sequence

from ..errors import HostCommandError

LOGGER = logging.getLogger(__name__)


def run(cmd: Sequence[str] | Iterable[str], **kwargs) -> subprocess.CompletedProcess:
    """Run ``cmd`` without a shell, capturing text output.

    A non-zero exit status raises :class:`HostCommandError` unless ``check=False``.
    """
    cmd = list(cmd)
    check = kwargs.pop("check", True)
    kwargs.setdefault("shell", False)
    kwargs.setdefault("capture_output", True)
    kwargs.setdefault("text", True)
    LOGGER.debug("Running: %s", cmd)
    result = subprocess.run(cmd, check=False, **kwargs)
    if check and result.returncode != 0:
        raise HostCommandError(cmd, result.returncode, result.stderr)
    return result
