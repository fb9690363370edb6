"""Drive-letter allocation."""
from __future__ import annotations

import logging
import string
from typing import List, Optional, Union

from ..host.base import HostSystem

LOGGER = logging.getLogger(__name__)

# A and B stay reserved for legacy removable media.
DRIVE_LETTERS = tuple(string.ascii_uppercase[2:])


def used_drive_letters(host: HostSystem) -> set[str]:
    used = {letter.upper() for letter in host.volume_drive_letters()}
    used.update(letter.upper() for letter in host.mapped_drive_letters())
    return used


def available_drive_letters(host: HostSystem, first_only: bool = False) -> Union[List[str], Optional[str]]:
    """Return the free letters C..Z in ascending order, or only the lowest one.

    The host is queried on every call; callers allocating several letters must
    call again after each one is consumed.
    """
    used = used_drive_letters(host)
    available = sorted(set(DRIVE_LETTERS) - used)
    LOGGER.debug("Drive letters in use: %s; available: %s", sorted(used), available)
    if first_only:
        return available[0] if available else None
    return available
