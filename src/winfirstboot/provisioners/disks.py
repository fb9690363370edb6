"""Bring offline disks online and give blank ones a single data volume."""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..errors import ProvisioningError
from ..host.base import HostSystem
from ..model import DiskDescriptor, DiskLayout
from .letters import available_drive_letters

LOGGER = logging.getLogger(__name__)


def offline_disks(host: HostSystem) -> List[DiskDescriptor]:
    return [disk for disk in host.list_disks() if disk.is_offline]


def bring_online_and_partition(
    host: HostSystem,
    disks: Sequence[DiskDescriptor],
    layout: Optional[DiskLayout] = None,
) -> List[str]:
    """Online each disk in the order given and partition the ones without partitions.

    Returns the drive letters assigned. A failure on any disk propagates
    immediately; nothing done so far is rolled back and the remaining disks
    are left untouched.
    """
    layout = layout or DiskLayout()
    assigned: List[str] = []
    for disk in disks:
        LOGGER.info("Bringing disk %s (%s, %s bytes) online", disk.number, disk.model or "unknown model", disk.size_bytes)
        host.set_disk_online(disk.number)
        if disk.is_read_only:
            LOGGER.info("Clearing read-only flag on disk %s", disk.number)
            host.set_disk_read_only(disk.number, False)

        if host.get_partitions(disk.number):
            LOGGER.info("Disk %s already has partitions, leaving them as they are", disk.number)
            continue

        letter = available_drive_letters(host, first_only=True)
        if letter is None:
            raise ProvisioningError(f"No free drive letter left for disk {disk.number}")

        LOGGER.info("Initializing disk %s as %s", disk.number, layout.partition_style)
        host.initialize_disk(disk.number, layout.partition_style)
        LOGGER.info("Creating partition on disk %s with drive letter %s", disk.number, letter)
        host.new_partition(disk.number, letter)
        LOGGER.info("Formatting %s: as %s with label '%s'", letter, layout.file_system, layout.label)
        host.format_volume(letter, layout.file_system, layout.label)
        assigned.append(letter)
    return assigned
