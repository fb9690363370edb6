"""Narrow interface onto the operating-system configuration surface."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from ..model import DiskDescriptor, NetAdapterDescriptor


class HostSystem(Protocol):
    # Execution policy and remoting
    def set_execution_policy(self, policy: str) -> None: ...

    def enable_remoting(self) -> None: ...

    def set_wsman_value(self, path: str, value: str) -> None: ...

    def restart_service(self, name: str) -> None: ...

    def enable_credssp(self, role: str, delegate_computer: Optional[str] = None) -> None: ...

    # Storage
    def list_disks(self) -> List[DiskDescriptor]: ...

    def set_disk_online(self, number: int) -> None: ...

    def set_disk_read_only(self, number: int, read_only: bool) -> None: ...

    def get_partitions(self, number: int) -> List[Dict[str, Any]]: ...

    def initialize_disk(self, number: int, partition_style: str) -> None: ...

    def new_partition(self, number: int, drive_letter: str) -> None: ...

    def format_volume(self, drive_letter: str, file_system: str, label: str) -> None: ...

    def volume_drive_letters(self) -> List[str]: ...

    def mapped_drive_letters(self) -> List[str]: ...

    # Network
    def list_net_adapters(self) -> List[NetAdapterDescriptor]: ...

    def rename_net_adapter(self, current_name: str, new_name: str) -> None: ...
