from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import pytest

from winfirstboot.model import DiskDescriptor, NetAdapterDescriptor


class FakeHost:
    """In-memory stand-in for WindowsHost that records every call."""

    def __init__(self) -> None:
        self.disks: List[DiskDescriptor] = []
        self.partitions: Dict[int, List[Dict[str, Any]]] = {}
        self.volume_letters: List[str] = ["C"]
        self.mapped_letters: List[str] = []
        self.adapters: List[NetAdapterDescriptor] = []
        self.fail_on: Dict[str, Exception] = {}
        self.calls: List[tuple] = []

    def add_disk(self, number: int, *, partitioned: bool = False, read_only: bool = False, status: str = "Offline") -> None:
        self.disks.append(
            DiskDescriptor(
                number=number,
                model="Virtual Disk",
                size_bytes=10 * 1024**3,
                operational_status=status,
                has_partitions=partitioned,
                is_read_only=read_only,
            )
        )
        self.partitions[number] = [{"PartitionNumber": 1, "DriveLetter": None}] if partitioned else []

    def called(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise self.fail_on[name]

    def set_execution_policy(self, policy: str) -> None:
        self._record("set_execution_policy", policy)

    def enable_remoting(self) -> None:
        self._record("enable_remoting")

    def set_wsman_value(self, path: str, value: str) -> None:
        self._record("set_wsman_value", path, value)

    def restart_service(self, name: str) -> None:
        self._record("restart_service", name)

    def enable_credssp(self, role: str, delegate_computer: Optional[str] = None) -> None:
        self._record("enable_credssp", role, delegate_computer)

    def list_disks(self) -> List[DiskDescriptor]:
        self._record("list_disks")
        return list(self.disks)

    def set_disk_online(self, number: int) -> None:
        self._record("set_disk_online", number)
        for disk in self.disks:
            if disk.number == number:
                disk.operational_status = "Online"

    def set_disk_read_only(self, number: int, read_only: bool) -> None:
        self._record("set_disk_read_only", number, read_only)

    def get_partitions(self, number: int) -> List[Dict[str, Any]]:
        self._record("get_partitions", number)
        return list(self.partitions.get(number, []))

    def initialize_disk(self, number: int, partition_style: str) -> None:
        self._record("initialize_disk", number, partition_style)

    def new_partition(self, number: int, drive_letter: str) -> None:
        self._record("new_partition", number, drive_letter)
        self.partitions.setdefault(number, []).append({"PartitionNumber": 1, "DriveLetter": drive_letter})
        self.volume_letters.append(drive_letter)

    def format_volume(self, drive_letter: str, file_system: str, label: str) -> None:
        self._record("format_volume", drive_letter, file_system, label)

    def volume_drive_letters(self) -> List[str]:
        return list(self.volume_letters)

    def mapped_drive_letters(self) -> List[str]:
        return list(self.mapped_letters)

    def list_net_adapters(self) -> List[NetAdapterDescriptor]:
        self._record("list_net_adapters")
        return list(self.adapters)

    def rename_net_adapter(self, current_name: str, new_name: str) -> None:
        self._record("rename_net_adapter", current_name, new_name)


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture(autouse=True)
def _reset_root_logging():
    yield
    logging.basicConfig(handlers=[logging.NullHandler()], force=True)
