"""PowerShell-backed implementation of the host interface."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from ..errors import HostCommandError
from ..model import HYPERV_ADAPTER_NAME_PROPERTY, DiskDescriptor, NetAdapterDescriptor
from ..util import subprocess as proc
from ..util.logging import TRACE

LOGGER = logging.getLogger(__name__)

POWERSHELL = "powershell"


class WindowsHost:
    def __init__(self, executable: str = POWERSHELL) -> None:
        self.executable = executable

    def set_execution_policy(self, policy: str) -> None:
        self._ps(f"Set-ExecutionPolicy -ExecutionPolicy {policy} -Scope LocalMachine -Force")

    def enable_remoting(self) -> None:
        self._ps("Enable-PSRemoting -Force")

    def set_wsman_value(self, path: str, value: str) -> None:
        self._ps(f"Set-Item -Path {_quote(path)} -Value {_quote(value)} -Force")

    def restart_service(self, name: str) -> None:
        self._ps(f"Restart-Service -Name {_quote(name)} -Force")

    def enable_credssp(self, role: str, delegate_computer: Optional[str] = None) -> None:
        command = f"Enable-WSManCredSSP -Role {role} -Force"
        if delegate_computer is not None:
            command += f" -DelegateComputer {_quote(delegate_computer)}"
        self._ps(command)

    def list_disks(self) -> List[DiskDescriptor]:
        rows = self._ps_json(
            "Get-Disk | Select-Object -Property Number, Model, Size, OperationalStatus, NumberOfPartitions, IsReadOnly"
        )
        disks: List[DiskDescriptor] = []
        for row in rows:
            if not isinstance(row, dict) or row.get("Number") is None:
                continue
            disks.append(
                DiskDescriptor(
                    number=int(row["Number"]),
                    model=(row.get("Model") or "").strip() or None,
                    size_bytes=int(row.get("Size") or 0),
                    operational_status=str(row.get("OperationalStatus") or "Unknown"),
                    has_partitions=int(row.get("NumberOfPartitions") or 0) > 0,
                    is_read_only=bool(row.get("IsReadOnly")),
                )
            )
        return disks

    def set_disk_online(self, number: int) -> None:
        self._ps(f"Set-Disk -Number {int(number)} -IsOffline $false")

    def set_disk_read_only(self, number: int, read_only: bool) -> None:
        flag = "$true" if read_only else "$false"
        self._ps(f"Set-Disk -Number {int(number)} -IsReadOnly {flag}")

    def get_partitions(self, number: int) -> List[Dict[str, Any]]:
        rows = self._ps_json(
            f"Get-Partition | Where-Object {{ $_.DiskNumber -eq {int(number)} }} "
            "| Select-Object -Property PartitionNumber, DriveLetter, Size, Type"
        )
        return [row for row in rows if isinstance(row, dict)]

    def initialize_disk(self, number: int, partition_style: str) -> None:
        self._ps(f"Initialize-Disk -Number {int(number)} -PartitionStyle {partition_style}")

    def new_partition(self, number: int, drive_letter: str) -> None:
        self._ps(f"New-Partition -DiskNumber {int(number)} -UseMaximumSize -DriveLetter {_letter(drive_letter)} | Out-Null")

    def format_volume(self, drive_letter: str, file_system: str, label: str) -> None:
        self._ps(
            f"Format-Volume -DriveLetter {_letter(drive_letter)} -FileSystem {file_system} "
            f"-NewFileSystemLabel {_quote(label)} -Confirm:$false | Out-Null"
        )

    def volume_drive_letters(self) -> List[str]:
        rows = self._ps_json("Get-Volume | Where-Object { $_.DriveLetter } | ForEach-Object { [string]$_.DriveLetter }")
        return _letters(rows)

    def mapped_drive_letters(self) -> List[str]:
        rows = self._ps_json("Get-CimInstance -ClassName Win32_MappedLogicalDisk | ForEach-Object { [string]$_.DeviceID }")
        return _letters(rows)

    def list_net_adapters(self) -> List[NetAdapterDescriptor]:
        rows = self._ps_json(
            "$names = @{}; Get-NetAdapterAdvancedProperty "
            f"| Where-Object {{ $_.DisplayName -eq {_quote(HYPERV_ADAPTER_NAME_PROPERTY)} }} "
            "| ForEach-Object { $names[$_.Name] = $_.DisplayValue }; "
            "Get-NetAdapter | ForEach-Object { [PSCustomObject]@{ Name = $_.Name; HypervisorName = $names[$_.Name] } }"
        )
        adapters: List[NetAdapterDescriptor] = []
        for row in rows:
            if not isinstance(row, dict) or not row.get("Name"):
                continue
            suggested = str(row.get("HypervisorName") or "").strip()
            adapters.append(NetAdapterDescriptor(current_name=str(row["Name"]), hypervisor_suggested_name=suggested or None))
        return adapters

    def rename_net_adapter(self, current_name: str, new_name: str) -> None:
        self._ps(f"Rename-NetAdapter -Name {_quote(current_name)} -NewName {_quote(new_name)}")

    def _ps(self, script: str) -> str:
        cmd = [self.executable, "-NoProfile", "-NonInteractive", "-ExecutionPolicy", "Bypass", "-Command", script]
        LOGGER.log(TRACE, "PowerShell: %s", script)
        result = proc.run(cmd)
        return (result.stdout or "").strip()

    def _ps_json(self, script: str) -> List[Any]:
        output = self._ps(f"{script} | ConvertTo-Json -Depth 4 -Compress")
        if not output:
            return []
        try:
            data = json.loads(output)
        except json.JSONDecodeError as exc:
            raise HostCommandError([self.executable, "-Command", script], 0, f"Unparseable output: {exc}") from exc
        if isinstance(data, list):
            return data
        return [data]


def _quote(value: str) -> str:
    return "'" + str(value).replace("'", "''") + "'"


def _letter(value: str) -> str:
    letter = str(value).strip().rstrip(":").upper()
    if len(letter) != 1 or not letter.isalpha():
        raise ValueError(f"Invalid drive letter: {value!r}")
    return letter


def _letters(rows: List[Any]) -> List[str]:
    letters: List[str] = []
    for row in rows:
        text = str(row or "").strip()
        if text and text[0].isalpha():
            letters.append(text[0].upper())
    return letters
