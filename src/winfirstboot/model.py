"""Typed data models shared by the host layer and the provisioning stages."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

NormalizedValue = Union[None, str, bytes, int, float, bool, List[Any], Dict[str, Any]]

HYPERV_ADAPTER_NAME_PROPERTY = "Hyper-V Network Adapter Name"

STAGES = ("execution-policy", "remoting", "credssp", "config", "disks", "network", "post-script")


@dataclass
class DiskDescriptor:
    number: int
    model: Optional[str] = None
    size_bytes: int = 0
    operational_status: str = "Unknown"
    has_partitions: bool = False
    is_read_only: bool = False

    @property
    def is_offline(self) -> bool:
        return self.operational_status.lower() == "offline"


@dataclass
class NetAdapterDescriptor:
    current_name: str
    hypervisor_suggested_name: Optional[str] = None

    @property
    def needs_rename(self) -> bool:
        return bool(self.hypervisor_suggested_name) and self.hypervisor_suggested_name != self.current_name


@dataclass
class DiskLayout:
    partition_style: str = "GPT"
    file_system: str = "NTFS"
    label: str = "Data"


@dataclass
class ProvisionSettings:
    disk: DiskLayout = field(default_factory=DiskLayout)
    skip: List[str] = field(default_factory=list)
    raw: Optional[NormalizedValue] = None


@dataclass
class ProvisionPaths:
    base_dir: Path
    config_file: Path
    log_file: Path
    post_script: Path

    @classmethod
    def from_base_dir(cls, base_dir: Path) -> "ProvisionPaths":
        base_dir = base_dir.resolve()
        return cls(
            base_dir=base_dir,
            config_file=base_dir / "config.json",
            log_file=base_dir / "bootstrap.log",
            post_script=base_dir / "post_bootstrap.py",
        )


@dataclass
class StageResult:
    name: str
    completed: bool = False
    error: Optional[str] = None
