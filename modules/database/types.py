"""
Database Module Types
Configuration records for the RDS module: one topology variant per stack
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

import pulumi

DEFAULT_CLUSTER_INSTANCE_CLASS = "db.t4g.medium"


@dataclass(frozen=True)
class ClusterTopology:
    """Aurora cluster with attached cluster instances"""

    instance_class: Optional[str] = None
    """Instance class for every cluster instance, `db.t4g.medium` when unset."""

    number_of_instances: Optional[int] = None
    """Cluster instances to attach, 1 when unset."""

    def __post_init__(self):
        if self.number_of_instances is not None and self.number_of_instances < 0:
            raise ValueError(
                f"number_of_instances must be >= 0, got {self.number_of_instances}"
            )

    @property
    def resolved_instance_class(self) -> str:
        return self.instance_class or DEFAULT_CLUSTER_INSTANCE_CLASS

    @property
    def instance_count(self) -> int:
        if self.number_of_instances is None:
            return 1
        return self.number_of_instances


@dataclass(frozen=True)
class StandaloneTopology:
    """Single RDS instance with its own storage"""

    instance_class: str
    """Instance class, required."""

    allocated_storage: int
    """Storage size in GiB, required."""

    number_of_instances: Optional[int] = None
    """Multi-AZ is enabled when this is greater than 1."""

    def __post_init__(self):
        missing = [
            name for name in ("instance_class", "allocated_storage")
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(
                f"Required for standalone topology: {', '.join(missing)}"
            )

    @property
    def multi_az(self) -> bool:
        return self.number_of_instances is not None and self.number_of_instances > 1


Topology = Union[ClusterTopology, StandaloneTopology]


@dataclass(frozen=True)
class NetworkInfo:
    """Read-only view of an externally owned VPC"""

    vpc_id: pulumi.Input[str]
    vpc_cidr: pulumi.Input[str]
    vpc_ipv6_cidr: pulumi.Input[str]
    database_subnet_ids: pulumi.Input[list]


@dataclass(frozen=True)
class DatabaseConfig:
    """Input record for create_database_resources"""

    username: pulumi.Input[str]
    password: pulumi.Input[str]
    maintenance_window: str
    backup_window: str
    backup_retention_period: int
    db_name: str
    engine: str
    engine_version: str
    topology: Topology
    service_name: str
    env: str
    tags: Dict[str, str] = field(default_factory=dict)

    @property
    def is_aurora(self) -> bool:
        return isinstance(self.topology, ClusterTopology)

    @property
    def base_name(self) -> str:
        return f"{self.service_name}-{self.env}"
