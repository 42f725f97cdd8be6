"""
Configuration management for the RDS database stack
"""

import pulumi
from typing import Dict, List

from modules.database import (
    ClusterTopology,
    DatabaseConfig,
    NetworkInfo,
    StandaloneTopology,
    network_from_stack_reference,
)


class Config:
    """Centralized configuration management for the database deployment"""

    def __init__(self):
        self.config = pulumi.Config()

        # Naming
        self.service_name = self.config.get("service_name") or "builder-space"
        self.env = self.config.get("env") or "dev"

        # Credentials
        self.db_username = self.config.get("db_username") or "postgres"
        self.db_password = self.config.require_secret("db_password")

        # Engine
        self.db_name = self.config.get("db_name") or "builderspace"
        self.engine = self.config.get("engine") or "aurora-postgresql"
        self.engine_version = self.config.get("engine_version") or "16.4"

        # Topology
        is_aurora = self.config.get_bool("is_aurora")
        self.is_aurora = True if is_aurora is None else is_aurora
        self.instance_class = self.config.get("instance_class")
        self.number_of_instances = self.config.get_int("number_of_instances")
        self.allocated_storage = self.config.get_int("allocated_storage")

        # Backup and maintenance
        retention = self.config.get_int("backup_retention_period")
        self.backup_retention_period = 7 if retention is None else retention
        self.backup_window = self.config.get("backup_window") or "03:00-04:00"
        self.maintenance_window = self.config.get("maintenance_window") or "mon:04:00-mon:05:00"

        # Network, from a stack reference or explicit values
        self.network_stack = self.config.get("network_stack")
        self.vpc_id = self.config.get("vpc_id")
        self.vpc_cidr = self.config.get("vpc_cidr")
        self.vpc_ipv6_cidr = self.config.get("vpc_ipv6_cidr")
        self.database_subnet_ids: List[str] = self.config.get_object("database_subnet_ids") or []

        # Additional tags
        self.additional_tags: Dict[str, str] = self.config.get_object("tags") or {}

    @property
    def topology(self):
        """Get the topology variant selected by is_aurora"""
        if self.is_aurora:
            return ClusterTopology(
                instance_class=self.instance_class,
                number_of_instances=self.number_of_instances
            )
        return StandaloneTopology(
            instance_class=self.instance_class,
            allocated_storage=self.allocated_storage,
            number_of_instances=self.number_of_instances
        )

    @property
    def database_config(self) -> DatabaseConfig:
        return DatabaseConfig(
            username=self.db_username,
            password=self.db_password,
            maintenance_window=self.maintenance_window,
            backup_window=self.backup_window,
            backup_retention_period=self.backup_retention_period,
            db_name=self.db_name,
            engine=self.engine,
            engine_version=self.engine_version,
            topology=self.topology,
            service_name=self.service_name,
            env=self.env,
            tags=self.additional_tags
        )

    @property
    def network(self) -> NetworkInfo:
        """Get the VPC descriptor, stack reference first"""
        if self.network_stack:
            pulumi.log.info(f"Reading network from stack {self.network_stack}")
            return network_from_stack_reference(self.network_stack)

        missing = [
            key for key, value in (
                ("vpc_id", self.vpc_id),
                ("vpc_cidr", self.vpc_cidr),
                ("vpc_ipv6_cidr", self.vpc_ipv6_cidr),
                ("database_subnet_ids", self.database_subnet_ids),
            )
            if not value
        ]
        if missing:
            raise Exception(
                f"Required config: network_stack, or {', '.join(missing)}"
            )

        pulumi.log.info(f"Using network {self.vpc_id} from config")
        return NetworkInfo(
            vpc_id=self.vpc_id,
            vpc_cidr=self.vpc_cidr,
            vpc_ipv6_cidr=self.vpc_ipv6_cidr,
            database_subnet_ids=self.database_subnet_ids
        )


def get_config() -> Config:
    """Get the global configuration instance"""
    return Config()
