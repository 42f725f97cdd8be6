"""
Database Module
RDS security group, subnet group and Aurora cluster or standalone instance
"""

from .functions import create_database_resources, export_database_outputs
from .providers import AwsCallerIdentity, StaticTimestamp, network_from_stack_reference
from .types import ClusterTopology, DatabaseConfig, NetworkInfo, StandaloneTopology

__all__ = [
    "create_database_resources",
    "export_database_outputs",
    "network_from_stack_reference",
    "AwsCallerIdentity",
    "StaticTimestamp",
    "ClusterTopology",
    "StandaloneTopology",
    "DatabaseConfig",
    "NetworkInfo",
]
