"""
Pulumi modules for RDS infrastructure
Function-based approach, one package per concern
"""

from .database import create_database_resources, export_database_outputs

__all__ = [
    "create_database_resources",
    "export_database_outputs"
]
