"""
RDS Database Stack
Aurora cluster or standalone RDS instance inside an existing VPC
"""
from config import get_config
from modules.database import create_database_resources, export_database_outputs

# Configuration
config = get_config()

# Network is owned by another stack
network = config.network

# Database
database = create_database_resources(config.database_config, network)

# Exports
export_database_outputs(database)
