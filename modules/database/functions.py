"""
Database Module Functions
Creates security group, subnet group and either an Aurora cluster or a standalone RDS instance
Function-based style, one function per resource group
"""

import pulumi
import pulumi_aws as aws
from typing import Any, Dict, Optional

from .providers import AwsCallerIdentity, ClockProvider, IdentityProvider, StaticTimestamp
from .types import ClusterTopology, DatabaseConfig, NetworkInfo, StandaloneTopology

POSTGRES_PORT = 5432
MYSQL_PORT = 3306

# Storage policy applied to every database resource
STORAGE_TYPE = "gp3"
STORAGE_ENCRYPTED = True
SKIP_FINAL_SNAPSHOT = True

PROVISIONER = "Pulumi"


def is_postgres(engine: str) -> bool:
    return "postgres" in engine


def engine_port(engine: str) -> int:
    """Ingress port for the engine: PostgreSQL family or MySQL family"""
    return POSTGRES_PORT if is_postgres(engine) else MYSQL_PORT


def engine_family(engine: str) -> str:
    return "PostgreSQL" if is_postgres(engine) else "MySQL"


def build_default_tags(service_name: str, env: str, provisioned_by: pulumi.Input[str],
                       provisioned_date: pulumi.Input[str]) -> Dict[str, Any]:
    return {
        "Name": f"{service_name}-{env}",
        "Service": service_name,
        "ENV": env,
        "Provisioner": PROVISIONER,
        "Provisioned By": provisioned_by,
        "Provisioned Date": provisioned_date,
    }


def merge_tags(defaults: Dict[str, Any], tags: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merge caller tags over the defaults, caller keys win"""
    return {**defaults, **(tags or {})}


def create_security_group(name: str, service_name: str, env: str, engine: str,
                          network: NetworkInfo, tags: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Create security group admitting database traffic from the VPC

    Args:
        name: Resource name prefix
        service_name: Service name
        env: Environment label
        engine: Database engine, selects the ingress port
        network: VPC descriptor
        tags: Tags for the security group

    Returns:
        Dict with security group resource and outputs
    """
    tags = tags or {}
    port = engine_port(engine)

    security_group = aws.ec2.SecurityGroup(
        f"{name}-rds-sg",
        name=f"{service_name}-{env}-rds-sg",
        description=f"Security group for {service_name} RDS",
        vpc_id=network.vpc_id,
        ingress=[aws.ec2.SecurityGroupIngressArgs(
            protocol="tcp",
            from_port=port,
            to_port=port,
            cidr_blocks=[network.vpc_cidr],
            ipv6_cidr_blocks=[network.vpc_ipv6_cidr],
            description=f"Allow {engine_family(engine)} traffic",
        )],
        egress=[aws.ec2.SecurityGroupEgressArgs(
            protocol="-1",
            from_port=0,
            to_port=0,
            cidr_blocks=["0.0.0.0/0"],
            ipv6_cidr_blocks=["::/0"],
        )],
        tags=tags
    )

    return {
        "security_group": security_group,
        "security_group_id": security_group.id,
        "port": port
    }


def create_subnet_group(name: str, service_name: str, env: str, network: NetworkInfo,
                        tags: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Create DB subnet group over the VPC database subnets

    Args:
        name: Resource name prefix
        service_name: Service name
        env: Environment label
        network: VPC descriptor
        tags: Tags for the subnet group

    Returns:
        Dict with subnet group resource and outputs
    """
    tags = tags or {}

    subnet_group = aws.rds.SubnetGroup(
        f"{name}-db-subnet-group",
        name=f"{service_name}-{env}-db-subnet-group",
        subnet_ids=network.database_subnet_ids,
        tags=tags
    )

    return {
        "subnet_group": subnet_group,
        "subnet_group_name": subnet_group.name
    }


def create_aurora_cluster(name: str, config: DatabaseConfig, topology: ClusterTopology,
                          subnet_group_name: pulumi.Input[str],
                          security_group_id: pulumi.Input[str],
                          tags: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Create Aurora cluster and its cluster instances

    Args:
        name: Resource name prefix
        config: Database module configuration
        topology: Cluster sizing
        subnet_group_name: DB subnet group name
        security_group_id: Security group ID
        tags: Tags for every resource

    Returns:
        Dict with cluster, instances and the cluster endpoint
    """
    tags = tags or {}

    cluster = aws.rds.Cluster(
        f"{name}-rds-cluster",
        cluster_identifier=f"{config.base_name}-aurora-cluster",
        engine=config.engine,
        engine_version=config.engine_version,
        database_name=config.db_name,
        master_username=config.username,
        master_password=config.password,
        backup_retention_period=config.backup_retention_period,
        preferred_backup_window=config.backup_window,
        preferred_maintenance_window=config.maintenance_window,
        skip_final_snapshot=SKIP_FINAL_SNAPSHOT,
        storage_type=STORAGE_TYPE,
        storage_encrypted=STORAGE_ENCRYPTED,
        db_subnet_group_name=subnet_group_name,
        vpc_security_group_ids=[security_group_id],
        tags=tags
    )

    # Cluster instances share the cluster storage
    instances = []
    for i in range(topology.instance_count):
        instance = aws.rds.ClusterInstance(
            f"{name}-rds-cluster-instance-{i}",
            identifier=f"{config.base_name}-aurora-instance-{i}",
            cluster_identifier=cluster.id,
            engine=cluster.engine,
            instance_class=topology.resolved_instance_class,
            db_subnet_group_name=subnet_group_name,
            tags=tags
        )
        instances.append(instance)

    return {
        "cluster": cluster,
        "instances": instances,
        "endpoint": cluster.endpoint
    }


def create_db_instance(name: str, config: DatabaseConfig, topology: StandaloneTopology,
                       subnet_group_name: pulumi.Input[str],
                       security_group_id: pulumi.Input[str],
                       tags: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Create standalone RDS instance

    Args:
        name: Resource name prefix
        config: Database module configuration
        topology: Instance sizing
        subnet_group_name: DB subnet group name
        security_group_id: Security group ID
        tags: Tags for the instance

    Returns:
        Dict with instance and its endpoint
    """
    tags = tags or {}

    instance = aws.rds.Instance(
        f"{name}-rds-instance",
        identifier=f"{config.base_name}-rds-instance",
        engine=config.engine,
        engine_version=config.engine_version,
        instance_class=topology.instance_class,
        allocated_storage=topology.allocated_storage,
        db_name=config.db_name,
        username=config.username,
        password=config.password,
        backup_retention_period=config.backup_retention_period,
        backup_window=config.backup_window,
        maintenance_window=config.maintenance_window,
        skip_final_snapshot=SKIP_FINAL_SNAPSHOT,
        db_subnet_group_name=subnet_group_name,
        vpc_security_group_ids=[security_group_id],
        storage_encrypted=STORAGE_ENCRYPTED,
        storage_type=STORAGE_TYPE,
        multi_az=topology.multi_az,
        tags=tags
    )

    return {
        "instance": instance,
        "endpoint": instance.endpoint
    }


def create_database_resources(config: DatabaseConfig, network: NetworkInfo,
                              identity: IdentityProvider = None, clock: ClockProvider = None,
                              name: str = None) -> Dict[str, Any]:
    """
    Create complete RDS infrastructure inside an existing VPC

    Args:
        config: Database module configuration
        network: VPC descriptor owned by another module or stack
        identity: Caller identity lookup, AWS caller identity by default
        clock: Provisioning timestamp lookup, time_static resource by default
        name: Resource name prefix, `{service_name}-{env}` by default

    Returns:
        Dict with all database resources and outputs
    """
    if not isinstance(config.topology, (ClusterTopology, StandaloneTopology)):
        raise TypeError(f"Unsupported topology: {type(config.topology).__name__}")

    identity = identity or AwsCallerIdentity()
    clock = clock or StaticTimestamp()
    name = name or config.base_name

    # Tag values from caller identity and a fixed timestamp
    default_tags = build_default_tags(
        config.service_name,
        config.env,
        identity.caller_id(),
        clock.timestamp(name)
    )
    tags = merge_tags(default_tags, config.tags)

    # Create security group
    sg_result = create_security_group(
        name,
        config.service_name,
        config.env,
        config.engine,
        network,
        tags
    )
    pulumi.log.info(f"{name}: {engine_family(config.engine)} ingress on port {sg_result['port']}")

    # Create DB subnet group
    subnet_group_result = create_subnet_group(
        name,
        config.service_name,
        config.env,
        network,
        tags
    )

    pulumi.log.warn(f"{name}: final snapshot is skipped when the database is destroyed")

    result = {
        "username": config.username,
        "password": config.password,
        "security_group": sg_result["security_group"],
        "security_group_id": sg_result["security_group_id"],
        "port": sg_result["port"],
        "_security_group": sg_result["security_group"],
        "_subnet_group": subnet_group_result["subnet_group"],
    }

    topology = config.topology
    if isinstance(topology, ClusterTopology):
        pulumi.log.info(
            f"{name}: creating Aurora cluster with {topology.instance_count} instance(s) "
            f"of class {topology.resolved_instance_class}"
        )
        cluster_result = create_aurora_cluster(
            name,
            config,
            topology,
            subnet_group_result["subnet_group_name"],
            sg_result["security_group_id"],
            tags
        )
        result.update({
            "rds_endpoint": cluster_result["endpoint"],
            "aurora_cluster_endpoint": cluster_result["endpoint"],
            "_cluster": cluster_result["cluster"],
            "_cluster_instances": cluster_result["instances"],
        })
    else:
        pulumi.log.info(
            f"{name}: creating RDS instance of class {topology.instance_class}, "
            f"multi_az={topology.multi_az}"
        )
        instance_result = create_db_instance(
            name,
            config,
            topology,
            subnet_group_result["subnet_group_name"],
            sg_result["security_group_id"],
            tags
        )
        result.update({
            "rds_endpoint": instance_result["endpoint"],
            "rds_instance_endpoint": instance_result["endpoint"],
            "_instance": instance_result["instance"],
        })

    return result


def export_database_outputs(resources: Dict[str, Any]) -> None:
    """Publish endpoint and credentials as stack outputs"""
    pulumi.export("rds_endpoint", resources["rds_endpoint"])
    pulumi.export("username", resources["username"])
    pulumi.export("password", pulumi.Output.secret(resources["password"]))
    pulumi.export("security_group_id", resources["security_group_id"])

    # Topology-specific endpoint name
    for key in ("aurora_cluster_endpoint", "rds_instance_endpoint"):
        if key in resources:
            pulumi.export(key, resources[key])
