"""
Capability providers for the database module
Caller identity, provisioning timestamp and network lookups, injectable for tests
"""

from typing import Protocol

import pulumi
import pulumi_aws as aws
import pulumiverse_time

from .types import NetworkInfo


class IdentityProvider(Protocol):
    """Resolves the principal that runs the deployment."""

    def caller_id(self) -> pulumi.Input[str]:
        ...


class ClockProvider(Protocol):
    """Resolves a provisioning timestamp that stays fixed across updates."""

    def timestamp(self, name: str) -> pulumi.Input[str]:
        ...


class AwsCallerIdentity:
    """Caller identity from the AWS provider"""

    def caller_id(self) -> pulumi.Output[str]:
        return aws.get_caller_identity_output().user_id


class StaticTimestamp:
    """Timestamp backed by a time_static resource, recorded once at creation"""

    def timestamp(self, name: str) -> pulumi.Output[str]:
        static = pulumiverse_time.Static(f"{name}-timestamp")
        return static.id


def network_from_stack_reference(stack_name: str) -> NetworkInfo:
    """
    Read the network descriptor from another stack's outputs

    Args:
        stack_name: Fully qualified stack name (project/stack or org/project/stack)

    Returns:
        NetworkInfo with the referenced VPC outputs
    """
    parts = stack_name.split("/")
    if len(parts) not in (2, 3):
        raise Exception(
            "network_stack config value must be either 'project/stack' or "
            f"'org/project/stack'. Got: {stack_name}"
        )

    network_stack = pulumi.StackReference(stack_name)

    return NetworkInfo(
        vpc_id=network_stack.require_output("vpc_id"),
        vpc_cidr=network_stack.require_output("vpc_cidr"),
        vpc_ipv6_cidr=network_stack.require_output("vpc_ipv6_cidr"),
        database_subnet_ids=network_stack.require_output("database_subnet_ids"),
    )
