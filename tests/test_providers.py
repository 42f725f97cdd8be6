"""
Unit tests for identity, timestamp and network providers
"""

import unittest
from unittest.mock import Mock, patch
import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from modules.database.providers import (
    AwsCallerIdentity,
    StaticTimestamp,
    network_from_stack_reference,
)


class TestAwsCallerIdentity(unittest.TestCase):

    def test_caller_id_from_aws(self):
        with patch('modules.database.providers.aws') as mock_aws:
            mock_aws.get_caller_identity_output.return_value = Mock(user_id="AIDATESTUSER")

            self.assertEqual(AwsCallerIdentity().caller_id(), "AIDATESTUSER")


class TestStaticTimestamp(unittest.TestCase):

    def test_timestamp_resource(self):
        with patch('modules.database.providers.pulumiverse_time') as mock_time:
            mock_time.Static.return_value = Mock(id="2024-01-01T00:00:00Z")

            value = StaticTimestamp().timestamp("billing-prod")

            mock_time.Static.assert_called_once_with("billing-prod-timestamp")
            self.assertEqual(value, "2024-01-01T00:00:00Z")


class TestNetworkFromStackReference(unittest.TestCase):

    def test_reads_network_outputs(self):
        with patch('modules.database.providers.pulumi') as mock_pulumi:
            stack = Mock()
            stack.require_output.side_effect = lambda key: f"out:{key}"
            mock_pulumi.StackReference.return_value = stack

            network = network_from_stack_reference("acme/network/prod")

            mock_pulumi.StackReference.assert_called_once_with("acme/network/prod")
            self.assertEqual(network.vpc_id, "out:vpc_id")
            self.assertEqual(network.vpc_cidr, "out:vpc_cidr")
            self.assertEqual(network.vpc_ipv6_cidr, "out:vpc_ipv6_cidr")
            self.assertEqual(network.database_subnet_ids, "out:database_subnet_ids")

    def test_invalid_stack_name(self):
        with patch('modules.database.providers.pulumi') as mock_pulumi:
            with self.assertRaises(Exception):
                network_from_stack_reference("prod")

            mock_pulumi.StackReference.assert_not_called()


if __name__ == "__main__":
    unittest.main(verbosity=2)
