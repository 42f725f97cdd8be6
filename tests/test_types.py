"""
Unit tests for database module configuration records
"""

import unittest
import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from modules.database.types import (
    ClusterTopology,
    DatabaseConfig,
    StandaloneTopology,
)


class TestClusterTopology(unittest.TestCase):

    def test_defaults(self):
        topology = ClusterTopology()

        self.assertEqual(topology.instance_count, 1)
        self.assertEqual(topology.resolved_instance_class, "db.t4g.medium")

    def test_explicit_values(self):
        topology = ClusterTopology(instance_class="db.r6g.large", number_of_instances=0)

        self.assertEqual(topology.instance_count, 0)
        self.assertEqual(topology.resolved_instance_class, "db.r6g.large")

    def test_negative_count_rejected(self):
        with self.assertRaises(ValueError):
            ClusterTopology(number_of_instances=-1)


class TestStandaloneTopology(unittest.TestCase):

    def test_instance_class_required(self):
        with self.assertRaises(TypeError):
            StandaloneTopology(allocated_storage=20)

    def test_empty_instance_class_rejected(self):
        with self.assertRaises(ValueError) as ctx:
            StandaloneTopology(instance_class=None, allocated_storage=20)

        self.assertIn("instance_class", str(ctx.exception))

    def test_missing_storage_rejected(self):
        with self.assertRaises(ValueError) as ctx:
            StandaloneTopology(instance_class="db.t3.small", allocated_storage=None)

        self.assertIn("allocated_storage", str(ctx.exception))

    def test_multi_az(self):
        cases = {None: False, 1: False, 2: True}
        for count, expected in cases.items():
            with self.subTest(count=count):
                topology = StandaloneTopology(
                    instance_class="db.t3.small", allocated_storage=20, number_of_instances=count
                )
                self.assertEqual(topology.multi_az, expected)


class TestDatabaseConfig(unittest.TestCase):

    def make(self, topology):
        return DatabaseConfig(
            username="admin",
            password="s3cret",
            maintenance_window="mon:04:00-mon:05:00",
            backup_window="03:00-04:00",
            backup_retention_period=7,
            db_name="appdb",
            engine="mysql",
            engine_version="8.0",
            topology=topology,
            service_name="billing",
            env="dev"
        )

    def test_is_aurora(self):
        self.assertTrue(self.make(ClusterTopology()).is_aurora)
        self.assertFalse(self.make(StandaloneTopology("db.t3.small", 20)).is_aurora)

    def test_base_name_and_default_tags(self):
        config = self.make(ClusterTopology())

        self.assertEqual(config.base_name, "billing-dev")
        self.assertEqual(config.tags, {})


if __name__ == "__main__":
    unittest.main(verbosity=2)
