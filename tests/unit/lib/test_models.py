# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Unit test for the models library."""
import unittest

from charms.mysql_cluster.v0.helper_enums import ResourceType
from charms.mysql_cluster.v0.models import (
    ClusterSpec,
    Instance,
    MysqlCluster,
    ReplicaInfo,
)

from tests.unit.helpers import orc_instance


class TestModels(unittest.TestCase):
    def test_cluster_from_resource_dict(self):
        """Test the creation of a cluster from its custom resource representation."""
        cluster = MysqlCluster.from_dict(
            {
                "name": "foo",
                "namespace": "default",
                "uid": "1234",
                "spec": {
                    "mysqlVersion": "5.7",
                    "podSpec": {
                        "imagePullPolicy": "Always",
                        "resources": {"requests": {"memory": "2Gi"}, "limits": None},
                    },
                    "volumeSpec": {"accessModes": None},
                    "mysqlConf": {"max-connections": "100"},
                    "orchestratorUri": "http://orc/api",
                },
                "status": {"readyNodes": 3},
            }
        )

        self.assertEqual(cluster.spec.mysql_version, "5.7")
        self.assertEqual(cluster.spec.pod_spec.image_pull_policy, "Always")
        self.assertEqual(cluster.spec.pod_spec.resources.request(ResourceType.MEMORY), "2Gi")
        self.assertIsNone(cluster.spec.pod_spec.resources.request(ResourceType.CPU))
        self.assertDictEqual(cluster.spec.pod_spec.resources.limits, {})
        self.assertEqual(cluster.spec.volume_spec.access_modes, [])
        self.assertEqual(cluster.spec.orchestrator_uri, "http://orc/api")
        self.assertEqual(cluster.status.ready_nodes, 3)

    def test_spec_str_round_trip(self):
        """The spec keeps its values through its json representation."""
        spec = ClusterSpec(mysql_version="8.0", mysql_conf={"a": "b"})

        self.assertEqual(ClusterSpec.from_str(spec.to_str(by_alias=True)), spec)

    def test_owner_reference(self):
        """Test the owner reference of a cluster."""
        owner = MysqlCluster(name="foo", uid="1234").as_owner_reference()

        self.assertDictEqual(
            owner.to_dict(by_alias=True),
            {
                "apiVersion": "titanium.presslabs.net/v1alpha1",
                "kind": "MysqlCluster",
                "name": "foo",
                "uid": "1234",
                "controller": True,
            },
        )

    def test_replica_lag(self):
        """The lag is only known when orchestrator flags it valid."""
        self.assertEqual(ReplicaInfo.from_dict(orc_instance("h1", lag=0)).lag, 0)
        self.assertEqual(ReplicaInfo.from_dict(orc_instance("h1", lag=7)).lag, 7)
        self.assertIsNone(ReplicaInfo.from_dict(orc_instance("h1")).lag)
        self.assertIsNone(ReplicaInfo.from_dict({"Key": {"Hostname": "h1"}}).lag)

    def test_instance_hostname(self):
        """Test the instance parsing from the orchestrator payload."""
        instance = Instance.from_dict(orc_instance("foo-mysql-0.foo-mysql", port=3307))

        self.assertEqual(instance.hostname, "foo-mysql-0.foo-mysql")
        self.assertEqual(instance.key.port, 3307)
