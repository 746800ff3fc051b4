# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Resolution of the master and of a readable replica of a MySQL cluster.

Orchestrator is the source of truth when configured. Otherwise, or when it cannot
be reached, the hostnames follow the naming convention of the cluster instances:
the first instance is the master and the last ready one is a replica. Resolution
never fails, and issues at most one orchestrator lookup per call.
"""
import logging
from typing import Callable, List

from charms.mysql_cluster.v0.cluster_defaults import get_orc_uri
from charms.mysql_cluster.v0.cluster_naming import get_pod_hostname
from charms.mysql_cluster.v0.constants import MaxReplicaLagSeconds
from charms.mysql_cluster.v0.exceptions import OrchestratorError
from charms.mysql_cluster.v0.models import MysqlCluster, ReplicaInfo
from charms.mysql_cluster.v0.options import Options
from charms.mysql_cluster.v0.orchestrator_client import OrchestratorClient

# The unique Charmhub library identifier, never change it
LIBID = "f0a2c4e6b8d14f3a5c7e9b1d3f5a7c9e"

# Increment this major API version when introducing breaking changes
LIBAPI = 0

# Increment this PATCH version before using `charmcraft publish-lib` or reset
# to 0 if you are raising the major API version
LIBPATCH = 1


logger = logging.getLogger(__name__)


class ClusterTopology:
    """Finds which instances of a cluster to route writes and reads to."""

    def __init__(
        self,
        options: Options,
        client_factory: Callable[[str], OrchestratorClient] = OrchestratorClient,
    ):
        self.options = options
        self._client_factory = client_factory

    def resolve_master(self, cluster_name: str, orc_uri: str) -> str:
        """Get the hostname of the master of the cluster."""
        master_host = get_pod_hostname(cluster_name, 0)
        if not orc_uri:
            return master_host

        try:
            client = self._client_factory(orc_uri)
            master_host = client.master(cluster_name).hostname
        except OrchestratorError as e:
            logger.warning(
                f"[resolve_master]: Failed to get the master of {cluster_name} from "
                f"orchestrator: {e}, fallback to {master_host}"
            )

        return master_host

    def resolve_healthy_replica(self, cluster_name: str, orc_uri: str, ready_nodes: int) -> str:
        """Get the hostname of a replica safe to read from."""
        host = get_pod_hostname(cluster_name, ready_nodes - 1)
        if not orc_uri:
            return host

        logger.debug("[resolve_healthy_replica]: Use orchestrator to get the replica host.")
        try:
            client = self._client_factory(orc_uri)
            replicas = client.replicas(cluster_name)
        except OrchestratorError as e:
            logger.warning(
                f"[resolve_healthy_replica]: Failed to get the replicas of {cluster_name} "
                f"from orchestrator: {e}, fallback to {host}"
            )
            return host

        host = self.pick_replica(replicas, default=host)
        logger.debug(f"[resolve_healthy_replica]: The replica host is: {host}")
        return host

    @staticmethod
    def pick_replica(replicas: List[ReplicaInfo], default: str) -> str:
        """Get the last replica in listing order with a known lag under the threshold.

        The lag magnitude is not compared between eligible replicas.
        """
        host = default
        for replica in replicas:
            if replica.lag is not None and replica.lag <= MaxReplicaLagSeconds:
                host = replica.hostname

        return host

    def master_host(self, cluster: MysqlCluster) -> str:
        """Get the master hostname of a cluster object."""
        return self.resolve_master(cluster.name, get_orc_uri(cluster.spec, self.options))

    def healthy_replica_host(self, cluster: MysqlCluster) -> str:
        """Get the readable replica hostname of a cluster object."""
        return self.resolve_healthy_replica(
            cluster.name, get_orc_uri(cluster.spec, self.options), cluster.status.ready_nodes
        )
