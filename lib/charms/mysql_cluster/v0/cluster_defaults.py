# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Defaults of the MysqlCluster spec.

The defaults are applied once, when a cluster is created or updated, and only
fill the fields left empty by the user: applying them again is a no-op.
"""
import logging
from typing import Optional

from charms.mysql_cluster.v0 import helper_quantity
from charms.mysql_cluster.v0.constants import (
    InnodbBufferPoolSizeKey,
    InnodbBufferSizePercent,
    ResourceRequestCPU,
    ResourceRequestMemory,
    ResourceStorage,
)
from charms.mysql_cluster.v0.exceptions import MysqlClusterDefaultsError
from charms.mysql_cluster.v0.helper_enums import AccessMode, ResourceType
from charms.mysql_cluster.v0.models import (
    ClusterSpec,
    MysqlCluster,
    PodSpec,
    ResourceRequirements,
    VolumeSpec,
)
from charms.mysql_cluster.v0.options import Options

# The unique Charmhub library identifier, never change it
LIBID = "8a0c2e4b6d8f4a1c3e5b7d9f1a3c5e7b"

# Increment this major API version when introducing breaking changes
LIBAPI = 0

# Increment this PATCH version before using `charmcraft publish-lib` or reset
# to 0 if you are raising the major API version
LIBPATCH = 1


logger = logging.getLogger(__name__)


class ClusterDefaults:
    """Fills the unset fields of a cluster spec from the process options."""

    def __init__(self, options: Options):
        self.options = options

    def apply(self, spec: ClusterSpec) -> None:
        """Set the defaults of the spec, in place.

        Raises:
            MysqlClusterDefaultsError if a declared resource quantity is malformed or negative.
        """
        if not spec.mysql_version:
            spec.mysql_version = self.options.mysql_image_tag

        self.apply_pod_spec(spec.pod_spec)

        # set innodb-buffer-pool-size as 80% of requested memory
        if InnodbBufferPoolSizeKey not in (spec.mysql_conf or {}):
            buffer_pool_size = self.innodb_buffer_pool_size(spec.pod_spec.resources)
            if buffer_pool_size is not None:
                if not spec.mysql_conf:
                    spec.mysql_conf = {}
                spec.mysql_conf[InnodbBufferPoolSizeKey] = buffer_pool_size

        self.apply_volume_spec(spec.volume_spec)

    def apply_pod_spec(self, pod_spec: PodSpec) -> None:
        """Set the pull policy and the resource requests of the mysql container."""
        if not pod_spec.image_pull_policy:
            pod_spec.image_pull_policy = self.options.image_pull_policy

        # any request means the user sized the pod, even partially
        if not pod_spec.resources.requests:
            pod_spec.resources = ResourceRequirements(
                requests={
                    ResourceType.CPU.value: ResourceRequestCPU,
                    ResourceType.MEMORY.value: ResourceRequestMemory,
                }
            )

    @staticmethod
    def apply_volume_spec(volume_spec: VolumeSpec) -> None:
        """Set the access mode and the size of the data volume."""
        if not volume_spec.access_modes:
            volume_spec.access_modes = [AccessMode.READ_WRITE_ONCE.value]

        if not volume_spec.resources.requests:
            volume_spec.resources = ResourceRequirements(
                requests={ResourceType.STORAGE.value: ResourceStorage}
            )

    @staticmethod
    def innodb_buffer_pool_size(resources: ResourceRequirements) -> Optional[str]:
        """Compute the buffer pool size from the memory request, None without one."""
        memory = resources.request(ResourceType.MEMORY)
        if not memory:
            return None

        mem = helper_quantity.value(memory)
        if mem < 0:
            raise MysqlClusterDefaultsError(f"Negative memory request: {memory}")

        # multiply first, then truncate
        val = (InnodbBufferSizePercent * mem) // 100
        # TODO: format it with a binary suffix when exact, e.g. "4Gi" instead of "4294967296"
        return helper_quantity.format_decimal_si(val)


def update_defaults(cluster: MysqlCluster, options: Options) -> None:
    """Set the defaults of the cluster spec."""
    ClusterDefaults(options).apply(cluster.spec)
    logger.debug(f"Defaults applied on cluster {cluster.name}: {cluster.spec.to_dict()}")


def get_mysql_image(spec: ClusterSpec, options: Options) -> str:
    """Mysql image, composed from the options and the spec version."""
    return f"{options.mysql_image}:{spec.mysql_version}"


def get_helper_image(options: Options) -> str:
    """Image of the helper (toolbox) containers."""
    return options.helper_image


def get_metrics_exporter_image(options: Options) -> str:
    """Image of the mysqld metrics exporter."""
    return options.metrics_exporter_image


def get_orc_uri(spec: ClusterSpec, options: Options) -> str:
    """Orchestrator uri of the cluster, falling back to the process wide one."""
    return spec.orchestrator_uri or options.orchestrator_uri


def get_orc_topology_secret(spec: ClusterSpec, options: Options) -> str:
    """Name of the secret holding the credentials orchestrator uses on the mysql nodes."""
    return spec.orchestrator_topology_secret_name or options.orchestrator_topology_secret_name
