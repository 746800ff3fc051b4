# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Naming convention of the resources and instances of a MySQL cluster.

Every resource role currently maps to the same `<cluster>-mysql` name, callers
must not rely on role-distinct names.
"""
from charms.mysql_cluster.v0.helper_enums import BaseStrEnum

# The unique Charmhub library identifier, never change it
LIBID = "3e5a7c9b1d2f4a6c8e0b2d4f6a8c0e1b"

# Increment this major API version when introducing breaking changes
LIBAPI = 0

# Increment this PATCH version before using `charmcraft publish-lib` or reset
# to 0 if you are raising the major API version
LIBPATCH = 1


class ResourceName(BaseStrEnum):
    """Alias of the resources created for a cluster."""

    HEADLESS_SVC = "headless"
    STATEFUL_SET = "mysql"
    CONFIG_MAP = "config-files"
    ENV_SECRET = "env-config"
    BACKUP_CRON_JOB = "backup-cron"


def get_name_for_resource(name: ResourceName, cluster_name: str) -> str:
    """Get the name of the resource of the given role."""
    return f"{cluster_name}-mysql"


def get_pod_hostname(cluster_name: str, ordinal: int) -> str:
    """Get the fully qualified hostname of the instance with the given ordinal."""
    pod = f"{get_name_for_resource(ResourceName.STATEFUL_SET, cluster_name)}-{ordinal}"
    return f"{pod}.{get_name_for_resource(ResourceName.HEADLESS_SVC, cluster_name)}"
