# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""In this file we declare the constants used by the mysql cluster libraries."""

# The unique Charmhub library identifier, never change it
LIBID = "a7f3c9e1d5b84f20b6e2d8c4a1f9e3b7"

# Increment this major API version when introducing breaking changes
LIBAPI = 0

# Increment this PATCH version before using `charmcraft publish-lib` or reset
# to 0 if you are raising the major API version
LIBPATCH = 1


# Custom resource
API_VERSION = "titanium.presslabs.net/v1alpha1"
MysqlClusterKind = "MysqlCluster"

# Default images
MysqlImage = "percona"
MysqlImageTag = "5.7"
HelperImage = "gcr.io/pl-infra/titanium-toolbox:latest"
MetricsExporterImage = "prom/mysqld-exporter:latest"

# Pod / volume resource floors
ResourceRequestCPU = "200m"
ResourceRequestMemory = "1Gi"
ResourceStorage = "8Gi"

# MySQL configuration
InnodbBufferPoolSizeKey = "innodb-buffer-pool-size"
InnodbBufferSizePercent = 80

# Topology
MaxReplicaLagSeconds = 5
