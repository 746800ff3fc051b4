# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Cluster-related data structures / model classes."""
import json
from abc import ABC
from typing import Any, Dict, List, Optional

from charms.mysql_cluster.v0.cluster_naming import (
    ResourceName,
    get_name_for_resource,
    get_pod_hostname,
)
from charms.mysql_cluster.v0.constants import API_VERSION, MysqlClusterKind
from charms.mysql_cluster.v0.helper_enums import ResourceType
from pydantic import BaseModel, Field, validator

# The unique Charmhub library identifier, never change it
LIBID = "9b1d3f5a7c9e4b2d8f0a2c4e6b8d0f1a"

# Increment this major API version when introducing breaking changes
LIBAPI = 0

# Increment this PATCH version before using `charmcraft publish-lib` or reset
# to 0 if you are raising the major API version
LIBPATCH = 1


class Model(ABC, BaseModel):
    """Base model class."""

    class Config:
        allow_population_by_field_name = True

    def to_str(self, by_alias: bool = False) -> str:
        """Deserialize object into a string."""
        return json.dumps(self.to_dict(by_alias=by_alias), sort_keys=True)

    def to_dict(self, by_alias: bool = False) -> Dict[str, Any]:
        """Deserialize object into a dict."""
        return self.dict(by_alias=by_alias)

    @classmethod
    def from_dict(cls, input_dict: Optional[Dict[str, Any]]):
        """Create a new instance of this class from a json/dict repr."""
        if not input_dict:  # to handle when classes defined defaults
            return cls()
        return cls(**input_dict)

    @classmethod
    def from_str(cls, input_str_dict: str):
        """Create a new instance of this class from a stringified json/dict repr."""
        return cls.parse_raw(input_str_dict)


class ResourceRequirements(Model):
    """Compute or storage resources, keyed by resource name ("cpu", "memory", "storage")."""

    requests: Dict[str, str] = Field(default_factory=dict)
    limits: Dict[str, str] = Field(default_factory=dict)

    @validator("requests", "limits", pre=True)
    def none_as_empty(cls, v):  # noqa: N805
        """A null resource list is an empty one."""
        return v or {}

    def request(self, resource: ResourceType) -> Optional[str]:
        """Return the requested quantity of a resource, if any."""
        return self.requests.get(resource.value)


class PodSpec(Model):
    """Settings of the mysql instance container."""

    image_pull_policy: Optional[str] = Field(default=None, alias="imagePullPolicy")
    resources: ResourceRequirements = Field(default_factory=ResourceRequirements)


class VolumeSpec(Model):
    """Persistent volume claim settings of a mysql instance."""

    access_modes: List[str] = Field(default_factory=list, alias="accessModes")
    resources: ResourceRequirements = Field(default_factory=ResourceRequirements)

    @validator("access_modes", pre=True)
    def none_as_empty(cls, v):  # noqa: N805
        """A null access modes list is an empty one."""
        return v or []


class ClusterSpec(Model):
    """Desired state of a MySQL cluster."""

    mysql_version: Optional[str] = Field(default=None, alias="mysqlVersion")
    pod_spec: PodSpec = Field(default_factory=PodSpec, alias="podSpec")
    volume_spec: VolumeSpec = Field(default_factory=VolumeSpec, alias="volumeSpec")
    mysql_conf: Optional[Dict[str, str]] = Field(default=None, alias="mysqlConf")
    orchestrator_uri: Optional[str] = Field(default=None, alias="orchestratorUri")
    orchestrator_topology_secret_name: Optional[str] = Field(
        default=None, alias="orchestratorTopologySecretName"
    )


class ClusterStatus(Model):
    """Observed state of a MySQL cluster."""

    ready_nodes: int = Field(default=0, alias="readyNodes")


class OwnerReference(Model):
    """Reference set on the resources owned by a cluster."""

    api_version: str = Field(alias="apiVersion")
    kind: str
    name: str
    uid: Optional[str] = None
    controller: bool = True


class MysqlCluster(Model):
    """The MysqlCluster custom resource."""

    name: str
    namespace: Optional[str] = None
    uid: Optional[str] = None
    spec: ClusterSpec = Field(default_factory=ClusterSpec)
    status: ClusterStatus = Field(default_factory=ClusterStatus)

    def as_owner_reference(self) -> OwnerReference:
        """Returns the owner reference pointing to this cluster."""
        return OwnerReference(
            api_version=API_VERSION,
            kind=MysqlClusterKind,
            name=self.name,
            uid=self.uid,
            controller=True,
        )

    def get_name_for_resource(self, name: ResourceName) -> str:
        """Name of one of the resources of this cluster."""
        return get_name_for_resource(name, self.name)

    def get_pod_hostname(self, ordinal: int) -> str:
        """Hostname of the instance with the given ordinal."""
        return get_pod_hostname(self.name, ordinal)


class InstanceKey(Model):
    """Address of a mysql instance, as reported by orchestrator."""

    hostname: str = Field(alias="Hostname")
    port: int = Field(default=0, alias="Port")


class NullInt64(Model):
    """A nullable integer, as serialized by orchestrator."""

    int64: int = Field(default=0, alias="Int64")
    valid: bool = Field(default=False, alias="Valid")


class Instance(Model):
    """A mysql instance known by orchestrator."""

    key: InstanceKey = Field(alias="Key")

    @property
    def hostname(self) -> str:
        """Hostname of the instance."""
        return self.key.hostname


class ReplicaInfo(Instance):
    """A replica known by orchestrator, along with its replication lag."""

    seconds_behind_master: NullInt64 = Field(
        default_factory=NullInt64, alias="SecondsBehindMaster"
    )

    @property
    def lag(self) -> Optional[int]:
        """Replication lag in seconds, None when not measured."""
        if not self.seconds_behind_master.valid:
            return None
        return self.seconds_behind_master.int64
