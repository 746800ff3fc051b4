# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""In this file we declare the base enum types with string and other types' representations."""
from enum import Enum

# The unique Charmhub library identifier, never change it
LIBID = "4c1d0e7a9b2f4e5d8a6c3b1f0e9d7c2a"

# Increment this major API version when introducing breaking changes
LIBAPI = 0

# Increment this PATCH version before using `charmcraft publish-lib` or reset
# to 0 if you are raising the major API version
LIBPATCH = 1


class BaseStrEnum(str, Enum):
    """Base Enum class with str representation."""

    def __str__(self):
        """String representation of enum value."""
        return self.value

    @property
    def val(self) -> str:
        """String representation of enum values."""
        return str(self.__str__())


class ResourceType(BaseStrEnum):
    """Names of the compute and storage resources requested by the cluster pods."""

    CPU = "cpu"
    MEMORY = "memory"
    STORAGE = "storage"


class AccessMode(BaseStrEnum):
    """Access modes of a persistent volume."""

    READ_WRITE_ONCE = "ReadWriteOnce"
    READ_ONLY_MANY = "ReadOnlyMany"
    READ_WRITE_MANY = "ReadWriteMany"


class PullPolicy(BaseStrEnum):
    """Image pull policies of a container."""

    ALWAYS = "Always"
    NEVER = "Never"
    IF_NOT_PRESENT = "IfNotPresent"
