# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Process wide options of the mysql cluster libraries.

The options are loaded once when the process starts, from built-in defaults, an
optional YAML file and the environment (in increasing order of precedence), then
passed to the defaulting and topology helpers. They are never mutated afterwards.
"""
import logging
import os
from os.path import exists
from typing import Any, Dict, Mapping, Optional

from charms.mysql_cluster.v0.constants import (
    HelperImage,
    MetricsExporterImage,
    MysqlImage,
    MysqlImageTag,
)
from charms.mysql_cluster.v0.exceptions import OptionsError
from charms.mysql_cluster.v0.helper_enums import PullPolicy
from charms.mysql_cluster.v0.models import Model
from pydantic import StrictStr, ValidationError, validator
from ruamel.yaml import YAML, YAMLError

# The unique Charmhub library identifier, never change it
LIBID = "c5e7a9b1d3f54c8e0a2b4d6f8a0c2e4b"

# Increment this major API version when introducing breaking changes
LIBAPI = 0

# Increment this PATCH version before using `charmcraft publish-lib` or reset
# to 0 if you are raising the major API version
LIBPATCH = 1


logger = logging.getLogger(__name__)


ENV_VARS = {
    "mysql_image": "MYSQL_IMAGE",
    "mysql_image_tag": "MYSQL_IMAGE_TAG",
    "helper_image": "HELPER_IMAGE",
    "metrics_exporter_image": "METRICS_EXPORTER_IMAGE",
    "image_pull_policy": "IMAGE_PULL_POLICY",
    "orchestrator_uri": "ORCHESTRATOR_URI",
    "orchestrator_topology_secret_name": "ORCHESTRATOR_TOPOLOGY_SECRET_NAME",
}


class Options(Model):
    """Immutable defaults shared by every cluster handled by the process."""

    # non-string YAML scalars, e.g. an unquoted 5.10, are rejected
    mysql_image: StrictStr = MysqlImage
    mysql_image_tag: StrictStr = MysqlImageTag
    helper_image: StrictStr = HelperImage
    metrics_exporter_image: StrictStr = MetricsExporterImage
    image_pull_policy: StrictStr = PullPolicy.IF_NOT_PRESENT.value
    orchestrator_uri: StrictStr = ""
    orchestrator_topology_secret_name: StrictStr = ""

    class Config:
        frozen = True
        extra = "forbid"

    @validator("mysql_image", "mysql_image_tag", "helper_image", "metrics_exporter_image")
    def not_empty(cls, v):  # noqa: N805
        """Images are used as is in the pod specs."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @validator("image_pull_policy")
    def valid_pull_policy(cls, v):  # noqa: N805
        """Only the kubernetes pull policies are accepted."""
        return PullPolicy(v).value

    @classmethod
    def build(cls, values: Dict[str, Any]) -> "Options":
        """Validate the values and create the options."""
        try:
            return cls(**values)
        except ValidationError as e:
            raise OptionsError(f"Invalid options: {e}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Options":
        """Create the options from the environment, on top of the defaults."""
        return cls.build(_read_env(environ))

    @classmethod
    def from_file(cls, path: str) -> "Options":
        """Create the options from a YAML file, on top of the defaults."""
        return cls.build(_read_file(path))


def _read_env(environ: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Collect the options set in the environment."""
    if environ is None:
        environ = os.environ

    return {field: environ[var] for field, var in ENV_VARS.items() if var in environ}


def _read_file(path: str) -> Dict[str, Any]:
    """Load the options mapping of a YAML file."""
    if not exists(path):
        raise OptionsError(f"{path} not found.")

    try:
        with open(path, "r") as f:
            data = YAML(typ="safe").load(f)
    except YAMLError as e:
        raise OptionsError(f"Cannot parse {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise OptionsError(f"{path} must contain a mapping of options.")

    return dict(data)


def load_options(
    path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> Options:
    """Load the process options: defaults, then the YAML file if any, then the environment."""
    values = {}
    if path:
        values.update(_read_file(path))
    values.update(_read_env(environ))

    options = Options.build(values)
    logger.debug(f"Loaded options: {options.to_dict()}")
    return options
