# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""File containing all MySQL cluster related exceptions."""
import json
from typing import Optional

# The unique Charmhub library identifier, never change it
LIBID = "e2b6d4f8a0c14a3e9f7b5d1c3e8a6f02"

# Increment this major API version when introducing breaking changes
LIBAPI = 0

# Increment this PATCH version before using `charmcraft publish-lib` or reset
# to 0 if you are raising the major API version
LIBPATCH = 1


class MysqlClusterError(Exception):
    """Base exception class for MySQL cluster errors."""


class MysqlClusterDefaultsError(MysqlClusterError):
    """Exception thrown when the defaults of a cluster spec cannot be computed."""


class OptionsError(MysqlClusterError):
    """Exception thrown when the process options are invalid."""


class OrchestratorError(MysqlClusterError):
    """Base exception for failures of the orchestrator collaborator."""


class OrchestratorClientError(OrchestratorError):
    """Exception thrown when an orchestrator client cannot be built."""


class OrchestratorHttpError(OrchestratorError):
    """Exception thrown when an orchestrator REST call fails."""

    def __init__(self, response_text: Optional[str] = None, response_code: Optional[int] = None):
        super().__init__(response_text)
        try:
            self.response_body = json.loads(response_text)
        except (json.JSONDecodeError, TypeError):
            self.response_body = {}
        self.response_text = response_text
        self.response_code = response_code

    def __str__(self):
        """Returns the string for the http error."""
        return f"Orchestrator http error, code: {self.response_code}, body: {self.response_text}"
