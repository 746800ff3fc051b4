# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

"""Read-only client of the orchestrator HTTP API.

Orchestrator tracks the replication topology of the mysql clusters: which instance
is the master and how far behind each replica is. Only lookups are implemented.
"""
import logging
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote, urlparse

import requests
import urllib3
from charms.mysql_cluster.v0.exceptions import (
    OrchestratorClientError,
    OrchestratorHttpError,
)
from charms.mysql_cluster.v0.models import Instance, ReplicaInfo
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

# The unique Charmhub library identifier, never change it
LIBID = "d1f3a5c7e9b04d2f6a8c0e2b4d6f8a1c"

# Increment this major API version when introducing breaking changes
LIBAPI = 0

# Increment this PATCH version before using `charmcraft publish-lib` or reset
# to 0 if you are raising the major API version
LIBPATCH = 1


logger = logging.getLogger(__name__)


def error_http_retry_log(retry_max: int, method: str, url: str):
    """Return a custom log function to run before a new Tenacity retry."""

    def log_error(retry_state: RetryCallState):
        logger.error(
            f"Request {method} to {url} failed."
            f"(Attempts left: {retry_max - retry_state.attempt_number})\n"
            f"\tError: {retry_state.outcome.exception()}"
        )

    return log_error


class OrchestratorClient:
    """Client of one orchestrator API endpoint, e.g. http://orchestrator/api."""

    def __init__(self, uri: str):
        parsed = urlparse(uri or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise OrchestratorClientError(f"Invalid orchestrator uri: {uri!r}")

        self.uri = uri.rstrip("/")

    def request(
        self,
        method: str,
        endpoint: str,
        retries: int = 0,
        timeout: Optional[int] = None,
    ) -> Union[Dict[str, Any], List[Any]]:
        """Make an HTTP request against the orchestrator API.

        Args:
            method: matching the known http methods.
            endpoint: relative to the base uri.
            retries: number of extra attempts on connection errors, none by default.
            timeout: number of seconds before a timeout happens, unbounded by default.

        Raises:
            ValueError if method or endpoint are missing
            OrchestratorHttpError if the call fails or orchestrator reports an error
        """
        if None in [endpoint, method]:
            raise ValueError("endpoint or method missing")

        url = f"{self.uri}/{endpoint.lstrip('/')}"

        def call() -> requests.Response:
            """Performs an HTTP request."""
            for attempt in Retrying(
                retry=retry_if_exception_type(requests.ConnectionError)
                | retry_if_exception_type(urllib3.exceptions.HTTPError),
                stop=stop_after_attempt(retries + 1),
                wait=wait_fixed(1),
                before_sleep=error_http_retry_log(retries + 1, method, url),
                reraise=True,
            ):
                with attempt, requests.Session() as s:
                    response = s.request(
                        method=method.upper(),
                        url=url,
                        headers={"Accept": "application/json"},
                        timeout=timeout,
                    )
                    response.raise_for_status()
                    return response

        resp = None
        try:
            resp = call()
            body = resp.json()
        except (requests.RequestException, urllib3.exceptions.HTTPError) as e:
            if isinstance(e, requests.JSONDecodeError):
                raise OrchestratorHttpError(
                    response_text=resp.text, response_code=resp.status_code
                )
            if not isinstance(e, requests.RequestException) or e.response is None:
                raise OrchestratorHttpError(response_text=str(e))

            raise OrchestratorHttpError(
                response_text=e.response.text, response_code=e.response.status_code
            )

        # orchestrator reports lookup failures as {"Code": "ERROR", "Message": ...}
        if isinstance(body, dict) and body.get("Code") == "ERROR":
            raise OrchestratorHttpError(response_text=resp.text, response_code=resp.status_code)

        return body

    def master(self, cluster: str) -> Instance:
        """Get the current master instance of the cluster."""
        body = self.request("GET", f"/master/{quote(cluster, safe='')}")
        return self._parse(Instance, body)

    def replicas(self, cluster: str) -> List[ReplicaInfo]:
        """Get the replicas of the cluster, with their replication lag."""
        body = self.request("GET", f"/cluster-osc-slaves/{quote(cluster, safe='')}")
        return self._parse_list(body)

    def _parse_list(self, body: Any) -> List[ReplicaInfo]:
        if body is None:
            return []
        if not isinstance(body, list):
            raise OrchestratorHttpError(response_text=f"Expected a list of instances: {body}")
        return [self._parse(ReplicaInfo, obj) for obj in body]

    @staticmethod
    def _parse(model, obj: Any):
        if not isinstance(obj, dict):
            raise OrchestratorHttpError(response_text=f"Unexpected instance payload: {obj}")
        try:
            return model.from_dict(obj)
        except ValueError as e:
            raise OrchestratorHttpError(response_text=f"Invalid instance payload: {e}")
