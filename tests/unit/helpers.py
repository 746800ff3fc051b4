# Copyright 2024 Canonical Ltd.
# See LICENSE file for licensing details.

from typing import Any, Dict, List, Optional

import responses

ORC_URI = "http://orchestrator.default/api"
CLUSTER_NAME = "foo"


def orc_instance(
    hostname: str, lag: Optional[int] = None, port: int = 3306
) -> Dict[str, Any]:
    """Build an instance payload the way orchestrator serializes it (trimmed down)."""
    return {
        "Key": {"Hostname": hostname, "Port": port},
        "InstanceAlias": "",
        "Uptime": 1234,
        "ServerID": 100,
        "Version": "5.7.22-22-log",
        "ReadOnly": lag is not None,
        "SecondsBehindMaster": {"Int64": lag or 0, "Valid": lag is not None},
        "ClusterName": f"{hostname}:{port}",
    }


def mock_response_master(hostname: str, cluster_name: str = CLUSTER_NAME, uri: str = ORC_URI):
    """Add API mock for the master ('/master/<cluster>') query.

    Keep in mind to add @responses.activate decorator to the test function using this call!
    """
    responses.add(
        method="GET",
        url=f"{uri}/master/{cluster_name}",
        json=orc_instance(hostname),
        status=200,
    )


def mock_response_replicas(
    replicas: List[Dict[str, Any]], cluster_name: str = CLUSTER_NAME, uri: str = ORC_URI
):
    """Add API mock for the replicas ('/cluster-osc-slaves/<cluster>') query.

    Keep in mind to add @responses.activate decorator to the test function using this call!
    """
    responses.add(
        method="GET",
        url=f"{uri}/cluster-osc-slaves/{cluster_name}",
        json=replicas,
        status=200,
    )


def mock_response_orc_error(path: str, message: str, uri: str = ORC_URI, status: int = 500):
    """Add API mock for a failed orchestrator query."""
    responses.add(
        method="GET",
        url=f"{uri}/{path}",
        json={"Code": "ERROR", "Message": message, "Details": None},
        status=status,
    )
