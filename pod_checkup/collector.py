# SPDX-License-Identifier: MIT

"""Fetches pod snapshots from the Kubernetes API.

All API calls are read-only list operations.
"""

from __future__ import annotations

import logging
from typing import Any

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from pod_checkup.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_KUBECONFIG = "~/.kube/config"


def connect(kubeconfig: str | None = DEFAULT_KUBECONFIG, context: str | None = None) -> client.ApiClient:
    """Load kubeconfig (falling back to in-cluster config) and return an API client."""
    try:
        try:
            config.load_kube_config(config_file=kubeconfig, context=context)
        except ConfigException:
            logger.debug("kubeconfig %s unusable, trying in-cluster config", kubeconfig)
            config.load_incluster_config()
    except ConfigException as exc:
        raise FetchError(f"failed to get kubernetes client: {exc}") from exc
    return client.ApiClient()


def list_pods(api_client: client.ApiClient, namespace: str | None = None) -> list[Any]:
    """Return every pod in ``namespace``, or in all namespaces when omitted."""
    core = client.CoreV1Api(api_client)
    try:
        if namespace:
            result = core.list_namespaced_pod(namespace)
        else:
            result = core.list_pod_for_all_namespaces()
    except (ApiException, HTTPError) as exc:
        raise FetchError(f"unable to obtain resource list: {exc}") from exc

    pods = list(result.items or [])
    logger.debug("fetched %d pod(s) from %s", len(pods), namespace or "all namespaces")
    return pods
