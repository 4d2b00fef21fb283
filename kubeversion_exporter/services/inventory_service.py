"""Kubernetes inventory: running images and the API server version.

This module is the only place that talks to the Kubernetes API.
"""

import logging

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from kubeversion_exporter.exceptions import InventoryException
from kubeversion_exporter.services.protocols import InventoryProtocol

logger = logging.getLogger(__name__)


def create_api_client(in_cluster: bool, kubeconfig: str | None = None) -> client.ApiClient:
    """Create an API client for the Kubernetes cluster.

    Args:
        in_cluster: Authenticate with the service account of the pod
        kubeconfig: Path to a kubeconfig file; when omitted the client falls
            back to $KUBECONFIG and then ~/.kube/config

    Raises:
        InventoryException: no usable configuration was found
    """
    try:
        if in_cluster:
            configuration = client.Configuration()
            config.load_incluster_config(client_configuration=configuration)
            logger.info("Loaded in-cluster Kubernetes config")
            return client.ApiClient(configuration)

        api_client = config.new_client_from_config(config_file=kubeconfig)
        logger.info("Loaded kubeconfig", extra={"kubeconfig": kubeconfig or "default"})
        return api_client
    except (config.ConfigException, OSError, TypeError) as e:
        raise InventoryException(
            "create API client for the Kubernetes cluster", str(e)
        ) from e


class KubernetesInventoryService(InventoryProtocol):
    """Reads running images and the server version from the Kubernetes API."""

    def __init__(
        self,
        in_cluster: bool = False,
        kubeconfig: str | None = None,
        api_client: client.ApiClient | None = None,
    ):
        """Initialize the inventory.

        Args:
            in_cluster: Authenticate inside the cluster
            kubeconfig: Path to the kubeconfig file for out-of-cluster use
            api_client: Preconfigured client; skips configuration loading

        Raises:
            InventoryException: the API client could not be created
        """
        if api_client is None:
            api_client = create_api_client(in_cluster, kubeconfig)

        self._core_api = client.CoreV1Api(api_client)
        self._version_api = client.VersionApi(api_client)

    def list_running_images(self) -> list[str]:
        try:
            pods = self._core_api.list_pod_for_all_namespaces(watch=False)
        except (ApiException, HTTPError) as e:
            raise InventoryException("list pods", str(e)) from e

        # Distinct references in first-seen order.
        images: dict[str, None] = {}
        for pod in pods.items:
            if pod.spec is None:
                continue
            for container in pod.spec.containers or []:
                if container.image:
                    images.setdefault(container.image, None)

        return list(images)

    def get_platform_version(self) -> str:
        try:
            version_info = self._version_api.get_code()
        except (ApiException, HTTPError) as e:
            raise InventoryException("get server version", str(e)) from e

        if not version_info.git_version:
            raise InventoryException("get server version", "the server reported none")
        return str(version_info.git_version)
