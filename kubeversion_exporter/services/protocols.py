"""Protocols for the collaborators queried by the version checks."""

from abc import ABC, abstractmethod


class InventoryProtocol(ABC):
    """Protocol for listing what currently runs in the cluster.

    Implementations:
    - KubernetesInventoryService: Queries the Kubernetes API server
    """

    @abstractmethod
    def list_running_images(self) -> list[str]:
        """Return the distinct image references of all running containers.

        Raises:
            InventoryException: the inventory could not be listed
        """
        pass

    @abstractmethod
    def get_platform_version(self) -> str:
        """Return the version string of the running platform.

        Raises:
            InventoryException: the version could not be read
        """
        pass


class ReleaseFeedProtocol(ABC):
    """Protocol for reading the latest published platform release."""

    @abstractmethod
    def get_latest_release(self) -> str:
        """Return the version of the latest published release.

        Raises:
            ReleaseFeedException: the feed failed or timed out
        """
        pass


class RegistryProtocol(ABC):
    """Protocol for listing the published tags of an image repository."""

    @abstractmethod
    def list_tags(self, repository: str, endpoint: str) -> list[str]:
        """Return every tag published for a repository.

        Args:
            repository: Repository path, e.g. "library/nginx"
            endpoint: Registry base URL, e.g. "https://registry-1.docker.io"

        Raises:
            RegistryException: the registry could not be queried
        """
        pass
