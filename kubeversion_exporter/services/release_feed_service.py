"""Latest platform release lookup via the GitHub releases API."""

import logging

import requests

from kubeversion_exporter.exceptions import ReleaseFeedException
from kubeversion_exporter.schemas.version_source_schema import GitHubRelease
from kubeversion_exporter.services.protocols import ReleaseFeedProtocol

logger = logging.getLogger(__name__)

DEFAULT_RELEASE_URL = (
    "https://api.github.com/repos/kubernetes/kubernetes/releases/latest"
)


class ReleaseFeedService(ReleaseFeedProtocol):
    """Reads the tag of the latest GitHub release of a repository."""

    def __init__(
        self,
        release_url: str = DEFAULT_RELEASE_URL,
        http_timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        """Initialize ReleaseFeedService.

        Args:
            release_url: GitHub "latest release" API URL
            http_timeout: Timeout for the request in seconds
            session: HTTP session to use; a new one is created if omitted
        """
        self.release_url = release_url
        self.http_timeout = http_timeout
        self._session = session or requests.Session()

    def get_latest_release(self) -> str:
        try:
            response = self._session.get(
                self.release_url,
                timeout=self.http_timeout,
                headers={"Accept": "application/vnd.github+json"},
            )
            response.raise_for_status()
            release = GitHubRelease.model_validate(response.json())
        except requests.RequestException as e:
            raise ReleaseFeedException(self.release_url, str(e)) from e
        except ValueError as e:
            raise ReleaseFeedException(
                self.release_url, f"invalid release response: {e}"
            ) from e

        logger.debug("Received latest release", extra={"tag_name": release.tag_name})
        return release.tag_name
