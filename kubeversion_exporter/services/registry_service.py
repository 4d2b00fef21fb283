"""Tag listing against registries speaking the Docker Registry HTTP API v2.

Public repositories on Docker Hub, Quay, GHCR and most other registries answer
an anonymous ``tags/list`` request with a ``401`` and a ``Bearer`` challenge.
The challenge names a token endpoint which hands out an anonymous pull token
for the repository; the request is then repeated with that token. Long tag
lists are paginated through ``Link: <...>; rel="next"`` headers.
"""

import logging
import re
from urllib.parse import urljoin

import requests

from kubeversion_exporter.exceptions import RegistryException
from kubeversion_exporter.schemas.version_source_schema import BearerToken, TagList
from kubeversion_exporter.services.protocols import RegistryProtocol

logger = logging.getLogger(__name__)

_CHALLENGE_PARAM_RE = re.compile(r'(\w+)="([^"]*)"')

# Guards against registries that keep returning the same next link.
MAX_TAG_PAGES = 100


class RegistryTagService(RegistryProtocol):
    """Lists published tags of image repositories."""

    def __init__(self, http_timeout: float = 10.0, session: requests.Session | None = None):
        """Initialize RegistryTagService.

        Args:
            http_timeout: Timeout for each registry request in seconds
            session: HTTP session to use; a new one is created if omitted
        """
        self.http_timeout = http_timeout
        self._session = session or requests.Session()

    def list_tags(self, repository: str, endpoint: str) -> list[str]:
        base_url = endpoint.rstrip("/") + "/"
        url: str | None = urljoin(base_url, f"v2/{repository}/tags/list")
        token: str | None = None
        tags: list[str] = []

        try:
            for _ in range(MAX_TAG_PAGES):
                if url is None:
                    break

                response, token = self._get(url, repository, token)
                tag_list = TagList.model_validate(response.json())
                tags.extend(tag_list.tags or [])

                next_url = response.links.get("next", {}).get("url")
                url = urljoin(base_url, next_url) if next_url else None
        except requests.RequestException as e:
            raise RegistryException(repository, endpoint, str(e)) from e
        except ValueError as e:
            raise RegistryException(
                repository, endpoint, f"invalid tag list response: {e}"
            ) from e

        if url is not None:
            # A truncated list may miss the newest tags.
            raise RegistryException(
                repository, endpoint, f"tag list has more than {MAX_TAG_PAGES} pages"
            )

        logger.debug(
            f"Received tags for repository {repository}",
            extra={"registry": endpoint, "tags": len(tags)},
        )
        return tags

    def _get(
        self, url: str, repository: str, token: str | None
    ) -> tuple[requests.Response, str | None]:
        """GET a registry URL, answering one bearer challenge if needed."""
        response = self._session.get(
            url, headers=self._headers(token), timeout=self.http_timeout
        )

        if response.status_code == 401:
            challenge = response.headers.get("WWW-Authenticate", "")
            token = self._fetch_token(challenge, repository)
            response = self._session.get(
                url, headers=self._headers(token), timeout=self.http_timeout
            )

        response.raise_for_status()
        return response, token

    def _fetch_token(self, challenge: str, repository: str) -> str:
        scheme, _, params_text = challenge.partition(" ")
        if scheme.lower() != "bearer":
            raise requests.HTTPError(
                f"registry requires unsupported authentication: {challenge or 'none'}"
            )

        params = dict(_CHALLENGE_PARAM_RE.findall(params_text))
        realm = params.pop("realm", None)
        if not realm:
            raise requests.HTTPError("bearer challenge without realm")
        params.setdefault("scope", f"repository:{repository}:pull")

        response = self._session.get(realm, params=params, timeout=self.http_timeout)
        response.raise_for_status()

        token = BearerToken.model_validate(response.json()).value
        if not token:
            raise requests.HTTPError("token endpoint returned no token")
        return token

    @staticmethod
    def _headers(token: str | None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers
