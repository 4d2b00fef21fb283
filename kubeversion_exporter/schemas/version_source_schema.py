"""Response schemas of the external version sources."""

from pydantic import BaseModel, ConfigDict, Field


class GitHubRelease(BaseModel):
    """Latest release response of the GitHub releases API.

    Only the fields the exporter needs are declared.
    """

    model_config = ConfigDict(extra="ignore")

    tag_name: str = Field(min_length=1)


class TagList(BaseModel):
    """Response of the Docker Registry v2 ``tags/list`` endpoint."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    tags: list[str] | None = None


class BearerToken(BaseModel):
    """Token endpoint response; registries return either field name."""

    model_config = ConfigDict(extra="ignore")

    token: str | None = None
    access_token: str | None = None

    @property
    def value(self) -> str | None:
        return self.token or self.access_token
