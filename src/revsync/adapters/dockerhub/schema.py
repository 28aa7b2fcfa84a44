"""Docker Hub tag listing schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DockerHubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class DockerHubImage(DockerHubBaseModel):
    architecture: str | None = None
    os: str | None = None
    digest: str | None = None
    size: int | None = None


class DockerHubTag(DockerHubBaseModel):
    name: str
    id: int | None = None
    digest: str | None = None
    full_size: int | None = None
    last_updated: str | None = None
    tag_status: str | None = None
    images: list[DockerHubImage] = Field(default_factory=list)


class DockerHubTagPage(DockerHubBaseModel):
    """One page of ``GET /repositories/{namespace}/{name}/tags``."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[DockerHubTag] = Field(default_factory=list)


class DockerHubErrorResponse(DockerHubBaseModel):
    message: str | None = None
    detail: str | None = None
    errinfo: dict[str, object] | None = None

    @property
    def text(self) -> str:
        return self.message or self.detail or "unknown error"
