"""Docker Hub registry adapter."""

from __future__ import annotations

from .client import DockerHubAPIError, DockerHubClient
from .schema import DockerHubTag, DockerHubTagPage

__all__ = ["DockerHubAPIError", "DockerHubClient", "DockerHubTag", "DockerHubTagPage"]
