"""GitHub raw content adapter for service metadata."""

from __future__ import annotations

from .client import GitHubSnippetSource, raw_content_base

__all__ = ["GitHubSnippetSource", "raw_content_base"]
