# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Core orchestration for forgerelease.

This module provides the high-level entry points that turn a query into
canonical releases or repositories, whatever forge serves them.

Pipeline:

1. Resolve the provider (explicit hint, else detection from the base URL)
2. Normalize the base URL for that provider
3. Build the endpoint URL
4. Fetch it through the HttpTransport (exactly one GET, HTTP 200 required)
5. Normalize the provider's JSON into Release or Repository objects
6. Optionally keep only repositories that have releases

Design Principles:

- Queries are frozen dataclasses; results are lists of frozen dataclasses
- Errors propagate as forgerelease exceptions; the CLI formats them
- Providers are looked up through the registry, never imported directly
- The transport is passed in, so callers control timeout and headers

Example:
    Programmatic usage:
        ```python
        from forgerelease.core import ReleaseQuery, get_releases

        releases = get_releases(
            ReleaseQuery(
                base_url="https://codeberg.org",
                user="forgejo",
                repo="forgejo",
                latest=True,
            )
        )
        print(releases[0].tag_name)
        ```

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from forgerelease.io import HttpTransport
from forgerelease.logging import get_global_logger
from forgerelease.models import ProviderType, Release, Repository
from forgerelease.providers import normalize_base_url, resolve_provider


@dataclass(frozen=True)
class ReleaseQuery:
    """Parameters for a release lookup.

    Attributes:
        base_url: Forge instance or API root URL.
        user: Repository owner (user or organization).
        repo: Repository name.
        latest: Only the latest release.
        provider: Explicit provider, or None to detect from base_url.

    """

    base_url: str
    user: str
    repo: str
    latest: bool = False
    provider: ProviderType | str | None = None


@dataclass(frozen=True)
class RepositoryQuery:
    """Parameters for a repository listing."""

    base_url: str
    user: str
    with_releases: bool = False
    provider: ProviderType | str | None = None


def get_releases(
    query: ReleaseQuery, transport: HttpTransport | None = None
) -> list[Release]:
    """Fetch releases for a repository in canonical form.

    Args:
        query: What to fetch.
        transport: HTTP transport. A default HttpTransport (15s timeout, no
            extra headers) is created when omitted.

    Returns:
        Releases in the order the forge returned them. With latest=True the
        list has at most one element.

    Raises:
        NetworkError: On connection failure or timeout.
        HTTPStatusError: If the forge answers anything but 200.
        ParseError: If the body is not the JSON the provider expects.

    Example:
        ```python
        from forgerelease.core import ReleaseQuery, get_releases
        from forgerelease.io import HttpTransport

        transport = HttpTransport(headers={"Authorization": "Bearer ..."})
        releases = get_releases(
            ReleaseQuery("github.com", "cli", "cli", provider="github"),
            transport,
        )
        ```

    """
    logger = get_global_logger()
    transport = transport or HttpTransport()

    provider = resolve_provider(query.provider, query.base_url)
    base_url = normalize_base_url(query.base_url, provider.provider_type)
    url = provider.build_releases_url(base_url, query.user, query.repo, query.latest)
    logger.verbose("FETCH", f"Releases URL: {url}")

    data = transport.fetch(url)
    releases = provider.normalize_releases(data, query.latest)
    logger.verbose("FETCH", f"Found {len(releases)} release(s)")
    return releases


def get_repositories(
    query: RepositoryQuery, transport: HttpTransport | None = None
) -> list[Repository]:
    """Fetch a user's repositories in canonical form.

    With query.with_releases set, only repositories whose release_counter is
    positive are returned. GitHub reports a 0/1 placeholder and GitLab always
    0, so the filter is exact only on Gitea.

    Raises:
        NetworkError: On connection failure or timeout.
        HTTPStatusError: If the forge answers anything but 200.
        ParseError: If the body is not the JSON the provider expects.

    """
    logger = get_global_logger()
    transport = transport or HttpTransport()

    provider = resolve_provider(query.provider, query.base_url)
    base_url = normalize_base_url(query.base_url, provider.provider_type)
    url = provider.build_repositories_url(base_url, query.user)
    logger.verbose("FETCH", f"Repositories URL: {url}")

    data = transport.fetch(url)
    repos = provider.normalize_repositories(data)
    logger.verbose("FETCH", f"Found {len(repos)} repositories")

    if query.with_releases:
        repos = filter_with_releases(repos)
        logger.verbose("FETCH", f"{len(repos)} with releases")
    return repos


def filter_with_releases(repos: Iterable[Repository]) -> list[Repository]:
    """Keep repositories with release_counter > 0, preserving order."""
    return [repo for repo in repos if repo.release_counter > 0]
