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

"""Canonical data model for forgerelease.

Every provider normalizes its native JSON into these types, so callers see
one shape regardless of whether the data came from Gitea, GitHub or GitLab.

All dataclasses are frozen and sequences are tuples, so values cannot be
mutated after normalization. A field the source backend cannot supply holds
its zero value ("", 0, False); see the provider modules for what each
backend leaves empty.

Example:
    Reading a normalized release:
        ```python
        from forgerelease.core import ReleaseQuery, get_releases

        release = get_releases(
            ReleaseQuery("https://api.github.com", "golang", "go", latest=True)
        )[0]
        for asset in release.assets:
            print(asset.name, asset.size)
        ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProviderType(str, Enum):
    """Closed set of supported Git hosting backends."""

    GITEA = "gitea"
    GITHUB = "github"
    GITLAB = "gitlab"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Author:
    """Author of a release.

    Attributes:
        login: Account login name.
        login_name: Gitea's external login name (empty elsewhere).
        full_name: Display name.
        email: Email address, when the backend exposes it.
        username: Account username.
    """

    login: str = ""
    login_name: str = ""
    full_name: str = ""
    email: str = ""
    username: str = ""


@dataclass(frozen=True)
class Asset:
    """A downloadable file attached to a release.

    Attributes:
        id: Backend asset identifier.
        name: File name.
        size: Size in bytes.
        download_count: Number of downloads.
        created_at: Creation timestamp as reported by the backend.
        uuid: Gitea attachment UUID (empty elsewhere).
        browser_download_url: Direct download URL.
        type: Content type (GitHub) or link type (GitLab).
    """

    id: int = 0
    name: str = ""
    size: int = 0
    download_count: int = 0
    created_at: str = ""
    uuid: str = ""
    browser_download_url: str = ""
    type: str = ""


@dataclass(frozen=True)
class Release:
    """A normalized release.

    Attributes:
        id: Backend release id. GitLab has none, so it is derived from the tag.
        tag_name: Git tag the release points at.
        name: Release title.
        body: Release notes with newlines replaced by spaces.
        url: API URL of the release.
        html_url: Web URL of the release (GitLab: tag path).
        tarball_url: Source tarball URL.
        zipball_url: Source zip URL.
        draft: Draft flag (always False for GitLab).
        prerelease: Pre-release flag (always False for GitLab).
        created_at: Creation timestamp, backend-native format.
        published_at: Publication timestamp, backend-native format.
        author: Release author.
        assets: Attached files, in backend order.
    """

    id: int = 0
    tag_name: str = ""
    name: str = ""
    body: str = ""
    url: str = ""
    html_url: str = ""
    tarball_url: str = ""
    zipball_url: str = ""
    draft: bool = False
    prerelease: bool = False
    created_at: str = ""
    published_at: str = ""
    author: Author = field(default_factory=Author)
    assets: tuple[Asset, ...] = ()


@dataclass(frozen=True)
class Owner:
    """Owner of a repository."""

    id: int = 0
    login: str = ""
    username: str = ""
    full_name: str = ""
    email: str = ""
    avatar_url: str = ""


@dataclass(frozen=True)
class Permissions:
    """Permissions of the requesting account on a repository."""

    admin: bool = False
    push: bool = False
    pull: bool = False


@dataclass(frozen=True)
class Repository:
    """A normalized repository.

    Attributes:
        release_counter: Number of releases. Exact for Gitea; 1 or 0 for
            GitHub depending on has_releases (not a count); always 0 for
            GitLab.
        size: Repository size in kilobytes.

    The remaining attributes mirror the common fields of the three APIs.
    """

    id: int = 0
    name: str = ""
    full_name: str = ""
    description: str = ""
    private: bool = False
    fork: bool = False
    size: int = 0
    language: str = ""
    html_url: str = ""
    clone_url: str = ""
    ssh_url: str = ""
    stars_count: int = 0
    forks_count: int = 0
    watchers_count: int = 0
    open_issues_count: int = 0
    release_counter: int = 0
    default_branch: str = ""
    archived: bool = False
    created_at: str = ""
    updated_at: str = ""
    owner: Owner = field(default_factory=Owner)
    permissions: Permissions = field(default_factory=Permissions)
    has_issues: bool = False
    has_wiki: bool = False
    has_projects: bool = False
    has_releases: bool = False
    has_packages: bool = False
