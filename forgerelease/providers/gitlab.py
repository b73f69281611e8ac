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

"""GitLab provider for forgerelease.

Maps the GitLab REST API (v4) release and project JSON onto the canonical
model. GitLab's schema is the furthest from the canonical one, so several
fields are synthesized or left at their zero values.

Endpoints (relative to the API root, which always ends in /api/v4):

- Releases: /projects/{user}%2F{repo}/releases
- Repositories: /users/{user}/projects

Latest Release:
    GitLab has no "latest release" endpoint. The full release list is
    requested and only its first element is kept (GitLab returns releases
    newest first). An empty list yields no release rather than an error.

Release Mapping:
    - id: GitLab releases have no numeric ID. A stable one is derived from
      the tag name with a base-31 polynomial hash over its code points,
      wrapped to a signed 64-bit integer, then made non-negative.
    - url: _links.self; html_url: tag_path; published_at: released_at
    - body: description with newlines replaced by spaces
    - author: login and username both come from author.username, full_name
      from author.name
    - assets: assets.links[] become assets (browser_download_url from
      direct_asset_url, type from link_type). GitLab does not report size,
      download count, creation time or UUID for links.
    - tarball_url / zipball_url: taken from assets.sources[] by format
      ("tar.gz" or "tar" for the tarball, "zip" for the zipball)
    - draft and prerelease are always False

Repository Mapping:
    - full_name: path_with_namespace
    - private: visibility == "private"
    - size: bytes from the API, converted to KB (integer division)
    - html_url / clone_url / ssh_url: web_url / http_url_to_repo /
      ssh_url_to_repo
    - stars_count: star_count; updated_at: last_activity_at
    - permissions: derived from the project access level, or the group
      access level when the project level is absent. GitLab levels are
      10=Guest, 20=Reporter, 30=Developer, 40=Maintainer, 50=Owner; admin
      needs 50, push 30, pull 10.
    - release_counter is always 0: the projects endpoint has no count.
      Filtering GitLab repositories "with releases only" therefore returns
      nothing.

Example:
    ```python
    from forgerelease.core import ReleaseQuery, get_releases

    releases = get_releases(
        ReleaseQuery("https://gitlab.com", "gitlab-org", "gitlab-runner", latest=True)
    )
    ```

"""

from __future__ import annotations

from typing import Any

from forgerelease.models import (
    Asset,
    Author,
    Owner,
    Permissions,
    ProviderType,
    Release,
    Repository,
)

from .base import (
    bool_field,
    int_field,
    list_field,
    load_json,
    obj_field,
    register_provider,
    require_object,
    str_field,
)

_UINT64_MASK = 0xFFFFFFFFFFFFFFFF
_INT64_SIGN = 1 << 63

# GitLab access levels
ACCESS_OWNER = 50
ACCESS_DEVELOPER = 30
ACCESS_GUEST = 10


def tag_release_id(tag_name: str) -> int:
    """Derive a non-negative release ID from a tag name.

    Computes id = id * 31 + ord(char) over the tag's characters using
    signed 64-bit wrapping arithmetic, then returns the absolute value.

    Example:
        ```python
        tag_release_id("a")   # 97
        tag_release_id("ab")  # 3105
        ```

    """
    value = 0
    for char in tag_name:
        value = (value * 31 + ord(char)) & _UINT64_MASK
    if value >= _INT64_SIGN:
        value -= 1 << 64
    return abs(value)


class GitLabProvider:
    """Provider for gitlab.com and self-hosted GitLab instances."""

    provider_type = ProviderType.GITLAB

    def build_releases_url(
        self, base_url: str, user: str, repo: str, latest: bool
    ) -> str:
        # No /latest endpoint; normalize_releases keeps the first entry
        return f"{base_url}/projects/{user}%2F{repo}/releases"

    def build_repositories_url(self, base_url: str, user: str) -> str:
        return f"{base_url}/users/{user}/projects"

    def normalize_releases(self, data: bytes, latest: bool) -> list[Release]:
        items = load_json(data, list, "release array")
        if latest:
            items = items[:1]
        return [_convert_release(require_object(item, "releases")) for item in items]

    def normalize_repositories(self, data: bytes) -> list[Repository]:
        items = load_json(data, list, "project array")
        return [
            _convert_repository(require_object(item, "projects")) for item in items
        ]

    def detect(self, base_url: str) -> bool:
        lower_url = base_url.lower()
        return "gitlab.com" in lower_url or "gitlab" in lower_url


def _convert_release(raw: dict[str, Any]) -> Release:
    tag_name = str_field(raw, "tag_name")
    author = obj_field(raw, "author")
    assets = obj_field(raw, "assets")
    links = obj_field(raw, "_links")

    tarball_url = ""
    zipball_url = ""
    for source in list_field(assets, "sources"):
        source_format = str_field(source, "format")
        if source_format in ("tar.gz", "tar"):
            tarball_url = str_field(source, "url")
        elif source_format == "zip":
            zipball_url = str_field(source, "url")

    username = str_field(author, "username")
    return Release(
        id=tag_release_id(tag_name),
        tag_name=tag_name,
        name=str_field(raw, "name"),
        body=str_field(raw, "description").replace("\n", " "),
        url=str_field(links, "self"),
        html_url=str_field(raw, "tag_path"),
        tarball_url=tarball_url,
        zipball_url=zipball_url,
        created_at=str_field(raw, "created_at"),
        published_at=str_field(raw, "released_at"),
        author=Author(
            login=username,
            username=username,
            full_name=str_field(author, "name"),
            email=str_field(author, "email"),
        ),
        assets=tuple(
            Asset(
                id=int_field(link, "id"),
                name=str_field(link, "name"),
                browser_download_url=str_field(link, "direct_asset_url"),
                type=str_field(link, "link_type"),
            )
            for link in list_field(assets, "links")
        ),
    )


def _access_level(permissions: dict[str, Any]) -> int:
    project_level = int_field(obj_field(permissions, "project_access"), "access_level")
    if project_level > 0:
        return project_level
    group_level = int_field(obj_field(permissions, "group_access"), "access_level")
    return max(group_level, 0)


def _convert_repository(raw: dict[str, Any]) -> Repository:
    owner = obj_field(raw, "owner")
    access_level = _access_level(obj_field(raw, "permissions"))
    owner_username = str_field(owner, "username")
    return Repository(
        id=int_field(raw, "id"),
        name=str_field(raw, "name"),
        full_name=str_field(raw, "path_with_namespace"),
        description=str_field(raw, "description"),
        private=str_field(raw, "visibility") == "private",
        fork=bool_field(raw, "fork"),
        size=int_field(raw, "size") // 1024,
        language=str_field(raw, "language"),
        html_url=str_field(raw, "web_url"),
        clone_url=str_field(raw, "http_url_to_repo"),
        ssh_url=str_field(raw, "ssh_url_to_repo"),
        stars_count=int_field(raw, "star_count"),
        forks_count=int_field(raw, "forks_count"),
        open_issues_count=int_field(raw, "open_issues_count"),
        release_counter=0,
        default_branch=str_field(raw, "default_branch"),
        archived=bool_field(raw, "archived"),
        created_at=str_field(raw, "created_at"),
        updated_at=str_field(raw, "last_activity_at"),
        owner=Owner(
            id=int_field(owner, "id"),
            login=owner_username,
            username=owner_username,
            full_name=str_field(owner, "name"),
            avatar_url=str_field(owner, "avatar_url"),
        ),
        permissions=Permissions(
            admin=access_level >= ACCESS_OWNER,
            push=access_level >= ACCESS_DEVELOPER,
            pull=access_level >= ACCESS_GUEST,
        ),
    )


# Register this provider when the module is imported
register_provider(ProviderType.GITLAB, GitLabProvider)
