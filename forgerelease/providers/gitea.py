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

"""Gitea provider for forgerelease.

Gitea (and Forgejo, e.g. codeberg.org) is the fallback backend: any base URL
that does not look like GitHub or GitLab is treated as a Gitea instance.

Endpoints (relative to the instance root, no /api/v1 in the base URL):

- Releases: /api/v1/repos/{user}/{repo}/releases
- Latest release: /api/v1/repos/{user}/{repo}/releases/latest
- Repositories: /api/v1/users/{user}/repos

Gitea's JSON is the closest to the canonical model: every canonical field
is supplied, including an exact release_counter and attachment UUIDs.
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


class GiteaProvider:
    """Provider for Gitea and Forgejo instances."""

    provider_type = ProviderType.GITEA

    def build_releases_url(
        self, base_url: str, user: str, repo: str, latest: bool
    ) -> str:
        release_type = "releases/latest" if latest else "releases"
        return f"{base_url}/api/v1/repos/{user}/{repo}/{release_type}"

    def build_repositories_url(self, base_url: str, user: str) -> str:
        return f"{base_url}/api/v1/users/{user}/repos"

    def normalize_releases(self, data: bytes, latest: bool) -> list[Release]:
        if latest:
            return [_convert_release(load_json(data, dict, "release object"))]
        items = load_json(data, list, "release array")
        return [_convert_release(require_object(item, "releases")) for item in items]

    def normalize_repositories(self, data: bytes) -> list[Repository]:
        items = load_json(data, list, "repository array")
        return [
            _convert_repository(require_object(item, "repositories")) for item in items
        ]

    def detect(self, base_url: str) -> bool:
        lower_url = base_url.lower()
        return not any(
            marker in lower_url
            for marker in ("github.com", "api.github.com", "gitlab.com", "gitlab")
        )


def _convert_release(raw: dict[str, Any]) -> Release:
    author = obj_field(raw, "author")
    return Release(
        id=int_field(raw, "id"),
        tag_name=str_field(raw, "tag_name"),
        name=str_field(raw, "name"),
        body=str_field(raw, "body").replace("\n", " "),
        url=str_field(raw, "url"),
        html_url=str_field(raw, "html_url"),
        tarball_url=str_field(raw, "tarball_url"),
        zipball_url=str_field(raw, "zipball_url"),
        draft=bool_field(raw, "draft"),
        prerelease=bool_field(raw, "prerelease"),
        created_at=str_field(raw, "created_at"),
        published_at=str_field(raw, "published_at"),
        author=Author(
            login=str_field(author, "login"),
            login_name=str_field(author, "login_name"),
            full_name=str_field(author, "full_name"),
            email=str_field(author, "email"),
            username=str_field(author, "username"),
        ),
        assets=tuple(
            Asset(
                id=int_field(asset, "id"),
                name=str_field(asset, "name"),
                size=int_field(asset, "size"),
                download_count=int_field(asset, "download_count"),
                created_at=str_field(asset, "created_at"),
                uuid=str_field(asset, "uuid"),
                browser_download_url=str_field(asset, "browser_download_url"),
                type=str_field(asset, "type"),
            )
            for asset in list_field(raw, "assets")
        ),
    )


def _convert_repository(raw: dict[str, Any]) -> Repository:
    owner = obj_field(raw, "owner")
    permissions = obj_field(raw, "permissions")
    return Repository(
        id=int_field(raw, "id"),
        name=str_field(raw, "name"),
        full_name=str_field(raw, "full_name"),
        description=str_field(raw, "description"),
        private=bool_field(raw, "private"),
        fork=bool_field(raw, "fork"),
        size=int_field(raw, "size"),
        language=str_field(raw, "language"),
        html_url=str_field(raw, "html_url"),
        clone_url=str_field(raw, "clone_url"),
        ssh_url=str_field(raw, "ssh_url"),
        stars_count=int_field(raw, "stars_count"),
        forks_count=int_field(raw, "forks_count"),
        watchers_count=int_field(raw, "watchers_count"),
        open_issues_count=int_field(raw, "open_issues_count"),
        release_counter=int_field(raw, "release_counter"),
        default_branch=str_field(raw, "default_branch"),
        archived=bool_field(raw, "archived"),
        created_at=str_field(raw, "created_at"),
        updated_at=str_field(raw, "updated_at"),
        owner=Owner(
            id=int_field(owner, "id"),
            login=str_field(owner, "login"),
            username=str_field(owner, "username"),
            full_name=str_field(owner, "full_name"),
            email=str_field(owner, "email"),
            avatar_url=str_field(owner, "avatar_url"),
        ),
        permissions=Permissions(
            admin=bool_field(permissions, "admin"),
            push=bool_field(permissions, "push"),
            pull=bool_field(permissions, "pull"),
        ),
        has_issues=bool_field(raw, "has_issues"),
        has_wiki=bool_field(raw, "has_wiki"),
        has_projects=bool_field(raw, "has_projects"),
        has_releases=bool_field(raw, "has_releases"),
        has_packages=bool_field(raw, "has_packages"),
    )


# Register this provider when the module is imported
register_provider(ProviderType.GITEA, GiteaProvider)
