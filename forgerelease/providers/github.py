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

"""GitHub provider for forgerelease.

Maps the GitHub REST API (v3) release and repository JSON onto the
canonical model.

Endpoints (relative to the API root, normally https://api.github.com):

- Releases: /repos/{user}/{repo}/releases
- Latest release: /repos/{user}/{repo}/releases/latest
- Repositories: /users/{user}/repos

Base URL handling:

- "github.com" or "https://github.com" is rewritten to https://api.github.com
- Any other host (e.g. a test server or an Enterprise API root) is used as-is

Field Mapping Notes:

- author.login fills both Author.login and Author.username; GitHub's
  release author carries no name or email
- Asset.type comes from content_type; Asset.uuid is always empty
- stargazers_count maps to Repository.stars_count
- Owner.username is the owner login

Release Counter:
    The repositories endpoint has no release count. Fetching every
    repository's releases to count them would cost one request per
    repository, so release_counter is a placeholder: 1 when has_releases is
    true, else 0. It tells you whether releases exist, not how many.

Example:
    From Python:
        ```python
        from forgerelease.core import RepositoryQuery, get_repositories

        repos = get_repositories(
            RepositoryQuery("https://api.github.com", "golang", with_releases=True)
        )
        print([r.name for r in repos])
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


class GitHubProvider:
    """Provider for GitHub and GitHub-compatible API roots."""

    provider_type = ProviderType.GITHUB

    def build_releases_url(
        self, base_url: str, user: str, repo: str, latest: bool
    ) -> str:
        if latest:
            return f"{base_url}/repos/{user}/{repo}/releases/latest"
        return f"{base_url}/repos/{user}/{repo}/releases"

    def build_repositories_url(self, base_url: str, user: str) -> str:
        return f"{base_url}/users/{user}/repos"

    def normalize_releases(self, data: bytes, latest: bool) -> list[Release]:
        """Convert GitHub release JSON (one object when latest, else an array)."""
        if latest:
            return [self._convert_release(load_json(data, dict, "release object"))]
        items = load_json(data, list, "release array")
        return [
            self._convert_release(require_object(item, "releases")) for item in items
        ]

    def normalize_repositories(self, data: bytes) -> list[Repository]:
        items = load_json(data, list, "repository array")
        return [
            self._convert_repository(require_object(item, "repositories"))
            for item in items
        ]

    def detect(self, base_url: str) -> bool:
        lower_url = base_url.lower()
        return "github.com" in lower_url or "api.github.com" in lower_url

    def _convert_release(self, raw: dict[str, Any]) -> Release:
        login = str_field(obj_field(raw, "author"), "login")
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
            author=Author(login=login, username=login),
            assets=tuple(
                Asset(
                    id=int_field(asset, "id"),
                    name=str_field(asset, "name"),
                    size=int_field(asset, "size"),
                    download_count=int_field(asset, "download_count"),
                    created_at=str_field(asset, "created_at"),
                    browser_download_url=str_field(asset, "browser_download_url"),
                    type=str_field(asset, "content_type"),
                )
                for asset in list_field(raw, "assets")
            ),
        )

    def _convert_repository(self, raw: dict[str, Any]) -> Repository:
        owner = obj_field(raw, "owner")
        permissions = obj_field(raw, "permissions")
        has_releases = bool_field(raw, "has_releases")
        owner_login = str_field(owner, "login")
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
            stars_count=int_field(raw, "stargazers_count"),
            forks_count=int_field(raw, "forks_count"),
            watchers_count=int_field(raw, "watchers_count"),
            open_issues_count=int_field(raw, "open_issues_count"),
            # Placeholder, not a count (see module docstring)
            release_counter=1 if has_releases else 0,
            default_branch=str_field(raw, "default_branch"),
            archived=bool_field(raw, "archived"),
            created_at=str_field(raw, "created_at"),
            updated_at=str_field(raw, "updated_at"),
            owner=Owner(
                id=int_field(owner, "id"),
                login=owner_login,
                username=owner_login,
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
            has_releases=has_releases,
            has_packages=bool_field(raw, "has_packages"),
        )


# Register this provider when the module is imported
register_provider(ProviderType.GITHUB, GitHubProvider)
