"""
Pytest configuration and shared fixtures for forgerelease tests.

This module provides reusable fixtures and test utilities used across
the test suite: temporary directories, a YAML file factory, and JSON
payloads shaped like the responses of each forge's REST API.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from forgerelease.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Restore the silent global logger after every test."""
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("test.yaml", {"key": "value"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


# -------------------------------
# Gitea payloads
# -------------------------------


@pytest.fixture
def gitea_release() -> dict[str, Any]:
    """Provide a Gitea release object with one attachment."""
    return {
        "id": 1,
        "tag_name": "v1.0.0",
        "name": "Release 1.0.0",
        "body": "First release\nwith notes",
        "url": "https://gitea.example.com/api/v1/repos/testuser/testrepo/releases/1",
        "html_url": "https://gitea.example.com/testuser/testrepo/releases/tag/v1.0.0",
        "tarball_url": "https://gitea.example.com/testuser/testrepo/archive/v1.0.0.tar.gz",
        "zipball_url": "https://gitea.example.com/testuser/testrepo/archive/v1.0.0.zip",
        "draft": False,
        "prerelease": False,
        "created_at": "2023-01-01T00:00:00Z",
        "published_at": "2023-01-01T00:00:00Z",
        "author": {
            "id": 1,
            "login": "testuser",
            "login_name": "",
            "full_name": "Test User",
            "email": "test@example.com",
            "username": "testuser",
        },
        "assets": [
            {
                "id": 10,
                "name": "tool-linux-amd64",
                "size": 2048,
                "download_count": 7,
                "created_at": "2023-01-01T00:00:00Z",
                "uuid": "0b7c3c8e-1d1f-4a36-9b0a-5e0f3f1c2d3e",
                "browser_download_url": "https://gitea.example.com/attachments/0b7c3c8e",
                "type": "attachment",
            }
        ],
    }


@pytest.fixture
def gitea_repos() -> list[dict[str, Any]]:
    """Provide two Gitea repositories, only the first with releases."""
    owner = {
        "id": 1,
        "login": "testuser",
        "username": "testuser",
        "full_name": "Test User",
        "email": "test@example.com",
        "avatar_url": "https://gitea.example.com/avatars/1",
    }
    return [
        {
            "id": 1,
            "name": "repo1",
            "full_name": "testuser/repo1",
            "description": "Test repo 1",
            "private": False,
            "fork": False,
            "size": 1000,
            "language": "Go",
            "html_url": "https://gitea.example.com/testuser/repo1",
            "clone_url": "https://gitea.example.com/testuser/repo1.git",
            "ssh_url": "git@gitea.example.com:testuser/repo1.git",
            "stars_count": 10,
            "forks_count": 5,
            "watchers_count": 3,
            "open_issues_count": 2,
            "release_counter": 2,
            "default_branch": "main",
            "archived": False,
            "created_at": "2023-01-01T00:00:00Z",
            "updated_at": "2023-01-02T00:00:00Z",
            "owner": owner,
            "permissions": {"admin": True, "push": True, "pull": True},
            "has_issues": True,
            "has_wiki": True,
            "has_projects": False,
            "has_releases": True,
            "has_packages": False,
        },
        {
            "id": 2,
            "name": "repo2",
            "full_name": "testuser/repo2",
            "private": True,
            "release_counter": 0,
            "owner": owner,
            "permissions": {"admin": False, "push": False, "pull": True},
        },
    ]


# -------------------------------
# GitHub payloads
# -------------------------------


@pytest.fixture
def github_release() -> dict[str, Any]:
    """Provide a GitHub release object with one asset."""
    return {
        "id": 123456,
        "tag_name": "v2.1.0",
        "name": "v2.1.0",
        "body": "Changes:\n- fix",
        "url": "https://api.github.com/repos/testuser/testrepo/releases/123456",
        "html_url": "https://github.com/testuser/testrepo/releases/tag/v2.1.0",
        "tarball_url": "https://api.github.com/repos/testuser/testrepo/tarball/v2.1.0",
        "zipball_url": "https://api.github.com/repos/testuser/testrepo/zipball/v2.1.0",
        "draft": False,
        "prerelease": True,
        "created_at": "2024-03-01T10:00:00Z",
        "published_at": "2024-03-01T11:00:00Z",
        "author": {"login": "octocat", "id": 1, "type": "User"},
        "assets": [
            {
                "id": 99,
                "name": "tool.zip",
                "size": 4096,
                "download_count": 42,
                "created_at": "2024-03-01T10:30:00Z",
                "content_type": "application/zip",
                "browser_download_url": "https://github.com/testuser/testrepo/releases/download/v2.1.0/tool.zip",
            }
        ],
    }


@pytest.fixture
def github_repos() -> list[dict[str, Any]]:
    """Provide GitHub repositories with and without releases."""
    return [
        {
            "id": 1,
            "name": "with-releases",
            "full_name": "testuser/with-releases",
            "private": False,
            "stargazers_count": 100,
            "watchers_count": 100,
            "has_releases": True,
            "owner": {"id": 7, "login": "testuser", "avatar_url": "https://a/7"},
            "permissions": {"admin": False, "push": False, "pull": True},
        },
        {
            "id": 2,
            "name": "no-releases",
            "full_name": "testuser/no-releases",
            "stargazers_count": 1,
            "has_releases": False,
            "owner": {"id": 7, "login": "testuser"},
        },
    ]


# -------------------------------
# GitLab payloads
# -------------------------------


@pytest.fixture
def gitlab_release() -> dict[str, Any]:
    """Provide a GitLab release with one link and a tar.gz source."""
    return {
        "tag_name": "v1.0.0",
        "name": "Release 1.0.0",
        "description": "Test release",
        "created_at": "2023-01-01T00:00:00Z",
        "released_at": "2023-01-01T00:00:00Z",
        "author": {
            "id": 1,
            "username": "testuser",
            "name": "Test User",
            "email": "test@example.com",
            "avatar_url": "https://gitlab.com/testuser.png",
        },
        "commit": {"id": "abc123", "short_id": "abc123", "title": "Initial commit"},
        "milestones": [],
        "commit_path": "/testuser/testrepo/-/commit/abc123",
        "tag_path": "/testuser/testrepo/-/tags/v1.0.0",
        "assets": {
            "count": 1,
            "links": [
                {
                    "id": 1,
                    "name": "binary.tar.gz",
                    "url": "https://gitlab.com/testuser/testrepo/-/releases/v1.0.0/downloads/binary.tar.gz",
                    "direct_asset_url": "https://gitlab.com/testuser/testrepo/-/releases/v1.0.0/downloads/binary.tar.gz",
                    "link_type": "other",
                }
            ],
            "sources": [
                {
                    "format": "tar.gz",
                    "url": "https://gitlab.com/testuser/testrepo/-/archive/v1.0.0/testrepo-v1.0.0.tar.gz",
                },
                {
                    "format": "zip",
                    "url": "https://gitlab.com/testuser/testrepo/-/archive/v1.0.0/testrepo-v1.0.0.zip",
                },
            ],
        },
        "evidences": [],
        "_links": {
            "self": "https://gitlab.com/api/v4/projects/testuser%2Ftestrepo/releases/v1.0.0",
            "edit_url": "https://gitlab.com/testuser/testrepo/-/releases/v1.0.0/edit",
        },
    }


@pytest.fixture
def gitlab_projects() -> list[dict[str, Any]]:
    """Provide GitLab projects with project and group access levels."""
    owner = {
        "id": 1,
        "username": "testuser",
        "name": "Test User",
        "avatar_url": "https://gitlab.com/testuser.png",
    }
    return [
        {
            "id": 1,
            "name": "repo1",
            "path": "repo1",
            "path_with_namespace": "testuser/repo1",
            "description": "Test repo 1",
            "visibility": "public",
            "fork": False,
            "size": 1024000,
            "language": "Go",
            "web_url": "https://gitlab.com/testuser/repo1",
            "ssh_url_to_repo": "git@gitlab.com:testuser/repo1.git",
            "http_url_to_repo": "https://gitlab.com/testuser/repo1.git",
            "star_count": 10,
            "forks_count": 5,
            "open_issues_count": 2,
            "default_branch": "main",
            "archived": False,
            "created_at": "2023-01-01T00:00:00Z",
            "last_activity_at": "2023-01-02T00:00:00Z",
            "owner": owner,
            "permissions": {"project_access": {"access_level": 40}, "group_access": None},
        },
        {
            "id": 2,
            "name": "repo2",
            "path_with_namespace": "testuser/repo2",
            "visibility": "private",
            "size": 2048000,
            "star_count": 20,
            "owner": owner,
            "permissions": {"project_access": None, "group_access": {"access_level": 50}},
        },
    ]
