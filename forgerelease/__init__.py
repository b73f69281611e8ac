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

"""
forgerelease - release and repository lookups for Git forges.

forgerelease fetches release and repository metadata from Gitea (and
Forgejo), GitHub and GitLab, and returns it in one canonical data model
whatever forge served it. It also compares version strings and turns the
result into an upgrade message, so an application can tell its users that
a newer release exists.

Features
--------
  - One Release / Repository model for three different REST APIs
  - Provider detection from the base URL, or an explicit choice
  - Version comparison tolerant of prefixes ("v", "release") and suffixes
  - Configurable upgrade messages with opt-in fail-fast policies
  - Asset download with atomic writes
  - YAML configuration with environment variable expansion

Quick Start
-----------
Latest release of a repository:

    $ forgerelease releases --base-url https://codeberg.org --user forgejo --repo forgejo --latest

Is my version current?

    $ forgerelease compare 1.2.0 v1.3.0 --upgrade-url https://example.com/download

For full CLI documentation:

    $ forgerelease --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    High-level fetch functions (get_releases, get_repositories).
models : module
    Canonical Release, Asset, Repository and related dataclasses.
providers : package
    Gitea, GitHub and GitLab mappings, registry and detection.
versioning : package
    Version comparison and upgrade messages.
io : package
    HTTP transport and binary download.
config : package
    YAML configuration loading.

Public API
----------
The primary interface is the library; the CLI wraps it:

    from forgerelease.core import ReleaseQuery, get_releases
    from forgerelease.versioning import check_version
    from forgerelease.io import HttpTransport, download_binary
    from forgerelease.config import load_config

For more details, see the individual module docstrings.

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Release and repository lookups for Gitea, GitHub and GitLab"

# Re-export commonly used functions for convenience
from forgerelease.config import load_config
from forgerelease.core import (
    ReleaseQuery,
    RepositoryQuery,
    filter_with_releases,
    get_releases,
    get_repositories,
)
from forgerelease.io import HttpTransport, download_binary
from forgerelease.models import ProviderType, Release, Repository
from forgerelease.versioning import check_version, compare_versions

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "ReleaseQuery",
    "RepositoryQuery",
    "get_releases",
    "get_repositories",
    "filter_with_releases",
    "HttpTransport",
    "download_binary",
    "load_config",
    "ProviderType",
    "Release",
    "Repository",
    "compare_versions",
    "check_version",
]
