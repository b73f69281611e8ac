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

"""Git hosting providers for forgerelease.

Each provider knows one backend's REST URL layout and how to translate its
release and repository JSON into the canonical model. Providers register
themselves when their module is imported; importing this package makes all
of them available.

Available Providers:
    gitea : GiteaProvider
        Gitea and Forgejo instances. Fallback for unrecognized hosts.
    github : GitHubProvider
        github.com (rewritten to api.github.com) and compatible API roots.
    gitlab : GitLabProvider
        gitlab.com and self-hosted GitLab; /api/v4 is appended as needed.

Example:
    Resolve and use a provider directly:

        from forgerelease.providers import normalize_base_url, resolve_provider

        provider = resolve_provider(None, "https://gitlab.com")
        base = normalize_base_url("https://gitlab.com", provider.provider_type)
        print(provider.build_releases_url(base, "gitlab-org", "gitlab", False))

"""

# Import provider modules to trigger self-registration
from . import (
    gitea,  # noqa: F401
    github,  # noqa: F401
    gitlab,  # noqa: F401
)
from .base import (
    Provider,
    detect_provider,
    get_provider,
    normalize_base_url,
    register_provider,
    resolve_provider,
)
from .gitea import GiteaProvider
from .github import GitHubProvider
from .gitlab import GitLabProvider

__all__ = [
    "Provider",
    "GiteaProvider",
    "GitHubProvider",
    "GitLabProvider",
    "detect_provider",
    "get_provider",
    "normalize_base_url",
    "register_provider",
    "resolve_provider",
]
