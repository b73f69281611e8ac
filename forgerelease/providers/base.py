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

"""Provider base protocol and registry for forgerelease.

This module defines the foundational components for the provider system:

- Provider protocol: Interface that every Git hosting backend implements
- Provider registry: Dict mapping ProviderType to implementations
- Registration and lookup functions: register_provider() and get_provider()
- Resolution: resolve_provider() picks a backend from a hint or the base URL
- normalize_base_url(): canonical API root for each backend
- JSON field readers shared by the provider modules

Supported backends:

- gitea: Gitea / Forgejo instances (/api/v1)
- github: github.com and GitHub Enterprise-style roots
- gitlab: gitlab.com and self-hosted GitLab (/api/v4)

Design Philosophy:
    - Providers are Protocol classes (structural subtyping, not inheritance)
    - Registration happens at module import time (providers self-register)
    - The set of backends is closed: ProviderType enumerates it
    - Each provider is stateless and can be instantiated on-demand

Detection Order:
    GitHub is tested first, then GitLab. Gitea is the fallback and never
    competes: its own detector is simply "not GitHub and not GitLab", so
    resolution always yields a provider.

Example:
    Pick a provider without fetching anything:
        ```python
        from forgerelease.providers import detect_provider, resolve_provider

        detect_provider("https://gitlab.example.org")  # ProviderType.GITLAB
        provider = resolve_provider(None, "https://codeberg.org")
        provider.build_releases_url("https://codeberg.org", "forgejo", "forgejo", True)
        # 'https://codeberg.org/api/v1/repos/forgejo/forgejo/releases/latest'
        ```

"""

from __future__ import annotations

import json
import re
from typing import Any, ClassVar, Protocol
from urllib.parse import urlsplit, urlunsplit

from forgerelease.exceptions import ConfigError, ParseError
from forgerelease.models import ProviderType, Release, Repository

# -------------------------------
# Provider Protocol
# -------------------------------


class Provider(Protocol):
    """Protocol for Git hosting backends.

    Each provider knows the URL layout of its REST API and how to map its
    native release and repository JSON into the canonical model.
    """

    provider_type: ClassVar[ProviderType]

    def build_releases_url(
        self, base_url: str, user: str, repo: str, latest: bool
    ) -> str:
        """Build the API URL listing releases (or the latest release).

        Args:
            base_url: API root, already passed through normalize_base_url().
            user: Owner (user or organization) of the repository.
            repo: Repository name.
            latest: If True, address only the latest release where the
                backend supports it.

        Returns:
            Absolute URL to GET.
        """
        ...

    def build_repositories_url(self, base_url: str, user: str) -> str:
        """Build the API URL listing a user's repositories."""
        ...

    def normalize_releases(self, data: bytes, latest: bool) -> list[Release]:
        """Convert a release response body into canonical releases.

        Args:
            data: Raw response body.
            latest: Whether the body answers a "latest release" request.

        Returns:
            Releases in backend order.

        Raises:
            ParseError: If the body is not the JSON shape this backend returns.
        """
        ...

    def normalize_repositories(self, data: bytes) -> list[Repository]:
        """Convert a repository listing body into canonical repositories.

        Raises:
            ParseError: If the body is not the JSON shape this backend returns.
        """
        ...

    def detect(self, base_url: str) -> bool:
        """Return True if base_url looks like an instance of this backend."""
        ...


# -------------------------------
# Provider Registry
# -------------------------------

_PROVIDER_REGISTRY: dict[ProviderType, type[Provider]] = {}

# Gitea is the fallback and is never tested here.
_DETECTION_ORDER: tuple[ProviderType, ...] = (ProviderType.GITHUB, ProviderType.GITLAB)


def register_provider(provider_type: ProviderType, provider_class: type[Provider]) -> None:
    """Register a provider implementation for a backend type.

    Called at module level by each provider module. Registering the same
    type twice overwrites the previous registration (allows monkey-patching
    for tests).

    Args:
        provider_type: Backend this class implements.
        provider_class: Class implementing the Provider protocol.

    """
    _PROVIDER_REGISTRY[provider_type] = provider_class


def _as_provider_type(name: ProviderType | str) -> ProviderType | None:
    if isinstance(name, ProviderType):
        return name
    try:
        return ProviderType(str(name).strip().lower())
    except ValueError:
        return None


def get_provider(name: ProviderType | str) -> Provider:
    """Get a provider instance by type or name.

    Providers are stateless, so a new instance is created for each call.

    Args:
        name: ProviderType member or its value ("gitea", "github",
            "gitlab"). Case-insensitive.

    Returns:
        A new instance of the requested provider.

    Raises:
        ConfigError: If the name is not a registered provider. The error
            message lists the available providers.

    Example:
        ```python
        from forgerelease.providers import get_provider

        provider = get_provider("gitlab")
        provider.build_repositories_url("https://gitlab.com/api/v4", "gitlab-org")
        # 'https://gitlab.com/api/v4/users/gitlab-org/projects'
        ```

    """
    provider_type = _as_provider_type(name)
    if provider_type is None or provider_type not in _PROVIDER_REGISTRY:
        available = ", ".join(t.value for t in _PROVIDER_REGISTRY)
        raise ConfigError(
            f"Unknown provider: {name!r}. Available: {available or '(none)'}"
        )
    return _PROVIDER_REGISTRY[provider_type]()


def detect_provider(base_url: str) -> ProviderType:
    """Detect the backend type from a base URL.

    Args:
        base_url: Instance or API root URL.

    Returns:
        GITHUB or GITLAB if their detectors match (in that order), else GITEA.

    """
    for provider_type in _DETECTION_ORDER:
        provider_class = _PROVIDER_REGISTRY.get(provider_type)
        if provider_class is not None and provider_class().detect(base_url):
            return provider_type
    return ProviderType.GITEA


def resolve_provider(hint: ProviderType | str | None, base_url: str) -> Provider:
    """Choose the provider for a request.

    A non-empty hint naming a known backend wins without detection. An
    empty or unknown hint falls back to detect_provider(); unknown hints
    are reported as a warning.

    Args:
        hint: Explicit provider choice, or None/"" to auto-detect.
        base_url: Base URL used for detection.

    Returns:
        A provider instance. Never raises.

    """
    from forgerelease.logging import get_global_logger

    logger = get_global_logger()

    if hint:
        provider_type = _as_provider_type(hint)
        if provider_type is not None and provider_type in _PROVIDER_REGISTRY:
            logger.verbose("PROVIDER", f"Using explicit provider: {provider_type}")
            return _PROVIDER_REGISTRY[provider_type]()
        logger.warning(
            "PROVIDER", f"Unknown provider {hint!r}, detecting from base URL"
        )

    provider_type = detect_provider(base_url)
    logger.verbose("PROVIDER", f"Detected provider {provider_type} for {base_url}")
    return get_provider(provider_type)


# -------------------------------
# Base URL normalization
# -------------------------------

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_GITHUB_WEB_HOSTS = {"github.com", "www.github.com"}


def _ensure_scheme(url: str) -> str:
    return url if _SCHEME.match(url) else f"https://{url}"


def normalize_base_url(base_url: str, provider_type: ProviderType | str) -> str:
    """Return the API root to build request URLs on.

    - All backends: surrounding whitespace and trailing slashes removed.
    - GitHub: https:// added when no scheme is given; the github.com web
      host is rewritten to api.github.com.
    - GitLab: https:// added when no scheme is given; /api/v4 appended
      unless already present.
    - Gitea: unchanged otherwise (the /api/v1 segment is part of each
      endpoint path).

    Example:
        ```python
        normalize_base_url("github.com/", "github")        # 'https://api.github.com'
        normalize_base_url("https://gitlab.com", "gitlab") # 'https://gitlab.com/api/v4'
        ```

    """
    url = base_url.strip().rstrip("/")
    provider_type = _as_provider_type(provider_type) or ProviderType.GITEA

    if provider_type is ProviderType.GITHUB:
        url = _ensure_scheme(url)
        parts = urlsplit(url)
        if parts.netloc.lower() in _GITHUB_WEB_HOSTS:
            url = urlunsplit(parts._replace(netloc="api.github.com"))
    elif provider_type is ProviderType.GITLAB:
        url = _ensure_scheme(url)
        if "/api/v4" not in url:
            url = f"{url}/api/v4"

    return url


# -------------------------------
# JSON field readers
# -------------------------------


def load_json(data: bytes | str, expected: type, what: str) -> Any:
    """Decode a response body and check its top-level shape.

    A JSON null decodes to an empty value of the expected type.

    Raises:
        ParseError: On malformed JSON or a top-level value of another type.
    """
    try:
        payload = json.loads(data)
    except ValueError as err:
        raise ParseError(f"parse JSON: {err}") from err
    if payload is None:
        return expected()
    if not isinstance(payload, expected):
        raise ParseError(
            f"parse JSON: expected {what}, got {type(payload).__name__}"
        )
    return payload


def _field(obj: dict[str, Any], key: str, types: tuple[type, ...], zero: Any) -> Any:
    value = obj.get(key)
    if value is None:
        return zero
    # bool is an int subclass; never accept it for numeric fields
    if isinstance(value, types) and not (isinstance(value, bool) and bool not in types):
        return value
    raise ParseError(
        f"parse JSON: field {key!r} has type {type(value).__name__}, "
        f"expected {'/'.join(t.__name__ for t in types)}"
    )


def str_field(obj: dict[str, Any], key: str) -> str:
    """Read a string field; missing or null gives ""."""
    return _field(obj, key, (str,), "")


def int_field(obj: dict[str, Any], key: str) -> int:
    """Read an integer field; missing or null gives 0."""
    return _field(obj, key, (int,), 0)


def bool_field(obj: dict[str, Any], key: str) -> bool:
    """Read a boolean field; missing or null gives False."""
    return _field(obj, key, (bool,), False)


def obj_field(obj: dict[str, Any], key: str) -> dict[str, Any]:
    """Read a nested object; missing or null gives {}."""
    return _field(obj, key, (dict,), {})


def list_field(obj: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Read an array of objects; missing or null gives []."""
    items = _field(obj, key, (list,), [])
    return [require_object(item, key) for item in items]


def require_object(item: Any, where: str) -> dict[str, Any]:
    """Check that an array element is a JSON object."""
    if not isinstance(item, dict):
        raise ParseError(
            f"parse JSON: expected object in {where!r}, got {type(item).__name__}"
        )
    return item
