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

"""Exception hierarchy for forgerelease.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- ConfigError: Configuration-related errors (YAML parse, invalid values, unknown provider)
- NetworkError: Transport failures (DNS, connection refused, timeouts)
- HTTPStatusError: The server answered with anything other than HTTP 200
- ParseError: Response body is not the JSON shape the provider expects
- VersionPolicyViolation: An opt-in fail-fast version policy fired

All exceptions inherit from ForgeReleaseError, allowing users to catch all
forgerelease errors with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from forgerelease.core import ReleaseQuery, get_releases
        from forgerelease.exceptions import HTTPStatusError, ParseError

        try:
            releases = get_releases(
                ReleaseQuery("https://gitea.com", "earentir", "dirico")
            )
        except HTTPStatusError as e:
            print(f"Server said {e.status_code}")
        except ParseError as e:
            print(f"Unexpected payload: {e}")
        ```

    Catching all forgerelease errors:
        ```python
        from forgerelease.exceptions import ForgeReleaseError

        try:
            releases = get_releases(query)
        except ForgeReleaseError as e:
            print(f"forgerelease error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "ForgeReleaseError",
    "ConfigError",
    "NetworkError",
    "HTTPStatusError",
    "ParseError",
    "VersionPolicyViolation",
]


class ForgeReleaseError(Exception):
    """Base exception for all forgerelease errors.

    All forgerelease-specific exceptions inherit from this class, allowing
    users to catch all of them with a single except clause if needed.
    """

    pass


class ConfigError(ForgeReleaseError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - Configuration values of the wrong type
    - Missing configuration files
    - Unknown provider names passed to get_provider()
    """

    pass


class NetworkError(ForgeReleaseError):
    """Raised for transport-level failures.

    This exception is raised when the request never produced an HTTP
    response: DNS resolution failures, refused connections, timeouts and
    similar errors. The underlying requests exception is always chained.

    Example:
        Catching network errors:
            ```python
            from forgerelease.exceptions import NetworkError

            try:
                data = transport.fetch("https://gitea.example.com/api/v1/...")
            except NetworkError as e:
                print(f"Network error: {e}")
            ```
    """

    pass


class HTTPStatusError(NetworkError):
    """Raised when the server responds with a status other than HTTP 200.

    Attributes:
        status_code: HTTP status code returned by the server.
        reason: HTTP reason phrase (may be empty).
        url: URL that was requested.
    """

    def __init__(self, status_code: int, reason: str = "", url: str = "") -> None:
        self.status_code = status_code
        self.reason = reason or ""
        self.url = url
        text = f"Server response: {status_code} {self.reason}".rstrip()
        if url:
            text = f"{text} ({url})"
        super().__init__(text)


class ParseError(ForgeReleaseError):
    """Raised when a response body cannot be decoded into the provider's shape.

    Covers malformed JSON, an object where an array was expected (or the
    reverse), and fields holding the wrong JSON type. No partial decoding
    is attempted.
    """

    pass


class VersionPolicyViolation(ForgeReleaseError):
    """Raised when an opt-in fail-fast version policy fires.

    Replaces terminating the process from inside a library call. The caller
    decides what to do; the CLI prints the message and exits with
    exit_code.

    Attributes:
        message: The resolved human-readable message.
        verdict: Comparison result that triggered the policy (-1 or 1).
        exit_code: Suggested process exit status.

    Example:
        Handling a fail-fast policy:
            ```python
            from forgerelease.exceptions import VersionPolicyViolation
            from forgerelease.versioning import VersionOptions, check_version

            try:
                print(check_version("1.0.0", "1.1.0",
                                    options=VersionOptions(die_if_older=True)))
            except VersionPolicyViolation as e:
                print(e.message)
                raise SystemExit(e.exit_code)
            ```
    """

    exit_code = 125

    def __init__(self, message: str, verdict: int) -> None:
        self.message = message
        self.verdict = verdict
        super().__init__(message)
