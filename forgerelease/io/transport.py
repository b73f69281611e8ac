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

"""HTTP transport for forgerelease.

All network access goes through an HttpTransport instance. It is created by
the caller and passed in, so tests and embedding applications control the
timeout and static headers (for example an Authorization token) without
touching process-wide state.

Behavior:

- One fetch is exactly one GET. There are no retries: session adapters are
  mounted with max_retries=0.
- Only HTTP 200 counts as success. Any other status, redirects that end
  elsewhere than 200 included, raises HTTPStatusError.
- Connection failures, DNS errors and timeouts raise NetworkError chained
  to the underlying requests exception.
- Each request opens its own requests.Session, so one transport can be
  shared between threads.

Example:
    ```python
    from forgerelease.io import HttpTransport

    transport = HttpTransport(timeout=30, headers={"Authorization": "token abc"})
    body = transport.fetch("https://codeberg.org/api/v1/users/forgejo/repos")
    transport.set_timeout(None)  # back to the 15 second default
    ```

"""

from __future__ import annotations

from collections.abc import Mapping

import requests
from requests.adapters import HTTPAdapter

from forgerelease import __version__
from forgerelease.exceptions import HTTPStatusError, NetworkError

DEFAULT_TIMEOUT = 15
USER_AGENT = f"forgerelease/{__version__}"


def make_session(headers: Mapping[str, str] | None = None) -> requests.Session:
    """Create a requests.Session without retries.

    Sets a User-Agent (some forges reject anonymous clients) and a JSON
    Accept header, then applies any caller headers on top.
    """
    s = requests.Session()
    s.headers.update(
        {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
    )
    if headers:
        s.headers.update(headers)
    s.mount("http://", HTTPAdapter(max_retries=0))
    s.mount("https://", HTTPAdapter(max_retries=0))
    return s


def _effective_timeout(timeout: float | None) -> float:
    if timeout is None or timeout <= 0:
        return DEFAULT_TIMEOUT
    return timeout


class HttpTransport:
    """HTTP client with a reconfigurable per-request timeout.

    Args:
        timeout: Seconds per request. None or a non-positive value selects
            DEFAULT_TIMEOUT.
        headers: Static headers sent with every request.

    """

    def __init__(
        self,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._timeout = _effective_timeout(timeout)
        self.headers: dict[str, str] = dict(headers or {})

    @property
    def timeout(self) -> float:
        return self._timeout

    def set_timeout(self, timeout: float | None) -> None:
        """Change the timeout for subsequent requests (None or <= 0 resets)."""
        self._timeout = _effective_timeout(timeout)

    def session(self) -> requests.Session:
        """Open a new session carrying this transport's headers."""
        return make_session(self.headers)

    def get(
        self, session: requests.Session, url: str, *, stream: bool = False
    ) -> requests.Response:
        """Issue a GET on session and return the response once its status is 200.

        The session must stay open while a streamed response is read.

        Raises:
            NetworkError: On connection failure, DNS error or timeout.
            HTTPStatusError: If the final status is not 200.

        """
        from forgerelease.logging import get_global_logger

        logger = get_global_logger()
        logger.verbose("HTTP", f"GET {url}")
        logger.debug("HTTP", f"Timeout: {self._timeout}s")

        try:
            resp = session.get(url, timeout=self._timeout, stream=stream)
        except requests.RequestException as err:
            raise NetworkError(f"request failed for {url}: {err}") from err

        logger.verbose("HTTP", f"Response: {resp.status_code} {resp.reason}")

        if resp.status_code != 200:
            resp.close()
            raise HTTPStatusError(resp.status_code, resp.reason or "", url)

        return resp

    def fetch(self, url: str) -> bytes:
        """GET url and return the full response body.

        Raises:
            NetworkError: On connection failure, DNS error or timeout.
            HTTPStatusError: If the status is not 200.

        """
        from forgerelease.logging import get_global_logger

        with self.session() as session:
            resp = self.get(session, url)
            body = resp.content

        get_global_logger().debug("HTTP", f"Received {len(body)} bytes")
        return body
