"""Input/Output operations for forgerelease.

This module provides the HTTP transport used for every API request and a
helper to download release assets.

Modules:

transport : module
    HttpTransport with a reconfigurable timeout, plus make_session().
download : module
    Streamed binary download with atomic writes.

Public API:

HttpTransport : class
    Injected HTTP client. Only HTTP 200 counts as success; no retries.
make_session : function
    requests.Session with forgerelease headers and retries disabled.
download_binary : function
    Download a URL to output_dir/filename.

Example:
    from forgerelease.io import HttpTransport, download_binary

    transport = HttpTransport(timeout=60)
    path = download_binary(
        "https://example.com/tool-linux-amd64",
        "./downloads",
        "tool",
        transport=transport,
    )

"""

from .download import download_binary
from .transport import DEFAULT_TIMEOUT, HttpTransport, make_session

__all__ = ["DEFAULT_TIMEOUT", "HttpTransport", "download_binary", "make_session"]
