"""
Binary download for forgerelease.

Fetches a release asset (or any URL) to a caller-chosen file name.

Key Features:

- **Atomic Writes** - Streams to `<filename>.part` and renames it onto
  `<filename>` only after the whole body arrived, so a partial file never
  appears under the final name. The .part file is removed on failure.
- **Strict Status** - Only HTTP 200 is accepted, as for metadata fetches.
- **Shared Transport** - Uses the caller's HttpTransport, so the timeout and
  any Authorization header apply to downloads too.

Constants:

- DEFAULT_CHUNK (int): Stream chunk size (1 MiB).

Example:
Download the first asset of the latest release:

    >>> from pathlib import Path
    >>> from forgerelease.core import ReleaseQuery, get_releases
    >>> from forgerelease.io import download_binary
    >>> release = get_releases(ReleaseQuery(base, "forgejo", "forgejo", latest=True))[0]
    >>> asset = release.assets[0]
    >>> path = download_binary(asset.browser_download_url, Path("./downloads"), asset.name)

Notes:
- The output directory is created if missing
- An existing file with the same name is replaced
- Timeouts are per-request (connect and between reads), not total time
"""

from __future__ import annotations

from pathlib import Path
import time

import requests

from forgerelease.exceptions import NetworkError

from .transport import HttpTransport

# Stream size per chunk (1 MiB).
DEFAULT_CHUNK = 1024 * 1024


def download_binary(
    url: str,
    output_dir: str | Path,
    filename: str,
    *,
    transport: HttpTransport | None = None,
) -> Path:
    """Download url to output_dir/filename.

    Args:
        url: Source URL.
        output_dir: Folder to save into (created if missing).
        filename: Name of the file inside output_dir.
        transport: HTTP transport to use. A default HttpTransport is created
            when omitted.

    Returns:
        Path to the downloaded file.

    Raises:
        NetworkError: On connection failure, timeout, or a broken stream.
        HTTPStatusError: If the server does not answer 200.
        OSError: If the file cannot be written.

    """
    from forgerelease.logging import get_global_logger

    logger = get_global_logger()
    transport = transport or HttpTransport()

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / filename
    tmp = target.with_name(target.name + ".part")

    started_at = time.time()
    downloaded = 0

    with transport.session() as session:
        resp = transport.get(session, url, stream=True)
        logger.verbose("FILE", f"Downloading to: {tmp}")
        try:
            with tmp.open("wb") as f:
                for chunk in resp.iter_content(chunk_size=DEFAULT_CHUNK):
                    if not chunk:
                        continue
                    f.write(chunk)
                    downloaded += len(chunk)
        except requests.RequestException as err:
            tmp.unlink(missing_ok=True)
            raise NetworkError(f"download failed for {url}: {err}") from err
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        finally:
            resp.close()

    logger.verbose("FILE", f"Atomic rename: {tmp.name} -> {target.name}")
    tmp.replace(target)

    elapsed = time.time() - started_at
    logger.verbose(
        "FILE", f"Download complete: {target} ({downloaded} bytes in {elapsed:.1f}s)"
    )
    return target
