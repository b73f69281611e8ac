"""
Tests for forgerelease.io.download module.

Tests download functionality including:
- Basic downloads to a chosen file name
- Output directory creation
- Atomic writes (no .part file left behind)
- Error handling for non-200 responses and broken streams
"""

from __future__ import annotations

from pathlib import Path

import pytest
import requests
import requests_mock

from forgerelease.exceptions import HTTPStatusError, NetworkError
from forgerelease.io import HttpTransport
from forgerelease.io.download import download_binary


def test_download_success(tmp_test_dir: Path) -> None:
    """Test basic successful download."""
    url = "https://example.com/releases/download/v1.0.0/tool-linux-amd64"
    data = b"\x7fELF binary content"

    with requests_mock.Mocker() as m:
        m.get(url, content=data, headers={"Content-Length": str(len(data))})
        path = download_binary(url, tmp_test_dir, "tool")

    assert path == tmp_test_dir / "tool"
    assert path.read_bytes() == data


def test_creates_output_dir(tmp_test_dir: Path) -> None:
    """Test that a missing output directory is created."""
    url = "https://example.com/file.bin"
    output_dir = tmp_test_dir / "nested" / "bin"

    with requests_mock.Mocker() as m:
        m.get(url, content=b"abc")
        path = download_binary(url, output_dir, "file.bin")

    assert output_dir.is_dir()
    assert path.read_bytes() == b"abc"


def test_atomic_write_leaves_no_part_file(tmp_test_dir: Path) -> None:
    """Test that only the final file remains after download."""
    url = "https://example.com/file.bin"

    with requests_mock.Mocker() as m:
        m.get(url, content=b"payload")
        download_binary(url, tmp_test_dir, "file.bin")

    assert sorted(p.name for p in tmp_test_dir.iterdir()) == ["file.bin"]


def test_replaces_existing_file(tmp_test_dir: Path) -> None:
    """Test that an existing file with the same name is replaced."""
    url = "https://example.com/file.bin"
    (tmp_test_dir / "file.bin").write_bytes(b"old")

    with requests_mock.Mocker() as m:
        m.get(url, content=b"new")
        path = download_binary(url, tmp_test_dir, "file.bin")

    assert path.read_bytes() == b"new"


def test_http_error_writes_nothing(tmp_test_dir: Path) -> None:
    """Test that a 404 raises and creates no file."""
    url = "https://example.com/missing.bin"

    with requests_mock.Mocker() as m:
        m.get(url, status_code=404)
        with pytest.raises(HTTPStatusError):
            download_binary(url, tmp_test_dir, "missing.bin")

    assert list(tmp_test_dir.iterdir()) == []


def test_broken_stream_cleans_part_file(tmp_test_dir: Path, monkeypatch) -> None:
    """Test that a failure mid-stream removes the partial file."""
    url = "https://example.com/file.bin"

    def broken_iter_content(self, chunk_size=1, decode_unicode=False):
        yield b"partial"
        raise requests.exceptions.ChunkedEncodingError("connection reset")

    monkeypatch.setattr(requests.Response, "iter_content", broken_iter_content)

    with requests_mock.Mocker() as m:
        m.get(url, content=b"partial and more")
        with pytest.raises(NetworkError):
            download_binary(url, tmp_test_dir, "file.bin")

    assert list(tmp_test_dir.iterdir()) == []


def test_uses_given_transport(tmp_test_dir: Path) -> None:
    """Test that the transport's timeout and headers are used."""
    url = "https://example.com/file.bin"
    transport = HttpTransport(timeout=42, headers={"Authorization": "Bearer x"})

    with requests_mock.Mocker() as m:
        m.get(url, content=b"abc")
        download_binary(url, tmp_test_dir, "file.bin", transport=transport)

    assert m.last_request.timeout == 42
    assert m.last_request.headers["Authorization"] == "Bearer x"
