"""Tests for the Maven repository client."""
from __future__ import annotations

import hashlib
from unittest.mock import patch

import pytest

from registry.maven.client import (
    MavenRepository,
    download_artifact,
    locate_repository,
    parse_metadata_versions,
    sha1_of,
)
from versioning.errors import RepositoryError
from versioning.parser import parse_coordinate

METADATA_XML = """<?xml version="1.0" encoding="UTF-8"?>
<metadata>
  <groupId>de.oceanlabs.mcp</groupId>
  <artifactId>mcp_config</artifactId>
  <versioning>
    <release>1.16.1</release>
    <versions>
      <version>1.15.0</version>
      <version>1.15.1</version>
      <version> 1.16.1 </version>
    </versions>
  </versioning>
</metadata>
"""


def _writes(data):
    """stream_to_file stand-in that stores data at the destination."""
    def _stream(url, destination, *, context):
        with open(destination, "wb") as fh:
            fh.write(data)
        return True
    return _stream


@pytest.fixture
def coord():
    return parse_coordinate("de.oceanlabs.mcp:mcp_config:1.15.+@zip")


@pytest.fixture
def repo():
    return MavenRepository("https://maven.example.com/maven/")


class TestUrls:
    """URL construction."""

    def test_metadata_url(self, repo, coord):
        assert repo.metadata_url(coord) == (
            "https://maven.example.com/maven/de/oceanlabs/mcp/mcp_config/maven-metadata.xml"
        )

    def test_artifact_url(self, repo, coord):
        resolved = coord.with_version("1.15.1")
        assert repo.artifact_url(resolved) == (
            "https://maven.example.com/maven/de/oceanlabs/mcp/mcp_config/1.15.1/mcp_config-1.15.1.zip"
        )

    def test_artifact_url_requires_version(self, repo):
        with pytest.raises(RepositoryError):
            repo.artifact_url(parse_coordinate("g:a"))


class TestMetadata:
    """maven-metadata.xml retrieval and parsing."""

    @patch("common.http_client.robust_get")
    def test_fetch_versions(self, mock_get, repo, coord):
        mock_get.return_value = (200, {}, METADATA_XML)
        assert repo.fetch_versions(coord) == ["1.15.0", "1.15.1", "1.16.1"]
        mock_get.assert_called_once_with(repo.metadata_url(coord))

    @patch("common.http_client.robust_get")
    def test_fetch_versions_http_error(self, mock_get, repo, coord):
        mock_get.return_value = (404, {}, "Not Found")
        with pytest.raises(RepositoryError):
            repo.fetch_versions(coord)

    def test_missing_version_list(self):
        with pytest.raises(RepositoryError):
            parse_metadata_versions("<metadata><versioning></versioning></metadata>")

    def test_empty_version_list(self):
        with pytest.raises(RepositoryError):
            parse_metadata_versions("<metadata><versioning><versions/></versioning></metadata>")

    def test_invalid_xml(self):
        with pytest.raises(RepositoryError):
            parse_metadata_versions("<metadata>")


class TestLocateRepository:
    """Repository failover."""

    @patch("common.http_client.safe_head")
    def test_first_hosting_repository_wins(self, mock_head, coord):
        mock_head.side_effect = [404, 200]
        repos = [MavenRepository("https://a.example.com"), MavenRepository("https://b.example.com")]
        assert locate_repository(repos, coord) is repos[1]

    @patch("common.http_client.safe_head")
    def test_no_repository(self, mock_head, coord):
        mock_head.return_value = 0
        with pytest.raises(RepositoryError) as excinfo:
            locate_repository([MavenRepository("https://a.example.com")], coord)
        assert "https://a.example.com" in str(excinfo.value)


class TestDownload:
    """Artifact download with SHA-1 reuse."""

    @patch("common.http_client.stream_to_file")
    def test_creates_directories(self, mock_stream, tmp_path):
        mock_stream.return_value = True
        dest = tmp_path / "a" / "b" / "file.jar"
        assert download_artifact("https://x/file.jar", str(dest)) is True
        assert dest.parent.is_dir()
        mock_stream.assert_called_once_with("https://x/file.jar", str(dest), context="maven")

    @patch("common.http_client.stream_to_file")
    def test_keeps_matching_file(self, mock_stream, tmp_path):
        dest = tmp_path / "file.jar"
        dest.write_bytes(b"payload")
        digest = hashlib.sha1(b"payload").hexdigest()
        assert download_artifact("https://x/file.jar", str(dest), expected_sha1=digest.upper()) is True
        mock_stream.assert_not_called()
        assert sha1_of(str(dest)) == digest

    @patch("common.http_client.stream_to_file")
    def test_replaces_mismatched_file(self, mock_stream, tmp_path):
        mock_stream.return_value = False
        dest = tmp_path / "file.jar"
        dest.write_bytes(b"stale")
        assert download_artifact("https://x/file.jar", str(dest), expected_sha1="0xdeadbeef") is False
        assert not dest.exists()
        mock_stream.assert_called_once()

    @patch("common.http_client.stream_to_file")
    def test_force_redownloads(self, mock_stream, tmp_path):
        mock_stream.side_effect = _writes(b"payload")
        dest = tmp_path / "file.jar"
        dest.write_bytes(b"payload")
        digest = hashlib.sha1(b"payload").hexdigest()
        assert download_artifact("https://x/file.jar", str(dest), expected_sha1=digest, force=True) is True
        mock_stream.assert_called_once()

    @patch("common.http_client.stream_to_file")
    def test_verifies_fresh_download(self, mock_stream, tmp_path):
        mock_stream.side_effect = _writes(b"payload")
        dest = tmp_path / "file.jar"
        digest = hashlib.sha1(b"payload").hexdigest()
        assert download_artifact("https://x/file.jar", str(dest), expected_sha1=digest) is True
        assert dest.read_bytes() == b"payload"

    @patch("common.http_client.stream_to_file")
    def test_rejects_corrupted_download(self, mock_stream, tmp_path):
        mock_stream.side_effect = _writes(b"truncated")
        dest = tmp_path / "file.jar"
        digest = hashlib.sha1(b"payload").hexdigest()
        assert download_artifact("https://x/file.jar", str(dest), expected_sha1=digest) is False
        assert not dest.exists()
