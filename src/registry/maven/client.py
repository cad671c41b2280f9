"""Maven repository client: metadata lookup, repository failover and downloads."""
from __future__ import annotations

import hashlib
import logging
import os
import xml.etree.ElementTree as ET
from typing import Iterable, List, Optional

from constants import Constants
from common import http_client
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from versioning.errors import RepositoryError
from versioning.models import ArtifactCoordinate

logger = logging.getLogger(__name__)


def parse_metadata_versions(text: str) -> List[str]:
    """Extract versioning/versions/version entries from maven-metadata.xml.

    Raises:
        RepositoryError: The document is not XML or has no version list.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise RepositoryError(f"Invalid {Constants.METADATA_FILE}: {exc}") from exc

    versions_elem = root.find("versioning/versions")
    if versions_elem is None:
        raise RepositoryError(f"Invalid {Constants.METADATA_FILE} file, missing version list")

    versions = [elem.text.strip() for elem in versions_elem.findall("version") if elem.text and elem.text.strip()]
    if not versions:
        raise RepositoryError(f"Invalid {Constants.METADATA_FILE} file, empty version list")
    return versions


class MavenRepository:
    """A remote Maven repository rooted at an origin URL."""

    def __init__(self, origin: str):
        self.origin = origin.rstrip("/")

    def __repr__(self) -> str:
        return f"MavenRepository({self.origin!r})"

    def metadata_url(self, coord: ArtifactCoordinate) -> str:
        return f"{self.origin}/{coord.metadata_path()}"

    def artifact_url(self, coord: ArtifactCoordinate) -> str:
        if not coord.version:
            raise RepositoryError(f"Cannot build an artifact URL without a version: {coord}")
        return f"{self.origin}/{coord.path()}"

    def exists(self, coord: ArtifactCoordinate) -> bool:
        """Return True when the artifact's metadata answers a HEAD probe."""
        status = http_client.safe_head(self.metadata_url(coord), context="maven")
        return 0 < status < 400

    def fetch_versions(self, coord: ArtifactCoordinate) -> List[str]:
        """Fetch every published version of the artifact.

        Raises:
            RepositoryError: Metadata cannot be retrieved or holds no versions.
        """
        url = self.metadata_url(coord)
        status_code, _, text = http_client.robust_get(url)
        if status_code != 200 or not text:
            logger.warning(
                "HTTP non-2xx handled",
                extra=extra_context(
                    event="http_response",
                    outcome="handled_non_2xx",
                    status_code=status_code,
                    target=safe_url(url),
                    package_manager="maven"
                )
            )
            raise RepositoryError(f"Unable to fetch metadata for {coord.identifier} from {safe_url(url)} (HTTP {status_code})")

        versions = parse_metadata_versions(text)
        if is_debug_enabled(logger):
            logger.debug(
                "Fetched Maven metadata",
                extra=extra_context(
                    event="function_exit",
                    component="client",
                    action="fetch_versions",
                    count=len(versions),
                    package_manager="maven"
                )
            )
        return versions


def locate_repository(repositories: Iterable[MavenRepository], coord: ArtifactCoordinate) -> MavenRepository:
    """Return the first repository hosting the artifact.

    Raises:
        RepositoryError: No repository answers for the artifact.
    """
    tried = []
    for repo in repositories:
        tried.append(repo.origin)
        if repo.exists(coord):
            logger.debug("Located %s in %s", coord.identifier, repo.origin)
            return repo
        logger.debug("%s not found in %s", coord.identifier, repo.origin)
    raise RepositoryError(
        f"Unable to find package ({coord.identifier}) in any of the known repositories: {', '.join(tried)}"
    )


def sha1_of(path: str) -> str:
    digest = hashlib.sha1()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(Constants.DOWNLOAD_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _normalize_hash(value: str) -> str:
    value = value.strip().lower()
    return value[2:] if value.startswith("0x") else value


def download_artifact(
    url: str,
    destination: str,
    *,
    expected_sha1: Optional[str] = None,
    force: bool = False,
) -> bool:
    """Download url to destination, creating parent directories.

    An existing file is kept when expected_sha1 matches it and force is off;
    otherwise it is replaced. A fresh download that does not match
    expected_sha1 is deleted.

    Returns:
        True when the file is in place, False when the download failed.
    """
    dest_dir = os.path.dirname(destination)
    if dest_dir:
        os.makedirs(dest_dir, exist_ok=True)

    if os.path.exists(destination):
        if not force and expected_sha1 and sha1_of(destination) == _normalize_hash(expected_sha1):
            logger.info("Already downloaded: %s", destination)
            return True
        os.remove(destination)

    logger.info("Downloading %s", safe_url(url))
    if not http_client.stream_to_file(url, destination, context="maven"):
        return False

    if expected_sha1:
        actual = sha1_of(destination)
        if actual != _normalize_hash(expected_sha1):
            logger.error("SHA-1 mismatch for %s: expected %s, got %s", destination, expected_sha1, actual)
            os.remove(destination)
            return False
    return True
