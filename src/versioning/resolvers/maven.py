"""Maven version resolver joining repository metadata and the version model."""

import logging
import os
from typing import Iterable, List, Optional, Sequence, Tuple

from constants import Constants
from common import http_client
from common.logging_utils import extra_context, is_debug_enabled
from registry.maven.client import MavenRepository, download_artifact, locate_repository
from ..cache import TTLCache
from ..errors import MavenPickError, UnsupportedSnapshot
from ..models import ArtifactCoordinate, ConstraintKind, ResolutionResult
from ..parser import parse_constraint
from ..resolver import resolve, resolve_latest

logger = logging.getLogger(__name__)


class MavenVersionResolver:
    """Resolve Maven coordinates against a repository's published versions."""

    def __init__(self, repository: MavenRepository, cache: Optional[TTLCache] = None):
        self.repository = repository
        self.cache = cache

    def fetch_candidates(self, coord: ArtifactCoordinate) -> List[str]:
        """Fetch version candidates from maven-metadata.xml, using the cache.

        Raises:
            RepositoryError: Metadata cannot be retrieved.
        """
        cache_key = f"maven:{self.repository.origin}:{coord.identifier}"
        if self.cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        versions = self.repository.fetch_versions(coord)
        if self.cache:
            self.cache.set(cache_key, versions, Constants.CANDIDATE_CACHE_TTL_SEC)
        return versions

    def pick(
        self, spec: Optional[str], candidates: Sequence[str]
    ) -> Tuple[Optional[str], int, Optional[str]]:
        """Apply Maven version rules to select a version.

        Args:
            spec: Requested version text; None selects the latest release
            candidates: Available version strings

        Returns:
            Tuple of (resolved_version, candidate_count, error_message)
        """
        try:
            if not spec:
                return resolve_latest(candidates).raw, len(candidates), None
            return resolve(candidates, parse_constraint(spec)).raw, len(candidates), None
        except MavenPickError as exc:
            return None, len(candidates), str(exc)

    def resolve_coordinate(self, coord: ArtifactCoordinate) -> ArtifactCoordinate:
        """Return the coordinate with its version made concrete.

        Exact versions pass through untouched; wildcard and missing versions
        are resolved from metadata.

        Raises:
            UnsupportedSnapshot: The coordinate requests a snapshot.
            ResolutionError, RepositoryError: Resolution failed.
        """
        if coord.version:
            constraint = parse_constraint(coord.version)
            if constraint.kind is ConstraintKind.SNAPSHOT:
                # Snapshot revisions need a hash check against the server copy.
                raise UnsupportedSnapshot(coord.version)
            if constraint.kind is ConstraintKind.EXACT:
                return coord
            resolved = resolve(self.fetch_candidates(coord), constraint)
        else:
            resolved = resolve_latest(self.fetch_candidates(coord))

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved version",
                extra=extra_context(
                    event="decision",
                    component="resolver",
                    action="resolve_coordinate",
                    target=coord.identifier,
                    outcome=resolved.raw
                )
            )
        return coord.with_version(resolved.raw)

    def resolve_result(self, coord: ArtifactCoordinate) -> ResolutionResult:
        """Resolve a coordinate into a ResolutionResult, never raising."""
        candidates: List[str] = []
        mode = None
        try:
            if coord.version:
                mode = parse_constraint(coord.version).kind
            candidates = self.fetch_candidates(coord)
            version, count, error = self.pick(coord.version, candidates)
        except MavenPickError as exc:
            version, count, error = None, len(candidates), str(exc)
        return ResolutionResult(
            identifier=coord.identifier,
            requested_spec=coord.version,
            resolved_version=version,
            resolution_mode=mode,
            candidate_count=count,
            error=error,
        )


def resolve_in_repositories(
    repositories: Iterable[MavenRepository],
    coord: ArtifactCoordinate,
    cache: Optional[TTLCache] = None,
) -> Tuple[MavenRepository, ArtifactCoordinate]:
    """Locate the hosting repository and make the coordinate's version concrete."""
    repository = locate_repository(repositories, coord)
    resolver = MavenVersionResolver(repository, cache)
    return repository, resolver.resolve_coordinate(coord)


def fetch_artifact(
    repository: MavenRepository,
    coord: ArtifactCoordinate,
    destination_dir: str,
    force: bool = False,
) -> Optional[str]:
    """Download a resolved coordinate below destination_dir.

    The repository's .sha1 sidecar, when published, decides whether an
    existing file is kept.

    Returns:
        The local file path, or None when the download failed.
    """
    url = repository.artifact_url(coord)
    status_code, _, text = http_client.robust_get(f"{url}.sha1")
    expected_sha1 = text.split()[0] if status_code == 200 and text.strip() else None

    destination = os.path.join(destination_dir, *coord.path().split("/"))
    if download_artifact(url, destination, expected_sha1=expected_sha1, force=force):
        return destination
    return None
