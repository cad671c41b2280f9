"""Data models for versioning and artifact resolution."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .version import ParsedVersion, parse_version

DEFAULT_EXTENSION = "jar"


class ConstraintKind(Enum):
    """Resolution strategy derived from the version text."""
    EXACT = "exact"
    WILDCARD = "wildcard"
    SNAPSHOT = "snapshot"


@dataclass(frozen=True)
class VersionConstraint:
    """Target version plus how candidates are matched against it."""
    kind: ConstraintKind
    target: ParsedVersion

    @classmethod
    def exact(cls, version: str) -> "VersionConstraint":
        return cls(ConstraintKind.EXACT, parse_version(version))

    @classmethod
    def wildcard(cls, version: str) -> "VersionConstraint":
        return cls(ConstraintKind.WILDCARD, parse_version(version))

    @classmethod
    def snapshot(cls, version: str) -> "VersionConstraint":
        return cls(ConstraintKind.SNAPSHOT, parse_version(version))

    def __str__(self) -> str:
        return self.target.raw


@dataclass(frozen=True)
class ArtifactCoordinate:
    """Maven coordinate: group:name[:version[:classifier]][@extension]."""
    group: str
    name: str
    version: Optional[str] = None
    classifier: Optional[str] = None
    extension: str = DEFAULT_EXTENSION
    raw: Optional[str] = None

    @property
    def identifier(self) -> str:
        """Return "group:name", the key used for metadata lookups."""
        return f"{self.group}:{self.name}"

    def with_version(self, version: str) -> "ArtifactCoordinate":
        return replace(self, version=version)

    def file_name(self) -> str:
        """Return name-version[-classifier][.extension]."""
        parts = [self.name, "-", self.version or ""]
        if self.classifier:
            parts += ["-", self.classifier]
        if self.extension:
            parts += [".", self.extension]
        return "".join(parts)

    def group_path(self) -> str:
        return f"{self.group.replace('.', '/')}/{self.name}"

    def path(self) -> str:
        """Return the repository-relative path of the artifact file."""
        return f"{self.group_path()}/{self.version}/{self.file_name()}"

    def metadata_path(self) -> str:
        return f"{self.group_path()}/maven-metadata.xml"

    def __str__(self) -> str:
        text = self.identifier
        if self.version:
            text += f":{self.version}"
            if self.classifier:
                text += f":{self.classifier}"
        if self.extension and self.extension != DEFAULT_EXTENSION:
            text += f"@{self.extension}"
        return text


@dataclass
class ResolutionResult:
    """Resolution outcome to feed downstream output/logging."""
    identifier: str
    requested_spec: Optional[str]
    resolved_version: Optional[str]
    resolution_mode: Optional[ConstraintKind]
    candidate_count: int
    error: Optional[str]
