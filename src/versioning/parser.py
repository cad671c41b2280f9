"""Coordinate and constraint parsing utilities for artifact resolution."""

import logging
from typing import Optional

from .errors import MalformedDescriptor
from .models import DEFAULT_EXTENSION, ArtifactCoordinate, ConstraintKind, VersionConstraint
from .resolver import is_snapshot, is_wildcard
from .version import parse_version

logger = logging.getLogger(__name__)

COORDINATE_FORMAT = "<group>:<name>[:<version>[:<classifier>]][@<extension>]"


def parse_constraint(version_text: str) -> VersionConstraint:
    """Classify version text as an exact, wildcard ('+') or snapshot constraint.

    Raises:
        MalformedVersion: If the text cannot be tokenized.
    """
    target = parse_version(version_text)
    if is_wildcard(target):
        return VersionConstraint(ConstraintKind.WILDCARD, target)
    if is_snapshot(target):
        return VersionConstraint(ConstraintKind.SNAPSHOT, target)
    return VersionConstraint(ConstraintKind.EXACT, target)


def _optional(field: str) -> Optional[str]:
    field = field.strip()
    return field or None


def parse_coordinate(descriptor: str) -> ArtifactCoordinate:
    """Parse group:name[:version[:classifier]][@extension].

    Fields beyond the classifier are ignored.

    Raises:
        MalformedDescriptor: Empty input, several '@' markers, or fewer than
            two colon-separated fields.
    """
    if descriptor is None or not descriptor.strip():
        raise MalformedDescriptor(descriptor or "", "coordinate is empty")
    raw = descriptor
    descriptor = descriptor.strip()

    extension = DEFAULT_EXTENSION
    if "@" in descriptor:
        parts = descriptor.split("@")
        if len(parts) > 2:
            raise MalformedDescriptor(raw, "cannot contain multiple '@' extensions")
        descriptor, extension = parts[0], parts[1].strip() or DEFAULT_EXTENSION

    fields = descriptor.split(":")
    if len(fields) < 2:
        raise MalformedDescriptor(raw, f"expected {COORDINATE_FORMAT}")

    group, name = fields[0].strip(), fields[1].strip()
    if not group or not name:
        raise MalformedDescriptor(raw, "group and name are required")

    version = _optional(fields[2]) if len(fields) >= 3 else None
    classifier = _optional(fields[3]) if len(fields) >= 4 else None
    if len(fields) > 4:
        logger.debug("Ignoring extra coordinate fields: %s", ":".join(fields[4:]))

    return ArtifactCoordinate(
        group=group,
        name=name,
        version=version,
        classifier=classifier,
        extension=extension,
        raw=raw,
    )
