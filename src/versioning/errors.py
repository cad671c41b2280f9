"""Error types raised by coordinate parsing, version parsing and resolution."""

from typing import Optional, Sequence, Tuple


class MavenPickError(Exception):
    """Base class for all mvnpick failures."""


class MalformedDescriptor(MavenPickError):
    """Artifact coordinate string cannot be split into its fields."""

    def __init__(self, descriptor: str, reason: str):
        self.descriptor = descriptor
        self.reason = reason
        super().__init__(f"Invalid artifact coordinate '{descriptor}': {reason}")


class MalformedVersion(MavenPickError):
    """Version string cannot be tokenized."""

    def __init__(self, raw: str, reason: str, offset: Optional[int] = None, fragment: Optional[str] = None):
        self.raw = raw
        self.reason = reason
        self.offset = offset
        self.fragment = fragment
        where = ""
        if offset is not None:
            where = f" at offset {offset} (\"{fragment or ''}\")"
        super().__init__(f"Invalid version '{raw}'{where}: {reason}")


class ResolutionError(MavenPickError):
    """A constraint could not be resolved against a candidate list.

    Carries the target text and every candidate considered so callers can
    report the full picture.
    """

    def __init__(self, message: str, target: Optional[str] = None, candidates: Sequence[str] = ()):
        self.target = target
        self.candidates: Tuple[str, ...] = tuple(candidates)
        super().__init__(message)


class EmptyVersionList(ResolutionError):
    """No candidate versions were supplied."""

    def __init__(self, target: Optional[str] = None):
        super().__init__("No versions available", target=target)


class NoMatchingVersion(ResolutionError):
    """No candidate satisfies the constraint."""

    def __init__(self, target: str, candidates: Sequence[str]):
        super().__init__(
            f"No version matching '{target}' among: {', '.join(candidates)}",
            target=target,
            candidates=candidates,
        )


class UnsupportedSnapshot(ResolutionError):
    """Snapshot constraints need server-side hash checks and are not resolved."""

    def __init__(self, target: str, candidates: Sequence[str] = ()):
        super().__init__(
            f"Snapshot version '{target}' resolution is not implemented",
            target=target,
            candidates=candidates,
        )


class RepositoryError(MavenPickError):
    """Repository lookup or metadata retrieval failed."""
