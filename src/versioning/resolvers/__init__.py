"""Version resolvers for artifact repositories."""

from .maven import MavenVersionResolver, fetch_artifact, resolve_in_repositories

__all__ = [
    "MavenVersionResolver",
    "fetch_artifact",
    "resolve_in_repositories",
]
