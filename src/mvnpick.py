"""mvnpick - Maven artifact version ordering and resolution

    Returns:
        int: Exit code
"""
import logging
import os
import sys

import yaml

from args import parse_args
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes, _load_yaml_config, apply_config
from registry.maven.client import MavenRepository
from versioning.errors import (
    MalformedDescriptor,
    MalformedVersion,
    MavenPickError,
    RepositoryError,
    ResolutionError,
)
from versioning.parser import parse_coordinate, parse_constraint
from versioning.resolver import resolve, resolve_latest
from versioning.resolvers.maven import fetch_artifact, resolve_in_repositories
from versioning.version import compare, parse_version

logger = logging.getLogger(__name__)

_SYMBOLS = {-1: "<", 0: "=", 1: ">"}


def load_versions_file(file_name):
    """Loads candidate versions from a file, one per line.

    Blank lines and '#' comments are skipped.

    Args:
        file_name (str): File path containing the list of versions.

    Returns:
        list: Version strings
    """
    with open(file_name, encoding='utf-8') as file:
        return [line.strip() for line in file if line.strip() and not line.strip().startswith("#")]


def _setup_logging(args):
    """Configure logging based on CLI arguments."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ['MVNPICK_LOG_LEVEL'] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def _apply_overrides(args):
    """Apply config file settings, then CLI flags (highest precedence)."""
    apply_config(_load_yaml_config(getattr(args, "CONFIG", None)))
    if getattr(args, "TIMEOUT", None) is not None:
        Constants.REQUEST_TIMEOUT = args.TIMEOUT


def _repositories(args):
    urls = getattr(args, "REPOSITORIES", None) or Constants.REPOSITORIES
    return [MavenRepository(url) for url in urls]


def run_compare(args):
    """Print the ordering between two versions."""
    left = parse_version(args.LEFT)
    right = parse_version(args.RIGHT)
    result = compare(left, right)
    print(f"{left.raw} {_SYMBOLS[result]} {right.raw}")
    print(f"  {left.canonical} {_SYMBOLS[result]} {right.canonical}")
    return ExitCodes.SUCCESS


def run_pick(args):
    """Resolve a version constraint against versions given on the command line or in a file."""
    candidates = list(args.VERSIONS)
    if args.LIST_FROM_FILE:
        candidates.extend(load_versions_file(args.LIST_FROM_FILE))

    if args.SPEC.lower() == "latest":
        picked = resolve_latest(candidates)
    else:
        picked = resolve(candidates, parse_constraint(args.SPEC))
    print(picked.raw)
    return ExitCodes.SUCCESS


def run_resolve(args):
    """Resolve a coordinate to a concrete version using remote metadata."""
    coord = parse_coordinate(args.COORDINATE)
    repository, resolved = resolve_in_repositories(_repositories(args), coord)
    if args.PRINT_URL:
        print(repository.artifact_url(resolved))
    else:
        print(resolved)
    return ExitCodes.SUCCESS


def run_download(args):
    """Resolve a coordinate and download the artifact."""
    coord = parse_coordinate(args.COORDINATE)
    repository, resolved = resolve_in_repositories(_repositories(args), coord)
    path = fetch_artifact(repository, resolved, args.OUTPUT, force=args.FORCE)
    if path is None:
        logger.error("Failed to download %s", resolved)
        return ExitCodes.CONNECTION_ERROR
    print(path)
    return ExitCodes.SUCCESS


_ACTIONS = {
    "compare": run_compare,
    "pick": run_pick,
    "resolve": run_resolve,
    "download": run_download,
}


def _report(exc):
    """Log a failure with the offending input and candidate list."""
    if isinstance(exc, ResolutionError) and exc.candidates:
        logger.error("%s (target: %s; candidates: %s)", exc, exc.target, ", ".join(exc.candidates))
    else:
        logger.error("%s", exc)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    try:
        _apply_overrides(args)
        code = _ACTIONS[args.action](args)
    except (OSError, yaml.YAMLError, ValueError) as exc:
        # ValueError also covers json.JSONDecodeError from JSON config files.
        logger.error("Unable to read input: %s", exc)
        code = ExitCodes.FILE_ERROR
    except (MalformedDescriptor, MalformedVersion) as exc:
        _report(exc)
        code = ExitCodes.USAGE_ERROR
    except RepositoryError as exc:
        _report(exc)
        code = ExitCodes.CONNECTION_ERROR
    except MavenPickError as exc:
        _report(exc)
        code = ExitCodes.RESOLUTION_ERROR

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(event="function_exit", component="cli", action=args.action, outcome=code.name)
        )
    return code.value


if __name__ == "__main__":
    sys.exit(main())
