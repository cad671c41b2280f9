"""Argument parsing functionality for mvnpick."""

import argparse


def _add_common_options(parser):
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)


def _add_repository_options(parser):
    parser.add_argument("-r", "--repository",
                        dest="REPOSITORIES",
                        help="Maven repository base URL (repeatable; defaults to configured repositories)",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help="HTTP timeout in seconds",
                        action="store",
                        type=int)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="mvnpick",
        description="mvnpick - Maven artifact version ordering and resolution",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", required=True)

    compare_parser = subparsers.add_parser("compare", help="Compare two version strings")
    compare_parser.add_argument("LEFT", help="Left-hand version")
    compare_parser.add_argument("RIGHT", help="Right-hand version")
    _add_common_options(compare_parser)

    pick_parser = subparsers.add_parser("pick", help="Resolve a version constraint against given versions")
    pick_parser.add_argument("SPEC", help="Version spec, e.g. 1.5.+ or 2.0.1; 'latest' picks the highest release")
    pick_parser.add_argument("VERSIONS", nargs="*", help="Candidate versions")
    pick_parser.add_argument("-l", "--load_list",
                             dest="LIST_FROM_FILE",
                             help="Load candidate versions from a file, one per line",
                             action="store",
                             type=str)
    _add_common_options(pick_parser)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a coordinate against repositories")
    resolve_parser.add_argument("COORDINATE", help="group:name[:version[:classifier]][@extension]")
    resolve_parser.add_argument("--url",
                                dest="PRINT_URL",
                                help="Print the artifact URL instead of the coordinate",
                                action="store_true")
    _add_repository_options(resolve_parser)
    _add_common_options(resolve_parser)

    download_parser = subparsers.add_parser("download", help="Resolve and download an artifact")
    download_parser.add_argument("COORDINATE", help="group:name[:version[:classifier]][@extension]")
    download_parser.add_argument("-o", "--output",
                                 dest="OUTPUT",
                                 help="Destination directory (default: current directory)",
                                 action="store",
                                 type=str,
                                 default=".")
    download_parser.add_argument("-f", "--force",
                                 dest="FORCE",
                                 help="Download again even if the file already exists",
                                 action="store_true")
    _add_repository_options(download_parser)
    _add_common_options(download_parser)

    return parser.parse_args(argv)
