"""Constants used in the project."""

import json
import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    RESOLUTION_ERROR = 3
    USAGE_ERROR = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; overridden by the YAML config.
    """

    MAVEN_CENTRAL_URL = "https://repo1.maven.org/maven2"
    REPOSITORIES = [MAVEN_CENTRAL_URL]
    METADATA_FILE = "maven-metadata.xml"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_CACHE_TTL_SEC = 300
    CANDIDATE_CACHE_TTL_SEC = 600
    DOWNLOAD_CHUNK_SIZE = 64 * 1024

    CONFIG_ENV = "MVNPICK_CONFIG"
    CONFIG_FILE_NAMES = ["mvnpick.yml", "mvnpick.yaml"]
    USER_CONFIG_DIR = os.path.join("~", ".config", "mvnpick")


def _read_config_file(path: str) -> Dict[str, Any]:
    """Read a YAML or JSON config file; return {} when it holds no mapping."""
    with open(path, "r", encoding="utf-8") as fh:
        if path.lower().endswith(".json"):
            data = json.load(fh)
        else:
            data = yaml.safe_load(fh)
    return data if isinstance(data, dict) else {}


def _default_config_paths():
    env_path = os.environ.get(Constants.CONFIG_ENV)
    if env_path:
        yield env_path
    for name in Constants.CONFIG_FILE_NAMES:
        yield os.path.join(os.getcwd(), name)
    for name in Constants.CONFIG_FILE_NAMES:
        yield os.path.join(os.path.expanduser(Constants.USER_CONFIG_DIR), name)


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the configuration mapping.

    An explicit path must exist; otherwise the first default location that
    exists is used. Returns {} when no config file is found.

    Raises:
        OSError: The explicit path cannot be read.
        yaml.YAMLError, json.JSONDecodeError: The file is not valid.
    """
    if path:
        return _read_config_file(path)
    for candidate in _default_config_paths():
        if os.path.isfile(candidate):
            logger.debug("Loading config from %s", candidate)
            return _read_config_file(candidate)
    return {}


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply a loaded config mapping onto Constants."""
    repos = cfg.get("repositories")
    if isinstance(repos, list) and repos:
        Constants.REPOSITORIES = [str(r).rstrip("/") for r in repos]

    http = cfg.get("http")
    if isinstance(http, dict):
        if http.get("timeout") is not None:
            Constants.REQUEST_TIMEOUT = int(http["timeout"])
        if http.get("retries") is not None:
            Constants.HTTP_RETRY_MAX = max(1, int(http["retries"]))
        if http.get("cache_ttl") is not None:
            Constants.HTTP_CACHE_TTL_SEC = int(http["cache_ttl"])

    cache = cfg.get("cache")
    if isinstance(cache, dict) and cache.get("ttl") is not None:
        Constants.CANDIDATE_CACHE_TTL_SEC = int(cache["ttl"])
