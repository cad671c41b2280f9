import pytest

from constants import Constants

_MUTABLE_SETTINGS = (
    "REPOSITORIES",
    "REQUEST_TIMEOUT",
    "HTTP_RETRY_MAX",
    "HTTP_CACHE_TTL_SEC",
    "CANDIDATE_CACHE_TTL_SEC",
    "USER_CONFIG_DIR",
)


@pytest.fixture
def isolated_config(monkeypatch, tmp_path):
    """Run from an empty directory with no discoverable config; restore Constants afterwards."""
    for name in _MUTABLE_SETTINGS:
        monkeypatch.setattr(Constants, name, getattr(Constants, name))
    monkeypatch.setattr(Constants, "USER_CONFIG_DIR", str(tmp_path / "user-config"))
    monkeypatch.delenv(Constants.CONFIG_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
