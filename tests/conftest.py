import pytest

from blocksearch.config import reset_config
from blocksearch.hooks import filters


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Each test sees default config and no registered filters."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for key in ("BLOCKSEARCH_CASE_SENSITIVE", "BLOCKSEARCH_LITERAL",
                "BLOCKSEARCH_SHOW_MATCHES", "BLOCKSEARCH_TEXT_CATEGORY"):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    filters.clear()
    yield
    reset_config()
    filters.clear()
