from __future__ import annotations

from pathlib import Path

import pytest

from core.config import AppSettings, write_user_env_vars
from core.hosts import get_host_preset


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("SERIESLINK_HOST", "SERIESLINK_API_HOSTNAME", "SERIESLINK_URL_PREFIX", "SERIESLINK_CACHE_DIR"):
        monkeypatch.delenv(key, raising=False)


def test_default_host_is_preset() -> None:
    settings = AppSettings(_env_file=None)

    assert settings.host_config().hostname == "https://api.templescan.net"
    assert settings.host_config().url_prefix == "/series/"


def test_env_overrides_hostname_and_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SERIESLINK_API_HOSTNAME", "https://api.example.com/")
    monkeypatch.setenv("SERIESLINK_URL_PREFIX", "/comic/")

    host = AppSettings(_env_file=None).host_config()

    assert host.hostname == "https://api.example.com"
    assert host.url_prefix == "/comic/"


def test_unknown_preset_fails() -> None:
    with pytest.raises(ValueError, match="Unknown host preset"):
        AppSettings(_env_file=None, host="nowhere").host_config()


def test_preset_lookup_is_case_insensitive() -> None:
    assert get_host_preset("TempleScan").hostname == "https://api.templescan.net"


def test_cache_dir_override(tmp_path: Path) -> None:
    settings = AppSettings(_env_file=None, cache_dir=tmp_path)

    assert settings.resolved_cache_dir() == tmp_path


def test_write_user_env_vars_merges_values(tmp_path: Path) -> None:
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# old\nSERIESLINK_HOST=old\nOTHER='kept'\n", encoding="utf-8")

    write_user_env_vars({"SERIESLINK_HOST": "templescan"}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert "SERIESLINK_HOST=templescan" in lines
    assert "OTHER=kept" in lines
