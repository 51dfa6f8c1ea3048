"""Tests for last-path persistence."""

import sys
from pathlib import Path

import pytest
from platformdirs import user_config_path

from scatter_config import LAST_PATH_FILE, config_dir, load_last_path, save_last_path


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "config-home"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home


class TestConfigDir:
    def test_matches_platform_config_dir(self) -> None:
        assert config_dir(create=False) == user_config_path("scatters", appauthor=False)

    @pytest.mark.skipif(sys.platform != "linux", reason="XDG layout applies on Linux")
    def test_uses_xdg_config_home(self, config_home: Path) -> None:
        assert config_dir() == config_home / "scatters"
        assert (config_home / "scatters").is_dir()

    @pytest.mark.skipif(sys.platform != "linux", reason="XDG layout applies on Linux")
    def test_no_create(self, config_home: Path) -> None:
        config_dir(create=False)
        assert not (config_home / "scatters").exists()

    @pytest.mark.skipif(sys.platform != "linux", reason="XDG layout applies on Linux")
    def test_falls_back_to_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert config_dir(create=False) == tmp_path / ".config" / "scatters"


class TestLastPath:
    def test_round_trip(self, config_home: Path, tmp_path: Path) -> None:
        books = tmp_path / "books"
        books.mkdir()

        written = save_last_path(books)

        assert written == config_dir() / LAST_PATH_FILE
        assert load_last_path() == books.resolve()

    def test_nothing_saved(self, config_home: Path) -> None:
        with pytest.raises(ValueError, match="No previous path saved"):
            load_last_path()

    def test_saved_path_gone(self, config_home: Path, tmp_path: Path) -> None:
        books = tmp_path / "books"
        books.mkdir()
        save_last_path(books)
        books.rmdir()

        with pytest.raises(ValueError, match="no longer exists"):
            load_last_path()
