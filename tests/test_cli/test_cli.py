"""Tests for CLI commands."""

import json

import pytest
from click.testing import CliRunner

from quantum_cache.cache.keys import digest
from quantum_cache.cache.manager import CacheManager
from quantum_cache.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def populated(cache_root):
    mgr = CacheManager(root=cache_root)
    mgr.remote("org/big@main").add_file(["components", "Button.tsx"], "b" * 4000)
    mgr.remote("org/small@main").add_file(["utils", "color.ts"], "c" * 10)
    mgr.remote("org/empty@main")
    return mgr


class TestCLIGroup:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "quantum-cache" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0


class TestCacheInfo:
    def test_cache_help(self, runner):
        result = runner.invoke(cli, ["cache", "--help"])
        assert result.exit_code == 0
        assert "info" in result.output
        assert "clear" in result.output

    def test_empty_cache(self, runner, cache_root):
        result = runner.invoke(cli, ["--cache-dir", str(cache_root.parent), "cache", "info"])
        assert result.exit_code == 0
        assert "Full cache size" in result.output
        assert "0 Byte" in result.output

    def test_lists_remotes_and_files(self, runner, cache_root, populated):
        result = runner.invoke(cli, ["--cache-dir", str(cache_root.parent), "cache", "info"])
        assert result.exit_code == 0
        assert "org/big@main" in result.output
        assert "org/small@main" in result.output
        assert "components/Button.tsx" in result.output
        assert "3.91 KB" in result.output
        assert result.output.index("org/big@main") < result.output.index("org/small@main")

    def test_skips_remotes_without_files(self, runner, cache_root, populated):
        result = runner.invoke(cli, ["--cache-dir", str(cache_root.parent), "cache", "info"])
        assert "org/empty@main" not in result.output

    def test_info_is_default(self, runner, cache_root, populated):
        result = runner.invoke(cli, ["--cache-dir", str(cache_root.parent), "cache"])
        assert result.exit_code == 0
        assert "org/big@main" in result.output

    def test_cache_dir_from_env(self, runner, cache_root, populated, monkeypatch):
        monkeypatch.setenv("QUANTUM_CACHE_DIR", str(cache_root.parent))
        result = runner.invoke(cli, ["cache", "info"])
        assert result.exit_code == 0
        assert "org/small@main" in result.output

    def test_conflict_exits_with_error(self, runner, cache_root, populated):
        remote = populated.remote("org/small@main")
        blob = remote.blob_path(digest("c" * 10))
        blob.unlink()
        blob.mkdir()
        result = runner.invoke(cli, ["--cache-dir", str(cache_root.parent), "cache", "info"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_log_level(self, runner, cache_root, monkeypatch):
        monkeypatch.setenv("QUANTUM_LOG_LEVEL", "chatty")
        result = runner.invoke(cli, ["--cache-dir", str(cache_root.parent), "cache", "info"])
        assert result.exit_code == 1


class TestCacheClear:
    def test_needs_confirmation(self, runner, cache_root, populated):
        result = runner.invoke(cli, ["--cache-dir", str(cache_root.parent), "cache", "clear"], input="n\n")
        assert result.exit_code != 0
        assert cache_root.exists()

    def test_with_yes(self, runner, cache_root, populated):
        result = runner.invoke(cli, ["--cache-dir", str(cache_root.parent), "cache", "clear", "--yes"])
        assert result.exit_code == 0
        assert "cleared" in result.output.lower()
        assert not cache_root.exists()

    def test_confirm_prompt(self, runner, cache_root, populated):
        result = runner.invoke(cli, ["--cache-dir", str(cache_root.parent), "cache", "clear"], input="y\n")
        assert result.exit_code == 0
        assert not cache_root.exists()

    def test_corrupt_index_still_clears(self, runner, cache_root, populated):
        (cache_root / "cache.json").write_text(json.dumps([1, 2, 3]))
        result = runner.invoke(cli, ["--cache-dir", str(cache_root.parent), "cache", "clear", "--yes"])
        assert result.exit_code == 0
        assert not cache_root.exists()

    def test_refuses_foreign_directory(self, runner, tmp_path):
        root = tmp_path / "quantum-cli"
        root.mkdir()
        (root / "notes.txt").write_text("not a cache")
        result = runner.invoke(cli, ["--cache-dir", str(tmp_path), "cache", "clear", "--yes"])
        assert result.exit_code == 1
        assert (root / "notes.txt").exists()
