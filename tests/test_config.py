# ==============================================
# Tests for Configuration
# ==============================================

import os

from fastdb.config import AppConfig, get_config, reset_config


class TestConfig:

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        for name in ("FASTDB_INDENT", "FASTDB_ENCODING", "FASTDB_ATOMIC_WRITES", "FASTDB_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        config = get_config()
        assert config.store.extension == ".fastdb"
        assert config.store.backup_extension == ".fastdb-backup"
        assert config.store.indent == 2
        assert config.store.atomic_writes is True
        assert config.logging.level == "WARNING"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("FASTDB_INDENT", "4")
        monkeypatch.setenv("FASTDB_ATOMIC_WRITES", "false")
        monkeypatch.setenv("FASTDB_LOG_LEVEL", "debug")

        config = get_config()
        assert config.store.indent == 4
        assert config.store.atomic_writes is False
        assert config.logging.level == "DEBUG"

    def test_dotenv_file(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("FASTDB_INDENT", raising=False)
        (tmp_path / ".env").write_text("FASTDB_INDENT=3\n")

        try:
            assert get_config().store.indent == 3
        finally:
            os.environ.pop("FASTDB_INDENT", None)

    def test_singleton(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        assert get_config() is get_config()
        first = get_config()
        reset_config()
        assert get_config() is not first

    def test_app_config_defaults(self):
        config = AppConfig()
        assert config.store.encoding == "utf-8"
