import logging

import pytest

from xmlconfig_toolkit.config import ConfigManager
from xmlconfig_toolkit.logging_config import setup_logging


def test_packaged_defaults_loaded():
    manager = ConfigManager()
    store = manager.get_store_config()
    assert store["strict_conversion"] is False
    assert store["segment_aware_children"] is False
    assert manager.get_logging_config()["version"] == 1


def test_singleton():
    assert ConfigManager() is ConfigManager()


def test_loading_writes_nothing(isolated_user_config):
    ConfigManager().get_store_config()
    assert not isolated_user_config.exists()


def test_defaults_copied_to_user_dir(isolated_user_config):
    assert ConfigManager().install_user_configs() == isolated_user_config
    assert (isolated_user_config / "store.yml").exists()
    assert (isolated_user_config / "logging.yml").exists()


def test_install_keeps_existing_user_files(isolated_user_config):
    isolated_user_config.mkdir(parents=True)
    (isolated_user_config / "store.yml").write_text("huge_tree: true\n", encoding="utf-8")
    ConfigManager().install_user_configs()
    assert (isolated_user_config / "store.yml").read_text(encoding="utf-8") == "huge_tree: true\n"
    assert (isolated_user_config / "logging.yml").exists()


def test_user_overrides_merged(isolated_user_config):
    isolated_user_config.mkdir(parents=True)
    (isolated_user_config / "store.yml").write_text("huge_tree: true\n", encoding="utf-8")
    store = ConfigManager().get_store_config()
    assert store["huge_tree"] is True
    assert store["strict_conversion"] is False


def test_invalid_user_override_ignored(isolated_user_config, caplog):
    isolated_user_config.mkdir(parents=True)
    (isolated_user_config / "store.yml").write_text("strict_conversion: [unclosed\n", encoding="utf-8")
    with caplog.at_level(logging.ERROR, logger="xmlconfig_toolkit.config.manager"):
        store = ConfigManager().get_store_config()
    assert store["strict_conversion"] is False
    assert "Could not parse user config" in caplog.text


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_logging(self):
        package_logger = logging.getLogger("xmlconfig_toolkit")
        saved = (package_logger.level, list(package_logger.handlers), package_logger.propagate)
        yield
        package_logger.setLevel(saved[0])
        package_logger.handlers[:] = saved[1]
        package_logger.propagate = saved[2]

    def test_file_handler_written_to_log_dir(self, tmp_path, monkeypatch):
        log_dir = tmp_path / "logs"
        monkeypatch.setenv("XMLCONFIG_LOG_DIR", str(log_dir))
        setup_logging()
        logging.getLogger("xmlconfig_toolkit.core.store").info("hello")
        for handler in logging.getLogger("xmlconfig_toolkit").handlers:
            handler.flush()
        assert "hello" in (log_dir / "app.log").read_text(encoding="utf-8")

    def test_installs_user_configs(self, tmp_path, monkeypatch, isolated_user_config):
        monkeypatch.setenv("XMLCONFIG_LOG_DIR", str(tmp_path / "logs"))
        setup_logging()
        assert (isolated_user_config / "logging.yml").exists()

    def test_level_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XMLCONFIG_LOG_DIR", str(tmp_path / "logs"))
        setup_logging(logging.DEBUG)
        assert logging.getLogger("xmlconfig_toolkit").level == logging.DEBUG

    def test_debug_modules_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XMLCONFIG_LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setenv("XMLCONFIG_DEBUG_MODULES", "xmlconfig_toolkit.core.flattener")
        setup_logging()
        target = logging.getLogger("xmlconfig_toolkit.core.flattener")
        try:
            assert target.level == logging.DEBUG
        finally:
            target.setLevel(logging.NOTSET)
            target.handlers.clear()
