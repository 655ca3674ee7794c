import logging
from types import SimpleNamespace

import pytest

from countries_api.core.logging.builder import make_dict_config, setup_logging
from countries_api.core.logging.formatters import ColorFormatter


def make_settings(tmp_path, **overrides) -> SimpleNamespace:
    values = dict(
        ENV="testing",
        APP_NAME="countries-api",
        LOG_FORMAT="json",
        LOG_LEVEL="INFO",
        LOG_TO_STDOUT=True,
        LOG_DIR=tmp_path / "logs",
        LOG_MAX_BYTES=1000,
        LOG_BACKUP_COUNT=1,
        ENABLE_SQL_LOGGING=False,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class TestMakeDictConfig:

    def test_stdout_mode_uses_console_handlers(self, tmp_path):
        config = make_dict_config(make_settings(tmp_path))

        assert set(config["handlers"]) == {"console", "error_console"}
        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["loggers"][""]["level"] == "INFO"

    def test_file_mode_adds_rotating_files(self, tmp_path):
        config = make_dict_config(make_settings(tmp_path, LOG_TO_STDOUT=False))

        assert set(config["handlers"]) == {"console", "file", "error_file"}
        assert config["handlers"]["file"]["filename"].endswith("app.log")
        assert config["handlers"]["error_file"]["level"] == "ERROR"

    def test_text_format_uses_color_formatter(self, tmp_path):
        config = make_dict_config(make_settings(tmp_path, LOG_FORMAT="text"))

        assert config["formatters"]["standard"]["()"] is ColorFormatter
        assert config["handlers"]["console"]["formatter"] == "standard"

    @pytest.mark.parametrize("enabled, level", [(True, "DEBUG"), (False, "WARNING")])
    def test_sql_logging_toggle(self, tmp_path, enabled, level):
        config = make_dict_config(make_settings(tmp_path, ENABLE_SQL_LOGGING=enabled))

        assert config["loggers"]["sqlalchemy.engine"]["level"] == level


def test_setup_logging_creates_log_directory(tmp_path):
    settings = make_settings(tmp_path, LOG_TO_STDOUT=False)
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level

    try:
        setup_logging(settings)
        assert (tmp_path / "logs").is_dir()
    finally:
        # hand the root logger back to the session-wide configuration
        for handler in list(root.handlers):
            if handler not in saved_handlers:
                handler.close()
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
