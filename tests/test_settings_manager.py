import json
import logging

from lxml import etree

from xliff12.logger import PACKAGE_LOGGER, get_logger, setup_logging
from xliff12.parser import SCHEMA_LOCATION, XSI_NS, encode
from xliff12.settings_manager import (
    SettingsManager,
    get_settings,
    reset_settings,
)
from xliff12.xliff_obj import Document


def test_defaults_when_file_missing(tmp_path):
    settings = SettingsManager(str(tmp_path / "missing.json"))

    assert settings.log_level == "INFO"
    assert settings.log_file == ""
    assert settings.pretty_print is True


def test_values_override_defaults(tmp_path):
    path = tmp_path / "xliff12.json"
    path.write_text(json.dumps({"log_level": "debug", "pretty_print": False, "bogus": 1}), encoding="utf-8")

    settings = SettingsManager(str(path))

    assert settings.log_level == "DEBUG"
    assert settings.pretty_print is False
    assert "bogus" not in settings.config


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "xliff12.json"
    path.write_text("{not json", encoding="utf-8")

    settings = SettingsManager(str(path))

    assert settings.config["pretty_print"] is True


def test_unknown_log_level_falls_back_to_info(tmp_path):
    path = tmp_path / "xliff12.json"
    path.write_text(json.dumps({"log_level": "chatty"}), encoding="utf-8")

    assert SettingsManager(str(path)).log_level == "INFO"


def test_save_config(tmp_path):
    path = tmp_path / "xliff12.json"
    settings = SettingsManager(str(path))
    settings.pretty_print = False
    settings.save_config()

    assert SettingsManager(str(path)).pretty_print is False


def test_env_var_selects_config(tmp_path, monkeypatch):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"pretty_print": False}), encoding="utf-8")
    monkeypatch.setenv("XLIFF12_CONFIG", str(path))
    reset_settings()

    assert get_settings().config_path == str(path)
    assert b"\n  <file" not in encode(Document.new("de", "en"))


def test_config_cannot_change_schema_location(tmp_path, monkeypatch):
    path = tmp_path / "xliff12.json"
    path.write_text(json.dumps({"schema_location": "urn:test custom.xsd"}), encoding="utf-8")
    monkeypatch.setenv("XLIFF12_CONFIG", str(path))
    reset_settings()

    assert "schema_location" not in get_settings().config

    root = etree.fromstring(encode(Document.new("de", "en")))
    assert root.get(f"{{{XSI_NS}}}schemaLocation") == SCHEMA_LOCATION
    assert SCHEMA_LOCATION.endswith("/xliff-core-1.2-strict.xsd")


def test_module_loggers_are_silent_until_setup(monkeypatch):
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    monkeypatch.setattr(package_logger, "handlers", list(package_logger.handlers))
    monkeypatch.setattr(package_logger, "level", package_logger.level)

    assert all(isinstance(h, logging.NullHandler) for h in package_logger.handlers)
    assert get_logger("xliff12.parser").handlers == []
    assert get_logger("outside").name == "xliff12.outside"

    setup_logging()
    setup_logging()

    streams = [h for h in package_logger.handlers if isinstance(h, logging.StreamHandler)]
    assert len(streams) == 1
    assert streams[0].level == logging.INFO
