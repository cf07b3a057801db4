import logging

import pytest

from config.settings import DEFAULTS, load_settings, setup_logger


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_settings(tmp_path / "none.yaml")
    assert cfg == DEFAULTS
    cfg["paths"]["output_dir"] = "changed"
    assert DEFAULTS["paths"]["output_dir"] == "."


def test_file_overrides_only_given_keys(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("generation:\n  seed: 42\nexcel:\n  font_name: Arial\n", encoding="utf-8")
    cfg = load_settings(path)
    assert cfg["generation"]["seed"] == 42
    assert cfg["generation"]["progress"] is True
    assert cfg["excel"]["font_name"] == "Arial"
    assert cfg["paths"]["output_pattern"] == "prefix_{prefix}.txt"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == DEFAULTS


@pytest.mark.parametrize("text", ["- a\n- b\n", "paths: [unclosed\n"])
def test_bad_settings_raise_value_error(tmp_path, text):
    path = tmp_path / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path)


def test_setup_logger_writes_run_log(tmp_path):
    logger = setup_logger(level="debug", log_dir=tmp_path / "logs")
    logger = setup_logger(level="DEBUG", log_dir=tmp_path / "logs")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logger.info("hello")
    for h in logger.handlers:
        h.flush()
    logs = list((tmp_path / "logs").glob("run_*.log"))
    assert logs
    assert any("[INFO] hello" in p.read_text(encoding="utf-8") for p in logs)


def test_setup_logger_without_log_dir():
    logger = setup_logger(level="WARNING")
    assert logger.level == logging.WARNING
    assert [type(h) for h in logger.handlers] == [logging.StreamHandler]
