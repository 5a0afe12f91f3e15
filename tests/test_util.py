import logging

from barrel.util import expand_path, setup_logger


def test_setup_logger_replaces_handlers():
    logger = setup_logger(verbose=True, name="barrel-test")
    setup_logger(verbose=False, name="barrel-test")
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
    assert not logger.propagate


def test_expand_path_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert expand_path("~/brew") == tmp_path / "brew"
