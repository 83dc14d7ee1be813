import logging

import pytest

from logging_config import resolve_level, setup_logging


def test_setup_logging_writes_to_file(restore_root_logger, tmp_path):
    log_file = tmp_path / "softbody.log"

    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    logging.getLogger("grid2d").debug("hello from the grid")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 2
    assert "grid2d - DEBUG - hello from the grid" in log_file.read_text(encoding="utf-8")


def test_setup_logging_twice_does_not_duplicate_handlers(restore_root_logger):
    setup_logging()
    setup_logging()
    assert len(restore_root_logger.handlers) == 1


def test_level_names_from_the_command_line(restore_root_logger):
    setup_logging(level="warning")
    assert restore_root_logger.level == logging.WARNING
    assert logging.getLogger("OpenGL").level == logging.WARNING


def test_debug_run_keeps_opengl_quiet(restore_root_logger):
    setup_logging(level=logging.DEBUG)
    assert logging.getLogger("OpenGL").getEffectiveLevel() == logging.WARNING


def test_unknown_level_name_is_rejected():
    with pytest.raises(ValueError):
        resolve_level("LOUD")
    assert resolve_level("info") == logging.INFO
    assert resolve_level(15) == 15


def test_root_handlers_come_back_after_setup():
    from conftest import preserved_root_logger

    root = logging.getLogger()
    existing = logging.NullHandler()
    root.addHandler(existing)
    try:
        before = list(root.handlers)
        with preserved_root_logger():
            setup_logging(level="DEBUG")
            assert existing not in root.handlers
        assert root.handlers == before
    finally:
        root.removeHandler(existing)
