import logging
from datetime import date

import pytest

from careerconnect.log import configure_logging, log_file_path


def _owned(root):
    return [h for h in root.handlers if getattr(h, "_careerconnect_handler", False)]


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in _owned(root):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)


def test_log_file_is_named_by_day(tmp_path):
    assert log_file_path(tmp_path, date(2024, 6, 1)) == tmp_path / "careerconnect_2024-06-01.log"


def test_level_and_daily_file_follow_settings(root_logger, tmp_path):
    configure_logging("debug", to_file=True, log_dir=tmp_path)

    assert root_logger.level == logging.DEBUG
    logging.getLogger("careerconnect.test").info("hello")
    for handler in _owned(root_logger):
        handler.flush()
    assert "hello" in log_file_path(tmp_path).read_text(encoding="utf-8")


def test_reconfiguring_replaces_handlers(root_logger, tmp_path):
    configure_logging("INFO", to_file=True, log_dir=tmp_path)
    configure_logging("WARNING", to_file=False, log_dir=tmp_path)

    owned = _owned(root_logger)
    assert len(owned) == 1
    assert not isinstance(owned[0], logging.FileHandler)
    assert root_logger.level == logging.WARNING
