"""
Tests for build log configuration.
"""

import logging

from elo_bs_manager.logging_utils import BuildLogHandler, configure_logging


def _build_handlers():
    return [h for h in logging.getLogger().handlers if isinstance(h, BuildLogHandler)]


def test_configures_root_once(tmp_path):
    first = configure_logging(log_path=str(tmp_path / "logs" / "a.log"), also_console=False)
    second = configure_logging(log_path=str(tmp_path / "logs" / "b.log"), level=logging.DEBUG, also_console=False)

    assert second == first
    assert len(_build_handlers()) == 1
    assert logging.getLogger().level == logging.DEBUG


def test_records_reach_build_log(tmp_path):
    path = configure_logging(log_path=str(tmp_path / "logs" / "run.log"), also_console=False)

    logging.getLogger("elo_bs_manager.test").info("hello build log")
    for h in _build_handlers():
        h.flush()

    with open(path, encoding="utf-8") as fh:
        assert "hello build log" in fh.read()
