from __future__ import annotations

import logging

from thorchain_amm.logger import TRACE, ColoredFormatter, resolve_level, setup_logging


def test_resolve_level():
    assert resolve_level("trace") == TRACE
    assert resolve_level("DEBUG") == logging.DEBUG
    assert resolve_level("nonsense") == logging.INFO


def test_colored_formatter_restores_levelname():
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "hello", None, None)
    formatted = ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)

    assert "WARNING" in formatted
    assert "\033[33m" in formatted
    assert record.levelname == "WARNING"


def test_setup_logging_sets_root_level():
    setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG

    setup_logging("INFO")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_only_configures_root_logger():
    rich_logger = logging.getLogger("rich")

    for level in ("DEBUG", "TRACE", "INFO"):
        setup_logging(level)
        assert rich_logger.level == logging.NOTSET
