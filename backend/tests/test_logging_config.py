import logging

from version_gate.core.logging_config import configure_logging


def test_configure_logging_is_idempotent():
    root = logging.getLogger()
    before = [h for h in root.handlers if isinstance(h, logging.StreamHandler)]
    configure_logging("debug")
    configure_logging("debug")
    after = [h for h in root.handlers if isinstance(h, logging.StreamHandler)]
    assert len(after) == max(len(before), 1)
    assert root.level == logging.DEBUG
    assert logging.getLogger("httpx").level >= logging.INFO


def test_unknown_level_falls_back_to_info():
    configure_logging("chatty")
    assert logging.getLogger().level == logging.INFO
