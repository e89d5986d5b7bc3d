"""Tests for logging setup"""
import logging

from ad_membership import log_config


def _ours(root):
    return [h for h in root.handlers if h in (log_config._console_handler, log_config._file_handler)]


def test_console_only():
    log_config.setup_logging(level="debug")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert _ours(root) == [log_config._console_handler]
    assert logging.getLogger("ldap3").level == logging.WARNING


def test_file_handler_and_reconfigure(tmp_path):
    log_file = tmp_path / "logs" / "membership.log"
    log_config.setup_logging(level="INFO", log_file=str(log_file))
    root = logging.getLogger()
    assert log_config._file_handler is not None
    assert len(_ours(root)) == 2

    logging.getLogger("ad_membership.test").info("hello")
    log_config._file_handler.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")

    log_config.setup_logging(level="bogus")
    assert root.level == logging.INFO
    assert log_config._file_handler is None
    assert len(_ours(root)) == 1
