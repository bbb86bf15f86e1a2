#!/usr/bin/env python3
"""
Tests for logging setup.
"""

import logging

import pytest
from rich.logging import RichHandler

from dotrepo.utils.logger import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    yield
    root = logging.getLogger('dotrepo')
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    get_logger().set_level('WARNING')


class TestSetupLogging:

    def test_console_only_by_default(self):
        setup_logging()

        root = logging.getLogger('dotrepo')
        assert root.level == logging.WARNING
        assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)
        assert any(isinstance(h, RichHandler) for h in root.handlers)

    def test_verbose_sets_debug(self):
        setup_logging(level='WARNING', verbose=True)

        root = logging.getLogger('dotrepo')
        assert root.level == logging.DEBUG
        rich_handlers = [h for h in root.handlers if isinstance(h, RichHandler)]
        assert all(h.level == logging.DEBUG for h in rich_handlers)

    def test_log_file_records_child_loggers(self, tmp_path):
        log_file = tmp_path / 'logs' / 'dotrepo.log'

        setup_logging(level='INFO', log_file=log_file)
        get_logger('dotrepo.tests').info("Cloning bare repository")

        [file_handler] = [
            h for h in logging.getLogger('dotrepo').handlers if isinstance(h, logging.FileHandler)
        ]
        assert file_handler.level == logging.DEBUG
        file_handler.flush()
        content = log_file.read_text()
        assert "Logging to file" in content
        assert "dotrepo.tests - INFO" in content
        assert "Cloning bare repository" in content
