"""Unit tests for logging setup."""
import logging
import logging.handlers

import pytest

from pdfco.utils.logger import configure_logging


@pytest.fixture
def logger_name(request):
    name = f'pdfco.tests.{request.node.name}'
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestConfigureLogging:

    def test_console_only(self, logger_name):
        logger = configure_logging(logger_name, log_dir='')
        assert [type(h) for h in logger.handlers] == [logging.StreamHandler]

    def test_rotating_file(self, logger_name, tmp_path):
        log_dir = tmp_path / 'logs'
        logger = configure_logging(logger_name, log_dir=str(log_dir), console=False)

        logger.warning('job J1 failed')
        for handler in logger.handlers:
            handler.flush()

        handler, = logger.handlers
        assert isinstance(handler, logging.handlers.RotatingFileHandler)
        assert handler.backupCount == 5
        assert 'job J1 failed' in (log_dir / f'{logger_name}.log').read_text()
