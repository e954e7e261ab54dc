import json
import logging
import logging.handlers
from pathlib import Path

import pytest

from metascrape.shared.logging_config import (
    custom_namer,
    get_error_logger,
    get_performance_logger,
    get_scrape_process_logger,
    setup_logging,
)

LOGGER_NAMES = ('domain.scrape_process', 'infrastructure.error', 'infrastructure.perf')


@pytest.fixture
def log_dir(tmp_path):
    """在临时目录中初始化日志，测试结束后关闭文件句柄并还原 logger 状态"""
    yield setup_logging(tmp_path / 'logs', console_level='CRITICAL')

    for name in LOGGER_NAMES + ('',):
        logger = logging.getLogger(name or None)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
    logging.getLogger().setLevel(logging.WARNING)


class TestSetupLogging:

    def test_creates_directories(self, log_dir):
        for log_type in ('scrape_process', 'error', 'performance'):
            assert (log_dir / log_type).is_dir()

    def test_loggers_write_json_lines(self, log_dir):
        get_error_logger().error("解析失败", extra={'url': 'http://example.com'})
        for handler in get_error_logger().handlers:
            handler.flush()

        files = list((log_dir / 'error').glob('*_error.log'))
        assert len(files) == 1

        record = json.loads(files[0].read_text(encoding='utf-8').strip().splitlines()[-1])
        assert record['message'] == "解析失败"
        assert record['url'] == 'http://example.com'
        assert record['levelname'] == 'ERROR'

    def test_loggers_do_not_propagate(self, log_dir):
        for logger in (get_scrape_process_logger(), get_error_logger(), get_performance_logger()):
            assert logger.propagate is False

    def test_rotating_handlers_use_custom_namer(self, log_dir):
        handlers = [
            h for h in get_performance_logger().handlers
            if isinstance(h, logging.handlers.TimedRotatingFileHandler)
        ]
        assert handlers
        assert all(h.namer is custom_namer for h in handlers)


class TestCustomNamer:

    def test_rotated_name_uses_date_prefix(self):
        rotated = str(Path('/logs/error') / '2025-11-30_error.log.2025-11-29')
        assert custom_namer(rotated) == str(Path('/logs/error') / '2025-11-29_error.log')

    def test_multi_word_log_type(self):
        rotated = str(Path('/logs/scrape_process') / '2025-11-30_scrape_process.log.2025-11-29')
        assert custom_namer(rotated) == str(Path('/logs/scrape_process') / '2025-11-29_scrape_process.log')

    def test_unrelated_name_is_unchanged(self):
        assert custom_namer('/logs/other.txt') == '/logs/other.txt'
