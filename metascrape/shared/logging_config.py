"""
日志配置模块
统一管理3类日志：
1. scrape_process/ - 解析过程日志（领域服务 / 应用服务）
2. error/ - 错误日志（Infrastructure层直接调用）
3. performance/ - 性能监控日志（每次解析的耗时）

文件命名格式：{日期}_{日志类型}.log
例如：2025-11-30_scrape_process.log
"""

import logging.config
import logging.handlers
from pathlib import Path
from datetime import datetime
from typing import Optional, Union

_LOG_TYPES = {
    # logger 名称 -> 日志类型（同时也是子目录名）
    'domain.scrape_process': 'scrape_process',
    'infrastructure.error': 'error',
    'infrastructure.perf': 'performance',
}


def setup_logging(log_dir: Optional[Union[str, Path]] = None, console_level: str = 'INFO'):
    """
    初始化并配置所有logger
    应在应用启动时调用：setup_logging()

    参数:
        log_dir: 日志根目录，默认为项目根目录下的 logs/
        console_level: 控制台输出级别
    """

    # 获取日志根目录（默认 <项目根目录>/logs/）
    if log_dir is None:
        log_root_dir = Path(__file__).resolve().parent.parent.parent / 'logs'
    else:
        log_root_dir = Path(log_dir)

    # 确保所有目录存在
    for log_type in _LOG_TYPES.values():
        (log_root_dir / log_type).mkdir(parents=True, exist_ok=True)

    # 当前日期（用于初始文件名）
    today = datetime.now().strftime('%Y-%m-%d')

    def file_handler(log_type: str, backup_count: int) -> dict:
        return {
            'class': 'logging.handlers.TimedRotatingFileHandler',
            'filename': str(log_root_dir / log_type / f'{today}_{log_type}.log'),
            'when': 'MIDNIGHT',         # 每天午夜切换
            'interval': 1,              # 间隔1天
            'backupCount': backup_count,
            'encoding': 'utf-8',
            'formatter': 'json'
        }

    LOGGING_CONFIG = {
        'version': 1,
        'disable_existing_loggers': False,

        # ==================== 格式化器 ====================
        'formatters': {
            'json': {
                '()': 'pythonjsonlogger.jsonlogger.JsonFormatter',
                'format': '%(asctime)s %(name)s %(levelname)s %(message)s',
                'timestamp': True
            },
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            }
        },

        # ==================== 处理器 ====================
        'handlers': {
            'scrape_process_file': file_handler('scrape_process', 30),
            'error_file': file_handler('error', 30),          # 错误日志保留30天
            'performance_file': file_handler('performance', 7),  # 性能日志保留7天

            # ---------- 控制台输出 ----------
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': console_level
            }
        },

        # ==================== Logger配置 ====================
        'loggers': {
            'domain.scrape_process': {
                'handlers': ['scrape_process_file', 'console'],
                'level': 'INFO',
                'propagate': False
            },

            'infrastructure.error': {
                'handlers': ['error_file', 'console'],
                'level': 'ERROR',
                'propagate': False
            },

            'infrastructure.perf': {
                'handlers': ['performance_file'],
                'level': 'INFO',
                'propagate': False
            }
        },

        # ==================== 根Logger（兜底） ====================
        'root': {
            'level': 'INFO',
            'handlers': ['console']
        }
    }

    # 应用配置
    logging.config.dictConfig(LOGGING_CONFIG)

    # 自定义文件命名（实现日期前缀命名）
    _setup_custom_namer()

    logger = get_scrape_process_logger()
    logger.info("日志系统初始化完成", extra={
        'log_root_dir': str(log_root_dir),
        'directories': {t: str(log_root_dir / t) for t in _LOG_TYPES.values()}
    })
    return log_root_dir


def custom_namer(default_name: str) -> str:
    """
    将TimedRotatingFileHandler的默认命名转换为日期前缀格式

    default_name示例：
    /path/to/logs/error/2025-11-30_error.log.2025-11-29

    转换为：
    /path/to/logs/error/2025-11-29_error.log
    """
    path = Path(default_name)
    parts = path.name.split('.')

    # 格式：2025-11-30_error.log.2025-11-29
    if len(parts) == 3 and parts[1] == 'log' and '_' in parts[0]:
        log_type = parts[0].split('_', 1)[1]
        return str(path.parent / f"{parts[2]}_{log_type}.log")

    return default_name


def _setup_custom_namer():
    """为所有TimedRotatingFileHandler设置自定义命名规则"""
    for logger_name in _LOG_TYPES:
        for handler in logging.getLogger(logger_name).handlers:
            if isinstance(handler, logging.handlers.TimedRotatingFileHandler):
                handler.namer = custom_namer


# ==================== 便捷获取Logger的函数 ====================

def get_scrape_process_logger() -> logging.Logger:
    """获取解析过程日志Logger（领域服务/应用服务使用）"""
    return logging.getLogger('domain.scrape_process')


def get_error_logger() -> logging.Logger:
    """获取错误日志Logger（Infrastructure层使用）"""
    return logging.getLogger('infrastructure.error')


def get_performance_logger() -> logging.Logger:
    """获取性能监控日志Logger"""
    return logging.getLogger('infrastructure.perf')
