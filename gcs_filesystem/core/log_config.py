"""
Logging setup for applications embedding the storage adapters.

The adapters only ever call ``logging.getLogger(__name__)``; handlers are
installed here, on demand, never on import.
"""

import logging
import os
from datetime import datetime
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(
    level: Optional[Union[str, int]] = None,
    log_dir: Optional[str] = None
) -> Optional[str]:
    """
    Configure the root logger with a console handler and, optionally,
    a dated file handler

    Args:
        level: Log level name or number, defaults to settings.LOG_LEVEL
        log_dir: Directory for log files, defaults to settings.LOG_DIR

    Returns:
        Path of the log file, or None when only console logging is enabled
    """
    from gcs_filesystem.core.config import settings

    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"不支持的日志级别: {level}")
    if log_dir is None:
        log_dir = settings.LOG_DIR

    # 创建logger
    logger = logging.getLogger()
    logger.setLevel(level)

    # 创建格式器
    formatter = logging.Formatter(LOG_FORMAT)

    # 创建控制台处理器
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # 清除可能已存在的处理器，然后添加新的处理器
    logger.handlers = []
    logger.addHandler(console_handler)

    log_filename = None
    if log_dir:
        # 创建日志目录（如果不存在）
        os.makedirs(log_dir, exist_ok=True)

        # 按日期生成日志文件
        log_filename = os.path.join(log_dir, f"gcs_filesystem_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")
        file_handler = logging.FileHandler(log_filename, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # 降低SDK传输层日志级别，避免频繁输出
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('google.auth').setLevel(logging.WARNING)

    return log_filename
