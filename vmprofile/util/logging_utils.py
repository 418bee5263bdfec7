# coding=utf-8

import logging
import logging.handlers
import os

from vmprofile.util import logging_config
from vmprofile.util.logging_config import MAX_SIZE, MAX_BACKUP_COUNT, LOG_LEVEL, LOG_FILE_ROOT, PRINT_LOG_TO_CONSOLE

__DEFAULT_LOGGERS = dict()

formatter = logging.Formatter(
    logging_config.LOGGER_CONTENT_FORMAT,
    logging_config.LOGGER_TIME_FORMAT)


def get_default_logger(module="default", log_path=None) -> logging.Logger:
    global __DEFAULT_LOGGERS
    if not __DEFAULT_LOGGERS.get(module):
        __DEFAULT_LOGGERS[module] = get_logger(module=module,
                                               log_path=log_path or os.path.join(LOG_FILE_ROOT, "vmprofile.log"),
                                               max_file_size=MAX_SIZE,
                                               max_backup_count=MAX_BACKUP_COUNT)

    return __DEFAULT_LOGGERS.get(module)


def get_logger(module, log_path, max_file_size, max_backup_count):
    logger = logging.getLogger(module)
    if len(logger.handlers) == 0:
        logger.propagate = False
        logger.setLevel(LOG_LEVEL)
        handler = None
        if not PRINT_LOG_TO_CONSOLE:
            handler = get_log_handler(log_path, max_file_size, max_backup_count)
        if handler is None:
            handler = logging.StreamHandler()
            handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def get_log_handler(log_path, max_file_size, max_backup_count):
    file_handler = None
    try:
        log_dir = os.path.dirname(log_path)
        if log_dir:
            os.makedirs(log_dir, 0o750, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(log_path,
                                                            maxBytes=max_file_size,
                                                            backupCount=max_backup_count)
        file_handler.setFormatter(formatter)
    except OSError:
        """
        When the log directory is not writable,
        the log is printed to the console instead.
        """
        logging.getLogger().exception('Get LOGGER failed, used stdout instead')
    return file_handler
