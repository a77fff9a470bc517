import logging
import os
import sys
from logging import StreamHandler
from logging.handlers import RotatingFileHandler
from app_constants.app_configurations import Log

TRACE = logging.DEBUG - 5
logging.addLevelName(TRACE, 'TRACE')


class CloudDashLogger(logging.getLoggerClass()):
    """Service logger with an extra TRACE level below DEBUG"""

    def trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)


def build_formatter(level: str, log_format: str = Log.LOG_FORMAT) -> logging.Formatter:
    # verbose levels also name the emitting module and line
    if level in ('DEBUG', 'TRACE'):
        log_format = log_format.replace('%(message)s', '%(module)s - %(lineno)d - %(message)s')
    return logging.Formatter(log_format)


def get_logger(name: str = Log.LOGGER_NAME, level: str = Log.LOG_LEVEL, handlers: str = Log.LOG_HANDLERS):
    """sets logger mechanism"""
    logging.setLoggerClass(CloudDashLogger)
    _logger = logging.getLogger(name)
    logging.setLoggerClass(logging.Logger)
    _logger.setLevel(logging.getLevelName(level))
    if _logger.handlers:
        return _logger

    _formatter = build_formatter(level)

    if ('file' in handlers or 'rotating' in handlers) and not os.path.exists(Log.LOG_BASE_PATH):
        os.makedirs(Log.LOG_BASE_PATH)

    if 'file' in handlers:
        _file_handler = logging.FileHandler(Log.FILE_NAME)
        _file_handler.setFormatter(_formatter)
        _logger.addHandler(_file_handler)

    if 'rotating' in handlers:
        _rotating_file_handler = RotatingFileHandler(filename=Log.FILE_NAME,
                                                     maxBytes=int(Log.FILE_BACKUP_SIZE),
                                                     backupCount=int(Log.FILE_BACKUP_COUNT))
        _rotating_file_handler.setFormatter(_formatter)
        _logger.addHandler(_rotating_file_handler)

    if 'console' in handlers:
        _console_handler = StreamHandler(sys.stdout)
        _console_handler.setFormatter(_formatter)
        _logger.addHandler(_console_handler)

    return _logger


logger = get_logger()
