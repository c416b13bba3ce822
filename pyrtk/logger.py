# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Logging configuration for the pyrtk estimator

Every module logs through ``logging.getLogger(__name__)``, so configuring the
``pyrtk`` logger configures the whole package. Levels used by the models:

- TRACE: creation of per-entity state, one line per new station/satellite
- DEBUG: cycle slips, ionosphere interrupts, clamped backward time steps
- INFO: model sets built, input files loaded
- WARNING: configuration that has no effect
"""

import copy
import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

ROOT_LOGGER = "pyrtk"

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CONSOLE_DATEFMT = '%H:%M:%S'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_DATEFMT = '%Y-%m-%d %H:%M:%S'


class LogLevel(Enum):
    """Log levels; TRACE is used for per-epoch, per-entity detail"""
    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, level) -> int:
        """Numeric level from a name ('debug') or number"""
        if isinstance(level, int):
            return level
        try:
            return cls[str(level).upper()].value
        except KeyError:
            raise ValueError(f"Unknown log level: {level}") from None


logging.addLevelName(LogLevel.TRACE.value, "TRACE")


def trace(self, message, *args, **kwargs):
    """Log at TRACE level"""
    if self.isEnabledFor(LogLevel.TRACE.value):
        self._log(LogLevel.TRACE.value, message, args, **kwargs)


logging.Logger.trace = trace


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name"""

    COLORS = {
        'TRACE': '\033[36m',     # Cyan
        'DEBUG': '\033[34m',     # Blue
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        # Color a copy so other handlers see the plain level name
        record = copy.copy(record)
        log_color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{log_color}{record.levelname}{self.RESET}"
        return super().format(record)


def _handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(name: str = ROOT_LOGGER,
                 level: str = "INFO",
                 log_file: Optional[str] = None,
                 console: bool = True) -> logging.Logger:
    """
    Setup logger with specified configuration

    Parameters:
    -----------
    name : str
        Logger name ('pyrtk' configures every module of the package)
    level : str
        Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_file : Optional[str]
        Log file path (if None, no file logging)
    console : bool
        Enable console output

    Returns:
    --------
    logging.Logger
        Configured logger; existing handlers are replaced
    """
    numeric_level = LogLevel.parse(level)
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    logger.handlers = []

    if console:
        logger.addHandler(_handler(logging.StreamHandler(sys.stdout), numeric_level,
                                   ColoredFormatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT)))
    if log_file:
        logger.addHandler(_handler(logging.FileHandler(log_file), numeric_level,
                                   logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT)))

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get logger by name"""
    return logging.getLogger(name)


class LogContext:
    """Context manager for temporary log level change

    Example: follow the per-entity state of one run at TRACE level

    >>> with LogContext(logging.getLogger('pyrtk.stochastic.entity'), 'TRACE'):
    ...     model_set.prepare(epoch, parameters, epoch_data)
    """

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = LogLevel.parse(level)
        self.old_level = None

    def __enter__(self):
        self.old_level = self.logger.level
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.old_level)


@dataclass
class LoggerConfig:
    """
    Logger configuration with module-specific levels

    Attributes
    ----------
    default_level : str
        Level of the package logger
    log_file : str, optional
        File receiving every record, in addition to the console
    console : bool
        Enable console output
    module_levels : Dict[str, str]
        Levels of individual modules, e.g. {'pyrtk.stochastic.ambiguity': 'DEBUG'}
    """
    default_level: str = "INFO"
    log_file: Optional[str] = None
    console: bool = True
    module_levels: Dict[str, str] = field(default_factory=dict)

    def set_module_level(self, module_name: str, level: str):
        """Set the level of one module logger, applied at once if it has handlers"""
        numeric_level = LogLevel.parse(level)
        if not module_name.startswith(ROOT_LOGGER):
            logging.getLogger(__name__).warning(
                f"Module level set for '{module_name}', which is outside the {ROOT_LOGGER} package")
        self.module_levels[module_name] = level
        logger = logging.getLogger(module_name)
        if logger.handlers:
            logger.setLevel(numeric_level)
            for handler in logger.handlers:
                handler.setLevel(numeric_level)

    def get_level_for_module(self, module_name: str) -> str:
        return self.module_levels.get(module_name, self.default_level)

    def configure_from_dict(self, config: dict):
        """Configure from dictionary"""
        self.default_level = config.get('default_level', self.default_level)
        self.log_file = config.get('log_file', self.log_file)
        self.console = config.get('console', self.console)
        for module, level in config.get('module_levels', {}).items():
            self.set_module_level(module, level)

    def setup_all_loggers(self):
        """Setup the package logger, then the module-specific ones"""
        setup_logger(ROOT_LOGGER, self.default_level, self.log_file, self.console)
        for module, level in self.module_levels.items():
            # Module records are handled here only; the package handlers would repeat them
            logger = setup_logger(module, level, self.log_file, self.console)
            logger.propagate = False


logger_config = LoggerConfig()


def setup_logger_from_config(config: dict):
    """Setup loggers from configuration dictionary

    Example config:
    {
        'default_level': 'INFO',
        'log_file': 'rtk.log',
        'console': True,
        'module_levels': {
            'pyrtk.stochastic.ambiguity': 'DEBUG',
            'pyrtk.stochastic.entity': 'TRACE',
        }
    }
    """
    logger_config.configure_from_dict(config)
    logger_config.setup_all_loggers()
