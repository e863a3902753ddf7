"""Logging for py_unitcalc.

Table builds and configuration loading log at DEBUG, so a bad `[pyuc]` section can be
traced; a conversion that fails on a dimension mismatch logs both parsed units at DEBUG
before raising. The command line reports parse and conversion errors at ERROR.

By default only the console handler is attached, at INFO level. File logging captures
the DEBUG trail of parsing and conversion:

Examples:
    ```python
    from py_unitcalc import new, parse
    from py_unitcalc.logger import enable_file_logging, disable_file_logging

    enable_file_logging("units_debug.log")
    new("mg/L", parse(3.0, "g"))  # WrongDimensionError, details in units_debug.log
    disable_file_logging()
    ```
"""
import logging
from typing import Optional

__all__ = ('logger',
           'enable_file_logging',
           'disable_file_logging',
)

formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")
console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)
console_handler.setLevel(logging.DEBUG)  # Lowest level for console

logger: logging.Logger = logging.getLogger('py_unitcalc')
logger.addHandler(console_handler)
logger.setLevel(logging.INFO)

# File handler (optional, added dynamically)
file_handler: Optional[logging.FileHandler] = None


def enable_file_logging(filename: str = "debug.log") -> None:
    """Enable logging to a file with DEBUG level output.

    If file logging is already enabled, the existing file handler is replaced.
    The file is opened in append mode, so existing content is preserved.

    Args:
        filename: Name of the log file to create. Defaults to "debug.log".
    """
    global file_handler
    if file_handler is not None:
        disable_file_logging()

    file_handler = logging.FileHandler(filename)
    file_handler.setLevel(logging.DEBUG)  # Log everything to the file
    file_formatter = logging.Formatter("%(asctime)s:%(levelname)s:%(message)s")
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)


def disable_file_logging() -> None:
    """Disable file logging and close the file handle.

    Safe to call when file logging is not enabled.
    """
    global file_handler
    if file_handler is not None:
        logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None
