"""
Logging utilities with contact-data masking.

This module provides logging setup with:
- Configurable log levels and output destinations
- Log rotation for file handlers
- Phone number masking (student WhatsApp contacts)
- Structured log format
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


_PHONE_PATTERN = re.compile(r"(?<!\d)\+?\d(?: ?\d){8,14}(?!\d)")


def mask_phone(phone: str) -> str:
    """
    Mask a phone number for safe logging, keeping the last two digits.

    Examples:
        >>> mask_phone("+201001234567")
        '***67'
        >>> mask_phone("")
        '***'
    """
    digits = re.sub(r'\D', '', phone or "")
    if len(digits) < 4:
        return "***"
    return f"***{digits[-2:]}"


class ContactDataFilter(logging.Filter):
    """
    Logging filter that masks phone numbers before output.

    Roster records carry WhatsApp contact numbers; any number-like run in
    a log message is replaced by its masked form.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Mask phone numbers in the log record.

        Returns:
            Always True (allows all records through after masking)
        """
        message = record.getMessage()
        masked = _PHONE_PATTERN.sub(lambda m: mask_phone(m.group(0)), message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logger(
    name: str = "tutor_scheduler",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Args:
        name: Logger name (default: "tutor_scheduler")
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logger()
        >>> logger.info("Roster loaded")

        >>> logger = setup_logger(
        ...     name="tutor_scheduler",
        ...     level=logging.DEBUG,
        ...     log_file="output/logs/scheduler.log"
        ... )
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.addFilter(ContactDataFilter())

    return logger
