"""
Logging configuration module.

This module sets up and configures the logger for the whitespace fixer.
"""

# Standard library imports
import logging
import os


def setup_logger(name, level=None):
    """Create a simple logger for the project"""
    log = logging.getLogger(name)

    # Prevent duplicate handlers
    if log.handlers:
        return log

    # Set log level
    level = level or os.getenv("WSFIX_LOG_LEVEL", "WARNING")
    log.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    log.addHandler(console_handler)

    return log


def set_level(level):
    """Change the level of the default logger after it has been created."""
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))


# Create default logger
logger = setup_logger("wsfix")
