"""
Logging for tagged_struct.

Everything goes through the 'tagged_struct' logger, which stays quiet at WARNING by default:

* WARNING: a registration replaced an earlier one, either a type id moved to a new class or a class moved to a new type id.
* DEBUG: each registration, and each decoded document whose type id is not registered and was left as a plain dict
  (with the document path where it was found).

Modules fetch the logger through get_logger() at call time, so set_logger() takes effect everywhere at once.
"""

import logging

logger: logging.Logger = logging.getLogger('tagged_struct')
logger.setLevel(logging.WARNING)

def set_logger(custom_logger: logging.Logger) -> None:
    """Route tagged_struct's registration warnings and decode diagnostics to another logger."""
    global logger
    logger = custom_logger

def set_log_level(level: int) -> None:
    """Set the level of the logger currently in use. logging.DEBUG shows registrations and unknown type ids."""
    logger.setLevel(level)

def get_logger() -> logging.Logger:
    """Return the logger currently in use, honoring set_logger()."""
    return logger
