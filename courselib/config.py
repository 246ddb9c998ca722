# Configuration settings should be set in app.config
# The CourseLibrary class attributes hold the defaults,
# environment variables are used when neither is set
import os
import logging
from flask import current_app
import courselib
from typing import Any, Optional


def get_config(option: str) -> Optional[Any]:
    """Retrieve a configuration parameter from the app
    :param option: configuration parameter
    :return: configuration value
    """
    try:
        result = current_app.config[option]
    except (KeyError, RuntimeError):
        # KeyError: not configured, RuntimeError: working outside of the app context
        result = getattr(courselib.CourseLibrary, option, None)
    if result is None:
        result = os.environ.get(option, None)
    return result


def get_int_config(option: str) -> int:
    """
    :param option: configuration parameter
    :return: configuration value converted to int
    """
    value = get_config(option)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise courselib.errors.GenericError(f"Invalid {option} configuration value: {value!r}")


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return courselib.log.getEffectiveLevel() < logging.INFO
