"""Namespaced loggers for stepmark.

Every module logs through ``stepmark.<module>`` so applications can tune the
whole package with one ``logging.getLogger("stepmark")`` call. The library
never attaches handlers itself.

Example:
    >>> from stepmark.utils.logger import get_logger
    >>> get_logger("steps").name
    'stepmark.steps'
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "stepmark"


def get_logger(name: str) -> logging.Logger:
    """Return the stdlib logger for ``name`` under the package namespace.

    Names already inside the namespace (such as a module ``__name__``) are
    used as-is.
    """
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
