"""
Runtime configuration for CSC operations.
"""

import os
import logging
import threading
from contextlib import contextmanager

_log = logging.getLogger(__name__)

__all__ = [
    'set_validation',
    'use_validation',
    'validation_enabled',
]

_TRUE_STRINGS = ('1', 'true', 'yes', 'on')


def _env_validation():
    val = os.environ.get('CSC_VALIDATE', '')
    return val.strip().lower() in _TRUE_STRINGS


class ActiveConfig(threading.local):
    def __init__(self):
        self.__dict__.update({'validate': None})

    @property
    def validating(self):
        if self.validate is None:
            return _env_validation()
        else:
            return self.validate


__active = ActiveConfig()


def set_validation(flag):
    """
    Turn structural validation on or off for this thread.  When validation is on,
    operations such as :py:meth:`csc.CSC.transpose` check that their input is in
    canonical form before running, at the cost of an extra pass over the entries.

    Args:
        flag(bool or None):
            whether to validate.  If ``None``, use the default from the
            ``CSC_VALIDATE`` environment variable.
    """
    _log.debug('setting validation to %s', flag)
    __active.validate = flag


@contextmanager
def use_validation(flag=True):
    """
    Context manager to run code with validation (thread-locally) turned on or off.
    It calls :py:func:`set_validation`, and restores the previous setting when the
    context exits.
    """
    old = __active.validate
    try:
        set_validation(flag)
        yield
    finally:
        set_validation(old)


def validation_enabled():
    "Query whether structural validation is active in this thread."
    return bool(__active.validating)
