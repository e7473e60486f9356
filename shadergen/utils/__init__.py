"""
Utility functions for shadergen.

.. currentmodule:: shadergen.utils

.. autosummary::
    :toctree: utils/

    ReadOnlyDict
    assert_type
    enums

"""

import os
import types
import logging
import inspect

from . import enums  # noqa: F401


logger = logging.getLogger("shadergen")


def _set_log_level():
    # Set default level
    logger.setLevel(logging.WARN)
    # Set user-specified level
    level = os.getenv("SHADERGEN_LOG_LEVEL", "")
    if level:
        try:
            if level.isnumeric():
                logger.setLevel(int(level))
            else:
                logger.setLevel(level.upper())
        except Exception:
            logger.warning(f"Invalid shadergen log level: {level}")


_set_log_level()


def env_flag(name, default="0"):
    """Get whether the environment variable with the given name is set to a truthy value."""
    return os.environ.get(name, default).lower() not in ["", "false", "0", "no"]


def assert_type(name, value, *classes):
    allow_none = False
    if classes[0] is None:
        if value is None:
            return
        allow_none = True
        classes = classes[1:]

    if not isinstance(value, classes):
        # Get traceback object to point of the frame of interest
        f = inspect.currentframe()
        f = f.f_back
        if name:
            # Step back to calling code
            f = f.f_back
            # If this is a constructor that has name as a (kw) argument, take another step back
            if f.f_code.co_name == "__init__" and name in f.f_code.co_varnames:
                f = f.f_back
        tb = types.TracebackType(None, f, f.f_lasti, f.f_lineno)

        msg = "Expected"
        if name:
            msg += f" '{name}' to be"
        class_strings = [cls.__name__ for cls in classes]
        msg += f" an instance of {' | '.join(class_strings)}"
        if allow_none:
            msg += " or None"
        msg += f", but got {value.__class__.__name__} object."

        # Raise message with alt traceback
        raise TypeError(msg).with_traceback(tb) from None


class ReadOnlyDict(dict):
    """A read-only dict, for storing lookup tables that can be hashed."""

    __slots__ = ["_hash"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Calculate hash in a way that requires any value to also be hashable
        parts = []
        for k in sorted(self.keys(), key=repr):
            v = self[k]
            parts.append(str(hash(k)))
            parts.append(str(hash(v)))
        self._hash = hash(" ".join(parts))

    def __setitem__(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def __delitem__(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def clear(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def pop(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def popitem(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def setdefault(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def update(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def __hash__(self):
        return self._hash
