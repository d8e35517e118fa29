# -*- coding: utf-8 -*
"""Bind a value flowing through a pipe to a name, without breaking the pipe.

This package holds the compile-time analysis behind the `assign_to` macro:
validation of its binding target, classification of invalid targets with
descriptive error messages, detection of already-bound names, and a lint pass
that checks `assign_to` invocations in Python source code.

See ``dir(pipeassign)`` and submodule docstrings for more.
"""

__version__ = '2.0.0'

from .classifier import *  # noqa: F401, F403
from .diagnostics import *  # noqa: F401, F403
from .lint import *  # noqa: F401, F403
from .scope import *  # noqa: F401, F403
from .targets import *  # noqa: F401, F403
