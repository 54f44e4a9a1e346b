"""Numeric process exit codes used by the ``hookpipe`` command line.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~hookpipe.exceptions.HookpipeError` subclass.
Shell wrappers can inspect the exit code to tell a bad invocation apart
from a broken plugin without parsing stderr.

Example::

    $ hookpipe config set no.such.key 1
    $ echo $?
    2  # EXIT_INVALID_USAGE
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_PLUGIN_ERROR = 10
"""A plugin failed to load, register, or execute."""
