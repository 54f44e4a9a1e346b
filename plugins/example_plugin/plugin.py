"""Example plugin that reports each call's lifecycle on stderr.

Install it through an entry point to try plugin discovery::

    [project.entry-points."hookpipe.plugins"]
    example = "plugins.example_plugin.plugin:ExamplePlugin"
"""

from __future__ import annotations

import sys

from hookpipe.executor import ExecutionContext, ExecutorPlugin
from hookpipe.models import GlobalConfig


class ExamplePlugin(ExecutorPlugin):
    """Prints one line per lifecycle stage to stderr."""

    plugin_name = "example"

    def __init__(self) -> None:
        self._initialized = False

    def setup(self, config: GlobalConfig) -> None:
        self._initialized = True

    def close(self) -> None:
        self._initialized = False

    def on_before(self, context: ExecutionContext) -> None:
        print(f"[example] before {context.parameters!r}", file=sys.stderr)

    def on_success(self, context: ExecutionContext) -> None:
        print(f"[example] success: {context.return_value!r}", file=sys.stderr)

    def on_error(self, context: ExecutionContext) -> None:
        print(f"[example] error: {context.error!r}", file=sys.stderr)
