"""hookpipe -- run ordered plugin hooks around a unit of work.

An executor runs a task through a fixed lifecycle
(``onBefore -> task -> onSuccess``, or ``onError`` on failure) and lets
plugins observe or steer each stage. Plugins can stop a hook pass early,
and every call exposes runtime bookkeeping on its context. Gateway
executors add ``on{Action}Before`` / ``on{Action}Success`` hooks derived
from an action name::

    from hookpipe.executor import AsyncExecutor

    executor = AsyncExecutor()
    executor.use({"onBefore": lambda ctx: ctx.parameters.setdefault("page", 1)})
    result = await executor.exec({"q": "hooks"}, search)

Modules:
    executor: Contexts, plugins, hook runners, sync and async executors.
    gateway: Action hooks, gateway services, and store-driving plugins.
    store: Observable state for asynchronous operations.
    storage: Key/value backends used to persist store state.
    stream: Splitting streamed ``httpx`` responses into messages.
    plugins: Entry-point plugin discovery and bundled plugins.
    app: The ``hookpipe`` command-line interface.
"""

__version__ = "0.1.0"
