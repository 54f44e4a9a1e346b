"""Canonical Pydantic models shared across hookpipe modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config
directory and handed to executors at construction time:
    :class:`ExecutorConfig`, :class:`PluginsConfig`, :class:`OutputConfig`,
    and :class:`GlobalConfig`.

**Store-state models** -- the observable state of an
:class:`~hookpipe.store.AsyncStore`:
    :class:`AsyncStoreStatus` and :class:`AsyncStoreState`.

All models use Pydantic v2.
"""

from __future__ import annotations

import enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hookpipe.names import ON_BEFORE, ON_ERROR, ON_EXEC, ON_SUCCESS


# --- Executor Config ---


class ExecutorConfig(BaseModel):
    """Hook names an executor runs at each lifecycle stage.

    The defaults give the standard ``onBefore -> onExec -> onSuccess``
    lifecycle with ``onError`` on failure. A single string is accepted for
    the multi-name stages and normalised to a one-element tuple. Hook name
    sequences are stored as tuples, so a config shared by several executors
    cannot be changed through them.

    Example::

        ExecutorConfig(before_hooks=["onValidate", "onBefore"])
    """

    model_config = ConfigDict(frozen=True)

    before_hooks: tuple[str, ...] = Field(
        default=(ON_BEFORE,),
        description="Hook names run, in order, before the task",
    )
    after_hooks: tuple[str, ...] = Field(
        default=(ON_SUCCESS,),
        description="Hook names run, in order, after the task succeeds",
    )
    exec_hook: str = Field(
        default=ON_EXEC, description="Hook that may intercept the task call"
    )
    error_hook: str = Field(
        default=ON_ERROR, description="Hook run when a stage raises"
    )

    @field_validator("before_hooks", "after_hooks", mode="before")
    @classmethod
    def _single_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        return value


class PluginsConfig(BaseModel):
    """Explicit plugin allow/deny lists stored in :class:`GlobalConfig`."""

    enabled: list[str] = Field(default_factory=list)
    disabled: list[str] = Field(default_factory=list)


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/hookpipe/config.json``.

    Loaded and saved by :func:`~hookpipe.config.load_global_config` and
    :func:`~hookpipe.config.save_global_config`. Environment variables
    override individual fields; see :func:`~hookpipe.config.resolve_config`.
    """

    log_level: str = Field(default="WARNING", description="Root logging level")
    executor: ExecutorConfig = Field(default_factory=ExecutorConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Store State ---


class AsyncStoreStatus(str, enum.Enum):
    """Lifecycle status of an asynchronous operation tracked by a store."""

    DRAFT = "draft"
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
    STOPPED = "stopped"


class AsyncStoreState(BaseModel):
    """Observable state of an :class:`~hookpipe.store.AsyncStore`.

    Timestamps are milliseconds since the epoch so that
    :meth:`~hookpipe.store.AsyncStore.get_duration` reports milliseconds.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    loading: bool = False
    result: Any = None
    error: Any = None
    status: AsyncStoreStatus = AsyncStoreStatus.DRAFT
    start_time: Optional[float] = None
    end_time: Optional[float] = None


class UserState(AsyncStoreState):
    """Store state for user services: the user is ``result``, plus a credential."""

    credential: Any = None
