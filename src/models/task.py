"""Scheduler registration models.

The outer scheduler (cron, APScheduler, a host application's task
runner) reads these to list the task and decide when to run it.  They
carry no behaviour.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict


class TriggerType(str, Enum):  # noqa: UP042
    INTERVAL = "Interval"
    DAILY = "Daily"
    STARTUP = "Startup"


class TaskTrigger(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: TriggerType = TriggerType.INTERVAL
    interval: timedelta | None = None


class TaskInfo(BaseModel):
    """Identity of a scheduled task as shown to operators."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    description: str
    category: str
    default_triggers: tuple[TaskTrigger, ...] = ()
