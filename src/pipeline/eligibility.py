"""Which items get a subtitle attempt this run.

An item is attempted when its type is enabled and it is not cooling
down: it either has no retry entry, or its last attempt is more than
:data:`HISTORY_COOLDOWN` old.  An entry exactly seven days old is still
cooling down.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta

from src.models.options import AcquisitionOptions

HISTORY_COOLDOWN = timedelta(days=7)


def enabled_item_types(options: AcquisitionOptions) -> list[str]:
    """Return the item type tags to query the catalog for."""
    return options.enabled_item_types()


def is_eligible(
    history_key: str,
    history: Mapping[str, datetime],
    now: datetime,
    cooldown: timedelta = HISTORY_COOLDOWN,
) -> bool:
    last_attempt = history.get(history_key)
    if last_attempt is None:
        return True
    return now - last_attempt > cooldown
